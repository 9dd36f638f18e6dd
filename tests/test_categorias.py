import pytest
from fastapi import HTTPException

from pdv.api.cadastros.models.model_categoria import CATEGORIA_PADRAO_NOME, CategoriaModel
from pdv.api.cadastros.schemas.schema_categoria import CategoriaCreate
from pdv.api.cadastros.services.service_categoria import CategoriaService
from pdv.api.catalogo.models.model_produto import ProdutoModel
from pdv.api.pedidos.schemas.schema_pedido import PedidoCreateRequest, PedidoItemRequest
from pdv.api.pedidos.services.service_pedidos import PedidoService
from pdv.api.shared.schemas.schema_shared_enums import EstrategiaExclusaoCategoriaEnum
from pdv.core.exceptions import ConflictError


def test_categoria_vazia_e_removida_sem_estrategia(db):
    svc = CategoriaService(db)
    criada = svc.create(CategoriaCreate(nome="Sobremesas"))

    resposta = svc.delete(criada.id)

    assert resposta.produtos_afetados == 0
    assert resposta.estrategia is None
    assert db.get(CategoriaModel, criada.id) is None


def test_nome_duplicado_gera_conflito(db, categoria):
    with pytest.raises(ConflictError):
        CategoriaService(db).create(CategoriaCreate(nome="  lanches "))


def test_categoria_com_produtos_exige_estrategia(db, categoria, criar_produto):
    criar_produto("X-Burger", "15.99")

    with pytest.raises(HTTPException) as exc:
        CategoriaService(db).delete(categoria.id)

    assert exc.value.status_code == 409
    assert exc.value.detail["quantidade_produtos"] == 1
    assert db.get(CategoriaModel, categoria.id) is not None


def test_reassign_move_produtos_para_sem_categoria(db, admin, categoria, criar_produto):
    produto = criar_produto("X-Burger", "15.99")
    produto_id, categoria_id = produto.id, categoria.id
    PedidoService(db).criar_pedido(
        PedidoCreateRequest(itens=[PedidoItemRequest(produto_id=produto.id, quantidade=1)], forma_pagamento="PIX"),
        usuario_id=admin.id,
    )

    resposta = CategoriaService(db).delete(categoria_id, EstrategiaExclusaoCategoriaEnum.REASSIGN)

    db.expire_all()
    padrao = db.get(CategoriaModel, resposta.categoria_destino_id)
    assert padrao.nome == CATEGORIA_PADRAO_NOME
    assert db.get(ProdutoModel, produto_id).categoria_id == padrao.id
    assert db.get(CategoriaModel, categoria_id) is None
    assert resposta.produtos_afetados == 1


def test_sem_categoria_nao_pode_ser_reatribuida(db, criar_produto):
    svc = CategoriaService(db)
    padrao = svc.create(CategoriaCreate(nome=CATEGORIA_PADRAO_NOME))
    criar_produto("Avulso", "2.00", categoria_id=padrao.id)

    with pytest.raises(ConflictError):
        svc.delete(padrao.id, EstrategiaExclusaoCategoriaEnum.REASSIGN)


def test_cascade_remove_produtos_sem_pedidos(db, categoria, criar_produto):
    p1 = criar_produto("X-Burger", "15.99")
    p2 = criar_produto("X-Salada", "17.99")
    ids = [p1.id, p2.id]

    resposta = CategoriaService(db).delete(categoria.id, EstrategiaExclusaoCategoriaEnum.CASCADE)

    db.expire_all()
    assert resposta.produtos_afetados == 2
    assert all(db.get(ProdutoModel, i) is None for i in ids)


def test_cascade_recusado_quando_produto_esta_em_pedido(db, admin, categoria, criar_produto):
    produto = criar_produto("X-Burger", "15.99")
    PedidoService(db).criar_pedido(
        PedidoCreateRequest(itens=[PedidoItemRequest(produto_id=produto.id, quantidade=1)], forma_pagamento="CASH"),
        usuario_id=admin.id,
    )

    with pytest.raises(ConflictError):
        CategoriaService(db).delete(categoria.id, EstrategiaExclusaoCategoriaEnum.CASCADE)

    db.expire_all()
    assert db.get(ProdutoModel, produto.id) is not None
    assert db.get(CategoriaModel, categoria.id) is not None
