from datetime import timedelta
from decimal import Decimal

import pytest
from pydantic import ValidationError as SchemaValidationError
from sqlalchemy import func, text
from sqlalchemy.exc import OperationalError

from pdv.api.notifications.core.event_bus import EventType
from pdv.api.pedidos.models.model_pedido import PedidoModel
from pdv.api.pedidos.models.model_pedido_item import PedidoItemModel
from pdv.api.pedidos.schemas.schema_pedido import PedidoCreateRequest, PedidoItemRequest
from pdv.api.pedidos.services.numeracao import EstrategiaNumeracao, SequenciaNumeroPedido
from pdv.api.pedidos.services.service_pedidos import PedidoService
from pdv.config.settings import PEDIDO_QUANTIDADE_MAXIMA
from pdv.core.exceptions import NotFoundError, PersistenceError, ValidationError
from pdv.utils.database_utils import agora_utc, como_utc


def _payload(*itens, forma="CASH", nome_cliente=None):
    return PedidoCreateRequest(
        itens=[PedidoItemRequest(produto_id=p, quantidade=q) for p, q in itens],
        forma_pagamento=forma,
        nome_cliente=nome_cliente,
    )


def _quantidade_pedidos(db):
    db.expire_all()
    return db.query(PedidoModel).count()


def test_total_soma_subtotais_dos_itens(db, admin, criar_produto):
    p1 = criar_produto("X-Burger", "12.99")
    p2 = criar_produto("Refrigerante", "5.99")
    svc = PedidoService(db)

    pedido = svc.criar_pedido(_payload((p1.id, 2), (p2.id, 1)), usuario_id=admin.id)

    assert pedido.valor_total == Decimal("31.97")
    assert [i.subtotal for i in pedido.itens] == [Decimal("25.98"), Decimal("5.99")]
    assert [i.preco_unitario for i in pedido.itens] == [Decimal("12.99"), Decimal("5.99")]
    assert pedido.status == "PENDING"
    assert pedido.numero_pedido == 1


def test_centavos_somam_sem_erro_de_ponto_flutuante(db, admin, criar_produto):
    bala = criar_produto("Bala", "0.10")
    svc = PedidoService(db)

    pedido = svc.criar_pedido(_payload((bala.id, 1), (bala.id, 1), (bala.id, 1)), usuario_id=admin.id)

    assert pedido.valor_total == Decimal("0.30")
    assert sum(i.subtotal for i in pedido.itens) == pedido.valor_total


def test_valores_sao_gravados_em_centavos_inteiros(db, admin, criar_produto):
    bala = criar_produto("Bala", "0.10")
    PedidoService(db).criar_pedido(_payload((bala.id, 1), (bala.id, 1), (bala.id, 1)), usuario_id=admin.id)

    assert db.execute(text("SELECT typeof(valor_total), valor_total FROM pedidos")).one() == ("integer", 30)
    tipos_itens = db.execute(text("SELECT DISTINCT typeof(preco_unitario), typeof(subtotal) FROM pedidos_itens")).all()
    assert tipos_itens == [("integer", "integer")]
    assert db.execute(text("SELECT typeof(preco) FROM produtos")).scalar() == "integer"

    total = db.query(func.sum(PedidoModel.valor_total)).scalar()
    assert total == Decimal("0.30")


def test_mudar_preco_do_produto_nao_altera_pedido_antigo(db, admin, criar_produto):
    produto = criar_produto("X-Salada", "17.99")
    svc = PedidoService(db)
    pedido = svc.criar_pedido(_payload((produto.id, 2)), usuario_id=admin.id)

    produto.preco = Decimal("25.00")
    db.commit()
    db.expire_all()

    recarregado = svc.get_pedido(pedido.id)
    assert recarregado.valor_total == Decimal("35.98")
    assert recarregado.itens[0].preco_unitario == Decimal("17.99")

    novo = svc.criar_pedido(_payload((produto.id, 1)), usuario_id=admin.id)
    assert novo.valor_total == Decimal("25.00")


def test_numeros_de_pedido_sao_sequenciais(db, admin, criar_produto):
    produto = criar_produto("Suco", "8.50")
    svc = PedidoService(db)

    numeros = [svc.criar_pedido(_payload((produto.id, 1)), usuario_id=admin.id).numero_pedido for _ in range(3)]

    assert numeros == [1, 2, 3]


def test_pedido_sem_itens_e_rejeitado(db, admin):
    with pytest.raises(ValidationError):
        PedidoService(db).criar_pedido(_payload(), usuario_id=admin.id)
    assert _quantidade_pedidos(db) == 0


@pytest.mark.parametrize("quantidade", [0, -2])
def test_quantidade_nao_positiva_e_rejeitada(db, admin, criar_produto, quantidade):
    produto = criar_produto("Pudim", "7.90")
    with pytest.raises(ValidationError):
        PedidoService(db).criar_pedido(_payload((produto.id, quantidade)), usuario_id=admin.id)
    assert _quantidade_pedidos(db) == 0


def test_quantidade_acima_do_maximo_e_rejeitada(db, admin, criar_produto):
    produto = criar_produto("Pudim", "7.90")
    with pytest.raises(SchemaValidationError):
        PedidoItemRequest(produto_id=produto.id, quantidade=10**20)

    item = PedidoItemRequest.model_construct(produto_id=produto.id, quantidade=10**20, observacao=None)
    payload = PedidoCreateRequest(itens=[], forma_pagamento="CASH")
    payload.itens = [item]
    with pytest.raises(ValidationError):
        PedidoService(db).criar_pedido(payload, usuario_id=admin.id)
    assert _quantidade_pedidos(db) == 0


def test_total_acima_do_teto_e_rejeitado(db, admin, criar_produto):
    caro = criar_produto("Lote", "9999999999999999.99")
    with pytest.raises(ValidationError):
        PedidoService(db).criar_pedido(_payload((caro.id, PEDIDO_QUANTIDADE_MAXIMA)), usuario_id=admin.id)
    assert _quantidade_pedidos(db) == 0


def test_produto_inexistente_gera_not_found(db, admin, criar_produto):
    produto = criar_produto("Nuggets", "14.90")
    with pytest.raises(NotFoundError):
        PedidoService(db).criar_pedido(_payload((produto.id, 1), (9999, 1)), usuario_id=admin.id)
    assert _quantidade_pedidos(db) == 0


def test_produto_indisponivel_e_rejeitado(db, admin, criar_produto):
    produto = criar_produto("Sorvete", "9.90", disponivel=False)
    with pytest.raises(ValidationError):
        PedidoService(db).criar_pedido(_payload((produto.id, 1)), usuario_id=admin.id)


def test_falha_de_banco_desfaz_pedido_inteiro(db, admin, criar_produto, monkeypatch):
    produto = criar_produto("Batata", "12.99")
    svc = PedidoService(db)
    criar_real = svc.repo.criar_pedido

    def criar_e_falhar(**kwargs):
        criar_real(**kwargs)
        raise OperationalError("INSERT", {}, Exception("disco cheio"))

    monkeypatch.setattr(svc.repo, "criar_pedido", criar_e_falhar)

    with pytest.raises(PersistenceError):
        svc.criar_pedido(_payload((produto.id, 2)), usuario_id=admin.id)

    assert _quantidade_pedidos(db) == 0
    assert db.query(PedidoItemModel).count() == 0


class _NumeracaoFixa(EstrategiaNumeracao):
    """Devolve os números da lista, em ordem, repetindo o último."""

    def __init__(self, numeros):
        self.numeros = list(numeros)
        self.chamadas = 0

    def proximo_numero(self, db):
        self.chamadas += 1
        return self.numeros.pop(0) if len(self.numeros) > 1 else self.numeros[0]


def test_conflito_de_numero_e_repetido_internamente(db, admin, criar_produto):
    produto = criar_produto("Água", "3.50")
    PedidoService(db, numeracao=SequenciaNumeroPedido()).criar_pedido(_payload((produto.id, 1)), usuario_id=admin.id)

    numeracao = _NumeracaoFixa([1, 1, 2])
    pedido = PedidoService(db, numeracao=numeracao).criar_pedido(_payload((produto.id, 1)), usuario_id=admin.id)

    assert pedido.numero_pedido == 2
    assert numeracao.chamadas == 3


def test_conflito_persistente_vira_persistence_error(db, admin, criar_produto):
    produto = criar_produto("Água", "3.50")
    PedidoService(db).criar_pedido(_payload((produto.id, 1)), usuario_id=admin.id)

    numeracao = _NumeracaoFixa([1])
    svc = PedidoService(db, numeracao=numeracao, max_tentativas=3)

    with pytest.raises(PersistenceError):
        svc.criar_pedido(_payload((produto.id, 1)), usuario_id=admin.id)
    assert numeracao.chamadas == 3
    assert _quantidade_pedidos(db) == 1


def test_atualizar_status_de_pedido_inexistente(db):
    with pytest.raises(NotFoundError):
        PedidoService(db).atualizar_status(12345, "PREPARING")


def test_atualizar_status_muda_apenas_status_e_updated_at(db, admin, criar_produto):
    produto = criar_produto("X-Bacon", "19.99")
    svc = PedidoService(db)
    pedido = svc.criar_pedido(_payload((produto.id, 2)), usuario_id=admin.id)

    ontem = agora_utc() - timedelta(days=1)
    pedido.updated_at = ontem
    db.commit()
    antes = {
        "numero_pedido": pedido.numero_pedido,
        "valor_total": pedido.valor_total,
        "forma_pagamento": pedido.forma_pagamento,
        "created_at": como_utc(pedido.created_at),
        "itens": [(i.produto_id, i.quantidade, i.preco_unitario, i.subtotal) for i in pedido.itens],
    }

    svc.atualizar_status(pedido.id, "PREPARING")
    db.expire_all()
    atualizado = svc.get_pedido(pedido.id)

    assert atualizado.status == "PREPARING"
    assert como_utc(atualizado.updated_at) > ontem
    assert {
        "numero_pedido": atualizado.numero_pedido,
        "valor_total": atualizado.valor_total,
        "forma_pagamento": atualizado.forma_pagamento,
        "created_at": como_utc(atualizado.created_at),
        "itens": [(i.produto_id, i.quantidade, i.preco_unitario, i.subtotal) for i in atualizado.itens],
    } == antes


def test_status_invalido_gera_validation_error(db, admin, criar_produto):
    produto = criar_produto("Suco", "8.50")
    svc = PedidoService(db)
    pedido = svc.criar_pedido(_payload((produto.id, 1)), usuario_id=admin.id)

    with pytest.raises(ValidationError):
        svc.atualizar_status(pedido.id, "EXTRAVIADO")


def test_status_final_nao_volta(db, admin, criar_produto):
    produto = criar_produto("Suco", "8.50")
    svc = PedidoService(db)
    pedido = svc.criar_pedido(_payload((produto.id, 1)), usuario_id=admin.id)
    svc.atualizar_status(pedido.id, "DELIVERED")

    with pytest.raises(ValidationError):
        svc.atualizar_status(pedido.id, "PENDING")
    with pytest.raises(ValidationError):
        svc.atualizar_status(pedido.id, "CANCELLED")


def test_transicoes_livres_quando_validacao_desligada(db, admin, criar_produto):
    produto = criar_produto("Suco", "8.50")
    svc = PedidoService(db, validar_transicoes=False)
    pedido = svc.criar_pedido(_payload((produto.id, 1)), usuario_id=admin.id)
    svc.atualizar_status(pedido.id, "DELIVERED")

    assert svc.atualizar_status(pedido.id, "PENDING").status == "PENDING"


def test_completed_e_sinonimo_de_delivered(db, admin, criar_produto):
    produto = criar_produto("Suco", "8.50")
    svc = PedidoService(db)
    pedido = svc.criar_pedido(_payload((produto.id, 1)), usuario_id=admin.id)

    assert svc.atualizar_status(pedido.id, "COMPLETED").status == "DELIVERED"


def test_venda_concluida_publicada_apos_commit(db, admin, criar_produto, event_bus):
    produto = criar_produto("X-Burger", "15.99")
    recebidos = []

    def handler(event):
        # o pedido já precisa estar visível quando o evento chega
        recebidos.append((event.data, db.query(PedidoModel).count()))

    event_bus.subscribe(EventType.VENDA_CONCLUIDA, handler)
    pedido = PedidoService(db, event_bus=event_bus).criar_pedido(
        _payload((produto.id, 2), forma="PIX"), usuario_id=admin.id
    )

    assert len(recebidos) == 1
    data, quantidade = recebidos[0]
    assert quantidade == 1
    assert data["pedido_id"] == pedido.id
    assert data["numero_pedido"] == pedido.numero_pedido
    assert data["valor_total"] == "31.98"
    assert data["forma_pagamento"] == "PIX"


def test_handler_com_erro_nao_desfaz_venda(db, admin, criar_produto, event_bus):
    produto = criar_produto("X-Burger", "15.99")

    def quebra(event):
        raise RuntimeError("falha na tela")

    event_bus.subscribe(EventType.VENDA_CONCLUIDA, quebra)
    pedido = PedidoService(db, event_bus=event_bus).criar_pedido(_payload((produto.id, 1)), usuario_id=admin.id)

    assert _quantidade_pedidos(db) == 1
    assert pedido.valor_total == Decimal("15.99")


def test_mudanca_de_status_publica_evento(db, admin, criar_produto, event_bus):
    produto = criar_produto("X-Burger", "15.99")
    eventos = []
    event_bus.subscribe(EventType.PEDIDO_STATUS_ALTERADO, lambda e: eventos.append(e.data))
    svc = PedidoService(db, event_bus=event_bus)
    pedido = svc.criar_pedido(_payload((produto.id, 1)), usuario_id=admin.id)

    svc.atualizar_status(pedido.id, "PREPARING")
    svc.atualizar_status(pedido.id, "PREPARING")

    assert eventos == [
        {
            "pedido_id": pedido.id,
            "numero_pedido": pedido.numero_pedido,
            "status_anterior": "PENDING",
            "status": "PREPARING",
        }
    ]


def test_listar_pedidos_filtra_status_e_ordena_recentes_primeiro(db, admin, vendedor, criar_produto):
    produto = criar_produto("Suco", "8.50")
    svc = PedidoService(db)
    primeiro = svc.criar_pedido(_payload((produto.id, 1)), usuario_id=admin.id)
    segundo = svc.criar_pedido(_payload((produto.id, 2)), usuario_id=vendedor.id)
    terceiro = svc.criar_pedido(_payload((produto.id, 3)), usuario_id=admin.id)
    primeiro.created_at = agora_utc() - timedelta(hours=2)
    db.commit()
    svc.atualizar_status(segundo.id, "CANCELLED")

    todos, total = svc.listar_pedidos()
    assert total == 3
    assert [p.id for p in todos] == [terceiro.id, segundo.id, primeiro.id]

    cancelados, total = svc.listar_pedidos(status_filtro="CANCELLED")
    assert total == 1 and cancelados[0].id == segundo.id

    do_vendedor, total = svc.listar_pedidos(usuario_escopo=vendedor.id)
    assert total == 1 and do_vendedor[0].id == segundo.id

    pagina, total = svc.listar_pedidos(page=2, limit=2)
    assert total == 3 and [p.id for p in pagina] == [primeiro.id]


def test_deletar_pedido_remove_itens(db, admin, criar_produto):
    produto = criar_produto("Suco", "8.50")
    svc = PedidoService(db)
    pedido = svc.criar_pedido(_payload((produto.id, 1), (produto.id, 2)), usuario_id=admin.id)

    svc.deletar_pedido(pedido.id)

    assert _quantidade_pedidos(db) == 0
    assert db.query(PedidoItemModel).count() == 0
    with pytest.raises(NotFoundError):
        svc.deletar_pedido(pedido.id)
