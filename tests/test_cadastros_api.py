from pdv.api.cadastros.models.user_model import UserModel
from pdv.api.pedidos.schemas.schema_pedido import PedidoCreateRequest, PedidoItemRequest
from pdv.api.pedidos.services.service_pedidos import PedidoService

PRODUTOS = "/api/catalogo/admin/produtos"
USUARIOS = "/api/cadastros/admin/usuarios"


def test_crud_de_produto(client, categoria):
    resp = client.post(
        PRODUTOS, json={"nome": "X-Tudo", "preco": "24.90", "categoria_id": categoria.id, "descricao": "Completo"}
    )
    assert resp.status_code == 201
    produto = resp.json()
    assert produto["preco"] == 24.9
    assert produto["categoria_nome"] == "Lanches"

    assert client.post(PRODUTOS, json={"nome": "Grátis", "preco": "0", "categoria_id": categoria.id}).status_code == 400
    assert client.post(PRODUTOS, json={"nome": "Órfão", "preco": "1.00", "categoria_id": 999}).status_code == 404

    resp = client.put(f"{PRODUTOS}/{produto['id']}", json={"disponivel": False})
    assert resp.json()["disponivel"] is False

    busca = client.get(PRODUTOS, params={"busca": "tudo"}).json()
    assert [p["id"] for p in busca] == [produto["id"]]

    assert client.delete(f"{PRODUTOS}/{produto['id']}").status_code == 204
    assert client.get(f"{PRODUTOS}/{produto['id']}").status_code == 404


def test_produto_vendido_nao_pode_ser_excluido(client, db, admin, criar_produto):
    produto = criar_produto("Suco", "8.00")
    PedidoService(db).criar_pedido(
        PedidoCreateRequest(itens=[PedidoItemRequest(produto_id=produto.id, quantidade=1)], forma_pagamento="CASH"),
        usuario_id=admin.id,
    )

    assert client.delete(f"{PRODUTOS}/{produto.id}").status_code == 409


def test_crud_de_usuario(client, admin):
    resp = client.post(
        USUARIOS, json={"nome": "Caixa 1", "email": "Caixa1@Loja.com", "password": "senha123", "role": "ATTENDANT"}
    )
    assert resp.status_code == 201
    usuario = resp.json()
    assert usuario["email"] == "caixa1@loja.com"
    assert "senha_hash" not in usuario

    duplicado = client.post(USUARIOS, json={"nome": "Outro", "email": "caixa1@loja.com", "password": "senha123"})
    assert duplicado.status_code == 409

    resp = client.put(f"{USUARIOS}/{usuario['id']}", json={"role": "MANAGER"})
    assert resp.json()["role"] == "MANAGER"

    assert client.delete(f"{USUARIOS}/{admin.id}").status_code == 400
    assert client.delete(f"{USUARIOS}/{usuario['id']}").status_code == 204
    assert client.get(f"{USUARIOS}/{usuario['id']}").status_code == 404


def test_usuario_com_pedidos_e_desativado(client, db, vendedor, criar_produto):
    produto = criar_produto("Suco", "8.00")
    PedidoService(db).criar_pedido(
        PedidoCreateRequest(itens=[PedidoItemRequest(produto_id=produto.id, quantidade=1)], forma_pagamento="PIX"),
        usuario_id=vendedor.id,
    )

    assert client.delete(f"{USUARIOS}/{vendedor.id}").status_code == 204

    db.expire_all()
    assert db.get(UserModel, vendedor.id).ativo is False


def test_configuracoes_da_loja(client):
    atual = client.get("/api/loja/admin/configuracoes")
    assert atual.status_code == 200

    resp = client.put("/api/loja/admin/configuracoes", json={"nome_loja": "Lanchonete Central", "telefone": "11 9999-0000"})
    assert resp.status_code == 200
    assert resp.json()["nome_loja"] == "Lanchonete Central"
    assert client.get("/api/loja/admin/configuracoes").json()["telefone"] == "11 9999-0000"
