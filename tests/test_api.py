from pdv.api.notifications.core.event_bus import EventType
from pdv.core.admin_dependencies import get_current_user
from pdv.main import app
from pdv.utils.prometheus_metrics import rota_metrica

PEDIDOS = "/api/pedidos/admin/pedidos"


def _criar(client, itens, forma="CASH", **extra):
    return client.post(PEDIDOS, json={"itens": itens, "forma_pagamento": forma, **extra})


def test_criar_pedido_retorna_201_com_totais(client, criar_produto, event_bus):
    burger = criar_produto("X-Burger", "12.99")
    refri = criar_produto("Refrigerante", "5.99")
    vendas = []
    event_bus.subscribe(EventType.VENDA_CONCLUIDA, vendas.append)

    resp = _criar(
        client,
        [{"produto_id": burger.id, "quantidade": 2}, {"produto_id": refri.id, "quantidade": 1, "observacao": "gelado"}],
        forma="pix",
        nome_cliente="Maria",
    )

    assert resp.status_code == 201
    body = resp.json()
    assert body["valor_total"] == 31.97
    assert body["numero_pedido"] == 1
    assert body["status"] == "PENDING"
    assert body["status_label"] == "Pendente"
    assert body["forma_pagamento"] == "PIX"
    assert body["nome_cliente"] == "Maria"
    assert body["quantidade_itens"] == 3
    assert [i["subtotal"] for i in body["itens"]] == [25.98, 5.99]
    assert body["itens"][1]["observacao"] == "gelado"
    assert len(vendas) == 1


def test_criar_pedido_invalido_retorna_400(client, criar_produto):
    produto = criar_produto("X-Burger", "12.99")

    assert _criar(client, []).status_code == 400
    assert _criar(client, [{"produto_id": produto.id, "quantidade": 0}]).status_code == 400
    assert _criar(client, [{"produto_id": produto.id, "quantidade": 1}], forma="CHEQUE").status_code == 400


def test_quantidade_gigante_retorna_400_e_nao_grava(client, criar_produto):
    produto = criar_produto("X-Burger", "12.99")

    resp = _criar(client, [{"produto_id": produto.id, "quantidade": 10**20}])

    assert resp.status_code == 400
    assert client.get(PEDIDOS).json()["total"] == 0


def test_criar_pedido_com_produto_inexistente_retorna_404(client):
    resp = _criar(client, [{"produto_id": 999, "quantidade": 1}])
    assert resp.status_code == 404


def test_listar_com_filtro_e_paginacao(client, criar_produto):
    produto = criar_produto("Suco", "8.00")
    ids = [_criar(client, [{"produto_id": produto.id, "quantidade": 1}]).json()["id"] for _ in range(3)]
    client.put(f"{PEDIDOS}/{ids[0]}/status", json={"status": "CANCELLED"})

    todos = client.get(PEDIDOS).json()
    assert todos["total"] == 3

    pendentes = client.get(PEDIDOS, params={"status": "PENDING"}).json()
    assert pendentes["total"] == 2
    assert {p["id"] for p in pendentes["items"]} == set(ids[1:])

    pagina = client.get(PEDIDOS, params={"page": 2, "limit": 2}).json()
    assert (pagina["page"], pagina["limit"], pagina["total"]) == (2, 2, 3)
    assert len(pagina["items"]) == 1


def test_detalhe_inclui_comentarios(client, criar_produto):
    produto = criar_produto("Suco", "8.00")
    pedido_id = _criar(client, [{"produto_id": produto.id, "quantidade": 1}]).json()["id"]

    resp = client.post(f"{PEDIDOS}/{pedido_id}/comentarios", json={"conteudo": "Sem gelo"})
    assert resp.status_code == 201
    assert resp.json()["autor"] == "Admin"

    detalhe = client.get(f"{PEDIDOS}/{pedido_id}").json()
    assert [c["conteudo"] for c in detalhe["comentarios"]] == ["Sem gelo"]
    assert detalhe["itens"][0]["produto"]["nome"] == "Suco"

    assert client.get(f"{PEDIDOS}/9999").status_code == 404
    assert client.post(f"{PEDIDOS}/9999/comentarios", json={"conteudo": "x"}).status_code == 404


def test_atualizar_status_put_e_patch(client, criar_produto):
    produto = criar_produto("Suco", "8.00")
    pedido_id = _criar(client, [{"produto_id": produto.id, "quantidade": 2}]).json()["id"]

    resp = client.put(f"{PEDIDOS}/{pedido_id}/status", json={"status": "PREPARING"})
    assert resp.status_code == 200
    assert resp.json()["status"] == "PREPARING"
    assert resp.json()["valor_total"] == 16.0

    resp = client.patch(f"{PEDIDOS}/{pedido_id}/status", json={"status": "completed"})
    assert resp.status_code == 200
    assert resp.json()["status"] == "DELIVERED"

    assert client.put(f"{PEDIDOS}/{pedido_id}/status", json={"status": "PENDING"}).status_code == 400
    assert client.put(f"{PEDIDOS}/{pedido_id}/status", json={"status": "PERDIDO"}).status_code == 400
    assert client.put(f"{PEDIDOS}/9999/status", json={"status": "READY"}).status_code == 404


def test_vendedor_ve_apenas_os_proprios_pedidos(client, vendedor, criar_produto):
    produto = criar_produto("Suco", "8.00")
    do_admin = _criar(client, [{"produto_id": produto.id, "quantidade": 1}]).json()["id"]

    app.dependency_overrides[get_current_user] = lambda: vendedor
    do_vendedor = _criar(client, [{"produto_id": produto.id, "quantidade": 1}]).json()

    assert do_vendedor["usuario_id"] == vendedor.id
    assert client.get(f"{PEDIDOS}/{do_admin}").status_code == 403
    assert client.get(f"{PEDIDOS}/{do_vendedor['id']}").status_code == 200
    listagem = client.get(PEDIDOS).json()
    assert [p["id"] for p in listagem["items"]] == [do_vendedor["id"]]

    assert client.delete(f"{PEDIDOS}/{do_vendedor['id']}").status_code == 403


def test_admin_remove_pedido(client, criar_produto):
    produto = criar_produto("Suco", "8.00")
    pedido_id = _criar(client, [{"produto_id": produto.id, "quantidade": 1}]).json()["id"]

    assert client.delete(f"{PEDIDOS}/{pedido_id}").status_code == 204
    assert client.get(f"{PEDIDOS}/{pedido_id}").status_code == 404


def test_dashboard_e_relatorios(client, criar_produto):
    produto = criar_produto("Combo", "20.00")
    _criar(client, [{"produto_id": produto.id, "quantidade": 2}])

    dash = client.get("/api/relatorios/admin/dashboard")
    assert dash.status_code == 200
    body = dash.json()
    assert body["vendas"]["hoje"]["valor"] == 40.0
    assert body["top_produtos"][0]["nome"] == "Combo"
    assert body["pedidos_recentes"][0]["numero"] == 1
    assert body["degradado"] is False

    invertido = client.post(
        "/api/relatorios/admin/relatorios", json={"data_inicio": "2024-05-10", "data_fim": "2024-05-01"}
    )
    assert invertido.status_code == 400

    fora_do_calendario = client.post(
        "/api/relatorios/admin/relatorios", json={"data_inicio": "9999-12-31", "data_fim": "9999-12-31"}
    )
    assert fora_do_calendario.status_code == 400

    longo_demais = client.post(
        "/api/relatorios/admin/relatorios", json={"data_inicio": "2000-01-01", "data_fim": "2024-12-31"}
    )
    assert longo_demais.status_code == 400

    semana = client.get("/api/relatorios/admin/relatorios", params={"periodo": "week"})
    assert semana.status_code == 200
    assert semana.json()["total_vendas"] == 40.0

    assert client.get("/api/relatorios/admin/relatorios", params={"periodo": "custom"}).status_code == 400


def test_categoria_com_produtos_sem_estrategia_retorna_409(client, categoria, criar_produto):
    criar_produto("X-Burger", "12.99")

    resp = client.delete(f"/api/cadastros/admin/categorias/{categoria.id}")
    assert resp.status_code == 409
    assert resp.json()["detail"]["quantidade_produtos"] == 1

    resp = client.delete(f"/api/cadastros/admin/categorias/{categoria.id}", params={"estrategia": "reassign"})
    assert resp.status_code == 200
    assert resp.json()["produtos_afetados"] == 1


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"
    assert resp.json()["database"] == "connected"


def test_rota_metrica_troca_ids_por_placeholder():
    assert rota_metrica(f"{PEDIDOS}/12/status") == f"{PEDIDOS}/{{id}}/status"
    assert rota_metrica("/api/relatorios/admin/dashboard") == "/api/relatorios/admin/dashboard"


def test_metrics_expoe_requisicoes_por_rota(client, criar_produto):
    produto = criar_produto("X-Burger", "12.99")
    pedido_id = _criar(client, [{"produto_id": produto.id, "quantidade": 1}]).json()["id"]
    client.get(f"{PEDIDOS}/{pedido_id}")

    texto = client.get("/metrics").text

    assert "pdv_http_requisicoes_total" in texto
    assert f'rota="{PEDIDOS}/{{id}}"' in texto
    assert "pdv_vendas_total" in texto
