"""
Popula o banco com dados de demonstração.

    python -m pdv.database.seed            # categorias, produtos, usuários e pedidos
    python -m pdv.database.seed --reset    # apaga pedidos antes de gerar novos
"""
import argparse
import random
from datetime import timedelta
from decimal import Decimal

from pdv.core.security import hash_password
from pdv.database.db_connection import SessionLocal, engine
from pdv.database.init_db import inicializar_banco
from pdv.database.models import (
    CategoriaModel,
    PedidoComentarioModel,
    PedidoItemModel,
    PedidoModel,
    PedidoSequenciaModel,
    ProdutoModel,
    UserModel,
)
from pdv.api.pedidos.models.model_pedido_sequencia import SEQUENCIA_PEDIDOS
from pdv.api.pedidos.schemas.schema_pedido import PedidoCreateRequest, PedidoItemRequest
from pdv.api.pedidos.services.service_pedidos import PedidoService
from pdv.api.shared.schemas.schema_shared_enums import FormaPagamentoEnum, PedidoStatusEnum, UserRoleEnum
from pdv.utils.database_utils import agora_utc
from pdv.utils.logger import logger

CATEGORIAS = [
    ("Lanches", "Hambúrgueres e sanduíches", "#FF9800"),
    ("Bebidas", "Refrigerantes, sucos e água", "#2196F3"),
    ("Porções", "Batata frita, nuggets e outros", "#F44336"),
    ("Sobremesas", "Doces e sobremesas", "#E91E63"),
]

PRODUTOS = [
    ("X-Burger", "Hambúrguer com queijo", "15.99", "Lanches"),
    ("X-Salada", "Hambúrguer com queijo e salada", "17.99", "Lanches"),
    ("X-Bacon", "Hambúrguer com queijo e bacon", "19.99", "Lanches"),
    ("Refrigerante Lata", "350ml", "5.99", "Bebidas"),
    ("Suco Natural", "500ml", "8.50", "Bebidas"),
    ("Água Mineral", "500ml", "3.50", "Bebidas"),
    ("Batata Frita", "Porção média", "12.99", "Porções"),
    ("Nuggets", "10 unidades", "14.90", "Porções"),
    ("Pudim", "Fatia", "7.90", "Sobremesas"),
    ("Sorvete", "2 bolas", "9.90", "Sobremesas"),
]

USUARIOS = [
    ("Atendente", "atendente@pdv.local", "atendente123", UserRoleEnum.ATTENDANT),
    ("Gerente", "gerente@pdv.local", "gerente123", UserRoleEnum.MANAGER),
]

CLIENTES = [None, "Maria", "João", "Ana", "Pedro", "Carla"]


def _limpar_pedidos(db):
    db.query(PedidoComentarioModel).delete()
    db.query(PedidoItemModel).delete()
    db.query(PedidoModel).delete()
    sequencia = db.get(PedidoSequenciaModel, SEQUENCIA_PEDIDOS)
    if sequencia:
        sequencia.valor = 0
    db.commit()
    logger.info("[Seed] Pedidos removidos")


def _garantir_catalogo(db):
    categorias = {}
    for nome, descricao, cor in CATEGORIAS:
        categoria = db.query(CategoriaModel).filter(CategoriaModel.nome == nome).first()
        if not categoria:
            categoria = CategoriaModel(nome=nome, descricao=descricao, cor=cor, ativo=True)
            db.add(categoria)
            db.flush()
        categorias[nome] = categoria

    for nome, descricao, preco, categoria in PRODUTOS:
        if not db.query(ProdutoModel).filter(ProdutoModel.nome == nome).first():
            db.add(
                ProdutoModel(
                    nome=nome,
                    descricao=descricao,
                    preco=Decimal(preco),
                    categoria_id=categorias[categoria].id,
                    disponivel=True,
                )
            )

    for nome, email, senha, role in USUARIOS:
        if not db.query(UserModel).filter(UserModel.email == email).first():
            db.add(UserModel(nome=nome, email=email, senha_hash=hash_password(senha), role=role.value))
    db.commit()


def _gerar_pedidos(db, quantidade: int, dias: int, rng: random.Random):
    produtos = db.query(ProdutoModel).all()
    usuarios = db.query(UserModel).all()
    svc = PedidoService(db, validar_transicoes=False)
    agora = agora_utc()

    for _ in range(quantidade):
        itens = [
            PedidoItemRequest(produto_id=p.id, quantidade=rng.randint(1, 3))
            for p in rng.sample(produtos, rng.randint(1, 4))
        ]
        pedido = svc.criar_pedido(
            PedidoCreateRequest(
                itens=itens,
                nome_cliente=rng.choice(CLIENTES),
                forma_pagamento=rng.choice(list(FormaPagamentoEnum)),
            ),
            usuario_id=rng.choice(usuarios).id,
        )
        status = rng.choices(
            [PedidoStatusEnum.DELIVERED, PedidoStatusEnum.CANCELLED, PedidoStatusEnum.PENDING],
            weights=[85, 5, 10],
        )[0]
        if status != PedidoStatusEnum.PENDING:
            svc.atualizar_status(pedido.id, status)

        criado = agora - timedelta(days=rng.randint(0, dias - 1), minutes=rng.randint(0, 12 * 60))
        pedido.created_at = criado
        pedido.updated_at = criado
    db.commit()
    logger.info(f"[Seed] {quantidade} pedidos gerados nos últimos {dias} dias")


def main():
    parser = argparse.ArgumentParser(description="Popula o banco do PDV com dados de demonstração")
    parser.add_argument("--reset", action="store_true", help="Remove os pedidos existentes antes")
    parser.add_argument("--pedidos", type=int, default=150, help="Quantidade de pedidos a gerar")
    parser.add_argument("--dias", type=int, default=30, help="Espalha os pedidos pelos últimos N dias")
    parser.add_argument("--seed", type=int, default=42, help="Semente do gerador aleatório")
    args = parser.parse_args()

    inicializar_banco(engine)
    db = SessionLocal()
    try:
        if args.reset:
            _limpar_pedidos(db)
        _garantir_catalogo(db)
        _gerar_pedidos(db, args.pedidos, max(1, args.dias), random.Random(args.seed))
    finally:
        db.close()


if __name__ == "__main__":
    main()
