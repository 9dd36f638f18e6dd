from __future__ import annotations

from decimal import Decimal
from typing import Dict, Iterable, List, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload, joinedload

from pdv.api.cadastros.models.user_model import UserModel
from pdv.api.catalogo.models.model_produto import ProdutoModel
from pdv.api.pedidos.models.model_pedido import PedidoModel
from pdv.api.pedidos.models.model_pedido_item import PedidoItemModel
from pdv.api.pedidos.models.model_pedido_comentario import PedidoComentarioModel
from pdv.core.exceptions import ConflictError


def conflito_numeracao(e: IntegrityError) -> bool:
    """True quando a violação veio do número do pedido ou do contador."""
    mensagem = str(getattr(e, "orig", e))
    return "numero_pedido" in mensagem or "pedidos_sequencia" in mensagem


class PedidoRepository:
    def __init__(self, db: Session):
        self.db = db

    # ------------- Queries -------------
    def get_produtos_por_ids(self, produto_ids: Iterable[int]) -> Dict[int, ProdutoModel]:
        ids = set(produto_ids)
        if not ids:
            return {}
        produtos = self.db.query(ProdutoModel).filter(ProdutoModel.id.in_(ids)).all()
        return {p.id: p for p in produtos}

    def get_usuario(self, usuario_id: int) -> Optional[UserModel]:
        return self.db.get(UserModel, usuario_id)

    def get_pedido(self, pedido_id: int, com_comentarios: bool = False) -> Optional[PedidoModel]:
        options = [
            selectinload(PedidoModel.itens).joinedload(PedidoItemModel.produto),
            joinedload(PedidoModel.usuario),
        ]
        if com_comentarios:
            options.append(selectinload(PedidoModel.comentarios))
        return (
            self.db.query(PedidoModel)
            .options(*options)
            .filter(PedidoModel.id == pedido_id)
            .first()
        )

    def listar(
        self,
        *,
        status: Optional[str] = None,
        usuario_id: Optional[int] = None,
        skip: int = 0,
        limit: int = 20,
    ) -> Tuple[List[PedidoModel], int]:
        """Lista pedidos do mais recente para o mais antigo."""
        query = self.db.query(PedidoModel)
        if status:
            query = query.filter(PedidoModel.status == status)
        if usuario_id is not None:
            query = query.filter(PedidoModel.usuario_id == usuario_id)

        total = query.with_entities(func.count(PedidoModel.id)).scalar() or 0

        pedidos = (
            query.options(
                selectinload(PedidoModel.itens).joinedload(PedidoItemModel.produto),
                joinedload(PedidoModel.usuario),
            )
            .order_by(PedidoModel.created_at.desc(), PedidoModel.numero_pedido.desc())
            .offset(skip)
            .limit(limit)
            .all()
        )
        return pedidos, int(total)

    # ------------- Escrita -------------
    def criar_pedido(
        self,
        *,
        numero_pedido: int,
        usuario_id: int,
        forma_pagamento: str,
        nome_cliente: Optional[str],
        valor_total: Decimal,
        itens: List[dict],
    ) -> PedidoModel:
        """
        Adiciona pedido e itens na sessão e faz flush. O commit fica com o
        service para que pedido e itens entrem juntos.
        """
        pedido = PedidoModel(
            numero_pedido=numero_pedido,
            status="PENDING",
            valor_total=valor_total,
            forma_pagamento=forma_pagamento,
            nome_cliente=nome_cliente,
            usuario_id=usuario_id,
        )
        pedido.itens = [PedidoItemModel(**item) for item in itens]
        self.db.add(pedido)
        try:
            self.db.flush()
        except IntegrityError as e:
            if conflito_numeracao(e):
                raise ConflictError(f"Número de pedido {numero_pedido} já utilizado") from e
            raise
        return pedido

    def delete(self, pedido: PedidoModel) -> None:
        self.db.delete(pedido)
        self.db.commit()

    # ------------- Comentários -------------
    def adicionar_comentario(self, pedido_id: int, conteudo: str, autor: str) -> PedidoComentarioModel:
        comentario = PedidoComentarioModel(pedido_id=pedido_id, conteudo=conteudo, autor=autor)
        self.db.add(comentario)
        self.db.commit()
        self.db.refresh(comentario)
        return comentario

    def listar_comentarios(self, pedido_id: int) -> List[PedidoComentarioModel]:
        return (
            self.db.query(PedidoComentarioModel)
            .filter(PedidoComentarioModel.pedido_id == pedido_id)
            .order_by(PedidoComentarioModel.created_at.asc(), PedidoComentarioModel.id.asc())
            .all()
        )

    def pedido_existe(self, pedido_id: int) -> bool:
        return self.db.query(PedidoModel.id).filter(PedidoModel.id == pedido_id).first() is not None
