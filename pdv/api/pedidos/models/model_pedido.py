from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Index, UniqueConstraint
from sqlalchemy.orm import relationship

from pdv.database.db_connection import Base
from pdv.database.tipos import DinheiroType
from pdv.utils.database_utils import agora_utc


class PedidoModel(Base):
    __tablename__ = "pedidos"
    __table_args__ = (
        UniqueConstraint("numero_pedido", name="uq_pedidos_numero_pedido"),
        Index("idx_pedido_status", "status"),
        Index("idx_pedido_created_at", "created_at"),
        Index("idx_pedido_usuario", "usuario_id"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    numero_pedido = Column(Integer, nullable=False)

    # PENDING | PREPARING | READY | DELIVERED | CANCELLED
    status = Column(String(20), nullable=False, default="PENDING")

    # Fixado na criação: soma dos subtotais dos itens
    valor_total = Column(DinheiroType, nullable=False)
    forma_pagamento = Column(String(20), nullable=False)  # CASH | CREDIT_CARD | DEBIT_CARD | PIX
    nome_cliente = Column(String(150), nullable=True)

    usuario_id = Column(Integer, ForeignKey("usuarios.id", ondelete="RESTRICT"), nullable=False)
    usuario = relationship("UserModel", back_populates="pedidos")

    created_at = Column(DateTime(timezone=True), default=agora_utc, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=agora_utc, nullable=False)

    itens = relationship(
        "PedidoItemModel",
        back_populates="pedido",
        cascade="all, delete-orphan",
        order_by="PedidoItemModel.id",
    )
    comentarios = relationship(
        "PedidoComentarioModel",
        back_populates="pedido",
        cascade="all, delete-orphan",
        order_by="PedidoComentarioModel.created_at",
    )
