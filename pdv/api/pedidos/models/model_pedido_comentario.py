from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, Index
from sqlalchemy.orm import relationship

from pdv.database.db_connection import Base
from pdv.utils.database_utils import agora_utc


class PedidoComentarioModel(Base):
    __tablename__ = "pedidos_comentarios"
    __table_args__ = (
        Index("idx_pedido_comentario_pedido", "pedido_id"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)

    pedido_id = Column(Integer, ForeignKey("pedidos.id", ondelete="CASCADE"), nullable=False)
    pedido = relationship("PedidoModel", back_populates="comentarios")

    conteudo = Column(Text, nullable=False)
    autor = Column(String(100), nullable=False)

    created_at = Column(DateTime(timezone=True), default=agora_utc, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=agora_utc, onupdate=agora_utc, nullable=False)
