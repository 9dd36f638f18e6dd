from sqlalchemy import Column, Integer, String, Boolean, DateTime, ForeignKey, Index
from sqlalchemy.orm import relationship

from pdv.database.db_connection import Base
from pdv.database.tipos import DinheiroType
from pdv.utils.database_utils import agora_utc


class ProdutoModel(Base):
    __tablename__ = "produtos"
    __table_args__ = (
        Index("idx_produto_categoria", "categoria_id"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    nome = Column(String(150), nullable=False)
    descricao = Column(String(500), nullable=True)
    preco = Column(DinheiroType, nullable=False)

    categoria_id = Column(Integer, ForeignKey("categorias.id", ondelete="RESTRICT"), nullable=False)
    categoria = relationship("CategoriaModel", back_populates="produtos")

    disponivel = Column(Boolean, nullable=False, default=True)
    estoque = Column(Integer, nullable=True)
    controla_estoque = Column(Boolean, nullable=False, default=False)

    created_at = Column(DateTime(timezone=True), default=agora_utc, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=agora_utc, onupdate=agora_utc, nullable=False)
