from sqlalchemy import Column, Integer, String, Boolean, DateTime
from sqlalchemy.orm import relationship

from pdv.database.db_connection import Base
from pdv.utils.database_utils import agora_utc

CATEGORIA_PADRAO_NOME = "Sem categoria"
CATEGORIA_PADRAO_COR = "#CCCCCC"


class CategoriaModel(Base):
    __tablename__ = "categorias"

    id = Column(Integer, primary_key=True, autoincrement=True)
    nome = Column(String(100), nullable=False, unique=True)
    descricao = Column(String(500), nullable=True)
    cor = Column(String(20), nullable=True)
    ativo = Column(Boolean, nullable=False, default=True)

    created_at = Column(DateTime(timezone=True), default=agora_utc, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=agora_utc, onupdate=agora_utc, nullable=False)

    produtos = relationship("ProdutoModel", back_populates="categoria", passive_deletes=True)
