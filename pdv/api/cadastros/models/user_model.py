from sqlalchemy import Column, Integer, String, Boolean, DateTime, Index
from sqlalchemy.orm import relationship

from pdv.database.db_connection import Base
from pdv.utils.database_utils import agora_utc


class UserModel(Base):
    __tablename__ = "usuarios"
    __table_args__ = (
        Index("idx_usuario_role", "role"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    nome = Column(String(100), nullable=False)
    email = Column(String(150), nullable=False, unique=True)
    senha_hash = Column(String(255), nullable=False)
    role = Column(String(20), nullable=False, default="SELLER")  # ADMIN | MANAGER | ATTENDANT | SELLER
    ativo = Column(Boolean, nullable=False, default=True)

    created_at = Column(DateTime(timezone=True), default=agora_utc, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=agora_utc, onupdate=agora_utc, nullable=False)

    pedidos = relationship("PedidoModel", back_populates="usuario", passive_deletes=True)
