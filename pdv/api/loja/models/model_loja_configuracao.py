from sqlalchemy import Column, Integer, String, DateTime

from pdv.database.db_connection import Base
from pdv.utils.database_utils import agora_utc


class LojaConfiguracaoModel(Base):
    """Registro único com os dados da loja usados no cupom."""

    __tablename__ = "loja_configuracoes"

    id = Column(Integer, primary_key=True, autoincrement=True)
    nome_loja = Column(String(150), nullable=False, default="Minha Loja")
    cnpj = Column(String(20), nullable=True)
    telefone = Column(String(30), nullable=True)
    endereco = Column(String(255), nullable=True)
    mensagem_cupom = Column(String(255), nullable=True)

    updated_at = Column(DateTime(timezone=True), default=agora_utc, onupdate=agora_utc, nullable=False)
