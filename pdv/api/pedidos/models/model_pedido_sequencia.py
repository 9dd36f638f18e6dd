from sqlalchemy import Column, Integer, String

from pdv.database.db_connection import Base

SEQUENCIA_PEDIDOS = "pedidos"


class PedidoSequenciaModel(Base):
    """Contador do último número de pedido emitido."""

    __tablename__ = "pedidos_sequencia"

    nome = Column(String(50), primary_key=True)
    valor = Column(Integer, nullable=False, default=0)
