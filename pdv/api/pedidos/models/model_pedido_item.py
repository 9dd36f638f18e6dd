from sqlalchemy import Column, Integer, String, ForeignKey, Index, CheckConstraint
from sqlalchemy.orm import relationship

from pdv.database.db_connection import Base
from pdv.database.tipos import DinheiroType


class PedidoItemModel(Base):
    __tablename__ = "pedidos_itens"
    __table_args__ = (
        CheckConstraint("quantidade >= 1", name="ck_pedidos_itens_quantidade"),
        Index("idx_pedido_item_pedido", "pedido_id"),
        Index("idx_pedido_item_produto", "produto_id"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)

    pedido_id = Column(Integer, ForeignKey("pedidos.id", ondelete="CASCADE"), nullable=False)
    pedido = relationship("PedidoModel", back_populates="itens")

    produto_id = Column(Integer, ForeignKey("produtos.id", ondelete="RESTRICT"), nullable=False)
    produto = relationship("ProdutoModel")

    quantidade = Column(Integer, nullable=False)
    preco_unitario = Column(DinheiroType, nullable=False)  # preço do produto no momento da venda
    subtotal = Column(DinheiroType, nullable=False)
    observacao = Column(String(255), nullable=True)
