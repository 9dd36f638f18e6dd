from typing import List, Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session, joinedload

from pdv.api.catalogo.models.model_produto import ProdutoModel
from pdv.api.pedidos.models.model_pedido_item import PedidoItemModel


class ProdutoRepository:
    """Repository para CRUD de produtos"""

    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, produto_id: int) -> Optional[ProdutoModel]:
        return (
            self.db.query(ProdutoModel)
            .options(joinedload(ProdutoModel.categoria))
            .filter(ProdutoModel.id == produto_id)
            .first()
        )

    def list(
        self,
        categoria_id: Optional[int] = None,
        disponivel: Optional[bool] = None,
        busca: Optional[str] = None,
        skip: int = 0,
        limit: int = 100,
    ) -> List[ProdutoModel]:
        query = self.db.query(ProdutoModel).options(joinedload(ProdutoModel.categoria))

        if categoria_id:
            query = query.filter(ProdutoModel.categoria_id == categoria_id)
        if disponivel is not None:
            query = query.filter(ProdutoModel.disponivel == disponivel)
        if busca:
            termo = f"%{busca.strip()}%"
            query = query.filter(or_(ProdutoModel.nome.ilike(termo), ProdutoModel.descricao.ilike(termo)))

        query = query.order_by(ProdutoModel.nome.asc()).offset(skip)
        if limit:
            query = query.limit(limit)
        return query.all()

    def create(self, **data) -> ProdutoModel:
        produto = ProdutoModel(**data)
        self.db.add(produto)
        self.db.commit()
        self.db.refresh(produto)
        return produto

    def update(self, produto: ProdutoModel, **data) -> ProdutoModel:
        for key, value in data.items():
            if hasattr(produto, key) and value is not None:
                setattr(produto, key, value)
        self.db.commit()
        self.db.refresh(produto)
        return produto

    def delete(self, produto: ProdutoModel) -> None:
        self.db.delete(produto)
        self.db.commit()

    def usado_em_pedidos(self, produto_id: int) -> bool:
        return (
            self.db.query(PedidoItemModel.id)
            .filter(PedidoItemModel.produto_id == produto_id)
            .first()
            is not None
        )
