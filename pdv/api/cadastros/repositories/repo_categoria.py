from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from pdv.api.cadastros.models.model_categoria import (
    CategoriaModel,
    CATEGORIA_PADRAO_COR,
    CATEGORIA_PADRAO_NOME,
)
from pdv.api.catalogo.models.model_produto import ProdutoModel
from pdv.api.pedidos.models.model_pedido_item import PedidoItemModel


class CategoriaRepository:
    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, categoria_id: int) -> Optional[CategoriaModel]:
        return self.db.get(CategoriaModel, categoria_id)

    def get_by_nome(self, nome: str) -> Optional[CategoriaModel]:
        return (
            self.db.query(CategoriaModel)
            .filter(func.lower(CategoriaModel.nome) == nome.strip().lower())
            .first()
        )

    def list(self, ativo: Optional[bool] = None) -> List[CategoriaModel]:
        query = self.db.query(CategoriaModel)
        if ativo is not None:
            query = query.filter(CategoriaModel.ativo == ativo)
        return query.order_by(CategoriaModel.nome.asc()).all()

    def contar_produtos(self, categoria_id: int) -> int:
        return (
            self.db.query(func.count(ProdutoModel.id))
            .filter(ProdutoModel.categoria_id == categoria_id)
            .scalar()
            or 0
        )

    def produtos_com_pedidos(self, categoria_id: int) -> int:
        return (
            self.db.query(func.count(func.distinct(PedidoItemModel.produto_id)))
            .join(ProdutoModel, ProdutoModel.id == PedidoItemModel.produto_id)
            .filter(ProdutoModel.categoria_id == categoria_id)
            .scalar()
            or 0
        )

    def create(self, **data) -> CategoriaModel:
        categoria = CategoriaModel(**data)
        self.db.add(categoria)
        self.db.commit()
        self.db.refresh(categoria)
        return categoria

    def update(self, categoria: CategoriaModel, **data) -> CategoriaModel:
        for key, value in data.items():
            if hasattr(categoria, key) and value is not None:
                setattr(categoria, key, value)
        self.db.commit()
        self.db.refresh(categoria)
        return categoria

    def get_or_create_padrao(self) -> CategoriaModel:
        categoria = self.get_by_nome(CATEGORIA_PADRAO_NOME)
        if categoria:
            return categoria
        categoria = CategoriaModel(
            nome=CATEGORIA_PADRAO_NOME,
            descricao="Produtos sem categoria definida",
            cor=CATEGORIA_PADRAO_COR,
            ativo=True,
        )
        self.db.add(categoria)
        self.db.flush()
        return categoria

    def mover_produtos(self, origem_id: int, destino_id: int) -> int:
        return (
            self.db.query(ProdutoModel)
            .filter(ProdutoModel.categoria_id == origem_id)
            .update({ProdutoModel.categoria_id: destino_id}, synchronize_session=False)
        )

    def excluir_produtos(self, categoria_id: int) -> int:
        return (
            self.db.query(ProdutoModel)
            .filter(ProdutoModel.categoria_id == categoria_id)
            .delete(synchronize_session=False)
        )

    def delete(self, categoria: CategoriaModel) -> None:
        self.db.delete(categoria)
