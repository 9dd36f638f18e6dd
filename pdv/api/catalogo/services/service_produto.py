from typing import List, Optional

from sqlalchemy.orm import Session

from pdv.api.cadastros.repositories.repo_categoria import CategoriaRepository
from pdv.api.catalogo.models.model_produto import ProdutoModel
from pdv.api.catalogo.repositories.repo_produto import ProdutoRepository
from pdv.api.catalogo.schemas.schema_produto import ProdutoCreate, ProdutoResponse, ProdutoUpdate
from pdv.core.exceptions import ConflictError, NotFoundError
from pdv.utils.logger import logger


class ProdutoService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = ProdutoRepository(db)
        self.repo_categoria = CategoriaRepository(db)

    def _categoria_or_404(self, categoria_id: int):
        categoria = self.repo_categoria.get_by_id(categoria_id)
        if not categoria:
            raise NotFoundError("Categoria não encontrada")
        return categoria

    def _produto_or_404(self, produto_id: int) -> ProdutoModel:
        produto = self.repo.get_by_id(produto_id)
        if not produto:
            raise NotFoundError("Produto não encontrado")
        return produto

    def create(self, data: ProdutoCreate) -> ProdutoResponse:
        self._categoria_or_404(data.categoria_id)
        produto = self.repo.create(**data.model_dump())
        logger.info(f"[Produtos] Criado produto_id={produto.id} nome={produto.nome} preco={produto.preco}")
        return self._produto_to_response(produto)

    def get_by_id(self, produto_id: int) -> ProdutoResponse:
        return self._produto_to_response(self._produto_or_404(produto_id))

    def list(
        self,
        categoria_id: Optional[int] = None,
        disponivel: Optional[bool] = None,
        busca: Optional[str] = None,
        skip: int = 0,
        limit: int = 100,
    ) -> List[ProdutoResponse]:
        produtos = self.repo.list(
            categoria_id=categoria_id, disponivel=disponivel, busca=busca, skip=skip, limit=limit
        )
        return [self._produto_to_response(p) for p in produtos]

    def update(self, produto_id: int, data: ProdutoUpdate) -> ProdutoResponse:
        produto = self._produto_or_404(produto_id)
        update_data = data.model_dump(exclude_unset=True)
        if update_data.get("categoria_id"):
            self._categoria_or_404(update_data["categoria_id"])
        # itens de pedido guardam o próprio preço, então mudar o preço aqui não altera histórico
        produto = self.repo.update(produto, **update_data)
        logger.info(f"[Produtos] Atualizado produto_id={produto_id} campos={sorted(update_data)}")
        return self._produto_to_response(produto)

    def delete(self, produto_id: int) -> None:
        produto = self._produto_or_404(produto_id)
        if self.repo.usado_em_pedidos(produto_id):
            raise ConflictError(
                "Produto possui pedidos associados e não pode ser excluído. Marque-o como indisponível."
            )
        self.repo.delete(produto)
        logger.info(f"[Produtos] Removido produto_id={produto_id}")

    def _produto_to_response(self, produto: ProdutoModel) -> ProdutoResponse:
        return ProdutoResponse(
            id=produto.id,
            nome=produto.nome,
            descricao=produto.descricao,
            preco=produto.preco,
            categoria_id=produto.categoria_id,
            categoria_nome=produto.categoria.nome if produto.categoria else None,
            disponivel=produto.disponivel,
            estoque=produto.estoque,
            controla_estoque=produto.controla_estoque,
            created_at=produto.created_at,
            updated_at=produto.updated_at,
        )
