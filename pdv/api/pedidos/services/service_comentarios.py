from typing import List, Optional

from sqlalchemy.orm import Session

from pdv.api.pedidos.models.model_pedido_comentario import PedidoComentarioModel
from pdv.api.pedidos.repositories.repo_pedidos import PedidoRepository
from pdv.api.pedidos.schemas.schema_comentario import PedidoComentarioCreate
from pdv.core.exceptions import NotFoundError, ValidationError
from pdv.utils.logger import logger


class PedidoComentarioService:
    """Comentários são só acrescentados; não há edição nem exclusão."""

    def __init__(self, db: Session):
        self.db = db
        self.repo = PedidoRepository(db)

    def _pedido_or_404(self, pedido_id: int) -> None:
        if not self.repo.pedido_existe(pedido_id):
            raise NotFoundError("Pedido não encontrado")

    def adicionar(
        self, pedido_id: int, data: PedidoComentarioCreate, autor_padrao: Optional[str] = None
    ) -> PedidoComentarioModel:
        self._pedido_or_404(pedido_id)
        autor = (data.autor or autor_padrao or "").strip()
        if not autor:
            raise ValidationError("Autor do comentário é obrigatório")
        comentario = self.repo.adicionar_comentario(pedido_id, data.conteudo, autor)
        logger.info(f"[Pedidos] Comentário {comentario.id} adicionado ao pedido_id={pedido_id} por {autor}")
        return comentario

    def listar(self, pedido_id: int) -> List[PedidoComentarioModel]:
        self._pedido_or_404(pedido_id)
        return self.repo.listar_comentarios(pedido_id)
