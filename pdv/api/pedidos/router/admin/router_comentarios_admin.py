from typing import List

from fastapi import APIRouter, Body, Depends, Path, status

from pdv.api.cadastros.models.user_model import UserModel
from pdv.api.pedidos.schemas.schema_comentario import PedidoComentarioCreate
from pdv.api.pedidos.schemas.schema_pedido import PedidoComentarioOut
from pdv.api.pedidos.services.dependencies import get_pedido_comentario_service
from pdv.api.pedidos.services.service_comentarios import PedidoComentarioService
from pdv.core.admin_dependencies import get_current_user

router = APIRouter(
    prefix="/api/pedidos/admin/pedidos/{pedido_id}/comentarios",
    tags=["Admin - Pedidos - Comentários"],
    dependencies=[Depends(get_current_user)],
)


@router.post("", response_model=PedidoComentarioOut, status_code=status.HTTP_201_CREATED)
def adicionar_comentario(
    pedido_id: int = Path(..., gt=0),
    data: PedidoComentarioCreate = Body(...),
    svc: PedidoComentarioService = Depends(get_pedido_comentario_service),
    current_user: UserModel = Depends(get_current_user),
):
    comentario = svc.adicionar(pedido_id, data, autor_padrao=current_user.nome)
    return PedidoComentarioOut.model_validate(comentario)


@router.get("", response_model=List[PedidoComentarioOut])
def listar_comentarios(
    pedido_id: int = Path(..., gt=0),
    svc: PedidoComentarioService = Depends(get_pedido_comentario_service),
):
    return [PedidoComentarioOut.model_validate(c) for c in svc.listar(pedido_id)]
