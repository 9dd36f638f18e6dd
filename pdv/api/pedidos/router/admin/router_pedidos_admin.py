from typing import Optional

from fastapi import APIRouter, Body, Depends, Path, Query, status

from pdv.api.cadastros.models.user_model import UserModel
from pdv.api.pedidos.schemas.schema_pedido import (
    PedidoCreateRequest,
    PedidoDetalheOut,
    PedidoListResponse,
    PedidoOut,
    PedidoStatusUpdateRequest,
)
from pdv.api.pedidos.services.dependencies import get_pedido_service
from pdv.api.pedidos.services.service_pedido_responses import PedidoResponseBuilder
from pdv.api.pedidos.services.service_pedidos import PedidoService
from pdv.api.shared.schemas.schema_shared_enums import PedidoStatusEnum, UserRoleEnum
from pdv.core.admin_dependencies import get_current_user, require_admin
from pdv.utils.logger import logger

router = APIRouter(
    prefix="/api/pedidos/admin/pedidos",
    tags=["Admin - Pedidos"],
    dependencies=[Depends(get_current_user)],
)

# Perfis que enxergam pedidos de todos os usuários
PERFIS_GESTAO = {UserRoleEnum.ADMIN.value, UserRoleEnum.MANAGER.value}


def _escopo(current_user: UserModel) -> Optional[int]:
    return None if current_user.role in PERFIS_GESTAO else current_user.id


# ======================================================================
# ============================== PEDIDOS ===============================

@router.post("", response_model=PedidoOut, status_code=status.HTTP_201_CREATED)
def criar_pedido(
    payload: PedidoCreateRequest = Body(...),
    svc: PedidoService = Depends(get_pedido_service),
    current_user: UserModel = Depends(get_current_user),
):
    """
    Registra uma venda.

    - **itens**: lista com produto_id, quantidade e observação opcional (mínimo 1 item)
    - **forma_pagamento**: CASH, CREDIT_CARD, DEBIT_CARD ou PIX
    - **nome_cliente**: opcional
    - **usuario_id**: opcional, padrão é o usuário autenticado
    """
    logger.info(f"[Pedidos] Criar pedido - itens={len(payload.itens)} usuario_id={current_user.id}")
    pedido = svc.criar_pedido(payload, usuario_id=current_user.id)
    return PedidoResponseBuilder.pedido_to_response(pedido)


@router.get("", response_model=PedidoListResponse, status_code=status.HTTP_200_OK)
def listar_pedidos(
    status_filtro: Optional[PedidoStatusEnum] = Query(None, alias="status", description="Filtrar por status"),
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    svc: PedidoService = Depends(get_pedido_service),
    current_user: UserModel = Depends(get_current_user),
):
    """
    Lista pedidos do mais recente para o mais antigo.
    Atendentes e vendedores veem apenas os próprios pedidos.
    """
    pedidos, total = svc.listar_pedidos(
        status_filtro=status_filtro,
        page=page,
        limit=limit,
        usuario_escopo=_escopo(current_user),
    )
    return PedidoListResponse(
        items=[PedidoResponseBuilder.pedido_to_response(p) for p in pedidos],
        total=total,
        page=page,
        limit=limit,
    )


@router.get("/{pedido_id}", response_model=PedidoDetalheOut, status_code=status.HTTP_200_OK)
def get_pedido(
    pedido_id: int = Path(..., description="ID do pedido", gt=0),
    svc: PedidoService = Depends(get_pedido_service),
    current_user: UserModel = Depends(get_current_user),
):
    """Pedido com itens, usuário e comentários."""
    pedido = svc.get_pedido(pedido_id, usuario_escopo=_escopo(current_user))
    return PedidoResponseBuilder.pedido_to_detalhe(pedido)


@router.api_route("/{pedido_id}/status", methods=["PUT", "PATCH"], response_model=PedidoOut)
def atualizar_status(
    pedido_id: int = Path(..., description="ID do pedido", gt=0),
    payload: PedidoStatusUpdateRequest = Body(...),
    svc: PedidoService = Depends(get_pedido_service),
    current_user: UserModel = Depends(get_current_user),
):
    """
    Altera o status do pedido.

    Fluxo: PENDING → PREPARING → READY → DELIVERED. CANCELLED a partir de
    qualquer status aberto. DELIVERED e CANCELLED são finais.
    """
    logger.info(f"[Pedidos] Atualizar status pedido_id={pedido_id} -> {payload.status.value} usuario_id={current_user.id}")
    pedido = svc.atualizar_status(pedido_id, payload.status)
    return PedidoResponseBuilder.pedido_to_response(pedido)


@router.delete("/{pedido_id}", status_code=status.HTTP_204_NO_CONTENT)
def deletar_pedido(
    pedido_id: int = Path(..., description="ID do pedido", gt=0),
    svc: PedidoService = Depends(get_pedido_service),
    current_user: UserModel = Depends(require_admin),
):
    """Remove o pedido com seus itens e comentários (somente ADMIN)."""
    logger.info(f"[Pedidos] Deletar pedido_id={pedido_id} usuario_id={current_user.id}")
    svc.deletar_pedido(pedido_id)
    return None
