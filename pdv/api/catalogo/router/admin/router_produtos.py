from typing import List, Optional

from fastapi import APIRouter, Body, Depends, Path, Query, status
from sqlalchemy.orm import Session

from pdv.api.cadastros.models.user_model import UserModel
from pdv.api.catalogo.schemas.schema_produto import ProdutoCreate, ProdutoResponse, ProdutoUpdate
from pdv.api.catalogo.services.service_produto import ProdutoService
from pdv.api.shared.schemas.schema_shared_enums import UserRoleEnum
from pdv.core.admin_dependencies import get_current_user, require_roles
from pdv.database.db_connection import get_db
from pdv.utils.logger import logger

router = APIRouter(
    prefix="/api/catalogo/admin/produtos",
    tags=["Admin - Catálogo - Produtos"],
    dependencies=[Depends(get_current_user)],
)

require_gestao = require_roles(UserRoleEnum.ADMIN, UserRoleEnum.MANAGER)


@router.post("", response_model=ProdutoResponse, status_code=status.HTTP_201_CREATED)
def criar_produto(
    data: ProdutoCreate = Body(...),
    db: Session = Depends(get_db),
    current_user: UserModel = Depends(require_gestao),
):
    logger.info(f"[Produtos] Criar produto nome={data.nome} usuario_id={current_user.id}")
    return ProdutoService(db).create(data)


@router.get("", response_model=List[ProdutoResponse])
def listar_produtos(
    categoria_id: Optional[int] = Query(None, gt=0, description="Filtrar por categoria"),
    disponivel: Optional[bool] = Query(None, description="Filtrar por disponibilidade"),
    busca: Optional[str] = Query(None, description="Busca por nome ou descrição"),
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
    db: Session = Depends(get_db),
):
    return ProdutoService(db).list(
        categoria_id=categoria_id, disponivel=disponivel, busca=busca, skip=skip, limit=limit
    )


@router.get("/{produto_id}", response_model=ProdutoResponse)
def get_produto(
    produto_id: int = Path(..., gt=0),
    db: Session = Depends(get_db),
):
    return ProdutoService(db).get_by_id(produto_id)


@router.put("/{produto_id}", response_model=ProdutoResponse)
def atualizar_produto(
    produto_id: int = Path(..., gt=0),
    data: ProdutoUpdate = Body(...),
    db: Session = Depends(get_db),
    current_user: UserModel = Depends(require_gestao),
):
    logger.info(f"[Produtos] Atualizar produto_id={produto_id} usuario_id={current_user.id}")
    return ProdutoService(db).update(produto_id, data)


@router.delete("/{produto_id}", status_code=status.HTTP_204_NO_CONTENT)
def deletar_produto(
    produto_id: int = Path(..., gt=0),
    db: Session = Depends(get_db),
    current_user: UserModel = Depends(require_gestao),
):
    logger.info(f"[Produtos] Deletar produto_id={produto_id} usuario_id={current_user.id}")
    ProdutoService(db).delete(produto_id)
    return None
