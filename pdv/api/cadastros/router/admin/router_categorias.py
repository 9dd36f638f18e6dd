from typing import List, Optional

from fastapi import APIRouter, Body, Depends, Path, Query, status
from sqlalchemy.orm import Session

from pdv.api.cadastros.models.user_model import UserModel
from pdv.api.cadastros.schemas.schema_categoria import (
    CategoriaCreate,
    CategoriaExclusaoResponse,
    CategoriaResponse,
    CategoriaUpdate,
)
from pdv.api.cadastros.services.service_categoria import CategoriaService
from pdv.api.shared.schemas.schema_shared_enums import EstrategiaExclusaoCategoriaEnum, UserRoleEnum
from pdv.core.admin_dependencies import get_current_user, require_roles
from pdv.database.db_connection import get_db
from pdv.utils.logger import logger

router = APIRouter(
    prefix="/api/cadastros/admin/categorias",
    tags=["Admin - Cadastros - Categorias"],
    dependencies=[Depends(get_current_user)],
)

require_gestao = require_roles(UserRoleEnum.ADMIN, UserRoleEnum.MANAGER)


@router.post("", response_model=CategoriaResponse, status_code=status.HTTP_201_CREATED)
def criar_categoria(
    data: CategoriaCreate = Body(...),
    db: Session = Depends(get_db),
    current_user: UserModel = Depends(require_gestao),
):
    logger.info(f"[Categorias] Criar categoria nome={data.nome} usuario_id={current_user.id}")
    return CategoriaService(db).create(data)


@router.get("", response_model=List[CategoriaResponse])
def listar_categorias(
    ativo: Optional[bool] = Query(None, description="Filtrar por status ativo"),
    db: Session = Depends(get_db),
):
    return CategoriaService(db).list(ativo=ativo)


@router.get("/{categoria_id}", response_model=CategoriaResponse)
def get_categoria(
    categoria_id: int = Path(..., gt=0),
    db: Session = Depends(get_db),
):
    return CategoriaService(db).get_by_id(categoria_id)


@router.put("/{categoria_id}", response_model=CategoriaResponse)
def atualizar_categoria(
    categoria_id: int = Path(..., gt=0),
    data: CategoriaUpdate = Body(...),
    db: Session = Depends(get_db),
    current_user: UserModel = Depends(require_gestao),
):
    logger.info(f"[Categorias] Atualizar categoria_id={categoria_id} usuario_id={current_user.id}")
    return CategoriaService(db).update(categoria_id, data)


@router.delete("/{categoria_id}", response_model=CategoriaExclusaoResponse)
def deletar_categoria(
    categoria_id: int = Path(..., gt=0),
    estrategia: Optional[EstrategiaExclusaoCategoriaEnum] = Query(
        None,
        description="Obrigatória se houver produtos: reassign (move para 'Sem categoria') ou cascade (exclui os produtos)",
    ),
    db: Session = Depends(get_db),
    current_user: UserModel = Depends(require_gestao),
):
    logger.info(
        f"[Categorias] Deletar categoria_id={categoria_id} estrategia={estrategia.value if estrategia else None} "
        f"usuario_id={current_user.id}"
    )
    return CategoriaService(db).delete(categoria_id, estrategia)
