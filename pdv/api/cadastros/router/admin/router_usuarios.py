from typing import List, Optional

from fastapi import APIRouter, Body, Depends, Path, Query, status
from sqlalchemy.orm import Session

from pdv.api.cadastros.models.user_model import UserModel
from pdv.api.cadastros.schemas.schema_usuario import UserCreate, UserResponse, UserUpdate
from pdv.api.cadastros.services.service_usuario import UsuarioService
from pdv.core.admin_dependencies import require_admin
from pdv.database.db_connection import get_db

router = APIRouter(
    prefix="/api/cadastros/admin/usuarios",
    tags=["Admin - Cadastros - Usuários"],
    dependencies=[Depends(require_admin)],
)


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def criar_usuario(data: UserCreate = Body(...), db: Session = Depends(get_db)):
    return UsuarioService(db).create(data)


@router.get("", response_model=List[UserResponse])
def listar_usuarios(
    ativo: Optional[bool] = Query(None),
    db: Session = Depends(get_db),
):
    return UsuarioService(db).list(ativo=ativo)


@router.get("/{user_id}", response_model=UserResponse)
def get_usuario(user_id: int = Path(..., gt=0), db: Session = Depends(get_db)):
    return UsuarioService(db).get_by_id(user_id)


@router.put("/{user_id}", response_model=UserResponse)
def atualizar_usuario(
    user_id: int = Path(..., gt=0),
    data: UserUpdate = Body(...),
    db: Session = Depends(get_db),
):
    return UsuarioService(db).update(user_id, data)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def deletar_usuario(
    user_id: int = Path(..., gt=0),
    db: Session = Depends(get_db),
    current_user: UserModel = Depends(require_admin),
):
    """Usuários com pedidos são desativados em vez de removidos."""
    UsuarioService(db).delete(user_id, current_user.id)
    return None
