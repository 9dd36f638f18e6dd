# pdv/api/auth/auth_controller.py

from datetime import timedelta

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from pdv.api.auth.auth_repo import AuthRepository
from pdv.api.auth.schema_auth import LoginRequest, TokenResponse
from pdv.api.cadastros.models.user_model import UserModel
from pdv.api.cadastros.schemas.schema_usuario import UserResponse
from pdv.core.admin_dependencies import get_current_user
from pdv.core.security import verify_password, create_access_token, ACCESS_TOKEN_EXPIRE_MINUTES
from pdv.database.db_connection import get_db
from pdv.utils.logger import logger

router = APIRouter(tags=["auth"], prefix="/api/auth")


@router.post("/token", response_model=TokenResponse)
def login_usuario(
    payload: LoginRequest,
    db: Session = Depends(get_db),
):
    user = AuthRepository(db).get_user_by_email(payload.email)
    if not user or not user.ativo or not verify_password(payload.password, user.senha_hash):
        logger.warning(f"[AUTH] Falha de login para {payload.email}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Credenciais inválidas",
            headers={"WWW-Authenticate": "Bearer"}
        )

    access_token = create_access_token(
        data={"sub": str(user.id), "role": user.role},
        expires_delta=timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)
    )
    logger.info(f"[AUTH] Login usuario_id={user.id}")

    return TokenResponse(
        access_token=access_token,
        token_type="Bearer",
        usuario=UserResponse.model_validate(user),
    )


@router.get(
    "/me",
    response_model=UserResponse,
    summary="Retorna o usuário atual baseado no token JWT"
)
def obter_usuario_atual(
    current_user: UserModel = Depends(get_current_user),
):
    """Puxa o usuário já autenticado pelo get_current_user e devolve seus campos."""
    return UserResponse.model_validate(current_user)
