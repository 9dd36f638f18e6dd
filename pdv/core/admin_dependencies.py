# pdv/core/admin_dependencies.py

from fastapi import Depends, HTTPException, status, Request
from jose import JWTError
from sqlalchemy.orm import Session

from pdv.api.cadastros.models.user_model import UserModel
from pdv.api.auth.auth_repo import AuthRepository
from pdv.api.shared.schemas.schema_shared_enums import UserRoleEnum
from pdv.core.security import decode_access_token
from pdv.database.db_connection import get_db
from pdv.utils.logger import logger

credentials_exception = HTTPException(
    status_code=status.HTTP_401_UNAUTHORIZED,
    detail="Não autenticado",
    headers={"WWW-Authenticate": "Bearer"},
)

forbidden_exception = HTTPException(
    status_code=status.HTTP_403_FORBIDDEN,
    detail="Você não tem permissão para acessar este recurso",
)


def get_current_user(
    request: Request,
    db: Session = Depends(get_db),
) -> UserModel:
    """
    Recupera o usuário autenticado a partir do header Authorization (Bearer <token>).
    """
    auth_header = request.headers.get("Authorization")
    if not auth_header or not auth_header.startswith("Bearer "):
        logger.warning("[AUTH] Cabeçalho Authorization ausente ou malformado.")
        raise credentials_exception

    access_token = auth_header.replace("Bearer ", "")

    try:
        payload = decode_access_token(access_token)
        raw_sub = payload.get("sub")
        if raw_sub is None:
            raise credentials_exception
        user_id = int(raw_sub)
    except (JWTError, ValueError) as e:
        logger.error(f"[AUTH] Erro ao decodificar JWT: {e}")
        raise credentials_exception

    user = AuthRepository(db).get_user_by_id(user_id)
    if not user or not user.ativo:
        raise credentials_exception

    return user


def require_roles(*roles: UserRoleEnum):
    """
    Dependency factory para restringir acesso por perfil.

        @router.delete(..., dependencies=[Depends(require_roles(UserRoleEnum.ADMIN))])
    """
    permitidos = {r.value for r in roles}

    def dependency(current_user: UserModel = Depends(get_current_user)) -> UserModel:
        if current_user.role not in permitidos:
            logger.warning(
                "[AUTH] Acesso negado. role=%s, permitido=%s",
                current_user.role,
                sorted(permitidos),
            )
            raise forbidden_exception
        return current_user

    return dependency


require_admin = require_roles(UserRoleEnum.ADMIN)
