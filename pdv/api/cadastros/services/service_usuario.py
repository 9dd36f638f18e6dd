from typing import List, Optional

from sqlalchemy.orm import Session

from pdv.api.cadastros.repositories.repo_usuario import UsuarioRepository
from pdv.api.cadastros.schemas.schema_usuario import UserCreate, UserResponse, UserUpdate
from pdv.core.exceptions import ConflictError, NotFoundError, ValidationError
from pdv.core.security import hash_password
from pdv.utils.logger import logger


class UsuarioService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = UsuarioRepository(db)

    def _usuario_or_404(self, user_id: int):
        user = self.repo.get_by_id(user_id)
        if not user:
            raise NotFoundError("Usuário não encontrado")
        return user

    def create(self, data: UserCreate) -> UserResponse:
        if self.repo.get_by_email(data.email):
            raise ConflictError("E-mail já cadastrado")
        user = self.repo.create(
            nome=data.nome,
            email=data.email,
            senha_hash=hash_password(data.password),
            role=data.role.value,
            ativo=data.ativo,
        )
        logger.info(f"[Usuarios] Criado usuario_id={user.id} role={user.role}")
        return UserResponse.model_validate(user)

    def get_by_id(self, user_id: int) -> UserResponse:
        return UserResponse.model_validate(self._usuario_or_404(user_id))

    def list(self, ativo: Optional[bool] = None) -> List[UserResponse]:
        return [UserResponse.model_validate(u) for u in self.repo.list(ativo=ativo)]

    def update(self, user_id: int, data: UserUpdate) -> UserResponse:
        user = self._usuario_or_404(user_id)
        update_data = data.model_dump(exclude_unset=True)

        if update_data.get("email") and update_data["email"] != user.email:
            if self.repo.get_by_email(update_data["email"]):
                raise ConflictError("E-mail já cadastrado")
        if "password" in update_data:
            senha = update_data.pop("password")
            if senha:
                update_data["senha_hash"] = hash_password(senha)
        if update_data.get("role") is not None:
            update_data["role"] = update_data["role"].value

        user = self.repo.update(user, **update_data)
        logger.info(f"[Usuarios] Atualizado usuario_id={user_id}")
        return UserResponse.model_validate(user)

    def delete(self, user_id: int, current_user_id: int) -> None:
        user = self._usuario_or_404(user_id)
        if user_id == current_user_id:
            raise ValidationError("Não é possível excluir o próprio usuário")
        if self.repo.possui_pedidos(user_id):
            # preserva o histórico de vendas
            self.repo.update(user, ativo=False)
            logger.info(f"[Usuarios] Desativado usuario_id={user_id} (possui pedidos)")
            return
        self.repo.delete(user)
        logger.info(f"[Usuarios] Removido usuario_id={user_id}")
