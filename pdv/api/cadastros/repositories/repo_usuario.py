from typing import List, Optional

from sqlalchemy.orm import Session

from pdv.api.cadastros.models.user_model import UserModel
from pdv.api.pedidos.models.model_pedido import PedidoModel


class UsuarioRepository:
    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, user_id: int) -> Optional[UserModel]:
        return self.db.get(UserModel, user_id)

    def get_by_email(self, email: str) -> Optional[UserModel]:
        return self.db.query(UserModel).filter(UserModel.email == email).first()

    def list(self, ativo: Optional[bool] = None) -> List[UserModel]:
        query = self.db.query(UserModel)
        if ativo is not None:
            query = query.filter(UserModel.ativo == ativo)
        return query.order_by(UserModel.nome.asc()).all()

    def create(self, **data) -> UserModel:
        user = UserModel(**data)
        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)
        return user

    def update(self, user: UserModel, **data) -> UserModel:
        for key, value in data.items():
            if hasattr(user, key) and value is not None:
                setattr(user, key, value)
        self.db.commit()
        self.db.refresh(user)
        return user

    def possui_pedidos(self, user_id: int) -> bool:
        return self.db.query(PedidoModel.id).filter(PedidoModel.usuario_id == user_id).first() is not None

    def delete(self, user: UserModel) -> None:
        self.db.delete(user)
        self.db.commit()
