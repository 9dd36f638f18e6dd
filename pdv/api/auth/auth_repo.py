# pdv/api/auth/auth_repo.py
from sqlalchemy.orm import Session

from pdv.api.cadastros.models.user_model import UserModel


class AuthRepository:
    def __init__(self, db: Session):
        self.db = db

    def get_user_by_email(self, email: str) -> UserModel | None:
        return (
            self.db.query(UserModel)
            .filter(UserModel.email == email.strip().lower())
            .first()
        )

    def get_user_by_id(self, user_id: int) -> UserModel | None:
        return self.db.get(UserModel, user_id)
