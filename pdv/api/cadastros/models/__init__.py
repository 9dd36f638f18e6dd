from .user_model import UserModel
from .model_categoria import CategoriaModel

__all__ = [
    "UserModel",
    "CategoriaModel",
]
