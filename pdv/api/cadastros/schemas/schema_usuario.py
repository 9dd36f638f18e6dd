from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from pdv.api.shared.schemas.schema_shared_enums import UserRoleEnum
from pdv.utils.database_utils import como_utc


class UserBase(BaseModel):
    nome: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., min_length=3, max_length=150)
    role: UserRoleEnum = UserRoleEnum.SELLER
    ativo: bool = True

    @field_validator("email")
    @classmethod
    def _email_normalizado(cls, v: str) -> str:
        v = v.strip().lower()
        if "@" not in v:
            raise ValueError("E-mail inválido")
        return v


class UserCreate(UserBase):
    password: str = Field(..., min_length=6, max_length=128)


class UserUpdate(BaseModel):
    nome: Optional[str] = Field(None, min_length=1, max_length=100)
    email: Optional[str] = Field(None, min_length=3, max_length=150)
    role: Optional[UserRoleEnum] = None
    ativo: Optional[bool] = None
    password: Optional[str] = Field(None, min_length=6, max_length=128)

    @field_validator("email")
    @classmethod
    def _email_normalizado(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        v = v.strip().lower()
        if "@" not in v:
            raise ValueError("E-mail inválido")
        return v


class UserResponse(BaseModel):
    id: int
    nome: str
    email: str
    role: UserRoleEnum
    ativo: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)

    @field_validator("created_at")
    @classmethod
    def _utc(cls, v: datetime) -> datetime:
        return como_utc(v)
