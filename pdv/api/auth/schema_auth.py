from pydantic import BaseModel, Field

from pdv.api.cadastros.schemas.schema_usuario import UserResponse


class LoginRequest(BaseModel):
    email: str = Field(..., min_length=3)
    password: str = Field(..., min_length=1)


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "Bearer"
    usuario: UserResponse
