from typing import Optional

from pydantic import BaseModel, Field, field_validator


class PedidoComentarioCreate(BaseModel):
    conteudo: str = Field(..., min_length=1, max_length=2000)
    autor: Optional[str] = Field(None, max_length=100, description="Padrão: nome do usuário autenticado")

    @field_validator("conteudo")
    @classmethod
    def _conteudo_nao_vazio(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Comentário não pode ser vazio")
        return v
