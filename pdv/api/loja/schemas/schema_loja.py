from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from pdv.utils.database_utils import como_utc


class LojaConfiguracaoUpdate(BaseModel):
    nome_loja: Optional[str] = Field(None, min_length=1, max_length=150)
    cnpj: Optional[str] = Field(None, max_length=20)
    telefone: Optional[str] = Field(None, max_length=30)
    endereco: Optional[str] = Field(None, max_length=255)
    mensagem_cupom: Optional[str] = Field(None, max_length=255)


class LojaConfiguracaoResponse(BaseModel):
    nome_loja: str
    cnpj: Optional[str] = None
    telefone: Optional[str] = None
    endereco: Optional[str] = None
    mensagem_cupom: Optional[str] = None
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)

    @field_validator("updated_at")
    @classmethod
    def _utc(cls, v: datetime) -> datetime:
        return como_utc(v)
