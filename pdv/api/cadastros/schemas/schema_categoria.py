from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from pdv.api.shared.schemas.schema_shared_enums import EstrategiaExclusaoCategoriaEnum
from pdv.utils.database_utils import como_utc


class CategoriaBase(BaseModel):
    nome: str = Field(..., min_length=1, max_length=100)
    descricao: Optional[str] = Field(None, max_length=500)
    cor: Optional[str] = Field(None, max_length=20, description="Cor no formato #RRGGBB")
    ativo: bool = True

    @field_validator("nome")
    @classmethod
    def _nome_strip(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Nome da categoria é obrigatório")
        return v


class CategoriaCreate(CategoriaBase):
    pass


class CategoriaUpdate(BaseModel):
    nome: Optional[str] = Field(None, min_length=1, max_length=100)
    descricao: Optional[str] = Field(None, max_length=500)
    cor: Optional[str] = Field(None, max_length=20)
    ativo: Optional[bool] = None


class CategoriaResponse(BaseModel):
    id: int
    nome: str
    descricao: Optional[str] = None
    cor: Optional[str] = None
    ativo: bool
    quantidade_produtos: int = 0
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)

    @field_validator("created_at", "updated_at")
    @classmethod
    def _utc(cls, v: datetime) -> datetime:
        return como_utc(v)


class CategoriaExclusaoResponse(BaseModel):
    categoria_id: int
    estrategia: Optional[EstrategiaExclusaoCategoriaEnum] = None
    produtos_afetados: int = 0
    categoria_destino_id: Optional[int] = None
