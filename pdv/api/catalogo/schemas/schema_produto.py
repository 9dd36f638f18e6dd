from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

from pdv.utils.database_utils import como_utc


class ProdutoBase(BaseModel):
    nome: str = Field(..., min_length=1, max_length=150)
    descricao: Optional[str] = Field(None, max_length=500)
    preco: Decimal = Field(..., gt=0, max_digits=18, decimal_places=2)
    categoria_id: int = Field(..., gt=0)
    disponivel: bool = True
    estoque: Optional[int] = Field(None, ge=0)
    controla_estoque: bool = False


class ProdutoCreate(ProdutoBase):
    pass


class ProdutoUpdate(BaseModel):
    nome: Optional[str] = Field(None, min_length=1, max_length=150)
    descricao: Optional[str] = Field(None, max_length=500)
    preco: Optional[Decimal] = Field(None, gt=0, max_digits=18, decimal_places=2)
    categoria_id: Optional[int] = Field(None, gt=0)
    disponivel: Optional[bool] = None
    estoque: Optional[int] = Field(None, ge=0)
    controla_estoque: Optional[bool] = None


class ProdutoResponse(BaseModel):
    id: int
    nome: str
    descricao: Optional[str] = None
    preco: Decimal
    categoria_id: int
    categoria_nome: Optional[str] = None
    disponivel: bool
    estoque: Optional[int] = None
    controla_estoque: bool
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)

    @field_serializer("preco")
    def _preco_float(self, v: Decimal) -> float:
        return float(v)

    @field_validator("created_at", "updated_at")
    @classmethod
    def _utc(cls, v: datetime) -> datetime:
        return como_utc(v)
