from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from pdv.api.shared.schemas.schema_shared_enums import FormaPagamentoEnum, PedidoStatusEnum
from pdv.config.settings import PEDIDO_QUANTIDADE_MAXIMA
from pdv.utils.database_utils import como_utc


# ---------------------------------------------------------------- requests
class PedidoItemRequest(BaseModel):
    produto_id: int = Field(..., gt=0)
    # quantidade < 1 é rejeitada pelo service com mensagem por item
    quantidade: int = Field(..., le=PEDIDO_QUANTIDADE_MAXIMA, description="Quantidade (inteiro >= 1)")
    observacao: Optional[str] = Field(None, max_length=255)


class PedidoCreateRequest(BaseModel):
    usuario_id: Optional[int] = Field(None, gt=0, description="Padrão: usuário autenticado")
    itens: List[PedidoItemRequest] = Field(default_factory=list)
    nome_cliente: Optional[str] = Field(None, max_length=150)
    forma_pagamento: FormaPagamentoEnum

    @field_validator("forma_pagamento", mode="before")
    @classmethod
    def _forma_pagamento_upper(cls, v):
        return v.strip().upper() if isinstance(v, str) else v

    @field_validator("nome_cliente")
    @classmethod
    def _nome_cliente_vazio(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        v = v.strip()
        return v or None


class PedidoStatusUpdateRequest(BaseModel):
    status: PedidoStatusEnum

    @field_validator("status", mode="before")
    @classmethod
    def _status_alias(cls, v):
        if isinstance(v, str):
            v = v.strip().upper()
            if v == "COMPLETED":
                return PedidoStatusEnum.DELIVERED.value
        return v


# --------------------------------------------------------------- responses
class ProdutoResumoOut(BaseModel):
    id: int
    nome: str
    categoria_id: Optional[int] = None

    model_config = ConfigDict(from_attributes=True)


class UsuarioResumoOut(BaseModel):
    id: int
    nome: str

    model_config = ConfigDict(from_attributes=True)


class PedidoItemOut(BaseModel):
    id: int
    produto_id: int
    produto: Optional[ProdutoResumoOut] = None
    quantidade: int
    preco_unitario: float
    subtotal: float
    observacao: Optional[str] = None


class PedidoComentarioOut(BaseModel):
    id: int
    pedido_id: int
    conteudo: str
    autor: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)

    @field_validator("created_at")
    @classmethod
    def _utc(cls, v: datetime) -> datetime:
        return como_utc(v)


class PedidoOut(BaseModel):
    id: int
    numero_pedido: int
    status: PedidoStatusEnum
    status_label: str
    valor_total: float
    forma_pagamento: FormaPagamentoEnum
    forma_pagamento_label: str
    nome_cliente: Optional[str] = None
    usuario_id: int
    usuario: Optional[UsuarioResumoOut] = None
    quantidade_itens: int
    itens: List[PedidoItemOut] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime

    @field_validator("created_at", "updated_at")
    @classmethod
    def _utc(cls, v: datetime) -> datetime:
        return como_utc(v)


class PedidoDetalheOut(PedidoOut):
    comentarios: List[PedidoComentarioOut] = Field(default_factory=list)


class PedidoListResponse(BaseModel):
    items: List[PedidoOut]
    total: int
    page: int
    limit: int
