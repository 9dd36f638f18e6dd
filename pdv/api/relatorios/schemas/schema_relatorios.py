from datetime import date, datetime
from enum import Enum
from typing import List, Literal, Optional

from pydantic import BaseModel, Field

from pdv.api.shared.schemas.schema_shared_enums import FormaPagamentoEnum, PedidoStatusEnum


class PeriodoRelatorioEnum(str, Enum):
    TODAY = "today"
    WEEK = "week"
    MONTH = "month"
    CUSTOM = "custom"


class TendenciaOut(BaseModel):
    percentual: float = 0.0
    direcao: Literal["up", "down", "neutral"] = "neutral"
    valor_anterior: float = 0.0


class PeriodoVendasOut(BaseModel):
    valor: float = 0.0
    quantidade: int = 0
    tendencia: TendenciaOut = Field(default_factory=TendenciaOut)


class VendasPeriodosOut(BaseModel):
    hoje: PeriodoVendasOut = Field(default_factory=PeriodoVendasOut)
    semana: PeriodoVendasOut = Field(default_factory=PeriodoVendasOut)
    mes: PeriodoVendasOut = Field(default_factory=PeriodoVendasOut)


class ProdutoRankingOut(BaseModel):
    produto_id: int
    nome: str
    quantidade: int
    faturamento: float


class PedidoRecenteOut(BaseModel):
    id: int
    numero: int
    hora: str
    valor: float
    quantidade_itens: int
    forma_pagamento: FormaPagamentoEnum
    forma_pagamento_label: str
    status: PedidoStatusEnum
    status_label: str
    nome_cliente: Optional[str] = None


class VendaDiariaOut(BaseModel):
    data: date
    valor: float = 0.0
    quantidade: int = 0


class DashboardResponse(BaseModel):
    vendas: VendasPeriodosOut = Field(default_factory=VendasPeriodosOut)
    top_produtos: List[ProdutoRankingOut] = Field(default_factory=list)
    pedidos_recentes: List[PedidoRecenteOut] = Field(default_factory=list)
    vendas_diarias: List[VendaDiariaOut] = Field(default_factory=list)
    gerado_em: datetime
    degradado: bool = False


class RelatorioRequest(BaseModel):
    data_inicio: date
    data_fim: date
    periodo: Optional[str] = Field(None, max_length=50, description="Rótulo livre, devolvido na resposta")


class FormaPagamentoResumoOut(BaseModel):
    forma_pagamento: FormaPagamentoEnum
    label: str
    quantidade: int = 0
    valor: float = 0.0
    percentual: float = 0.0


class ComparativoOut(BaseModel):
    data_inicio: date
    data_fim: date
    total_vendas: float = 0.0
    quantidade_pedidos: int = 0
    ticket_medio: float = 0.0
    tendencia: TendenciaOut = Field(default_factory=TendenciaOut)
    tendencia_quantidade: TendenciaOut = Field(default_factory=TendenciaOut)
    tendencia_ticket_medio: TendenciaOut = Field(default_factory=TendenciaOut)


class RelatorioResponse(BaseModel):
    periodo: Optional[str] = None
    data_inicio: date
    data_fim: date
    total_vendas: float = 0.0
    quantidade_pedidos: int = 0
    ticket_medio: float = 0.0
    vendas_diarias: List[VendaDiariaOut] = Field(default_factory=list)
    formas_pagamento: List[FormaPagamentoResumoOut] = Field(default_factory=list)
    top_produtos_quantidade: List[ProdutoRankingOut] = Field(default_factory=list)
    top_produtos_faturamento: List[ProdutoRankingOut] = Field(default_factory=list)
    comparativo: Optional[ComparativoOut] = None
    degradado: bool = False
