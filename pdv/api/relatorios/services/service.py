from __future__ import annotations

from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import Dict, List, Optional, Tuple

from sqlalchemy.exc import SQLAlchemyError

from pdv.api.relatorios.repositories.repository import PeriodoResumo, ProdutoVendido, RelatorioRepository
from pdv.api.relatorios.schemas.schema_relatorios import (
    ComparativoOut,
    DashboardResponse,
    FormaPagamentoResumoOut,
    PedidoRecenteOut,
    PeriodoRelatorioEnum,
    PeriodoVendasOut,
    ProdutoRankingOut,
    RelatorioResponse,
    TendenciaOut,
    VendaDiariaOut,
    VendasPeriodosOut,
)
from pdv.api.shared.schemas.schema_shared_enums import FormaPagamentoEnum, PedidoStatusEnum
from pdv.config.settings import (
    DASHBOARD_DIAS_SERIE,
    DASHBOARD_PEDIDOS_RECENTES,
    DASHBOARD_TOP_PRODUTOS,
    RELATORIO_MAX_DIAS,
    RELATORIO_TOP_PRODUTOS,
)
from pdv.core.exceptions import ValidationError
from pdv.utils.database_utils import agora_utc, como_utc, hoje_local, limites_dias_utc, para_local
from pdv.utils.logger import logger
from pdv.utils.monetario import decimal_para_float, para_decimal, percentual

# Faixa de datas aceita nos relatórios; fora dela os limites em UTC e o
# período anterior saem do calendário do Python
DATA_MINIMA_RELATORIO = date(1900, 1, 1)
DATA_MAXIMA_RELATORIO = date(9999, 12, 30)


def calcular_tendencia(atual: Decimal, anterior: Decimal) -> TendenciaOut:
    """
    Variação percentual contra o período anterior. Sem base de comparação
    (anterior = 0) a tendência é 0% / neutral.
    """
    atual = para_decimal(atual)
    anterior = para_decimal(anterior)
    if anterior == 0:
        return TendenciaOut(percentual=0.0, direcao="neutral", valor_anterior=0.0)
    variacao = para_decimal((atual - anterior) * 100 / abs(anterior))
    if variacao > 0:
        direcao = "up"
    elif variacao < 0:
        direcao = "down"
    else:
        direcao = "neutral"
    return TendenciaOut(
        percentual=float(variacao),
        direcao=direcao,
        valor_anterior=decimal_para_float(anterior),
    )


def periodo_anterior(inicio: date, fim: date) -> Tuple[date, date]:
    """Intervalo imediatamente anterior, com o mesmo número de dias."""
    dias = (fim - inicio).days + 1
    return inicio - timedelta(days=dias), inicio - timedelta(days=1)


def resolver_periodo(periodo: PeriodoRelatorioEnum, hoje: date) -> Tuple[date, date]:
    if periodo == PeriodoRelatorioEnum.TODAY:
        return hoje, hoje
    if periodo == PeriodoRelatorioEnum.WEEK:
        return hoje - timedelta(days=hoje.weekday()), hoje
    if periodo == PeriodoRelatorioEnum.MONTH:
        return hoje.replace(day=1), hoje
    raise ValueError(f"Período {periodo} exige datas explícitas")


def validar_intervalo(data_inicio: date, data_fim: date) -> None:
    if data_inicio > data_fim:
        raise ValidationError("data_inicio não pode ser posterior a data_fim")
    if data_inicio < DATA_MINIMA_RELATORIO or data_fim > DATA_MAXIMA_RELATORIO:
        raise ValidationError(
            f"Datas devem estar entre {DATA_MINIMA_RELATORIO.isoformat()} e {DATA_MAXIMA_RELATORIO.isoformat()}"
        )
    dias = (data_fim - data_inicio).days + 1
    if dias > RELATORIO_MAX_DIAS:
        raise ValidationError(f"Intervalo de {dias} dias excede o máximo de {RELATORIO_MAX_DIAS}")


def _ticket_medio(resumo: PeriodoResumo) -> Decimal:
    return para_decimal(resumo.faturamento / resumo.quantidade) if resumo.quantidade else Decimal("0.00")


def _produto_to_response(p: ProdutoVendido) -> ProdutoRankingOut:
    return ProdutoRankingOut(
        produto_id=p.produto_id,
        nome=p.nome,
        quantidade=p.quantidade,
        faturamento=decimal_para_float(p.faturamento),
    )


class RelatoriosService:
    def __init__(self, repository: RelatorioRepository) -> None:
        self.repository = repository

    # ------------------------------------------------------------ auxiliares
    def _vendas_diarias(self, inicio: date, fim: date) -> List[VendaDiariaOut]:
        """Série por dia local, com zero nos dias sem venda."""
        inicio_utc, fim_utc = limites_dias_utc(inicio, fim)
        acumulado: Dict[date, List] = {}
        for created_at, valor in self.repository.valores_por_pedido(inicio_utc, fim_utc):
            dia = para_local(created_at).date()
            bucket = acumulado.setdefault(dia, [Decimal("0.00"), 0])
            bucket[0] += valor
            bucket[1] += 1

        serie = []
        dia = inicio
        while dia <= fim:
            valor, quantidade = acumulado.get(dia, (Decimal("0.00"), 0))
            serie.append(VendaDiariaOut(data=dia, valor=decimal_para_float(valor), quantidade=quantidade))
            dia += timedelta(days=1)
        return serie

    def _periodo_com_tendencia(self, inicio: date, fim: date) -> PeriodoVendasOut:
        atual = self.repository.resumo_periodo(*limites_dias_utc(inicio, fim))
        anterior = self.repository.resumo_periodo(*limites_dias_utc(*periodo_anterior(inicio, fim)))
        return PeriodoVendasOut(
            valor=decimal_para_float(atual.faturamento),
            quantidade=atual.quantidade,
            tendencia=calcular_tendencia(atual.faturamento, anterior.faturamento),
        )

    # ------------------------------------------------------------- dashboard
    def dashboard(self, referencia: Optional[datetime] = None) -> DashboardResponse:
        """
        Visão da tela inicial. Em falha de banco devolve o snapshot zerado
        com degradado=True.
        """
        agora = como_utc(referencia) if referencia else agora_utc()
        hoje = para_local(agora).date()
        try:
            vendas = VendasPeriodosOut(
                hoje=self._periodo_com_tendencia(hoje, hoje),
                semana=self._periodo_com_tendencia(hoje - timedelta(days=hoje.weekday()), hoje),
                mes=self._periodo_com_tendencia(hoje.replace(day=1), hoje),
            )

            inicio_serie = hoje - timedelta(days=DASHBOARD_DIAS_SERIE - 1)
            top = self.repository.top_produtos(
                *limites_dias_utc(inicio_serie, hoje), limite=DASHBOARD_TOP_PRODUTOS, ordenar_por="faturamento"
            )

            recentes = []
            for pedido in self.repository.pedidos_recentes(DASHBOARD_PEDIDOS_RECENTES):
                status = PedidoStatusEnum(pedido.status)
                forma = FormaPagamentoEnum(pedido.forma_pagamento)
                recentes.append(
                    PedidoRecenteOut(
                        id=pedido.id,
                        numero=pedido.numero_pedido,
                        hora=para_local(pedido.created_at).strftime("%H:%M"),
                        valor=decimal_para_float(pedido.valor_total),
                        quantidade_itens=sum(i.quantidade for i in pedido.itens),
                        forma_pagamento=forma,
                        forma_pagamento_label=forma.label,
                        status=status,
                        status_label=status.label,
                        nome_cliente=pedido.nome_cliente,
                    )
                )

            return DashboardResponse(
                vendas=vendas,
                top_produtos=[_produto_to_response(p) for p in top],
                pedidos_recentes=recentes,
                vendas_diarias=self._vendas_diarias(inicio_serie, hoje),
                gerado_em=agora,
            )
        except SQLAlchemyError as e:
            logger.error(f"[Relatorios] Falha ao montar dashboard, devolvendo snapshot vazio: {e}")
            self.repository.db.rollback()
            return DashboardResponse(gerado_em=agora, degradado=True)

    # -------------------------------------------------------------- relatório
    def relatorio(self, data_inicio: date, data_fim: date, periodo: Optional[str] = None) -> RelatorioResponse:
        """Agregados de um intervalo inclusivo de datas locais."""
        validar_intervalo(data_inicio, data_fim)

        inicio_utc, fim_utc = limites_dias_utc(data_inicio, data_fim)
        anterior_inicio, anterior_fim = periodo_anterior(data_inicio, data_fim)
        try:
            resumo = self.repository.resumo_periodo(inicio_utc, fim_utc)
            ticket = _ticket_medio(resumo)

            por_forma = self.repository.por_forma_pagamento(inicio_utc, fim_utc)
            formas = []
            for forma in FormaPagamentoEnum:
                item = por_forma.get(forma.value)
                valor = item.faturamento if item else Decimal("0.00")
                formas.append(
                    FormaPagamentoResumoOut(
                        forma_pagamento=forma,
                        label=forma.label,
                        quantidade=item.quantidade if item else 0,
                        valor=decimal_para_float(valor),
                        percentual=percentual(valor, resumo.faturamento),
                    )
                )

            anterior = self.repository.resumo_periodo(*limites_dias_utc(anterior_inicio, anterior_fim))
            ticket_anterior = _ticket_medio(anterior)

            return RelatorioResponse(
                periodo=periodo,
                data_inicio=data_inicio,
                data_fim=data_fim,
                total_vendas=decimal_para_float(resumo.faturamento),
                quantidade_pedidos=resumo.quantidade,
                ticket_medio=decimal_para_float(ticket),
                vendas_diarias=self._vendas_diarias(data_inicio, data_fim),
                formas_pagamento=formas,
                top_produtos_quantidade=[
                    _produto_to_response(p)
                    for p in self.repository.top_produtos(
                        inicio_utc, fim_utc, limite=RELATORIO_TOP_PRODUTOS, ordenar_por="quantidade"
                    )
                ],
                top_produtos_faturamento=[
                    _produto_to_response(p)
                    for p in self.repository.top_produtos(
                        inicio_utc, fim_utc, limite=RELATORIO_TOP_PRODUTOS, ordenar_por="faturamento"
                    )
                ],
                comparativo=ComparativoOut(
                    data_inicio=anterior_inicio,
                    data_fim=anterior_fim,
                    total_vendas=decimal_para_float(anterior.faturamento),
                    quantidade_pedidos=anterior.quantidade,
                    ticket_medio=decimal_para_float(ticket_anterior),
                    tendencia=calcular_tendencia(resumo.faturamento, anterior.faturamento),
                    tendencia_quantidade=calcular_tendencia(
                        Decimal(resumo.quantidade), Decimal(anterior.quantidade)
                    ),
                    tendencia_ticket_medio=calcular_tendencia(ticket, ticket_anterior),
                ),
            )
        except SQLAlchemyError as e:
            logger.error(f"[Relatorios] Falha ao gerar relatório {data_inicio}..{data_fim}: {e}")
            self.repository.db.rollback()
            return RelatorioResponse(
                periodo=periodo, data_inicio=data_inicio, data_fim=data_fim, degradado=True
            )

    def relatorio_por_periodo(
        self,
        periodo: PeriodoRelatorioEnum,
        data_inicio: Optional[date] = None,
        data_fim: Optional[date] = None,
        referencia: Optional[datetime] = None,
    ) -> RelatorioResponse:
        if periodo == PeriodoRelatorioEnum.CUSTOM:
            if data_inicio is None or data_fim is None:
                raise ValidationError("Período custom exige data_inicio e data_fim")
            return self.relatorio(data_inicio, data_fim, periodo.value)

        hoje = para_local(como_utc(referencia)).date() if referencia else hoje_local()
        inicio, fim = resolver_periodo(periodo, hoje)
        return self.relatorio(inicio, fim, periodo.value)
