from __future__ import annotations

from datetime import date
from typing import Optional

from fastapi import APIRouter, Body, Depends, Query
from sqlalchemy.orm import Session

from pdv.api.relatorios.repositories.repository import RelatorioRepository
from pdv.api.relatorios.schemas.schema_relatorios import (
    DashboardResponse,
    PeriodoRelatorioEnum,
    RelatorioRequest,
    RelatorioResponse,
)
from pdv.api.relatorios.services.service import RelatoriosService
from pdv.core.admin_dependencies import get_current_user
from pdv.database.db_connection import get_db
from pdv.utils.logger import logger

router = APIRouter(
    prefix="/api/relatorios/admin",
    tags=["Admin - Relatórios"],
    dependencies=[Depends(get_current_user)],
)


def get_relatorios_service(db: Session = Depends(get_db)) -> RelatoriosService:
    return RelatoriosService(RelatorioRepository(db))


@router.get("/dashboard", response_model=DashboardResponse)
def dashboard(service: RelatoriosService = Depends(get_relatorios_service)):
    """
    Vendas de hoje, semana e mês com tendência, produtos mais vendidos,
    pedidos recentes e série diária. Pedidos cancelados não entram.
    """
    return service.dashboard()


@router.post("/relatorios", response_model=RelatorioResponse)
def gerar_relatorio(
    payload: RelatorioRequest = Body(...),
    service: RelatoriosService = Depends(get_relatorios_service),
):
    logger.info(f"[Relatorios] Relatório {payload.data_inicio}..{payload.data_fim} periodo={payload.periodo}")
    return service.relatorio(payload.data_inicio, payload.data_fim, payload.periodo)


@router.get("/relatorios", response_model=RelatorioResponse)
def relatorio_por_periodo(
    periodo: PeriodoRelatorioEnum = Query(PeriodoRelatorioEnum.TODAY),
    data_inicio: Optional[date] = Query(None, description="YYYY-MM-DD, obrigatório em custom"),
    data_fim: Optional[date] = Query(None, description="YYYY-MM-DD, obrigatório em custom"),
    service: RelatoriosService = Depends(get_relatorios_service),
):
    return service.relatorio_por_periodo(periodo, data_inicio, data_fim)
