"""
Router para monitoramento: métricas Prometheus, logs e health check.
"""
import re
import time
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import JSONResponse, StreamingResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from pdv.config.settings import ENVIRONMENT
from pdv.core.admin_dependencies import require_admin
from pdv.database.db_connection import get_db
from pdv.utils.database_utils import agora_utc
from pdv.utils.logger import LOG_FILE, logger
from pdv.utils.prometheus_metrics import get_metrics, CONTENT_TYPE_LATEST

INICIO_PROCESSO = time.monotonic()

router = APIRouter(
    prefix="/api/monitoring",
    tags=["Monitoring - Monitoramento"]
)

# Router público (sem autenticação)
router_public = APIRouter(tags=["Monitoring - Monitoramento"])

LOG_LINE_RE = re.compile(r'\[(.*?)\] \[(.*?)\] (.*?): (.*)')


@router_public.get("/metrics")
@router_public.get("/api/monitoring/metrics")
async def metrics():
    """Endpoint de métricas Prometheus (público, sem autenticação)."""
    return StreamingResponse(
        iter([get_metrics()]),
        media_type=CONTENT_TYPE_LATEST
    )


@router_public.get("/health")
def health(db: Session = Depends(get_db)):
    """Liveness/readiness com teste de conexão ao banco."""
    try:
        db.execute(text("SELECT 1"))
        database = "connected"
    except SQLAlchemyError as e:
        logger.error(f"[Health] Banco indisponível: {e}")
        database = "disconnected"

    ok = database == "connected"
    return JSONResponse(
        status_code=status.HTTP_200_OK if ok else status.HTTP_503_SERVICE_UNAVAILABLE,
        content={
            "status": "ok" if ok else "degraded",
            "database": database,
            "environment": ENVIRONMENT,
            "timestamp": agora_utc().isoformat(),
            "uptime_segundos": round(time.monotonic() - INICIO_PROCESSO, 1),
        },
    )


@router.get("/logs/json")
def get_logs_json(
    lines: int = Query(100, ge=1, le=1000),
    level: Optional[str] = Query(None),
    search: Optional[str] = Query(None),
    _current_user=Depends(require_admin),
):
    """
    Retorna as últimas linhas do log em JSON.
    """
    if not LOG_FILE.exists():
        raise HTTPException(status_code=404, detail="Arquivo de log não encontrado")

    with open(LOG_FILE, 'r', encoding='utf-8') as f:
        all_lines = f.readlines()

    log_lines = all_lines[-lines:]

    if level:
        log_lines = [line for line in log_lines if f"[{level.upper()}]" in line.upper()]

    if search:
        log_lines = [line for line in log_lines if search.lower() in line.lower()]

    parsed_logs = []
    for line in log_lines:
        line = line.strip()
        if not line:
            continue
        match = LOG_LINE_RE.match(line)
        if match:
            timestamp, log_level, logger_name, message = match.groups()
            parsed_logs.append({
                "timestamp": timestamp,
                "level": log_level,
                "logger": logger_name,
                "message": message
            })
        else:
            parsed_logs.append({"raw": line})

    return {
        "total": len(parsed_logs),
        "lines": lines,
        "filters": {
            "level": level,
            "search": search
        },
        "logs": parsed_logs
    }
