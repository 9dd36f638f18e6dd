"""
Métricas Prometheus do PDV: requisições por rota, logs por nível e vendas.
"""
import re
from time import perf_counter

from prometheus_client import Counter, Histogram, generate_latest, CONTENT_TYPE_LATEST
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

ROTAS_IGNORADAS = ("/metrics", "/api/monitoring")
ID_NA_ROTA = re.compile(r"/\d+")

pdv_http_requisicoes_total = Counter(
    "pdv_http_requisicoes_total",
    "Requisições HTTP por rota e status",
    ["method", "rota", "status_code"],
)

pdv_http_duracao_segundos = Histogram(
    "pdv_http_duracao_segundos",
    "Duração das requisições HTTP",
    ["method", "rota"],
    buckets=[0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5],
)

log_messages_total = Counter("log_messages_total", "Mensagens de log por nível", ["level"])

# Alimentadas pelo event bus
pdv_vendas_total = Counter("pdv_vendas_total", "Vendas concluídas", ["forma_pagamento"])
pdv_vendas_valor_total = Counter("pdv_vendas_valor_total", "Valor das vendas concluídas", ["forma_pagamento"])
pdv_pedidos_status_total = Counter("pdv_pedidos_status_total", "Mudanças de status de pedidos", ["status"])


def rota_metrica(path: str) -> str:
    """/api/pedidos/admin/pedidos/12/status -> /api/pedidos/admin/pedidos/{id}/status"""
    return ID_NA_ROTA.sub("/{id}", path)


class PrometheusMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        if request.url.path.startswith(ROTAS_IGNORADAS):
            return await call_next(request)

        rota = rota_metrica(request.url.path)
        inicio = perf_counter()
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            pdv_http_requisicoes_total.labels(request.method, rota, status_code).inc()
            pdv_http_duracao_segundos.labels(request.method, rota).observe(perf_counter() - inicio)


def get_metrics() -> bytes:
    return generate_latest()


def record_log(level: str):
    log_messages_total.labels(level=level).inc()


def record_venda(forma_pagamento: str, valor: float):
    pdv_vendas_total.labels(forma_pagamento=forma_pagamento).inc()
    pdv_vendas_valor_total.labels(forma_pagamento=forma_pagamento).inc(valor)


def record_status_pedido(status: str):
    pdv_pedidos_status_total.labels(status=status).inc()


__all__ = [
    "PrometheusMiddleware",
    "CONTENT_TYPE_LATEST",
    "get_metrics",
    "rota_metrica",
    "record_log",
    "record_venda",
    "record_status_pedido",
]
