from fastapi import FastAPI, HTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.openapi.utils import get_openapi

from pdv.config.settings import CORS_ORIGINS, CORS_ALLOW_ALL, ENABLE_DOCS, ENVIRONMENT
from pdv.core.exception_handlers import (
    validation_exception_handler,
    http_exception_handler,
    general_exception_handler
)
from pdv.utils.logger import logger
from pdv.utils.prometheus_metrics import PrometheusMiddleware

# ───────────────────────────
# Importar modelos antes das rotas
# ───────────────────────────
import pdv.database.models  # noqa: F401

from pdv.api.auth import auth_controller
from pdv.api.cadastros.router.router import api_cadastros
from pdv.api.catalogo.router.router import router as catalogo_router
from pdv.api.pedidos.router.router import api_pedidos
from pdv.api.relatorios.router.router import router as relatorios_router
from pdv.api.loja.router.router import router as loja_router
from pdv.api.monitoring.router import router as monitoring_router, router_public as monitoring_router_public
from pdv.api.notifications.core.notification_system import NotificationSystem

# ──────────────────────────
# Instância FastAPI
# ──────────────────────────
app = FastAPI(
    title="API PDV",
    version="1.0.0",
    description="Ponto de venda: pedidos, catálogo, cadastros, dashboard e relatórios",
    docs_url=("/docs" if ENABLE_DOCS else None),
    redoc_url=("/redoc" if ENABLE_DOCS else None),
    openapi_url=("/openapi.json" if ENABLE_DOCS else None),
    redirect_slashes=False,
)

# ───────────────────────────
# Exception Handlers Globais
# ───────────────────────────
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(HTTPException, http_exception_handler)
app.add_exception_handler(Exception, general_exception_handler)

# ───────────────────────────
# Middlewares (último adicionado = primeiro executado)
# ───────────────────────────
app.add_middleware(PrometheusMiddleware)

if CORS_ALLOW_ALL:
    allowed_origins = ["*"]
    allow_credentials = False
else:
    allowed_origins = CORS_ORIGINS or ["*"]
    allow_credentials = bool(CORS_ORIGINS)
app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins,
    allow_credentials=allow_credentials,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ───────────────────────────
# Event bus: um por aplicação, vive entre startup e shutdown
# ───────────────────────────
app.state.notification_system = NotificationSystem()
app.state.event_bus = app.state.notification_system.event_bus


# ───────────────────────────
# Startup
# ───────────────────────────
@app.on_event("startup")
def startup():
    from pdv.database.init_db import inicializar_banco

    logger.info(f"[PDV] Iniciando API ({ENVIRONMENT}), preparando banco...")
    inicializar_banco()
    app.state.notification_system.initialize()
    logger.info("[PDV] API pronta para vendas.")


# ───────────────────────────
# Shutdown
# ───────────────────────────
@app.on_event("shutdown")
def shutdown():
    logger.info("[PDV] Encerrando API...")
    app.state.notification_system.shutdown()
    logger.info("[PDV] API encerrada.")


# ───────────────────────────
# Rotas
# ───────────────────────────
@app.get("/")
async def root():
    return {"status": "ok", "app": app.title, "versao": app.version}


app.include_router(monitoring_router_public)
app.include_router(monitoring_router)
app.include_router(auth_controller.router)
app.include_router(api_cadastros)
app.include_router(catalogo_router)
app.include_router(api_pedidos)
app.include_router(relatorios_router)
app.include_router(loja_router)


# ───────────────────────────
# OpenAPI: Segurança Bearer/JWT no Swagger
# ───────────────────────────
def custom_openapi():
    if app.openapi_schema:
        return app.openapi_schema
    openapi_schema = get_openapi(
        title=app.title,
        version=app.version,
        description=app.description,
        routes=app.routes,
    )

    components = openapi_schema.setdefault("components", {})
    components.setdefault("securitySchemes", {})["bearerAuth"] = {
        "type": "http",
        "scheme": "bearer",
        "bearerFormat": "JWT",
    }
    openapi_schema["security"] = [{"bearerAuth": []}]

    # Remover exigência de token de endpoints públicos
    public_paths = {"/", "/health", "/metrics", "/api/monitoring/metrics", "/api/auth/token"}
    for path, methods in openapi_schema.get("paths", {}).items():
        if path in public_paths:
            for method_obj in methods.values():
                method_obj["security"] = []

    app.openapi_schema = openapi_schema
    return app.openapi_schema


app.openapi = custom_openapi
