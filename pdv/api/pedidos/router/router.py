from fastapi import APIRouter

from pdv.api.pedidos.router.admin.router_pedidos_admin import router as router_pedidos_admin
from pdv.api.pedidos.router.admin.router_comentarios_admin import router as router_comentarios_admin

api_pedidos = APIRouter(tags=["API - Pedidos"])

api_pedidos.include_router(router_pedidos_admin)
api_pedidos.include_router(router_comentarios_admin)
