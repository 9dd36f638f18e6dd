from fastapi import APIRouter

from pdv.api.cadastros.router.admin.router_categorias import router as router_categorias
from pdv.api.cadastros.router.admin.router_usuarios import router as router_usuarios

api_cadastros = APIRouter(tags=["API - Cadastros"])

api_cadastros.include_router(router_categorias)
api_cadastros.include_router(router_usuarios)
