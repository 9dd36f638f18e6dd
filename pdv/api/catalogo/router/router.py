from fastapi import APIRouter

from pdv.api.catalogo.router.admin.router_produtos import router as router_produtos

router = APIRouter(tags=["API - Catálogo"])

router.include_router(router_produtos)
