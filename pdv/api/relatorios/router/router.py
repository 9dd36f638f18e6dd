from fastapi import APIRouter

from pdv.api.relatorios.router.admin.router import router as router_relatorios_admin

router = APIRouter(tags=["API - Relatórios"])

router.include_router(router_relatorios_admin)
