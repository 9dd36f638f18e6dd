from fastapi import APIRouter, Body, Depends
from sqlalchemy.orm import Session

from pdv.api.loja.schemas.schema_loja import LojaConfiguracaoResponse, LojaConfiguracaoUpdate
from pdv.api.loja.services.service_loja import LojaConfiguracaoService
from pdv.core.admin_dependencies import get_current_user, require_admin
from pdv.database.db_connection import get_db

router = APIRouter(
    prefix="/api/loja/admin/configuracoes",
    tags=["Admin - Loja"],
    dependencies=[Depends(get_current_user)],
)


@router.get("", response_model=LojaConfiguracaoResponse)
def get_configuracoes(db: Session = Depends(get_db)):
    return LojaConfiguracaoService(db).get()


@router.put("", response_model=LojaConfiguracaoResponse, dependencies=[Depends(require_admin)])
def atualizar_configuracoes(
    data: LojaConfiguracaoUpdate = Body(...),
    db: Session = Depends(get_db),
):
    return LojaConfiguracaoService(db).update(data)
