from fastapi import Depends
from sqlalchemy.orm import Session

from pdv.api.notifications.core.event_bus import EventBus
from pdv.api.notifications.core.notification_system import get_event_bus
from pdv.api.pedidos.services.service_comentarios import PedidoComentarioService
from pdv.api.pedidos.services.service_pedidos import PedidoService
from pdv.database.db_connection import get_db


def get_pedido_service(
    db: Session = Depends(get_db),
    event_bus: EventBus = Depends(get_event_bus),
) -> PedidoService:
    return PedidoService(db, event_bus=event_bus)


def get_pedido_comentario_service(db: Session = Depends(get_db)) -> PedidoComentarioService:
    return PedidoComentarioService(db)
