from typing import Callable, List

from fastapi import Request

from pdv.api.notifications.core.event_bus import Event, EventBus, EventHandler, EventType
from pdv.utils.logger import logger
from pdv.utils.prometheus_metrics import record_venda, record_status_pedido


class AuditoriaVendasHandler(EventHandler):
    """Registra no log cada venda e mudança de status."""

    def handle(self, event: Event) -> None:
        data = event.data
        if event.event_type == EventType.VENDA_CONCLUIDA.value:
            logger.info(
                f"[Vendas] Venda concluída pedido_id={data.get('pedido_id')} "
                f"numero={data.get('numero_pedido')} valor={data.get('valor_total')} "
                f"pagamento={data.get('forma_pagamento')}"
            )
        else:
            logger.info(
                f"[Vendas] Pedido {data.get('pedido_id')} status "
                f"{data.get('status_anterior')} -> {data.get('status')}"
            )


class MetricasVendasHandler(EventHandler):
    """Alimenta os contadores Prometheus de vendas."""

    def handle(self, event: Event) -> None:
        data = event.data
        if event.event_type == EventType.VENDA_CONCLUIDA.value:
            record_venda(str(data.get("forma_pagamento")), float(data.get("valor_total") or 0))
        elif event.event_type == EventType.PEDIDO_STATUS_ALTERADO.value:
            record_status_pedido(str(data.get("status")))


class NotificationSystem:
    """Dono do EventBus da aplicação e dos inscritos padrão."""

    def __init__(self, event_bus: EventBus = None):
        self.event_bus = event_bus or EventBus()
        self._cancelamentos: List[Callable[[], bool]] = []
        self._running = False

    def initialize(self):
        logger.info("[EventBus] Inicializando sistema de notificações...")
        for handler in (AuditoriaVendasHandler(), MetricasVendasHandler()):
            for event_type in EventType:
                self._cancelamentos.append(self.event_bus.subscribe(event_type, handler))
        self._running = True
        logger.info("[EventBus] Sistema de notificações inicializado")

    def shutdown(self):
        logger.info("[EventBus] Parando sistema de notificações...")
        for cancelar in self._cancelamentos:
            cancelar()
        self._cancelamentos.clear()
        self._running = False

    @property
    def running(self) -> bool:
        return self._running


def get_event_bus(request: Request) -> EventBus:
    """Dependency: EventBus criado no startup e guardado em app.state."""
    return request.app.state.event_bus
