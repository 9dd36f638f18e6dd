import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Callable, Dict, List, Union
from uuid import uuid4

from pdv.utils.database_utils import agora_utc
from pdv.utils.logger import logger


class EventType(str, Enum):
    VENDA_CONCLUIDA = "venda_concluida"
    PEDIDO_STATUS_ALTERADO = "pedido_status_alterado"


@dataclass
class Event:
    event_type: str
    data: Dict[str, Any] = field(default_factory=dict)
    id: str = field(default_factory=lambda: uuid4().hex)
    created_at: datetime = field(default_factory=agora_utc)


class EventHandler(ABC):
    """Interface para handlers de eventos"""

    @abstractmethod
    def handle(self, event: Event) -> None:
        """Processa um evento"""


Handler = Union[EventHandler, Callable[[Event], Any]]


def _chave(event_type: Union[EventType, str]) -> str:
    return event_type.value if isinstance(event_type, EventType) else str(event_type)


class EventBus:
    """
    Publish/subscribe em memória, restrito ao processo.

    Os handlers rodam de forma síncrona na thread de quem publica, na ordem
    em que foram registrados. Não há persistência nem nova tentativa: um
    evento publicado sem inscritos é descartado.
    """

    def __init__(self):
        self._handlers: Dict[str, List[Handler]] = {}
        self._lock = threading.Lock()

    def subscribe(self, event_type: Union[EventType, str], handler: Handler) -> Callable[[], bool]:
        """Registra um handler e devolve a função que o remove."""
        if not callable(handler) and not isinstance(handler, EventHandler):
            raise TypeError("handler deve ser callable ou EventHandler")

        chave = _chave(event_type)
        with self._lock:
            self._handlers.setdefault(chave, []).append(handler)
        logger.info(f"[EventBus] Handler registrado para evento: {chave}")

        def _unsubscribe() -> bool:
            return self.unsubscribe(chave, handler)

        return _unsubscribe

    def unsubscribe(self, event_type: Union[EventType, str], handler: Handler) -> bool:
        """Remove um handler de um tipo de evento"""
        chave = _chave(event_type)
        with self._lock:
            handlers = self._handlers.get(chave, [])
            try:
                handlers.remove(handler)
            except ValueError:
                return False
            if not handlers:
                self._handlers.pop(chave, None)
        logger.info(f"[EventBus] Handler removido para evento: {chave}")
        return True

    def publish(self, event_type: Union[EventType, str], data: Dict[str, Any] = None) -> int:
        """
        Entrega o evento a todos os handlers atuais. Um handler que falha é
        registrado no log e não impede os seguintes.

        Retorna quantos handlers terminaram sem erro.
        """
        chave = _chave(event_type)
        with self._lock:
            handlers = list(self._handlers.get(chave, []))

        if not handlers:
            logger.debug(f"[EventBus] Nenhum handler registrado para evento: {chave}")
            return 0

        event = Event(event_type=chave, data=dict(data or {}))
        sucesso = 0
        for handler in handlers:
            try:
                if isinstance(handler, EventHandler):
                    handler.handle(event)
                else:
                    handler(event)
                sucesso += 1
            except Exception:
                logger.exception(f"[EventBus] Erro no handler {handler!r} para evento {chave} - {event.id}")
        return sucesso

    def handler_count(self, event_type: Union[EventType, str]) -> int:
        with self._lock:
            return len(self._handlers.get(_chave(event_type), []))

    def clear(self):
        with self._lock:
            self._handlers.clear()
