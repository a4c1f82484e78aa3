"""
Event Bus Adapter.

Implementa IEventPublisher en memoria: cada Domain Event publicado se
serializa y queda en un ring buffer acotado que alimenta
GET /api/events/recent. Los eventos más viejos se descartan al llenarse.
"""

from __future__ import annotations

from collections import deque
from typing import Deque, List

from optionpulse.application.ports.event_publisher import IEventPublisher
from optionpulse.domain.events.domain_events import DomainEvent
from optionpulse.shared.logging.logger import get_logger

logger = get_logger("event_bus_adapter")


class EventBusAdapter(IEventPublisher):
    """Buffer de Domain Events recientes (más nuevo primero al leer)."""

    def __init__(self, max_recent: int = 100):
        if max_recent < 1:
            raise ValueError("max_recent debe ser >= 1")
        self._recent: Deque[dict] = deque(maxlen=max_recent)

    async def publish(self, event: DomainEvent) -> None:
        logger.debug("Publishing event: %s", event.__class__.__name__)
        self._recent.append(event.to_dict())

    def recent(self, limit: int = 50) -> List[dict]:
        if limit <= 0:
            return []
        items = list(self._recent)[-limit:]
        items.reverse()
        return items
