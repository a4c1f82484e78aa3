"""
OptionPulse – Application Port: Event Publisher
================================================
Interfaz para publicar eventos de dominio.

Los use cases publican eventos; la infraestructura
decide CÓMO entregarlos (bus en memoria, WebSocket, etc.)
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, List

from optionpulse.domain.events.domain_events import DomainEvent


class IEventPublisher(ABC):
    """
    Interfaz para publicar eventos del sistema.

    IMPLEMENTACIONES POSIBLES:
    - EventBusAdapter (memoria/async)
    """

    @abstractmethod
    async def publish(self, event: DomainEvent) -> None:
        """
        Publica un evento de dominio.

        Args:
            event: Evento inmutable a distribuir
        """
        pass

    @abstractmethod
    def recent(self, limit: int = 50) -> List[Dict[str, Any]]:
        """Últimos eventos publicados (más reciente primero)."""
        pass
