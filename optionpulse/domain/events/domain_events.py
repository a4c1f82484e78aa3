"""
OptionPulse – Domain Events
============================
Eventos de dominio publicados por el ciclo de trading.

Los eventos de dominio representan HECHOS que ocurrieron
en el sistema. Son inmutables y llevan timestamp.

USO:
- Historial reciente para la API (/api/events/recent)
- Auditoría en logs
"""

from __future__ import annotations

import time
import uuid
from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class DomainEvent:
    """Evento base de dominio."""

    event_id: str = field(default_factory=lambda: uuid.uuid4().hex[:12])
    timestamp: float = field(default_factory=time.time)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "event_id": self.event_id,
            "event_type": self.__class__.__name__,
            "timestamp": self.timestamp,
        }


@dataclass(frozen=True)
class SignalEvaluated(DomainEvent):
    """Evento: un ciclo produjo una señal (incluida NONE)."""

    symbol: str = ""
    signal: str = ""  # CALL | PUT | NONE
    price: float = 0.0
    confirmation_count: int = 0
    threshold: int = 0

    def to_dict(self) -> Dict[str, Any]:
        base = super().to_dict()
        base.update({
            "symbol": self.symbol,
            "signal": self.signal,
            "price": self.price,
            "confirmation_count": self.confirmation_count,
            "threshold": self.threshold,
        })
        return base


@dataclass(frozen=True)
class SignalConfirmed(DomainEvent):
    """Evento: se alcanzó el umbral de confirmación."""

    symbol: str = ""
    signal: str = ""
    price: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        base = super().to_dict()
        base.update({
            "symbol": self.symbol,
            "signal": self.signal,
            "price": self.price,
        })
        return base


@dataclass(frozen=True)
class TradeExecuted(DomainEvent):
    """Evento: resultado de ejecutar una señal confirmada."""

    symbol: str = ""
    direction: str = ""
    status: str = ""  # SUBMITTED | SIMULATED | SKIPPED | FAILED
    contract_symbol: Optional[str] = None
    quantity: int = 0
    order_id: Optional[str] = None
    reason: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        base = super().to_dict()
        base.update({
            "symbol": self.symbol,
            "direction": self.direction,
            "status": self.status,
            "contract_symbol": self.contract_symbol,
            "quantity": self.quantity,
            "order_id": self.order_id,
            "reason": self.reason,
        })
        return base


@dataclass(frozen=True)
class CycleSkipped(DomainEvent):
    """Evento: un ciclo se abortó sin tocar la confirmación."""

    symbol: str = ""
    reason: str = ""  # fetch_failed | not_ready | no_new_data
    detail: str = ""

    def to_dict(self) -> Dict[str, Any]:
        base = super().to_dict()
        base.update({
            "symbol": self.symbol,
            "reason": self.reason,
            "detail": self.detail,
        })
        return base
