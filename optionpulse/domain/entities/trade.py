"""
OptionPulse – Domain Entity: Trade
=====================================
Orden que se envía al broker y resultado de ejecutar una señal confirmada.

═══════════════════════════════════════════════════════════════
            CICLO DE VIDA DE LA EJECUCIÓN
═══════════════════════════════════════════════════════════════

  Señal confirmada (CALL | PUT)
       │
       ├── sin contratos / ask inválido ──▸ SKIPPED
       ├── cantidad < 1 (muy caro)      ──▸ SKIPPED
       ├── dry_run                      ──▸ SIMULATED
       ├── broker rechaza / falla red   ──▸ FAILED
       └── orden aceptada               ──▸ SUBMITTED

En TODOS los casos la máquina de confirmación ya fue reseteada:
la señal se considera consumida, no se reintenta a mitad de consenso.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from optionpulse.domain.entities.signal import Signal


class TradeStatus(str, Enum):
    """Resultado de ejecutar una señal confirmada."""
    SUBMITTED = "SUBMITTED"  # Orden aceptada por el broker
    SIMULATED = "SIMULATED"  # dry_run: orden construida pero no enviada
    SKIPPED = "SKIPPED"      # Sin contrato operable o fuera de presupuesto
    FAILED = "FAILED"        # Error del broker / transporte


@dataclass(frozen=True, slots=True)
class OrderRequest:
    """Orden de opción a mercado (buy_to_open)."""

    account_symbol: str      # subyacente, e.g. "SPY"
    option_symbol: str       # símbolo OCC
    quantity: int
    side: str = "buy_to_open"
    order_type: str = "market"
    duration: str = "day"

    def to_form(self) -> dict:
        """Campos form-encoded que espera POST /accounts/{id}/orders."""
        return {
            "class": "option",
            "symbol": self.account_symbol,
            "option_symbol": self.option_symbol,
            "side": self.side,
            "quantity": str(self.quantity),
            "type": self.order_type,
            "duration": self.duration,
        }


@dataclass(frozen=True, slots=True)
class OrderReceipt:
    """Confirmación del broker."""

    order_id: str
    status: str


@dataclass(frozen=True, slots=True)
class TradeOutcome:
    """Resultado final de una ejecución."""

    status: TradeStatus
    direction: Signal
    contract_symbol: Optional[str] = None
    quantity: int = 0
    ask: Optional[float] = None
    order_id: Optional[str] = None
    reason: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "status": self.status.value,
            "direction": self.direction.value,
            "contract_symbol": self.contract_symbol,
            "quantity": self.quantity,
            "ask": self.ask,
            "order_id": self.order_id,
            "reason": self.reason,
        }
