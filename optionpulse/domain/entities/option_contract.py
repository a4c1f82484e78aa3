"""
OptionPulse – Domain Entity: Option Contract
===============================================
Entrada de la cadena de opciones tal como la necesita el selector.

Solo se guardan los campos que usa la ejecución: tipo, strike, ask
y el símbolo OCC que se envía en la orden.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass(frozen=True, slots=True)
class OptionContract:
    """Contrato de opción de la cadena de un subyacente."""

    symbol: str              # símbolo OCC, e.g. "SPY240621C00540000"
    underlying: str          # e.g. "SPY"
    option_type: str         # "call" | "put"
    strike: float
    ask: Optional[float]     # None si el broker no cotiza ask
    bid: Optional[float] = None
    expiration: Optional[date] = None

    @property
    def is_quoted(self) -> bool:
        """¿Tiene ask positivo? Sin ask no se puede dimensionar."""
        return self.ask is not None and self.ask > 0

    def to_dict(self) -> dict:
        return {
            "symbol": self.symbol,
            "underlying": self.underlying,
            "option_type": self.option_type,
            "strike": self.strike,
            "ask": self.ask,
            "bid": self.bid,
            "expiration": self.expiration.isoformat() if self.expiration else None,
        }
