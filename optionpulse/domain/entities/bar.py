"""
OptionPulse – Domain Entity: Bar
==================================
Barra OHLCV inmutable recibida del feed de timesales.

Decisiones de diseño:
- frozen=True → inmutable una vez producida. Nadie puede alterar
  una barra pasada, garantizando que el snapshot de indicadores
  se recalcule siempre sobre los mismos datos.
- Se usa dataclass por rendimiento (más ligera que Pydantic para hot-path).
- Las invariantes OHLC se validan al construir: una barra corrupta
  del feed se rechaza en el adapter, nunca llega al motor.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from optionpulse.domain.exceptions.domain_errors import ValidationError


@dataclass(frozen=True, slots=True)
class Bar:
    """Barra OHLCV con timestamp de apertura."""

    time: datetime
    open: float
    high: float
    low: float
    close: float
    volume: float

    def __post_init__(self) -> None:
        if self.high < max(self.open, self.close):
            raise ValidationError(
                f"high {self.high} < max(open, close) en barra {self.time}",
                field="high",
                value=self.high,
            )
        if self.low > min(self.open, self.close):
            raise ValidationError(
                f"low {self.low} > min(open, close) en barra {self.time}",
                field="low",
                value=self.low,
            )
        if self.volume < 0:
            raise ValidationError(
                f"volume negativo en barra {self.time}",
                field="volume",
                value=self.volume,
            )

    @property
    def typical_price(self) -> float:
        """(high + low + close) / 3, precio usado por VWAP."""
        return (self.high + self.low + self.close) / 3.0

    def to_dict(self) -> dict:
        """Serialización para API."""
        return {
            "time": self.time.isoformat(),
            "open": self.open,
            "high": self.high,
            "low": self.low,
            "close": self.close,
            "volume": self.volume,
        }
