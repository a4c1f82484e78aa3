"""
OptionPulse – Domain Value Object: Indicator Snapshot
=======================================================
Último valor de cada indicador para UN ciclo.

Se recalcula completo desde la ventana de barras en cada ciclo:
no se arrastra estado incremental entre ciclos.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class MacdValue:
    """Línea MACD y su señal (EMA de la línea)."""

    line: float
    signal: float

    @property
    def histogram(self) -> float:
        return self.line - self.signal


@dataclass(frozen=True, slots=True)
class IndicatorSnapshot:
    """Snapshot inmutable de indicadores."""

    rsi: float
    ema_fast: float
    ema_mid: float
    ema_slow: float
    vwap: float
    macd: MacdValue
    volume_spike: bool

    def to_dict(self) -> dict:
        """Serialización para API / eventos."""
        return {
            "rsi": round(self.rsi, 2),
            "ema_fast": round(self.ema_fast, 5),
            "ema_mid": round(self.ema_mid, 5),
            "ema_slow": round(self.ema_slow, 5),
            "vwap": round(self.vwap, 5),
            "macd": {
                "line": round(self.macd.line, 5),
                "signal": round(self.macd.signal, 5),
                "histogram": round(self.macd.histogram, 5),
            },
            "volume_spike": self.volume_spike,
        }
