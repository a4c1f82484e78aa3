"""
OptionPulse – Domain Service: Indicator Engine
================================================
Capacidad "ventana de barras → snapshot de indicadores".

IIndicatorEngine es la interfaz que consume el ciclo. La implementación
por defecto (IndicatorEngine) usa IndicatorCalculator; los tests pueden
inyectar un engine de fixture con valores deterministas.

CONJUNTO FIJO DE INDICADORES:
- RSI(14) Wilder
- EMA(9), EMA(21), EMA(50) con seed SMA propio
- VWAP acumulado (precio típico) sobre la ventana
- MACD(12, 26, 9) con suavizado exponencial
- Spike de volumen (lookback 10, multiplicador 1.0)

NOT READY:
compute() devuelve None si la ventana es más corta que el mínimo
que exige el indicador más lento (EMA 50 con la config por defecto).
Nunca se devuelve un snapshot con valores inventados.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from optionpulse.domain.exceptions.domain_errors import ValidationError
from optionpulse.domain.services.indicator_calculator import IndicatorCalculator
from optionpulse.domain.value_objects.bar_series import BarSeries
from optionpulse.domain.value_objects.indicator_snapshot import (
    IndicatorSnapshot,
    MacdValue,
)


@dataclass(frozen=True)
class IndicatorEngineConfig:
    """Períodos de indicadores."""

    rsi_period: int = 14
    ema_fast_period: int = 9
    ema_mid_period: int = 21
    ema_slow_period: int = 50
    macd_fast_period: int = 12
    macd_slow_period: int = 26
    macd_signal_period: int = 9
    volume_spike_lookback: int = 10
    volume_spike_multiplier: float = 1.0

    def __post_init__(self) -> None:
        periods = {
            "rsi_period": self.rsi_period,
            "ema_fast_period": self.ema_fast_period,
            "ema_mid_period": self.ema_mid_period,
            "ema_slow_period": self.ema_slow_period,
            "macd_fast_period": self.macd_fast_period,
            "macd_slow_period": self.macd_slow_period,
            "macd_signal_period": self.macd_signal_period,
            "volume_spike_lookback": self.volume_spike_lookback,
        }
        for name, value in periods.items():
            if value < 1:
                raise ValidationError(f"{name} debe ser >= 1", field=name, value=value)
        if self.macd_fast_period >= self.macd_slow_period:
            raise ValidationError(
                "macd_fast_period debe ser menor que macd_slow_period",
                field="macd_fast_period",
                value=self.macd_fast_period,
            )

    @property
    def min_bars(self) -> int:
        """
        Barras mínimas para que TODOS los indicadores tengan valor.

        - EMA:  period
        - RSI:  period + 1 (period deltas)
        - MACD: slow + signal − 1
        El spike de volumen no cuenta: con poca historia simplemente es False.
        """
        return max(
            self.ema_fast_period,
            self.ema_mid_period,
            self.ema_slow_period,
            self.rsi_period + 1,
            self.macd_slow_period + self.macd_signal_period - 1,
        )


class IIndicatorEngine(ABC):
    """Interfaz del motor de indicadores."""

    @property
    @abstractmethod
    def min_bars(self) -> int:
        """Barras mínimas para producir un snapshot."""

    @abstractmethod
    def compute(self, series: BarSeries) -> Optional[IndicatorSnapshot]:
        """
        Calcula el snapshot de la ventana.

        Returns:
            IndicatorSnapshot, o None si la ventana no alcanza min_bars
        """


class IndicatorEngine(IIndicatorEngine):
    """
    Motor de indicadores por recálculo completo.

    Stateless entre ciclos: cada compute() recorre la ventana entera.
    Con ventanas de ~100 barras el costo es despreciable frente al I/O.
    """

    def __init__(
        self,
        config: IndicatorEngineConfig = None,
        calculator: IndicatorCalculator = None,
    ):
        self._config = config or IndicatorEngineConfig()
        self._calc = calculator or IndicatorCalculator()

    @property
    def config(self) -> IndicatorEngineConfig:
        return self._config

    @property
    def min_bars(self) -> int:
        return self._config.min_bars

    def compute(self, series: BarSeries) -> Optional[IndicatorSnapshot]:
        if len(series) < self.min_bars:
            return None

        cfg = self._config
        closes = series.closes
        volumes = series.volumes

        rsi = self._calc.rsi(closes, cfg.rsi_period)
        ema_fast = self._calc.ema(closes, cfg.ema_fast_period)
        ema_mid = self._calc.ema(closes, cfg.ema_mid_period)
        ema_slow = self._calc.ema(closes, cfg.ema_slow_period)
        vwap = self._calc.vwap_series(series.highs, series.lows, closes, volumes)
        macd = self._calc.macd_series(
            closes,
            cfg.macd_fast_period,
            cfg.macd_slow_period,
            cfg.macd_signal_period,
        )

        if None in (rsi, ema_fast, ema_mid, ema_slow) or not vwap or not macd:
            return None

        line, signal = macd[-1]

        return IndicatorSnapshot(
            rsi=rsi,
            ema_fast=ema_fast,
            ema_mid=ema_mid,
            ema_slow=ema_slow,
            vwap=vwap[-1],
            macd=MacdValue(line=line, signal=signal),
            volume_spike=self._calc.volume_spike(
                volumes,
                cfg.volume_spike_lookback,
                cfg.volume_spike_multiplier,
            ),
        )
