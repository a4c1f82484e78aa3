"""
OptionPulse – Domain Service: Indicator Calculator
===================================================
Cálculos de indicadores técnicos puros.

Este servicio calcula EMA, RSI, VWAP, MACD y spike de volumen
sin dependencias externas (no TA-Lib, solo math puro).

Cada función *_series devuelve la serie completa alineada al FINAL
de la entrada (el último elemento corresponde a la última barra).
Una serie vacía significa "no hay suficientes datos".

VENTAJA:
- Testeo unitario sin mocks
- Sin dependencias de librerías externas en el dominio
- Fórmulas explícitas y auditables
"""

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple


class IndicatorCalculator:
    """
    Calculadora de indicadores técnicos puros.

    RESPONSABILIDAD:
    Implementar las fórmulas matemáticas de indicadores.
    NO mantiene estado (stateless).
    """

    @staticmethod
    def sma(
        values: Sequence[float],
        period: int,
    ) -> Optional[float]:
        """
        Calcula SMA (Simple Moving Average) de los últimos `period` valores.

        Returns:
            Valor SMA, o None si no hay suficientes datos
        """
        if period <= 0 or len(values) < period:
            return None

        return sum(values[-period:]) / period

    @staticmethod
    def ema_series(
        values: Sequence[float],
        period: int,
    ) -> List[float]:
        """
        Calcula la serie EMA (Exponential Moving Average).

        FÓRMULA:
        EMA_t = price_t × k + EMA_{t-1} × (1-k)
        k = 2 / (period + 1)

        INICIALIZACIÓN:
        EMA inicial = SMA de los primeros `period` valores.

        Args:
            values: Lista de precios (más antiguo primero)
            period: Período de la EMA

        Returns:
            len(values) - period + 1 valores, o [] si no hay suficientes datos
        """
        if period <= 0 or len(values) < period:
            return []

        k = 2.0 / (period + 1)

        ema = sum(values[:period]) / period
        series = [ema]
        for price in values[period:]:
            ema = price * k + ema * (1 - k)
            series.append(ema)

        return series

    @classmethod
    def ema(
        cls,
        values: Sequence[float],
        period: int,
    ) -> Optional[float]:
        """Último valor de la EMA, o None si no hay suficientes datos."""
        series = cls.ema_series(values, period)
        return series[-1] if series else None

    @staticmethod
    def rsi_series(
        values: Sequence[float],
        period: int = 14,
    ) -> List[float]:
        """
        Calcula la serie RSI (Relative Strength Index) con suavizado de Wilder.

        FÓRMULA:
        avg_gain_0 = SMA de las primeras `period` ganancias
        avg_gain_t = (avg_gain_{t-1} × (period − 1) + gain_t) / period
        (idem para pérdidas)
        RSI = 100 - (100 / (1 + avg_gain / avg_loss))

        INTERPRETACIÓN:
        RSI < 30 → oversold
        RSI > 70 → overbought

        Returns:
            len(values) - period valores en [0, 100], o [] si faltan datos
        """
        if period <= 0 or len(values) < period + 1:
            return []

        changes = [values[i] - values[i - 1] for i in range(1, len(values))]
        gains = [c if c > 0 else 0.0 for c in changes]
        losses = [-c if c < 0 else 0.0 for c in changes]

        avg_gain = sum(gains[:period]) / period
        avg_loss = sum(losses[:period]) / period
        series = [IndicatorCalculator._rsi_from_averages(avg_gain, avg_loss)]

        for gain, loss in zip(gains[period:], losses[period:]):
            avg_gain = (avg_gain * (period - 1) + gain) / period
            avg_loss = (avg_loss * (period - 1) + loss) / period
            series.append(IndicatorCalculator._rsi_from_averages(avg_gain, avg_loss))

        return series

    @classmethod
    def rsi(
        cls,
        values: Sequence[float],
        period: int = 14,
    ) -> Optional[float]:
        """Último RSI, o None si no hay suficientes datos."""
        series = cls.rsi_series(values, period)
        return series[-1] if series else None

    @staticmethod
    def _rsi_from_averages(avg_gain: float, avg_loss: float) -> float:
        """
        Edge cases:
        - avg_loss == 0 → RSI = 100.0 (solo ganancias)
        - avg_gain == 0 → RSI = 0.0   (solo pérdidas)
        - Ambos == 0    → RSI = 50.0  (sin movimiento, neutral)
        """
        if avg_gain == 0.0 and avg_loss == 0.0:
            return 50.0
        if avg_loss == 0.0:
            return 100.0
        if avg_gain == 0.0:
            return 0.0

        rs = avg_gain / avg_loss
        return 100.0 - (100.0 / (1.0 + rs))

    @staticmethod
    def vwap_series(
        highs: Sequence[float],
        lows: Sequence[float],
        closes: Sequence[float],
        volumes: Sequence[float],
    ) -> List[float]:
        """
        Calcula VWAP acumulado sobre toda la ventana.

        FÓRMULA:
        typical_t = (high_t + low_t + close_t) / 3
        VWAP_t = Σ(typical × volume) / Σ(volume)

        Si el volumen acumulado es 0 se usa el precio típico.

        Returns:
            Un valor por barra, o [] si las columnas no están alineadas
        """
        n = len(closes)
        if n == 0 or len(highs) != n or len(lows) != n or len(volumes) != n:
            return []

        series = []
        cum_pv = 0.0
        cum_volume = 0.0
        for high, low, close, volume in zip(highs, lows, closes, volumes):
            typical = (high + low + close) / 3.0
            cum_pv += typical * volume
            cum_volume += volume
            series.append(cum_pv / cum_volume if cum_volume > 0 else typical)

        return series

    @classmethod
    def macd_series(
        cls,
        values: Sequence[float],
        fast_period: int = 12,
        slow_period: int = 26,
        signal_period: int = 9,
    ) -> List[Tuple[float, float]]:
        """
        Calcula MACD con suavizado exponencial (no SMA).

        FÓRMULA:
        line_t   = EMA_fast_t − EMA_slow_t   (alineadas en la misma barra)
        signal_t = EMA_signal(line)_t

        Returns:
            Lista de (line, signal) desde la primera barra con señal,
            o [] si faltan datos (se necesitan slow + signal − 1 barras)
        """
        if fast_period >= slow_period:
            return []

        fast = cls.ema_series(values, fast_period)
        slow = cls.ema_series(values, slow_period)
        if not slow:
            return []

        # fast arranca (slow - fast) barras antes que slow
        offset = slow_period - fast_period
        line = [fast[i + offset] - slow[i] for i in range(len(slow))]

        signal = cls.ema_series(line, signal_period)
        if not signal:
            return []

        return list(zip(line[signal_period - 1:], signal))

    @staticmethod
    def volume_spike(
        volumes: Sequence[float],
        lookback: int = 10,
        multiplier: float = 1.0,
    ) -> bool:
        """
        Detecta spike de volumen en la última barra.

        LÓGICA:
        volume_last > mean(volumes de las `lookback` barras previas) × multiplier

        Con menos de lookback + 1 barras nunca hay spike.
        """
        if lookback <= 0 or len(volumes) < lookback + 1:
            return False

        previous = volumes[-(lookback + 1):-1]
        avg_volume = sum(previous) / lookback

        return volumes[-1] > avg_volume * multiplier
