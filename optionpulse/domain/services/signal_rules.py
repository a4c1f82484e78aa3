"""
OptionPulse – Domain Service: Signal Rules
===========================================
Lógica pura de evaluación de la regla de entrada.

Este servicio contiene SOLO lógica de negocio sin dependencias
externas. Puede testearse unitariamente sin mocks.

REGLA DE ENTRADA (todas deben cumplirse):

    CALL                              PUT
    50 < RSI < 70                     30 < RSI < 50
    precio > VWAP                     precio < VWAP
    precio > EMA 9 / 21 / 50          precio < EMA 9 / 21 / 50
    MACD line > MACD signal           MACD line < MACD signal
    spike de volumen                  spike de volumen

EXCLUSIÓN MUTUA:
Las bandas RSI son disjuntas (se valida al construir la config) y las
desigualdades de precio/MACD son opuestas, así que CALL y PUT no pueden
cumplirse a la vez. Si ocurriera, se devuelve CALL y se loguea como
error de definición de reglas.

NOTA: Este servicio recibe DATOS ya calculados.
Los indicadores se calculan en IndicatorEngine.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict

from optionpulse.domain.entities.signal import Signal
from optionpulse.domain.exceptions.domain_errors import ValidationError
from optionpulse.domain.value_objects.indicator_snapshot import IndicatorSnapshot

logger = logging.getLogger("optionpulse.signal_rules")


@dataclass(frozen=True)
class SignalRulesConfig:
    """Bandas RSI (exclusivas) para cada dirección."""

    call_rsi_lower: float = 50.0
    call_rsi_upper: float = 70.0
    put_rsi_lower: float = 30.0
    put_rsi_upper: float = 50.0

    def __post_init__(self) -> None:
        if self.call_rsi_lower >= self.call_rsi_upper:
            raise ValidationError("Banda RSI de CALL vacía", field="call_rsi_lower")
        if self.put_rsi_lower >= self.put_rsi_upper:
            raise ValidationError("Banda RSI de PUT vacía", field="put_rsi_lower")
        # Intervalos abiertos: se permite que compartan un borde (50)
        overlaps = (
            self.put_rsi_lower < self.call_rsi_upper
            and self.call_rsi_lower < self.put_rsi_upper
        )
        if overlaps:
            raise ValidationError(
                "Las bandas RSI de CALL y PUT se solapan",
                field="call_rsi_lower",
                value=(self.call_rsi_lower, self.put_rsi_upper),
            )


class SignalEvaluator:
    """
    Servicio de dominio que mapea (snapshot, precio) → Signal.

    RESPONSABILIDAD ÚNICA:
    Evaluar si la regla de entrada se cumple.
    NO decide si operar (eso es de la máquina de confirmación).

    USO:
        evaluator = SignalEvaluator(config)
        signal = evaluator.evaluate(snapshot, price)
    """

    def __init__(self, config: SignalRulesConfig = None):
        self._config = config or SignalRulesConfig()

    @property
    def config(self) -> SignalRulesConfig:
        return self._config

    # ════════════════════════════════════════════════════════════════
    #  CONDICIONES CALL
    # ════════════════════════════════════════════════════════════════

    def call_conditions(self, snapshot: IndicatorSnapshot, price: float) -> Dict[str, bool]:
        cfg = self._config
        return {
            "rsi_band": cfg.call_rsi_lower < snapshot.rsi < cfg.call_rsi_upper,
            "price_vs_vwap": price > snapshot.vwap,
            "price_vs_ema_fast": price > snapshot.ema_fast,
            "price_vs_ema_mid": price > snapshot.ema_mid,
            "price_vs_ema_slow": price > snapshot.ema_slow,
            "macd_cross": snapshot.macd.line > snapshot.macd.signal,
            "volume_spike": snapshot.volume_spike,
        }

    # ════════════════════════════════════════════════════════════════
    #  CONDICIONES PUT
    # ════════════════════════════════════════════════════════════════

    def put_conditions(self, snapshot: IndicatorSnapshot, price: float) -> Dict[str, bool]:
        cfg = self._config
        return {
            "rsi_band": cfg.put_rsi_lower < snapshot.rsi < cfg.put_rsi_upper,
            "price_vs_vwap": price < snapshot.vwap,
            "price_vs_ema_fast": price < snapshot.ema_fast,
            "price_vs_ema_mid": price < snapshot.ema_mid,
            "price_vs_ema_slow": price < snapshot.ema_slow,
            "macd_cross": snapshot.macd.line < snapshot.macd.signal,
            "volume_spike": snapshot.volume_spike,
        }

    # ════════════════════════════════════════════════════════════════
    #  EVALUACIÓN COMPLETA
    # ════════════════════════════════════════════════════════════════

    def is_call(self, snapshot: IndicatorSnapshot, price: float) -> bool:
        return all(self.call_conditions(snapshot, price).values())

    def is_put(self, snapshot: IndicatorSnapshot, price: float) -> bool:
        return all(self.put_conditions(snapshot, price).values())

    def evaluate(self, snapshot: IndicatorSnapshot, price: float) -> Signal:
        """
        Evalúa la regla de entrada.

        Returns:
            Signal.CALL, Signal.PUT o Signal.NONE
        """
        is_call = self.is_call(snapshot, price)
        is_put = self.is_put(snapshot, price)

        if is_call and is_put:
            logger.error(
                "Reglas CALL y PUT cumplidas a la vez (bug de definición): "
                "price=%.4f snapshot=%s. Se prioriza CALL.",
                price,
                snapshot.to_dict(),
            )
            return Signal.CALL
        if is_call:
            return Signal.CALL
        if is_put:
            return Signal.PUT
        return Signal.NONE

    def explain(self, snapshot: IndicatorSnapshot, price: float) -> Dict[str, Dict[str, bool]]:
        """Detalle condición a condición para logs / API."""
        return {
            "CALL": self.call_conditions(snapshot, price),
            "PUT": self.put_conditions(snapshot, price),
        }
