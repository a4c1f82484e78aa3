"""
OptionPulse – Application Port: Trade Executor
================================================
Interfaz que consume el ciclo cuando una señal se confirma.

El ciclo no sabe cómo se elige el contrato ni cómo se envía la orden:
solo recibe un TradeOutcome. Una implementación NUNCA debe lanzar por
errores del broker: los reporta como TradeStatus.FAILED.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from optionpulse.domain.entities.signal import Signal
from optionpulse.domain.entities.trade import TradeOutcome


class ITradeExecutor(ABC):

    @abstractmethod
    async def execute(
        self,
        direction: Signal,
        spot_price: Optional[float] = None,
    ) -> TradeOutcome:
        """
        Ejecuta una señal confirmada.

        Args:
            direction: Signal.CALL o Signal.PUT
            spot_price: Precio del subyacente conocido por el ciclo (opcional)

        Returns:
            TradeOutcome con el resultado (SUBMITTED/SIMULATED/SKIPPED/FAILED)
        """
        pass
