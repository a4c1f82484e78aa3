"""
OptionPulse – Run Cycle Use Case
==================================
Caso de uso central: UN ciclo completo de evaluación.

FLUJO:
  IMarketDataProvider.fetch_recent_bars()
       │  (ProviderError → FETCH_FAILED, confirmación intacta)
       ▼
  BarSeries.merge()                     → ventana FIFO de barras
       │  (len < min_bars → NOT_READY, confirmación intacta)
       ▼
  IIndicatorEngine.compute()            → IndicatorSnapshot
       ▼
  SignalEvaluator.evaluate()            → CALL | PUT | NONE
       ▼
  ConfirmationStateMachine.update()     → ¿confirmada?
       │
       └── Si confirmada:
               ITradeExecutor.execute() → TradeOutcome
               (la máquina YA está en IDLE, pase lo que pase)

CONCURRENCIA:
- Un asyncio.Lock serializa los ciclos: el loop periódico y el
  endpoint POST /api/cycle nunca corren dos ciclos a la vez.
- La máquina de confirmación es single-writer (este use case).
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from optionpulse.application.ports.errors import ProviderError
from optionpulse.application.ports.event_publisher import IEventPublisher
from optionpulse.application.ports.market_data_provider import IMarketDataProvider
from optionpulse.application.ports.trade_executor import ITradeExecutor
from optionpulse.domain.entities.signal import Signal
from optionpulse.domain.entities.trade import TradeOutcome
from optionpulse.domain.events.domain_events import (
    CycleSkipped,
    SignalConfirmed,
    SignalEvaluated,
    TradeExecuted,
)
from optionpulse.domain.services.confirmation import (
    ConfirmationState,
    ConfirmationStateMachine,
)
from optionpulse.domain.services.indicator_engine import IIndicatorEngine
from optionpulse.domain.services.signal_rules import SignalEvaluator
from optionpulse.domain.value_objects.bar_series import BarSeries
from optionpulse.domain.value_objects.indicator_snapshot import IndicatorSnapshot
from optionpulse.shared.logging.logger import get_logger

logger = get_logger("run_cycle")


class CycleStatus(str, Enum):
    NOT_READY = "NOT_READY"        # Historia insuficiente
    FETCH_FAILED = "FETCH_FAILED"  # Feed caído / error de red / auth
    EVALUATED = "EVALUATED"        # Señal evaluada, sin confirmación
    CONFIRMED = "CONFIRMED"        # Señal confirmada y ejecutor invocado


@dataclass(frozen=True)
class CycleResult:
    """Resultado de un ciclo."""

    status: CycleStatus
    confirmation: ConfirmationState
    message: str
    signal: Optional[Signal] = None
    price: Optional[float] = None
    snapshot: Optional[IndicatorSnapshot] = None
    outcome: Optional[TradeOutcome] = None
    bars: int = 0

    def to_dict(self) -> dict:
        return {
            "status": self.status.value,
            "message": self.message,
            "signal": self.signal.value if self.signal else None,
            "price": self.price,
            "bars": self.bars,
            "snapshot": self.snapshot.to_dict() if self.snapshot else None,
            "confirmation": self.confirmation.to_dict(),
            "outcome": self.outcome.to_dict() if self.outcome else None,
        }


class RunCycleUseCase:
    """
    Driver de ciclo. Instancia de larga duración (una por bot):
    mantiene la ventana de barras y la máquina de confirmación.
    """

    def __init__(
        self,
        market_data: IMarketDataProvider,
        indicator_engine: IIndicatorEngine,
        signal_evaluator: SignalEvaluator,
        confirmation: ConfirmationStateMachine,
        trade_executor: ITradeExecutor,
        event_publisher: Optional[IEventPublisher] = None,
        symbol: str = "SPY",
        interval: str = "1min",
        window_capacity: int = 100,
        min_bars_required: int = 100,
    ) -> None:
        self._market_data = market_data
        self._engine = indicator_engine
        self._evaluator = signal_evaluator
        self._confirmation = confirmation
        self._executor = trade_executor
        self._event_publisher = event_publisher
        self._symbol = symbol
        self._interval = interval
        self._series = BarSeries(capacity=window_capacity)
        # Nunca por debajo de lo que exige el indicador más lento
        self._min_bars = max(min_bars_required, indicator_engine.min_bars)
        self._lock = asyncio.Lock()
        self._last_result: Optional[CycleResult] = None
        self._cycles = 0

    @property
    def series(self) -> BarSeries:
        return self._series

    @property
    def confirmation(self) -> ConfirmationStateMachine:
        return self._confirmation

    @property
    def last_result(self) -> Optional[CycleResult]:
        return self._last_result

    @property
    def cycles(self) -> int:
        return self._cycles

    @property
    def min_bars(self) -> int:
        return self._min_bars

    async def execute(self) -> CycleResult:
        """Ejecuta un ciclo completo (serializado con el lock)."""
        async with self._lock:
            result = await self._run()
            self._cycles += 1
            self._last_result = result
            return result

    async def _run(self) -> CycleResult:
        # 1. Refrescar barras
        try:
            bars = await self._market_data.fetch_recent_bars(
                self._symbol, self._interval, self._series.capacity,
            )
        except ProviderError as e:
            logger.warning("❌ Error obteniendo barras (se reintenta próximo ciclo): %s", e.message)
            await self._publish(CycleSkipped(
                symbol=self._symbol, reason="fetch_failed", detail=e.message,
            ))
            return self._result(CycleStatus.FETCH_FAILED, f"Feed no disponible: {e.message}")

        # Sin barras iguales o posteriores a la última no hay dato nuevo
        latest = self._series.latest
        if not any(latest is None or bar.time >= latest.time for bar in bars):
            message = f"Sin barras nuevas para {self._symbol}. Esperando próximo ciclo..."
            logger.info(message)
            await self._publish(CycleSkipped(
                symbol=self._symbol, reason="no_new_data", detail=message,
            ))
            return self._result(CycleStatus.NOT_READY, message)

        self._series.merge(bars)
        available = len(self._series)

        # 2. Historia suficiente
        if available < self._min_bars:
            message = f"Barras insuficientes ({available}/{self._min_bars}). Esperando..."
            logger.info(message)
            await self._publish(CycleSkipped(
                symbol=self._symbol, reason="not_ready", detail=message,
            ))
            return self._result(CycleStatus.NOT_READY, message)

        # 3. Indicadores
        snapshot = self._engine.compute(self._series)
        if snapshot is None:
            message = f"Indicadores no listos con {available} barras"
            logger.info(message)
            await self._publish(CycleSkipped(
                symbol=self._symbol, reason="not_ready", detail=message,
            ))
            return self._result(CycleStatus.NOT_READY, message)

        # 4. Señal
        price = self._series.latest.close
        signal = self._evaluator.evaluate(snapshot, price)

        # 5. Confirmación
        update = self._confirmation.update(signal)
        logger.info("%s | price=%.2f %s", update.message, price, self._format(snapshot))
        await self._publish(SignalEvaluated(
            symbol=self._symbol,
            signal=signal.value,
            price=price,
            confirmation_count=update.state.count,
            threshold=self._confirmation.threshold,
        ))

        if not update.is_confirmed:
            return self._result(
                CycleStatus.EVALUATED, update.message,
                signal=signal, price=price, snapshot=snapshot,
            )

        # 6. Ejecución (la máquina ya volvió a IDLE)
        logger.info("✅ Señal %s confirmada. Ejecutando trade...", update.confirmed.value)
        await self._publish(SignalConfirmed(
            symbol=self._symbol, signal=update.confirmed.value, price=price,
        ))
        outcome = await self._executor.execute(update.confirmed, spot_price=price)
        await self._publish(TradeExecuted(
            symbol=self._symbol,
            direction=outcome.direction.value,
            status=outcome.status.value,
            contract_symbol=outcome.contract_symbol,
            quantity=outcome.quantity,
            order_id=outcome.order_id,
            reason=outcome.reason,
        ))

        return self._result(
            CycleStatus.CONFIRMED, update.message,
            signal=signal, price=price, snapshot=snapshot, outcome=outcome,
        )

    def _result(self, status: CycleStatus, message: str, **kwargs) -> CycleResult:
        return CycleResult(
            status=status,
            confirmation=self._confirmation.state,
            message=message,
            bars=len(self._series),
            **kwargs,
        )

    async def _publish(self, event) -> None:
        if self._event_publisher is not None:
            await self._event_publisher.publish(event)

    @staticmethod
    def _format(snapshot: IndicatorSnapshot) -> str:
        return (
            f"rsi={snapshot.rsi:.1f} ema9={snapshot.ema_fast:.2f} "
            f"ema21={snapshot.ema_mid:.2f} ema50={snapshot.ema_slow:.2f} "
            f"vwap={snapshot.vwap:.2f} macd={snapshot.macd.line:.3f}/{snapshot.macd.signal:.3f} "
            f"vol_spike={snapshot.volume_spike}"
        )
