"""
OptionPulse – Trading Loop
============================
Scheduler periódico: dispara RunCycleUseCase cada `interval_seconds`.

- Periodo fijo medido desde el INICIO de cada ciclo (como setInterval):
  si un ciclo tarda 3s con periodo 60s, el siguiente arranca a los 60s.
- Nunca solapa ciclos: espera a que termine el actual antes de dormir.
  Si un ciclo excede el periodo, el siguiente arranca inmediatamente.
- Una excepción inesperada en un ciclo se loguea y el loop sigue.
- stop() despierta al loop en el acto (no espera al siguiente tick).
"""

from __future__ import annotations

import asyncio
import time
from typing import Optional

from optionpulse.application.use_cases.run_cycle_usecase import RunCycleUseCase
from optionpulse.shared.logging.logger import get_logger

logger = get_logger("trading_loop")


class TradingLoop:
    """Loop de larga duración, lanzado como task desde main.py."""

    def __init__(
        self,
        run_cycle: RunCycleUseCase,
        interval_seconds: float = 60.0,
    ) -> None:
        if interval_seconds <= 0:
            raise ValueError("interval_seconds debe ser > 0")
        self._run_cycle = run_cycle
        self._interval = interval_seconds
        self._stop_event = asyncio.Event()
        self._running = False
        self._errors = 0
        self._started_at: Optional[float] = None

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def interval_seconds(self) -> float:
        return self._interval

    @property
    def errors(self) -> int:
        return self._errors

    async def start(self) -> None:
        """Lanzar el loop y bloquear hasta stop()."""
        if self._running:
            logger.warning("TradingLoop ya está corriendo")
            return

        self._stop_event.clear()
        self._running = True
        self._started_at = time.time()
        logger.info("TradingLoop iniciado (periodo=%.0fs)", self._interval)
        try:
            await self._run()
        finally:
            self._running = False

    async def stop(self) -> None:
        """Detener el loop al terminar el ciclo en curso."""
        self._stop_event.set()
        logger.info(
            "TradingLoop detenido. Ciclos: %d, errores: %d",
            self._run_cycle.cycles,
            self._errors,
        )

    async def _run(self) -> None:
        while not self._stop_event.is_set():
            started = time.monotonic()
            try:
                await self._run_cycle.execute()
            except asyncio.CancelledError:
                raise
            except Exception:
                self._errors += 1
                logger.exception("❌ Error inesperado en ciclo de trading")

            remaining = self._interval - (time.monotonic() - started)
            if remaining <= 0:
                continue
            try:
                await asyncio.wait_for(self._stop_event.wait(), timeout=remaining)
            except asyncio.TimeoutError:
                pass

    def to_dict(self) -> dict:
        return {
            "running": self._running,
            "interval_seconds": self._interval,
            "started_at": self._started_at,
            "errors": self._errors,
        }
