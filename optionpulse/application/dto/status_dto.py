"""
OptionPulse – Application DTO: Status
=======================================
Data Transfer Objects para el estado del bot expuesto por la API.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from optionpulse.application.services.trading_loop import TradingLoop
from optionpulse.application.use_cases.run_cycle_usecase import RunCycleUseCase


@dataclass
class StatusResponseDTO:
    """DTO de respuesta con el estado del ciclo y de la confirmación."""

    symbol: str
    interval: str
    bars_in_window: int
    window_capacity: int
    min_bars: int
    cycles: int
    threshold: int
    confirmation: Dict[str, Any]
    loop: Optional[Dict[str, Any]] = None
    last_cycle: Optional[Dict[str, Any]] = None
    dry_run: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "symbol": self.symbol,
            "interval": self.interval,
            "bars_in_window": self.bars_in_window,
            "window_capacity": self.window_capacity,
            "min_bars": self.min_bars,
            "cycles": self.cycles,
            "threshold": self.threshold,
            "confirmation": self.confirmation,
            "loop": self.loop,
            "last_cycle": self.last_cycle,
            "dry_run": self.dry_run,
        }

    @classmethod
    def from_components(
        cls,
        run_cycle: RunCycleUseCase,
        symbol: str,
        interval: str,
        loop: Optional[TradingLoop] = None,
        dry_run: bool = False,
    ) -> "StatusResponseDTO":
        last = run_cycle.last_result
        return cls(
            symbol=symbol,
            interval=interval,
            bars_in_window=len(run_cycle.series),
            window_capacity=run_cycle.series.capacity,
            min_bars=run_cycle.min_bars,
            cycles=run_cycle.cycles,
            threshold=run_cycle.confirmation.threshold,
            confirmation=run_cycle.confirmation.state.to_dict(),
            loop=loop.to_dict() if loop is not None else None,
            last_cycle=last.to_dict() if last is not None else None,
            dry_run=dry_run,
        )
