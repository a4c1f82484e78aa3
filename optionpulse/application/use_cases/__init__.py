"""Application use cases - Business logic orchestration."""

from optionpulse.application.use_cases.execute_trade_usecase import ExecuteTradeUseCase
from optionpulse.application.use_cases.run_cycle_usecase import (
    CycleResult,
    CycleStatus,
    RunCycleUseCase,
)

__all__ = [
    "ExecuteTradeUseCase",
    "RunCycleUseCase",
    "CycleResult",
    "CycleStatus",
]
