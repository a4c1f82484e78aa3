"""
OptionPulse – Application Layer
================================
Capa de casos de uso y orquestación.

Este módulo contiene:
- use_cases/: RunCycleUseCase (driver de ciclo), ExecuteTradeUseCase
- ports/: Interfaces hacia infraestructura
- dto/: Data Transfer Objects
- services/: TradingLoop (scheduler periódico)

REGLA DE DEPENDENCIA:
Esta capa puede importar de:
- domain/ (entidades, servicios)
- ports/ propios (interfaces hacia infra)

NO puede importar de:
- infrastructure/ (implementaciones concretas)
- presentation/ (API)
"""

from optionpulse.application.use_cases.execute_trade_usecase import ExecuteTradeUseCase
from optionpulse.application.use_cases.run_cycle_usecase import (
    CycleResult,
    CycleStatus,
    RunCycleUseCase,
)
from optionpulse.application.services.trading_loop import TradingLoop

__all__ = [
    "ExecuteTradeUseCase",
    "RunCycleUseCase",
    "CycleResult",
    "CycleStatus",
    "TradingLoop",
]
