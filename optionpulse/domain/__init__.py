"""
OptionPulse – Domain Layer
===========================
Núcleo puro del sistema. CERO dependencias externas.

Este módulo contiene:
- entities/: Entidades de negocio (Bar, Signal, OptionContract, Trade)
- value_objects/: Objetos inmutables (BarSeries, IndicatorSnapshot)
- services/: Servicios de dominio puros (IndicatorEngine, SignalEvaluator,
  ConfirmationStateMachine, ContractSelector, RiskCalculator)
- events/: Eventos de dominio
- exceptions/: Excepciones de dominio

REGLA DE DEPENDENCIA:
Este módulo NO puede importar de:
- infrastructure/
- presentation/
- application/
- Frameworks externos (aiohttp, FastAPI, etc.)
"""

from optionpulse.domain.entities.bar import Bar
from optionpulse.domain.entities.signal import Signal
from optionpulse.domain.entities.option_contract import OptionContract
from optionpulse.domain.entities.trade import TradeOutcome, TradeStatus
from optionpulse.domain.value_objects.bar_series import BarSeries
from optionpulse.domain.value_objects.indicator_snapshot import IndicatorSnapshot, MacdValue

__all__ = [
    "Bar",
    "Signal",
    "OptionContract",
    "TradeOutcome",
    "TradeStatus",
    "BarSeries",
    "IndicatorSnapshot",
    "MacdValue",
]
