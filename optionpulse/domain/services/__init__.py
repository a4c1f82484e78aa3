"""Domain services - Pure business logic with no external dependencies."""
from optionpulse.domain.services.indicator_calculator import IndicatorCalculator
from optionpulse.domain.services.indicator_engine import (
    IIndicatorEngine,
    IndicatorEngine,
    IndicatorEngineConfig,
)
from optionpulse.domain.services.signal_rules import SignalEvaluator, SignalRulesConfig
from optionpulse.domain.services.confirmation import (
    ConfirmationPhase,
    ConfirmationState,
    ConfirmationStateMachine,
    ConfirmationUpdate,
)
from optionpulse.domain.services.risk_calculator import PositionSize, RiskCalculator, RiskConfig
from optionpulse.domain.services.contract_selector import ContractSelector

__all__ = [
    "IndicatorCalculator",
    "IIndicatorEngine",
    "IndicatorEngine",
    "IndicatorEngineConfig",
    "SignalEvaluator",
    "SignalRulesConfig",
    "ConfirmationPhase",
    "ConfirmationState",
    "ConfirmationStateMachine",
    "ConfirmationUpdate",
    "PositionSize",
    "RiskCalculator",
    "RiskConfig",
    "ContractSelector",
]
