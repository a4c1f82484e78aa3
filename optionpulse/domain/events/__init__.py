"""Domain events."""
from optionpulse.domain.events.domain_events import (
    DomainEvent,
    SignalEvaluated,
    SignalConfirmed,
    TradeExecuted,
    CycleSkipped,
)

__all__ = [
    "DomainEvent",
    "SignalEvaluated",
    "SignalConfirmed",
    "TradeExecuted",
    "CycleSkipped",
]
