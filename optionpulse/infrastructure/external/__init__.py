"""External systems - Tradier REST y messaging."""

from optionpulse.infrastructure.external.event_bus_adapter import EventBusAdapter
from optionpulse.infrastructure.external.tradier_adapter import (
    TradierBrokerAdapter,
    TradierMarketDataAdapter,
)
from optionpulse.infrastructure.external.tradier_client import TradierClient

__all__ = [
    "EventBusAdapter",
    "TradierClient",
    "TradierMarketDataAdapter",
    "TradierBrokerAdapter",
]
