"""Application ports - Interfaces to infrastructure."""
from optionpulse.application.ports.broker_gateway import IBrokerGateway
from optionpulse.application.ports.errors import (
    AuthenticationError,
    MarketDataError,
    OrderRejectedError,
    ProviderError,
)
from optionpulse.application.ports.event_publisher import IEventPublisher
from optionpulse.application.ports.market_data_provider import IMarketDataProvider
from optionpulse.application.ports.trade_executor import ITradeExecutor

__all__ = [
    "IBrokerGateway",
    "IEventPublisher",
    "IMarketDataProvider",
    "ITradeExecutor",
    "ProviderError",
    "AuthenticationError",
    "MarketDataError",
    "OrderRejectedError",
]
