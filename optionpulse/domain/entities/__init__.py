"""Domain entities."""
from optionpulse.domain.entities.bar import Bar
from optionpulse.domain.entities.signal import Signal
from optionpulse.domain.entities.option_contract import OptionContract
from optionpulse.domain.entities.trade import (
    OrderReceipt,
    OrderRequest,
    TradeOutcome,
    TradeStatus,
)

__all__ = [
    "Bar",
    "Signal",
    "OptionContract",
    "OrderReceipt",
    "OrderRequest",
    "TradeOutcome",
    "TradeStatus",
]
