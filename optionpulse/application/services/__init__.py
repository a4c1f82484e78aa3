"""Application services - Long-running orchestration."""
from optionpulse.application.services.trading_loop import TradingLoop

__all__ = ["TradingLoop"]
