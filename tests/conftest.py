"""Fixtures compartidos: fábricas de barras y fakes de los puertos."""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from typing import List, Optional, Sequence

import pytest

from optionpulse.application.ports.broker_gateway import IBrokerGateway
from optionpulse.application.ports.market_data_provider import IMarketDataProvider
from optionpulse.application.ports.trade_executor import ITradeExecutor
from optionpulse.domain.entities.bar import Bar
from optionpulse.domain.entities.option_contract import OptionContract
from optionpulse.domain.entities.trade import (
    OrderReceipt,
    OrderRequest,
    TradeOutcome,
    TradeStatus,
)
from optionpulse.domain.services.indicator_engine import IIndicatorEngine
from optionpulse.domain.value_objects.bar_series import BarSeries
from optionpulse.domain.value_objects.indicator_snapshot import IndicatorSnapshot, MacdValue

T0 = datetime(2024, 6, 14, 13, 30, tzinfo=timezone.utc)


def build_bar(minute: int, close: float, volume: float = 1_000.0, open_: Optional[float] = None) -> Bar:
    open_ = close if open_ is None else open_
    return Bar(
        time=T0 + timedelta(minutes=minute),
        open=open_,
        high=max(open_, close) + 0.1,
        low=min(open_, close) - 0.1,
        close=close,
        volume=volume,
    )


def build_bars(
    closes: Sequence[float],
    volumes: Optional[Sequence[float]] = None,
    start_minute: int = 0,
) -> List[Bar]:
    volumes = volumes if volumes is not None else [1_000.0] * len(closes)
    return [
        build_bar(start_minute + i, close, volume)
        for i, (close, volume) in enumerate(zip(closes, volumes))
    ]


BULLISH = IndicatorSnapshot(
    rsi=60.0,
    ema_fast=100.0,
    ema_mid=99.0,
    ema_slow=98.0,
    vwap=99.5,
    macd=MacdValue(line=0.5, signal=0.2),
    volume_spike=True,
)

BEARISH = IndicatorSnapshot(
    rsi=40.0,
    ema_fast=100.0,
    ema_mid=101.0,
    ema_slow=102.0,
    vwap=100.5,
    macd=MacdValue(line=-0.5, signal=-0.2),
    volume_spike=True,
)


# ─── Fakes de puertos ──────────────────────────────────────────────────

class FakeMarketData(IMarketDataProvider):
    def __init__(self, bars: Sequence[Bar] = (), error: Exception = None):
        self.bars = list(bars)
        self.error = error
        self.calls = 0

    async def fetch_recent_bars(self, symbol, interval, max_count):
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.bars[-max_count:]


class FakeBroker(IBrokerGateway):
    def __init__(
        self,
        expirations: Sequence[date] = (),
        chain: Sequence[OptionContract] = (),
        quote: float = 100.0,
        profile: dict = None,
        error: Exception = None,
    ):
        self.expirations = list(expirations)
        self.chain = list(chain)
        self.quote = quote
        self.profile = profile if profile is not None else {"id": "id-1", "name": "Test"}
        self.error = error
        self.orders: List[OrderRequest] = []
        self.chain_requests: List[date] = []
        self.quote_requests = 0

    async def get_profile(self):
        if self.error is not None:
            raise self.error
        return self.profile

    async def get_expirations(self, symbol):
        return self.expirations

    async def get_option_chain(self, symbol, expiration):
        self.chain_requests.append(expiration)
        return self.chain

    async def get_quote(self, symbol):
        self.quote_requests += 1
        return self.quote

    async def submit_order(self, order):
        if self.error is not None:
            raise self.error
        self.orders.append(order)
        return OrderReceipt(order_id=str(1000 + len(self.orders)), status="ok")


class RecordingExecutor(ITradeExecutor):
    def __init__(self, status: TradeStatus = TradeStatus.SUBMITTED):
        self.status = status
        self.calls: List[tuple] = []

    async def execute(self, direction, spot_price=None):
        self.calls.append((direction, spot_price))
        return TradeOutcome(status=self.status, direction=direction, quantity=1)


class ScriptedEngine(IIndicatorEngine):
    """Devuelve siempre el mismo snapshot una vez alcanzado min_bars."""

    def __init__(self, snapshot: IndicatorSnapshot, min_bars: int = 5):
        self.snapshot = snapshot
        self._min_bars = min_bars

    @property
    def min_bars(self) -> int:
        return self._min_bars

    def compute(self, series: BarSeries):
        if len(series) < self._min_bars:
            return None
        return self.snapshot


def contract(option_type: str, strike: float, ask: Optional[float], symbol: str = None) -> OptionContract:
    kind = "C" if option_type == "call" else "P"
    return OptionContract(
        symbol=symbol or f"SPY240621{kind}{int(strike * 1000):08d}",
        underlying="SPY",
        option_type=option_type,
        strike=strike,
        ask=ask,
    )


# ─── Fixtures ──────────────────────────────────────────────────────────

@pytest.fixture
def make_bars():
    return build_bars


@pytest.fixture
def make_bar():
    return build_bar


@pytest.fixture
def make_contract():
    return contract


@pytest.fixture
def bullish_snapshot() -> IndicatorSnapshot:
    return BULLISH


@pytest.fixture
def bearish_snapshot() -> IndicatorSnapshot:
    return BEARISH


@pytest.fixture
def fake_market_data():
    return FakeMarketData


@pytest.fixture
def fake_broker():
    return FakeBroker


@pytest.fixture
def recording_executor():
    return RecordingExecutor


@pytest.fixture
def scripted_engine():
    return ScriptedEngine
