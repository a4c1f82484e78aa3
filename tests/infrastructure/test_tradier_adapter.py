from __future__ import annotations

from datetime import date, datetime

import pytest

from optionpulse.application.ports.errors import MarketDataError, OrderRejectedError
from optionpulse.application.use_cases.execute_trade_usecase import ExecuteTradeUseCase
from optionpulse.domain.entities.signal import Signal
from optionpulse.domain.entities.trade import OrderRequest, TradeStatus
from optionpulse.domain.services.risk_calculator import RiskCalculator
from optionpulse.infrastructure.external.tradier_adapter import (
    TradierBrokerAdapter,
    TradierMarketDataAdapter,
)


class FakeClient:
    """Respuestas enlatadas por endpoint; registra cada request."""

    def __init__(self, responses=None):
        self.responses = responses or {}
        self.requests = []

    async def get(self, endpoint, params=None):
        self.requests.append(("GET", endpoint, params))
        return self.responses.get(endpoint, {})

    async def post(self, endpoint, data=None):
        self.requests.append(("POST", endpoint, data))
        return self.responses.get(endpoint, {})


def row(minute, close, volume=1_000, **extra):
    data = {
        "time": f"2024-06-14T09:{30 + minute:02d}:00",
        "open": close,
        "high": close + 0.2,
        "low": close - 0.2,
        "close": close,
        "price": close,
        "volume": volume,
    }
    data.update(extra)
    return data


class TestMarketData:
    @pytest.mark.asyncio
    async def test_parses_timesales(self):
        client = FakeClient({"/markets/timesales": {"series": {"data": [row(1, 10.5), row(0, 10.0)]}}})
        adapter = TradierMarketDataAdapter(client, session_filter="open")

        bars = await adapter.fetch_recent_bars("SPY", "1min", 100)

        assert [b.close for b in bars] == [10.0, 10.5]
        assert bars[0].time == datetime(2024, 6, 14, 9, 30)
        method, endpoint, params = client.requests[0]
        assert params == {"symbol": "SPY", "interval": "1min", "session_filter": "open"}

    @pytest.mark.asyncio
    async def test_keeps_only_most_recent(self):
        rows = [row(i, 10.0 + i) for i in range(5)]
        client = FakeClient({"/markets/timesales": {"series": {"data": rows}}})

        bars = await TradierMarketDataAdapter(client).fetch_recent_bars("SPY", "1min", 3)

        assert [b.close for b in bars] == [12.0, 13.0, 14.0]

    @pytest.mark.asyncio
    async def test_single_row_and_null_series(self):
        single = FakeClient({"/markets/timesales": {"series": {"data": row(0, 10.0)}}})
        empty = FakeClient({"/markets/timesales": {"series": None}})

        assert len(await TradierMarketDataAdapter(single).fetch_recent_bars("SPY", "1min", 10)) == 1
        assert await TradierMarketDataAdapter(empty).fetch_recent_bars("SPY", "1min", 10) == []

    @pytest.mark.asyncio
    async def test_skips_corrupt_rows(self):
        bad = row(1, 10.0, high=9.0)
        missing = {"time": "2024-06-14T09:32:00", "close": 10.0}
        client = FakeClient({"/markets/timesales": {"series": {"data": [row(0, 10.0), bad, missing]}}})

        bars = await TradierMarketDataAdapter(client).fetch_recent_bars("SPY", "1min", 10)

        assert len(bars) == 1

    @pytest.mark.asyncio
    async def test_timestamp_fallback(self):
        data = row(0, 10.0)
        data.pop("time")
        data["timestamp"] = 1718357400
        client = FakeClient({"/markets/timesales": {"series": {"data": [data]}}})

        bars = await TradierMarketDataAdapter(client).fetch_recent_bars("SPY", "1min", 10)

        assert bars[0].time.timestamp() == 1718357400


class TestBroker:
    @pytest.mark.asyncio
    async def test_profile(self):
        client = FakeClient({"/user/profile": {"profile": {"id": "id-1", "name": "Jane"}}})
        assert (await TradierBrokerAdapter(client, "ACC").get_profile())["name"] == "Jane"

    @pytest.mark.asyncio
    async def test_expirations_sorted_and_normalized(self):
        many = FakeClient({"/markets/options/expirations": {"expirations": {"date": ["2024-06-21", "2024-06-17"]}}})
        one = FakeClient({"/markets/options/expirations": {"expirations": {"date": "2024-06-17"}}})
        none = FakeClient({"/markets/options/expirations": {"expirations": None}})

        assert await TradierBrokerAdapter(many, "ACC").get_expirations("SPY") == [
            date(2024, 6, 17), date(2024, 6, 21),
        ]
        assert await TradierBrokerAdapter(one, "ACC").get_expirations("SPY") == [date(2024, 6, 17)]
        assert await TradierBrokerAdapter(none, "ACC").get_expirations("SPY") == []

    @pytest.mark.asyncio
    async def test_option_chain(self):
        options = [
            {
                "symbol": "SPY240617C00545000", "underlying": "SPY", "option_type": "call",
                "strike": 545.0, "ask": 1.23, "bid": 1.2, "expiration_date": "2024-06-17",
            },
            {
                "symbol": "SPY240617P00545000", "underlying": "SPY", "option_type": "put",
                "strike": 545.0, "ask": None, "bid": None, "expiration_date": "2024-06-17",
            },
        ]
        client = FakeClient({"/markets/options/chains": {"options": {"option": options}}})

        chain = await TradierBrokerAdapter(client, "ACC").get_option_chain("SPY", date(2024, 6, 17))

        assert client.requests[0][2] == {"symbol": "SPY", "expiration": "2024-06-17", "greeks": "false"}
        assert chain[0].ask == 1.23
        assert chain[0].is_quoted
        assert chain[1].option_type == "put"
        assert not chain[1].is_quoted

    @pytest.mark.asyncio
    async def test_quote(self):
        client = FakeClient({"/markets/quotes": {"quotes": {"quote": {"symbol": "SPY", "last": 543.21}}}})
        assert await TradierBrokerAdapter(client, "ACC").get_quote("SPY") == 543.21

    @pytest.mark.asyncio
    async def test_missing_quote(self):
        client = FakeClient({"/markets/quotes": {"quotes": {"unmatched_symbols": {"symbol": "SPY"}}}})
        with pytest.raises(MarketDataError):
            await TradierBrokerAdapter(client, "ACC").get_quote("SPY")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("last", ["n/a", {"value": 1}])
    async def test_malformed_quote_is_market_data_error(self, last):
        client = FakeClient({"/markets/quotes": {"quotes": {"quote": {"symbol": "SPY", "last": last}}}})
        with pytest.raises(MarketDataError, match="Cotización inválida"):
            await TradierBrokerAdapter(client, "ACC").get_quote("SPY")

    @pytest.mark.asyncio
    async def test_malformed_quote_fails_trade_without_raising(self):
        client = FakeClient({
            "/markets/options/expirations": {"expirations": {"date": ["2024-06-17"]}},
            "/markets/quotes": {"quotes": {"quote": {"symbol": "SPY", "last": "n/a"}}},
        })
        usecase = ExecuteTradeUseCase(
            broker=TradierBrokerAdapter(client, "ACC"),
            symbol="SPY",
            risk_calculator=RiskCalculator(),
            today=lambda: date(2024, 6, 14),
        )

        outcome = await usecase.execute(Signal.CALL)

        assert outcome.status is TradeStatus.FAILED
        assert "Cotización inválida" in outcome.reason
        assert all(method == "GET" for method, _, _ in client.requests)

    @pytest.mark.asyncio
    async def test_submit_order(self):
        client = FakeClient({"/accounts/ACC/orders": {"order": {"id": 228175, "status": "ok"}}})
        order = OrderRequest(account_symbol="SPY", option_symbol="SPY240617C00545000", quantity=2)

        receipt = await TradierBrokerAdapter(client, "ACC").submit_order(order)

        assert receipt.order_id == "228175"
        method, endpoint, data = client.requests[0]
        assert (method, endpoint) == ("POST", "/accounts/ACC/orders")
        assert data["option_symbol"] == "SPY240617C00545000"
        assert data["side"] == "buy_to_open"

    @pytest.mark.asyncio
    async def test_submit_order_without_id_is_rejected(self):
        client = FakeClient({"/accounts/ACC/orders": {"errors": {"error": "Backoffice rejected"}}})
        order = OrderRequest(account_symbol="SPY", option_symbol="X", quantity=1)

        with pytest.raises(OrderRejectedError):
            await TradierBrokerAdapter(client, "ACC").submit_order(order)
