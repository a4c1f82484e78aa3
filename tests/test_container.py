from __future__ import annotations

import pytest
from pydantic import ValidationError as SettingsError

from optionpulse.container import Container, create_test_container
from optionpulse.domain.exceptions.domain_errors import ValidationError
from optionpulse.infrastructure.external.tradier_adapter import TradierMarketDataAdapter
from optionpulse.shared.config.settings import Settings


def settings(**overrides) -> Settings:
    return Settings(_env_file=None, **overrides)


class TestSettings:
    def test_defaults(self):
        s = settings()
        assert s.symbol == "SPY"
        assert s.confirmation_threshold == 2
        assert s.risk_per_trade == 100.0
        assert s.min_bars_required == s.window_capacity == 100

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("CONFIRMATION_THRESHOLD", "3")
        monkeypatch.setenv("DRY_RUN", "true")
        s = settings()
        assert s.confirmation_threshold == 3
        assert s.dry_run is True

    def test_min_bars_cannot_exceed_window(self):
        with pytest.raises(SettingsError):
            settings(window_capacity=50, min_bars_required=60)

    def test_threshold_must_be_positive(self):
        with pytest.raises(SettingsError):
            settings(confirmation_threshold=0)

    def test_credentials(self):
        assert not settings().has_credentials
        with pytest.raises(RuntimeError, match="TRADIER_ACCESS_TOKEN"):
            settings(tradier_account_id="ACC").require_credentials()
        assert settings(tradier_access_token="t", tradier_account_id="a").has_credentials


class TestContainer:
    def test_wires_run_cycle_from_settings(self):
        container = Container(settings=settings(confirmation_threshold=3, ema_slow_period=60))

        run_cycle = container.run_cycle

        assert run_cycle.confirmation is container.confirmation
        assert run_cycle.confirmation.threshold == 3
        assert run_cycle.min_bars == 100
        assert container.indicator_engine.min_bars == 60
        assert isinstance(container.market_data_provider, TradierMarketDataAdapter)

    def test_singletons(self):
        container = Container(settings=settings())
        assert container.run_cycle is container.run_cycle
        assert container.trading_loop.interval_seconds == 60.0

    def test_overlapping_bands_fail_fast(self):
        container = Container(settings=settings(call_rsi_lower=45.0))
        with pytest.raises(ValidationError):
            container.signal_evaluator

    def test_override_and_reset(self, fake_broker):
        broker = fake_broker()
        container = create_test_container(settings(), broker_gateway=broker)

        assert container.broker_gateway is broker
        assert container.trade_executor._broker is broker

        container.reset()
        assert container.broker_gateway is not broker

    def test_unknown_override(self):
        with pytest.raises(ValueError):
            create_test_container(settings(), nope=object())
