from __future__ import annotations

import pytest
from hypothesis import given, seed, settings
from hypothesis import strategies as st

from optionpulse.domain.entities.signal import Signal
from optionpulse.domain.entities.trade import OrderRequest
from optionpulse.domain.exceptions.domain_errors import InvalidSignalError, RiskManagementError
from optionpulse.domain.services.contract_selector import ContractSelector
from optionpulse.domain.services.risk_calculator import RiskCalculator, RiskConfig


class TestRiskCalculator:
    def test_floor_of_budget_over_ask(self):
        size = RiskCalculator().size_position(3.0)
        assert size.is_valid
        assert size.quantity == 33
        assert size.total_cost == pytest.approx(99.0)

    def test_too_expensive_is_rejected(self):
        size = RiskCalculator().size_position(150.0)
        assert not size.is_valid
        assert size.quantity == 0
        assert "demasiado cara" in size.rejection_reason

    @pytest.mark.parametrize("ask", [None, 0.0, -1.0])
    def test_missing_ask_is_rejected(self, ask):
        size = RiskCalculator().size_position(ask)
        assert not size.is_valid
        assert size.rejection_reason == "Ask no disponible"

    def test_contract_multiplier(self):
        calc = RiskCalculator(RiskConfig(risk_per_trade=500.0, contract_multiplier=100))
        assert calc.size_position(1.2).quantity == 4
        assert not calc.size_position(6.0).is_valid

    def test_invalid_config(self):
        with pytest.raises(RiskManagementError):
            RiskConfig(risk_per_trade=0)
        with pytest.raises(RiskManagementError):
            RiskConfig(contract_multiplier=0)

    @seed(7)
    @settings(max_examples=100, deadline=None)
    @given(
        budget=st.floats(min_value=1.0, max_value=10_000.0),
        ask=st.floats(min_value=0.01, max_value=500.0),
    )
    def test_never_exceeds_budget(self, budget, ask):
        size = RiskCalculator(RiskConfig(risk_per_trade=budget)).size_position(ask)
        if size.is_valid:
            assert size.quantity >= 1
            assert size.total_cost <= budget + 1e-9


class TestContractSelector:
    def test_nearest_strike_of_matching_type(self, make_contract):
        chain = [
            make_contract("call", 540.0, 2.0),
            make_contract("call", 545.0, 1.0),
            make_contract("put", 543.0, 1.5),
        ]
        chosen = ContractSelector.select(chain, Signal.CALL, spot_price=543.2)
        assert chosen.strike == 545.0

    def test_put_direction(self, make_contract):
        chain = [make_contract("call", 543.0, 1.0), make_contract("put", 540.0, 1.5)]
        assert ContractSelector.select(chain, Signal.PUT, 543.0).option_type == "put"

    def test_tie_breaks_on_lower_ask(self, make_contract):
        chain = [make_contract("call", 540.0, 2.0), make_contract("call", 550.0, 1.0)]
        assert ContractSelector.select(chain, Signal.CALL, 545.0).strike == 550.0

    def test_skips_unquoted(self, make_contract):
        chain = [make_contract("call", 543.0, None), make_contract("call", 560.0, 0.4)]
        assert ContractSelector.select(chain, Signal.CALL, 543.0).strike == 560.0

    def test_no_candidates(self, make_contract):
        assert ContractSelector.select([make_contract("put", 1.0, 1.0)], Signal.CALL, 1.0) is None

    def test_none_direction_is_invalid(self, make_contract):
        with pytest.raises(InvalidSignalError):
            ContractSelector.select([make_contract("call", 1.0, 1.0)], Signal.NONE, 1.0)


def test_order_form_fields():
    form = OrderRequest(account_symbol="SPY", option_symbol="SPY240621C00545000", quantity=3).to_form()
    assert form == {
        "class": "option",
        "symbol": "SPY",
        "option_symbol": "SPY240621C00545000",
        "side": "buy_to_open",
        "quantity": "3",
        "type": "market",
        "duration": "day",
    }
