from __future__ import annotations

import pytest

from optionpulse.domain.events.domain_events import CycleSkipped, SignalEvaluated
from optionpulse.infrastructure.external.event_bus_adapter import EventBusAdapter


def evaluated(n: int) -> SignalEvaluated:
    return SignalEvaluated(symbol="SPY", signal="NONE", price=float(n))


@pytest.mark.asyncio
async def test_recent_is_bounded_and_newest_first():
    bus = EventBusAdapter(max_recent=3)
    for n in range(5):
        await bus.publish(evaluated(n))

    recent = bus.recent(10)

    assert [e["price"] for e in recent] == [4.0, 3.0, 2.0]
    assert bus.recent(1)[0]["event_type"] == "SignalEvaluated"
    assert bus.recent(0) == []


@pytest.mark.asyncio
async def test_recent_keeps_serialized_fields():
    bus = EventBusAdapter()
    await bus.publish(CycleSkipped(symbol="SPY", reason="not_ready", detail="3/5"))

    event = bus.recent()[0]

    assert event["event_type"] == "CycleSkipped"
    assert event["reason"] == "not_ready"
    assert event["detail"] == "3/5"


def test_max_recent_must_be_positive():
    with pytest.raises(ValueError):
        EventBusAdapter(max_recent=0)
