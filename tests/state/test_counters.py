from __future__ import annotations

from streamer.state import CounterTable


def test_counter_starts_at_zero() -> None:
    assert CounterTable().get("0x" + "11" * 20) == 0


def test_increment_returns_new_value() -> None:
    c = CounterTable()
    assert c.increment("a") == 1
    assert c.increment("a") == 2
    assert c.increment("b") == 1
    assert c.get("a") == 2
    assert c.get("b") == 1
