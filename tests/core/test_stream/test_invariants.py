"""Tests for streamer/core/stream/invariants.py — state and transition checkers."""

from dataclasses import replace

from streamer.core.stream import Phase, StreamConfig
from streamer.core.stream.invariants import (
    INVARIANT_REGISTRY,
    TRANSITION_REGISTRY,
    check_all,
    check_transition,
)
from streamer.core.stream.state import initial_state

DAY = 86_400
START = 1_700_000_000

CONFIG = StreamConfig(
    distribution_asset="0x" + "c0" * 20,
    distribution_oracle="dist-usd",
    reference_oracle="ref-usd",
    return_address="0x" + "aa" * 20,
    payer="0x" + "bb" * 20,
    recipient="0x" + "cc" * 20,
    distribution_decimals=18,
    reference_decimals=6,
    target_amount=1_000_000,
    slippage=0,
    claim_cooldown=DAY,
    sweep_cooldown=DAY,
    duration=100 * DAY,
    notice_period=10 * DAY,
    distribution_price_decimals=8,
    reference_price_decimals=8,
)


def _running(**kwargs):
    return replace(initial_state(), phase=Phase.RUNNING, start_time=START, last_claim_time=START, **kwargs)


class TestAllInvariantsOnInitialState:
    def test_initial_state_passes_all(self):
        assert check_all(CONFIG, initial_state()) == []

    def test_running_state_passes_all(self):
        assert check_all(CONFIG, _running(reference_supplied=10, distribution_claimed=10)) == []

    def test_registry_sizes(self):
        assert len(INVARIANT_REGISTRY) == 6
        assert len(TRANSITION_REGISTRY) == 4


class TestSuppliedWithinTarget:
    def test_pass_at_target(self):
        assert "inv_supplied_within_target" not in check_all(CONFIG, _running(reference_supplied=1_000_000))

    def test_fail_above_target(self):
        assert "inv_supplied_within_target" in check_all(CONFIG, _running(reference_supplied=1_000_001))

    def test_fail_negative(self):
        assert "inv_supplied_within_target" in check_all(CONFIG, _running(reference_supplied=-1))


class TestClaimedNonneg:
    def test_fail(self):
        assert "inv_claimed_nonneg" in check_all(CONFIG, _running(distribution_claimed=-5))


class TestUninitializedZeroed:
    def test_fail_start_set(self):
        s = replace(initial_state(), start_time=START)
        assert "inv_uninitialized_zeroed" in check_all(CONFIG, s)

    def test_fail_supplied_set(self):
        s = replace(initial_state(), reference_supplied=1)
        assert "inv_uninitialized_zeroed" in check_all(CONFIG, s)


class TestClaimNotBeforeStart:
    def test_fail(self):
        s = replace(_running(), last_claim_time=START - 1)
        assert "inv_claim_not_before_start" in check_all(CONFIG, s)


class TestTermination:
    def test_running_with_termination_time_fails(self):
        s = _running(termination_time=START + DAY)
        assert "inv_termination_only_when_shortened" in check_all(CONFIG, s)

    def test_shortened_within_stream(self):
        s = replace(_running(), phase=Phase.SHORTENED, termination_time=START + 50 * DAY)
        assert check_all(CONFIG, s) == []

    def test_shortened_past_duration_fails(self):
        s = replace(_running(), phase=Phase.SHORTENED, termination_time=START + 101 * DAY)
        assert "inv_termination_within_stream" in check_all(CONFIG, s)


class TestTransitions:
    def test_identity_passes(self):
        s = _running()
        assert check_transition(s, s) == []

    def test_last_claim_backwards(self):
        pre = replace(_running(), last_claim_time=START + DAY)
        assert "tr_last_claim_monotone" in check_transition(pre, _running())

    def test_totals_decrease(self):
        pre = _running(reference_supplied=10)
        assert "tr_totals_monotone" in check_transition(pre, _running())

    def test_termination_cannot_move(self):
        pre = replace(_running(), phase=Phase.SHORTENED, termination_time=START + 10 * DAY)
        post = replace(pre, termination_time=START + 20 * DAY)
        assert "tr_termination_fixed" in check_transition(pre, post)

    def test_termination_cannot_be_undone(self):
        pre = replace(_running(), phase=Phase.SHORTENED, termination_time=START + 10 * DAY)
        assert "tr_termination_fixed" in check_transition(pre, _running())

    def test_start_fixed(self):
        post = replace(_running(), start_time=START + 1, last_claim_time=START + 1)
        assert "tr_start_fixed" in check_transition(_running(), post)

    def test_initialize_transition_passes(self):
        assert check_transition(initial_state(), _running()) == []
