"""Invariant checkers for the stream engine.

Each function returns True when the invariant holds. `check_all()` returns the
list of violated state invariant IDs, `check_transition()` the violated
PRE -> POST invariant IDs (empty = all pass).
"""

from __future__ import annotations

from typing import Callable

from .types import Phase, StreamConfig, StreamState


def inv_supplied_within_target(c: StreamConfig, s: StreamState) -> bool:
    return 0 <= s.reference_supplied <= c.target_amount


def inv_claimed_nonneg(c: StreamConfig, s: StreamState) -> bool:
    return s.distribution_claimed >= 0


def inv_uninitialized_zeroed(c: StreamConfig, s: StreamState) -> bool:
    if s.phase is not Phase.UNINITIALIZED:
        return True
    return (
        s.start_time == 0
        and s.last_claim_time == 0
        and s.termination_time == 0
        and s.reference_supplied == 0
        and s.distribution_claimed == 0
    )


def inv_claim_not_before_start(c: StreamConfig, s: StreamState) -> bool:
    return s.last_claim_time >= s.start_time >= 0


def inv_termination_only_when_shortened(c: StreamConfig, s: StreamState) -> bool:
    if s.phase is Phase.SHORTENED:
        return True
    return s.termination_time == 0


def inv_termination_within_stream(c: StreamConfig, s: StreamState) -> bool:
    if s.phase is not Phase.SHORTENED:
        return True
    return s.start_time <= s.termination_time <= s.start_time + c.duration


# -- Transition invariants ---------------------------------------------------

def tr_last_claim_monotone(pre: StreamState, post: StreamState) -> bool:
    return post.last_claim_time >= pre.last_claim_time


def tr_totals_monotone(pre: StreamState, post: StreamState) -> bool:
    return (
        post.reference_supplied >= pre.reference_supplied
        and post.distribution_claimed >= pre.distribution_claimed
    )


def tr_termination_fixed(pre: StreamState, post: StreamState) -> bool:
    if pre.phase is not Phase.SHORTENED:
        return True
    return post.phase is Phase.SHORTENED and post.termination_time == pre.termination_time


def tr_start_fixed(pre: StreamState, post: StreamState) -> bool:
    if pre.phase is Phase.UNINITIALIZED:
        return True
    return post.phase is not Phase.UNINITIALIZED and post.start_time == pre.start_time


# ---------------------------------------------------------------------------
# Registries + checks
# ---------------------------------------------------------------------------

INVARIANT_REGISTRY: dict[str, Callable[[StreamConfig, StreamState], bool]] = {
    "inv_supplied_within_target": inv_supplied_within_target,
    "inv_claimed_nonneg": inv_claimed_nonneg,
    "inv_uninitialized_zeroed": inv_uninitialized_zeroed,
    "inv_claim_not_before_start": inv_claim_not_before_start,
    "inv_termination_only_when_shortened": inv_termination_only_when_shortened,
    "inv_termination_within_stream": inv_termination_within_stream,
}

TRANSITION_REGISTRY: dict[str, Callable[[StreamState, StreamState], bool]] = {
    "tr_last_claim_monotone": tr_last_claim_monotone,
    "tr_totals_monotone": tr_totals_monotone,
    "tr_termination_fixed": tr_termination_fixed,
    "tr_start_fixed": tr_start_fixed,
}


def check_all(config: StreamConfig, state: StreamState) -> list[str]:
    """Return list of violated invariant IDs (empty = all pass)."""
    return [
        inv_id
        for inv_id, check_fn in INVARIANT_REGISTRY.items()
        if not check_fn(config, state)
    ]


def check_transition(pre: StreamState, post: StreamState) -> list[str]:
    return [
        tr_id
        for tr_id, check_fn in TRANSITION_REGISTRY.items()
        if not check_fn(pre, post)
    ]
