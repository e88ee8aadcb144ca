"""State transition functions for the stream engine.

One pure function per action. Each returns a new `StreamState` with the
action's updates applied.

Semantics:
- updates evaluate against the PRE-state,
- updates are only called after the action's guard accepted,
- we implement updates via `dataclasses.replace()` on frozen dataclasses.
"""

from __future__ import annotations

from dataclasses import replace

from .accounting import plan_claim
from .guards import resolve_termination_time
from .types import ActionParams, Phase, StreamConfig, StreamState


def apply_initialize(config: StreamConfig, state: StreamState, params: ActionParams) -> StreamState:
    return replace(
        state,
        phase=Phase.RUNNING,
        start_time=params.now,
        last_claim_time=params.now,
    )


def apply_claim(config: StreamConfig, state: StreamState, params: ActionParams) -> StreamState:
    plan = plan_claim(config, state, params)
    return replace(
        state,
        last_claim_time=params.now,
        reference_supplied=state.reference_supplied + plan.reference_amount,
        distribution_claimed=state.distribution_claimed + plan.distribution_amount,
    )


def apply_terminate(config: StreamConfig, state: StreamState, params: ActionParams) -> StreamState:
    return replace(
        state,
        phase=Phase.SHORTENED,
        termination_time=resolve_termination_time(config, params),
    )


def apply_sweep(config: StreamConfig, state: StreamState, params: ActionParams) -> StreamState:
    # Balance leaves the escrow; accounting is untouched.
    return state


def apply_rescue(config: StreamConfig, state: StreamState, params: ActionParams) -> StreamState:
    return state
