"""Guard functions for the stream engine.

One pure function per action. Each returns None when the action is allowed in
the given PRE-state with the given parameters, else the `Rejection` naming the
first failed condition. Checks run in a fixed order: authorization, lifecycle,
then amounts and prices.
"""

from __future__ import annotations

from .accounting import amount_owed, prices_valid, stream_end, to_reference_amount
from .types import ActionParams, Phase, Rejection, StreamConfig, StreamState

NOT_PAYER = Rejection("not_payer")
NOT_RECIPIENT = Rejection("not_recipient")
ALREADY_INITIALIZED = Rejection("already_initialized")
NOT_INITIALIZED = Rejection("not_initialized")
ALREADY_TERMINATED = Rejection("already_terminated")
TERMINATION_AFTER_END = Rejection("termination_after_stream_end")
NOTICE_TOO_SHORT = Rejection("duration_too_short")
ZERO_AMOUNT = Rejection("zero_amount")
INVALID_PRICE = Rejection("invalid_price")
PAYER_CANNOT_SWEEP_YET = Rejection("payer_cannot_sweep_yet")
SWEEP_COOLDOWN = Rejection("sweep_cooldown_not_passed")
RESCUE_DISTRIBUTION_ASSET = Rejection("cannot_rescue_distribution_asset")


def guard_initialize(config: StreamConfig, state: StreamState, params: ActionParams) -> Rejection | None:
    if params.caller != config.payer:
        return NOT_PAYER
    if state.phase is not Phase.UNINITIALIZED:
        return ALREADY_INITIALIZED
    if not prices_valid(config, params.quotes):
        return INVALID_PRICE
    assert params.quotes is not None
    available = to_reference_amount(config, params.quotes, params.balance)
    if available < config.target_amount:
        return Rejection("insufficient_balance", (config.target_amount, available))
    return None


def guard_claim(config: StreamConfig, state: StreamState, params: ActionParams) -> Rejection | None:
    if state.phase is Phase.UNINITIALIZED:
        return NOT_INITIALIZED
    if params.caller != config.recipient and params.now < state.last_claim_time + config.claim_cooldown:
        return NOT_RECIPIENT
    if amount_owed(config, state, params.now) == 0:
        return ZERO_AMOUNT
    if not prices_valid(config, params.quotes):
        return INVALID_PRICE
    return None


def guard_terminate(config: StreamConfig, state: StreamState, params: ActionParams) -> Rejection | None:
    if params.caller != config.payer:
        return NOT_PAYER
    if state.phase is Phase.SHORTENED:
        return ALREADY_TERMINATED

    earliest = params.now + config.notice_period
    if params.termination_time != 0 and params.termination_time < earliest:
        return NOTICE_TOO_SHORT
    # stream_end is 0 before initialize, so an uninitialized stream always lands here.
    if resolve_termination_time(config, params) > stream_end(config, state):
        return TERMINATION_AFTER_END
    return None


def resolve_termination_time(config: StreamConfig, params: ActionParams) -> int:
    """Requested termination time, defaulting to ``now + notice_period`` for 0."""
    if params.termination_time == 0:
        return params.now + config.notice_period
    return params.termination_time


def guard_sweep(config: StreamConfig, state: StreamState, params: ActionParams) -> Rejection | None:
    if state.phase is Phase.UNINITIALIZED:
        if params.caller != config.payer:
            return NOT_PAYER
    else:
        end = stream_end(config, state)
        if params.caller == config.payer:
            if params.now <= end:
                return PAYER_CANNOT_SWEEP_YET
        elif params.now <= end + config.sweep_cooldown:
            return SWEEP_COOLDOWN
    if params.balance == 0:
        return ZERO_AMOUNT
    return None


def guard_rescue(config: StreamConfig, state: StreamState, params: ActionParams) -> Rejection | None:
    if params.caller != config.payer:
        return NOT_PAYER
    if params.asset == config.distribution_asset:
        return RESCUE_DISTRIBUTION_ASSET
    if params.balance == 0:
        return ZERO_AMOUNT
    return None

