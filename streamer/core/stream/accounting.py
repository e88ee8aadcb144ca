"""Accrual and conversion over (config, state).

Thin layer between the plain-int helpers in `math.py` and the per-action
guard / update / effect functions. Everything here is pure: nothing reads a
clock or a feed, and nothing mutates state.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..oracle import QuotePair
from .math import (
    convert_distribution_to_reference,
    convert_reference_to_distribution,
    distribution_price_scaled,
    linear_accrual,
    reference_price_scaled,
)
from .types import ActionParams, Phase, StreamConfig, StreamState, StreamStatus


# -- Lifecycle views ---------------------------------------------------------

def stream_end(config: StreamConfig, state: StreamState) -> int:
    """Effective end: termination time once shortened, else start + duration; 0 before start."""
    if state.phase is Phase.UNINITIALIZED:
        return 0
    if state.phase is Phase.SHORTENED:
        return state.termination_time
    return state.start_time + config.duration


def stream_status(config: StreamConfig, state: StreamState, now: int) -> StreamStatus:
    if state.phase is Phase.UNINITIALIZED:
        return StreamStatus.NOT_INITIALIZED
    if now >= stream_end(config, state):
        return StreamStatus.FINISHED
    if state.phase is Phase.SHORTENED:
        return StreamStatus.SHORTENED
    return StreamStatus.STARTED


def amount_owed(config: StreamConfig, state: StreamState, now: int) -> int:
    """Reference units accrued at *now* and not yet credited."""
    if state.reference_supplied >= config.target_amount:
        return 0
    end = stream_end(config, state)
    if end == 0:
        return 0

    if now < end:
        total = linear_accrual(config.target_amount, now - state.start_time, config.duration)
    elif state.phase is Phase.SHORTENED:
        # Frozen at the cutoff: identical to an unterminated twin read at `end`.
        total = linear_accrual(config.target_amount, end - state.start_time, config.duration)
    else:
        total = config.target_amount
    return total - state.reference_supplied


# -- Conversion --------------------------------------------------------------

def _haircut_price(config: StreamConfig, quotes: QuotePair) -> int:
    return distribution_price_scaled(
        quotes.distribution_price, config.distribution_price_decimals, config.slippage,
    )


def _reference_price(config: StreamConfig, quotes: QuotePair) -> int:
    return reference_price_scaled(quotes.reference_price, config.reference_price_decimals)


def prices_valid(config: StreamConfig, quotes: QuotePair | None) -> bool:
    """True when both quotes are positive and the haircut price is still non-zero."""
    if quotes is None:
        return False
    if quotes.distribution_price <= 0 or quotes.reference_price <= 0:
        return False
    return _haircut_price(config, quotes) > 0


def to_distribution_amount(config: StreamConfig, quotes: QuotePair, reference_amount: int) -> int:
    """Reference units -> distribution units. Caller must check `prices_valid` first."""
    return convert_reference_to_distribution(
        reference_amount,
        config.reference_decimals,
        config.distribution_decimals,
        _reference_price(config, quotes),
        _haircut_price(config, quotes),
    )


def to_reference_amount(config: StreamConfig, quotes: QuotePair, distribution_amount: int) -> int:
    """Distribution units -> reference units. Caller must check `prices_valid` first."""
    return convert_distribution_to_reference(
        distribution_amount,
        config.distribution_decimals,
        config.reference_decimals,
        _reference_price(config, quotes),
        _haircut_price(config, quotes),
    )


# -- Claim planning ----------------------------------------------------------

@dataclass(frozen=True)
class ClaimPlan:
    owed: int                 # reference units owed before clamping
    requested: int            # distribution units owed before clamping
    distribution_amount: int  # distribution units actually paid
    reference_amount: int     # reference units actually credited
    underfunded: bool


def plan_claim(config: StreamConfig, state: StreamState, params: ActionParams) -> ClaimPlan:
    """Size a claim against the escrow balance in `params.balance`.

    When the balance cannot cover the payout, the payout is clamped to the
    balance and only its reference-unit equivalent is credited; the remainder
    stays owed for a later claim.
    """
    assert params.quotes is not None
    owed = amount_owed(config, state, params.now)
    requested = to_distribution_amount(config, params.quotes, owed)
    if params.balance >= requested:
        return ClaimPlan(owed, requested, requested, owed, False)
    paid = params.balance
    credited = min(owed, to_reference_amount(config, params.quotes, paid))
    return ClaimPlan(owed, requested, paid, credited, True)
