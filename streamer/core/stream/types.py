"""Data types for the stream engine.

All types are frozen dataclasses (immutable). The configuration is fixed at
creation; the state is replaced wholesale by each accepted step.

Units/conventions:
- `reference_*` amounts are integer units of the reference asset (its own decimals).
- `distribution_*` amounts are integer units of the distribution asset.
- `slippage` is a fraction of `SLIPPAGE_SCALE` (1e8 == 100%).
- times and durations are integer seconds.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, unique

from ...state.canonical import is_zero_address
from ..oracle import QuotePair
from .errors import (
    DecimalsNotInBoundsError,
    DurationTooShortError,
    NoticePeriodExceedsDurationError,
    SlippageExceedsScaleError,
    ZeroAddressError,
    ZeroAmountError,
)
from .math import MAX_DECIMALS, MIN_DECIMALS, MIN_DURATION, SLIPPAGE_SCALE


@unique
class Phase(Enum):
    """Stored lifecycle phase."""
    UNINITIALIZED = "uninitialized"
    RUNNING = "running"
    SHORTENED = "shortened"


@unique
class StreamStatus(Enum):
    """Observable status; FINISHED is derived from time and never stored."""
    NOT_INITIALIZED = "not_initialized"
    STARTED = "started"
    SHORTENED = "shortened"
    FINISHED = "finished"


@unique
class Action(Enum):
    INITIALIZE = "initialize"
    CLAIM = "claim"
    TERMINATE = "terminate"
    SWEEP = "sweep"
    RESCUE = "rescue"


@unique
class Event(Enum):
    INITIALIZED = "Initialized"
    CLAIMED = "Claimed"
    CLAIM_UNDERFUNDED = "ClaimUnderfunded"
    TERMINATED = "Terminated"
    SWEPT = "Swept"
    RESCUED = "Rescued"


@dataclass(frozen=True)
class StreamConfig:
    """Immutable escrow configuration. Static checks run on construction."""

    distribution_asset: str
    distribution_oracle: str
    reference_oracle: str
    return_address: str
    payer: str
    recipient: str
    distribution_decimals: int
    reference_decimals: int
    target_amount: int
    slippage: int
    claim_cooldown: int
    sweep_cooldown: int
    duration: int
    notice_period: int
    distribution_price_decimals: int
    reference_price_decimals: int

    def __post_init__(self) -> None:
        for name in (
            "distribution_asset",
            "distribution_oracle",
            "reference_oracle",
            "return_address",
            "payer",
            "recipient",
        ):
            if is_zero_address(getattr(self, name)):
                raise ZeroAddressError(f"{name} must be set")
        if self.target_amount <= 0:
            raise ZeroAmountError("target_amount must be positive")
        if self.slippage < 0 or self.slippage > SLIPPAGE_SCALE:
            raise SlippageExceedsScaleError(
                f"slippage must be within [0, {SLIPPAGE_SCALE}]: {self.slippage}"
            )
        for name in ("claim_cooldown", "sweep_cooldown", "duration", "notice_period"):
            if getattr(self, name) < MIN_DURATION:
                raise DurationTooShortError(f"{name} must be >= {MIN_DURATION}s")
        if self.notice_period > self.duration:
            raise NoticePeriodExceedsDurationError(
                f"notice_period {self.notice_period} exceeds duration {self.duration}"
            )
        for name in (
            "distribution_decimals",
            "reference_decimals",
            "distribution_price_decimals",
            "reference_price_decimals",
        ):
            value = getattr(self, name)
            if value < MIN_DECIMALS or value > MAX_DECIMALS:
                raise DecimalsNotInBoundsError(
                    f"{name} must be within [{MIN_DECIMALS}, {MAX_DECIMALS}]: {value}"
                )


@dataclass(frozen=True)
class StreamState:
    """Mutable-over-time escrow state (replaced, never mutated in place)."""

    phase: Phase = Phase.UNINITIALIZED
    start_time: int = 0
    last_claim_time: int = 0
    termination_time: int = 0
    reference_supplied: int = 0
    distribution_claimed: int = 0


@dataclass(frozen=True)
class ActionParams:
    """Parameters for an action. Unused fields default to 0/None/""."""

    action: Action
    caller: str
    now: int
    balance: int = 0                  # escrow balance of the asset the action moves
    quotes: QuotePair | None = None   # initialize / claim
    termination_time: int = 0         # terminate (0 = now + notice period)
    asset: str = ""                   # rescue


@dataclass(frozen=True)
class Transfer:
    """Outgoing movement of `amount` units of `asset` from the escrow to `to`."""

    asset: str
    to: str
    amount: int


@dataclass(frozen=True)
class Effect:
    """Observables emitted after a successful step."""

    event: Event
    distribution_amount: int = 0
    reference_amount: int = 0
    underfunded: bool = False
    termination_time: int = 0
    transfers: tuple[Transfer, ...] = ()


@dataclass(frozen=True)
class Rejection:
    """Why a guard refused an action. `args` feed the exception constructor."""

    code: str
    args: tuple[int, ...] = ()


@dataclass(frozen=True)
class StepResult:
    """Result of a single engine step."""

    accepted: bool
    state: StreamState | None = None
    effect: Effect | None = None
    rejection: Rejection | None = None
