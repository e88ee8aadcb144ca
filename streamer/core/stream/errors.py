"""Exception types for the stream engine.

Every guard rejection carries a stable code; ``step_or_raise()`` in
``engine.py`` turns it into the matching exception via ``error_from_rejection``.
Configuration errors are raised directly by ``StreamConfig`` validation.
"""

from __future__ import annotations

from typing import ClassVar


class StreamError(Exception):
    """Base class for every rejected stream operation."""

    code: ClassVar[str] = "stream_error"


# -- Configuration ----------------------------------------------------------

class ConfigurationError(StreamError, ValueError):
    """Raised when an escrow cannot be created from the given parameters."""

    code = "configuration"


class ZeroAddressError(ConfigurationError):
    code = "zero_address"


class SlippageExceedsScaleError(ConfigurationError):
    code = "slippage_exceeds_scale"


class NoticePeriodExceedsDurationError(ConfigurationError):
    code = "notice_period_exceeds_duration"


class DecimalsNotInBoundsError(ConfigurationError):
    code = "decimals_not_in_bounds"


class TargetAmountTooLowError(ConfigurationError):
    code = "target_amount_too_low"


class AssetsMatchError(ConfigurationError):
    code = "assets_match"


class AlreadyDeployedError(ConfigurationError):
    code = "already_deployed"


class DurationTooShortError(ConfigurationError):
    """A duration is below the minimum, or a termination notice is too short."""

    code = "duration_too_short"


class ZeroAmountError(StreamError, ValueError):
    """Zero target at creation, or nothing owed / nothing to move afterwards."""

    code = "zero_amount"


# -- Authorization ----------------------------------------------------------

class NotPayerError(StreamError):
    code = "not_payer"


class NotRecipientError(StreamError):
    """Caller is not the recipient and the claim cooldown has not elapsed."""

    code = "not_recipient"


# -- Lifecycle --------------------------------------------------------------

class AlreadyInitializedError(StreamError):
    code = "already_initialized"


class NotInitializedError(StreamError):
    code = "not_initialized"


class AlreadyTerminatedError(StreamError):
    code = "already_terminated"


class TerminationAfterStreamEndError(StreamError):
    code = "termination_after_stream_end"


class PayerCannotSweepYetError(StreamError):
    code = "payer_cannot_sweep_yet"


class SweepCooldownNotPassedError(StreamError):
    code = "sweep_cooldown_not_passed"


class CannotRescueDistributionAssetError(StreamError):
    code = "cannot_rescue_distribution_asset"


# -- Funding / prices -------------------------------------------------------

class InsufficientBalanceError(StreamError):
    """Escrow balance is worth less than the target, in reference units."""

    code = "insufficient_balance"

    def __init__(self, required: int, available: int) -> None:
        self.required = required
        self.available = available
        super().__init__(f"insufficient balance: required={required} available={available}")


class InvalidPriceError(StreamError):
    code = "invalid_price"


# -- Engine -----------------------------------------------------------------

class StreamInvariantError(StreamError):
    """Raised when a post-state violates one or more invariants."""

    code = "invariant"

    def __init__(self, violations: list[str]) -> None:
        self.violations = violations
        super().__init__(f"invariant violations: {', '.join(violations)}")


class StreamParamError(StreamError, ValueError):
    """Raised when an action parameter is outside its domain."""

    code = "param_domain"


_GUARD_ERRORS: tuple[type[StreamError], ...] = (
    ZeroAmountError,
    DurationTooShortError,
    NotPayerError,
    NotRecipientError,
    AlreadyInitializedError,
    NotInitializedError,
    AlreadyTerminatedError,
    TerminationAfterStreamEndError,
    PayerCannotSweepYetError,
    SweepCooldownNotPassedError,
    CannotRescueDistributionAssetError,
    InsufficientBalanceError,
    InvalidPriceError,
)

ERRORS_BY_CODE: dict[str, type[StreamError]] = {cls.code: cls for cls in _GUARD_ERRORS}


def error_from_rejection(code: str, args: tuple[int, ...] = ()) -> StreamError:
    """Build the exception for a guard rejection code."""
    cls = ERRORS_BY_CODE.get(code)
    if cls is None:
        return StreamError(code)
    if cls is InsufficientBalanceError:
        return InsufficientBalanceError(*args)
    return cls(code)
