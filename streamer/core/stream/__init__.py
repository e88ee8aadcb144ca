"""`stream`: pure-Python accrual/claim kernel for a linear value-streaming escrow.

- deterministic, integer-only transitions (truncating division throughout),
- immutable configuration and state (frozen dataclasses),
- fail-closed guards and invariant checks.

Public API:
- `initial_state() -> StreamState`
- `step(config, state, params) -> StepResult`
- `step_or_raise(config, state, params) -> StepResult` (raises on rejection)
- `amount_owed`, `stream_end`, `stream_status` views
- `to_distribution_amount`, `to_reference_amount` conversions
"""

from .accounting import (
    amount_owed,
    prices_valid,
    stream_end,
    stream_status,
    to_distribution_amount,
    to_reference_amount,
)
from .config import validate_target_value
from .engine import step, step_or_raise
from .errors import StreamError, StreamInvariantError, StreamParamError
from .state import initial_state, state_from_dict, state_to_dict
from .types import (
    Action,
    ActionParams,
    Effect,
    Event,
    Phase,
    Rejection,
    StepResult,
    StreamConfig,
    StreamState,
    StreamStatus,
    Transfer,
)

__all__ = [
    "step",
    "step_or_raise",
    "initial_state",
    "state_from_dict",
    "state_to_dict",
    "amount_owed",
    "prices_valid",
    "stream_end",
    "stream_status",
    "to_distribution_amount",
    "to_reference_amount",
    "validate_target_value",
    "Action",
    "ActionParams",
    "Effect",
    "Event",
    "Phase",
    "Rejection",
    "StepResult",
    "StreamConfig",
    "StreamState",
    "StreamStatus",
    "Transfer",
    "StreamError",
    "StreamInvariantError",
    "StreamParamError",
]
