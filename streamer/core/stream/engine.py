"""Dispatch-table engine for the stream kernel.

``step(config, state, params)`` is the single entry point. It:

1. Validates parameter domains.
2. Dispatches to the correct guard / update / effect functions.
3. Checks all state and transition invariants on the post-state.
4. Returns a ``StepResult`` (accepted, or rejected with a ``Rejection``).

A rejected step never produces a state: callers keep the pre-state as is.
"""

from __future__ import annotations

from typing import Callable

from .effects import (
    effect_claim,
    effect_initialize,
    effect_rescue,
    effect_sweep,
    effect_terminate,
)
from .errors import StreamInvariantError, StreamParamError, error_from_rejection
from .guards import (
    guard_claim,
    guard_initialize,
    guard_rescue,
    guard_sweep,
    guard_terminate,
)
from .invariants import check_all, check_transition
from .types import Action, ActionParams, Effect, Rejection, StepResult, StreamConfig, StreamState
from .updates import (
    apply_claim,
    apply_initialize,
    apply_rescue,
    apply_sweep,
    apply_terminate,
)

GuardFn = Callable[[StreamConfig, StreamState, ActionParams], "Rejection | None"]
UpdateFn = Callable[[StreamConfig, StreamState, ActionParams], StreamState]
EffectFn = Callable[[StreamConfig, StreamState, StreamState, ActionParams], Effect]

_DISPATCH: dict[Action, tuple[GuardFn, UpdateFn, EffectFn]] = {
    Action.INITIALIZE: (guard_initialize, apply_initialize, effect_initialize),
    Action.CLAIM: (guard_claim, apply_claim, effect_claim),
    Action.TERMINATE: (guard_terminate, apply_terminate, effect_terminate),
    Action.SWEEP: (guard_sweep, apply_sweep, effect_sweep),
    Action.RESCUE: (guard_rescue, apply_rescue, effect_rescue),
}

# -- Parameter domain bounds -------------------------------------------------

MAX_TIMESTAMP: int = 2**64 - 1
MAX_AMOUNT: int = 2**256 - 1

# Per-action bounds: list of (field_name, min_val, max_val).
_COMMON_BOUNDS: list[tuple[str, int, int]] = [
    ("now", 0, MAX_TIMESTAMP),
    ("balance", 0, MAX_AMOUNT),
]
_PARAM_BOUNDS: dict[Action, list[tuple[str, int, int]]] = {
    Action.INITIALIZE: [],
    Action.CLAIM: [],
    Action.TERMINATE: [
        ("termination_time", 0, MAX_TIMESTAMP),
    ],
    Action.SWEEP: [],
    Action.RESCUE: [],
}


def _validate_params(params: ActionParams) -> str | None:
    """Check parameter domain bounds. Returns rejection reason or None."""
    if not params.caller:
        return "param_domain:caller"
    if params.action is Action.RESCUE and not params.asset:
        return "param_domain:asset"
    for field, lo, hi in _COMMON_BOUNDS + _PARAM_BOUNDS.get(params.action, []):
        val = getattr(params, field)
        if val < lo or val > hi:
            return f"param_domain:{field}"
    return None


def step(config: StreamConfig, state: StreamState, params: ActionParams) -> StepResult:
    """Execute one action against the given state.

    Returns ``StepResult`` with ``accepted=True`` on success,
    or ``accepted=False`` with a ``rejection``.
    """
    entry = _DISPATCH.get(params.action)
    if entry is None:
        return StepResult(accepted=False, rejection=Rejection(f"unknown_action:{params.action}"))

    domain_err = _validate_params(params)
    if domain_err is not None:
        return StepResult(accepted=False, rejection=Rejection(domain_err))

    guard_fn, update_fn, effect_fn = entry

    rejection = guard_fn(config, state, params)
    if rejection is not None:
        return StepResult(accepted=False, rejection=rejection)

    new_state = update_fn(config, state, params)

    violations = check_all(config, new_state) + check_transition(state, new_state)
    if violations:
        return StepResult(
            accepted=False,
            rejection=Rejection(f"invariant:{','.join(violations)}"),
        )

    effect = effect_fn(config, state, new_state, params)
    return StepResult(accepted=True, state=new_state, effect=effect)


def step_or_raise(config: StreamConfig, state: StreamState, params: ActionParams) -> StepResult:
    """Like ``step()`` but raises on rejection instead of returning a result.

    Raises:
        StreamParamError: Parameter outside its domain.
        StreamInvariantError: Post-state violates one or more invariants.
        StreamError: The guard's named error (NotPayerError, ZeroAmountError, ...).
    """
    result = step(config, state, params)
    if result.accepted:
        return result

    assert result.rejection is not None
    code = result.rejection.code
    if code.startswith("param_domain:"):
        raise StreamParamError(code)
    if code.startswith("invariant:"):
        raise StreamInvariantError(code.removeprefix("invariant:").split(","))
    raise error_from_rejection(code, result.rejection.args)
