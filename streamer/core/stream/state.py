"""State construction and serialization for the stream engine.

Round-trip property (tested): `state_from_dict(state_to_dict(s)) == s` for all valid states.
"""

from __future__ import annotations

from typing import Any, Mapping

from .types import Phase, StreamState

# Auto-derived from StreamState field definitions (single source of truth).
STATE_VAR_NAMES: tuple[str, ...] = tuple(StreamState.__dataclass_fields__)


def initial_state() -> StreamState:
    """Return the state of a freshly created, uninitialized escrow."""
    return StreamState()


def state_to_dict(state: StreamState) -> dict[str, str | int]:
    """Serialize a StreamState to a plain dict (phase by its string value)."""
    out: dict[str, str | int] = {}
    for name in STATE_VAR_NAMES:
        val = getattr(state, name)
        out[name] = val.value if isinstance(val, Phase) else val
    return out


def state_from_dict(d: Mapping[str, Any]) -> StreamState:
    """Deserialize a dict to a StreamState. Raises KeyError on missing fields."""
    kwargs: dict[str, Any] = {}
    for name in STATE_VAR_NAMES:
        val = d[name]
        if name == "phase":
            kwargs[name] = Phase(val)
        elif isinstance(val, int) and not isinstance(val, bool):
            kwargs[name] = int(val)  # normalize int subclasses
        else:
            raise TypeError(f"state var {name!r} must be int, got {type(val).__name__}")
    return StreamState(**kwargs)
