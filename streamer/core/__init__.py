"""
Core streaming algorithms
"""

from .oracle import PriceFeed, PriceQuote, QuotePair, StaticPriceFeed
from .stream import (
    Action,
    ActionParams,
    Effect,
    Event,
    Phase,
    StepResult,
    StreamConfig,
    StreamState,
    StreamStatus,
    initial_state,
    step,
    step_or_raise,
)

__all__ = [
    "PriceFeed",
    "PriceQuote",
    "QuotePair",
    "StaticPriceFeed",
    "Action",
    "ActionParams",
    "Effect",
    "Event",
    "Phase",
    "StepResult",
    "StreamConfig",
    "StreamState",
    "StreamStatus",
    "initial_state",
    "step",
    "step_or_raise",
]
