"""Effect functions for the stream engine.

One pure function per action. Each computes the ``Effect`` of an accepted step:
the event to record and the transfers the shell must perform. Effects see the
PRE-state (to size payouts) and the POST-state (to report what was committed).
"""

from __future__ import annotations

from .accounting import plan_claim
from .types import ActionParams, Effect, Event, StreamConfig, StreamState, Transfer


def effect_initialize(
    config: StreamConfig, pre: StreamState, post: StreamState, params: ActionParams,
) -> Effect:
    return Effect(event=Event.INITIALIZED)


def effect_claim(
    config: StreamConfig, pre: StreamState, post: StreamState, params: ActionParams,
) -> Effect:
    plan = plan_claim(config, pre, params)
    return Effect(
        event=Event.CLAIMED,
        distribution_amount=plan.distribution_amount,
        reference_amount=plan.reference_amount,
        underfunded=plan.underfunded,
        transfers=(Transfer(config.distribution_asset, config.recipient, plan.distribution_amount),),
    )


def effect_terminate(
    config: StreamConfig, pre: StreamState, post: StreamState, params: ActionParams,
) -> Effect:
    return Effect(event=Event.TERMINATED, termination_time=post.termination_time)


def effect_sweep(
    config: StreamConfig, pre: StreamState, post: StreamState, params: ActionParams,
) -> Effect:
    return Effect(
        event=Event.SWEPT,
        distribution_amount=params.balance,
        transfers=(Transfer(config.distribution_asset, config.return_address, params.balance),),
    )


def effect_rescue(
    config: StreamConfig, pre: StreamState, post: StreamState, params: ActionParams,
) -> Effect:
    return Effect(
        event=Event.RESCUED,
        transfers=(Transfer(params.asset, config.return_address, params.balance),),
    )
