"""
Offline stream simulation.

Deploys a stream definition on an in-memory ledger with static feeds and a
manual clock, funds and initializes it, then runs the claim schedule.
"""

from __future__ import annotations

from typing import Any

from ..core.oracle import StaticPriceFeed
from ..core.stream import StreamError, state_to_dict
from ..state.balances import BalanceTable
from .clock import ManualClock
from .config_loader import Simulation, StreamDefinition
from .factory import StreamerFactory


def run_simulation(definition: StreamDefinition) -> dict[str, Any]:
    """Run the definition's simulation block (an empty schedule if absent) and report."""
    sim = definition.simulation or Simulation(start=0, deposit=None, claims=())
    terms = definition.terms

    ledger = BalanceTable()
    for asset, decimals in definition.assets.items():
        ledger.register_asset(asset, decimals)
    feeds = {
        feed_id: StaticPriceFeed(quote.price, quote.decimals)
        for feed_id, quote in definition.feeds.items()
    }
    clock = ManualClock(sim.start)
    factory = StreamerFactory(ledger=ledger, feeds=feeds, clock=clock)

    streamer = factory.deploy_streamer(terms.payer, terms)
    deposit = sim.deposit
    if deposit is None:
        # Target value at the current quotes, plus 0.1% headroom for truncation.
        needed = streamer.to_distribution_amount(terms.target_amount)
        deposit = needed + needed // 1000 + 1
    ledger.add(streamer.address, terms.distribution_asset, deposit)
    streamer.initialize(terms.payer)

    claims: list[dict[str, Any]] = []
    for interval in sim.claims:
        clock.advance(interval)
        entry: dict[str, Any] = {"time": clock(), "owed": streamer.amount_owed()}
        try:
            effect = streamer.claim(terms.recipient)
        except StreamError as exc:
            entry["error"] = exc.code
        else:
            entry["distribution_amount"] = effect.distribution_amount
            entry["reference_amount"] = effect.reference_amount
            entry["underfunded"] = effect.underfunded
        claims.append(entry)

    return {
        "schema": "streamer/simulation/v1",
        "address": streamer.address,
        "deposit": deposit,
        "claims": claims,
        "state": state_to_dict(streamer.state),
        "status": streamer.status().value,
        "escrow_balance": streamer.balance(),
        "recipient_balance": ledger.balance_of(terms.recipient, terms.distribution_asset),
    }
