"""
Streaming escrow adapter.

This is an imperative-shell wrapper around the functional core in
`streamer.core.stream`:
- Reads the clock, the escrow's balance and (where a conversion is needed) both
  price quotes, once per operation.
- Runs the kernel step; a rejection raises the kernel's named error and leaves
  the stored state untouched.
- Performs the effect's transfers on the ledger, then commits the new state.

Public operations are serialized with an instance-level lock, so the shell can
be shared between threads.
"""

from __future__ import annotations

import logging
import threading
from typing import Optional

from ..core.oracle import PriceFeed, QuotePair, read_quotes
from ..core.stream import (
    Action,
    ActionParams,
    Effect,
    Event,
    StreamConfig,
    StreamError,
    StreamState,
    StreamStatus,
    amount_owed,
    initial_state,
    prices_valid,
    step_or_raise,
    stream_end,
    stream_status,
    to_distribution_amount,
    to_reference_amount,
)
from ..core.stream.errors import InvalidPriceError
from ..state.balances import BalanceTable
from .clock import Clock, system_clock

logger = logging.getLogger(__name__)


class Streamer:
    """One escrow: a configuration, its evolving state and its collaborators."""

    def __init__(
        self,
        *,
        address: str,
        config: StreamConfig,
        ledger: BalanceTable,
        distribution_feed: PriceFeed,
        reference_feed: PriceFeed,
        clock: Clock = system_clock,
        state: Optional[StreamState] = None,
    ):
        self.address = address
        self.config = config
        self._ledger = ledger
        self._distribution_feed = distribution_feed
        self._reference_feed = reference_feed
        self._clock = clock
        self._state = state if state is not None else initial_state()
        self._effects: list[Effect] = []
        self._lock = threading.RLock()

    # -- Observers ----------------------------------------------------------

    @property
    def state(self) -> StreamState:
        return self._state

    @property
    def effects(self) -> tuple[Effect, ...]:
        """Append-only log of emitted effects, oldest first."""
        return tuple(self._effects)

    def balance(self) -> int:
        return self._ledger.balance_of(self.address, self.config.distribution_asset)

    def amount_owed(self) -> int:
        with self._lock:
            return amount_owed(self.config, self._state, self._clock())

    def stream_end(self) -> int:
        return stream_end(self.config, self._state)

    def status(self) -> StreamStatus:
        with self._lock:
            return stream_status(self.config, self._state, self._clock())

    def to_distribution_amount(self, reference_amount: int) -> int:
        """Reference units -> distribution units at the current quotes."""
        return to_distribution_amount(self.config, self._valid_quotes(), reference_amount)

    def to_reference_amount(self, distribution_amount: int) -> int:
        """Distribution units -> reference units at the current quotes."""
        return to_reference_amount(self.config, self._valid_quotes(), distribution_amount)

    # -- Operations ---------------------------------------------------------

    def initialize(self, caller: str) -> Effect:
        return self._run(Action.INITIALIZE, caller, with_quotes=True)

    def claim(self, caller: str) -> Effect:
        return self._run(Action.CLAIM, caller, with_quotes=True)

    def terminate(self, caller: str, termination_time: int = 0) -> Effect:
        """Shorten the stream. 0 means ``now + notice_period``."""
        return self._run(Action.TERMINATE, caller, termination_time=termination_time)

    def sweep(self, caller: str) -> Effect:
        return self._run(Action.SWEEP, caller)

    def rescue(self, caller: str, asset: str) -> Effect:
        return self._run(Action.RESCUE, caller, asset=asset)

    # -- Internals ----------------------------------------------------------

    def _read_quotes(self) -> QuotePair:
        return read_quotes(self._distribution_feed, self._reference_feed)

    def _valid_quotes(self) -> QuotePair:
        quotes = self._read_quotes()
        if not prices_valid(self.config, quotes):
            raise InvalidPriceError(
                f"invalid prices: distribution={quotes.distribution_price} "
                f"reference={quotes.reference_price}"
            )
        return quotes

    def _run(
        self,
        action: Action,
        caller: str,
        *,
        with_quotes: bool = False,
        termination_time: int = 0,
        asset: str = "",
    ) -> Effect:
        with self._lock:
            moved_asset = asset or self.config.distribution_asset
            params = ActionParams(
                action=action,
                caller=caller,
                now=self._clock(),
                balance=self._ledger.balance_of(self.address, moved_asset),
                quotes=self._read_quotes() if with_quotes else None,
                termination_time=termination_time,
                asset=asset,
            )
            try:
                result = step_or_raise(self.config, self._state, params)
            except StreamError as exc:
                logger.debug("%s %s rejected: %s", self.address, action.value, exc)
                raise

            effect = result.effect
            assert effect is not None and result.state is not None
            for transfer in effect.transfers:
                self._ledger.transfer(self.address, transfer.to, transfer.asset, transfer.amount)
            self._state = result.state

            if effect.underfunded:
                logger.warning(
                    "%s claim underfunded: paid %d of owed reference %d (credited %d)",
                    self.address,
                    effect.distribution_amount,
                    amount_owed(self.config, self._state, params.now) + effect.reference_amount,
                    effect.reference_amount,
                )
                self._effects.append(
                    Effect(
                        event=Event.CLAIM_UNDERFUNDED,
                        distribution_amount=effect.distribution_amount,
                        reference_amount=effect.reference_amount,
                        underfunded=True,
                    )
                )
            self._effects.append(effect)
            logger.info(
                "%s %s by %s: distribution=%d reference=%d",
                self.address,
                effect.event.value,
                caller,
                effect.distribution_amount,
                effect.reference_amount,
            )
            return effect

    def __repr__(self) -> str:
        return f"Streamer({self.address}, phase={self._state.phase.value})"
