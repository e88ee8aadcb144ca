"""
Escrow factory.

Creates `Streamer` instances at addresses derived from (factory, creator,
counter). The next address can be computed in advance with
`predict_address()`, but funds must not be sent there before the escrow exists:
creations by the same creator are ordered only by arrival, so a precomputed
address may end up belonging to a different stream.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Mapping

from ..core.oracle import PriceFeed
from ..core.stream import StreamConfig, validate_target_value
from ..core.stream.errors import AlreadyDeployedError, AssetsMatchError, ZeroAddressError
from ..state.balances import BalanceTable
from ..state.canonical import derive_address, is_zero_address
from ..state.counters import CounterTable
from .clock import Clock, system_clock
from .streamer import Streamer

logger = logging.getLogger(__name__)

DEFAULT_FACTORY_ADDRESS = "0x" + "5f" * 20


@dataclass(frozen=True)
class StreamTerms:
    """Creation inputs. Decimals are not given: they are read from the ledger and feeds."""

    distribution_asset: str
    reference_asset: str
    distribution_oracle: str
    reference_oracle: str
    return_address: str
    payer: str
    recipient: str
    target_amount: int
    slippage: int
    claim_cooldown: int
    sweep_cooldown: int
    duration: int
    notice_period: int


_IDENTITY_FIELDS = (
    "distribution_asset",
    "reference_asset",
    "distribution_oracle",
    "reference_oracle",
    "return_address",
    "payer",
    "recipient",
)


class StreamerFactory:
    def __init__(
        self,
        *,
        ledger: BalanceTable,
        feeds: Mapping[str, PriceFeed],
        clock: Clock = system_clock,
        address: str = DEFAULT_FACTORY_ADDRESS,
    ):
        self.address = address
        self._ledger = ledger
        self._feeds = feeds
        self._clock = clock
        self._counters = CounterTable()
        self._streamers: Dict[str, Streamer] = {}

    @property
    def streamers(self) -> Mapping[str, Streamer]:
        return dict(self._streamers)

    def counter(self, creator: str) -> int:
        return self._counters.get(creator)

    def predict_address(self, creator: str) -> str:
        """Address the creator's next escrow will get."""
        return derive_address(
            "escrow",
            {"factory": self.address, "creator": creator, "counter": self._counters.get(creator)},
        )

    def deploy_streamer(self, creator: str, terms: StreamTerms) -> Streamer:
        """
        Validate terms, build the configuration and create the escrow.

        Raises:
            ZeroAddressError, ZeroAmountError, SlippageExceedsScaleError,
            DurationTooShortError, NoticePeriodExceedsDurationError,
            DecimalsNotInBoundsError, TargetAmountTooLowError: invalid terms
            AssetsMatchError: distribution and reference asset are the same
            AlreadyDeployedError: derived address is taken
            InvalidPriceError: reference feed reports a non-positive price
            KeyError: unknown asset or feed
        """
        for name in _IDENTITY_FIELDS:
            if is_zero_address(getattr(terms, name)):
                raise ZeroAddressError(f"{name} must be set")
        if terms.distribution_asset == terms.reference_asset:
            raise AssetsMatchError("distribution and reference assets must differ")

        distribution_feed = self._feed(terms.distribution_oracle)
        reference_feed = self._feed(terms.reference_oracle)
        reference_quote = reference_feed.latest_quote()

        config = StreamConfig(
            distribution_asset=terms.distribution_asset,
            distribution_oracle=terms.distribution_oracle,
            reference_oracle=terms.reference_oracle,
            return_address=terms.return_address,
            payer=terms.payer,
            recipient=terms.recipient,
            distribution_decimals=self._ledger.decimals(terms.distribution_asset),
            reference_decimals=self._ledger.decimals(terms.reference_asset),
            target_amount=terms.target_amount,
            slippage=terms.slippage,
            claim_cooldown=terms.claim_cooldown,
            sweep_cooldown=terms.sweep_cooldown,
            duration=terms.duration,
            notice_period=terms.notice_period,
            distribution_price_decimals=distribution_feed.latest_quote().decimals,
            reference_price_decimals=reference_quote.decimals,
        )
        validate_target_value(config, reference_quote.price)

        address = self.predict_address(creator)
        if address in self._streamers:
            raise AlreadyDeployedError(f"escrow already deployed at {address}")

        streamer = Streamer(
            address=address,
            config=config,
            ledger=self._ledger,
            distribution_feed=distribution_feed,
            reference_feed=reference_feed,
            clock=self._clock,
        )
        self._streamers[address] = streamer
        self._counters.increment(creator)
        logger.info("deployed escrow %s for creator %s (payer %s)", address, creator, terms.payer)
        return streamer

    def _feed(self, oracle: str) -> PriceFeed:
        try:
            return self._feeds[oracle]
        except KeyError:
            raise KeyError(f"Unknown price feed: {oracle}") from None
