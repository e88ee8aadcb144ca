"""
Price quote sources.

This module is intentionally small:
- The functional core consumes `QuotePair` values and never talks to a feed.
- The imperative shell is responsible for fetching quotes from feeds, fresh on
  every operation that converts amounts.

Prices are USD-denominated signed integers with a per-feed decimal precision.
Non-positive prices are representable here on purpose: rejecting them is the
kernel's job, so that the operation that needed the price fails.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable


@dataclass(frozen=True)
class PriceQuote:
    """Latest answer of a USD price feed."""

    price: int
    decimals: int

    def __post_init__(self) -> None:
        if not isinstance(self.price, int) or isinstance(self.price, bool):
            raise TypeError(f"price must be an int: {self.price!r}")
        if self.decimals < 0:
            raise ValueError(f"decimals must be non-negative: {self.decimals}")


@dataclass(frozen=True)
class QuotePair:
    """Both prices needed for one conversion, read at the same instant."""

    distribution_price: int
    reference_price: int


@runtime_checkable
class PriceFeed(Protocol):
    """Capability: report the current USD price and its decimals."""

    def latest_quote(self) -> PriceQuote: ...


class StaticPriceFeed:
    """In-memory feed whose answer is set explicitly (simulation, tests)."""

    def __init__(self, price: int, decimals: int = 8):
        self._quote = PriceQuote(price=price, decimals=decimals)

    @property
    def decimals(self) -> int:
        return self._quote.decimals

    def set_price(self, price: int) -> None:
        self._quote = PriceQuote(price=price, decimals=self._quote.decimals)

    def latest_quote(self) -> PriceQuote:
        return self._quote

    def __repr__(self) -> str:
        return f"StaticPriceFeed(price={self._quote.price}, decimals={self._quote.decimals})"


def read_quotes(distribution_feed: PriceFeed, reference_feed: PriceFeed) -> QuotePair:
    """Fetch both feeds once and pair their prices."""
    return QuotePair(
        distribution_price=distribution_feed.latest_quote().price,
        reference_price=reference_feed.latest_quote().price,
    )
