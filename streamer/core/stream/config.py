"""Creation-time checks that need a live quote.

Static configuration checks live in ``StreamConfig.__post_init__``; the USD
floor needs the reference asset's current price, so it is checked separately
by whoever reads the feed at creation.
"""

from __future__ import annotations

from .errors import InvalidPriceError, TargetAmountTooLowError
from .math import USD_FLOOR, usd_value_whole
from .types import StreamConfig


def validate_target_value(config: StreamConfig, reference_price: int) -> None:
    """Reject streams whose target is worth less than one whole USD."""
    if reference_price <= 0:
        raise InvalidPriceError(f"reference price must be positive: {reference_price}")
    value = usd_value_whole(
        config.target_amount,
        config.reference_decimals,
        reference_price,
        config.reference_price_decimals,
    )
    if value < USD_FLOOR:
        raise TargetAmountTooLowError(
            f"target amount is worth {value} USD, below the {USD_FLOOR} USD floor"
        )
