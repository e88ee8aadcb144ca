"""Pure arithmetic for the stream engine.

Every function is stateless and operates on plain Python ints (arbitrary
precision, so ``amount * price`` products never overflow before division).

Rounding is explicit and one-directional: every division is Python's ``//`` on
non-negative operands, i.e. truncation toward zero. Truncation never pays out
more than is owed, in either conversion direction.
"""

from __future__ import annotations

# Domain constants
SLIPPAGE_SCALE: int = 100_000_000  # 1e8 == 100%
SCALE_DECIMALS: int = 18  # internal precision for price ratios
MIN_DECIMALS: int = 6
MAX_DECIMALS: int = 18
MIN_DURATION: int = 24 * 60 * 60  # one day, in seconds
USD_FLOOR: int = 1  # whole USD


# -- Decimal rescaling -------------------------------------------------------

def scale_amount(amount: int, from_decimals: int, to_decimals: int) -> int:
    """Rebase *amount* from one decimal precision to another.

    Exact when ``to_decimals >= from_decimals``, truncating otherwise.
    """
    if from_decimals == to_decimals:
        return amount
    if to_decimals > from_decimals:
        return amount * 10 ** (to_decimals - from_decimals)
    return amount // 10 ** (from_decimals - to_decimals)


def apply_haircut(price: int, slippage: int) -> int:
    """Price reduced by ``slippage / SLIPPAGE_SCALE``."""
    return (price * (SLIPPAGE_SCALE - slippage)) // SLIPPAGE_SCALE


def usd_value_whole(amount: int, asset_decimals: int, price: int, price_decimals: int) -> int:
    """Whole-USD value of *amount*: ``amount * price / 10^(asset + price decimals)``."""
    return scale_amount(amount * price, asset_decimals + price_decimals, 0)


# -- Price conversion --------------------------------------------------------

def distribution_price_scaled(
    distribution_price: int,
    distribution_price_decimals: int,
    slippage: int,
) -> int:
    """Haircut distribution-asset price at ``SCALE_DECIMALS`` precision."""
    scaled = scale_amount(distribution_price, distribution_price_decimals, SCALE_DECIMALS)
    return apply_haircut(scaled, slippage)


def reference_price_scaled(reference_price: int, reference_price_decimals: int) -> int:
    """Reference-asset price at ``SCALE_DECIMALS`` precision."""
    return scale_amount(reference_price, reference_price_decimals, SCALE_DECIMALS)


def convert_reference_to_distribution(
    reference_amount: int,
    reference_decimals: int,
    distribution_decimals: int,
    reference_price: int,
    distribution_price: int,
) -> int:
    """``amount * reference_price / distribution_price`` with both prices pre-scaled.

    *distribution_price* is expected to already carry the slippage haircut.
    """
    scaled = scale_amount(reference_amount, reference_decimals, SCALE_DECIMALS)
    out = (scaled * reference_price) // distribution_price
    return scale_amount(out, SCALE_DECIMALS, distribution_decimals)


def convert_distribution_to_reference(
    distribution_amount: int,
    distribution_decimals: int,
    reference_decimals: int,
    reference_price: int,
    distribution_price: int,
) -> int:
    """Inverse of ``convert_reference_to_distribution`` (same haircut price)."""
    scaled = scale_amount(distribution_amount, distribution_decimals, SCALE_DECIMALS)
    out = (scaled * distribution_price) // reference_price
    return scale_amount(out, SCALE_DECIMALS, reference_decimals)


# -- Accrual -----------------------------------------------------------------

def linear_accrual(target: int, elapsed: int, duration: int) -> int:
    """Reference units vested after *elapsed* seconds: ``target * elapsed / duration``."""
    return (target * elapsed) // duration
