"""
Time-based value streaming escrow.

A payer escrows a distribution asset that is released linearly to a recipient,
with every payout sized from a target denominated in a reference asset and two
USD price quotes.
"""

__version__ = "0.1.0"
