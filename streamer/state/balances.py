"""
Multi-asset balance tracking.

Implements BalanceTable[Holder, AssetId] -> Amount, plus the asset registry
(decimals per asset) that escrow creation reads.
"""

from typing import Dict, Tuple


# Type aliases
Holder = str  # account or escrow identity
AssetId = str
Amount = int  # Non-negative integer (arbitrary precision)


class BalanceTable:
    """
    Balance table mapping (holder, asset) -> amount.

    Transfers are all-or-nothing: a transfer either moves the full amount or
    raises without touching either balance.
    """

    def __init__(self):
        """Initialize empty balance table."""
        self._balances: Dict[Tuple[Holder, AssetId], Amount] = {}
        self._decimals: Dict[AssetId, int] = {}

    # -- Asset registry -----------------------------------------------------

    def register_asset(self, asset: AssetId, decimals: int) -> None:
        """
        Record the decimal precision of an asset.

        Raises:
            ValueError: If decimals is negative or the asset is registered with
                different decimals
        """
        if decimals < 0:
            raise ValueError(f"Decimals cannot be negative: {decimals}")
        known = self._decimals.get(asset)
        if known is not None and known != decimals:
            raise ValueError(f"Asset {asset} already registered with {known} decimals")
        self._decimals[asset] = decimals

    def decimals(self, asset: AssetId) -> int:
        """Decimals of a registered asset. Raises KeyError if unknown."""
        try:
            return self._decimals[asset]
        except KeyError:
            raise KeyError(f"Unknown asset: {asset}") from None

    # -- Balances -----------------------------------------------------------

    def get(self, holder: Holder, asset: AssetId) -> Amount:
        """Get balance for (holder, asset). Returns 0 if not found."""
        return self._balances.get((holder, asset), 0)

    balance_of = get

    def set(self, holder: Holder, asset: AssetId, amount: Amount) -> None:
        """
        Set balance for (holder, asset).

        Raises:
            ValueError: If amount is negative
        """
        if amount < 0:
            raise ValueError(f"Balance cannot be negative: {amount}")
        if amount == 0:
            # Remove zero balances to keep table sparse
            self._balances.pop((holder, asset), None)
        else:
            self._balances[(holder, asset)] = amount

    def add(self, holder: Holder, asset: AssetId, delta: Amount) -> None:
        """
        Add delta to balance (delta can be negative for subtraction).

        Raises:
            ValueError: If resulting balance would be negative
        """
        current = self.get(holder, asset)
        new_balance = current + delta
        if new_balance < 0:
            raise ValueError(
                f"Insufficient balance: {current} + {delta} = {new_balance} < 0"
            )
        self.set(holder, asset, new_balance)

    def subtract(self, holder: Holder, asset: AssetId, delta: Amount) -> None:
        """
        Subtract a non-negative delta from balance.

        Raises:
            ValueError: If delta is negative or insufficient balance
        """
        if delta < 0:
            raise ValueError(f"Delta must be non-negative: {delta}")
        self.add(holder, asset, -delta)

    def transfer(self, sender: Holder, to: Holder, asset: AssetId, amount: Amount) -> None:
        """
        Move amount of asset from sender to to.

        Raises:
            ValueError: If amount is negative or sender's balance is insufficient
        """
        if amount < 0:
            raise ValueError(f"Transfer amount must be non-negative: {amount}")
        if amount == 0 or sender == to:
            return
        self.subtract(sender, asset, amount)
        self.add(to, asset, amount)

    def __repr__(self) -> str:
        return f"BalanceTable({len(self._balances)} entries, {len(self._decimals)} assets)"
