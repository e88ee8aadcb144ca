"""
Per-creator deployment counters.

We track, per creator identity, how many escrows it has created. The next
escrow address is derived from (creator, counter), so addresses are
precomputable but only claimed by an actual creation.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict

from .balances import Holder


@dataclass
class CounterTable:
    """
    Mutable mapping: creator -> number of escrows created.

    Intentionally similar in spirit to `BalanceTable`: a small, explicit state
    table.
    """

    _counts: Dict[Holder, int] = field(default_factory=dict)

    def get(self, creator: Holder) -> int:
        return self._counts.get(creator, 0)

    def increment(self, creator: Holder) -> int:
        """Bump the creator's counter and return the new value."""
        value = self.get(creator) + 1
        self._counts[creator] = value
        return value

