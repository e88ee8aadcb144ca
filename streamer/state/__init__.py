"""
State management for streaming escrows
"""

from .balances import BalanceTable
from .counters import CounterTable

__all__ = [
    "BalanceTable",
    "CounterTable",
]
