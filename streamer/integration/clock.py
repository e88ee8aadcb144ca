"""
Time sources for the imperative shell.

The kernel never reads time itself; each public operation reads the clock once
and passes that instant down.
"""

from __future__ import annotations

import time
from typing import Callable

Clock = Callable[[], int]


def system_clock() -> int:
    """Current unix time in whole seconds."""
    return int(time.time())


class ManualClock:
    """Clock that only moves when told to (simulation, tests)."""

    def __init__(self, now: int = 0):
        if now < 0:
            raise ValueError(f"now must be non-negative: {now}")
        self._now = now

    def __call__(self) -> int:
        return self._now

    def advance(self, seconds: int) -> int:
        if seconds < 0:
            raise ValueError(f"cannot move the clock backwards: {seconds}")
        self._now += seconds
        return self._now

    def set(self, now: int) -> None:
        if now < self._now:
            raise ValueError(f"cannot move the clock backwards: {now} < {self._now}")
        self._now = now
