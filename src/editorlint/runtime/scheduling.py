# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Timer sources used to defer work on the host's single event loop."""

from __future__ import annotations

import heapq
import itertools
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable


@runtime_checkable
class Cancellable(Protocol):
    """Handle to a scheduled callback."""

    def cancel(self) -> None:
        """Prevent the callback from running if it has not run yet."""

        raise NotImplementedError


@runtime_checkable
class Scheduler(Protocol):
    """Run callbacks after a delay on the owning event loop."""

    def call_later(self, delay: float, callback: Callable[[], None]) -> Cancellable:
        """Schedule ``callback`` to run after ``delay`` seconds."""

        raise NotImplementedError


@dataclass(order=True, slots=True)
class _ManualTimer:
    when: float
    sequence: int
    callback: Callable[[], None] = field(compare=False)
    cancelled: bool = field(default=False, compare=False)

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """Deterministic scheduler whose clock only moves when told to.

    Timers fire in due order from :meth:`advance`; timers scheduled by a
    firing callback run in the same call when they fall due.
    """

    def __init__(self) -> None:
        self.now = 0.0
        self._timers: list[_ManualTimer] = []
        self._sequence = itertools.count()

    def call_later(self, delay: float, callback: Callable[[], None]) -> Cancellable:
        if delay < 0:
            raise ValueError("delay must be non-negative")
        timer = _ManualTimer(self.now + delay, next(self._sequence), callback)
        heapq.heappush(self._timers, timer)
        return timer

    @property
    def pending(self) -> int:
        """Return the number of timers still waiting to fire."""

        return sum(1 for timer in self._timers if not timer.cancelled)

    def advance(self, seconds: float) -> int:
        """Move the clock forward and fire every timer that falls due.

        Args:
            seconds: Amount of time to advance the clock by.

        Returns:
            int: Number of callbacks executed.
        """

        deadline = self.now + seconds
        fired = 0
        while self._timers and self._timers[0].when <= deadline:
            timer = heapq.heappop(self._timers)
            if timer.cancelled:
                continue
            self.now = timer.when
            timer.callback()
            fired += 1
        self.now = deadline
        return fired

    def run_pending(self) -> int:
        """Advance the clock until no live timer remains.

        Returns:
            int: Number of callbacks executed.
        """

        fired = 0
        while self.pending:
            latest = max(timer.when for timer in self._timers if not timer.cancelled)
            fired += self.advance(max(latest - self.now, 0.0))
        return fired


__all__ = ["Cancellable", "ManualScheduler", "Scheduler"]
