# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Trailing-edge debouncing on top of a :class:`Scheduler`."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from .scheduling import Cancellable, Scheduler


class Debouncer:
    """Collapse bursts of calls into one call after a quiet period.

    Every call restarts the timer; when ``delay`` seconds pass without a new
    call, ``callback`` runs once with the arguments of the most recent call.
    """

    def __init__(self, scheduler: Scheduler, delay: float, callback: Callable[..., Any]) -> None:
        """Initialise the debouncer.

        Args:
            scheduler: Timer source owning the quiet-period timer.
            delay: Quiet period in seconds.
            callback: Function invoked once the quiet period elapses.
        """

        if delay < 0:
            raise ValueError("delay must be non-negative")
        self._scheduler = scheduler
        self.delay = delay
        self._callback = callback
        self._handle: Cancellable | None = None
        self._args: tuple[Any, ...] = ()
        self._kwargs: dict[str, Any] = {}

    def __call__(self, *args: Any, **kwargs: Any) -> None:
        self.cancel()
        self._args = args
        self._kwargs = kwargs
        self._handle = self._scheduler.call_later(self.delay, self._fire)

    @property
    def pending(self) -> bool:
        """Return whether a call is waiting for the quiet period to end."""

        return self._handle is not None

    def cancel(self) -> None:
        """Drop the pending call, if any."""

        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def flush(self) -> None:
        """Run the pending call immediately, if any."""

        if self._handle is not None:
            self.cancel()
            self._invoke()

    def dispose(self) -> None:
        """Alias of :meth:`cancel` so debouncers can live in a subscription scope."""

        self.cancel()

    def _fire(self) -> None:
        self._handle = None
        self._invoke()

    def _invoke(self) -> None:
        args, kwargs = self._args, self._kwargs
        self._args, self._kwargs = (), {}
        self._callback(*args, **kwargs)


__all__ = ["Debouncer"]
