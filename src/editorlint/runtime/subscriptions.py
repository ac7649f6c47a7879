# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Scoped ownership of event subscriptions."""

from __future__ import annotations

import logging
from collections.abc import Callable
from types import TracebackType
from typing import Protocol, Self, TypeVar, runtime_checkable

LOGGER = logging.getLogger(__name__)


@runtime_checkable
class Disposable(Protocol):
    """Anything that can release what it holds."""

    def dispose(self) -> None:
        """Release the underlying subscription or resource."""

        raise NotImplementedError


DisposableT = TypeVar("DisposableT", bound=Disposable)


class CallbackDisposable:
    """Disposable that runs ``callback`` exactly once."""

    def __init__(self, callback: Callable[[], None]) -> None:
        self._callback: Callable[[], None] | None = callback

    @property
    def disposed(self) -> bool:
        return self._callback is None

    def dispose(self) -> None:
        callback, self._callback = self._callback, None
        if callback is not None:
            callback()


class SubscriptionScope:
    """Own a set of disposables and release them together.

    Disposal runs in reverse registration order and happens once; anything
    added to an already disposed scope is released straight away.
    """

    def __init__(self, label: str = "scope") -> None:
        """Initialise an empty scope.

        Args:
            label: Name used in debug logging.
        """

        self.label = label
        self._items: list[Disposable] = []
        self._disposed = False

    def __len__(self) -> int:
        return len(self._items)

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self.dispose()

    @property
    def disposed(self) -> bool:
        """Return whether :meth:`dispose` has already run."""

        return self._disposed

    def add(self, item: DisposableT) -> DisposableT:
        """Take ownership of ``item`` and return it.

        Args:
            item: Subscription, debouncer or other disposable.

        Returns:
            Disposable: ``item``, for inline registration.
        """

        if self._disposed:
            item.dispose()
        else:
            self._items.append(item)
        return item

    def dispose(self) -> None:
        """Release every owned item."""

        if self._disposed:
            return
        self._disposed = True
        items, self._items = self._items, []
        LOGGER.debug("disposing %d item(s) from %s", len(items), self.label)
        for item in reversed(items):
            item.dispose()


__all__ = ["CallbackDisposable", "Disposable", "SubscriptionScope"]
