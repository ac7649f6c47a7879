# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Event-loop helpers: schedulers, debouncing and scoped subscriptions."""

from __future__ import annotations

from .debounce import Debouncer
from .scheduling import Cancellable, ManualScheduler, Scheduler
from .subscriptions import CallbackDisposable, Disposable, SubscriptionScope

__all__ = [
    "CallbackDisposable",
    "Cancellable",
    "Debouncer",
    "Disposable",
    "ManualScheduler",
    "Scheduler",
    "SubscriptionScope",
]
