# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for schedulers, debouncing and subscription scopes."""

from __future__ import annotations

import pytest

from editorlint.runtime.debounce import Debouncer
from editorlint.runtime.scheduling import ManualScheduler
from editorlint.runtime.subscriptions import CallbackDisposable, SubscriptionScope


def test_manual_scheduler_fires_in_due_order() -> None:
    scheduler = ManualScheduler()
    fired: list[str] = []
    scheduler.call_later(0.2, lambda: fired.append("late"))
    scheduler.call_later(0.1, lambda: fired.append("early"))
    scheduler.call_later(0.1, lambda: fired.append("early-second"))

    assert scheduler.advance(0.15) == 2
    assert fired == ["early", "early-second"]
    assert scheduler.pending == 1
    assert scheduler.run_pending() == 1
    assert fired[-1] == "late"
    assert scheduler.now == pytest.approx(0.2)


def test_manual_scheduler_skips_cancelled_timers() -> None:
    scheduler = ManualScheduler()
    fired: list[int] = []
    handle = scheduler.call_later(0.1, lambda: fired.append(1))

    handle.cancel()

    assert scheduler.pending == 0
    assert scheduler.advance(1.0) == 0
    assert fired == []


def test_manual_scheduler_rejects_negative_delay() -> None:
    with pytest.raises(ValueError):
        ManualScheduler().call_later(-1, lambda: None)


def test_debouncer_runs_once_with_latest_arguments() -> None:
    scheduler = ManualScheduler()
    seen: list[str] = []
    debounced = Debouncer(scheduler, 0.05, seen.append)

    debounced("a")
    scheduler.advance(0.03)
    debounced("b")
    scheduler.advance(0.03)
    assert seen == []
    assert debounced.pending

    scheduler.advance(0.03)
    assert seen == ["b"]
    assert not debounced.pending


def test_debouncer_cancel_and_flush() -> None:
    scheduler = ManualScheduler()
    seen: list[int] = []
    debounced = Debouncer(scheduler, 0.05, lambda: seen.append(1))

    debounced()
    debounced.cancel()
    scheduler.run_pending()
    assert seen == []

    debounced()
    debounced.flush()
    assert seen == [1]
    assert scheduler.run_pending() == 0


def test_debouncer_dispose_drops_pending_call() -> None:
    scheduler = ManualScheduler()
    seen: list[int] = []
    debounced = Debouncer(scheduler, 0.05, lambda: seen.append(1))
    scope = SubscriptionScope()
    scope.add(debounced)

    debounced()
    scope.dispose()
    scheduler.run_pending()

    assert seen == []


def test_callback_disposable_runs_once() -> None:
    calls: list[int] = []
    disposable = CallbackDisposable(lambda: calls.append(1))

    disposable.dispose()
    disposable.dispose()

    assert calls == [1]
    assert disposable.disposed


def test_scope_disposes_in_reverse_order_once() -> None:
    order: list[str] = []
    scope = SubscriptionScope(label="test")
    scope.add(CallbackDisposable(lambda: order.append("first")))
    scope.add(CallbackDisposable(lambda: order.append("second")))
    assert len(scope) == 2

    scope.dispose()
    scope.dispose()

    assert order == ["second", "first"]
    assert scope.disposed
    assert len(scope) == 0


def test_scope_releases_late_additions_immediately() -> None:
    released: list[int] = []
    scope = SubscriptionScope()
    scope.dispose()

    scope.add(CallbackDisposable(lambda: released.append(1)))

    assert released == [1]


def test_scope_as_context_manager() -> None:
    released: list[int] = []

    with SubscriptionScope() as scope:
        scope.add(CallbackDisposable(lambda: released.append(1)))

    assert released == [1]
