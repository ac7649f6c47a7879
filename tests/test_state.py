# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for per-editor state tracking."""

from __future__ import annotations

from editorlint.diagnostics import aggregate
from editorlint.host.memory import MemoryMarker
from editorlint.runtime.subscriptions import CallbackDisposable
from editorlint.state import EditorRegistry


def test_opened_editor_gets_a_fresh_state() -> None:
    registry = EditorRegistry()

    state = registry.on_editor_opened(7)

    assert 7 in registry
    assert registry.on_editor_opened(7) is state
    assert registry.state_for(7) is state
    assert registry.state_for(8) is None
    assert registry.groups_for(7) == {}
    assert registry.markers_for(7) == {}


def test_closing_releases_markers_hooks_and_listeners() -> None:
    registry = EditorRegistry()
    state = registry.on_editor_opened(1)
    marker = MemoryMarker(((0, 0), (0, 1)))
    released: list[str] = []
    state.markers[0] = marker
    state.marker_hooks[0] = CallbackDisposable(lambda: released.append("hook"))
    state.scope.add(CallbackDisposable(lambda: released.append("listener")))
    registry.replace_groups(1, aggregate([{"line": 1, "character": 1, "reason": "x"}]))

    registry.on_editor_closed(1)

    assert marker.is_destroyed()
    assert released == ["hook", "listener"]
    assert 1 not in registry
    assert registry.groups_for(1) == {}


def test_reset_scope_cancels_previous_listeners() -> None:
    registry = EditorRegistry()
    state = registry.on_editor_opened(1)
    released: list[int] = []
    old_scope = state.scope
    old_scope.add(CallbackDisposable(lambda: released.append(1)))

    new_scope = state.reset_scope()

    assert released == [1]
    assert old_scope.disposed
    assert not new_scope.disposed
    assert state.scope is new_scope


def test_closing_an_unknown_editor_is_harmless() -> None:
    EditorRegistry().on_editor_closed(42)


def test_clear_forgets_every_editor() -> None:
    registry = EditorRegistry()
    registry.on_editor_opened(1)
    registry.on_editor_opened(2)

    registry.clear()

    assert registry.editor_ids() == []
    assert list(registry) == []
