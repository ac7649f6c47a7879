# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for marker reconciliation."""

from __future__ import annotations

from editorlint.diagnostics import aggregate
from editorlint.host.memory import MemoryWorkspace
from editorlint.markers import MarkerStore
from editorlint.models import DiagnosticGroups
from editorlint.state import EditorRegistry


def _groups(*lines: int) -> DiagnosticGroups:
    return aggregate([{"line": line, "character": 1, "reason": f"problem {line}"} for line in lines])


def test_reconcile_creates_one_marker_per_row(workspace: MemoryWorkspace) -> None:
    editor = workspace.open("a\nb\nc\n")
    store = MarkerStore(EditorRegistry())

    result = store.reconcile(editor, _groups(1, 3, 3))

    assert result.created == (0, 2)
    assert store.rows(editor.id) == {0, 2}
    assert [marker.buffer_range for marker in editor.live_markers()] == [((0, 0), (0, 1)), ((2, 0), (2, 1))]


def test_reconcile_is_idempotent(workspace: MemoryWorkspace) -> None:
    editor = workspace.open("a\nb\n")
    store = MarkerStore(EditorRegistry())
    groups = _groups(1, 2)
    store.reconcile(editor, groups)

    result = store.reconcile(editor, groups)

    assert not result.changed
    assert result.kept == (0, 1)
    assert len(editor.markers) == 2


def test_reconcile_destroys_rows_that_lost_their_diagnostics(workspace: MemoryWorkspace) -> None:
    editor = workspace.open("a\nb\nc\n")
    registry = EditorRegistry()
    store = MarkerStore(registry)
    store.reconcile(editor, _groups(1, 2, 3))
    doomed = registry.markers_for(editor.id)[1]

    result = store.reconcile(editor, _groups(1, 3))

    assert result.destroyed == (1,)
    assert doomed.is_destroyed()
    assert store.rows(editor.id) == {0, 2}


def test_reconcile_with_no_groups_clears_every_marker(workspace: MemoryWorkspace) -> None:
    editor = workspace.open("a\n")
    store = MarkerStore(EditorRegistry())
    store.reconcile(editor, _groups(1))

    store.reconcile(editor, {})

    assert editor.live_markers() == []
    assert store.rows(editor.id) == set()


def test_reconcile_replaces_markers_destroyed_by_the_host(workspace: MemoryWorkspace) -> None:
    editor = workspace.open("a\n")
    store = MarkerStore(EditorRegistry())
    store.reconcile(editor, _groups(1))
    editor.markers[0].destroy()

    result = store.reconcile(editor, _groups(1))

    assert result.created == (0,)
    assert len(editor.live_markers()) == 1


def test_configuration_error_shares_the_first_row_marker(workspace: MemoryWorkspace) -> None:
    editor = workspace.open("a\n")
    store = MarkerStore(EditorRegistry())

    result = store.reconcile(editor, _groups(0, 1))

    assert result.created == (0,)
    assert store.rows(editor.id) == {0}
    assert len(editor.live_markers()) == 1


def test_first_row_marker_survives_while_a_configuration_error_remains(workspace: MemoryWorkspace) -> None:
    editor = workspace.open("a\n")
    store = MarkerStore(EditorRegistry())
    store.reconcile(editor, _groups(0, 1))
    [marker] = editor.live_markers()

    result = store.reconcile(editor, _groups(0))

    assert result.kept == (0,)
    assert not marker.is_destroyed()


def test_forget_destroys_every_marker(workspace: MemoryWorkspace) -> None:
    editor = workspace.open("a\nb\n")
    registry = EditorRegistry()
    store = MarkerStore(registry)
    store.reconcile(editor, _groups(1, 2))

    store.forget(editor.id)

    assert editor.live_markers() == []
    assert editor.id not in registry


def test_reconcile_without_editor_is_a_no_op() -> None:
    store = MarkerStore(EditorRegistry())

    assert not store.reconcile(None, _groups(1)).changed
