# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for tooltips, decorations and the status summary."""

from __future__ import annotations

from editorlint.diagnostics import aggregate
from editorlint.host.memory import MemoryEditor, MemoryWorkspace
from editorlint.markers import MarkerStore
from editorlint.models import DiagnosticGroups
from editorlint.presentation import (
    GUTTER_DECORATION,
    LINE_DECORATION,
    STATUS_ELEMENT_ID,
    TOOLTIP_PLACEMENT,
    TOOLTIP_SHOW_DELAY_MS,
    Presenter,
    StatusSummary,
    build_tooltip,
    status_text,
)
from editorlint.state import EditorRegistry

PAYLOAD = [
    {"line": 3, "character": 9, "reason": "Missing semicolon."},
    {"line": 3, "character": 4, "reason": "'x' is not defined."},
    {"line": 7, "character": 1, "reason": "Unreachable 'return'."},
]


def _render(
    workspace: MemoryWorkspace,
    payload: list[dict[str, object]],
) -> tuple[EditorRegistry, MemoryEditor, DiagnosticGroups]:
    registry = EditorRegistry()
    editor = workspace.open("\n" * 10)
    groups = aggregate(payload)
    registry.replace_groups(editor.id, groups)
    result = MarkerStore(registry).reconcile(editor, groups)
    Presenter(registry).render(editor, groups, created=result.created)
    return registry, editor, groups


def test_build_tooltip_lists_reasons_in_column_order() -> None:
    groups = aggregate(PAYLOAD)

    assert build_tooltip([groups[2]]) == (
        "<div class=\"jshint-errors\">4: 'x' is not defined.<br />9: Missing semicolon.</div>"
    )


def test_build_tooltip_escapes_markup() -> None:
    groups = aggregate([{"line": 1, "character": 2, "reason": "Unexpected '<' in \"a<b>\"."}])

    assert "&lt;" in build_tooltip(groups.values())
    assert "<b>" not in build_tooltip(groups.values())


def test_render_sets_one_tooltip_per_row(workspace: MemoryWorkspace) -> None:
    _, editor, _ = _render(workspace, PAYLOAD)

    assert sorted(editor.gutter.tooltips) == [2, 6]
    tooltip = editor.gutter.tooltips[2]
    assert tooltip.placement == TOOLTIP_PLACEMENT
    assert tooltip.show_delay_ms == TOOLTIP_SHOW_DELAY_MS
    assert "Missing semicolon." in tooltip.title


def test_render_decorates_new_markers_with_line_and_gutter_classes(workspace: MemoryWorkspace) -> None:
    _, editor, _ = _render(workspace, PAYLOAD)

    for marker in editor.live_markers():
        assert marker.decorations == [dict(LINE_DECORATION), dict(GUTTER_DECORATION)]


def test_render_again_does_not_duplicate_decorations(workspace: MemoryWorkspace) -> None:
    registry, editor, groups = _render(workspace, PAYLOAD)
    result = MarkerStore(registry).reconcile(editor, groups)

    Presenter(registry).render(editor, groups, created=result.created)

    assert all(len(marker.decorations) == 2 for marker in editor.live_markers())
    assert sorted(editor.gutter.tooltips) == [2, 6]


def test_configuration_errors_share_the_first_row_tooltip(workspace: MemoryWorkspace) -> None:
    _, editor, _ = _render(
        workspace,
        [
            {"line": 0, "character": 0, "reason": "Bad option: 'foo'."},
            {"line": 1, "character": 5, "reason": "Missing semicolon."},
        ],
    )

    assert list(editor.gutter.tooltips) == [0]
    assert editor.gutter.tooltip_at(0) == (
        "<div class=\"jshint-errors\">0: Bad option: 'foo'.<br />5: Missing semicolon.</div>"
    )


def test_configuration_error_does_not_double_decorate_the_first_row(workspace: MemoryWorkspace) -> None:
    _, editor, _ = _render(
        workspace,
        [
            {"line": 0, "character": 0, "reason": "Bad option: 'foo'."},
            {"line": 1, "character": 5, "reason": "Missing semicolon."},
        ],
    )

    [marker] = editor.live_markers()
    assert marker.decorations == [dict(LINE_DECORATION), dict(GUTTER_DECORATION)]


def test_tooltip_is_removed_when_its_marker_moves(workspace: MemoryWorkspace) -> None:
    registry, editor, _ = _render(workspace, PAYLOAD)

    registry.markers_for(editor.id)[2].move(((3, 0), (3, 1)))

    assert editor.gutter.tooltip_at(2) is None
    assert editor.gutter.tooltip_at(6) is not None


def test_tooltip_is_removed_when_its_marker_is_destroyed(workspace: MemoryWorkspace) -> None:
    registry, editor, _ = _render(workspace, PAYLOAD)

    registry.markers_for(editor.id)[6].destroy()

    assert editor.gutter.tooltip_at(6) is None


def test_status_text_prefers_the_cursor_row() -> None:
    groups = aggregate(PAYLOAD)

    assert status_text(groups, 6, "JSHint") == "JSHint 7:1 Unreachable 'return'."


def test_status_text_falls_back_to_the_first_row() -> None:
    groups = aggregate(PAYLOAD)

    assert status_text(groups, 0, "JSHint") == "JSHint 3:4 'x' is not defined."
    assert status_text({}, 0, "JSHint") is None


def test_status_summary_keeps_a_single_element(workspace: MemoryWorkspace) -> None:
    registry, editor, _ = _render(workspace, PAYLOAD)
    summary = StatusSummary(workspace, registry, lambda: "Lint")
    assert workspace.status_bar is not None

    summary.update()
    editor.cursor_row = 6
    summary.update()

    assert workspace.status_bar.texts(STATUS_ELEMENT_ID) == ["Lint 7:1 Unreachable 'return'."]


def test_status_summary_clears_without_diagnostics(workspace: MemoryWorkspace) -> None:
    registry, editor, _ = _render(workspace, PAYLOAD)
    summary = StatusSummary(workspace, registry, lambda: "JSHint")
    summary.update()
    assert workspace.status_bar is not None

    registry.replace_groups(editor.id, {})

    assert summary.update() is None
    assert workspace.status_bar.texts(STATUS_ELEMENT_ID) == []


def test_status_summary_without_status_bar_is_a_no_op() -> None:
    workspace = MemoryWorkspace(status_bar=None)
    workspace.open("x")

    assert StatusSummary(workspace, EditorRegistry(), lambda: "JSHint").update() is None
