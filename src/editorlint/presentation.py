# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Render diagnostic groups as marker decorations, gutter tooltips and status text."""

from __future__ import annotations

import html
from collections.abc import Callable, Iterable, Sequence
from typing import Final

from .diagnostics import first_group
from .host.interfaces import Decoration, Editor, Workspace
from .models import DiagnosticGroups, LineDiagnosticGroup
from .runtime.subscriptions import SubscriptionScope
from .state import EditorRegistry

LINE_DECORATION: Final[Decoration] = {"type": "line", "class": "jshint-line"}
GUTTER_DECORATION: Final[Decoration] = {"type": "gutter", "class": "jshint-line-number"}
TOOLTIP_CLASS: Final[str] = "jshint-errors"
TOOLTIP_PLACEMENT: Final[str] = "bottom"
TOOLTIP_SHOW_DELAY_MS: Final[int] = 200
TOOLTIP_LINE_BREAK: Final[str] = "<br />"
STATUS_ELEMENT_ID: Final[str] = "jshint-statusbar"


def build_tooltip(groups: Iterable[LineDiagnosticGroup]) -> str:
    """Return the HTML tooltip body listing every diagnostic of ``groups``.

    Args:
        groups: Groups sharing one gutter row, in row order.

    Returns:
        str: ``<div>`` holding one escaped ``"<character>: <reason>"`` per line.
    """

    lines = [html.escape(line, quote=False) for group in groups for line in group.reasons()]
    return f'<div class="{TOOLTIP_CLASS}">{TOOLTIP_LINE_BREAK.join(lines)}</div>'


def status_text(groups: DiagnosticGroups, cursor_row: int, tool_name: str) -> str | None:
    """Return the status summary for ``cursor_row``.

    The group on the cursor row wins; otherwise the group on the lowest row
    is used.

    Args:
        groups: Diagnostic groups of the editor.
        cursor_row: 0-based row of the primary cursor.
        tool_name: Prefix naming the linter.

    Returns:
        str | None: ``"<tool> <line>:<character> <reason>"`` or ``None`` when
        the editor has no diagnostics.
    """

    group = groups.get(cursor_row) or first_group(groups)
    if group is None:
        return None
    diagnostic = group.first
    return f"{tool_name} {diagnostic.line}:{diagnostic.character} {diagnostic.reason}"


def _groups_by_anchor(groups: DiagnosticGroups) -> dict[int, list[LineDiagnosticGroup]]:
    anchored: dict[int, list[LineDiagnosticGroup]] = {}
    for row in sorted(groups):
        group = groups[row]
        anchored.setdefault(group.anchor_row, []).append(group)
    return anchored


class Presenter:
    """Decorate markers and keep one tooltip per diagnosed gutter row."""

    def __init__(self, registry: EditorRegistry) -> None:
        self._registry = registry

    def render(self, editor: Editor | None, groups: DiagnosticGroups, *, created: Sequence[int] = ()) -> None:
        """Decorate new markers and refresh every tooltip of ``editor``.

        Args:
            editor: Editor being rendered; ``None`` makes this a no-op.
            groups: Diagnostic groups of the latest lint pass.
            created: Rows whose markers were just created and need decorations.
        """

        if editor is None:
            return
        state = self._registry.ensure(editor.id)
        for row in created:
            marker = state.markers.get(row)
            if marker is None:
                continue
            editor.decorate_marker(marker, LINE_DECORATION)
            editor.decorate_marker(marker, GUTTER_DECORATION)

        gutter = editor.gutter
        for anchor, anchored in _groups_by_anchor(groups).items():
            gutter.destroy_tooltip(anchor)
            gutter.set_tooltip(
                anchor,
                build_tooltip(anchored),
                placement=TOOLTIP_PLACEMENT,
                show_delay_ms=TOOLTIP_SHOW_DELAY_MS,
            )
            self._bind_tooltip_lifecycle(editor, anchor)

    def _bind_tooltip_lifecycle(self, editor: Editor, anchor: int) -> None:
        """Remove the tooltip at ``anchor`` once its marker moves or dies."""

        state = self._registry.ensure(editor.id)
        marker = state.markers.get(anchor)
        if marker is None:
            return
        previous = state.marker_hooks.pop(anchor, None)
        if previous is not None:
            previous.dispose()
        gutter = editor.gutter
        hooks = SubscriptionScope(label=f"tooltip-{editor.id}-{anchor}")
        hooks.add(marker.on_did_change(lambda: gutter.destroy_tooltip(anchor)))
        hooks.add(marker.on_did_destroy(lambda: gutter.destroy_tooltip(anchor)))
        state.marker_hooks[anchor] = hooks


class StatusSummary:
    """Maintain the single status bar element describing the active editor."""

    def __init__(self, workspace: Workspace, registry: EditorRegistry, tool_name: Callable[[], str]) -> None:
        """Initialise the summary.

        Args:
            workspace: Host workspace providing the status bar and active editor.
            registry: Source of per-editor diagnostic groups.
            tool_name: Callable returning the prefix shown before each message.
        """

        self._workspace = workspace
        self._registry = registry
        self._tool_name = tool_name

    def update(self, editor: Editor | None = None) -> str | None:
        """Recompute the summary for ``editor`` or the active editor.

        Args:
            editor: Editor to describe; defaults to the active editor.

        Returns:
            str | None: Text now shown, ``None`` when the summary was cleared.
        """

        status_bar = self._workspace.status_bar
        if status_bar is None:
            return None
        status_bar.remove(STATUS_ELEMENT_ID)
        target = editor if editor is not None else self._workspace.get_active_editor()
        if target is None:
            return None
        text = status_text(self._registry.groups_for(target.id), target.get_cursor_row(), self._tool_name())
        if text is not None:
            status_bar.append_left(STATUS_ELEMENT_ID, text)
        return text

    def clear(self) -> None:
        """Remove the summary element."""

        status_bar = self._workspace.status_bar
        if status_bar is not None:
            status_bar.remove(STATUS_ELEMENT_ID)


__all__ = [
    "GUTTER_DECORATION",
    "LINE_DECORATION",
    "STATUS_ELEMENT_ID",
    "TOOLTIP_PLACEMENT",
    "TOOLTIP_SHOW_DELAY_MS",
    "Presenter",
    "StatusSummary",
    "build_tooltip",
    "status_text",
]
