# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Per-editor error and marker state with explicit lifecycle hooks."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass, field

from .host.interfaces import Marker
from .models import DiagnosticGroups
from .runtime.subscriptions import Disposable, SubscriptionScope

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class EditorState:
    """Everything the integration holds for one open editor.

    Attributes:
        editor_id: Identity of the owning editor.
        groups: Diagnostic groups from the most recent successful lint pass.
        markers: Live marker per anchor row; at most one per row.
        marker_hooks: Tooltip lifecycle subscriptions keyed by anchor row.
        scope: Event subscriptions and debouncers wired to the editor.
    """

    editor_id: int
    groups: DiagnosticGroups = field(default_factory=dict)
    markers: dict[int, Marker] = field(default_factory=dict)
    marker_hooks: dict[int, Disposable] = field(default_factory=dict)
    scope: SubscriptionScope = field(default_factory=SubscriptionScope)

    def reset_scope(self) -> SubscriptionScope:
        """Cancel every subscription of the editor and return a fresh scope.

        Returns:
            SubscriptionScope: Empty scope for the next set of listeners.
        """

        self.scope.dispose()
        self.scope = SubscriptionScope(label=f"editor-{self.editor_id}")
        return self.scope

    def drop_marker(self, row: int) -> None:
        """Destroy the marker at ``row`` and release its tooltip hooks."""

        marker = self.markers.pop(row, None)
        if marker is not None:
            marker.destroy()
        hooks = self.marker_hooks.pop(row, None)
        if hooks is not None:
            hooks.dispose()

    def release(self) -> None:
        """Destroy every marker and cancel every subscription."""

        for row in list(self.markers):
            self.drop_marker(row)
        for hooks in self.marker_hooks.values():
            hooks.dispose()
        self.marker_hooks.clear()
        self.scope.dispose()
        self.groups = {}


class EditorRegistry:
    """Own the :class:`EditorState` of every open editor, keyed by editor id."""

    def __init__(self) -> None:
        self._states: dict[int, EditorState] = {}

    def __contains__(self, editor_id: object) -> bool:
        return editor_id in self._states

    def __iter__(self) -> Iterator[EditorState]:
        return iter(list(self._states.values()))

    def on_editor_opened(self, editor_id: int) -> EditorState:
        """Return the state for a newly observed editor, creating it if needed.

        Args:
            editor_id: Identity of the opened editor.

        Returns:
            EditorState: State record owned by the registry.
        """

        state = self._states.get(editor_id)
        if state is None:
            state = EditorState(editor_id=editor_id)
            state.scope.label = f"editor-{editor_id}"
            self._states[editor_id] = state
            LOGGER.debug("tracking editor %s", editor_id)
        return state

    def on_editor_closed(self, editor_id: int) -> None:
        """Forget ``editor_id`` entirely, releasing its markers and listeners.

        Args:
            editor_id: Identity of the closing editor.
        """

        state = self._states.pop(editor_id, None)
        if state is None:
            return
        state.release()
        LOGGER.debug("released editor %s", editor_id)

    def ensure(self, editor_id: int) -> EditorState:
        """Alias of :meth:`on_editor_opened` for callers that only need state."""

        return self.on_editor_opened(editor_id)

    def state_for(self, editor_id: int) -> EditorState | None:
        return self._states.get(editor_id)

    def groups_for(self, editor_id: int) -> DiagnosticGroups:
        """Return a copy of the editor's diagnostic groups, empty when unknown."""

        state = self.state_for(editor_id)
        return dict(state.groups) if state is not None else {}

    def markers_for(self, editor_id: int) -> dict[int, Marker]:
        """Return a copy of the editor's anchor-row-to-marker map, empty when unknown."""

        state = self.state_for(editor_id)
        return dict(state.markers) if state is not None else {}

    def replace_groups(self, editor_id: int, groups: DiagnosticGroups) -> None:
        """Replace the editor's error state wholesale with ``groups``."""

        self.ensure(editor_id).groups = dict(groups)

    def editor_ids(self) -> list[int]:
        return list(self._states)

    def clear(self) -> None:
        """Release and forget every tracked editor."""

        for editor_id in list(self._states):
            self.on_editor_closed(editor_id)


__all__ = ["EditorRegistry", "EditorState"]
