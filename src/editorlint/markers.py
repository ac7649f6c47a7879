# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Reconcile host markers with the diagnostic groups of a lint pass."""

from __future__ import annotations

import logging

from .host.interfaces import Editor
from .models import DiagnosticGroups, ReconcileResult
from .state import EditorRegistry

LOGGER = logging.getLogger(__name__)


class MarkerStore:
    """Keep exactly one live marker per diagnosed row of each editor."""

    def __init__(self, registry: EditorRegistry) -> None:
        self._registry = registry

    def reconcile(self, editor: Editor | None, groups: DiagnosticGroups) -> ReconcileResult:
        """Destroy markers on rows without diagnostics and add missing ones.

        Markers are keyed by anchor row, so configuration errors share the
        first row's marker. Markers already present on a diagnosed row are
        left untouched, so a second call with the same groups creates and
        destroys nothing.

        Args:
            editor: Editor owning the markers; ``None`` makes this a no-op.
            groups: Diagnostic groups of the most recent lint pass.

        Returns:
            ReconcileResult: Anchor rows whose markers were created, destroyed or kept.
        """

        if editor is None:
            return ReconcileResult()
        state = self._registry.ensure(editor.id)
        anchors = sorted({group.anchor_row for group in groups.values()})

        destroyed = sorted(row for row in state.markers if row not in anchors)
        for row in destroyed:
            state.drop_marker(row)

        created: list[int] = []
        kept: list[int] = []
        for anchor in anchors:
            existing = state.markers.get(anchor)
            if existing is not None and not existing.is_destroyed():
                kept.append(anchor)
                continue
            if existing is not None:
                # destroyed by the host behind our back
                state.drop_marker(anchor)
            state.markers[anchor] = editor.mark_buffer_range(((anchor, 0), (anchor, 1)))
            created.append(anchor)

        if created or destroyed:
            LOGGER.debug(
                "editor %s markers: +%d -%d (=%d)",
                editor.id,
                len(created),
                len(destroyed),
                len(kept),
            )
        return ReconcileResult(created=tuple(created), destroyed=tuple(destroyed), kept=tuple(kept))

    def forget(self, editor_id: int) -> None:
        """Destroy every marker of ``editor_id`` and drop its state."""

        self._registry.on_editor_closed(editor_id)

    def rows(self, editor_id: int) -> set[int]:
        """Return the anchor rows currently holding a marker for ``editor_id``."""

        return set(self._registry.markers_for(editor_id))


__all__ = ["MarkerStore"]
