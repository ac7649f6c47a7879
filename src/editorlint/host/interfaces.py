# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Host editor surface consumed by the lint integration."""

# pylint: disable=too-few-public-methods -- Protocol definitions intentionally expose minimal method surfaces.

from __future__ import annotations

from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any, Protocol, TypeAlias, runtime_checkable

from ..runtime.scheduling import Scheduler
from ..runtime.subscriptions import Disposable

BufferPoint: TypeAlias = tuple[int, int]
BufferRange: TypeAlias = tuple[BufferPoint, BufferPoint]
Decoration: TypeAlias = Mapping[str, str]


@runtime_checkable
class Marker(Protocol):
    """Host-owned anchor bound to a buffer range."""

    def destroy(self) -> None:
        """Remove the marker and every decoration attached to it."""

        raise NotImplementedError

    def is_destroyed(self) -> bool:
        """Return whether :meth:`destroy` has run."""

        raise NotImplementedError

    def on_did_change(self, callback: Callable[[], None]) -> Disposable:
        """Invoke ``callback`` whenever the marker's range moves."""

        raise NotImplementedError

    def on_did_destroy(self, callback: Callable[[], None]) -> Disposable:
        """Invoke ``callback`` once the marker is destroyed."""

        raise NotImplementedError


@runtime_checkable
class Gutter(Protocol):
    """Line-number gutter able to show a tooltip per row."""

    def set_tooltip(self, row: int, title: str, *, placement: str, show_delay_ms: int) -> None:
        """Bind a tooltip with HTML body ``title`` to gutter ``row``."""

        raise NotImplementedError

    def destroy_tooltip(self, row: int) -> None:
        """Remove the tooltip bound to ``row``, if any."""

        raise NotImplementedError

    def tooltip_at(self, row: int) -> str | None:
        """Return the tooltip body bound to ``row``."""

        raise NotImplementedError


@runtime_checkable
class StatusBar(Protocol):
    """Status bar accepting small text elements on its left side."""

    def append_left(self, element_id: str, text: str) -> None:
        """Insert a text element identified by ``element_id``."""

        raise NotImplementedError

    def remove(self, element_id: str) -> None:
        """Remove every element identified by ``element_id``."""

        raise NotImplementedError


@runtime_checkable
class Buffer(Protocol):
    """Text buffer behind an editor."""

    def on_did_save(self, callback: Callable[[], None]) -> Disposable:
        """Invoke ``callback`` after the buffer is written to disk."""

        raise NotImplementedError

    def on_did_stop_changing(self, callback: Callable[[], None]) -> Disposable:
        """Invoke ``callback`` after the buffer contents are modified."""

        raise NotImplementedError


@runtime_checkable
class Editor(Protocol):
    """Text editor hosting one buffer."""

    @property
    def id(self) -> int:
        """Return the identity value of the editor."""

        raise NotImplementedError

    @property
    def gutter(self) -> Gutter:
        """Return the editor's line-number gutter."""

        raise NotImplementedError

    def get_text(self) -> str:
        """Return the full buffer contents."""

        raise NotImplementedError

    def get_path(self) -> Path | None:
        """Return the backing file path, ``None`` for unsaved buffers."""

        raise NotImplementedError

    def get_grammar_name(self) -> str:
        """Return the display name of the active grammar."""

        raise NotImplementedError

    def get_cursor_row(self) -> int:
        """Return the 0-based row of the primary cursor."""

        raise NotImplementedError

    def get_buffer(self) -> Buffer:
        """Return the underlying text buffer."""

        raise NotImplementedError

    def mark_buffer_range(self, buffer_range: BufferRange) -> Marker:
        """Create a marker covering ``buffer_range``."""

        raise NotImplementedError

    def decorate_marker(self, marker: Marker, decoration: Decoration) -> None:
        """Attach a decoration such as a line class to ``marker``."""

        raise NotImplementedError

    def on_did_change_scroll_top(self, callback: Callable[[], None]) -> Disposable:
        """Invoke ``callback`` when the viewport scrolls vertically."""

        raise NotImplementedError


@runtime_checkable
class SettingsStore(Protocol):
    """Global host configuration."""

    def get(self, key: str) -> Any:
        """Return the value stored under ``key`` or ``None``."""

        raise NotImplementedError

    def set(self, key: str, value: Any) -> None:
        """Store ``value`` under ``key`` and notify observers."""

        raise NotImplementedError

    def observe(self, key: str, callback: Callable[[Any], None]) -> Disposable:
        """Invoke ``callback`` with the current value and after every change."""

        raise NotImplementedError


@runtime_checkable
class Workspace(Protocol):
    """Top-level host surface."""

    @property
    def settings(self) -> SettingsStore:
        """Return the global settings store."""

        raise NotImplementedError

    @property
    def scheduler(self) -> Scheduler:
        """Return the timer source of the host event loop."""

        raise NotImplementedError

    @property
    def status_bar(self) -> StatusBar | None:
        """Return the status bar, ``None`` when the host has none."""

        raise NotImplementedError

    def get_active_editor(self) -> Editor | None:
        """Return the focused editor."""

        raise NotImplementedError

    def get_editors(self) -> list[Editor]:
        """Return every open editor."""

        raise NotImplementedError

    def observe_editors(self, callback: Callable[[Editor], None]) -> Disposable:
        """Invoke ``callback`` for every open editor and every editor opened later."""

        raise NotImplementedError

    def on_did_remove_editor(self, callback: Callable[[Editor], None]) -> Disposable:
        """Invoke ``callback`` when an editor is about to close."""

        raise NotImplementedError

    def on_did_change_active_editor(self, callback: Callable[[Editor | None], None]) -> Disposable:
        """Invoke ``callback`` with the newly focused editor, ``None`` when none is left."""

        raise NotImplementedError

    def on_did_change_cursor_position(self, callback: Callable[[Editor], None]) -> Disposable:
        """Invoke ``callback`` whenever a cursor moves in any editor."""

        raise NotImplementedError

    def add_command(self, name: str, callback: Callable[[], None]) -> Disposable:
        """Register a user-invocable command."""

        raise NotImplementedError


__all__ = [
    "Buffer",
    "BufferPoint",
    "BufferRange",
    "Decoration",
    "Editor",
    "Gutter",
    "Marker",
    "SettingsStore",
    "StatusBar",
    "Workspace",
]
