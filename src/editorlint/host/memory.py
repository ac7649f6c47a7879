# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""In-memory host editor used by the command line and the test-suite.

Every class here satisfies the matching protocol in
:mod:`editorlint.host.interfaces` using plain Python state, so the lint
integration can run headless.
"""

from __future__ import annotations

import itertools
from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Final, Generic, ParamSpec

from ..runtime.scheduling import ManualScheduler, Scheduler
from ..runtime.subscriptions import CallbackDisposable
from .interfaces import BufferRange, Decoration, Editor

DEFAULT_GRAMMAR: Final[str] = "JavaScript"

P = ParamSpec("P")


class Emitter(Generic[P]):
    """Minimal synchronous event emitter."""

    def __init__(self) -> None:
        self._handlers: list[Callable[P, None]] = []

    def __len__(self) -> int:
        return len(self._handlers)

    def subscribe(self, handler: Callable[P, None]) -> CallbackDisposable:
        """Register ``handler`` and return a disposable that unregisters it."""

        self._handlers.append(handler)
        return CallbackDisposable(lambda: self._unsubscribe(handler))

    def emit(self, *args: P.args, **kwargs: P.kwargs) -> None:
        """Invoke every handler registered at the time of the call."""

        for handler in list(self._handlers):
            handler(*args, **kwargs)

    def _unsubscribe(self, handler: Callable[P, None]) -> None:
        if handler in self._handlers:
            self._handlers.remove(handler)


class MemoryMarker:
    """Marker over a buffer range that records its decorations."""

    _ids = itertools.count(1)

    def __init__(self, buffer_range: BufferRange) -> None:
        self.id = next(self._ids)
        self.buffer_range = buffer_range
        self.decorations: list[Decoration] = []
        self._destroyed = False
        self._changed: Emitter[[]] = Emitter()
        self._destroyed_emitter: Emitter[[]] = Emitter()

    def __repr__(self) -> str:
        state = "destroyed" if self._destroyed else "live"
        return f"MemoryMarker(id={self.id}, range={self.buffer_range}, {state})"

    @property
    def start_row(self) -> int:
        return self.buffer_range[0][0]

    def destroy(self) -> None:
        if self._destroyed:
            return
        self._destroyed = True
        self._destroyed_emitter.emit()

    def is_destroyed(self) -> bool:
        return self._destroyed

    def move(self, buffer_range: BufferRange) -> None:
        """Move the marker, as the host does when text is inserted above it."""

        self.buffer_range = buffer_range
        self._changed.emit()

    def on_did_change(self, callback: Callable[[], None]) -> CallbackDisposable:
        return self._changed.subscribe(callback)

    def on_did_destroy(self, callback: Callable[[], None]) -> CallbackDisposable:
        return self._destroyed_emitter.subscribe(callback)


@dataclass(frozen=True, slots=True)
class MemoryTooltip:
    """Tooltip bound to a gutter row."""

    title: str
    placement: str
    show_delay_ms: int


class MemoryGutter:
    """Gutter holding at most one tooltip per row."""

    def __init__(self) -> None:
        self.tooltips: dict[int, MemoryTooltip] = {}

    def set_tooltip(self, row: int, title: str, *, placement: str, show_delay_ms: int) -> None:
        self.tooltips[row] = MemoryTooltip(title=title, placement=placement, show_delay_ms=show_delay_ms)

    def destroy_tooltip(self, row: int) -> None:
        self.tooltips.pop(row, None)

    def tooltip_at(self, row: int) -> str | None:
        tooltip = self.tooltips.get(row)
        return tooltip.title if tooltip is not None else None


class MemoryStatusBar:
    """Status bar recording its left-hand elements in insertion order."""

    def __init__(self) -> None:
        self.elements: list[tuple[str, str]] = []

    def append_left(self, element_id: str, text: str) -> None:
        self.elements.append((element_id, text))

    def remove(self, element_id: str) -> None:
        self.elements = [element for element in self.elements if element[0] != element_id]

    def texts(self, element_id: str) -> list[str]:
        """Return the text of every element carrying ``element_id``."""

        return [text for current, text in self.elements if current == element_id]


class MemoryBuffer:
    """Text buffer emitting save and change notifications."""

    def __init__(self, text: str = "") -> None:
        self.text = text
        self.saved: Emitter[[]] = Emitter()
        self.changed: Emitter[[]] = Emitter()

    def on_did_save(self, callback: Callable[[], None]) -> CallbackDisposable:
        return self.saved.subscribe(callback)

    def on_did_stop_changing(self, callback: Callable[[], None]) -> CallbackDisposable:
        return self.changed.subscribe(callback)


class MemoryEditor:
    """Editor bound to a :class:`MemoryWorkspace`."""

    def __init__(
        self,
        workspace: MemoryWorkspace,
        editor_id: int,
        text: str,
        *,
        path: Path | None = None,
        grammar: str = DEFAULT_GRAMMAR,
    ) -> None:
        self._workspace = workspace
        self._id = editor_id
        self._buffer = MemoryBuffer(text)
        self._gutter = MemoryGutter()
        self.path = path
        self.grammar = grammar
        self.cursor_row = 0
        self.scroll_top = 0
        self.markers: list[MemoryMarker] = []
        self.scrolled: Emitter[[]] = Emitter()

    def __repr__(self) -> str:
        return f"MemoryEditor(id={self._id}, path={self.path})"

    @property
    def id(self) -> int:
        return self._id

    @property
    def gutter(self) -> MemoryGutter:
        return self._gutter

    @property
    def buffer(self) -> MemoryBuffer:
        return self._buffer

    def get_text(self) -> str:
        return self._buffer.text

    def get_path(self) -> Path | None:
        return self.path

    def get_grammar_name(self) -> str:
        return self.grammar

    def get_cursor_row(self) -> int:
        return self.cursor_row

    def get_buffer(self) -> MemoryBuffer:
        return self._buffer

    def mark_buffer_range(self, buffer_range: BufferRange) -> MemoryMarker:
        marker = MemoryMarker(buffer_range)
        self.markers.append(marker)
        return marker

    def decorate_marker(self, marker: MemoryMarker, decoration: Decoration) -> None:
        marker.decorations.append(dict(decoration))

    def on_did_change_scroll_top(self, callback: Callable[[], None]) -> CallbackDisposable:
        return self.scrolled.subscribe(callback)

    def live_markers(self) -> list[MemoryMarker]:
        """Return markers that have not been destroyed."""

        return [marker for marker in self.markers if not marker.is_destroyed()]

    def set_text(self, text: str) -> None:
        """Replace the buffer contents and emit a change notification."""

        self._buffer.text = text
        self._buffer.changed.emit()

    def save(self) -> None:
        """Emit a save notification."""

        self._buffer.saved.emit()

    def scroll_to(self, top: int) -> None:
        """Scroll the viewport and emit a scroll notification on change."""

        if top != self.scroll_top:
            self.scroll_top = top
            self.scrolled.emit()

    def set_cursor_row(self, row: int) -> None:
        """Move the cursor and notify workspace cursor observers."""

        self.cursor_row = row
        self._workspace.cursor_moved.emit(self)


class MemorySettingsStore:
    """Key/value settings store with per-key observers."""

    def __init__(self, values: dict[str, Any] | None = None) -> None:
        self._values: dict[str, Any] = dict(values or {})
        self._observers: dict[str, Emitter[[Any]]] = {}

    def get(self, key: str) -> Any:
        return self._values.get(key)

    def set(self, key: str, value: Any) -> None:
        previous = self._values.get(key)
        self._values[key] = value
        if previous != value and key in self._observers:
            self._observers[key].emit(value)

    def observe(self, key: str, callback: Callable[[Any], None]) -> CallbackDisposable:
        disposable = self._observers.setdefault(key, Emitter()).subscribe(callback)
        callback(self._values.get(key))
        return disposable


@dataclass(slots=True)
class MemoryWorkspace:
    """Workspace of in-memory editors with a manual clock by default."""

    settings: MemorySettingsStore = field(default_factory=MemorySettingsStore)
    scheduler: Scheduler = field(default_factory=ManualScheduler)
    status_bar: MemoryStatusBar | None = field(default_factory=MemoryStatusBar)
    editors: list[MemoryEditor] = field(default_factory=list)
    active: MemoryEditor | None = None
    commands: dict[str, Callable[[], None]] = field(default_factory=dict)
    added: Emitter[[Editor]] = field(default_factory=Emitter)
    removed: Emitter[[Editor]] = field(default_factory=Emitter)
    cursor_moved: Emitter[[Editor]] = field(default_factory=Emitter)
    active_changed: Emitter[[Editor | None]] = field(default_factory=Emitter)
    _ids: Iterator[int] = field(default_factory=lambda: itertools.count(1))

    def open(
        self,
        text: str = "",
        *,
        path: Path | None = None,
        grammar: str = DEFAULT_GRAMMAR,
        editor_id: int | None = None,
        activate: bool = True,
    ) -> MemoryEditor:
        """Open a new editor and notify editor observers.

        Args:
            text: Initial buffer contents.
            path: Backing file path, ``None`` for an unsaved buffer.
            grammar: Grammar display name.
            editor_id: Explicit identity, e.g. to reuse a closed editor's id.
            activate: Whether the new editor becomes the active one.

        Returns:
            MemoryEditor: The opened editor.
        """

        identity = editor_id if editor_id is not None else next(self._ids)
        editor = MemoryEditor(self, identity, text, path=path, grammar=grammar)
        self.editors.append(editor)
        if activate:
            self._set_active(editor)
        self.added.emit(editor)
        return editor

    def open_file(self, path: Path, *, grammar: str | None = None) -> MemoryEditor:
        """Open ``path`` from disk, guessing the grammar from its suffix."""

        text = path.read_text(encoding="utf-8")
        return self.open(text, path=path.resolve(), grammar=grammar or grammar_for_path(path))

    def close(self, editor: MemoryEditor) -> None:
        """Notify removal observers, drop ``editor`` and focus the last remaining one."""

        self.removed.emit(editor)
        self.editors.remove(editor)
        if self.active is editor:
            self._set_active(self.editors[-1] if self.editors else None)

    def activate(self, editor: MemoryEditor | None) -> None:
        self._set_active(editor)

    def _set_active(self, editor: MemoryEditor | None) -> None:
        if editor is self.active:
            return
        self.active = editor
        self.active_changed.emit(editor)

    def get_active_editor(self) -> MemoryEditor | None:
        return self.active

    def get_editors(self) -> list[Editor]:
        return list(self.editors)

    def observe_editors(self, callback: Callable[[Editor], None]) -> CallbackDisposable:
        for editor in list(self.editors):
            callback(editor)
        return self.added.subscribe(callback)

    def on_did_remove_editor(self, callback: Callable[[Editor], None]) -> CallbackDisposable:
        return self.removed.subscribe(callback)

    def on_did_change_cursor_position(self, callback: Callable[[Editor], None]) -> CallbackDisposable:
        return self.cursor_moved.subscribe(callback)

    def on_did_change_active_editor(self, callback: Callable[[Editor | None], None]) -> CallbackDisposable:
        return self.active_changed.subscribe(callback)

    def add_command(self, name: str, callback: Callable[[], None]) -> CallbackDisposable:
        self.commands[name] = callback
        return CallbackDisposable(lambda: self._remove_command(name, callback))

    def dispatch(self, name: str) -> None:
        """Run the command registered under ``name``.

        Raises:
            KeyError: If no such command is registered.
        """

        self.commands[name]()

    def _remove_command(self, name: str, callback: Callable[[], None]) -> None:
        if self.commands.get(name) is callback:
            del self.commands[name]


_GRAMMARS_BY_SUFFIX: Final[dict[str, str]] = {
    ".js": "JavaScript",
    ".mjs": "JavaScript",
    ".cjs": "JavaScript",
    ".jsx": "JavaScript (JSX)",
}


def grammar_for_path(path: Path) -> str:
    """Return the grammar display name the host would pick for ``path``."""

    return _GRAMMARS_BY_SUFFIX.get(path.suffix.lower(), "Plain Text")


__all__ = [
    "DEFAULT_GRAMMAR",
    "Emitter",
    "MemoryBuffer",
    "MemoryEditor",
    "MemoryGutter",
    "MemoryMarker",
    "MemorySettingsStore",
    "MemoryStatusBar",
    "MemoryTooltip",
    "MemoryWorkspace",
    "grammar_for_path",
]
