# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Plugin entry point wiring host events to lint passes."""

from __future__ import annotations

import logging
from typing import Any, Final

from .config.resolver import ConfigResolver, JshintrcConfigResolver
from .config.settings import CONFIG_DEFAULTS, SAVE_ONLY_KEY, setting_key
from .engine.base import EngineCatalog
from .engine.node import build_node_catalog
from .host.interfaces import Editor, Workspace
from .linter import Linter
from .models import LintOutcome
from .runtime.debounce import Debouncer
from .runtime.subscriptions import SubscriptionScope
from .state import EditorRegistry

LOGGER = logging.getLogger(__name__)

LINT_COMMAND: Final[str] = "jshint:lint"
CONTENT_DEBOUNCE_SECONDS: Final[float] = 0.05
VIEWPORT_DEBOUNCE_SECONDS: Final[float] = 0.2


class JshintPlugin:
    """Keep every open JavaScript editor linted as the user works.

    ``activate`` lints the active editor, then listens for saves, content
    changes and scrolling on every editor. Each editor owns a subscription
    scope that is cancelled before listeners are attached again, so toggling
    ``validateOnlyOnSave`` never leaves duplicate handlers behind.
    """

    def __init__(
        self,
        workspace: Workspace,
        *,
        resolver: ConfigResolver | None = None,
        engines: EngineCatalog | None = None,
        registry: EditorRegistry | None = None,
    ) -> None:
        """Initialise the plugin without touching the host.

        Args:
            workspace: Host workspace to integrate with.
            resolver: Configuration resolver; defaults to ``.jshintrc`` discovery.
            engines: Engines per variant; defaults to Node-backed JSHint.
            registry: Per-editor state store; a fresh one by default.
        """

        self.workspace = workspace
        self.registry = registry if registry is not None else EditorRegistry()
        self.linter = Linter(
            workspace,
            registry=self.registry,
            resolver=resolver if resolver is not None else JshintrcConfigResolver(),
            engines=engines if engines is not None else build_node_catalog(),
        )
        self._scope = SubscriptionScope(label="plugin")
        self._save_only: bool | None = None
        self._active = False
        self._observing = False

    @property
    def active(self) -> bool:
        return self._active

    @property
    def save_only(self) -> bool:
        """Return whether listeners currently react to saves only."""

        return bool(self._save_only)

    def activate(self) -> None:
        """Lint the active editor and start listening to host events."""

        if self._active:
            return
        self._active = True
        self._seed_defaults()
        self._scope = SubscriptionScope(label="plugin")
        self._save_only = bool(self.workspace.settings.get(SAVE_ONLY_KEY))

        self.linter.lint()

        self._scope.add(self.workspace.observe_editors(self._on_editor_observed))
        self._observing = True
        self._scope.add(self.workspace.on_did_remove_editor(self._on_editor_removed))
        self._scope.add(self.workspace.on_did_change_cursor_position(self._on_cursor_moved))
        self._scope.add(self.workspace.on_did_change_active_editor(self._on_active_editor_changed))
        self._scope.add(self.workspace.settings.observe(SAVE_ONLY_KEY, self._on_save_only_changed))
        self._scope.add(self.workspace.add_command(LINT_COMMAND, self.lint))
        LOGGER.debug("plugin activated (save-only=%s)", self._save_only)

    def deactivate(self) -> None:
        """Stop listening and remove every marker, tooltip and status element."""

        if not self._active:
            return
        self._active = False
        self._observing = False
        self._scope.dispose()
        self.registry.clear()
        self.linter.status.clear()
        LOGGER.debug("plugin deactivated")

    def lint(self) -> LintOutcome:
        """Lint the active editor; bound to the ``jshint:lint`` command."""

        return self.linter.lint()

    def wire(self, editor: Editor) -> Debouncer:
        """Replace every listener of ``editor`` according to the current mode.

        Args:
            editor: Editor whose buffer and viewport events should trigger lints.

        Returns:
            Debouncer: The editor's content-change debouncer.
        """

        state = self.registry.ensure(editor.id)
        scope = state.reset_scope()
        scheduler = self.workspace.scheduler

        content = scope.add(Debouncer(scheduler, CONTENT_DEBOUNCE_SECONDS, lambda: self.linter.lint(editor)))
        buffer = editor.get_buffer()
        scope.add(buffer.on_did_save(content))
        if self.save_only:
            return content
        scope.add(buffer.on_did_stop_changing(content))
        # TODO: trigger on a viewport-settled event once the host exposes one.
        viewport = scope.add(Debouncer(scheduler, VIEWPORT_DEBOUNCE_SECONDS, lambda: self.linter.lint(editor)))
        scope.add(editor.on_did_change_scroll_top(viewport))
        return content

    def rewire(self) -> None:
        """Re-attach listeners on every open editor."""

        for editor in self.workspace.get_editors():
            self.wire(editor)

    def _seed_defaults(self) -> None:
        settings = self.workspace.settings
        for name, default in CONFIG_DEFAULTS.items():
            key = setting_key(name)
            if settings.get(key) is None:
                settings.set(key, default)

    def _on_editor_observed(self, editor: Editor) -> None:
        known = editor.id in self.registry
        self.registry.on_editor_opened(editor.id)
        content = self.wire(editor)
        if self._observing and not known:
            # editors opened after activation get a first pass once they settle
            content()

    def _on_editor_removed(self, editor: Editor) -> None:
        self.linter.markers.forget(editor.id)

    def _on_active_editor_changed(self, editor: Editor | None) -> None:
        self.linter.status.update(editor)

    def _on_cursor_moved(self, editor: Editor) -> None:
        active = self.workspace.get_active_editor()
        if active is not None and active.id == editor.id:
            self.linter.status.update(active)

    def _on_save_only_changed(self, value: Any) -> None:
        save_only = bool(value)
        if save_only == self._save_only:
            return
        self._save_only = save_only
        LOGGER.debug("validateOnlyOnSave changed to %s; rewiring editors", save_only)
        self.rewire()


__all__ = [
    "CONTENT_DEBOUNCE_SECONDS",
    "LINT_COMMAND",
    "VIEWPORT_DEBOUNCE_SECONDS",
    "JshintPlugin",
]
