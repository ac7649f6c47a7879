# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Lint pass orchestration: resolve, lint, aggregate, reconcile, render."""

from __future__ import annotations

import logging
from typing import Final

from .config.linter import LinterConfig
from .config.resolver import ConfigResolver
from .config.settings import PluginSettings
from .diagnostics import aggregate, count_diagnostics
from .engine.base import EngineCatalog
from .errors import ConfigError, EngineError
from .host.interfaces import Editor, Workspace
from .markers import MarkerStore
from .models import LintOutcome, LintStatus
from .presentation import Presenter, StatusSummary
from .state import EditorRegistry

LOGGER = logging.getLogger(__name__)

SUPPORTED_GRAMMARS: Final[frozenset[str]] = frozenset({"JavaScript", "JavaScript (JSX)"})


class Linter:
    """Run lint passes against editors of a workspace.

    A pass either skips (no editor, unsupported grammar), fails (configuration
    or engine error, prior markers left in place) or replaces the editor's
    error state and brings markers, tooltips and the status bar in line.
    """

    def __init__(
        self,
        workspace: Workspace,
        *,
        registry: EditorRegistry,
        resolver: ConfigResolver,
        engines: EngineCatalog,
    ) -> None:
        """Initialise the orchestrator.

        Args:
            workspace: Host workspace supplying editors and settings.
            registry: Per-editor state shared with the event wiring.
            resolver: Configuration resolver for files on disk.
            engines: Engine per :class:`~editorlint.config.EngineVariant`.
        """

        self._workspace = workspace
        self._registry = registry
        self._resolver = resolver
        self._engines = engines
        self.markers = MarkerStore(registry)
        self.presenter = Presenter(registry)
        self.status = StatusSummary(workspace, registry, self._tool_name)

    @property
    def registry(self) -> EditorRegistry:
        return self._registry

    def settings(self) -> PluginSettings:
        """Return the plugin settings currently stored in the host."""

        return PluginSettings.from_store(self._workspace.settings)

    def lint(self, editor: Editor | None = None) -> LintOutcome:
        """Run one lint pass.

        Args:
            editor: Editor to lint; defaults to the active editor.

        Returns:
            LintOutcome: Terminal state of the pass.
        """

        target = editor if editor is not None else self._workspace.get_active_editor()
        if target is None:
            LOGGER.debug("no active editor; skipping lint pass")
            return LintOutcome(status=LintStatus.SKIPPED)
        grammar = target.get_grammar_name()
        if grammar not in SUPPORTED_GRAMMARS:
            LOGGER.debug("editor %s uses grammar %r; skipping lint pass", target.id, grammar)
            return LintOutcome(status=LintStatus.SKIPPED, editor_id=target.id)

        settings = self.settings()
        path = target.get_path()
        try:
            config = self._resolver.resolve(path) if path is not None else LinterConfig()
            engine = self._engines.select(settings.engine_variant)
            diagnostics = engine.lint(target.get_text(), config)
        except (ConfigError, EngineError) as exc:
            LOGGER.warning("lint pass for editor %s (%s) failed: %s", target.id, path or "<unsaved>", exc)
            return LintOutcome(status=LintStatus.FAILED, editor_id=target.id, error=str(exc))

        groups = aggregate(diagnostics)
        self._registry.replace_groups(target.id, groups)
        result = self.markers.reconcile(target, groups)
        self.presenter.render(target, groups, created=result.created)
        self.status.update()
        return LintOutcome(
            status=LintStatus.LINTED,
            editor_id=target.id,
            rows=tuple(groups),
            diagnostic_count=count_diagnostics(groups),
        )

    def _tool_name(self) -> str:
        return self.settings().tool_name


__all__ = ["SUPPORTED_GRAMMARS", "Linter"]
