# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Command line front-end running the editor integration headless."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Final

import typer

from .config.resolver import JshintrcConfigResolver
from .config.settings import DEFAULT_TOOL_NAME, setting_key
from .engine.base import EngineCatalog
from .engine.node import DEFAULT_NODE, DEFAULT_TIMEOUT, build_node_catalog
from .errors import ConfigError
from .host.memory import MemoryEditor, MemoryWorkspace
from .logging import fail, info, ok, section, warn
from .models import LintOutcome, LintStatus
from .plugin import JshintPlugin

EXIT_CLEAN: Final[int] = 0
EXIT_DIAGNOSTICS: Final[int] = 1
EXIT_FAILURE: Final[int] = 2

app = typer.Typer(help="Run JSHint through the editor integration.", add_completion=False, no_args_is_help=True)


class CLIError(RuntimeError):
    """Error raised when a CLI command fails and should exit with a status code."""

    def __init__(self, message: str, *, exit_code: int = EXIT_FAILURE) -> None:
        """Initialise the error with a message and exit code.

        Args:
            message: Human-readable error message shown to the user.
            exit_code: Exit status associated with the failure.
        """

        super().__init__(message)
        self.exit_code = exit_code


@dataclass(slots=True)
class CLILogger:
    """Adapter around the console helpers honouring colour and emoji flags."""

    use_color: bool
    use_emoji: bool

    def info(self, message: str) -> None:
        info(message, use_emoji=self.use_emoji, use_color=self.use_color)

    def ok(self, message: str) -> None:
        ok(message, use_emoji=self.use_emoji, use_color=self.use_color)

    def warn(self, message: str) -> None:
        warn(message, use_emoji=self.use_emoji, use_color=self.use_color)

    def fail(self, message: str) -> None:
        fail(message, use_emoji=self.use_emoji, use_color=self.use_color)

    def section(self, title: str) -> None:
        section(title, use_color=self.use_color)

    def echo(self, message: str) -> None:
        """Write ``message`` to stdout using Typer's echo helper."""

        typer.echo(message)


def build_engines(*, node: str, timeout: float | None) -> EngineCatalog:
    """Return the engines used by ``lint``; replaced in tests."""

    return build_node_catalog(node=node, timeout=timeout)


def _configure_debug(enabled: bool) -> None:
    if not enabled:
        return
    package_logger = logging.getLogger("editorlint")
    package_logger.setLevel(logging.DEBUG)
    if not package_logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
        package_logger.addHandler(handler)


def _open_editors(workspace: MemoryWorkspace, paths: list[Path]) -> list[MemoryEditor]:
    editors: list[MemoryEditor] = []
    for path in paths:
        try:
            editors.append(workspace.open_file(path))
        except (OSError, UnicodeDecodeError) as exc:
            raise CLIError(f"cannot read {path}: {exc}") from exc
    return editors


def _report(logger: CLILogger, plugin: JshintPlugin, editor: MemoryEditor, outcome: LintOutcome) -> None:
    label = str(editor.get_path())
    if outcome.status is LintStatus.SKIPPED:
        logger.warn(f"{label}: skipped ({editor.get_grammar_name()} is not linted)")
        return
    if outcome.status is LintStatus.FAILED:
        logger.fail(f"{label}: {outcome.error}")
        return
    if not outcome.has_diagnostics:
        logger.ok(f"{label}: clean")
        return
    logger.section(label)
    for group in plugin.registry.groups_for(editor.id).values():
        for diagnostic in group.diagnostics:
            code = f" ({diagnostic.code})" if diagnostic.code else ""
            logger.echo(f"{label}:{diagnostic.line}:{diagnostic.character} {diagnostic.reason}{code}")
    plugin.workspace.activate(editor)
    summary = plugin.linter.status.update(editor)
    if summary is not None:
        logger.info(summary)


@app.command("lint")
def lint_command(
    paths: list[Path] = typer.Argument(..., exists=True, dir_okay=False, help="JavaScript files to lint."),
    jsx: bool = typer.Option(False, "--jsx", help="Use the JSX-aware engine."),
    tool_name: str = typer.Option(DEFAULT_TOOL_NAME, "--tool-name", help="Prefix of the status summary."),
    node: str = typer.Option(DEFAULT_NODE, "--node", help="Node executable used to run JSHint."),
    timeout: float = typer.Option(DEFAULT_TIMEOUT, "--timeout", min=0.1, help="Seconds allowed per file."),
    no_color: bool = typer.Option(False, "--no-color", help="Disable ANSI colour output."),
    no_emoji: bool = typer.Option(False, "--no-emoji", help="Disable emoji output."),
    debug: bool = typer.Option(False, "--debug", help="Log lint passes to stderr."),
) -> None:
    """Lint files and print their diagnostics with the status summary."""

    _configure_debug(debug)
    logger = CLILogger(use_color=not no_color, use_emoji=not no_emoji)
    workspace = MemoryWorkspace()
    workspace.settings.set(setting_key("supportLintingJsx"), jsx)
    workspace.settings.set(setting_key("toolName"), tool_name)
    plugin = JshintPlugin(
        workspace,
        resolver=JshintrcConfigResolver(),
        engines=build_engines(node=node, timeout=timeout),
    )

    plugin.activate()
    exit_code = EXIT_CLEAN
    try:
        try:
            editors = _open_editors(workspace, paths)
        except CLIError as exc:
            logger.fail(str(exc))
            raise typer.Exit(code=exc.exit_code) from exc
        for editor in editors:
            outcome = plugin.linter.lint(editor)
            _report(logger, plugin, editor, outcome)
            if outcome.status is LintStatus.FAILED:
                exit_code = EXIT_FAILURE
            elif outcome.has_diagnostics and exit_code == EXIT_CLEAN:
                exit_code = EXIT_DIAGNOSTICS
    finally:
        plugin.deactivate()
    raise typer.Exit(code=exit_code)


@app.command("config")
def config_command(
    path: Path = typer.Argument(..., dir_okay=False, help="File whose JSHint configuration is resolved."),
) -> None:
    """Print the JSHint configuration that applies to PATH as JSON."""

    resolver = JshintrcConfigResolver()
    target = path.resolve()
    try:
        config = resolver.resolve(target)
    except ConfigError as exc:
        fail(str(exc), use_emoji=False, use_color=False)
        raise typer.Exit(code=EXIT_FAILURE) from exc
    located = resolver.locate(target)
    payload = {
        "source": str(located) if located is not None else None,
        "options": config.options,
        "globals": config.globals,
    }
    typer.echo(json.dumps(payload, indent=2, sort_keys=True))


__all__ = ["CLIError", "CLILogger", "app", "build_engines", "config_command", "lint_command"]
