# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Exception hierarchy shared by the lint pass and its collaborators."""

from __future__ import annotations

from pathlib import Path


class EditorLintError(RuntimeError):
    """Base class for failures that abort a single lint pass."""


class ConfigError(EditorLintError):
    """Raised when linter configuration cannot be resolved for a file."""

    def __init__(self, message: str, *, path: Path | None = None) -> None:
        """Initialise the error with a message and the offending file.

        Args:
            message: Human-readable description of the failure.
            path: Configuration file that triggered the failure, when known.
        """

        super().__init__(message if path is None else f"{path}: {message}")
        self.path = path


class EngineError(EditorLintError):
    """Raised when the lint engine cannot produce diagnostics."""

    def __init__(self, message: str, *, stderr: str | None = None) -> None:
        """Initialise the error with a message and captured engine output.

        Args:
            message: Human-readable description of the failure.
            stderr: Diagnostic output emitted by the engine process.
        """

        super().__init__(message)
        self.stderr = stderr


__all__ = ["ConfigError", "EditorLintError", "EngineError"]
