# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Core data models shared across the editorlint package."""

from __future__ import annotations

from enum import Enum
from typing import Final, TypeAlias

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

CONFIG_ERROR_LINE: Final[int] = 0


class Diagnostic(BaseModel):
    """Describe one issue reported by the lint engine.

    ``line`` is 1-based. The engine reports ``line == 0`` for problems in the
    configuration itself rather than in the source text.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    line: int = Field(ge=0)
    character: int = 0
    reason: str
    code: str | None = None
    evidence: str | None = None

    @field_validator("line", "character", mode="before")
    @classmethod
    def _coerce_position(cls, value: object) -> object:
        """Treat a missing position as ``0``.

        Args:
            value: Raw position emitted by the engine.

        Returns:
            object: ``0`` for ``None`` values, otherwise the untouched input.
        """

        return 0 if value is None else value

    @property
    def row(self) -> int:
        """Return the 0-based buffer row, ``-1`` for configuration errors.

        Returns:
            int: Row index used to key markers and diagnostic groups.
        """

        return self.line - 1

    @property
    def is_config_error(self) -> bool:
        """Return whether the diagnostic refers to the configuration.

        Returns:
            bool: ``True`` when the engine reported ``line == 0``.
        """

        return self.line == CONFIG_ERROR_LINE

    def describe(self) -> str:
        """Return the ``"<character>: <reason>"`` line shown in tooltips.

        Returns:
            str: Column-prefixed reason text.
        """

        return f"{self.character}: {self.reason}"


class LineDiagnosticGroup(BaseModel):
    """Diagnostics sharing one row, ordered by ascending column."""

    model_config = ConfigDict(frozen=True)

    row: int = Field(ge=-1)
    diagnostics: tuple[Diagnostic, ...]

    @model_validator(mode="after")
    def _ensure_populated(self) -> LineDiagnosticGroup:
        """Reject empty groups and diagnostics filed under the wrong row.

        Returns:
            LineDiagnosticGroup: The validated group.

        Raises:
            ValueError: If the group is empty or mixes rows.
        """

        if not self.diagnostics:
            raise ValueError("a diagnostic group requires at least one diagnostic")
        if any(diagnostic.row != self.row for diagnostic in self.diagnostics):
            raise ValueError(f"diagnostics in group {self.row} must share the same row")
        return self

    @property
    def first(self) -> Diagnostic:
        """Return the left-most diagnostic on the row.

        Returns:
            Diagnostic: Diagnostic with the lowest column.
        """

        return self.diagnostics[0]

    @property
    def anchor_row(self) -> int:
        """Return the buffer row markers for this group attach to.

        Returns:
            int: ``row`` clamped to the first buffer row.
        """

        return max(self.row, 0)

    def reasons(self) -> list[str]:
        """Return tooltip lines for every diagnostic in column order.

        Returns:
            list[str]: ``"<character>: <reason>"`` entries.
        """

        return [diagnostic.describe() for diagnostic in self.diagnostics]


DiagnosticGroups: TypeAlias = dict[int, LineDiagnosticGroup]


class LintStatus(str, Enum):
    """Enumerate terminal states of a single lint pass."""

    SKIPPED = "skipped"
    LINTED = "linted"
    FAILED = "failed"


class LintOutcome(BaseModel):
    """Summarise what a lint pass did to one editor."""

    model_config = ConfigDict(frozen=True)

    status: LintStatus
    editor_id: int | None = None
    rows: tuple[int, ...] = Field(default_factory=tuple)
    diagnostic_count: int = 0
    error: str | None = None

    @property
    def has_diagnostics(self) -> bool:
        """Return whether the pass reported at least one diagnostic.

        Returns:
            bool: ``True`` when ``diagnostic_count`` is positive.
        """

        return self.diagnostic_count > 0


class ReconcileResult(BaseModel):
    """Rows touched while synchronising markers with diagnostic groups."""

    model_config = ConfigDict(frozen=True)

    created: tuple[int, ...] = Field(default_factory=tuple)
    destroyed: tuple[int, ...] = Field(default_factory=tuple)
    kept: tuple[int, ...] = Field(default_factory=tuple)

    @property
    def changed(self) -> bool:
        """Return whether any marker was created or destroyed.

        Returns:
            bool: ``True`` when reconciliation mutated host markers.
        """

        return bool(self.created or self.destroyed)


__all__ = [
    "CONFIG_ERROR_LINE",
    "Diagnostic",
    "DiagnosticGroups",
    "LineDiagnosticGroup",
    "LintOutcome",
    "LintStatus",
    "ReconcileResult",
]
