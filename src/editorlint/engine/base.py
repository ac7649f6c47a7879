# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Engine protocol and per-variant engine selection."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from ..config.linter import LinterConfig
from ..config.settings import EngineVariant
from ..models import Diagnostic


@runtime_checkable
class LintEngine(Protocol):
    """Pure lint function: source text and configuration in, diagnostics out."""

    def lint(self, text: str, config: LinterConfig) -> list[Diagnostic]:
        """Return the diagnostics reported for ``text``.

        Implementations raise :class:`editorlint.errors.EngineError` when the
        engine cannot be invoked.
        """

        raise NotImplementedError


@dataclass(frozen=True, slots=True)
class EngineCatalog:
    """Bind each :class:`EngineVariant` to the engine that serves it."""

    standard: LintEngine
    jsx_aware: LintEngine

    def select(self, variant: EngineVariant) -> LintEngine:
        """Return the engine registered for ``variant``.

        Args:
            variant: Engine flavour chosen from the plugin settings.

        Returns:
            LintEngine: Engine used for the current lint pass.
        """

        if variant is EngineVariant.JSX_AWARE:
            return self.jsx_aware
        return self.standard

    @classmethod
    def single(cls, engine: LintEngine) -> EngineCatalog:
        """Return a catalog serving every variant with ``engine``."""

        return cls(standard=engine, jsx_aware=engine)


__all__ = ["EngineCatalog", "LintEngine"]
