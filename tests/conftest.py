# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, TypeAlias

import pytest

from editorlint.config.linter import LinterConfig
from editorlint.config.resolver import clear_config_cache
from editorlint.diagnostics import coerce_diagnostics
from editorlint.engine.base import EngineCatalog
from editorlint.errors import EditorLintError
from editorlint.host.memory import MemoryWorkspace
from editorlint.models import Diagnostic
from editorlint.plugin import JshintPlugin
from editorlint.runtime.scheduling import ManualScheduler

RawDiagnostic: TypeAlias = Mapping[str, Any] | None


@dataclass
class FakeEngine:
    """Engine returning canned diagnostics and recording every call."""

    results: list[RawDiagnostic] = field(default_factory=list)
    error: EditorLintError | None = None
    calls: list[tuple[str, LinterConfig]] = field(default_factory=list)

    def lint(self, text: str, config: LinterConfig) -> list[Diagnostic]:
        self.calls.append((text, config))
        if self.error is not None:
            raise self.error
        return coerce_diagnostics(self.results)


@dataclass
class StaticResolver:
    """Resolver returning one configuration for every path."""

    config: LinterConfig = field(default_factory=LinterConfig)
    error: EditorLintError | None = None
    paths: list[Path] = field(default_factory=list)

    def resolve(self, path: Path) -> LinterConfig:
        self.paths.append(path)
        if self.error is not None:
            raise self.error
        return self.config


@pytest.fixture(autouse=True)
def _fresh_config_cache() -> Iterator[None]:
    clear_config_cache()
    yield
    clear_config_cache()


@pytest.fixture
def workspace() -> MemoryWorkspace:
    return MemoryWorkspace()


@pytest.fixture
def scheduler(workspace: MemoryWorkspace) -> ManualScheduler:
    assert isinstance(workspace.scheduler, ManualScheduler)
    return workspace.scheduler


@pytest.fixture
def engine() -> FakeEngine:
    return FakeEngine()


@pytest.fixture
def make_engine() -> Callable[[], FakeEngine]:
    return FakeEngine


@pytest.fixture
def resolver() -> StaticResolver:
    return StaticResolver()


@pytest.fixture
def make_plugin(
    workspace: MemoryWorkspace,
    engine: FakeEngine,
    resolver: StaticResolver,
) -> Callable[..., JshintPlugin]:
    """Return a factory building plugins bound to the shared fakes."""

    def factory(*, engines: EngineCatalog | None = None) -> JshintPlugin:
        return JshintPlugin(
            workspace,
            resolver=resolver,
            engines=engines if engines is not None else EngineCatalog.single(engine),
        )

    return factory


@pytest.fixture
def plugin(make_plugin: Callable[..., JshintPlugin]) -> Iterator[JshintPlugin]:
    instance = make_plugin()
    yield instance
    instance.deactivate()
