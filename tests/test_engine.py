# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for the Node-backed JSHint engine."""

from __future__ import annotations

import json
import os
import subprocess
from collections.abc import Sequence
from pathlib import Path
from typing import Any

import pytest

from editorlint.config.linter import LinterConfig
from editorlint.config.settings import EngineVariant
from editorlint.engine import node as node_module
from editorlint.engine.base import EngineCatalog, LintEngine
from editorlint.engine.node import NodeJshintEngine, build_node_catalog, parse_engine_output
from editorlint.errors import EngineError
from editorlint.process import CommandOptions, SubprocessExecutionError


class RecordingRunner:
    """Stand-in for ``run_command`` capturing the payload sent to Node."""

    def __init__(self, stdout: str = "[]", error: Exception | None = None) -> None:
        self.stdout = stdout
        self.error = error
        self.args: list[str] = []
        self.options: CommandOptions | None = None

    def __call__(self, args: Sequence[str], *, options: CommandOptions | None = None) -> subprocess.CompletedProcess[str]:
        self.args = list(args)
        self.options = options
        if self.error is not None:
            raise self.error
        return subprocess.CompletedProcess(args=list(args), returncode=0, stdout=self.stdout, stderr="")

    @property
    def payload(self) -> dict[str, Any]:
        assert self.options is not None and self.options.input is not None
        return json.loads(self.options.input)


@pytest.fixture
def runner(monkeypatch: pytest.MonkeyPatch) -> RecordingRunner:
    recorder = RecordingRunner()
    monkeypatch.setattr(node_module, "run_command", recorder)
    return recorder


def test_engine_sends_source_options_and_globals(runner: RecordingRunner) -> None:
    runner.stdout = json.dumps(
        [
            None,
            {"line": 1, "character": 10, "reason": "Missing semicolon.", "code": "W033", "evidence": "var a = 1"},
        ],
    )
    config = LinterConfig.model_validate({"undef": True, "globals": {"jQuery": False}})

    diagnostics = NodeJshintEngine(timeout=5.0).lint("var a = 1", config)

    assert [(item.line, item.code) for item in diagnostics] == [(1, "W033")]
    assert runner.args[:2] == ["node", "-e"]
    assert runner.payload == {
        "module": "jshint",
        "export": "JSHINT",
        "source": "var a = 1",
        "config": {"undef": True},
        "globals": {"jQuery": False},
    }
    assert runner.options is not None
    assert runner.options.timeout == 5.0


def test_jsx_engine_loads_the_jsx_module(runner: RecordingRunner) -> None:
    NodeJshintEngine(EngineVariant.JSX_AWARE).lint("<a />", LinterConfig())

    assert (runner.payload["module"], runner.payload["export"]) == ("jshint-jsx", "JSXHINT")


def test_missing_node_becomes_engine_error(runner: RecordingRunner) -> None:
    runner.error = FileNotFoundError("Executable 'node' was not found on PATH")

    with pytest.raises(EngineError, match="cannot run jshint"):
        NodeJshintEngine().lint("x", LinterConfig())


def test_failed_node_process_becomes_engine_error(runner: RecordingRunner) -> None:
    runner.error = SubprocessExecutionError(["node"], 1, "", "Cannot find module 'jshint'")

    with pytest.raises(EngineError) as excinfo:
        NodeJshintEngine().lint("x", LinterConfig())

    assert excinfo.value.stderr == "Cannot find module 'jshint'"


def test_node_path_is_prepended(runner: RecordingRunner, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("NODE_PATH", "/existing")

    NodeJshintEngine(node_path=tmp_path).lint("x", LinterConfig())

    assert runner.options is not None and runner.options.env is not None
    assert runner.options.env["NODE_PATH"] == f"{tmp_path}{os.pathsep}/existing"


def test_parse_engine_output_rejects_invalid_json() -> None:
    with pytest.raises(EngineError, match="invalid JSON"):
        parse_engine_output("Error: boom")


def test_parse_engine_output_rejects_non_arrays() -> None:
    with pytest.raises(EngineError, match="expected an array"):
        parse_engine_output('{"line": 1}')


def test_parse_engine_output_treats_silence_as_clean() -> None:
    assert parse_engine_output("") == []


def test_catalog_selects_engine_per_variant() -> None:
    catalog = build_node_catalog(node="/usr/bin/node")

    standard = catalog.select(EngineVariant.STANDARD)
    jsx_aware = catalog.select(EngineVariant.JSX_AWARE)

    assert isinstance(standard, NodeJshintEngine) and standard.variant is EngineVariant.STANDARD
    assert isinstance(jsx_aware, NodeJshintEngine) and jsx_aware.variant is EngineVariant.JSX_AWARE
    assert isinstance(standard, LintEngine)


def test_single_catalog_serves_every_variant() -> None:
    engine = NodeJshintEngine()
    catalog = EngineCatalog.single(engine)

    assert catalog.select(EngineVariant.STANDARD) is engine
    assert catalog.select(EngineVariant.JSX_AWARE) is engine
