# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Run JSHint (or its JSX fork) through Node and collect its error slot."""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Final

from ..config.linter import LinterConfig
from ..config.settings import EngineVariant
from ..diagnostics import coerce_diagnostics
from ..errors import EngineError
from ..models import Diagnostic
from ..process import CommandOptions, SubprocessExecutionError, run_command
from .base import EngineCatalog

LOGGER = logging.getLogger(__name__)

DEFAULT_NODE: Final[str] = "node"
DEFAULT_TIMEOUT: Final[float] = 10.0
NODE_PATH_ENV: Final[str] = "NODE_PATH"

# module name and exported linter function for each variant
ENGINE_MODULES: Final[Mapping[EngineVariant, tuple[str, str]]] = {
    EngineVariant.STANDARD: ("jshint", "JSHINT"),
    EngineVariant.JSX_AWARE: ("jshint-jsx", "JSXHINT"),
}

# The linter stores its findings on ``linter.errors`` after each call; the
# script reads that slot and prints it so callers only ever see a return value.
RUNNER_SCRIPT: Final[str] = """
const chunks = [];
process.stdin.setEncoding('utf8');
process.stdin.on('data', (chunk) => chunks.push(chunk));
process.stdin.on('end', () => {
  const payload = JSON.parse(chunks.join(''));
  const linter = require(payload.module)[payload.export];
  linter(payload.source, payload.config, payload.globals);
  process.stdout.write(JSON.stringify(linter.errors || []));
});
"""


class NodeJshintEngine:
    """Lint engine that shells out to ``node`` for every pass."""

    def __init__(
        self,
        variant: EngineVariant = EngineVariant.STANDARD,
        *,
        node: str = DEFAULT_NODE,
        timeout: float | None = DEFAULT_TIMEOUT,
        node_path: Path | None = None,
    ) -> None:
        """Initialise the engine.

        Args:
            variant: Linter flavour to load inside Node.
            node: Node executable name or absolute path.
            timeout: Seconds to wait for Node before giving up.
            node_path: Directory holding the ``jshint`` packages, exported as
                ``NODE_PATH`` for the child process.
        """

        self.variant = variant
        self._node = node
        self._timeout = timeout
        self._node_path = node_path

    def lint(self, text: str, config: LinterConfig) -> list[Diagnostic]:
        """Lint ``text`` and return the diagnostics JSHint reported.

        Args:
            text: Full buffer contents.
            config: Linter options; ``globals`` travels as its own argument.

        Returns:
            list[Diagnostic]: Diagnostics with ``null`` entries removed.

        Raises:
            EngineError: If Node is missing, fails, times out or prints
                something other than a JSON array.
        """

        module, export = ENGINE_MODULES[self.variant]
        payload = {
            "module": module,
            "export": export,
            "source": text,
            "config": config.options,
            "globals": config.globals,
        }
        options = CommandOptions(input=json.dumps(payload), timeout=self._timeout, env=self._environment())
        try:
            completed = run_command([self._node, "-e", RUNNER_SCRIPT], options=options)
        except FileNotFoundError as exc:
            raise EngineError(f"cannot run {module}: {exc}") from exc
        except SubprocessExecutionError as exc:
            raise EngineError(f"{module} exited with status {exc.returncode}", stderr=exc.stderr) from exc
        return parse_engine_output(completed.stdout, module=module)

    def _environment(self) -> dict[str, str] | None:
        if self._node_path is None:
            return None
        env = dict(os.environ)
        existing = env.get(NODE_PATH_ENV)
        env[NODE_PATH_ENV] = str(self._node_path) if not existing else f"{self._node_path}{os.pathsep}{existing}"
        return env


def parse_engine_output(stdout: str, *, module: str = "jshint") -> list[Diagnostic]:
    """Decode the JSON error slot printed by the runner script.

    Args:
        stdout: Raw standard output of the Node process.
        module: Engine module name used in error messages.

    Returns:
        list[Diagnostic]: Valid diagnostics in engine order.

    Raises:
        EngineError: If the output is not a JSON array.
    """

    try:
        payload = json.loads(stdout or "[]")
    except json.JSONDecodeError as exc:
        raise EngineError(f"{module} produced invalid JSON: {exc}") from exc
    if not isinstance(payload, list):
        raise EngineError(f"{module} produced {type(payload).__name__}, expected an array")
    diagnostics = coerce_diagnostics(payload)
    LOGGER.debug("%s reported %d diagnostic(s)", module, len(diagnostics))
    return diagnostics


def build_node_catalog(
    *,
    node: str = DEFAULT_NODE,
    timeout: float | None = DEFAULT_TIMEOUT,
    node_path: Path | None = None,
) -> EngineCatalog:
    """Return a catalog holding one Node engine per variant."""

    return EngineCatalog(
        standard=NodeJshintEngine(EngineVariant.STANDARD, node=node, timeout=timeout, node_path=node_path),
        jsx_aware=NodeJshintEngine(EngineVariant.JSX_AWARE, node=node, timeout=timeout, node_path=node_path),
    )


__all__ = [
    "DEFAULT_NODE",
    "DEFAULT_TIMEOUT",
    "ENGINE_MODULES",
    "RUNNER_SCRIPT",
    "NodeJshintEngine",
    "build_node_catalog",
    "parse_engine_output",
]
