# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Lint engine interfaces and the Node-backed JSHint implementation."""

from __future__ import annotations

from .base import EngineCatalog, LintEngine
from .node import ENGINE_MODULES, NodeJshintEngine, build_node_catalog

__all__ = [
    "ENGINE_MODULES",
    "EngineCatalog",
    "LintEngine",
    "NodeJshintEngine",
    "build_node_catalog",
]
