# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Plugin settings and linter configuration resolution."""

from __future__ import annotations

from ..errors import ConfigError
from .linter import LinterConfig
from .resolver import ConfigResolver, JshintrcConfigResolver, strip_json_comments
from .settings import (
    CONFIG_DEFAULTS,
    CONFIG_NAMESPACE,
    SAVE_ONLY_KEY,
    EngineVariant,
    PluginSettings,
    setting_key,
)

__all__ = [
    "CONFIG_DEFAULTS",
    "CONFIG_NAMESPACE",
    "SAVE_ONLY_KEY",
    "ConfigError",
    "ConfigResolver",
    "EngineVariant",
    "JshintrcConfigResolver",
    "LinterConfig",
    "PluginSettings",
    "setting_key",
    "strip_json_comments",
]
