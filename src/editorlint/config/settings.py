# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""User-facing plugin settings stored in the host configuration."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from enum import Enum
from typing import TYPE_CHECKING, Final

from pydantic import BaseModel, ConfigDict, Field, ValidationError

if TYPE_CHECKING:
    from ..host.interfaces import SettingsStore

LOGGER = logging.getLogger(__name__)

CONFIG_NAMESPACE: Final[str] = "jshint"
DEFAULT_TOOL_NAME: Final[str] = "JSHint"


def setting_key(name: str) -> str:
    """Return the namespaced host key for the setting ``name``.

    Args:
        name: Setting name as exposed to users, e.g. ``validateOnlyOnSave``.

    Returns:
        str: Key of the form ``jshint.<name>``.
    """

    return f"{CONFIG_NAMESPACE}.{name}"


SAVE_ONLY_KEY: Final[str] = setting_key("validateOnlyOnSave")


class EngineVariant(str, Enum):
    """Enumerate the engine flavours a lint pass can dispatch to."""

    STANDARD = "standard"
    JSX_AWARE = "jsx"


class PluginSettings(BaseModel):
    """Snapshot of the plugin options observed from the host."""

    model_config = ConfigDict(validate_assignment=True, populate_by_name=True)

    validate_only_on_save: bool = Field(default=False, alias="validateOnlyOnSave")
    support_linting_jsx: bool = Field(default=False, alias="supportLintingJsx")
    transform_jsx: bool = Field(default=False, alias="transformJsx")
    tool_name: str = Field(default=DEFAULT_TOOL_NAME, alias="toolName", min_length=1)

    @classmethod
    def from_store(cls, store: SettingsStore) -> PluginSettings:
        """Read every plugin option from ``store``, falling back to defaults.

        A stored value that fails validation is logged and replaced by its
        default, so a bad setting never breaks a lint pass.

        Args:
            store: Host settings store holding ``jshint.*`` keys.

        Returns:
            PluginSettings: Validated settings snapshot.
        """

        payload: dict[str, object] = {}
        for alias in CONFIG_DEFAULTS:
            value = store.get(setting_key(alias))
            if value is None:
                continue
            try:
                cls.model_validate({alias: value})
            except ValidationError as exc:
                LOGGER.warning(
                    "ignoring invalid setting %s=%r (%d error(s)); using %r",
                    setting_key(alias),
                    value,
                    exc.error_count(),
                    CONFIG_DEFAULTS[alias],
                )
                continue
            payload[alias] = value
        return cls.model_validate(payload)

    @property
    def engine_variant(self) -> EngineVariant:
        """Return the engine flavour selected by the JSX flags.

        Either flag, or both, selects the JSX-aware engine.

        Returns:
            EngineVariant: Variant used for the next lint pass.
        """

        if self.support_linting_jsx or self.transform_jsx:
            return EngineVariant.JSX_AWARE
        return EngineVariant.STANDARD


def _defaults() -> Mapping[str, object]:
    """Return the default value of every option keyed by its alias."""

    defaults = PluginSettings()
    return {
        field.alias or name: getattr(defaults, name)
        for name, field in PluginSettings.model_fields.items()
    }


CONFIG_DEFAULTS: Final[Mapping[str, object]] = _defaults()

__all__ = [
    "CONFIG_DEFAULTS",
    "CONFIG_NAMESPACE",
    "DEFAULT_TOOL_NAME",
    "SAVE_ONLY_KEY",
    "EngineVariant",
    "PluginSettings",
    "setting_key",
]
