# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Linter configuration model passed to the engine on every pass."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Final

from pydantic import BaseModel, ConfigDict, Field, field_validator

GLOBALS_KEY: Final[str] = "globals"
_WRITABLE_LABELS: Final[frozenset[str]] = frozenset({"true", "writable", "writeable"})
_READONLY_LABELS: Final[frozenset[str]] = frozenset({"false", "readonly", "readable"})


class LinterConfig(BaseModel):
    """Rule flags for the engine plus the reserved ``globals`` table.

    Rule flags form an open set and are kept as model extras; ``globals`` maps
    identifiers to whether the code may assign to them.
    """

    model_config = ConfigDict(extra="allow", frozen=True)

    globals: dict[str, bool] = Field(default_factory=dict)

    @field_validator("globals", mode="before")
    @classmethod
    def _coerce_globals(cls, value: object) -> dict[str, bool]:
        """Normalise ``globals`` declarations into assignability flags.

        Args:
            value: Raw ``globals`` payload from a configuration file.

        Returns:
            dict[str, bool]: Identifier to assignability mapping.

        Raises:
            ValueError: If the payload is not a table or a flag is unrecognised.
        """

        if value is None:
            return {}
        if not isinstance(value, Mapping):
            raise ValueError("globals must be an object")
        coerced: dict[str, bool] = {}
        for name, flag in value.items():
            coerced[str(name)] = _coerce_global_flag(str(name), flag)
        return coerced

    @property
    def options(self) -> dict[str, Any]:
        """Return the rule flags without the ``globals`` table.

        Returns:
            dict[str, Any]: Options forwarded to the engine as its config object.
        """

        return dict(self.model_extra or {})

    def merged_over(self, base: LinterConfig) -> LinterConfig:
        """Return ``self`` layered on top of ``base``.

        Rule flags from ``self`` win; ``globals`` tables are merged.

        Args:
            base: Configuration inherited through ``extends``.

        Returns:
            LinterConfig: Combined configuration.
        """

        payload: dict[str, Any] = {**base.options, **self.options}
        payload[GLOBALS_KEY] = {**base.globals, **self.globals}
        return LinterConfig.model_validate(payload)


def _coerce_global_flag(name: str, flag: object) -> bool:
    """Return the assignability flag encoded by ``flag``."""

    if isinstance(flag, bool):
        return flag
    if isinstance(flag, str):
        label = flag.strip().lower()
        if label in _WRITABLE_LABELS:
            return True
        if label in _READONLY_LABELS:
            return False
    raise ValueError(f"global '{name}' must be a boolean, 'readonly' or 'writable'")


__all__ = ["GLOBALS_KEY", "LinterConfig"]
