# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Discover and load ``.jshintrc`` style configuration for a source file."""

from __future__ import annotations

import copy
import json
import logging
from collections.abc import Iterator, Mapping
from pathlib import Path
from typing import Any, Final, Protocol, runtime_checkable

from pydantic import ValidationError

from ..errors import ConfigError
from .linter import GLOBALS_KEY, LinterConfig

LOGGER = logging.getLogger(__name__)

RC_FILENAME: Final[str] = ".jshintrc"
PACKAGE_FILENAME: Final[str] = "package.json"
PACKAGE_SECTION_KEY: Final[str] = "jshintConfig"
EXTENDS_KEY: Final[str] = "extends"
PREDEF_KEY: Final[str] = "predef"
_REMOVAL_PREFIX: Final[str] = "-"

# resolved path -> (mtime_ns, document); one entry per file
_JSON_CACHE: dict[Path, tuple[int, dict[str, Any]]] = {}


@runtime_checkable
class ConfigResolver(Protocol):
    """Produce the linter configuration that applies to a file."""

    def resolve(self, path: Path) -> LinterConfig:
        """Return the configuration for the file at ``path``."""

        raise NotImplementedError


def strip_json_comments(text: str) -> str:
    """Remove ``//`` and ``/* */`` comments outside of string literals.

    Newlines inside removed comments are kept so JSON error positions still
    point at the right line.

    Args:
        text: JSON document that may contain JavaScript-style comments.

    Returns:
        str: The document with comments blanked out.
    """

    out: list[str] = []
    index = 0
    length = len(text)
    in_string = False
    while index < length:
        char = text[index]
        if in_string:
            out.append(char)
            if char == "\\" and index + 1 < length:
                out.append(text[index + 1])
                index += 2
                continue
            if char == '"':
                in_string = False
            index += 1
            continue
        if char == '"':
            in_string = True
            out.append(char)
            index += 1
            continue
        pair = text[index : index + 2]
        if pair == "//":
            end = text.find("\n", index)
            index = length if end == -1 else end
            continue
        if pair == "/*":
            end = text.find("*/", index + 2)
            if end == -1:
                raise ValueError("unterminated block comment")
            out.append("\n" * text.count("\n", index, end))
            index = end + 2
            continue
        out.append(char)
        index += 1
    return "".join(out)


def iter_parents(start: Path) -> Iterator[Path]:
    """Yield ``start`` followed by each of its ancestors up to the root."""

    current = start
    while True:
        yield current
        if current.parent == current:
            return
        current = current.parent


class JshintrcConfigResolver:
    """Resolve configuration the way the JSHint command line tool does.

    The nearest ``.jshintrc`` wins, then the nearest ``package.json`` with a
    ``jshintConfig`` table; ``~/.jshintrc`` is the last resort.
    """

    def __init__(self, *, home: Path | None = None) -> None:
        """Initialise the resolver.

        Args:
            home: Directory searched for a fallback ``.jshintrc``. Defaults to
                the current user's home directory.
        """

        self._home = home

    def resolve(self, path: Path) -> LinterConfig:
        """Return the configuration that applies to ``path``.

        Args:
            path: Absolute path of the file being linted.

        Returns:
            LinterConfig: Resolved configuration, empty when none is found.

        Raises:
            ConfigError: If a discovered configuration file is invalid.
        """

        located = self.locate(path)
        if located is None:
            LOGGER.debug("no JSHint configuration found for %s", path)
            return LinterConfig()
        LOGGER.debug("using JSHint configuration %s for %s", located, path)
        if located.name == PACKAGE_FILENAME:
            return self._load_package(located)
        return self._load_rc(located, ())

    def locate(self, path: Path) -> Path | None:
        """Return the configuration file that applies to ``path``, if any.

        The whole upward search for ``.jshintrc`` runs first; a
        ``package.json`` with a ``jshintConfig`` table is only considered
        when no ancestor holds one.

        Args:
            path: File whose configuration is requested.

        Returns:
            Path | None: ``.jshintrc`` or ``package.json`` path, or ``None``.
        """

        directories = list(iter_parents(path.parent))
        for directory in directories:
            candidate = directory / RC_FILENAME
            if candidate.is_file():
                return candidate
        for directory in directories:
            package = directory / PACKAGE_FILENAME
            if package.is_file() and self._package_has_section(package):
                return package
        home = self._home if self._home is not None else Path.home()
        fallback = home / RC_FILENAME
        return fallback if fallback.is_file() else None

    def _package_has_section(self, package: Path) -> bool:
        try:
            document = _read_json(package)
        except ConfigError as exc:
            LOGGER.debug("skipping unreadable %s: %s", package, exc)
            return False
        return isinstance(document.get(PACKAGE_SECTION_KEY), Mapping)

    def _load_package(self, package: Path) -> LinterConfig:
        section = _read_json(package)[PACKAGE_SECTION_KEY]
        return self._build(dict(section), package, ())

    def _load_rc(self, path: Path, stack: tuple[Path, ...]) -> LinterConfig:
        resolved = path.resolve()
        if resolved in stack:
            chain = " -> ".join(str(entry) for entry in (*stack, resolved))
            raise ConfigError(f"circular extends detected: {chain}", path=path)
        return self._build(_read_json(resolved), resolved, stack)

    def _build(self, document: dict[str, Any], origin: Path, stack: tuple[Path, ...]) -> LinterConfig:
        parent_ref = document.pop(EXTENDS_KEY, None)
        _fold_predef(document, origin)
        try:
            config = LinterConfig.model_validate(document)
        except ValidationError as exc:
            raise ConfigError(f"invalid configuration: {exc}", path=origin) from exc
        if parent_ref is None:
            return config
        if not isinstance(parent_ref, str) or not parent_ref.strip():
            raise ConfigError("extends must be a relative or absolute file path", path=origin)
        parent_path = Path(parent_ref).expanduser()
        if not parent_path.is_absolute():
            parent_path = origin.parent / parent_path
        if not parent_path.is_file():
            raise ConfigError(f"extended configuration {parent_path} does not exist", path=origin)
        base = self._load_rc(parent_path, (*stack, origin.resolve()))
        return config.merged_over(base)


def _fold_predef(document: dict[str, Any], origin: Path) -> None:
    """Merge a legacy ``predef`` declaration into ``globals`` in place."""

    predef = document.pop(PREDEF_KEY, None)
    if predef is None:
        return
    raw_globals = document.get(GLOBALS_KEY) or {}
    if not isinstance(raw_globals, Mapping):
        raise ConfigError("globals must be an object", path=origin)
    merged = dict(raw_globals)
    if isinstance(predef, Mapping):
        merged.update(predef)
    elif isinstance(predef, list):
        for entry in predef:
            if not isinstance(entry, str):
                raise ConfigError("predef entries must be strings", path=origin)
            if entry.startswith(_REMOVAL_PREFIX):
                merged.pop(entry[len(_REMOVAL_PREFIX) :], None)
            else:
                merged.setdefault(entry, False)
    else:
        raise ConfigError("predef must be an array or an object", path=origin)
    document[GLOBALS_KEY] = merged


def _read_json(path: Path) -> dict[str, Any]:
    """Return the parsed JSON object stored at ``path`` using an mtime-checked cache."""

    try:
        resolved = path.resolve()
        mtime_ns = resolved.stat().st_mtime_ns
    except OSError as exc:
        raise ConfigError(f"cannot stat configuration: {exc}", path=path) from exc
    cached = _JSON_CACHE.get(resolved)
    if cached is not None and cached[0] == mtime_ns:
        return copy.deepcopy(cached[1])
    _JSON_CACHE.pop(resolved, None)
    try:
        text = resolved.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"cannot read configuration: {exc}", path=path) from exc
    try:
        document = json.loads(strip_json_comments(text))
    except ValueError as exc:
        raise ConfigError(f"invalid JSON: {exc}", path=path) from exc
    if not isinstance(document, dict):
        raise ConfigError("configuration must be a JSON object", path=path)
    _JSON_CACHE[resolved] = (mtime_ns, copy.deepcopy(document))
    return document


def clear_config_cache() -> None:
    """Forget every cached configuration document."""

    _JSON_CACHE.clear()


__all__ = [
    "EXTENDS_KEY",
    "PACKAGE_FILENAME",
    "PACKAGE_SECTION_KEY",
    "PREDEF_KEY",
    "RC_FILENAME",
    "ConfigResolver",
    "JshintrcConfigResolver",
    "clear_config_cache",
    "iter_parents",
    "strip_json_comments",
]
