# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Diagnostic coercion and same-line aggregation helpers."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any, TypeAlias

from pydantic import ValidationError

from .models import Diagnostic, DiagnosticGroups, LineDiagnosticGroup

LOGGER = logging.getLogger(__name__)

DiagnosticCandidate: TypeAlias = Diagnostic | Mapping[str, Any] | None


def coerce_diagnostics(candidates: Iterable[DiagnosticCandidate]) -> list[Diagnostic]:
    """Convert engine entries into diagnostics, dropping holes and noise.

    Engines occasionally emit ``null`` or partial entries; those are skipped
    without surfacing an error.

    Args:
        candidates: Diagnostics or raw mappings emitted by the engine.

    Returns:
        list[Diagnostic]: Valid diagnostics in engine order.
    """

    diagnostics: list[Diagnostic] = []
    for candidate in candidates:
        if not candidate:
            continue
        if isinstance(candidate, Diagnostic):
            diagnostics.append(candidate)
            continue
        if not isinstance(candidate, Mapping):
            LOGGER.debug("ignoring non-mapping engine entry %r", candidate)
            continue
        try:
            diagnostics.append(Diagnostic.model_validate(dict(candidate)))
        except ValidationError as exc:
            LOGGER.debug("ignoring malformed engine entry %r: %s", candidate, exc)
    return diagnostics


def aggregate(candidates: Iterable[DiagnosticCandidate]) -> DiagnosticGroups:
    """Group diagnostics by row and order each row by ascending column.

    Args:
        candidates: Diagnostics produced by one lint pass.

    Returns:
        DiagnosticGroups: Mapping of row to group, rows in ascending order.
    """

    buckets: dict[int, list[Diagnostic]] = {}
    for diagnostic in coerce_diagnostics(candidates):
        buckets.setdefault(diagnostic.row, []).append(diagnostic)
    return {
        row: LineDiagnosticGroup(
            row=row,
            diagnostics=tuple(sorted(bucket, key=lambda item: item.character)),
        )
        for row, bucket in sorted(buckets.items())
    }


def first_group(groups: DiagnosticGroups) -> LineDiagnosticGroup | None:
    """Return the group on the lowest row, if any."""

    if not groups:
        return None
    return groups[min(groups)]


def count_diagnostics(groups: DiagnosticGroups) -> int:
    """Return the total number of diagnostics across ``groups``."""

    return sum(len(group.diagnostics) for group in groups.values())


__all__ = ["DiagnosticCandidate", "aggregate", "coerce_diagnostics", "count_diagnostics", "first_group"]
