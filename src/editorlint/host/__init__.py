# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Host editor protocols and the in-memory host implementation."""

from __future__ import annotations

from .interfaces import Buffer, BufferRange, Editor, Gutter, Marker, SettingsStore, StatusBar, Workspace

__all__ = [
    "Buffer",
    "BufferRange",
    "Editor",
    "Gutter",
    "Marker",
    "SettingsStore",
    "StatusBar",
    "Workspace",
]
