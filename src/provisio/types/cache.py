"""Typed cache payload structures."""

from __future__ import annotations

from typing import TypedDict

from provisio.types.common import JsonValue


class CacheEntry(TypedDict):
    """A cached resource listing with its capture time (ISO-8601, UTC)."""

    data: JsonValue
    timestamp: str
