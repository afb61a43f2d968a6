"""Shared type aliases for Provisio."""

from .cache import CacheEntry
from .common import Clock, JsonObject, JsonScalar, JsonValue
from .config import AppConfig, SigningOverrides

__all__ = [
    "AppConfig",
    "CacheEntry",
    "Clock",
    "JsonObject",
    "JsonScalar",
    "JsonValue",
    "SigningOverrides",
]
