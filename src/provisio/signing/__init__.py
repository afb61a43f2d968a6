"""Signing discovery, matching and resolution package."""

from __future__ import annotations

from typing import Any

__all__ = ["GlobalCache", "SigningDiscovery", "resolve_signing"]


def __getattr__(name: str) -> Any:
    """Lazily expose signing APIs to avoid import cycles at package import time."""
    if name == "resolve_signing":
        from .orchestrator import resolve_signing

        return resolve_signing
    if name == "SigningDiscovery":
        from .discovery import SigningDiscovery

        return SigningDiscovery
    if name == "GlobalCache":
        from .cache import GlobalCache

        return GlobalCache
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
