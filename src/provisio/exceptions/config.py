"""Configuration-related exceptions."""

from __future__ import annotations

from provisio.exceptions.base import ProvisioError


class ConfigError(ProvisioError, ValueError):
    """Raised when ``provisio.yaml`` cannot be loaded or validated."""
