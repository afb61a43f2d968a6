"""Shared exception hierarchy for Provisio."""

from __future__ import annotations

from .base import ProvisioError
from .config import ConfigError
from .parsing import ProfileDecodeError
from .signing import (
    NoMatchingIdentityError,
    NoMatchingProfileError,
    OverrideNotFoundError,
    SigningError,
    StoreUnavailableError,
)

__all__ = [
    "ConfigError",
    "NoMatchingIdentityError",
    "NoMatchingProfileError",
    "OverrideNotFoundError",
    "ProfileDecodeError",
    "ProvisioError",
    "SigningError",
    "StoreUnavailableError",
]
