"""Parsing-related exceptions."""

from __future__ import annotations

from pathlib import Path

from provisio.exceptions.base import ProvisioError


class ProfileDecodeError(ProvisioError, ValueError):
    """Raised when a provisioning profile cannot be verified or decoded."""

    def __init__(self, path: Path | str, reason: str) -> None:
        self.path = str(path)
        self.reason = reason
        super().__init__(f"Invalid provisioning profile {self.path}: {reason}")
