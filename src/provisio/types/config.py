"""Typed configuration structures for Provisio project settings."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class AppConfig:
    """The ``app`` block of ``provisio.yaml``."""

    name: str | None = None
    bundle_id: str | None = None


@dataclass(frozen=True)
class SigningOverrides:
    """Pinned signing choices. Any field left unset is discovered automatically."""

    team: str | None = None
    identity: str | None = None
    profile: str | None = None
