"""Configuration loading, validation, and persistence for Provisio projects."""

from __future__ import annotations

from provisio.config.loader import load_config
from provisio.config.model import ProvisioConfig, derive_bundle_id
from provisio.config.writer import apply_signing_option, update_signing_config

__all__ = [
    "ProvisioConfig",
    "apply_signing_option",
    "derive_bundle_id",
    "load_config",
    "update_signing_config",
]
