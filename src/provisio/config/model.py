"""Config data model for Provisio projects."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from provisio.constants.cache import DEFAULT_CACHE_DIR
from provisio.constants.config import DERIVED_BUNDLE_ID_PREFIX, FALLBACK_BUNDLE_ID
from provisio.constants.discovery import DEFAULT_MAX_WORKERS
from provisio.types.config import AppConfig, SigningOverrides


def derive_bundle_id(name: str) -> str:
    """Build a bundle id from an app name: ``My App!`` -> ``com.provisio.myapp``."""
    sanitized = "".join(char for char in name.lower() if char.isalnum())
    return f"{DERIVED_BUNDLE_ID_PREFIX}{sanitized}"


@dataclass(frozen=True)
class ProvisioConfig:
    """Resolved project config."""

    app: AppConfig = field(default_factory=AppConfig)
    signing: SigningOverrides = field(default_factory=SigningOverrides)
    max_workers: int = DEFAULT_MAX_WORKERS
    cache_dir: Path = DEFAULT_CACHE_DIR

    @property
    def bundle_id(self) -> str:
        """Explicit bundle id, else one derived from the app name, else a placeholder."""
        if self.app.bundle_id:
            return self.app.bundle_id
        if self.app.name:
            return derive_bundle_id(self.app.name)
        return FALLBACK_BUNDLE_ID
