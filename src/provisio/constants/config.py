"""Configuration defaults and filenames."""

from __future__ import annotations

CONFIG_FILENAME: str = "provisio.yaml"
CONFIG_TEMP_PREFIX: str = ".provisio-"
CONFIG_TEMP_SUFFIX: str = ".tmp"

TOP_LEVEL_KEYS: frozenset[str] = frozenset({"app", "signing", "discovery", "cache"})
APP_KEYS: frozenset[str] = frozenset({"name", "bundle_id"})
SIGNING_KEYS: frozenset[str] = frozenset({"team", "identity", "profile"})

DERIVED_BUNDLE_ID_PREFIX: str = "com.provisio."
FALLBACK_BUNDLE_ID: str = "com.example.app"
