"""Config loading and normalization for Provisio projects."""

from __future__ import annotations

import difflib
from pathlib import Path
from typing import Any

import yaml

from provisio.config.model import ProvisioConfig
from provisio.constants.cache import DEFAULT_CACHE_DIR
from provisio.constants.config import APP_KEYS, CONFIG_FILENAME, SIGNING_KEYS, TOP_LEVEL_KEYS
from provisio.constants.discovery import DEFAULT_MAX_WORKERS
from provisio.exceptions import ConfigError
from provisio.types.config import AppConfig, SigningOverrides


def load_config(root: Path, config_path: Path | None = None) -> ProvisioConfig:
    """Load and validate project config from ``provisio.yaml`` or an explicit path."""
    root = root.resolve()
    path = config_path.resolve() if config_path else (root / CONFIG_FILENAME)
    if not path.exists():
        if config_path is not None:
            raise ConfigError(f"Config file not found: {path}")
        return ProvisioConfig()

    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML config file at {path}: {exc}") from exc

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ConfigError(f"Config file at {path} must be a YAML mapping")

    _reject_unknown_keys(raw, TOP_LEVEL_KEYS, prefix="")

    app_raw = _ensure_mapping(raw.get("app"), "app")
    _reject_unknown_keys(app_raw, APP_KEYS, prefix="app.")
    signing_raw = _ensure_mapping(raw.get("signing"), "signing")
    _reject_unknown_keys(signing_raw, SIGNING_KEYS, prefix="signing.")
    discovery_raw = _ensure_mapping(raw.get("discovery"), "discovery")
    _reject_unknown_keys(discovery_raw, frozenset({"max_workers"}), prefix="discovery.")
    cache_raw = _ensure_mapping(raw.get("cache"), "cache")
    _reject_unknown_keys(cache_raw, frozenset({"dir"}), prefix="cache.")

    app = AppConfig(
        name=_optional_string(app_raw.get("name"), "app.name"),
        bundle_id=_optional_string(app_raw.get("bundle_id"), "app.bundle_id"),
    )
    if app_raw and app.name is None:
        raise ConfigError("Missing required field 'app.name'")

    max_workers = discovery_raw.get("max_workers", DEFAULT_MAX_WORKERS)
    if isinstance(max_workers, bool) or not isinstance(max_workers, int) or max_workers <= 0:
        raise ConfigError("discovery.max_workers must be a positive integer")

    cache_dir_raw = _optional_string(cache_raw.get("dir"), "cache.dir")
    cache_dir = Path(cache_dir_raw).expanduser() if cache_dir_raw else DEFAULT_CACHE_DIR

    return ProvisioConfig(
        app=app,
        signing=SigningOverrides(
            team=_optional_string(signing_raw.get("team"), "signing.team"),
            identity=_optional_string(signing_raw.get("identity"), "signing.identity"),
            profile=_optional_string(signing_raw.get("profile"), "signing.profile"),
        ),
        max_workers=max_workers,
        cache_dir=cache_dir,
    )


def _ensure_mapping(value: Any, key_name: str) -> dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ConfigError(f"{key_name} must be a mapping")
    return value


def _optional_string(value: Any, key_name: str) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str) or not value.strip():
        raise ConfigError(f"{key_name} must be a non-empty string")
    return value.strip()


def _reject_unknown_keys(raw: dict[str, Any], allowed: frozenset[str], *, prefix: str) -> None:
    for key in sorted(str(key) for key in raw):
        if key in allowed:
            continue
        message = f"Unknown config key '{prefix}{key}'"
        hint = _suggest_key(key, allowed)
        if hint:
            message = f"{message} ({hint})"
        raise ConfigError(message)


def _suggest_key(unknown: str, allowed: frozenset[str]) -> str:
    """Return a 'did you mean ...' hint for a close key match, or empty string."""
    matches = difflib.get_close_matches(unknown, sorted(allowed), n=1, cutoff=0.6)
    if matches:
        return f"did you mean `{matches[0]}`?"
    return ""
