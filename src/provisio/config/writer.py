"""Persisting signing choices back into ``provisio.yaml``."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from provisio.constants.config import CONFIG_FILENAME, CONFIG_TEMP_PREFIX, CONFIG_TEMP_SUFFIX
from provisio.exceptions import ConfigError
from provisio.io import write_text_atomic
from provisio.model import SigningOption
from provisio.types.config import SigningOverrides

logger = logging.getLogger(__name__)


def update_signing_config(root: Path, signing: SigningOverrides, config_path: Path | None = None) -> Path:
    """Set the ``signing`` block of the project config, keeping every other key.

    Fields left as ``None`` in ``signing`` are not touched.
    """
    path = config_path.resolve() if config_path else (root.resolve() / CONFIG_FILENAME)

    raw: Any = {}
    if path.exists():
        try:
            raw = yaml.safe_load(path.read_text(encoding="utf-8"))
        except yaml.YAMLError as exc:
            raise ConfigError(f"Invalid YAML config file at {path}: {exc}") from exc
        if raw is None:
            raw = {}
        if not isinstance(raw, dict):
            raise ConfigError(f"Config file at {path} must be a YAML mapping")

    block = raw.get("signing") or {}
    if not isinstance(block, dict):
        raise ConfigError("signing must be a mapping")

    for key in ("team", "identity", "profile"):
        value = getattr(signing, key)
        if value is not None:
            block[key] = value
    raw["signing"] = block

    write_text_atomic(
        path=path,
        content=yaml.safe_dump(raw, sort_keys=False, allow_unicode=True),
        temp_prefix=CONFIG_TEMP_PREFIX,
        temp_suffix=CONFIG_TEMP_SUFFIX,
    )
    logger.info("Updated signing configuration in %s", path)
    return path


def apply_signing_option(root: Path, option: SigningOption, config_path: Path | None = None) -> Path:
    """Pin the team, identity and profile of ``option`` in the project config."""
    return update_signing_config(
        root,
        SigningOverrides(team=option.team_id, identity=option.identity, profile=option.profile),
        config_path,
    )
