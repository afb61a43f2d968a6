"""Entitlements plist synthesis.

The plist under ``.provisio/derived`` is shared with whatever adds capability
entitlements to the project, so every write is a key-wise merge into the
existing document rather than a replacement. The file is swapped in with an
atomic rename; concurrent read-modify-write cycles are still last-writer-wins.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from provisio.constants.entitlements import (
    APPLICATION_IDENTIFIER_KEY,
    DERIVED_DIR,
    ENTITLEMENTS_FILENAME,
    ENTITLEMENTS_TEMP_PREFIX,
    ENTITLEMENTS_TEMP_SUFFIX,
    GET_TASK_ALLOW_KEY,
    KEYCHAIN_ACCESS_GROUPS_KEY,
    TEAM_IDENTIFIER_KEY,
)
from provisio.io import load_plist_file, write_plist_atomic

logger = logging.getLogger(__name__)


def entitlements_path_for(project_dir: Path) -> Path:
    return project_dir / DERIVED_DIR / ENTITLEMENTS_FILENAME


def load_entitlements(path: Path) -> dict[str, Any]:
    """Return the entitlements stored at ``path``, or an empty dict."""
    if not path.is_file():
        return {}
    try:
        return load_plist_file(path)
    except (OSError, ValueError) as exc:
        logger.warning("Ignoring unreadable entitlements file %s: %s", path, exc)
        return {}


def merge_entitlements(path: Path, entries: Mapping[str, Any]) -> dict[str, Any]:
    """Union ``entries`` into the plist at ``path`` and write it back.

    Keys already present and absent from ``entries`` are kept; keys in
    ``entries`` overwrite. Returns the merged document.
    """
    merged = load_entitlements(path)
    merged.update(entries)
    write_plist_atomic(
        path=path,
        payload=merged,
        temp_prefix=ENTITLEMENTS_TEMP_PREFIX,
        temp_suffix=ENTITLEMENTS_TEMP_SUFFIX,
    )
    return merged


def signing_entitlements(bundle_id: str, team_id: str) -> dict[str, Any]:
    """Entitlements every development-signed build must carry."""
    app_identifier = f"{team_id}.{bundle_id}"
    return {
        APPLICATION_IDENTIFIER_KEY: app_identifier,
        TEAM_IDENTIFIER_KEY: team_id,
        GET_TASK_ALLOW_KEY: True,
        KEYCHAIN_ACCESS_GROUPS_KEY: [app_identifier],
    }


def generate_entitlements(bundle_id: str, team_id: str, project_dir: Path) -> Path:
    """Merge the signing entitlements into the project's plist and return its path."""
    path = entitlements_path_for(project_dir)
    merge_entitlements(path, signing_entitlements(bundle_id, team_id))
    logger.debug("Wrote entitlements for %s.%s to %s", team_id, bundle_id, path)
    return path
