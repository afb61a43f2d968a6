"""Time-bounded, file-backed cache for discovery results.

Each resource class (signing data, simulators, devices) is a single JSON file
``<cache_dir>/<key>.json`` holding ``{"data": ..., "timestamp": ...}``.
Reads never raise: a missing, unreadable, malformed or stale file is a miss.
Writes replace the whole entry via temp file + rename, so readers never see a
torn file, but two concurrent writers still race and the last one wins.
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from pathlib import Path

from provisio.constants.cache import (
    CACHE_TEMP_PREFIX,
    CACHE_TEMP_SUFFIX,
    CACHE_TTLS,
    DEFAULT_CACHE_DIR,
    DEVICES_CACHE_KEY,
    DEVICES_TTL_SECONDS,
    SIGNING_CACHE_KEY,
    SIGNING_TTL_SECONDS,
    SIMULATORS_CACHE_KEY,
    SIMULATORS_TTL_SECONDS,
)
from provisio.io import load_json_file, write_json_atomic
from provisio.model import SigningData
from provisio.types import CacheEntry, Clock, JsonValue

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    """Default clock."""
    return datetime.now(UTC)


class GlobalCache:
    """Per-user cache of expensive listings, keyed by resource class."""

    def __init__(self, cache_dir: Path = DEFAULT_CACHE_DIR, *, clock: Clock = utc_now) -> None:
        self.cache_dir = cache_dir
        self._clock = clock

    def path_for(self, key: str) -> Path:
        return self.cache_dir / f"{key}.json"

    def get(self, key: str, ttl: float) -> JsonValue | None:
        """Return cached data for ``key`` if younger than ``ttl`` seconds."""
        entry = self._load_entry(self.path_for(key))
        if entry is None:
            return None

        try:
            captured_at = datetime.fromisoformat(entry["timestamp"])
        except ValueError:
            logger.debug("Cache entry %s has an invalid timestamp", key)
            return None
        if captured_at.tzinfo is None:
            captured_at = captured_at.replace(tzinfo=UTC)

        age = (self._clock() - captured_at).total_seconds()
        if age >= ttl:
            logger.debug("Cache entry %s is stale (age %.1fs, ttl %.0fs)", key, age, ttl)
            return None

        logger.debug("Cache hit for %s (age %.1fs)", key, age)
        return entry["data"]

    def set(self, key: str, value: JsonValue) -> None:
        """Overwrite the entry for ``key`` with ``value`` and a fresh timestamp."""
        payload: CacheEntry = {"data": value, "timestamp": self._clock().isoformat()}
        write_json_atomic(
            path=self.path_for(key),
            payload=payload,
            temp_prefix=CACHE_TEMP_PREFIX,
            temp_suffix=CACHE_TEMP_SUFFIX,
        )

    def clear(self) -> list[Path]:
        """Delete every resource-class file and return the paths removed."""
        removed: list[Path] = []
        for key in sorted(CACHE_TTLS):
            path = self.path_for(key)
            if path.is_file():
                path.unlink()
                removed.append(path)
        return removed

    def get_signing(self) -> SigningData | None:
        raw = self.get(SIGNING_CACHE_KEY, SIGNING_TTL_SECONDS)
        if not isinstance(raw, dict):
            return None
        try:
            return SigningData.from_dict(raw)
        except (KeyError, TypeError, ValueError) as exc:
            logger.debug("Discarding undecodable signing cache: %s", exc)
            return None

    def set_signing(self, data: SigningData) -> None:
        self.set(SIGNING_CACHE_KEY, data.to_dict())

    def get_simulators(self) -> JsonValue | None:
        return self.get(SIMULATORS_CACHE_KEY, SIMULATORS_TTL_SECONDS)

    def set_simulators(self, listing: JsonValue) -> None:
        self.set(SIMULATORS_CACHE_KEY, listing)

    def get_devices(self) -> JsonValue | None:
        return self.get(DEVICES_CACHE_KEY, DEVICES_TTL_SECONDS)

    def set_devices(self, listing: JsonValue) -> None:
        self.set(DEVICES_CACHE_KEY, listing)

    def _load_entry(self, path: Path) -> CacheEntry | None:
        if not path.is_file():
            return None

        try:
            payload = load_json_file(path)
        except (OSError, ValueError):
            logger.debug("Ignoring unreadable cache file %s", path)
            return None

        if not isinstance(payload, dict):
            return None
        timestamp = payload.get("timestamp")
        if not isinstance(timestamp, str) or "data" not in payload:
            return None

        return {"data": payload["data"], "timestamp": timestamp}
