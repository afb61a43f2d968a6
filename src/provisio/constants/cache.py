"""Constants used by the global discovery cache."""

from __future__ import annotations

from pathlib import Path

DEFAULT_CACHE_DIR: Path = Path.home() / ".provisio"
CACHE_TEMP_PREFIX: str = ".cache-"
CACHE_TEMP_SUFFIX: str = ".tmp"

SIGNING_CACHE_KEY: str = "signing"
SIMULATORS_CACHE_KEY: str = "simulators"
DEVICES_CACHE_KEY: str = "devices"

SIGNING_TTL_SECONDS: float = 300.0
SIMULATORS_TTL_SECONDS: float = 60.0
# Physical device connectivity changes faster than anything else we cache.
DEVICES_TTL_SECONDS: float = 30.0

CACHE_TTLS: dict[str, float] = {
    SIGNING_CACHE_KEY: SIGNING_TTL_SECONDS,
    SIMULATORS_CACHE_KEY: SIMULATORS_TTL_SECONDS,
    DEVICES_CACHE_KEY: DEVICES_TTL_SECONDS,
}
