"""Discovery of signing identities and provisioning profiles."""

from __future__ import annotations

import concurrent.futures
import logging
from datetime import datetime
from pathlib import Path

from provisio.constants.discovery import (
    DEFAULT_MAX_WORKERS,
    FIND_IDENTITY_ARGS,
    NO_IDENTITIES_ISSUE,
    NO_PROFILES_ISSUE,
    PROFILE_SUFFIX,
    PROFILES_DIR,
    SECURITY_BINARY,
)
from provisio.exceptions import ProfileDecodeError, StoreUnavailableError
from provisio.model import ProvisioningProfile, SigningData, SigningIdentity, SigningStatus
from provisio.parsers import decode_profile, parse_identity_listing
from provisio.runner import CommandRunner, SubprocessRunner
from provisio.signing.cache import GlobalCache, utc_now
from provisio.types import Clock

logger = logging.getLogger(__name__)


class SigningDiscovery:
    """Scans the keychain and the profile directory, going through the cache."""

    def __init__(
        self,
        *,
        cache: GlobalCache | None = None,
        runner: CommandRunner | None = None,
        profiles_dir: Path = PROFILES_DIR,
        clock: Clock = utc_now,
        max_workers: int = DEFAULT_MAX_WORKERS,
    ) -> None:
        self.cache = cache if cache is not None else GlobalCache(clock=clock)
        self.runner = runner if runner is not None else SubprocessRunner()
        self.profiles_dir = profiles_dir
        self.max_workers = max(1, max_workers)
        self._clock = clock

    def discover_all(self, *, force_refresh: bool = False) -> SigningData:
        """Return signing data from the cache, or discover and cache it.

        ``force_refresh`` skips the cache read but still writes the fresh result.
        """
        if not force_refresh:
            cached = self.cache.get_signing()
            if cached is not None:
                return cached

        with concurrent.futures.ThreadPoolExecutor(max_workers=2) as executor:
            identities_future = executor.submit(self.discover_identities)
            profiles_future = executor.submit(self.discover_profiles)
            identities = identities_future.result()
            profiles = profiles_future.result()

        data = SigningData(
            identities=tuple(identities),
            profiles=tuple(profiles),
            default_team_id=identities[0].team_id if identities else None,
        )
        logger.info("Discovered %d signing identities and %d provisioning profiles", len(identities), len(profiles))

        try:
            self.cache.set_signing(data)
        except OSError as exc:
            logger.warning("Failed to write signing cache %s: %s", self.cache.cache_dir, exc)

        return data

    def discover_identities(self) -> list[SigningIdentity]:
        """List code signing identities from the keychain."""
        try:
            result = self.runner.run((SECURITY_BINARY, *FIND_IDENTITY_ARGS))
        except OSError as exc:
            raise StoreUnavailableError("keychain", str(exc)) from exc

        if not result.ok:
            logger.warning("%s exited with status %d", SECURITY_BINARY, result.returncode)
        return parse_identity_listing(result.stdout_text())

    def discover_profiles(self) -> list[ProvisioningProfile]:
        """Decode every profile in the profile directory, skipping the ones that fail.

        A missing directory means no profiles. A directory that exists but
        cannot be listed raises :class:`StoreUnavailableError`.
        """
        if not self.profiles_dir.exists():
            logger.debug("Profile directory %s does not exist", self.profiles_dir)
            return []

        try:
            files = sorted(
                path
                for path in self.profiles_dir.iterdir()
                if path.suffix == PROFILE_SUFFIX and path.is_file()
            )
        except OSError as exc:
            raise StoreUnavailableError(f"profile directory {self.profiles_dir}", str(exc)) from exc

        if not files:
            return []

        now = self._clock()
        workers = min(self.max_workers, len(files))
        with concurrent.futures.ThreadPoolExecutor(max_workers=workers) as executor:
            decoded = list(executor.map(lambda path: self._decode_or_skip(path, now), files))

        return [profile for profile in decoded if profile is not None]

    def get_status(self) -> SigningStatus:
        """Summarise whether signing is usable, for quick health checks."""
        data = self.discover_all()
        issues: list[str] = []

        if not data.identities:
            issues.append(NO_IDENTITIES_ISSUE)

        valid_profiles = [profile for profile in data.profiles if not profile.is_expired]
        if not valid_profiles:
            issues.append(NO_PROFILES_ISSUE)

        return SigningStatus(
            configured=data.default_team_id is not None and bool(valid_profiles),
            team_id=data.default_team_id,
            identity_count=len(data.identities),
            profile_count=len(valid_profiles),
            issues=tuple(issues),
        )

    def _decode_or_skip(self, path: Path, now: datetime) -> ProvisioningProfile | None:
        try:
            return decode_profile(path, runner=self.runner, now=now)
        except ProfileDecodeError as exc:
            logger.warning("Skipping provisioning profile: %s", exc)
            return None
