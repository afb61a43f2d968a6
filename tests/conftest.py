"""Shared pytest fixtures: fake external commands, a controllable clock, profile builders."""

from __future__ import annotations

import plistlib
from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from pathlib import Path
from typing import Any

import pytest

from provisio.constants.discovery import OPENSSL_BINARY, SECURITY_BINARY
from provisio.model import ProvisioningProfile, SigningIdentity
from provisio.runner import CommandResult
from provisio.signing.cache import GlobalCache
from provisio.signing.discovery import SigningDiscovery

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=UTC)
BAD_SIGNATURE_MARKER = b"BAD-SIGNATURE"


class FakeClock:
    """Clock that only moves when told to."""

    def __init__(self, now: datetime = NOW) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now = self.now + timedelta(seconds=seconds)


class FakeRunner:
    """Stands in for ``security`` and ``openssl``.

    The keychain listing is ``identity_listing``. For ``openssl smime`` the
    profile file is treated as already decoded: its bytes are returned as the
    verifier output, unless it starts with ``BAD_SIGNATURE_MARKER``.
    """

    def __init__(self, identity_listing: str = "") -> None:
        self.identity_listing = identity_listing
        self.calls: list[tuple[str, ...]] = []
        self.missing_binaries: set[str] = set()

    def run(self, argv: tuple[str, ...]) -> CommandResult:
        self.calls.append(argv)
        if argv[0] in self.missing_binaries:
            raise FileNotFoundError(2, "No such file or directory", argv[0])
        if argv[0] == SECURITY_BINARY:
            return CommandResult(returncode=0, stdout=self.identity_listing.encode("utf-8"))
        if argv[0] == OPENSSL_BINARY:
            content = Path(argv[-1]).read_bytes()
            if content.startswith(BAD_SIGNATURE_MARKER):
                return CommandResult(returncode=4, stdout=b"", stderr=b"Verification failure")
            return CommandResult(returncode=0, stdout=content)
        raise AssertionError(f"unexpected command: {argv}")

    def count(self, binary: str) -> int:
        return sum(1 for call in self.calls if call[0] == binary)


@pytest.fixture(scope="session")
def fixtures_root() -> Path:
    """Return root directory for test fixtures."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def runner(fixtures_root: Path) -> FakeRunner:
    return FakeRunner((fixtures_root / "find_identity.txt").read_text(encoding="utf-8"))


@pytest.fixture
def profiles_dir(tmp_path: Path) -> Path:
    path = tmp_path / "Provisioning Profiles"
    path.mkdir()
    return path


@pytest.fixture
def cache(tmp_path: Path, clock: FakeClock) -> GlobalCache:
    return GlobalCache(tmp_path / "cache", clock=clock)


@pytest.fixture
def discovery(cache: GlobalCache, runner: FakeRunner, profiles_dir: Path, clock: FakeClock) -> SigningDiscovery:
    return SigningDiscovery(cache=cache, runner=runner, profiles_dir=profiles_dir, clock=clock, max_workers=2)


def profile_document(
    *,
    app_id: str | None = "AB12CD34EF.com.acme.*",
    team_ids: list[str] | None = None,
    name: str | None = "Acme Wildcard",
    platforms: list[str] | None = None,
    expires_at: datetime | None = None,
) -> dict[str, Any]:
    """Build the plist dictionary a provisioning profile decodes to."""
    document: dict[str, Any] = {
        "TeamIdentifier": ["AB12CD34EF"] if team_ids is None else team_ids,
        "Platform": ["iOS"] if platforms is None else platforms,
        # plistlib writes naive datetimes as UTC.
        "ExpirationDate": (expires_at or NOW + timedelta(days=3650)).astimezone(UTC).replace(tzinfo=None),
    }
    if name is not None:
        document["AppIDName"] = name
    if app_id is not None:
        document["Entitlements"] = {"application-identifier": app_id, "get-task-allow": True}
    return document


@pytest.fixture
def write_profile(profiles_dir: Path) -> Callable[..., Path]:
    """Write a fake ``.mobileprovision`` holding a plain XML plist."""

    def _write(uuid: str, **fields: Any) -> Path:
        path = profiles_dir / f"{uuid}.mobileprovision"
        path.write_bytes(plistlib.dumps(profile_document(**fields), fmt=plistlib.FMT_XML))
        return path

    return _write


@pytest.fixture
def make_profile() -> Callable[..., ProvisioningProfile]:
    """Build an in-memory profile for matching tests."""

    def _make(
        pattern: str,
        *,
        team_id: str = "TEAM1",
        platforms: tuple[str, ...] = ("iOS",),
        is_expired: bool = False,
        name: str | None = None,
        uuid: str | None = None,
    ) -> ProvisioningProfile:
        uuid = uuid or f"{team_id}-{pattern}"
        return ProvisioningProfile(
            uuid=uuid,
            name=name or f"{team_id} {pattern}",
            path=f"/profiles/{uuid}.mobileprovision",
            team_id=team_id,
            bundle_id_pattern=pattern,
            platforms=platforms,
            expires_at=NOW - timedelta(days=1) if is_expired else NOW + timedelta(days=30),
            is_wildcard="*" in pattern,
            is_expired=is_expired,
        )

    return _make


@pytest.fixture
def make_identity() -> Callable[..., SigningIdentity]:
    def _make(name: str, *, digest: str | None = None, team_id: str | None = "TEAM1") -> SigningIdentity:
        return SigningIdentity(id=digest or name.encode("utf-8").hex().upper()[:40], name=name, team_id=team_id)

    return _make
