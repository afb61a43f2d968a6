"""Tests for identity and profile discovery through the cache."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import timedelta
from pathlib import Path

import pytest
from conftest import BAD_SIGNATURE_MARKER, NOW, FakeClock, FakeRunner

from provisio.constants.cache import SIGNING_TTL_SECONDS
from provisio.constants.discovery import NO_IDENTITIES_ISSUE, NO_PROFILES_ISSUE, OPENSSL_BINARY, SECURITY_BINARY
from provisio.exceptions import StoreUnavailableError
from provisio.signing.cache import GlobalCache
from provisio.signing.discovery import SigningDiscovery


def test_discover_all_collects_identities_and_profiles(
    discovery: SigningDiscovery,
    write_profile: Callable[..., Path],
) -> None:
    write_profile("B-exact", app_id="AB12CD34EF.com.acme.app", name="Acme App")
    write_profile("A-wild", app_id="AB12CD34EF.com.acme.*", name="Acme Wildcard")

    data = discovery.discover_all()

    assert len(data.identities) == 3
    assert data.default_team_id == "AB12CD34EF"
    assert [profile.uuid for profile in data.profiles] == ["A-wild", "B-exact"]


def test_second_call_within_ttl_uses_cache(
    discovery: SigningDiscovery,
    runner: FakeRunner,
    write_profile: Callable[..., Path],
    clock: FakeClock,
) -> None:
    write_profile("one")

    first = discovery.discover_all()
    clock.advance(SIGNING_TTL_SECONDS - 1)
    second = discovery.discover_all()

    assert first == second
    assert runner.count(SECURITY_BINARY) == 1
    assert runner.count(OPENSSL_BINARY) == 1


def test_call_after_ttl_rediscovers(
    discovery: SigningDiscovery,
    runner: FakeRunner,
    write_profile: Callable[..., Path],
    clock: FakeClock,
) -> None:
    write_profile("one")

    discovery.discover_all()
    clock.advance(SIGNING_TTL_SECONDS)
    write_profile("two")
    data = discovery.discover_all()

    assert runner.count(SECURITY_BINARY) == 2
    assert [profile.uuid for profile in data.profiles] == ["one", "two"]


def test_force_refresh_bypasses_and_rewrites_cache(
    discovery: SigningDiscovery,
    runner: FakeRunner,
    cache: GlobalCache,
    write_profile: Callable[..., Path],
) -> None:
    discovery.discover_all()
    write_profile("late")

    refreshed = discovery.discover_all(force_refresh=True)

    assert runner.count(SECURITY_BINARY) == 2
    assert [profile.uuid for profile in refreshed.profiles] == ["late"]
    assert cache.get_signing() == refreshed


def test_corrupt_cache_falls_back_to_discovery(
    discovery: SigningDiscovery,
    runner: FakeRunner,
    cache: GlobalCache,
) -> None:
    path = cache.path_for("signing")
    path.parent.mkdir(parents=True)
    path.write_text("{", encoding="utf-8")

    data = discovery.discover_all()

    assert runner.count(SECURITY_BINARY) == 1
    assert len(data.identities) == 3


def test_unwritable_cache_is_not_fatal(
    tmp_path: Path,
    runner: FakeRunner,
    profiles_dir: Path,
    clock: FakeClock,
    caplog: pytest.LogCaptureFixture,
) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory", encoding="utf-8")
    discovery = SigningDiscovery(
        cache=GlobalCache(blocker / "cache", clock=clock),
        runner=runner,
        profiles_dir=profiles_dir,
        clock=clock,
    )

    with caplog.at_level(logging.WARNING, logger="provisio.signing.discovery"):
        data = discovery.discover_all()

    assert len(data.identities) == 3
    assert "Failed to write signing cache" in caplog.text


def test_profile_with_invalid_date_is_skipped(
    discovery: SigningDiscovery,
    profiles_dir: Path,
    write_profile: Callable[..., Path],
) -> None:
    write_profile("good")
    (profiles_dir / "bad-date.mobileprovision").write_bytes(
        b'<?xml version="1.0" encoding="UTF-8"?>\n'
        b'<plist version="1.0"><dict>'
        b"<key>AppIDName</key><string>Bad Date</string>"
        b"<key>ExpirationDate</key><date>not-a-date</date>"
        b"</dict></plist>"
    )

    data = discovery.discover_all(force_refresh=True)

    assert [profile.uuid for profile in data.profiles] == ["good"]


def test_bad_profiles_are_skipped(
    discovery: SigningDiscovery,
    profiles_dir: Path,
    write_profile: Callable[..., Path],
    caplog: pytest.LogCaptureFixture,
) -> None:
    write_profile("good")
    (profiles_dir / "tampered.mobileprovision").write_bytes(BAD_SIGNATURE_MARKER)
    (profiles_dir / "broken.mobileprovision").write_bytes(b"<?xml version='1.0'?><plist>")
    (profiles_dir / "notes.txt").write_text("ignored", encoding="utf-8")

    with caplog.at_level(logging.WARNING, logger="provisio.signing.discovery"):
        profiles = discovery.discover_profiles()

    assert [profile.uuid for profile in profiles] == ["good"]
    assert caplog.text.count("Skipping provisioning profile") == 2


def test_expiry_is_evaluated_against_discovery_clock(
    discovery: SigningDiscovery,
    write_profile: Callable[..., Path],
) -> None:
    write_profile("old", expires_at=NOW - timedelta(days=1))
    write_profile("new", expires_at=NOW + timedelta(days=1))

    profiles = {profile.uuid: profile for profile in discovery.discover_profiles()}

    assert profiles["old"].is_expired is True
    assert profiles["new"].is_expired is False


def test_missing_profiles_directory_yields_no_profiles(cache: GlobalCache, runner: FakeRunner, tmp_path: Path) -> None:
    discovery = SigningDiscovery(cache=cache, runner=runner, profiles_dir=tmp_path / "absent")

    assert discovery.discover_profiles() == []


def test_unlistable_profiles_directory_is_unavailable(cache: GlobalCache, runner: FakeRunner, tmp_path: Path) -> None:
    not_a_dir = tmp_path / "profiles"
    not_a_dir.write_text("", encoding="utf-8")
    discovery = SigningDiscovery(cache=cache, runner=runner, profiles_dir=not_a_dir)

    with pytest.raises(StoreUnavailableError, match="profile directory"):
        discovery.discover_profiles()


def test_missing_security_binary_is_unavailable(discovery: SigningDiscovery, runner: FakeRunner) -> None:
    runner.missing_binaries.add(SECURITY_BINARY)

    with pytest.raises(StoreUnavailableError, match="keychain is unavailable"):
        discovery.discover_all()


def test_failed_identity_listing_is_still_parsed(
    discovery: SigningDiscovery,
    runner: FakeRunner,
    monkeypatch: pytest.MonkeyPatch,
    caplog: pytest.LogCaptureFixture,
) -> None:
    original = runner.run

    def run(argv: tuple[str, ...]):
        result = original(argv)
        if argv[0] == SECURITY_BINARY:
            return type(result)(returncode=1, stdout=result.stdout)
        return result

    monkeypatch.setattr(runner, "run", run)

    with caplog.at_level(logging.WARNING, logger="provisio.signing.discovery"):
        identities = discovery.discover_identities()

    assert len(identities) == 3
    assert "exited with status 1" in caplog.text


def test_status_when_configured(discovery: SigningDiscovery, write_profile: Callable[..., Path]) -> None:
    write_profile("good")
    write_profile("expired", expires_at=NOW - timedelta(days=1))

    status = discovery.get_status()

    assert status.configured is True
    assert status.team_id == "AB12CD34EF"
    assert status.identity_count == 3
    assert status.profile_count == 1
    assert status.issues == ()


def test_status_reports_issues(discovery: SigningDiscovery, runner: FakeRunner) -> None:
    runner.identity_listing = "     0 valid identities found\n"

    status = discovery.get_status()

    assert status.configured is False
    assert status.team_id is None
    assert status.issues == (NO_IDENTITIES_ISSUE, NO_PROFILES_ISSUE)
