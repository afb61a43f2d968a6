"""Constants for signing identity and provisioning profile discovery."""

from __future__ import annotations

from pathlib import Path

SECURITY_BINARY: str = "/usr/bin/security"
FIND_IDENTITY_ARGS: tuple[str, ...] = ("find-identity", "-v", "-p", "codesigning")

OPENSSL_BINARY: str = "/usr/bin/openssl"
SMIME_VERIFY_ARGS: tuple[str, ...] = ("smime", "-verify", "-noverify", "-inform", "der", "-in")

PROFILES_DIR: Path = Path.home() / "Library" / "Developer" / "Xcode" / "UserData" / "Provisioning Profiles"
PROFILE_SUFFIX: str = ".mobileprovision"

DEFAULT_MAX_WORKERS: int = 4
WILDCARD: str = "*"
DEVELOPMENT_MARKER: str = "Development"
DEFAULT_PLATFORM: str = "iOS"
VALID_PLATFORMS: tuple[str, ...] = ("iOS", "macOS", "tvOS", "watchOS", "visionOS")

NO_IDENTITIES_ISSUE: str = "No signing identities found in keychain"
NO_PROFILES_ISSUE: str = "No valid provisioning profiles found"
