"""Frozen dataclasses for discovered signing material and resolution results."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from provisio.constants.discovery import WILDCARD
from provisio.types import JsonObject


def _require_str(raw: dict[str, Any], key: str) -> str:
    value = raw[key]
    if not isinstance(value, str):
        raise TypeError(f"{key} must be a string")
    return value


def _optional_str(raw: dict[str, Any], key: str) -> str | None:
    value = raw.get(key)
    if value is not None and not isinstance(value, str):
        raise TypeError(f"{key} must be a string or null")
    return value


def _require_bool(raw: dict[str, Any], key: str) -> bool:
    value = raw[key]
    if not isinstance(value, bool):
        raise TypeError(f"{key} must be a boolean")
    return value


@dataclass(frozen=True)
class SigningIdentity:
    """A code signing certificate available in the keychain."""

    id: str
    name: str
    team_id: str | None = None

    def to_dict(self) -> JsonObject:
        return {"id": self.id, "name": self.name, "team_id": self.team_id}

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> SigningIdentity:
        return cls(
            id=_require_str(raw, "id"),
            name=_require_str(raw, "name"),
            team_id=_optional_str(raw, "team_id"),
        )


@dataclass(frozen=True)
class ProvisioningProfile:
    """A decoded provisioning profile.

    ``is_expired`` is evaluated once, against the clock of the discovery that
    produced the profile. Profiles served from the cache keep that value even
    if the expiration date has passed since.
    """

    uuid: str
    name: str
    path: str
    team_id: str
    bundle_id_pattern: str
    platforms: tuple[str, ...]
    expires_at: datetime
    is_wildcard: bool
    is_expired: bool

    @property
    def literal_prefix(self) -> str:
        """Pattern text before the trailing wildcard."""
        return self.bundle_id_pattern.rstrip(WILDCARD)

    def supports_platform(self, platform: str) -> bool:
        wanted = platform.lower()
        return any(wanted in candidate.lower() for candidate in self.platforms)

    def to_dict(self) -> JsonObject:
        return {
            "uuid": self.uuid,
            "name": self.name,
            "path": self.path,
            "team_id": self.team_id,
            "bundle_id_pattern": self.bundle_id_pattern,
            "platforms": list(self.platforms),
            "expires_at": self.expires_at.isoformat(),
            "is_wildcard": self.is_wildcard,
            "is_expired": self.is_expired,
        }

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> ProvisioningProfile:
        platforms = raw["platforms"]
        if not isinstance(platforms, list) or not all(isinstance(item, str) for item in platforms):
            raise TypeError("platforms must be a list of strings")
        return cls(
            uuid=_require_str(raw, "uuid"),
            name=_require_str(raw, "name"),
            path=_require_str(raw, "path"),
            team_id=_require_str(raw, "team_id"),
            bundle_id_pattern=_require_str(raw, "bundle_id_pattern"),
            platforms=tuple(platforms),
            expires_at=datetime.fromisoformat(_require_str(raw, "expires_at")),
            is_wildcard=_require_bool(raw, "is_wildcard"),
            is_expired=_require_bool(raw, "is_expired"),
        )


@dataclass(frozen=True)
class SigningData:
    """Everything one discovery pass found. This is the unit that gets cached."""

    identities: tuple[SigningIdentity, ...] = ()
    profiles: tuple[ProvisioningProfile, ...] = ()
    default_team_id: str | None = None

    def to_dict(self) -> JsonObject:
        return {
            "identities": [identity.to_dict() for identity in self.identities],
            "profiles": [profile.to_dict() for profile in self.profiles],
            "default_team_id": self.default_team_id,
        }

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> SigningData:
        identities = raw["identities"]
        profiles = raw["profiles"]
        if not isinstance(identities, list) or not isinstance(profiles, list):
            raise TypeError("identities and profiles must be lists")
        return cls(
            identities=tuple(SigningIdentity.from_dict(item) for item in identities),
            profiles=tuple(ProvisioningProfile.from_dict(item) for item in profiles),
            default_team_id=_optional_str(raw, "default_team_id"),
        )


@dataclass(frozen=True)
class ResolvedSigning:
    """Identity, profile and entitlements ready to hand to the signer."""

    identity: SigningIdentity
    profile: ProvisioningProfile
    team_id: str
    entitlements_path: str

    def to_dict(self) -> JsonObject:
        return {
            "identity": self.identity.to_dict(),
            "profile": self.profile.to_dict(),
            "team_id": self.team_id,
            "entitlements_path": self.entitlements_path,
        }


@dataclass(frozen=True)
class SigningOption:
    """One team's best identity/profile pairing for a bundle id."""

    team_id: str
    identity: str
    profile: str
    profile_path: str
    is_wildcard: bool
    bundle_id_pattern: str

    def to_dict(self) -> JsonObject:
        return {
            "team_id": self.team_id,
            "identity": self.identity,
            "profile": self.profile,
            "profile_path": self.profile_path,
            "is_wildcard": self.is_wildcard,
            "bundle_id_pattern": self.bundle_id_pattern,
        }


@dataclass(frozen=True)
class SigningStatus:
    """Quick summary of whether signing is usable on this machine."""

    configured: bool
    team_id: str | None
    identity_count: int
    profile_count: int
    issues: tuple[str, ...] = ()

    def to_dict(self) -> JsonObject:
        return {
            "configured": self.configured,
            "team_id": self.team_id,
            "identity_count": self.identity_count,
            "profile_count": self.profile_count,
            "issues": list(self.issues),
        }
