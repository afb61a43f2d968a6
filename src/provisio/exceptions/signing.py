"""Resolution and store errors surfaced to callers."""

from __future__ import annotations

from typing import TYPE_CHECKING

from provisio.exceptions.base import ProvisioError

if TYPE_CHECKING:
    from provisio.model import ProvisioningProfile, SigningIdentity


class SigningError(ProvisioError):
    """Base class for failures to pick an identity or profile."""


class NoMatchingProfileError(SigningError):
    """No valid provisioning profile covers the requested bundle id."""

    def __init__(
        self,
        bundle_id: str,
        platform: str | None = None,
        available: tuple[ProvisioningProfile, ...] = (),
    ) -> None:
        self.bundle_id = bundle_id
        self.platform = platform
        self.available = available
        message = f"No matching provisioning profile for {bundle_id}"
        if platform:
            message = f"{message} on {platform}"
        if available:
            patterns = ", ".join(f"{profile.name} ({profile.bundle_id_pattern})" for profile in available)
            message = f"{message}. Available profiles: {patterns}"
        super().__init__(message)


class NoMatchingIdentityError(SigningError):
    """No signing identity belongs to the requested team."""

    def __init__(self, team_id: str, available: tuple[SigningIdentity, ...] = ()) -> None:
        self.team_id = team_id
        self.available = available
        message = f"No signing identity for team {team_id}"
        if available:
            message = f"{message}. Available identities: {', '.join(identity.name for identity in available)}"
        super().__init__(message)


class OverrideNotFoundError(SigningError):
    """A pinned identity or profile is not present in the discovered data."""

    def __init__(self, kind: str, value: str) -> None:
        self.kind = kind
        self.value = value
        super().__init__(f"Configured {kind} not found: {value}")


class StoreUnavailableError(ProvisioError):
    """The keychain or profile directory could not be read at all."""

    def __init__(self, store: str, reason: str) -> None:
        self.store = store
        self.reason = reason
        super().__init__(f"{store} is unavailable: {reason}")
