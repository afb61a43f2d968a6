"""Ranking of provisioning profiles and identities against a bundle id.

These are pure functions over already-discovered data; nothing here touches
the keychain, the filesystem or the cache.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from provisio.constants.discovery import DEVELOPMENT_MARKER
from provisio.exceptions import NoMatchingIdentityError, NoMatchingProfileError
from provisio.model import ProvisioningProfile, SigningData, SigningIdentity, SigningOption


def wildcard_matches(bundle_id: str, profile: ProvisioningProfile) -> bool:
    """Return True when a wildcard profile's literal prefix starts ``bundle_id``."""
    return profile.is_wildcard and bundle_id.startswith(profile.literal_prefix)


def find_matching_profile(
    bundle_id: str,
    platform: str,
    profiles: Sequence[ProvisioningProfile],
) -> ProvisioningProfile:
    """Pick the best valid profile for ``bundle_id`` on ``platform``.

    An exact pattern always beats a wildcard. Among wildcards, the longest
    literal prefix wins; ties keep discovery order.
    """
    candidates = [profile for profile in profiles if not profile.is_expired and profile.supports_platform(platform)]

    best = _most_specific(bundle_id, candidates)
    if best is None:
        raise NoMatchingProfileError(bundle_id, platform, tuple(profiles))
    return best


def find_matching_identity(
    team_id: str,
    identities: Sequence[SigningIdentity],
    preferred_name: str | None = None,
) -> SigningIdentity:
    """Pick an identity for ``team_id``: preferred name, then Development, then first."""
    team_identities = [identity for identity in identities if identity.team_id == team_id]
    if not team_identities:
        raise NoMatchingIdentityError(team_id, tuple(identities))

    if preferred_name is not None:
        for identity in team_identities:
            if preferred_name in identity.name:
                return identity

    return _prefer_development(team_identities)


def list_signing_options(
    bundle_id: str,
    data: SigningData,
    *,
    team: str | None = None,
    platform: str | None = None,
) -> list[SigningOption]:
    """Return one option per team able to sign ``bundle_id``.

    Options with an exact profile sort before wildcard ones, then by team id.
    Teams without an identity in the keychain are left out.
    """
    valid_profiles = [
        profile
        for profile in data.profiles
        if not profile.is_expired and (platform is None or profile.supports_platform(platform))
    ]

    options: list[SigningOption] = []
    for team_id in sorted({profile.team_id for profile in valid_profiles}):
        if team is not None and team_id != team:
            continue

        best = _most_specific(bundle_id, [profile for profile in valid_profiles if profile.team_id == team_id])
        if best is None:
            continue

        team_identities = [identity for identity in data.identities if identity.team_id == team_id]
        if not team_identities:
            continue
        identity = _prefer_development(team_identities)

        options.append(
            SigningOption(
                team_id=team_id,
                identity=identity.name,
                profile=best.name,
                profile_path=best.path,
                is_wildcard=best.is_wildcard,
                bundle_id_pattern=best.bundle_id_pattern,
            )
        )

    options.sort(key=lambda option: (option.is_wildcard, option.team_id))
    return options


def find_profile_override(value: str, profiles: Iterable[ProvisioningProfile]) -> ProvisioningProfile | None:
    """Find a pinned profile by path substring or exact name."""
    for profile in profiles:
        if value in profile.path or profile.name == value:
            return profile
    return None


def find_identity_override(value: str, identities: Iterable[SigningIdentity]) -> SigningIdentity | None:
    """Find a pinned identity by name substring or exact digest."""
    for identity in identities:
        if value in identity.name or identity.id == value:
            return identity
    return None


def _most_specific(bundle_id: str, profiles: Sequence[ProvisioningProfile]) -> ProvisioningProfile | None:
    for profile in profiles:
        if profile.bundle_id_pattern == bundle_id:
            return profile

    wildcards = sorted(
        (profile for profile in profiles if profile.is_wildcard),
        key=lambda profile: len(profile.literal_prefix),
        reverse=True,
    )
    for profile in wildcards:
        if wildcard_matches(bundle_id, profile):
            return profile
    return None


def _prefer_development(identities: Sequence[SigningIdentity]) -> SigningIdentity:
    for identity in identities:
        if DEVELOPMENT_MARKER in identity.name:
            return identity
    return identities[0]
