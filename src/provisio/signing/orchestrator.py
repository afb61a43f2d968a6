"""End-to-end signing resolution.

``resolve_signing`` is the entry point the build step calls: it discovers
signing material (through the cache), honours pinned choices, ranks the rest,
and writes the entitlements plist the signer will embed.
"""

from __future__ import annotations

import logging
from pathlib import Path

from provisio.exceptions import OverrideNotFoundError
from provisio.model import ProvisioningProfile, ResolvedSigning, SigningData, SigningIdentity
from provisio.signing.discovery import SigningDiscovery
from provisio.signing.entitlements import generate_entitlements
from provisio.signing.matching import (
    find_identity_override,
    find_matching_identity,
    find_matching_profile,
    find_profile_override,
)
from provisio.types import SigningOverrides

logger = logging.getLogger(__name__)


def resolve_signing(
    bundle_id: str,
    platform: str,
    project_dir: Path,
    overrides: SigningOverrides | None = None,
    *,
    discovery: SigningDiscovery | None = None,
    force_refresh: bool = False,
) -> ResolvedSigning:
    """Resolve identity, profile and entitlements for ``bundle_id``.

    A pinned profile or identity that cannot be found is an error; there is
    no fallback to automatic matching once the user has made a choice.
    """
    overrides = overrides or SigningOverrides()
    discovery = discovery or SigningDiscovery()
    data = discovery.discover_all(force_refresh=force_refresh)

    profile = _resolve_profile(bundle_id, platform, data, overrides)
    identity = _resolve_identity(profile, data, overrides)

    entitlements_path = generate_entitlements(bundle_id, profile.team_id, project_dir)
    logger.info(
        "Resolved %s: profile %r (%s), identity %r",
        bundle_id,
        profile.name,
        profile.bundle_id_pattern,
        identity.name,
    )

    return ResolvedSigning(
        identity=identity,
        profile=profile,
        team_id=profile.team_id,
        entitlements_path=str(entitlements_path),
    )


def _resolve_profile(
    bundle_id: str,
    platform: str,
    data: SigningData,
    overrides: SigningOverrides,
) -> ProvisioningProfile:
    if overrides.profile is not None:
        pinned = find_profile_override(overrides.profile, data.profiles)
        if pinned is None:
            raise OverrideNotFoundError("profile", overrides.profile)
        return pinned

    candidates = data.profiles
    if overrides.team is not None:
        candidates = tuple(profile for profile in candidates if profile.team_id == overrides.team)
    return find_matching_profile(bundle_id, platform, candidates)


def _resolve_identity(
    profile: ProvisioningProfile,
    data: SigningData,
    overrides: SigningOverrides,
) -> SigningIdentity:
    if overrides.identity is not None:
        pinned = find_identity_override(overrides.identity, data.identities)
        if pinned is None:
            raise OverrideNotFoundError("identity", overrides.identity)
        return pinned

    return find_matching_identity(profile.team_id, data.identities)
