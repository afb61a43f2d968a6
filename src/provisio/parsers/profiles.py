"""Verification and decoding of ``.mobileprovision`` files.

A provisioning profile is a CMS-signed XML property list. Verification is
delegated to ``openssl smime``; the recovered plist is validated against
``PROFILE_DOCUMENT_SCHEMA`` before any field is read, so a malformed profile
produces a :class:`ProfileDecodeError` describing what is wrong instead of a
partially filled record.
"""

from __future__ import annotations

from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from jsonschema import Draft202012Validator, validators
from jsonschema.exceptions import best_match

from provisio.constants.discovery import OPENSSL_BINARY, SMIME_VERIFY_ARGS, WILDCARD
from provisio.constants.profile_schema import (
    APP_ID_NAME_KEY,
    APPLICATION_IDENTIFIER_KEY,
    ENTITLEMENTS_KEY,
    EXPIRATION_DATE_KEY,
    PLATFORM_KEY,
    PROFILE_DOCUMENT_SCHEMA,
    TEAM_IDENTIFIER_KEY,
)
from provisio.exceptions import ProfileDecodeError
from provisio.io import loads_plist
from provisio.model import ProvisioningProfile
from provisio.runner import CommandRunner

_PROFILE_TYPE_CHECKER = Draft202012Validator.TYPE_CHECKER.redefine(
    "datetime",
    lambda _checker, instance: isinstance(instance, datetime),
)
ProfileDocumentValidator = validators.extend(Draft202012Validator, type_checker=_PROFILE_TYPE_CHECKER)
_VALIDATOR = ProfileDocumentValidator(PROFILE_DOCUMENT_SCHEMA)


def decode_profile(path: Path, *, runner: CommandRunner, now: datetime) -> ProvisioningProfile:
    """Verify ``path`` with openssl and decode it into a profile.

    ``now`` is the reference used for ``is_expired``.
    """
    argv = (OPENSSL_BINARY, *SMIME_VERIFY_ARGS, str(path))
    try:
        result = runner.run(argv)
    except OSError as exc:
        raise ProfileDecodeError(path, f"cannot run verifier ({exc})") from exc

    if not result.ok:
        detail = result.stderr.decode("utf-8", errors="replace").strip() or f"exit status {result.returncode}"
        raise ProfileDecodeError(path, f"signature verification failed: {detail}")

    try:
        document = loads_plist(result.stdout, source=str(path))
    except ValueError as exc:
        raise ProfileDecodeError(path, str(exc)) from exc

    return parse_profile_document(document, path=path, now=now)


def parse_profile_document(document: dict[str, Any], *, path: Path, now: datetime) -> ProvisioningProfile:
    """Build a profile from an already-decoded plist dictionary."""
    error = best_match(_VALIDATOR.iter_errors(document))
    if error is not None:
        location = "/".join(str(part) for part in error.absolute_path) or "<root>"
        raise ProfileDecodeError(path, f"{location}: {error.message}")

    team_ids = document.get(TEAM_IDENTIFIER_KEY, [])
    # Multi-team profiles are collapsed onto their first team.
    team_id = team_ids[0] if team_ids else ""

    expires_at = _as_utc(document.get(EXPIRATION_DATE_KEY, now))
    entitlements = document.get(ENTITLEMENTS_KEY, {})
    application_identifier = entitlements.get(APPLICATION_IDENTIFIER_KEY)
    pattern = bundle_id_pattern_from(application_identifier) if application_identifier is not None else WILDCARD

    return ProvisioningProfile(
        uuid=path.stem,
        name=document.get(APP_ID_NAME_KEY, path.stem),
        path=str(path),
        team_id=team_id,
        bundle_id_pattern=pattern,
        platforms=tuple(document.get(PLATFORM_KEY, [])),
        expires_at=expires_at,
        is_wildcard=WILDCARD in pattern,
        is_expired=expires_at < _as_utc(now),
    )


def bundle_id_pattern_from(application_identifier: str) -> str:
    """Strip the ``TEAMID.`` prefix from an application identifier."""
    _team, _separator, pattern = application_identifier.partition(".")
    return pattern


def _as_utc(value: datetime) -> datetime:
    # plistlib yields naive datetimes that are already in UTC.
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)
