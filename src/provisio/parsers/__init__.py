"""Parsers for raw keychain listings and provisioning profiles."""

from .identities import extract_team_id, parse_identity_line, parse_identity_listing
from .profiles import bundle_id_pattern_from, decode_profile, parse_profile_document

__all__ = [
    "bundle_id_pattern_from",
    "decode_profile",
    "extract_team_id",
    "parse_identity_line",
    "parse_identity_listing",
    "parse_profile_document",
]
