"""Parser for ``security find-identity`` listings."""

from __future__ import annotations

import logging

from provisio.model import SigningIdentity

logger = logging.getLogger(__name__)


def parse_identity_listing(text: str) -> list[SigningIdentity]:
    """Parse listing lines of the form ``1) <sha1> "Name (TEAMID)"``.

    Lines that do not start with a digit (headers, the trailing
    "N valid identities found" summary) are ignored, and so are malformed
    lines. Nothing here raises.
    """
    identities: list[SigningIdentity] = []
    for raw_line in text.splitlines():
        identity = parse_identity_line(raw_line)
        if identity is not None:
            identities.append(identity)
    return identities


def parse_identity_line(raw_line: str) -> SigningIdentity | None:
    """Parse a single listing line, or return None when it does not describe an identity."""
    line = raw_line.strip()
    if not line or not line[0].isdigit():
        return None

    paren_index = line.find(")")
    first_quote = line.find('"')
    if paren_index == -1 or first_quote == -1 or paren_index + 1 >= first_quote:
        logger.debug("Skipping identity line without digest: %r", line)
        return None

    digest = line[paren_index + 1 : first_quote].strip()

    last_quote = line.rfind('"')
    if last_quote == first_quote:
        logger.debug("Skipping identity line with unterminated name: %r", line)
        return None

    name = line[first_quote + 1 : last_quote]
    return SigningIdentity(id=digest, name=name, team_id=extract_team_id(name))


def extract_team_id(name: str) -> str | None:
    """Return the text inside the last parenthesised group of ``name``."""
    start = name.rfind("(")
    end = name.rfind(")")
    if start == -1 or end == -1 or end < start:
        return None
    return name[start + 1 : end]
