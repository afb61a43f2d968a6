"""Schema for the property list embedded in a provisioning profile.

Only the fields Provisio reads are described. Every field is optional; when
present it must have the declared type.
"""

from __future__ import annotations

from typing import Any

APP_ID_NAME_KEY: str = "AppIDName"
TEAM_IDENTIFIER_KEY: str = "TeamIdentifier"
EXPIRATION_DATE_KEY: str = "ExpirationDate"
PLATFORM_KEY: str = "Platform"
ENTITLEMENTS_KEY: str = "Entitlements"
APPLICATION_IDENTIFIER_KEY: str = "application-identifier"

# "datetime" is a custom type registered on the validator; plistlib decodes <date> to datetime.
PROFILE_DOCUMENT_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        APP_ID_NAME_KEY: {"type": "string"},
        TEAM_IDENTIFIER_KEY: {"type": "array", "items": {"type": "string"}},
        EXPIRATION_DATE_KEY: {"type": "datetime"},
        PLATFORM_KEY: {"type": "array", "items": {"type": "string"}},
        ENTITLEMENTS_KEY: {
            "type": "object",
            "properties": {
                APPLICATION_IDENTIFIER_KEY: {"type": "string"},
            },
        },
    },
}
