"""Entitlement keys and the derived-state location of the entitlements plist."""

from __future__ import annotations

DERIVED_DIR: str = ".provisio/derived"
ENTITLEMENTS_FILENAME: str = "Entitlements.plist"
ENTITLEMENTS_TEMP_PREFIX: str = ".entitlements-"
ENTITLEMENTS_TEMP_SUFFIX: str = ".tmp"

APPLICATION_IDENTIFIER_KEY: str = "application-identifier"
TEAM_IDENTIFIER_KEY: str = "com.apple.developer.team-identifier"
GET_TASK_ALLOW_KEY: str = "get-task-allow"
KEYCHAIN_ACCESS_GROUPS_KEY: str = "keychain-access-groups"
