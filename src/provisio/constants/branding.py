"""Branding constants for terminal output."""

from __future__ import annotations

BRAND_NAME: str = "PROVISIO"
ASCII_LOGO_LINES: tuple[str, ...] = (
    ">_ PROVISIO",
    "     // code signing without the clicking",
)
CLI_DESCRIPTION: str = "\n".join((*ASCII_LOGO_LINES, "", f"{BRAND_NAME} signing resolver"))
