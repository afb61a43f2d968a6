"""Shared constants for Provisio."""
