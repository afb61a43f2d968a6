"""Root exception for Provisio."""

from __future__ import annotations


class ProvisioError(Exception):
    """Base class for all errors raised by Provisio."""
