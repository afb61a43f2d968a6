"""Core data models for Provisio."""

from .entities import (
    ProvisioningProfile,
    ResolvedSigning,
    SigningData,
    SigningIdentity,
    SigningOption,
    SigningStatus,
)

__all__ = [
    "ProvisioningProfile",
    "ResolvedSigning",
    "SigningData",
    "SigningIdentity",
    "SigningOption",
    "SigningStatus",
]
