"""Type definitions for srkit."""

from ..types.common import (
    HexStr,
    SeedBytes,
    SecretKeyBytes,
    PublicKeyBytes,
    KeypairBytes,
    ChainCodeBytes,
    SignatureBytes,
    SS58Address,
    BytesLike,
)

__all__ = [
    "HexStr",
    "SeedBytes",
    "SecretKeyBytes",
    "PublicKeyBytes",
    "KeypairBytes",
    "ChainCodeBytes",
    "SignatureBytes",
    "SS58Address",
    "BytesLike",
]
