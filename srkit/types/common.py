"""Common type definitions for srkit."""

from typing import NewType, Union

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

# Basic types
HexStr = NewType("HexStr", str)
"""Hexadecimal string representation."""

# Key material
SeedBytes = NewType("SeedBytes", bytes)
"""32-byte mini secret key."""

SecretKeyBytes = NewType("SecretKeyBytes", bytes)
"""64-byte secret: cofactor-multiplied scalar followed by nonce seed."""

PublicKeyBytes = NewType("PublicKeyBytes", bytes)
"""32-byte compressed Ristretto point."""

KeypairBytes = NewType("KeypairBytes", bytes)
"""96-byte secret key followed by public key."""

ChainCodeBytes = NewType("ChainCodeBytes", bytes)
"""32-byte derivation chain code."""

SignatureBytes = NewType("SignatureBytes", bytes)
"""64-byte R and s, marker bit set."""

SS58Address = NewType("SS58Address", str)
"""Substrate SS58 address string."""

# Type aliases
BytesLike = Union[bytes, bytearray, memoryview, str]
"""Raw bytes or a hex string, with or without 0x prefix."""
