"""
srkit: sr25519 for Python

Schnorr signatures over the Ristretto group and hierarchical key derivation,
byte-compatible with Substrate and polkadot-js.
"""

from typing import Optional, Union

from .constants import ExpansionMode, SIGNING_CTX
from .exceptions import (
    SrkitError,
    ValidationError,
    InvalidLengthError,
    InvalidEncodingError,
    InconsistentKeypairError,
    CryptoError,
    SerializationError,
)
from .crypto import (
    MiniSecretKey,
    SecretKey,
    PublicKey,
    Keypair,
    ChainCode,
    Signature,
    DeriveJunction,
    derive_path,
    derive_public_path,
)
from .api import (
    keypair_from_seed,
    sign,
    verify,
    derive_keypair_hard,
    derive_keypair_soft,
    derive_public_soft,
)
from .types import BytesLike

__version__ = "1.0.0"
__author__ = "srkit developers"

__all__ = [
    # Byte-level interface
    "keypair_from_seed",
    "sign",
    "verify",
    "derive_keypair_hard",
    "derive_keypair_soft",
    "derive_public_soft",

    # Constants
    "ExpansionMode",
    "SIGNING_CTX",

    # Exceptions
    "SrkitError",
    "ValidationError",
    "InvalidLengthError",
    "InvalidEncodingError",
    "InconsistentKeypairError",
    "CryptoError",
    "SerializationError",

    # Keys
    "MiniSecretKey",
    "SecretKey",
    "PublicKey",
    "Keypair",
    "ChainCode",
    "Signature",
    "DeriveJunction",
    "derive_path",
    "derive_public_path",

    "create_keypair",
]


def create_keypair(
    seed: Optional[Union[BytesLike, MiniSecretKey]] = None,
    path: str = "",
    mode: ExpansionMode = ExpansionMode.ED25519
) -> Keypair:
    """
    Create a keypair, optionally derived along a path.

    Args:
        seed: 32-byte seed; a random one is generated if omitted
        path: Derivation path such as ``//Alice`` or ``//polkadot/0``
        mode: Seed expansion mode

    Returns:
        Keypair

    Example:
        >>> pair = srkit.create_keypair()
        >>> alice = srkit.create_keypair(dev_seed, "//Alice")
    """
    mini = MiniSecretKey.generate() if seed is None else MiniSecretKey(seed)
    return derive_path(mini.expand_to_keypair(mode), path)
