"""
Byte-level sr25519 interface.

Every function takes and returns raw bytes (hex strings are accepted as
input), mirroring the interface exposed to Substrate tooling.
"""

import logging

from .constants import KEYPAIR_LENGTH, SECRET_KEY_LENGTH, SIGNING_CTX
from .crypto.derive import hard_derive_keypair, soft_derive_keypair, soft_derive_public
from .crypto.keys import Keypair, PublicKey, SecretKey, expand
from .crypto.signature import sign as _sign
from .crypto.signature import verify as _verify
from .exceptions import InvalidLengthError
from .types.common import BytesLike, KeypairBytes, PublicKeyBytes, SignatureBytes
from .utils.validation import to_bytes

__all__ = [
    "keypair_from_seed",
    "sign",
    "verify",
    "derive_keypair_hard",
    "derive_keypair_soft",
    "derive_public_soft",
]

logger = logging.getLogger(__name__)


def keypair_from_seed(seed: BytesLike) -> KeypairBytes:
    """
    Expand a 32-byte seed into a 96-byte keypair.

    Args:
        seed: Mini secret key

    Returns:
        Secret key (64 bytes) followed by public key (32 bytes)

    Raises:
        InvalidLengthError: If seed is not 32 bytes
    """
    return expand(seed).to_bytes()


def sign(public: BytesLike, secret: BytesLike, message: bytes) -> SignatureBytes:
    """
    Sign a message under the ``substrate`` context.

    Args:
        public: 32-byte public key
        secret: 64-byte secret key
        message: Message bytes

    Returns:
        64-byte signature

    Raises:
        InvalidLengthError: If a key has the wrong length
        InvalidEncodingError: If the public key is not a valid point
    """
    signature = _sign(SecretKey.from_bytes(secret), PublicKey(public), bytes(message), SIGNING_CTX)
    return signature.to_bytes()


def verify(signature: BytesLike, message: bytes, public: BytesLike) -> bool:
    """
    Verify a signature under the ``substrate`` context.

    Returns:
        True if signature is valid; False for any malformed input
    """
    return _verify(signature, bytes(message), public, SIGNING_CTX)


def derive_keypair_hard(pair: BytesLike, cc: BytesLike) -> KeypairBytes:
    """
    Hard-derive a child keypair.

    Args:
        pair: 96-byte keypair or 64-byte secret key; only the secret is used
        cc: 32-byte chain code

    Returns:
        96-byte child keypair
    """
    data = to_bytes(pair, "Keypair")
    if len(data) == KEYPAIR_LENGTH:
        secret = Keypair.from_bytes(data).secret
    elif len(data) == SECRET_KEY_LENGTH:
        secret = SecretKey.from_bytes(data)
        logger.debug("Hard derivation from a bare secret key")
    else:
        raise InvalidLengthError(
            "Keypair",
            KEYPAIR_LENGTH,
            len(data),
            f"Keypair must be {SECRET_KEY_LENGTH} or {KEYPAIR_LENGTH} bytes, got {len(data)}",
        )

    return hard_derive_keypair(secret, cc).to_bytes()


def derive_keypair_soft(pair: BytesLike, cc: BytesLike) -> KeypairBytes:
    """
    Soft-derive a child keypair.

    Args:
        pair: 96-byte keypair
        cc: 32-byte chain code

    Returns:
        96-byte child keypair
    """
    return soft_derive_keypair(Keypair.from_bytes(pair), cc).to_bytes()


def derive_public_soft(public: BytesLike, cc: BytesLike) -> PublicKeyBytes:
    """
    Soft-derive a child public key.

    Args:
        public: 32-byte public key
        cc: 32-byte chain code

    Returns:
        32-byte child public key
    """
    return soft_derive_public(public, cc).to_bytes()
