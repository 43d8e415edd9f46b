"""Ristretto255 group operations used by sr25519.

Points travel through srkit as their 32-byte canonical encodings and scalars
as Python ints. This module is the only place that talks to the group
backend (``oblivious``, which picks libsodium through ``rbcl`` when present
and falls back to pure-Python ``ge25519``).
"""

import ge25519
from oblivious.ristretto import point, scalar

from ..constants import GROUP_ORDER, PUBLIC_KEY_LENGTH
from ..exceptions import CryptoError
from ..utils.encoding import bytes_to_int

__all__ = [
    "IDENTITY",
    "is_canonical_encoding",
    "is_valid_point",
    "base_mul",
    "mul",
    "add",
    "sub",
]

FIELD_PRIME = 2**255 - 19

IDENTITY = bytes(PUBLIC_KEY_LENGTH)


def is_canonical_encoding(data: bytes) -> bool:
    """Check that bytes are a reduced, non-negative field element."""
    value = bytes_to_int(data)
    return value < FIELD_PRIME and value & 1 == 0


def is_valid_point(data: bytes) -> bool:
    """
    Check if bytes are the canonical encoding of a Ristretto point.

    Args:
        data: Candidate encoding

    Returns:
        True if the bytes decode to a group element
    """
    if len(data) != PUBLIC_KEY_LENGTH:
        return False
    if not is_canonical_encoding(data):
        return False
    return ge25519.ge25519_p3.from_bytes_ristretto255(bytes(data)) is not None


def _scalar(k: int) -> scalar:
    return scalar.from_int(k % GROUP_ORDER)


def _is_identity(p: bytes) -> bool:
    return bytes(p) == IDENTITY


def base_mul(k: int) -> bytes:
    """Multiply the Ristretto base point by ``k``."""
    if k % GROUP_ORDER == 0:
        return IDENTITY
    try:
        return bytes(point.base(_scalar(k)))
    except (RuntimeError, ValueError) as e:
        raise CryptoError(f"Base point multiplication failed: {e}") from e


def mul(k: int, p: bytes) -> bytes:
    """
    Multiply a point by ``k``.

    libsodium refuses products equal to the identity, so those are
    answered here without calling the backend.
    """
    if k % GROUP_ORDER == 0 or _is_identity(p):
        return IDENTITY
    try:
        return bytes(_scalar(k) * point(bytes(p)))
    except (RuntimeError, ValueError) as e:
        raise CryptoError(f"Point multiplication failed: {e}") from e


def add(p: bytes, q: bytes) -> bytes:
    """Add two points."""
    if _is_identity(p):
        return bytes(q)
    if _is_identity(q):
        return bytes(p)
    try:
        return bytes(point(bytes(p)) + point(bytes(q)))
    except (RuntimeError, ValueError) as e:
        raise CryptoError(f"Point addition failed: {e}") from e


def sub(p: bytes, q: bytes) -> bytes:
    """Subtract ``q`` from ``p``."""
    if _is_identity(q):
        return bytes(p)
    try:
        return bytes(point(bytes(p)) - point(bytes(q)))
    except (RuntimeError, ValueError) as e:
        raise CryptoError(f"Point subtraction failed: {e}") from e
