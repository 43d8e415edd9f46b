"""Validation utilities for srkit key material."""

import re
from typing import Union

from ..constants import (
    CHAIN_CODE_LENGTH,
    GROUP_ORDER,
    KEYPAIR_LENGTH,
    PUBLIC_KEY_LENGTH,
    SECRET_KEY_LENGTH,
    SEED_LENGTH,
    SIGNATURE_LENGTH,
    SIGNATURE_MARKER,
)
from ..crypto.ristretto import is_valid_point
from ..exceptions import InvalidEncodingError, InvalidLengthError, ValidationError
from ..types.common import BytesLike

__all__ = [
    "ValidationError",
    "to_bytes",
    "validate_length",
    "validate_seed",
    "validate_secret_key",
    "is_valid_public_key",
    "validate_public_key",
    "validate_keypair",
    "validate_chain_code",
    "is_valid_signature",
    "validate_signature",
]

HEX_PATTERN = re.compile(r"^[0-9a-fA-F]*$")


def to_bytes(data: BytesLike, name: str = "Value") -> bytes:
    """
    Normalize bytes-like input or a hex string to bytes.

    Args:
        data: Raw bytes or hex string (0x prefix optional)
        name: Name used in error messages

    Returns:
        Bytes

    Raises:
        InvalidEncodingError: If a string is not hexadecimal
    """
    if isinstance(data, str):
        if data.startswith(("0x", "0X")):
            data = data[2:]
        if not HEX_PATTERN.match(data) or len(data) % 2:
            raise InvalidEncodingError(f"{name} must be hexadecimal")
        return bytes.fromhex(data)

    if isinstance(data, (bytes, bytearray, memoryview)):
        return bytes(data)

    raise ValidationError(f"{name} must be bytes or a hex string, got {type(data).__name__}")


def validate_length(data: BytesLike, length: int, name: str) -> bytes:
    """
    Validate that input has an exact byte length.

    Raises:
        InvalidLengthError: If the length differs
    """
    data = to_bytes(data, name)
    if len(data) != length:
        raise InvalidLengthError(name, length, len(data))
    return data


def validate_seed(seed: BytesLike) -> bytes:
    """Validate a 32-byte seed. Any value is accepted."""
    return validate_length(seed, SEED_LENGTH, "Seed")


def validate_secret_key(secret: BytesLike) -> bytes:
    """
    Validate a 64-byte secret key.

    The scalar half is reduced lazily, so any 64-byte value is accepted.
    """
    return validate_length(secret, SECRET_KEY_LENGTH, "Secret key")


def is_valid_public_key(key: BytesLike) -> bool:
    """
    Check if public key is a valid Ristretto encoding.

    Args:
        key: Public key as hex string or bytes

    Returns:
        True if valid, False otherwise
    """
    try:
        return is_valid_point(validate_length(key, PUBLIC_KEY_LENGTH, "Public key"))
    except ValidationError:
        return False


def validate_public_key(key: BytesLike) -> bytes:
    """
    Validate public key and return as bytes.

    Args:
        key: Public key as hex string or bytes

    Returns:
        Public key as 32 bytes

    Raises:
        InvalidLengthError: If key is not 32 bytes
        InvalidEncodingError: If key is not a Ristretto point
    """
    key = validate_length(key, PUBLIC_KEY_LENGTH, "Public key")
    if not is_valid_point(key):
        raise InvalidEncodingError("Public key is not a valid Ristretto point")
    return key


def validate_keypair(keypair: BytesLike) -> bytes:
    """
    Validate a 96-byte keypair's layout and public key encoding.

    Consistency between secret and public halves is not checked here.
    """
    keypair = validate_length(keypair, KEYPAIR_LENGTH, "Keypair")
    if not is_valid_point(keypair[SECRET_KEY_LENGTH:]):
        raise InvalidEncodingError("Keypair public key is not a valid Ristretto point")
    return keypair


def validate_chain_code(chain_code: BytesLike) -> bytes:
    """Validate a 32-byte chain code. Any value is accepted."""
    return validate_length(chain_code, CHAIN_CODE_LENGTH, "Chain code")


def is_valid_signature(signature: BytesLike) -> bool:
    """Check if signature is well-formed."""
    try:
        validate_signature(signature)
        return True
    except ValidationError:
        return False


def validate_signature(signature: BytesLike) -> bytes:
    """
    Validate signature and return as bytes.

    Args:
        signature: 64-byte signature as hex string or bytes

    Returns:
        Signature bytes

    Raises:
        InvalidLengthError: If signature is not 64 bytes
        InvalidEncodingError: If R is not a point or s is not canonical
    """
    signature = validate_length(signature, SIGNATURE_LENGTH, "Signature")

    if not is_valid_point(signature[:32]):
        raise InvalidEncodingError("Signature R is not a valid Ristretto point")

    s_bytes = bytearray(signature[32:])
    s_bytes[31] &= ~SIGNATURE_MARKER & 0xff
    if int.from_bytes(s_bytes, "little") >= GROUP_ORDER:
        raise InvalidEncodingError("Signature s is not a canonical scalar")

    return signature
