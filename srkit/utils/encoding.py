"""Encoding and decoding utilities for srkit."""

import hashlib
from typing import Tuple, Union

from ..constants import COFACTOR, DEFAULT_SS58_PREFIX, GROUP_ORDER, PUBLIC_KEY_LENGTH
from ..exceptions import SerializationError, ValidationError
from ..types.common import HexStr, SS58Address

__all__ = [
    "hex_to_bytes",
    "bytes_to_hex",
    "int_to_bytes",
    "bytes_to_int",
    "scalar_to_bytes",
    "bytes_to_scalar",
    "divide_by_cofactor",
    "multiply_by_cofactor",
    "encode_compact",
    "decode_compact",
    "blake2b_256",
    "encode_base58",
    "decode_base58",
    "ss58_encode",
    "ss58_decode",
]

# Constants
BASE58_ALPHABET = "123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz"
SS58_CHECKSUM_PREFIX = b"SS58PRE"
SS58_CHECKSUM_LENGTH = 2


def hex_to_bytes(hex_str: Union[HexStr, str]) -> bytes:
    """
    Convert hex string to bytes.

    Args:
        hex_str: Hex string with or without 0x prefix

    Returns:
        Decoded bytes

    Raises:
        ValidationError: If hex string is invalid
    """
    try:
        # Remove 0x prefix if present
        if isinstance(hex_str, str) and hex_str.startswith(("0x", "0X")):
            hex_str = hex_str[2:]
        return bytes.fromhex(hex_str)
    except ValueError as e:
        raise ValidationError(f"Invalid hex string: {hex_str}") from e


def bytes_to_hex(data: bytes, prefix: bool = False) -> HexStr:
    """
    Convert bytes to hex string.

    Args:
        data: Bytes to encode
        prefix: Add 0x prefix

    Returns:
        Hex string
    """
    hex_str = bytes(data).hex()
    if prefix:
        hex_str = f"0x{hex_str}"
    return HexStr(hex_str)


def int_to_bytes(
    value: int,
    length: int,
    byteorder: str = "little",
    signed: bool = False
) -> bytes:
    """Convert integer to bytes with specified length."""
    return value.to_bytes(length, byteorder=byteorder, signed=signed)


def bytes_to_int(
    data: bytes,
    byteorder: str = "little",
    signed: bool = False
) -> int:
    """Convert bytes to integer."""
    return int.from_bytes(data, byteorder=byteorder, signed=signed)


def scalar_to_bytes(value: int) -> bytes:
    """Encode a scalar as its canonical 32-byte little-endian form."""
    return int_to_bytes(value % GROUP_ORDER, 32)


def bytes_to_scalar(data: bytes) -> int:
    """Decode little-endian bytes of any width into a scalar mod L."""
    return bytes_to_int(data) % GROUP_ORDER


def divide_by_cofactor(data: bytes) -> bytes:
    """
    Divide a 32-byte little-endian integer by the cofactor.

    The three low bits are discarded. Ed25519-style clamped keys are always
    multiples of the cofactor, so nothing is lost for them.
    """
    return int_to_bytes(bytes_to_int(data) // COFACTOR, 32)


def multiply_by_cofactor(data: bytes) -> bytes:
    """Multiply a 32-byte little-endian integer by the cofactor, mod 2^256."""
    return int_to_bytes((bytes_to_int(data) * COFACTOR) % 2**256, 32)


def encode_compact(n: int) -> bytes:
    """
    Encode integer as a SCALE compact integer.

    Args:
        n: Non-negative integer to encode

    Returns:
        Encoded compact bytes
    """
    if n < 0:
        raise SerializationError(f"Compact integers must be non-negative, got {n}")
    if n < 1 << 6:
        return bytes([n << 2])
    elif n < 1 << 14:
        return int_to_bytes((n << 2) | 0b01, 2)
    elif n < 1 << 30:
        return int_to_bytes((n << 2) | 0b10, 4)

    length = max(4, (n.bit_length() + 7) // 8)
    if length > 67:
        raise SerializationError("Compact integer too large")
    return bytes([((length - 4) << 2) | 0b11]) + int_to_bytes(n, length)


def decode_compact(data: bytes, offset: int = 0) -> Tuple[int, int]:
    """
    Decode SCALE compact integer.

    Args:
        data: Bytes containing compact integer
        offset: Starting position

    Returns:
        Tuple of (value, new_offset)

    Raises:
        SerializationError: If data is truncated
    """
    if offset >= len(data):
        raise SerializationError("Truncated compact integer")

    mode = data[offset] & 0b11
    if mode == 0b00:
        return data[offset] >> 2, offset + 1

    if mode == 0b11:
        # Big-integer mode: the length lives in the upper six bits
        width = (data[offset] >> 2) + 4
        start, shift = offset + 1, 0
    else:
        width = 2 if mode == 0b01 else 4
        start, shift = offset, 2

    end = start + width
    if end > len(data):
        raise SerializationError("Truncated compact integer")
    return bytes_to_int(data[start:end]) >> shift, end


def blake2b_256(data: bytes) -> bytes:
    """Perform BLAKE2b with a 32-byte digest."""
    return hashlib.blake2b(data, digest_size=32).digest()


def encode_base58(data: bytes) -> str:
    """
    Encode bytes as Base58 string.

    Args:
        data: Bytes to encode

    Returns:
        Base58 encoded string
    """
    n = bytes_to_int(data, byteorder="big")

    encoded = ""
    while n:
        n, remainder = divmod(n, 58)
        encoded = BASE58_ALPHABET[remainder] + encoded

    # Add leading zeros
    for byte in data:
        if byte == 0:
            encoded = "1" + encoded
        else:
            break

    return encoded


def decode_base58(string: str) -> bytes:
    """
    Decode Base58 string to bytes.

    Args:
        string: Base58 string

    Returns:
        Decoded bytes

    Raises:
        SerializationError: If string contains invalid characters
    """
    n = 0
    for char in string:
        try:
            n = n * 58 + BASE58_ALPHABET.index(char)
        except ValueError:
            raise SerializationError(f"Invalid Base58 character: {char}")

    body = n.to_bytes((n.bit_length() + 7) // 8, "big")

    leading_zeros = len(string) - len(string.lstrip("1"))
    return b"\x00" * leading_zeros + body


def _ss58_prefix_bytes(prefix: int) -> bytes:
    if 0 <= prefix < 64:
        return bytes([prefix])
    elif 64 <= prefix < 16384:
        first = ((prefix & 0b0000_0000_1111_1100) >> 2) | 0b0100_0000
        second = (prefix >> 8) | ((prefix & 0b0000_0000_0000_0011) << 6)
        return bytes([first, second])
    raise SerializationError(f"SS58 prefix out of range: {prefix}")


def _ss58_checksum(payload: bytes) -> bytes:
    return hashlib.blake2b(SS58_CHECKSUM_PREFIX + payload).digest()[:SS58_CHECKSUM_LENGTH]


def ss58_encode(public_key: bytes, prefix: int = DEFAULT_SS58_PREFIX) -> SS58Address:
    """
    Encode a 32-byte public key as an SS58 address.

    Args:
        public_key: Public key bytes
        prefix: Network identifier (0-16383)

    Returns:
        SS58 address
    """
    if len(public_key) != PUBLIC_KEY_LENGTH:
        raise SerializationError(
            f"SS58 account id must be {PUBLIC_KEY_LENGTH} bytes, got {len(public_key)}"
        )

    payload = _ss58_prefix_bytes(prefix) + bytes(public_key)
    return SS58Address(encode_base58(payload + _ss58_checksum(payload)))


def ss58_decode(address: str) -> Tuple[int, bytes]:
    """
    Decode an SS58 address.

    Args:
        address: SS58 address string

    Returns:
        Tuple of (prefix, public_key)

    Raises:
        SerializationError: If the address is malformed or the checksum fails
    """
    data = decode_base58(address)
    if not data:
        raise SerializationError("Empty SS58 address")

    if data[0] < 64:
        prefix_length = 1
        prefix = data[0]
    elif data[0] < 128:
        if len(data) < 2:
            raise SerializationError("Truncated SS58 prefix")
        prefix_length = 2
        lower = ((data[0] & 0b0011_1111) << 2) | (data[1] >> 6)
        upper = data[1] & 0b0011_1111
        prefix = lower | (upper << 8)
    else:
        raise SerializationError(f"Invalid SS58 prefix byte: {data[0]:#x}")

    expected = prefix_length + PUBLIC_KEY_LENGTH + SS58_CHECKSUM_LENGTH
    if len(data) != expected:
        raise SerializationError(f"Invalid SS58 address length: {len(data)}")

    payload, checksum = data[:-SS58_CHECKSUM_LENGTH], data[-SS58_CHECKSUM_LENGTH:]
    if checksum != _ss58_checksum(payload):
        raise SerializationError("Invalid SS58 checksum")

    return prefix, payload[prefix_length:]
