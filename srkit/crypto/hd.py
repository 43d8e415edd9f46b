"""Derivation junctions and paths in the Substrate convention."""

import logging
import re
from typing import List, Union

from ..constants import CHAIN_CODE_LENGTH
from ..exceptions import CryptoError, ValidationError
from ..utils.encoding import blake2b_256, encode_compact
from .derive import hard_derive_keypair, soft_derive_keypair, soft_derive_public
from .keys import ChainCode, Keypair, PublicKey

__all__ = ["DeriveJunction", "parse_path", "derive_path", "derive_public_path"]

logger = logging.getLogger(__name__)

JUNCTION_PATTERN = re.compile(r"/(/?[^/]+)")
PATH_PATTERN = re.compile(r"^(//?[^/]+)*$")
INDEX_PATTERN = re.compile(r"^[0-9]+$")

U64_MAX = 2**64 - 1


class DeriveJunction:
    """One derivation step: a chain code and whether it is hard."""

    def __init__(self, chain_code: Union[ChainCode, bytes], hard: bool = False) -> None:
        self.chain_code = ChainCode(chain_code)
        self.hard = hard

    @staticmethod
    def _encode(value: Union[int, str, bytes]) -> bytes:
        if isinstance(value, bool):
            raise ValidationError("Junction value cannot be a bool")
        if isinstance(value, int):
            if not 0 <= value <= U64_MAX:
                raise ValidationError(f"Junction index out of u64 range: {value}")
            return value.to_bytes(8, "little")
        if isinstance(value, str):
            data = value.encode("utf-8")
            return encode_compact(len(data)) + data
        return bytes(value)

    @classmethod
    def _from_value(cls, value: Union[int, str, bytes], hard: bool) -> "DeriveJunction":
        data = cls._encode(value)
        if len(data) > CHAIN_CODE_LENGTH:
            data = blake2b_256(data)
        return cls(data.ljust(CHAIN_CODE_LENGTH, b"\x00"), hard=hard)

    @classmethod
    def soft(cls, value: Union[int, str, bytes]) -> "DeriveJunction":
        """
        Soft junction from an index, a label or raw bytes.

        Ints are encoded as u64 little-endian, strings with a compact length
        prefix. Encodings over 32 bytes are replaced by their BLAKE2b-256.
        """
        return cls._from_value(value, hard=False)

    @classmethod
    def hard(cls, value: Union[int, str, bytes]) -> "DeriveJunction":
        return cls._from_value(value, hard=True)

    @classmethod
    def parse(cls, code: str) -> "DeriveJunction":
        """Parse one path component; a leading ``/`` marks it hard."""
        hard = code.startswith("/")
        if hard:
            code = code[1:]
        value: Union[int, str] = code
        if INDEX_PATTERN.match(code) and int(code) <= U64_MAX:
            value = int(code)
        return cls._from_value(value, hard=hard)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DeriveJunction):
            return False
        return self.chain_code == other.chain_code and self.hard == other.hard

    def __repr__(self) -> str:
        kind = "hard" if self.hard else "soft"
        return f"DeriveJunction({kind}, {self.chain_code.hex()})"


def parse_path(path: str) -> List[DeriveJunction]:
    """
    Parse a derivation path like ``//Alice/0//stash``.

    Args:
        path: Junctions, ``//`` for hard and ``/`` for soft

    Returns:
        Junctions in order

    Raises:
        ValidationError: If path is malformed
    """
    if not PATH_PATTERN.match(path):
        raise ValidationError(f"Invalid derivation path: {path}")
    return [DeriveJunction.parse(code) for code in JUNCTION_PATTERN.findall(path)]


def derive_path(keypair: Keypair, path: Union[str, List[DeriveJunction]]) -> Keypair:
    """
    Derive a keypair along a path.

    Args:
        keypair: Root keypair
        path: Path string or parsed junctions

    Returns:
        Derived keypair
    """
    junctions = parse_path(path) if isinstance(path, str) else path

    for junction in junctions:
        if junction.hard:
            keypair = hard_derive_keypair(keypair, junction.chain_code)
        else:
            keypair = soft_derive_keypair(keypair, junction.chain_code)

    logger.debug(f"Derived {keypair.public.hex()} through {len(junctions)} junctions")
    return keypair


def derive_public_path(
    public: Union[PublicKey, bytes],
    path: Union[str, List[DeriveJunction]]
) -> PublicKey:
    """
    Derive a public key along a path of soft junctions.

    Raises:
        CryptoError: If the path contains a hard junction
    """
    junctions = parse_path(path) if isinstance(path, str) else path
    public = PublicKey(public)

    for junction in junctions:
        if junction.hard:
            raise CryptoError("Cannot do hard derivation without secret key")
        public = soft_derive_public(public, junction.chain_code)

    return public
