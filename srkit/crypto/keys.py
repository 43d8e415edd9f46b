"""Key management for sr25519."""

import hashlib
import secrets
from typing import Optional, Union

from ..constants import (
    EXPAND_LABEL,
    GROUP_ORDER,
    KEYPAIR_LENGTH,
    SECRET_KEY_KEY_LENGTH,
    SECRET_KEY_LENGTH,
    SECRET_KEY_NONCE_LENGTH,
    SIGNING_CTX,
    DEFAULT_SS58_PREFIX,
    ExpansionMode,
)
from ..exceptions import InconsistentKeypairError, ValidationError
from ..types.common import (
    BytesLike,
    ChainCodeBytes,
    KeypairBytes,
    PublicKeyBytes,
    SecretKeyBytes,
    SeedBytes,
    SS58Address,
)
from ..utils.encoding import (
    bytes_to_int,
    bytes_to_scalar,
    divide_by_cofactor,
    multiply_by_cofactor,
    scalar_to_bytes,
    ss58_encode,
)
from ..utils.validation import (
    validate_chain_code,
    validate_keypair,
    validate_public_key,
    validate_secret_key,
    validate_seed,
)
from .ristretto import base_mul
from .transcript import Transcript

__all__ = [
    "MiniSecretKey",
    "SecretKey",
    "PublicKey",
    "Keypair",
    "ChainCode",
    "expand",
    "decode_seed",
    "decode_secret",
    "decode_public",
    "decode_keypair",
    "decode_chaincode",
]


class MiniSecretKey:
    """
    32-byte seed from which a full secret key is expanded.

    Any 32-byte value is a valid mini secret key.
    """

    def __init__(self, seed: Union[BytesLike, "MiniSecretKey"]) -> None:
        """
        Initialize mini secret key.

        Args:
            seed: 32 bytes, hex string, or another MiniSecretKey

        Raises:
            InvalidLengthError: If seed is not 32 bytes
        """
        if isinstance(seed, MiniSecretKey):
            self._seed = seed._seed
            return

        self._seed = SeedBytes(validate_seed(seed))

    @classmethod
    def generate(cls) -> "MiniSecretKey":
        """Create new random mini secret key."""
        return cls(secrets.token_bytes(32))

    def to_bytes(self) -> SeedBytes:
        return self._seed

    def hex(self) -> str:
        return self._seed.hex()

    def expand(self, mode: ExpansionMode = ExpansionMode.ED25519) -> "SecretKey":
        """
        Expand into a secret scalar and nonce seed.

        Args:
            mode: ED25519 hashes with SHA-512 and clamps like ed25519;
                UNIFORM draws both halves from a Merlin transcript

        Returns:
            SecretKey
        """
        if mode == ExpansionMode.UNIFORM:
            t = Transcript(EXPAND_LABEL)
            t.append_message(b"mini", self._seed)
            key = t.challenge_scalar(b"sk")
            nonce = t.challenge_bytes(b"no", 32)
            return SecretKey(key, nonce)

        h = hashlib.sha512(self._seed).digest()
        clamped = bytearray(h[:32])
        clamped[0] &= 248
        clamped[31] &= 63
        clamped[31] |= 64
        # Clamped keys are multiples of the cofactor; keep key/8 internally
        key = bytes_to_int(divide_by_cofactor(bytes(clamped)))
        return SecretKey(key, h[32:])

    def expand_to_keypair(self, mode: ExpansionMode = ExpansionMode.ED25519) -> "Keypair":
        return self.expand(mode).to_keypair()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MiniSecretKey):
            return False
        return secrets.compare_digest(self._seed, other._seed)

    def __repr__(self) -> str:
        hex_str = self.hex()
        return f"MiniSecretKey({hex_str[:4]}...{hex_str[-4:]})"


class SecretKey:
    """
    sr25519 secret key: a scalar mod L and a 32-byte nonce seed.

    Serialized as 64 bytes in the layout shared with polkadot-js: the scalar
    multiplied by the cofactor (little-endian), then the nonce seed.
    """

    def __init__(self, key: int, nonce: bytes) -> None:
        if len(nonce) != SECRET_KEY_NONCE_LENGTH:
            raise ValidationError(f"Nonce seed must be 32 bytes, got {len(nonce)}")
        self._key = key % GROUP_ORDER
        self._nonce = bytes(nonce)

    @classmethod
    def from_bytes(cls, data: BytesLike) -> "SecretKey":
        """
        Decode a 64-byte secret key.

        The first half is divided by the cofactor, so its three low bits are
        dropped: encoding the result gives back the input only when that
        half is a multiple of 8, as every clamped key is.

        Raises:
            InvalidLengthError: If data is not 64 bytes
        """
        data = validate_secret_key(data)
        key = bytes_to_scalar(divide_by_cofactor(data[:SECRET_KEY_KEY_LENGTH]))
        return cls(key, data[SECRET_KEY_KEY_LENGTH:])

    @property
    def key(self) -> int:
        """Secret scalar, reduced mod L."""
        return self._key

    @property
    def nonce(self) -> bytes:
        """Nonce seed for signing."""
        return self._nonce

    def to_bytes(self) -> SecretKeyBytes:
        """Serialize as cofactor-multiplied scalar followed by nonce seed."""
        return SecretKeyBytes(multiply_by_cofactor(scalar_to_bytes(self._key)) + self._nonce)

    def to_canonical_bytes(self) -> bytes:
        """Serialize as the canonical scalar followed by nonce seed."""
        return scalar_to_bytes(self._key) + self._nonce

    def hex(self) -> str:
        return self.to_bytes().hex()

    def public_key(self) -> "PublicKey":
        """Get corresponding public key."""
        return PublicKey(base_mul(self._key))

    def to_keypair(self) -> "Keypair":
        return Keypair(self, self.public_key())

    def sign(
        self,
        message: bytes,
        public_key: Optional["PublicKey"] = None,
        context: bytes = SIGNING_CTX
    ) -> bytes:
        """
        Sign message.

        Args:
            message: Message bytes
            public_key: Matching public key; derived if omitted
            context: Signing context

        Returns:
            64-byte signature
        """
        from .signature import sign

        if public_key is None:
            public_key = self.public_key()
        return sign(self, public_key, message, context).to_bytes()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SecretKey):
            return False
        return secrets.compare_digest(self.to_bytes(), other.to_bytes())

    def __repr__(self) -> str:
        # Show first and last 4 chars of hex for security
        hex_str = self.hex()
        return f"SecretKey({hex_str[:4]}...{hex_str[-4:]})"


class PublicKey:
    """sr25519 public key: a compressed Ristretto point."""

    def __init__(self, key: Union[BytesLike, "PublicKey"]) -> None:
        """
        Initialize public key.

        Args:
            key: 32 bytes, hex string, or another PublicKey

        Raises:
            InvalidLengthError: If key is not 32 bytes
            InvalidEncodingError: If key is not a valid Ristretto point
        """
        if isinstance(key, PublicKey):
            self._point = key._point
            return

        self._point = PublicKeyBytes(validate_public_key(key))

    @property
    def point(self) -> PublicKeyBytes:
        """Get public key as bytes."""
        return self._point

    def to_bytes(self) -> PublicKeyBytes:
        return self._point

    def hex(self) -> str:
        return self._point.hex()

    def ss58_address(self, prefix: int = DEFAULT_SS58_PREFIX) -> SS58Address:
        """
        Get SS58 address.

        Args:
            prefix: Network identifier

        Returns:
            SS58 address string
        """
        return ss58_encode(self._point, prefix)

    def verify(self, signature: BytesLike, message: bytes, context: bytes = SIGNING_CTX) -> bool:
        """
        Verify signature.

        Returns:
            True if signature is valid
        """
        from .signature import verify

        return verify(signature, message, self, context)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PublicKey):
            return False
        return self._point == other._point

    def __hash__(self) -> int:
        return hash(self._point)

    def __repr__(self) -> str:
        return f"PublicKey({self.ss58_address()})"


class Keypair:
    """
    Secret key together with its public key.

    The pair is consistent when built from a seed or a secret key. Decoding
    96 bytes only checks consistency on request, so externally assembled
    pairs can still be loaded.
    """

    def __init__(self, secret: SecretKey, public: PublicKey) -> None:
        self.secret = secret
        self.public = public

    @classmethod
    def from_seed(
        cls,
        seed: Union[BytesLike, MiniSecretKey],
        mode: ExpansionMode = ExpansionMode.ED25519
    ) -> "Keypair":
        return MiniSecretKey(seed).expand_to_keypair(mode)

    @classmethod
    def from_bytes(cls, data: BytesLike, check: bool = False) -> "Keypair":
        """
        Decode a 96-byte keypair.

        Args:
            data: Secret key (64 bytes) followed by public key (32 bytes)
            check: Reject pairs whose public key does not match the secret

        Raises:
            InvalidLengthError: If data is not 96 bytes
            InvalidEncodingError: If the public key is not a valid point
            InconsistentKeypairError: If check is set and the halves differ
        """
        data = validate_keypair(data)
        pair = cls(
            SecretKey.from_bytes(data[:SECRET_KEY_LENGTH]),
            PublicKey(data[SECRET_KEY_LENGTH:KEYPAIR_LENGTH]),
        )
        if check and not pair.is_consistent():
            raise InconsistentKeypairError("Keypair public key does not match secret key")
        return pair

    def is_consistent(self) -> bool:
        """Check that the public key equals secret scalar times base point."""
        return self.secret.public_key() == self.public

    def to_bytes(self) -> KeypairBytes:
        return KeypairBytes(self.secret.to_bytes() + self.public.to_bytes())

    def sign(self, message: bytes, context: bytes = SIGNING_CTX) -> bytes:
        return self.secret.sign(message, self.public, context)

    def verify(self, signature: BytesLike, message: bytes, context: bytes = SIGNING_CTX) -> bool:
        return self.public.verify(signature, message, context)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Keypair):
            return False
        return self.secret == other.secret and self.public == other.public

    def __repr__(self) -> str:
        return f"Keypair({self.public.ss58_address()})"


class ChainCode:
    """32-byte chain code steering a derivation step."""

    def __init__(self, data: Union[BytesLike, "ChainCode"]) -> None:
        if isinstance(data, ChainCode):
            self._data = data._data
            return

        self._data = ChainCodeBytes(validate_chain_code(data))

    def to_bytes(self) -> ChainCodeBytes:
        return self._data

    def hex(self) -> str:
        return self._data.hex()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ChainCode):
            return False
        return self._data == other._data

    def __hash__(self) -> int:
        return hash(self._data)

    def __repr__(self) -> str:
        return f"ChainCode({self.hex()})"


def expand(
    seed: Union[BytesLike, MiniSecretKey],
    mode: ExpansionMode = ExpansionMode.ED25519
) -> Keypair:
    """
    Expand a 32-byte seed into a keypair.

    Args:
        seed: Mini secret key bytes
        mode: Expansion mode

    Returns:
        Keypair

    Raises:
        InvalidLengthError: If seed is not 32 bytes
    """
    return MiniSecretKey(seed).expand_to_keypair(mode)


def decode_seed(data: BytesLike) -> MiniSecretKey:
    return MiniSecretKey(data)


def decode_secret(data: BytesLike) -> SecretKey:
    return SecretKey.from_bytes(data)


def decode_public(data: BytesLike) -> PublicKey:
    return PublicKey(data)


def decode_keypair(data: BytesLike, check: bool = False) -> Keypair:
    return Keypair.from_bytes(data, check=check)


def decode_chaincode(data: BytesLike) -> ChainCode:
    return ChainCode(data)
