"""Schnorr signatures over Ristretto (sr25519)."""

import logging
import secrets
from typing import Optional, Union

from ..constants import (
    GROUP_ORDER,
    SCHNORR_PROTO_NAME,
    SIGNATURE_MARKER,
    SIGNING_CTX,
)
from ..exceptions import CryptoError, ValidationError
from ..types.common import BytesLike, SignatureBytes
from ..utils.encoding import bytes_to_int, scalar_to_bytes
from ..utils.validation import validate_signature
from .keys import PublicKey, SecretKey
from .ristretto import base_mul, mul, sub
from .transcript import Transcript, signing_context

__all__ = [
    "Signature",
    "decode_signature",
    "sign",
    "verify",
]

logger = logging.getLogger(__name__)

# Transcript labels: (public key, commitment, challenge)
LABELS = (b"sign:pk", b"sign:R", b"sign:c")
LEGACY_LABELS = (b"pk", b"no", b"")


class Signature:
    """
    sr25519 signature: commitment point R and response scalar s.

    Signatures produced before the schnorrkel audit lack the marker bit.
    They were made over a transcript labelled with the context itself and
    with different point labels; they decode with ``legacy`` set and verify
    against that transcript.
    """

    def __init__(self, r: bytes, s: int, legacy: bool = False) -> None:
        self.r = bytes(r)
        self.s = s % GROUP_ORDER
        self.legacy = legacy

    @classmethod
    def from_bytes(cls, data: BytesLike) -> "Signature":
        """
        Decode a 64-byte signature.

        Raises:
            InvalidLengthError: If data is not 64 bytes
            InvalidEncodingError: If R is not a point or s is not canonical
        """
        data = validate_signature(data)
        legacy = not data[63] & SIGNATURE_MARKER

        s_bytes = bytearray(data[32:])
        s_bytes[31] &= ~SIGNATURE_MARKER & 0xff
        return cls(data[:32], bytes_to_int(s_bytes), legacy=legacy)

    def to_bytes(self) -> SignatureBytes:
        s_bytes = bytearray(scalar_to_bytes(self.s))
        if not self.legacy:
            s_bytes[31] |= SIGNATURE_MARKER
        return SignatureBytes(self.r + bytes(s_bytes))

    def hex(self) -> str:
        return self.to_bytes().hex()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Signature):
            return False
        return self.to_bytes() == other.to_bytes()

    def __repr__(self) -> str:
        return f"Signature({self.hex()})"


def decode_signature(data: BytesLike) -> Signature:
    return Signature.from_bytes(data)


def _challenge(
    t: Transcript,
    public: PublicKey,
    r: bytes,
    legacy: bool = False
) -> int:
    pk_label, r_label, c_label = LEGACY_LABELS if legacy else LABELS
    t.proto_name(SCHNORR_PROTO_NAME)
    t.commit_point(pk_label, public.to_bytes())
    t.commit_point(r_label, r)
    return t.challenge_scalar(c_label)


def sign(
    secret: SecretKey,
    public: PublicKey,
    message: bytes,
    context: bytes = SIGNING_CTX,
    entropy: Optional[bytes] = None
) -> Signature:
    """
    Sign a message.

    The nonce comes from a transcript RNG keyed with the secret nonce seed
    and fresh randomness, so it is bound to the message and public key and
    never repeats across messages.

    Args:
        secret: Signer's secret key
        public: Signer's public key
        message: Message bytes
        context: Signing context
        entropy: Optional 32 bytes replacing OS randomness in the nonce

    Returns:
        Signature
    """
    t = signing_context(context, message)
    t.proto_name(SCHNORR_PROTO_NAME)
    t.commit_point(LABELS[0], public.to_bytes())

    r = t.witness_scalar(b"signing", [secret.nonce], entropy)
    commitment = base_mul(r)

    t.commit_point(LABELS[1], commitment)
    k = t.challenge_scalar(LABELS[2])

    return Signature(commitment, k * secret.key + r)


def verify(
    signature: Union[BytesLike, Signature],
    message: bytes,
    public: Union[BytesLike, PublicKey],
    context: bytes = SIGNING_CTX
) -> bool:
    """
    Verify a signature.

    Malformed input is reported as an invalid signature, never raised.

    Args:
        signature: Signature or its 64 bytes
        message: Original message
        public: Signer's public key
        context: Signing context used when signing

    Returns:
        True if signature is valid
    """
    try:
        if not isinstance(signature, Signature):
            signature = Signature.from_bytes(signature)
        public = PublicKey(public)
    except ValidationError as e:
        logger.debug(f"Rejecting malformed signature input: {e}")
        return False

    if signature.legacy:
        t = Transcript(context)
        t.append_message(b"sign-bytes", message)
    else:
        t = signing_context(context, message)
    k = _challenge(t, public, signature.r, signature.legacy)

    try:
        expected = sub(base_mul(signature.s), mul(k, public.to_bytes()))
    except CryptoError as e:
        logger.debug(f"Verification arithmetic failed for {public.hex()}: {e}")
        return False

    return secrets.compare_digest(expected, signature.r)
