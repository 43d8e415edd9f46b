"""Hard and soft key derivation (schnorrkel HDKD)."""

import logging
from typing import Tuple, Union

from ..constants import HDKD_LABEL, ExpansionMode
from ..utils.encoding import scalar_to_bytes
from .keys import ChainCode, Keypair, MiniSecretKey, PublicKey, SecretKey
from .ristretto import add, base_mul
from .transcript import Transcript

__all__ = [
    "derive_scalar_and_chaincode",
    "derive_offset",
    "soft_derive_public",
    "soft_derive_secret",
    "soft_derive_keypair",
    "hard_derive_mini_secret_key",
    "hard_derive",
    "hard_derive_keypair",
]

logger = logging.getLogger(__name__)

# The nonce refresh must be reproducible, so the transcript RNG gets no
# outside randomness.
NO_ENTROPY = bytes(32)


def _hdkd_transcript() -> Transcript:
    t = Transcript(HDKD_LABEL)
    t.append_message(b"sign-bytes", b"")
    return t


def _soft_transcript(public: PublicKey, cc: ChainCode) -> Tuple[Transcript, int, ChainCode]:
    t = _hdkd_transcript()
    t.append_message(b"chain-code", cc.to_bytes())
    t.commit_point(b"public-key", public.to_bytes())
    offset = t.challenge_scalar(b"HDKD-scalar")
    next_cc = ChainCode(t.challenge_bytes(b"HDKD-chaincode", 32))
    return t, offset, next_cc


def _as_secret(secret: Union[SecretKey, Keypair]) -> SecretKey:
    return secret.secret if isinstance(secret, Keypair) else secret


def derive_scalar_and_chaincode(
    public: Union[PublicKey, bytes],
    cc: Union[ChainCode, bytes]
) -> Tuple[int, ChainCode]:
    """
    Compute the soft-derivation offset and the chain code for the next step.

    Args:
        public: Parent public key
        cc: Chain code

    Returns:
        Tuple of (offset scalar, next chain code)
    """
    _, offset, next_cc = _soft_transcript(PublicKey(public), ChainCode(cc))
    return offset, next_cc


def derive_offset(public: Union[PublicKey, bytes], cc: Union[ChainCode, bytes]) -> int:
    """Scalar added to the parent key by soft derivation."""
    return derive_scalar_and_chaincode(public, cc)[0]


def soft_derive_public(
    public: Union[PublicKey, bytes],
    cc: Union[ChainCode, bytes]
) -> PublicKey:
    """
    Soft-derive a child public key without the secret.

    Args:
        public: Parent public key
        cc: Chain code

    Returns:
        Child public key, ``public + offset * B``
    """
    public = PublicKey(public)
    offset = derive_offset(public, cc)
    child = PublicKey(add(public.to_bytes(), base_mul(offset)))
    logger.debug(f"Soft-derived public key {child.hex()} from {public.hex()}")
    return child


def soft_derive_secret(secret: Union[SecretKey, Keypair], cc: Union[ChainCode, bytes]) -> SecretKey:
    """
    Soft-derive a child secret key.

    The child scalar is the parent scalar plus the offset, so its public key
    equals ``soft_derive_public`` of the parent public key. The nonce seed is
    refreshed from the parent nonce and secret.
    """
    secret = _as_secret(secret)
    t, offset, _ = _soft_transcript(secret.public_key(), ChainCode(cc))
    nonce = t.witness_bytes(
        b"HDKD-nonce",
        32,
        [secret.nonce, secret.to_canonical_bytes()],
        entropy=NO_ENTROPY,
    )
    return SecretKey(secret.key + offset, nonce)


def soft_derive_keypair(secret: Union[SecretKey, Keypair], cc: Union[ChainCode, bytes]) -> Keypair:
    """
    Soft-derive a child keypair.

    Args:
        secret: Parent secret key or keypair (only its secret is used)
        cc: Chain code

    Returns:
        Child keypair
    """
    child = soft_derive_secret(secret, cc).to_keypair()
    logger.debug(f"Soft-derived keypair {child.public.hex()}")
    return child


def hard_derive_mini_secret_key(
    secret: Union[SecretKey, Keypair],
    cc: Union[ChainCode, bytes]
) -> Tuple[MiniSecretKey, ChainCode]:
    """
    Hard-derive a child seed and the chain code for the next step.

    The child depends on the secret scalar, so it cannot be linked to the
    parent public key.

    Args:
        secret: Parent secret key or keypair
        cc: Chain code

    Returns:
        Tuple of (child mini secret key, next chain code)
    """
    secret = _as_secret(secret)
    t = _hdkd_transcript()
    t.append_message(b"chain-code", ChainCode(cc).to_bytes())
    t.append_message(b"secret-key", scalar_to_bytes(secret.key))
    mini = MiniSecretKey(t.challenge_bytes(b"HDKD-hard", 32))
    next_cc = ChainCode(t.challenge_bytes(b"HDKD-chaincode", 32))
    return mini, next_cc


def hard_derive(secret: Union[SecretKey, Keypair], cc: Union[ChainCode, bytes]) -> MiniSecretKey:
    """
    Hard-derive a child seed.

    Returns the mini secret key rather than its expansion, so callers pick
    the expansion mode; ``hard_derive_keypair`` expands it.
    """
    return hard_derive_mini_secret_key(secret, cc)[0]


def hard_derive_keypair(
    secret: Union[SecretKey, Keypair],
    cc: Union[ChainCode, bytes],
    mode: ExpansionMode = ExpansionMode.ED25519
) -> Keypair:
    """
    Hard-derive a child keypair.

    Args:
        secret: Parent secret key or keypair
        cc: Chain code
        mode: Expansion mode for the child seed

    Returns:
        Child keypair
    """
    child = hard_derive(secret, cc).expand_to_keypair(mode)
    logger.debug(f"Hard-derived keypair {child.public.hex()}")
    return child
