"""Cryptographic primitives for sr25519."""

from ..crypto.keys import (
    MiniSecretKey,
    SecretKey,
    PublicKey,
    Keypair,
    ChainCode,
    expand,
    decode_seed,
    decode_secret,
    decode_public,
    decode_keypair,
    decode_chaincode,
)
from ..crypto.signature import Signature, decode_signature, sign, verify
from ..crypto.derive import (
    derive_scalar_and_chaincode,
    soft_derive_public,
    soft_derive_secret,
    soft_derive_keypair,
    hard_derive_mini_secret_key,
    hard_derive_keypair,
)
from ..crypto.hd import DeriveJunction, parse_path, derive_path, derive_public_path
from ..crypto.transcript import Transcript, signing_context

__all__ = [
    # Keys
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

    # Signatures
    "Signature",
    "decode_signature",
    "sign",
    "verify",

    # Derivation
    "derive_scalar_and_chaincode",
    "soft_derive_public",
    "soft_derive_secret",
    "soft_derive_keypair",
    "hard_derive_mini_secret_key",
    "hard_derive_keypair",
    "DeriveJunction",
    "parse_path",
    "derive_path",
    "derive_public_path",

    # Transcripts
    "Transcript",
    "signing_context",
]
