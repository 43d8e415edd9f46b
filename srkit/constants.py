"""Protocol constants for sr25519."""

from enum import Enum

__all__ = [
    "ExpansionMode",
    "SEED_LENGTH",
    "SECRET_KEY_LENGTH",
    "SECRET_KEY_KEY_LENGTH",
    "SECRET_KEY_NONCE_LENGTH",
    "PUBLIC_KEY_LENGTH",
    "KEYPAIR_LENGTH",
    "CHAIN_CODE_LENGTH",
    "SIGNATURE_LENGTH",
    "GROUP_ORDER",
    "COFACTOR",
    "SIGNING_CTX",
    "SIGNATURE_MARKER",
    "DEFAULT_SS58_PREFIX",
]


class ExpansionMode(Enum):
    """How a mini secret key is expanded into a secret scalar and nonce."""

    ED25519 = "ed25519"
    UNIFORM = "uniform"


# Byte lengths
SEED_LENGTH = 32
SECRET_KEY_KEY_LENGTH = 32
SECRET_KEY_NONCE_LENGTH = 32
SECRET_KEY_LENGTH = SECRET_KEY_KEY_LENGTH + SECRET_KEY_NONCE_LENGTH
PUBLIC_KEY_LENGTH = 32
KEYPAIR_LENGTH = SECRET_KEY_LENGTH + PUBLIC_KEY_LENGTH
CHAIN_CODE_LENGTH = 32
SIGNATURE_LENGTH = 64

# Ristretto255 group order L = 2^252 + 27742317777372353535851937790883648493
GROUP_ORDER = 2**252 + 27742317777372353535851937790883648493
COFACTOR = 8

# Must match the context compiled into the Substrate runtime.
SIGNING_CTX = b"substrate"

# Set in the last byte of every signature to tell it apart from ed25519.
SIGNATURE_MARKER = 0x80

# Generic Substrate address format
DEFAULT_SS58_PREFIX = 42

# Merlin protocol labels
MERLIN_PROTOCOL_LABEL = b"Merlin v1.0"
SIGNING_CONTEXT_LABEL = b"SigningContext"
HDKD_LABEL = b"SchnorrRistrettoHDKD"
EXPAND_LABEL = b"ExpandSecretKeys"
SCHNORR_PROTO_NAME = b"Schnorr-sig"
