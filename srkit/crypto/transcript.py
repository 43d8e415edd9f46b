"""Merlin transcripts and the signing-transcript helpers built on them."""

import secrets
from typing import Optional, Sequence

from ..constants import (
    MERLIN_PROTOCOL_LABEL,
    SIGNING_CONTEXT_LABEL,
)
from ..utils.encoding import bytes_to_scalar
from .strobe import Strobe128

__all__ = [
    "Transcript",
    "TranscriptRngBuilder",
    "TranscriptRng",
    "signing_context",
]


def _length_prefix(n: int) -> bytes:
    return n.to_bytes(4, "little")


class Transcript:
    """
    Merlin transcript.

    A transcript absorbs labelled messages and produces challenges bound to
    everything absorbed so far. Transcripts are mutable; use ``copy`` to
    fork one before feeding it different data.
    """

    def __init__(self, label: bytes, _strobe: Optional[Strobe128] = None) -> None:
        if _strobe is not None:
            self._strobe = _strobe
            return

        self._strobe = Strobe128(MERLIN_PROTOCOL_LABEL)
        self.append_message(b"dom-sep", label)

    def copy(self) -> "Transcript":
        """Fork this transcript."""
        return Transcript(b"", _strobe=self._strobe.copy())

    def append_message(self, label: bytes, message: bytes) -> None:
        """Absorb a labelled message."""
        self._strobe.meta_ad(label, False)
        self._strobe.meta_ad(_length_prefix(len(message)), True)
        self._strobe.ad(bytes(message), False)

    def challenge_bytes(self, label: bytes, length: int) -> bytes:
        """Squeeze ``length`` challenge bytes."""
        self._strobe.meta_ad(label, False)
        self._strobe.meta_ad(_length_prefix(length), True)
        return self._strobe.prf(length, False)

    def build_rng(self) -> "TranscriptRngBuilder":
        """Start a witness RNG that forks the current transcript state."""
        return TranscriptRngBuilder(self._strobe.copy())

    # Schnorrkel signing-transcript conventions

    def proto_name(self, label: bytes) -> None:
        self.append_message(b"proto-name", label)

    def commit_point(self, label: bytes, compressed: bytes) -> None:
        self.append_message(label, compressed)

    def challenge_scalar(self, label: bytes) -> int:
        """Squeeze a uniformly distributed scalar mod L."""
        return bytes_to_scalar(self.challenge_bytes(label, 64))

    def witness_bytes(
        self,
        label: bytes,
        length: int,
        nonce_seeds: Sequence[bytes],
        entropy: Optional[bytes] = None
    ) -> bytes:
        """
        Produce secret-dependent bytes bound to this transcript.

        Args:
            label: Witness label
            length: Number of bytes to produce
            nonce_seeds: Secret inputs rekeying the RNG
            entropy: 32 external random bytes; fresh OS randomness if None

        Returns:
            Witness bytes
        """
        builder = self.build_rng()
        for seed in nonce_seeds:
            builder = builder.rekey_with_witness_bytes(label, seed)
        if entropy is None:
            entropy = secrets.token_bytes(32)
        return builder.finalize(entropy).fill_bytes(length)

    def witness_scalar(
        self,
        label: bytes,
        nonce_seeds: Sequence[bytes],
        entropy: Optional[bytes] = None
    ) -> int:
        """Produce a secret nonce scalar mod L."""
        return bytes_to_scalar(self.witness_bytes(label, 64, nonce_seeds, entropy))


class TranscriptRngBuilder:
    """Rekeys a forked transcript with secret witness data."""

    def __init__(self, strobe: Strobe128) -> None:
        self._strobe = strobe

    def rekey_with_witness_bytes(self, label: bytes, witness: bytes) -> "TranscriptRngBuilder":
        self._strobe.meta_ad(label, False)
        self._strobe.meta_ad(_length_prefix(len(witness)), True)
        self._strobe.key(bytes(witness), False)
        return self

    def finalize(self, entropy: bytes) -> "TranscriptRng":
        """Mix in external randomness and return the RNG."""
        if len(entropy) != 32:
            raise ValueError(f"Transcript RNG entropy must be 32 bytes, got {len(entropy)}")
        self._strobe.meta_ad(b"rng", False)
        self._strobe.key(bytes(entropy), False)
        return TranscriptRng(self._strobe)


class TranscriptRng:
    """RNG whose output depends on the transcript, the witnesses and the entropy."""

    def __init__(self, strobe: Strobe128) -> None:
        self._strobe = strobe

    def fill_bytes(self, length: int) -> bytes:
        self._strobe.meta_ad(_length_prefix(length), False)
        return self._strobe.prf(length, False)


def signing_context(context: bytes, message: bytes) -> Transcript:
    """
    Build the transcript for signing ``message`` under ``context``.

    Args:
        context: Domain-separation context, e.g. ``b"substrate"``
        message: Message bytes

    Returns:
        Transcript with context and message absorbed
    """
    t = Transcript(SIGNING_CONTEXT_LABEL)
    t.append_message(b"", context)
    t.append_message(b"sign-bytes", message)
    return t
