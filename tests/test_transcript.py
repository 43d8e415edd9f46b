import hashlib

import pytest

from srkit.crypto.strobe import keccak_f1600
from srkit.crypto.transcript import Transcript, signing_context


def _sha3_256(data: bytes) -> bytes:
    rate = 136
    pad = bytearray(rate - len(data) % rate)
    pad[0] ^= 0x06
    pad[-1] ^= 0x80
    message = data + bytes(pad)

    state = bytearray(200)
    for i in range(0, len(message), rate):
        for j, byte in enumerate(message[i:i + rate]):
            state[j] ^= byte
        keccak_f1600(state)
    return bytes(state[:32])


@pytest.mark.parametrize("data", [b"", b"abc", b"x" * 135, b"y" * 136, b"z" * 500])
def test_keccak_matches_sha3(data):
    assert _sha3_256(data) == hashlib.sha3_256(data).digest()


def test_merlin_simple_protocol():
    t = Transcript(b"test protocol")
    t.append_message(b"some label", b"some data")
    assert t.challenge_bytes(b"challenge", 32).hex() == (
        "d5a21972d0d5fe320c0d263fac7fffb8145aa640af6e9bca177c03c7efcf0615"
    )


def test_transcript_copy_is_independent():
    t = Transcript(b"fork")
    t.append_message(b"a", b"1")
    fork = t.copy()

    fork.append_message(b"b", b"2")
    t.append_message(b"b", b"3")
    assert fork.challenge_bytes(b"c", 32) != t.challenge_bytes(b"c", 32)


def test_long_messages_cross_blocks():
    a = Transcript(b"long")
    b = Transcript(b"long")
    a.append_message(b"data", b"\x01" * 1000)
    b.append_message(b"data", b"\x01" * 1000)
    assert a.challenge_bytes(b"out", 400) == b.challenge_bytes(b"out", 400)


def test_witness_bytes():
    t = signing_context(b"substrate", b"message")
    fixed = bytes(32)
    first = t.witness_bytes(b"w", 32, [b"secret"], entropy=fixed)
    second = t.witness_bytes(b"w", 32, [b"secret"], entropy=fixed)
    assert first == second
    assert t.witness_bytes(b"w", 32, [b"other"], entropy=fixed) != first
    assert t.witness_bytes(b"w", 32, [b"secret"]) != first


def test_signing_context_separates_domains():
    a = signing_context(b"substrate", b"msg").challenge_bytes(b"c", 32)
    b = signing_context(b"other", b"msg").challenge_bytes(b"c", 32)
    assert a != b
