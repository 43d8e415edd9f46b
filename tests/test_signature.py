import pytest

from srkit.constants import SIGNATURE_MARKER
from srkit.crypto.keys import SecretKey, expand
from srkit.crypto.signature import Signature, decode_signature, sign, verify
from srkit.exceptions import InvalidEncodingError, InvalidLengthError

DEV_SEED = "fac7959dbfe72f052e5a0c3c8d6530f202b02fd8f9f5ca3580ec8deb7797479e"
OTHER_SEED = b"12345678901234567890123456789012"
MESSAGE = b"this is a message"


@pytest.fixture
def pair():
    return expand(DEV_SEED)


def test_sign_verify_roundtrip(pair):
    signature = pair.sign(MESSAGE)
    assert len(signature) == 64
    assert pair.verify(signature, MESSAGE)
    assert verify(signature, MESSAGE, pair.public.to_bytes())


def test_empty_message(pair):
    signature = pair.sign(b"")
    assert pair.verify(signature, b"")
    assert not pair.verify(signature, b"\x00")


def test_signatures_are_randomized(pair):
    assert pair.sign(MESSAGE) != pair.sign(MESSAGE)


def test_fixed_entropy_is_deterministic(pair):
    a = sign(pair.secret, pair.public, MESSAGE, entropy=bytes(32))
    b = sign(pair.secret, pair.public, MESSAGE, entropy=bytes(32))
    assert a == b
    assert verify(a, MESSAGE, pair.public)


def test_marker_bit_set(pair):
    signature = pair.sign(MESSAGE)
    assert signature[63] & SIGNATURE_MARKER
    assert not decode_signature(signature).legacy


def test_tampering_is_detected(pair):
    signature = pair.sign(MESSAGE)
    assert not pair.verify(signature, b"this is a messagf")

    other = expand(OTHER_SEED)
    assert not other.verify(signature, MESSAGE)

    tampered = bytearray(signature)
    tampered[40] ^= 0x01
    assert not pair.verify(bytes(tampered), MESSAGE)


def test_context_must_match(pair):
    signature = pair.sign(MESSAGE, context=b"good")
    assert pair.verify(signature, MESSAGE, context=b"good")
    assert not pair.verify(signature, MESSAGE, context=b"bad")
    assert not pair.verify(signature, MESSAGE)


def test_clearing_marker_invalidates_signature(pair):
    signature = bytearray(pair.sign(MESSAGE))
    signature[63] &= ~SIGNATURE_MARKER & 0xff
    assert decode_signature(bytes(signature)).legacy
    assert not pair.verify(bytes(signature), MESSAGE)


def test_malformed_input_returns_false(pair):
    signature = pair.sign(MESSAGE)
    assert not verify(signature[:63], MESSAGE, pair.public)
    assert not verify(b"\xff" * 64, MESSAGE, pair.public)
    assert not verify(signature, MESSAGE, b"\xff" * 32)
    assert not verify(signature, MESSAGE, pair.public.to_bytes()[:31])
    assert not verify("not hex", MESSAGE, pair.public)


def test_signature_decoding_errors():
    with pytest.raises(InvalidLengthError):
        Signature.from_bytes(b"\x00" * 63)
    with pytest.raises(InvalidEncodingError):
        Signature.from_bytes(b"\xff" * 64)


def test_signature_bytes_roundtrip(pair):
    data = pair.sign(MESSAGE)
    assert Signature.from_bytes(data).to_bytes() == data
    assert Signature.from_bytes(data.hex()) == Signature.from_bytes(data)


def test_legacy_signature_verifies():
    public = bytes.fromhex("741c08a06f41c596608f6774259bd9043304adfa5d3eea62760bd9be97634d63")
    signature = bytes.fromhex(
        "decef12cf20443e7c7a9d406c237e90bcfcf145860722622f92ebfd5eb4b5b39"
        "90b6443934b5cba8f925a0ae75b3a77d35b8490cbb358dd850806e58eaf72904"
    )
    assert decode_signature(signature).legacy
    assert verify(signature, MESSAGE, public)
    assert not verify(signature, b"this is a messagf", public)
    assert not verify(signature, MESSAGE, public, context=b"other")


@pytest.mark.parametrize("index", [0, 15, 31, 32, 47, 62])
def test_signature_bit_flip_is_rejected(pair, index):
    signature = bytearray(pair.sign(MESSAGE))
    signature[index] ^= 0x01
    assert not pair.verify(bytes(signature), MESSAGE)


@pytest.mark.parametrize("index", [0, 15, 31])
def test_public_key_bit_flip_is_rejected(pair, index):
    signature = pair.sign(MESSAGE)
    public = bytearray(pair.public.to_bytes())
    public[index] ^= 0x01
    assert not verify(signature, MESSAGE, bytes(public))


def test_zero_secret_signs_under_identity_key():
    secret = SecretKey.from_bytes(bytes(64))
    public = secret.public_key()
    assert public.to_bytes() == bytes(32)

    signature = secret.sign(b"m")
    assert verify(signature, b"m", bytes(32))
