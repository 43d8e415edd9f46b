import pytest

from srkit.constants import ExpansionMode
from srkit.crypto.keys import (
    Keypair, MiniSecretKey, PublicKey, SecretKey,
    decode_chaincode, decode_keypair, decode_public, decode_secret, decode_seed, expand,
)
from srkit.exceptions import InconsistentKeypairError, InvalidEncodingError, InvalidLengthError

DEV_SEED = "fac7959dbfe72f052e5a0c3c8d6530f202b02fd8f9f5ca3580ec8deb7797479e"
DEV_PAIR = (
    "28b0ae221c6bb06856b287f60d7ea0d98552ea5a16db16956849aa371db3eb51"
    "fd190cce74df356432b410bd64682309d6dedb27c76845daf388557cbac3ca34"
    "46ebddef8cd9bb167dc30878d7113b7e168e6f0646beffd77d69d39bad76b47a"
)

ASCII_SEED = b"12345678901234567890123456789012"
ASCII_PAIR = (
    "f0106660c3dda23f16daa9ac5b811b963077f5bc0af89f85804f0de8e424f050"
    "f98d66f39442506ff947fd911f18c7a7a5da639a63e8d3b4e233f74143d951c1"
    "741c08a06f41c596608f6774259bd9043304adfa5d3eea62760bd9be97634d63"
)


def test_seed_expansion_vectors():
    pair = expand(DEV_SEED)
    assert pair.public.hex() == DEV_PAIR[128:]
    assert pair.to_bytes().hex() == DEV_PAIR

    assert expand(ASCII_SEED).to_bytes().hex() == ASCII_PAIR


def test_expansion_is_deterministic():
    assert expand(ASCII_SEED) == expand(ASCII_SEED)
    assert expand(ASCII_SEED) != expand(DEV_SEED)


def test_uniform_expansion():
    uniform = expand(DEV_SEED, ExpansionMode.UNIFORM)
    assert uniform == expand(DEV_SEED, ExpansionMode.UNIFORM)
    assert uniform.public != expand(DEV_SEED).public
    assert uniform.is_consistent()


def test_secret_key_roundtrip():
    data = bytes.fromhex(DEV_PAIR[:128])
    secret = decode_secret(data)
    assert secret.to_bytes() == data
    assert secret.public_key().hex() == DEV_PAIR[128:]


def test_decode_keypair():
    pair = decode_keypair(DEV_PAIR)
    assert pair.to_bytes().hex() == DEV_PAIR
    assert pair.is_consistent()
    assert decode_keypair(DEV_PAIR, check=True) == pair


def test_decode_keypair_mismatch():
    mixed = DEV_PAIR[:128] + ASCII_PAIR[128:]

    # Permissive by default
    pair = decode_keypair(mixed)
    assert not pair.is_consistent()

    with pytest.raises(InconsistentKeypairError):
        Keypair.from_bytes(mixed, check=True)


def test_wrong_lengths():
    with pytest.raises(InvalidLengthError):
        MiniSecretKey(b"\x00" * 31)
    with pytest.raises(InvalidLengthError):
        SecretKey.from_bytes(b"\x00" * 96)
    with pytest.raises(InvalidLengthError):
        PublicKey(b"\x00" * 33)
    with pytest.raises(InvalidLengthError):
        decode_keypair(b"\x00" * 64)


def test_generated_keys_differ():
    assert MiniSecretKey.generate() != MiniSecretKey.generate()


def test_repr_hides_secrets():
    mini = MiniSecretKey(DEV_SEED)
    assert DEV_SEED not in repr(mini)
    assert DEV_PAIR[:128] not in repr(decode_secret(DEV_PAIR[:128]))


def test_ss58_address():
    alice = PublicKey("d43593c715fdd31c61141abd04a99fd6822c8558854ccde39a5684e7a56da27d")
    assert alice.ss58_address() == "5GrwvaEF5zXb26Fz9rcQpDWS57CtERHpNehXCPcNoHGKutQY"


def test_decoders_accept_hex_and_bytes():
    assert decode_seed(DEV_SEED) == decode_seed("0x" + DEV_SEED)
    assert decode_public(DEV_PAIR[128:]).to_bytes() == bytes.fromhex(DEV_PAIR[128:])
    assert decode_chaincode(bytes(32)).to_bytes() == bytes(32)
    with pytest.raises(InvalidLengthError):
        decode_chaincode(bytes(31))
    with pytest.raises(InvalidEncodingError):
        decode_public(b"\xff" * 32)


def test_secret_decoding_drops_cofactor_bits():
    secret = SecretKey.from_bytes(b"\x07" + bytes(63))
    assert secret.key == 0
    assert secret.to_bytes() == bytes(64)

    clamped = b"\x08" + bytes(63)
    assert SecretKey.from_bytes(clamped).to_bytes() == clamped
