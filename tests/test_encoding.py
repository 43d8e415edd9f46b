import pytest
from srkit.exceptions import SerializationError, ValidationError
from srkit.utils.encoding import (
    hex_to_bytes, bytes_to_hex, encode_compact, decode_compact,
    encode_base58, decode_base58, ss58_encode, ss58_decode,
    divide_by_cofactor, multiply_by_cofactor, int_to_bytes,
    scalar_to_bytes, bytes_to_scalar,
)
from srkit.constants import GROUP_ORDER

ALICE = bytes.fromhex("d43593c715fdd31c61141abd04a99fd6822c8558854ccde39a5684e7a56da27d")
ALICE_SS58 = "5GrwvaEF5zXb26Fz9rcQpDWS57CtERHpNehXCPcNoHGKutQY"


def test_hex_bytes_roundtrip():
    data = b"\x00\x01deadbeef"
    hex_str = bytes_to_hex(data, prefix=True)
    assert hex_str.startswith("0x")
    assert hex_to_bytes(hex_str) == data
    with pytest.raises(ValidationError):
        hex_to_bytes("zzzz")


@pytest.mark.parametrize("value, encoded", [
    (0, "00"),
    (1, "04"),
    (63, "fc"),
    (64, "0101"),
    (16383, "fdff"),
    (16384, "02000100"),
    (2**30, "0300000040"),
])
def test_compact_known_encodings(value, encoded):
    assert encode_compact(value).hex() == encoded
    assert decode_compact(bytes.fromhex(encoded)) == (value, len(encoded) // 2)


def test_compact_decode_with_offset():
    data = b"\xaa" + encode_compact(300) + b"\xbb"
    value, offset = decode_compact(data, 1)
    assert value == 300
    assert data[offset:] == b"\xbb"


def test_compact_errors():
    with pytest.raises(SerializationError):
        encode_compact(-1)
    with pytest.raises(SerializationError):
        decode_compact(b"\x01")
    with pytest.raises(SerializationError):
        decode_compact(b"")


def test_base58():
    assert encode_base58(b"hello world") == "StV1DL6CwTryKyV"
    assert decode_base58("StV1DL6CwTryKyV") == b"hello world"
    assert encode_base58(b"\x00\x00\x01") == "112"
    assert decode_base58("112") == b"\x00\x00\x01"
    with pytest.raises(SerializationError):
        decode_base58("0OIl")


def test_ss58_alice_address():
    assert ss58_encode(ALICE) == ALICE_SS58
    assert ss58_decode(ALICE_SS58) == (42, ALICE)


def test_ss58_two_byte_prefix():
    address = ss58_encode(ALICE, prefix=1284)
    assert ss58_decode(address) == (1284, ALICE)


def test_ss58_rejects_bad_input():
    with pytest.raises(SerializationError):
        ss58_decode(ALICE_SS58[:-1] + ("R" if ALICE_SS58[-1] != "R" else "S"))
    with pytest.raises(SerializationError):
        ss58_encode(ALICE[:31])
    with pytest.raises(SerializationError):
        ss58_encode(ALICE, prefix=16384)


def test_cofactor_helpers():
    assert divide_by_cofactor(int_to_bytes(64, 32)) == int_to_bytes(8, 32)
    assert multiply_by_cofactor(int_to_bytes(8, 32)) == int_to_bytes(64, 32)
    # Low bits are dropped on division
    assert divide_by_cofactor(int_to_bytes(71, 32)) == int_to_bytes(8, 32)


def test_scalar_reduction():
    assert bytes_to_scalar(int_to_bytes(GROUP_ORDER + 5, 64)) == 5
    assert scalar_to_bytes(GROUP_ORDER) == bytes(32)
