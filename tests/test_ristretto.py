from srkit.crypto.ristretto import IDENTITY, add, base_mul, is_valid_point, mul, sub

BASEPOINT = bytes.fromhex("e2f2ae0a6abc4e71a884a961c500515f58e30b6aa582dd8db6a65945e08d2d76")


def test_base_mul():
    assert base_mul(1) == BASEPOINT
    assert base_mul(0) == IDENTITY


def test_identity_arithmetic():
    assert is_valid_point(IDENTITY)
    assert mul(5, IDENTITY) == IDENTITY
    assert mul(0, BASEPOINT) == IDENTITY
    assert add(IDENTITY, BASEPOINT) == BASEPOINT
    assert add(BASEPOINT, IDENTITY) == BASEPOINT
    assert sub(BASEPOINT, IDENTITY) == BASEPOINT
    assert sub(BASEPOINT, BASEPOINT) == IDENTITY


def test_group_laws():
    assert add(base_mul(2), base_mul(3)) == base_mul(5)
    assert mul(7, base_mul(3)) == base_mul(21)
    assert sub(base_mul(9), base_mul(4)) == base_mul(5)
