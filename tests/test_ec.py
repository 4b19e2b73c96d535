import pytest
from cryptography.hazmat.primitives.asymmetric import ec as native

from jwkit.b64 import Secret
from jwkit.ec import (
    ec_from_public_key,
    ec_from_secret_key,
    ec_key_strength,
    ec_key_supports,
    public_key_from_ec,
    secret_key_from_ec,
)
from jwkit.jwa import Signing
from jwkit.jwk import Ec, EcCurves
from jwkit.keyinfo import (
    AlgMismatchError,
    InvalidKeyError,
    NotPrivateError,
    is_supported,
    strength,
)

X = bytes(
    [
        48, 160, 66, 76, 210, 28, 41, 68, 131, 138, 45, 117, 201, 43, 55, 231,
        110, 162, 13, 159, 0, 137, 58, 59, 78, 238, 138, 60, 10, 175, 236, 62,
    ]
)
Y = bytes(
    [
        224, 75, 101, 233, 36, 86, 217, 136, 139, 82, 179, 121, 189, 251, 213,
        30, 232, 105, 239, 31, 15, 198, 91, 102, 89, 105, 91, 108, 206, 8, 23, 35,
    ]
)
D = bytes(
    [
        243, 189, 12, 7, 168, 31, 185, 50, 120, 30, 213, 39, 82, 246, 12,
        200, 154, 107, 229, 229, 25, 52, 254, 1, 147, 141, 219, 85, 216,
        247, 120, 1,
    ]
)

CURVES = [
    (EcCurves.P256, native.SECP256R1),
    (EcCurves.P384, native.SECP384R1),
    (EcCurves.P521, native.SECP521R1),
    (EcCurves.P256K, native.SECP256K1),
]


def test_rfc7517_a1_public_round_trip():
    key = Ec.from_json(
        {
            "crv": "P-256",
            "x": "MKBCTNIcKUSDii11ySs3526iDZ8AiTo7Tu6KPAqv7D4",
            "y": "4Etl6SRW2YiLUrN5vfvVHuhp7x8PxltmWWlbbM4IFyM",
        }
    )
    assert key == Ec(crv=EcCurves.P256, x=X, y=Y)
    pk = public_key_from_ec(key, EcCurves.P256)
    assert ec_from_public_key(pk) == key


def test_rfc7517_a2_secret_round_trip():
    key = Ec.from_json(
        {
            "crv": "P-256",
            "x": "MKBCTNIcKUSDii11ySs3526iDZ8AiTo7Tu6KPAqv7D4",
            "y": "4Etl6SRW2YiLUrN5vfvVHuhp7x8PxltmWWlbbM4IFyM",
            "d": "870MB6gfuTJ4HtUnUvYMyJpr5eUZNP4Bk43bVdj3eAE",
        }
    )
    assert key == Ec(crv=EcCurves.P256, x=X, y=Y, d=D)
    sk = secret_key_from_ec(key, EcCurves.P256)
    assert ec_from_secret_key(sk) == key


def test_rfc7517_a2_private_scalar_matches_public_point():
    key = Ec(crv=EcCurves.P256, x=X, y=Y, d=D)
    sk = secret_key_from_ec(key)
    assert sk.public_key().public_numbers() == public_key_from_ec(key).public_numbers()


def test_secret_to_ec_has_redacted_private_part():
    sk = secret_key_from_ec(Ec(crv=EcCurves.P256, x=X, y=Y, d=D))
    jwk = ec_from_secret_key(sk)
    assert isinstance(jwk.d, Secret)
    assert bytes(jwk.d) == D


@pytest.mark.parametrize("crv,curve", CURVES)
def test_generated_key_round_trip(crv, curve):
    sk = native.generate_private_key(curve())
    jwk = ec_from_secret_key(sk)
    assert jwk.crv == crv
    assert secret_key_from_ec(jwk, crv).private_numbers() == sk.private_numbers()
    public = ec_from_public_key(sk.public_key())
    assert public.d is None
    assert public.x == jwk.x and public.y == jwk.y
    assert public_key_from_ec(public, crv).public_numbers() == sk.public_key().public_numbers()


@pytest.mark.parametrize("crv,curve", CURVES)
def test_native_key_info_matches_jwk_key_info(crv, curve):
    sk = native.generate_private_key(curve())
    jwk = ec_from_secret_key(sk)
    assert ec_key_strength(sk) == strength(jwk)
    assert ec_key_strength(sk.public_key()) == strength(jwk)
    for alg in Signing:
        assert ec_key_supports(sk, alg) == is_supported(jwk, alg)
        assert ec_key_supports(sk.public_key(), alg) == is_supported(jwk, alg)


def test_p256_key_supports_es256_only():
    pk = public_key_from_ec(Ec(crv=EcCurves.P256, x=X, y=Y))
    assert ec_key_supports(pk, Signing.ES256)
    assert not ec_key_supports(pk, Signing.ES256K)
    assert ec_key_strength(pk) == 16


def test_curve_mismatch():
    key = Ec(crv=EcCurves.P256, x=X, y=Y, d=D)
    with pytest.raises(AlgMismatchError):
        public_key_from_ec(key, EcCurves.P384)
    with pytest.raises(AlgMismatchError):
        secret_key_from_ec(key, EcCurves.P256K)


def test_wrong_coordinate_length():
    with pytest.raises(InvalidKeyError):
        public_key_from_ec(Ec(crv=EcCurves.P256, x=X[:-1], y=Y))
    with pytest.raises(InvalidKeyError):
        public_key_from_ec(Ec(crv=EcCurves.P384, x=X, y=Y))


def test_point_not_on_curve():
    bad_y = Y[:-1] + bytes([Y[-1] ^ 1])
    with pytest.raises(InvalidKeyError):
        public_key_from_ec(Ec(crv=EcCurves.P256, x=X, y=bad_y))


def test_missing_private_part():
    with pytest.raises(NotPrivateError):
        secret_key_from_ec(Ec(crv=EcCurves.P256, x=X, y=Y))


@pytest.mark.parametrize("scalar", [bytes(32), b"\xff" * 32, b"\x01" * 8, b"\x01" * 33])
def test_invalid_private_scalar(scalar):
    with pytest.raises(InvalidKeyError):
        secret_key_from_ec(Ec(crv=EcCurves.P256, x=X, y=Y, d=scalar))


def test_short_private_scalar_is_left_padded():
    short = D[1:] if D[0] == 0 else b"\x01" * 31
    sk = secret_key_from_ec(Ec(crv=EcCurves.P256, x=X, y=Y, d=short))
    assert sk.private_numbers().private_value == int.from_bytes(short, "big")


def test_non_ec_keys_rejected():
    with pytest.raises(TypeError):
        ec_from_public_key(b"not a key")
    with pytest.raises(TypeError):
        ec_from_secret_key(public_key_from_ec(Ec(crv=EcCurves.P256, x=X, y=Y)))
    with pytest.raises(TypeError):
        ec_key_strength("not a key")