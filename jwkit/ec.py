"""Conversions between EC JWKs and native elliptic-curve keys."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from cryptography.hazmat.primitives.asymmetric import ec as _ec

from .jwa import Algorithm, Signing
from .jwk import Ec, EcCurves
from .keyinfo import AlgMismatchError, InvalidKeyError, NotPrivateError, UnsupportedKeyError

# Shorter secret scalars are accepted and left-padded, down to this many bytes.
_MIN_SECRET_SIZE = 24


@dataclass(frozen=True)
class _CurveInfo:
    curve: type
    size: int
    order: int
    strength: int
    alg: Signing


_CURVES = {
    EcCurves.P256: _CurveInfo(
        _ec.SECP256R1,
        32,
        0xFFFFFFFF00000000FFFFFFFFFFFFFFFFBCE6FAADA7179E84F3B9CAC2FC632551,
        16,
        Signing.ES256,
    ),
    EcCurves.P384: _CurveInfo(
        _ec.SECP384R1,
        48,
        0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFC7634D81F4372DDF581A0DB248B0A77AECEC196ACCC52973,
        24,
        Signing.ES384,
    ),
    EcCurves.P521: _CurveInfo(
        _ec.SECP521R1,
        66,
        int(
            "01FF" + "FFFFFFFF" * 7 + "FFFFFFFA"
            "51868783BF2F966B7FCC0148F709A5D03BB5C9B8899C47AEBB6FB71E91386409",
            16,
        ),
        32,
        Signing.ES512,
    ),
    EcCurves.P256K: _CurveInfo(
        _ec.SECP256K1,
        32,
        0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141,
        16,
        Signing.ES256K,
    ),
}

_BY_NAME = {info.curve.name: crv for crv, info in _CURVES.items()}


def _info_for(ec: Ec, curve: EcCurves | None) -> _CurveInfo:
    if curve is not None and ec.crv != curve:
        raise AlgMismatchError(f"key is on {ec.crv.value}, expected {curve.value}")
    try:
        return _CURVES[ec.crv]
    except KeyError:
        raise UnsupportedKeyError(f"unsupported curve {ec.crv!r}") from None


def _curve_of(key: Any) -> EcCurves:
    if not isinstance(key, (_ec.EllipticCurvePublicKey, _ec.EllipticCurvePrivateKey)):
        raise TypeError(f"expected an elliptic-curve key, got {type(key).__name__}")
    try:
        return _BY_NAME[key.curve.name]
    except KeyError:
        raise UnsupportedKeyError(f"unsupported curve {key.curve.name}") from None


def public_key_from_ec(ec: Ec, curve: EcCurves | None = None) -> _ec.EllipticCurvePublicKey:
    """Build a native public key from the EC JWK's coordinates.

    If ``curve`` is given, the JWK must be on that curve.
    """
    info = _info_for(ec, curve)
    if len(ec.x) != info.size or len(ec.y) != info.size:
        raise InvalidKeyError("invalid coordinate length")
    point = b"\x04" + bytes(ec.x) + bytes(ec.y)
    try:
        return _ec.EllipticCurvePublicKey.from_encoded_point(info.curve(), point)
    except ValueError as exc:
        raise InvalidKeyError("point is not on the curve") from exc


def secret_key_from_ec(ec: Ec, curve: EcCurves | None = None) -> _ec.EllipticCurvePrivateKey:
    """Build a native private key from the EC JWK's private scalar.

    If ``curve`` is given, the JWK must be on that curve.
    """
    info = _info_for(ec, curve)
    if ec.d is None:
        raise NotPrivateError("key has no private part")
    scalar = bytes(ec.d)
    if not _MIN_SECRET_SIZE <= len(scalar) <= info.size:
        raise InvalidKeyError("invalid private key length")
    value = int.from_bytes(scalar, "big")
    if not 0 < value < info.order:
        raise InvalidKeyError("private scalar out of range")
    try:
        return _ec.derive_private_key(value, info.curve())
    except ValueError as exc:
        raise InvalidKeyError("invalid private key") from exc


def ec_from_public_key(key: _ec.EllipticCurvePublicKey) -> Ec:
    """Describe a native public key as an EC JWK."""
    if not isinstance(key, _ec.EllipticCurvePublicKey):
        raise TypeError(f"expected an elliptic-curve public key, got {type(key).__name__}")
    crv = _curve_of(key)
    size = _CURVES[crv].size
    numbers = key.public_numbers()
    return Ec(crv=crv, x=numbers.x.to_bytes(size, "big"), y=numbers.y.to_bytes(size, "big"))


def ec_from_secret_key(key: _ec.EllipticCurvePrivateKey) -> Ec:
    """Describe a native private key as an EC JWK, including its private scalar."""
    if not isinstance(key, _ec.EllipticCurvePrivateKey):
        raise TypeError(f"expected an elliptic-curve private key, got {type(key).__name__}")
    jwk = ec_from_public_key(key.public_key())
    size = _CURVES[jwk.crv].size
    jwk.d = key.private_numbers().private_value.to_bytes(size, "big")
    jwk.__post_init__()
    return jwk


def ec_key_strength(key: Any) -> int:
    """Strength of a native elliptic-curve key, public or private."""
    return _CURVES[_curve_of(key)].strength


def ec_key_supports(key: Any, alg: Algorithm) -> bool:
    """Tell whether a native elliptic-curve key can be used with ``alg``."""
    return _CURVES[_curve_of(key)].alg == alg