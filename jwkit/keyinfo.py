"""Key strength and algorithm support for JWK key material."""

from __future__ import annotations

from functools import singledispatch
from typing import Any

from .jwa import Algorithm, Signing
from .jwk import Ec, EcCurves, Jwk, Oct, Okp, OkpCurves, Rsa


class KeyMaterialError(ValueError):
    """An error related to key material."""


class InvalidKeyError(KeyMaterialError):
    """The key material is invalid."""


class NotPrivateError(KeyMaterialError):
    """The private part of the key is not known."""


class AlgMismatchError(KeyMaterialError):
    """The key belongs to a different algorithm or curve."""


class UnsupportedKeyError(KeyMaterialError):
    """The key kind or curve is not supported."""


_HMAC_MIN_STRENGTH = {
    Signing.HS256: 16,
    Signing.HS384: 24,
    Signing.HS512: 32,
}

_RSA_MIN_STRENGTH = {
    Signing.RS256: 16,
    Signing.RS384: 24,
    Signing.RS512: 32,
    Signing.PS256: 16,
    Signing.PS384: 24,
    Signing.PS512: 32,
}

_EC_STRENGTH = {
    EcCurves.P256: 16,
    EcCurves.P256K: 16,
    EcCurves.P384: 24,
    EcCurves.P521: 32,
}

_EC_ALGORITHM = {
    EcCurves.P256: Signing.ES256,
    EcCurves.P256K: Signing.ES256K,
    EcCurves.P384: Signing.ES384,
    EcCurves.P521: Signing.ES512,
}

_OKP_STRENGTH = {
    OkpCurves.ED25519: 16,
    OkpCurves.ED448: 24,
    OkpCurves.X25519: 16,
    OkpCurves.X448: 24,
}


def _meets(table: dict, alg: Algorithm, key_strength: int) -> bool:
    minimum = table.get(alg)
    return minimum is not None and key_strength >= minimum


@singledispatch
def strength(key: Any) -> int:
    """Return the key's strength as the size in bytes of a comparable symmetric key."""
    method = getattr(key, "strength", None)
    if callable(method):
        return method()
    raise TypeError(f"unsupported key type {type(key).__name__}")


@strength.register
def _(key: Jwk) -> int:
    return strength(key.key)


@strength.register
def _(key: Ec) -> int:
    return _EC_STRENGTH[key.crv]


@strength.register
def _(key: Rsa) -> int:
    return len(key.n) // 16


@strength.register
def _(key: Oct) -> int:
    return len(key.k)


@strength.register
def _(key: Okp) -> int:
    return _OKP_STRENGTH[key.crv]


@strength.register(bytes)
@strength.register(bytearray)
@strength.register(memoryview)
def _(key: Any) -> int:
    return len(key)


@singledispatch
def is_supported(key: Any, alg: Algorithm) -> bool:
    """Tell whether the key can be used with the given algorithm."""
    method = getattr(key, "is_supported", None)
    if callable(method):
        return method(alg)
    raise TypeError(f"unsupported key type {type(key).__name__}")


@is_supported.register
def _(key: Jwk, alg: Algorithm) -> bool:
    if not is_supported(key.key, alg):
        return False
    return key.prm.alg is None or key.prm.alg == alg


@is_supported.register
def _(key: Ec, alg: Algorithm) -> bool:
    return _EC_ALGORITHM[key.crv] == alg


@is_supported.register
def _(key: Rsa, alg: Algorithm) -> bool:
    return _meets(_RSA_MIN_STRENGTH, alg, strength(key))


@is_supported.register
def _(key: Oct, alg: Algorithm) -> bool:
    return _meets(_HMAC_MIN_STRENGTH, alg, strength(key))


@is_supported.register
def _(key: Okp, alg: Algorithm) -> bool:
    return alg == Signing.EDDSA


@is_supported.register(bytes)
@is_supported.register(bytearray)
@is_supported.register(memoryview)
def _(key: Any, alg: Algorithm) -> bool:
    return _meets(_HMAC_MIN_STRENGTH, alg, len(key))