"""Conversions between RSA JWKs and native RSA keys."""

from __future__ import annotations

from typing import Any

from cryptography.hazmat.primitives.asymmetric import rsa as _rsa

from .jwa import Algorithm, Signing
from .jwk import Rsa, RsaOptional, RsaPrivate
from .keyinfo import InvalidKeyError, NotPrivateError, UnsupportedKeyError

_MAX_MODULUS_BITS = 4096
_MIN_PUBLIC_EXPONENT = 2
_MAX_PUBLIC_EXPONENT = (1 << 33) - 1

# The smallest strength that any RSA signing algorithm accepts.
_MIN_STRENGTH = 16

_RSA_MIN_STRENGTH = {
    Signing.RS256: 16,
    Signing.RS384: 24,
    Signing.RS512: 32,
    Signing.PS256: 16,
    Signing.PS384: 24,
    Signing.PS512: 32,
}


def _uint(data: Any) -> int:
    return int.from_bytes(bytes(data), "big")


def _be(value: int) -> bytes:
    return value.to_bytes(max(1, (value.bit_length() + 7) // 8), "big")


def rsa_public_key_from_jwk(rsa: Rsa) -> _rsa.RSAPublicKey:
    """Build a native public key from the JWK's modulus and exponent."""
    n = _uint(rsa.n)
    e = _uint(rsa.e)
    if n.bit_length() > _MAX_MODULUS_BITS:
        raise InvalidKeyError("modulus too large")
    if not _MIN_PUBLIC_EXPONENT <= e <= _MAX_PUBLIC_EXPONENT:
        raise InvalidKeyError("public exponent out of range")
    try:
        return _rsa.RSAPublicNumbers(e, n).public_key()
    except ValueError as exc:
        raise InvalidKeyError("invalid RSA public key") from exc


def rsa_private_key_from_jwk(rsa: Rsa) -> _rsa.RSAPrivateKey:
    """Build a native private key from the JWK's private exponent and primes.

    The CRT values are recomputed from the primes rather than taken from the JWK.
    """
    if rsa.prv is None:
        raise NotPrivateError("key has no private part")
    opt = rsa.prv.opt
    if opt is None:
        raise UnsupportedKeyError("private key lacks its prime factors")
    if opt.oth:
        raise UnsupportedKeyError("multi-prime RSA keys are not supported")
    n = _uint(rsa.n)
    e = _uint(rsa.e)
    d = _uint(rsa.prv.d)
    p = _uint(opt.p)
    q = _uint(opt.q)
    try:
        numbers = _rsa.RSAPrivateNumbers(
            p=p,
            q=q,
            d=d,
            dmp1=_rsa.rsa_crt_dmp1(d, p),
            dmq1=_rsa.rsa_crt_dmq1(d, q),
            iqmp=_rsa.rsa_crt_iqmp(p, q),
            public_numbers=_rsa.RSAPublicNumbers(e, n),
        )
        return numbers.private_key()
    except (ValueError, ArithmeticError) as exc:
        raise InvalidKeyError("invalid RSA private key") from exc


def rsa_from_public_key(key: _rsa.RSAPublicKey) -> Rsa:
    """Describe a native public key as an RSA JWK."""
    if not isinstance(key, _rsa.RSAPublicKey):
        raise TypeError(f"expected an RSA public key, got {type(key).__name__}")
    numbers = key.public_numbers()
    return Rsa(n=_be(numbers.n), e=_be(numbers.e))


def rsa_from_private_key(key: _rsa.RSAPrivateKey) -> Rsa:
    """Describe a native private key as an RSA JWK with all private values."""
    if not isinstance(key, _rsa.RSAPrivateKey):
        raise TypeError(f"expected an RSA private key, got {type(key).__name__}")
    numbers = key.private_numbers()
    public = numbers.public_numbers
    opt = RsaOptional(
        p=_be(numbers.p),
        q=_be(numbers.q),
        dp=_be(numbers.dmp1),
        dq=_be(numbers.dmq1),
        qi=_be(numbers.iqmp),
    )
    return Rsa(n=_be(public.n), e=_be(public.e), prv=RsaPrivate(d=_be(numbers.d), opt=opt))


def rsa_key_strength(key: Any) -> int:
    """Strength of a native RSA key: the modulus size in bytes divided by 16."""
    if not isinstance(key, (_rsa.RSAPublicKey, _rsa.RSAPrivateKey)):
        raise TypeError(f"expected an RSA key, got {type(key).__name__}")
    return (key.key_size + 7) // 8 // 16


def rsa_key_supports(key: Any, alg: Algorithm) -> bool:
    """Tell whether a native RSA key can be used with ``alg``.

    Public keys only need the minimum strength for any RSA algorithm; private
    keys must meet the minimum of the specific algorithm.
    """
    key_strength = rsa_key_strength(key)
    if isinstance(key, _rsa.RSAPublicKey):
        return key_strength >= _MIN_STRENGTH and alg in _RSA_MIN_STRENGTH
    minimum = _RSA_MIN_STRENGTH.get(alg)
    return minimum is not None and key_strength >= minimum