"""Fully parsed keys, ready for cryptographic use, built from JWKs."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from cryptography.hazmat.primitives.asymmetric import ec as _ec
from cryptography.hazmat.primitives.asymmetric import rsa as _rsa

from . import keyinfo
from .b64 import Secret
from .ec import (
    ec_from_public_key,
    ec_from_secret_key,
    ec_key_strength,
    ec_key_supports,
    public_key_from_ec,
    secret_key_from_ec,
)
from .jwa import Algorithm
from .jwk import Ec, EcCurves, Jwk, Oct, Okp, Rsa
from .keyinfo import UnsupportedKeyError
from .rsakeys import (
    rsa_from_private_key,
    rsa_from_public_key,
    rsa_key_strength,
    rsa_key_supports,
    rsa_private_key_from_jwk,
    rsa_public_key_from_jwk,
)

# Curves that can be loaded from an EC JWK.
_JWK_EC_CURVES = frozenset({EcCurves.P256, EcCurves.P384, EcCurves.P521})

_PUBLIC_TYPES = (_rsa.RSAPublicKey, _ec.EllipticCurvePublicKey)
_SECRET_TYPES = (_rsa.RSAPrivateKey, _ec.EllipticCurvePrivateKey)


class Kind(Enum):
    """Whether a key is public or private."""

    PUBLIC = "public"
    SECRET = "secret"


@dataclass(frozen=True, eq=False)
class CryptoKey:
    """A key ready for cryptographic operations.

    ``key`` holds the symmetric key bytes or a native RSA or elliptic-curve key.
    """

    key: Any
    kind: Kind

    @classmethod
    def from_native(cls, key: Any) -> "CryptoKey":
        """Wrap symmetric key bytes or a native RSA or elliptic-curve key."""
        if isinstance(key, (bytes, bytearray, memoryview)):
            return cls(Secret(bytes(key)), Kind.SECRET)
        if isinstance(key, (_ec.EllipticCurvePublicKey, _ec.EllipticCurvePrivateKey)):
            ec_key_strength(key)  # rejects unsupported curves
        if isinstance(key, _PUBLIC_TYPES):
            return cls(key, Kind.PUBLIC)
        if isinstance(key, _SECRET_TYPES):
            return cls(key, Kind.SECRET)
        raise TypeError(f"unsupported key type {type(key).__name__}")

    @classmethod
    def from_jwk(cls, key: Any) -> "CryptoKey":
        """Parse JWK key material into a usable key."""
        if isinstance(key, Jwk):
            key = key.key
        if isinstance(key, Oct):
            return cls(Secret(bytes(key.k)), Kind.SECRET)
        if isinstance(key, Rsa):
            if key.prv is None:
                return cls(rsa_public_key_from_jwk(key), Kind.PUBLIC)
            return cls(rsa_private_key_from_jwk(key), Kind.SECRET)
        if isinstance(key, Ec):
            if key.crv not in _JWK_EC_CURVES:
                raise UnsupportedKeyError(f"unsupported curve {key.crv.value}")
            if key.d is None:
                return cls(public_key_from_ec(key), Kind.PUBLIC)
            return cls(secret_key_from_ec(key), Kind.SECRET)
        if isinstance(key, Okp):
            raise UnsupportedKeyError("OKP keys are not supported")
        raise TypeError(f"unsupported key type {type(key).__name__}")

    def _family(self) -> str:
        if isinstance(self.key, bytes):
            return "oct"
        if isinstance(self.key, (_rsa.RSAPublicKey, _rsa.RSAPrivateKey)):
            return "rsa"
        return "ec"

    def to_jwk(self) -> Any:
        """Describe the key as JWK key material."""
        family = self._family()
        if family == "oct":
            return Oct(k=bytes(self.key))
        if family == "rsa":
            if self.kind is Kind.PUBLIC:
                return rsa_from_public_key(self.key)
            return rsa_from_private_key(self.key)
        if self.kind is Kind.PUBLIC:
            return ec_from_public_key(self.key)
        return ec_from_secret_key(self.key)

    def strength(self) -> int:
        """Strength in bytes of a comparable symmetric key."""
        family = self._family()
        if family == "oct":
            return len(self.key)
        if family == "rsa":
            return rsa_key_strength(self.key)
        return ec_key_strength(self.key)

    def is_supported(self, alg: Algorithm) -> bool:
        """Tell whether the key can be used with ``alg``."""
        family = self._family()
        if family == "oct":
            return keyinfo.is_supported(bytes(self.key), alg)
        if family == "rsa":
            return rsa_key_supports(self.key, alg)
        return ec_key_supports(self.key, alg)