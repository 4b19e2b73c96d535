"""JSON Web Keys, key sets and their parameters."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union

from .b64 import Bytes, Encoding, LengthError, Secret
from .jwa import Algorithm, Signing, algorithm_from_json


def _object(value: Any, what: str) -> dict:
    if not isinstance(value, dict):
        raise TypeError(f"{what} must be a JSON object")
    return value


def _field(obj: dict, name: str) -> Any:
    try:
        return obj[name]
    except KeyError:
        raise ValueError(f"missing field `{name}`") from None


def _string(value: Any, name: str) -> str:
    if not isinstance(value, str):
        raise TypeError(f"field `{name}` must be a string")
    return value


def _enum(kind: type, value: Any, name: str) -> Any:
    _string(value, name)
    try:
        return kind(value)
    except ValueError:
        raise ValueError(f"unknown {name} {value!r}") from None


def _bytes(value: Any) -> Bytes:
    return value if isinstance(value, Bytes) and not isinstance(value, Secret) else Bytes(value)


def _secret(value: Any) -> Secret:
    return value if isinstance(value, Secret) else Secret(value)


def _optional_secret(value: Any) -> Secret | None:
    return None if value is None else _secret(value)


def _read_secret(obj: dict, name: str) -> Secret:
    return Secret.from_json(_field(obj, name))


def _read_optional_secret(obj: dict, name: str) -> Secret | None:
    value = obj.get(name)
    return None if value is None else Secret.from_json(value)


class EcCurves(Enum):
    """Elliptic curves usable in an EC key."""

    P256 = "P-256"
    P384 = "P-384"
    P521 = "P-521"
    P256K = "secp256k1"


@dataclass
class Ec:
    """An elliptic-curve key."""

    crv: EcCurves
    x: Bytes
    y: Bytes
    d: Secret | None = None

    def __post_init__(self) -> None:
        self.x = _bytes(self.x)
        self.y = _bytes(self.y)
        self.d = _optional_secret(self.d)

    def to_json(self) -> dict:
        out = {"crv": self.crv.value, "x": self.x.to_json(), "y": self.y.to_json()}
        if self.d is not None:
            out["d"] = self.d.to_json()
        return out

    @classmethod
    def from_json(cls, value: Any) -> "Ec":
        obj = _object(value, "EC key")
        return cls(
            crv=_enum(EcCurves, _field(obj, "crv"), "curve"),
            x=Bytes.from_json(_field(obj, "x")),
            y=Bytes.from_json(_field(obj, "y")),
            d=_read_optional_secret(obj, "d"),
        )


class OkpCurves(Enum):
    """CFRG curves usable in an OKP key."""

    ED25519 = "Ed25519"
    ED448 = "Ed448"
    X25519 = "X25519"
    X448 = "X448"


@dataclass
class Okp:
    """An octet key pair on a CFRG curve."""

    crv: OkpCurves
    x: Bytes
    d: Secret | None = None

    def __post_init__(self) -> None:
        self.x = _bytes(self.x)
        self.d = _optional_secret(self.d)

    def to_json(self) -> dict:
        out = {"crv": self.crv.value, "x": self.x.to_json()}
        if self.d is not None:
            out["d"] = self.d.to_json()
        return out

    @classmethod
    def from_json(cls, value: Any) -> "Okp":
        obj = _object(value, "OKP key")
        return cls(
            crv=_enum(OkpCurves, _field(obj, "crv"), "curve"),
            x=Bytes.from_json(_field(obj, "x")),
            d=_read_optional_secret(obj, "d"),
        )


@dataclass
class Oct:
    """A symmetric octet key."""

    k: Secret

    def __post_init__(self) -> None:
        self.k = _secret(self.k)

    def to_json(self) -> dict:
        return {"k": self.k.to_json()}

    @classmethod
    def from_json(cls, value: Any) -> "Oct":
        return cls(k=_read_secret(_object(value, "oct key"), "k"))


@dataclass
class RsaOtherPrimes:
    """An additional RSA prime with its CRT values."""

    r: Secret
    d: Secret
    t: Secret

    def __post_init__(self) -> None:
        self.r = _secret(self.r)
        self.d = _secret(self.d)
        self.t = _secret(self.t)

    def to_json(self) -> dict:
        return {"r": self.r.to_json(), "d": self.d.to_json(), "t": self.t.to_json()}

    @classmethod
    def from_json(cls, value: Any) -> "RsaOtherPrimes":
        obj = _object(value, "RSA prime")
        return cls(r=_read_secret(obj, "r"), d=_read_secret(obj, "d"), t=_read_secret(obj, "t"))


_RSA_OPTIONAL_FIELDS = ("p", "q", "dp", "dq", "qi")


@dataclass
class RsaOptional:
    """Optional RSA private key material (primes and CRT values)."""

    p: Secret
    q: Secret
    dp: Secret
    dq: Secret
    qi: Secret
    oth: list = field(default_factory=list)

    def __post_init__(self) -> None:
        for name in _RSA_OPTIONAL_FIELDS:
            setattr(self, name, _secret(getattr(self, name)))
        self.oth = list(self.oth)

    def to_json(self) -> dict:
        out = {name: getattr(self, name).to_json() for name in _RSA_OPTIONAL_FIELDS}
        if self.oth:
            out["oth"] = [prime.to_json() for prime in self.oth]
        return out

    @classmethod
    def from_json(cls, value: Any) -> "RsaOptional":
        obj = _object(value, "RSA private key")
        oth = obj.get("oth")
        if oth is None:
            primes = []
        elif isinstance(oth, list):
            primes = [RsaOtherPrimes.from_json(item) for item in oth]
        else:
            raise TypeError("field `oth` must be a list")
        return cls(**{name: _read_secret(obj, name) for name in _RSA_OPTIONAL_FIELDS}, oth=primes)


@dataclass
class RsaPrivate:
    """RSA private key material."""

    d: Secret
    opt: RsaOptional | None = None

    def __post_init__(self) -> None:
        self.d = _secret(self.d)

    def to_json(self) -> dict:
        out = {"d": self.d.to_json()}
        if self.opt is not None:
            out.update(self.opt.to_json())
        return out

    @classmethod
    def from_json(cls, value: Any) -> "RsaPrivate":
        obj = _object(value, "RSA private key")
        try:
            opt = RsaOptional.from_json(obj)
        except (ValueError, TypeError):
            opt = None
        return cls(d=_read_secret(obj, "d"), opt=opt)


@dataclass
class Rsa:
    """An RSA key."""

    n: Bytes
    e: Bytes
    prv: RsaPrivate | None = None

    def __post_init__(self) -> None:
        self.n = _bytes(self.n)
        self.e = _bytes(self.e)

    def to_json(self) -> dict:
        out = {"n": self.n.to_json(), "e": self.e.to_json()}
        if self.prv is not None:
            out.update(self.prv.to_json())
        return out

    @classmethod
    def from_json(cls, value: Any) -> "Rsa":
        obj = _object(value, "RSA key")
        try:
            prv = RsaPrivate.from_json(obj)
        except (ValueError, TypeError):
            prv = None
        return cls(n=Bytes.from_json(_field(obj, "n")), e=Bytes.from_json(_field(obj, "e")), prv=prv)


Key = Union[Ec, Rsa, Oct, Okp]

_KTY_BY_TYPE = {Ec: "EC", Rsa: "RSA", Oct: "oct", Okp: "OKP"}
_TYPE_BY_KTY = {kty: kind for kind, kty in _KTY_BY_TYPE.items()}


def key_to_json(key: Key) -> dict:
    """Serialize key material with its "kty" tag."""
    try:
        kty = _KTY_BY_TYPE[type(key)]
    except KeyError:
        raise TypeError(f"unsupported key type {type(key).__name__}") from None
    return {"kty": kty, **key.to_json()}


def key_from_json(value: Any) -> Key:
    """Read key material, dispatching on its "kty" tag."""
    obj = _object(value, "key")
    kty = _string(_field(obj, "kty"), "kty")
    try:
        kind = _TYPE_BY_KTY[kty]
    except KeyError:
        raise ValueError(f"unknown key type {kty!r}") from None
    return kind.from_json(obj)


class Class(Enum):
    """The intended use of a key (``use`` in the JWK)."""

    ENCRYPTION = "enc"
    SIGNING = "sig"


class Operations(Enum):
    """Key operations (``key_ops`` in the JWK), ordered lexicographically."""

    DECRYPT = "decrypt"
    DERIVE_BITS = "deriveBits"
    DERIVE_KEY = "deriveKey"
    ENCRYPT = "encrypt"
    SIGN = "sign"
    UNWRAP_KEY = "unwrapKey"
    VERIFY = "verify"
    WRAP_KEY = "wrapKey"

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Operations):
            return NotImplemented
        order = list(Operations)
        return order.index(self) < order.index(other)


_SHA1_LEN = 20
_SHA256_LEN = 32


@dataclass
class Thumbprint:
    """X.509 certificate thumbprints."""

    s1: Bytes | None = None
    s256: Bytes | None = None

    def __post_init__(self) -> None:
        for name, length in (("s1", _SHA1_LEN), ("s256", _SHA256_LEN)):
            value = getattr(self, name)
            if value is None:
                continue
            value = _bytes(value)
            if len(value) != length:
                raise LengthError("invalid base64 length")
            setattr(self, name, value)

    def to_json(self) -> dict:
        out = {}
        if self.s1 is not None:
            out["x5t"] = self.s1.to_json()
        if self.s256 is not None:
            out["x5t#S256"] = self.s256.to_json()
        return out

    @classmethod
    def from_json(cls, value: Any) -> "Thumbprint":
        obj = _object(value, "thumbprint")
        s1 = obj.get("x5t")
        s256 = obj.get("x5t#S256")
        return cls(
            s1=None if s1 is None else Bytes.from_json(s1, length=_SHA1_LEN),
            s256=None if s256 is None else Bytes.from_json(s256, length=_SHA256_LEN),
        )


@dataclass
class Parameters:
    """JWK parameters unrelated to the key material itself."""

    alg: Algorithm | None = None
    kid: str | None = None
    cls: Class | None = None
    ops: frozenset | None = None
    x5c: list | None = None
    x5t: Thumbprint = field(default_factory=Thumbprint)

    def __post_init__(self) -> None:
        if self.ops is not None:
            self.ops = frozenset(self.ops)
        if self.x5c is not None:
            # Certificates use standard, padded base64 rather than base64url.
            self.x5c = [Bytes(cert, Encoding.STANDARD) for cert in self.x5c]

    @classmethod
    def from_algorithm(cls, alg: Algorithm) -> "Parameters":
        """Parameters for a key bound to ``alg``, with the matching key class."""
        return cls(alg=alg, cls=Class.SIGNING if isinstance(alg, Signing) else None)

    def to_json(self) -> dict:
        out: dict = {}
        if self.alg is not None:
            out["alg"] = self.alg.to_json()
        if self.kid is not None:
            out["kid"] = self.kid
        if self.cls is not None:
            out["use"] = self.cls.value
        if self.ops is not None:
            out["key_ops"] = [op.value for op in sorted(self.ops)]
        if self.x5c is not None:
            out["x5c"] = [cert.to_json() for cert in self.x5c]
        out.update(self.x5t.to_json())
        return out

    @classmethod
    def from_json(cls, value: Any) -> "Parameters":
        obj = _object(value, "parameters")
        alg = obj.get("alg")
        kid = obj.get("kid")
        use = obj.get("use")
        ops = obj.get("key_ops")
        x5c = obj.get("x5c")
        if ops is not None and not isinstance(ops, list):
            raise TypeError("field `key_ops` must be a list")
        if x5c is not None and not isinstance(x5c, list):
            raise TypeError("field `x5c` must be a list")
        return cls(
            alg=None if alg is None else algorithm_from_json(alg),
            kid=None if kid is None else _string(kid, "kid"),
            cls=None if use is None else _enum(Class, use, "key use"),
            ops=None if ops is None else frozenset(_enum(Operations, op, "key operation") for op in ops),
            x5c=None if x5c is None else [Bytes.from_json(cert, Encoding.STANDARD) for cert in x5c],
            x5t=Thumbprint.from_json(obj),
        )


@dataclass
class Jwk:
    """A JSON Web Key: key material plus parameters."""

    key: Key
    prm: Parameters = field(default_factory=Parameters)

    def to_json(self) -> dict:
        return {**key_to_json(self.key), **self.prm.to_json()}

    @classmethod
    def from_json(cls, value: Any) -> "Jwk":
        obj = _object(value, "JWK")
        return cls(key=key_from_json(obj), prm=Parameters.from_json(obj))


@dataclass
class JwkSet:
    """A set of JSON Web Keys."""

    keys: list = field(default_factory=list)

    def to_json(self) -> dict:
        return {"keys": [jwk.to_json() for jwk in self.keys]}

    @classmethod
    def from_json(cls, value: Any) -> "JwkSet":
        obj = _object(value, "JWK set")
        keys = _field(obj, "keys")
        if not isinstance(keys, list):
            raise TypeError("field `keys` must be a list")
        return cls(keys=[Jwk.from_json(item) for item in keys])