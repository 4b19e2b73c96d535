"""JSON Web Signature containers: headers, signatures and serializations."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Union

from .b64 import Bytes, Encoding, Json, LengthError, encode
from .jwa import Signing
from .jwk import Jwk, Thumbprint


def _object(value: Any, what: str) -> dict:
    if not isinstance(value, dict):
        raise TypeError(f"{what} must be a JSON object")
    return value


def _field(obj: dict, name: str) -> Any:
    try:
        return obj[name]
    except KeyError:
        raise ValueError(f"missing field `{name}`") from None


def _optional_string(obj: dict, name: str) -> str | None:
    value = obj.get(name)
    if value is not None and not isinstance(value, str):
        raise TypeError(f"field `{name}` must be a string")
    return value


def _as_bytes(value: Any) -> Bytes:
    return value if type(value) is Bytes else Bytes(value)


def _optional_bytes(value: Any) -> Bytes | None:
    return None if value is None else _as_bytes(value)


@dataclass
class Unprotected:
    """The JWS unprotected header."""

    alg: Signing | None = None
    jwk: Jwk | None = None
    kid: str | None = None
    x5c: list | None = None
    x5t: Thumbprint = field(default_factory=Thumbprint)
    typ: str | None = None
    cty: str | None = None

    def __post_init__(self) -> None:
        if self.x5c is not None:
            # Certificates use standard, padded base64 rather than base64url.
            self.x5c = [Bytes(cert, Encoding.STANDARD) for cert in self.x5c]

    def to_json(self) -> dict:
        out: dict = {}
        if self.alg is not None:
            out["alg"] = self.alg.to_json()
        if self.jwk is not None:
            out["jwk"] = self.jwk.to_json()
        if self.kid is not None:
            out["kid"] = self.kid
        if self.x5c is not None:
            out["x5c"] = [cert.to_json() for cert in self.x5c]
        out.update(self.x5t.to_json())
        if self.typ is not None:
            out["typ"] = self.typ
        if self.cty is not None:
            out["cty"] = self.cty
        return out

    @classmethod
    def from_json(cls, value: Any) -> "Unprotected":
        obj = _object(value, "JWS header")
        alg = obj.get("alg")
        jwk = obj.get("jwk")
        x5c = obj.get("x5c")
        if x5c is not None and not isinstance(x5c, list):
            raise TypeError("field `x5c` must be a list")
        return cls(
            alg=None if alg is None else Signing.from_json(alg),
            jwk=None if jwk is None else Jwk.from_json(jwk),
            kid=_optional_string(obj, "kid"),
            x5c=None if x5c is None else [Bytes.from_json(cert, Encoding.STANDARD) for cert in x5c],
            x5t=Thumbprint.from_json(obj),
            typ=_optional_string(obj, "typ"),
            cty=_optional_string(obj, "cty"),
        )


@dataclass
class Protected:
    """The JWS protected header."""

    crit: list | None = None
    nonce: Bytes | None = None
    b64: bool = True
    oth: Unprotected = field(default_factory=Unprotected)

    def __post_init__(self) -> None:
        self.nonce = _optional_bytes(self.nonce)
        if self.crit is not None:
            self.crit = list(self.crit)

    def to_json(self) -> dict:
        out: dict = {}
        if self.crit is not None:
            out["crit"] = list(self.crit)
        if self.nonce is not None:
            out["nonce"] = self.nonce.to_json()
        if not self.b64:
            out["b64"] = False
        out.update(self.oth.to_json())
        return out

    @classmethod
    def from_json(cls, value: Any) -> "Protected":
        obj = _object(value, "JWS protected header")
        crit = obj.get("crit")
        if crit is not None:
            if not isinstance(crit, list) or not all(isinstance(item, str) for item in crit):
                raise TypeError("field `crit` must be a list of strings")
        nonce = obj.get("nonce")
        b64 = obj.get("b64", True)
        if not isinstance(b64, bool):
            raise TypeError("field `b64` must be a boolean")
        return cls(
            crit=crit,
            nonce=None if nonce is None else Bytes.from_json(nonce),
            b64=b64,
            oth=Unprotected.from_json(obj),
        )


def _protected_from_bytes(raw: Any) -> Json:
    return Json.from_bytes(raw, Protected.from_json)


@dataclass
class Signature:
    """A signature with its protected and unprotected headers."""

    signature: Bytes
    protected: Json | None = None
    header: Unprotected | None = None

    def __post_init__(self) -> None:
        self.signature = _as_bytes(self.signature)
        if isinstance(self.protected, Protected):
            self.protected = Json.new(self.protected, Protected.to_json)

    def to_json(self) -> dict:
        return {
            "header": None if self.header is None else self.header.to_json(),
            "protected": None if self.protected is None else self.protected.to_json(),
            "signature": self.signature.to_json(),
        }

    @classmethod
    def from_json(cls, value: Any) -> "Signature":
        obj = _object(value, "JWS signature")
        header = obj.get("header")
        protected = obj.get("protected")
        return cls(
            signature=Bytes.from_json(_field(obj, "signature")),
            protected=None if protected is None else _protected_from_bytes(Bytes.from_json(protected)),
            header=None if header is None else Unprotected.from_json(header),
        )


@dataclass
class Flattened:
    """The flattened serialization, holding a single signature."""

    signature: Signature
    payload: Bytes | None = None

    def __post_init__(self) -> None:
        self.payload = _optional_bytes(self.payload)

    @classmethod
    def from_compact(cls, text: str) -> "Flattened":
        """Parse the compact ``protected.payload.signature`` form."""
        parts = text.split(".")
        if len(parts) != 3:
            raise LengthError("compact JWS must have exactly three parts")
        prot, payl, sign = parts
        payload = None if payl == "" else Bytes.from_str(payl)
        return cls(
            signature=Signature(
                signature=Bytes.from_str(sign),
                protected=_protected_from_bytes(Bytes.from_str(prot)),
                header=None,
            ),
            payload=payload,
        )

    def to_compact(self) -> str:
        """Render the compact ``protected.payload.signature`` form."""
        prot = "" if self.signature.protected is None else encode(bytes(self.signature.protected))
        payl = "" if self.payload is None else encode(self.payload)
        sign = encode(self.signature.signature)
        return f"{prot}.{payl}.{sign}"

    __str__ = to_compact

    def to_json(self) -> dict:
        return {
            "payload": None if self.payload is None else self.payload.to_json(),
            **self.signature.to_json(),
        }

    @classmethod
    def from_json(cls, value: Any) -> "Flattened":
        obj = _object(value, "flattened JWS")
        payload = obj.get("payload")
        return cls(
            signature=Signature.from_json(obj),
            payload=None if payload is None else Bytes.from_json(payload),
        )


@dataclass
class General:
    """The general serialization, allowing several signatures."""

    signatures: list = field(default_factory=list)
    payload: Bytes | None = None

    def __post_init__(self) -> None:
        self.signatures = list(self.signatures)
        self.payload = _optional_bytes(self.payload)

    @classmethod
    def from_flattened(cls, flattened: Flattened) -> "General":
        """Wrap the single signature of a flattened JWS."""
        return cls(signatures=[flattened.signature], payload=flattened.payload)

    @classmethod
    def from_compact(cls, text: str) -> "General":
        """Parse the compact form into the general serialization."""
        return cls.from_flattened(Flattened.from_compact(text))

    def to_json(self) -> dict:
        return {
            "payload": None if self.payload is None else self.payload.to_json(),
            "signatures": [sig.to_json() for sig in self.signatures],
        }

    @classmethod
    def from_json(cls, value: Any) -> "General":
        obj = _object(value, "general JWS")
        signatures = _field(obj, "signatures")
        if not isinstance(signatures, list):
            raise TypeError("field `signatures` must be a list")
        payload = obj.get("payload")
        return cls(
            signatures=[Signature.from_json(item) for item in signatures],
            payload=None if payload is None else Bytes.from_json(payload),
        )


Jws = Union[General, Flattened]


def jws_from_json(value: Any) -> Jws:
    """Read a JWS in either the general or the flattened serialization."""
    for kind in (General, Flattened):
        try:
            return kind.from_json(value)
        except (ValueError, TypeError):
            continue
    raise ValueError("data did not match any JWS serialization")


def jws_from_compact(text: str) -> Jws:
    """Read a compact JWS."""
    return Flattened.from_compact(text)