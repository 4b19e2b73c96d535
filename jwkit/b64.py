"""Base64 encodings and base64-backed value wrappers used by JOSE objects."""

from __future__ import annotations

import binascii
import base64
import hmac
import json
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable

_STANDARD_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789+/"
_URL_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789-_"
_URL_TO_STANDARD = str.maketrans("-_", "+/")


class B64Error(ValueError):
    """A base64 encoding or decoding error."""


class LengthError(B64Error):
    """The length of the base64 input is invalid."""


class InvalidValueError(B64Error):
    """The base64 input holds an invalid value."""


class Encoding(Enum):
    """The base64 variants used by JOSE."""

    STANDARD = "base64"
    URL_UNPADDED = "base64url"

    @property
    def alphabet(self) -> str:
        return _STANDARD_ALPHABET if self is Encoding.STANDARD else _URL_ALPHABET

    @property
    def padded(self) -> bool:
        return self is Encoding.STANDARD


def _as_bytes(data: Any) -> bytes:
    if isinstance(data, str):
        return data.encode("utf-8")
    return bytes(data)


def _as_text(text: Any) -> str:
    if isinstance(text, str):
        return text
    try:
        return bytes(text).decode("ascii")
    except UnicodeDecodeError as exc:
        raise InvalidValueError("invalid base64 character") from exc


def encode(data: Any, encoding: Encoding = Encoding.URL_UNPADDED) -> str:
    """Encode bytes (or UTF-8 text) as base64."""
    raw = _as_bytes(data)
    if encoding is Encoding.STANDARD:
        return base64.b64encode(raw).decode("ascii")
    return base64.urlsafe_b64encode(raw).rstrip(b"=").decode("ascii")


def _decode_unpadded(body: str, encoding: Encoding) -> bytes:
    if set(body) - set(encoding.alphabet):
        raise InvalidValueError("invalid base64 character")
    if encoding is Encoding.URL_UNPADDED:
        body = body.translate(_URL_TO_STANDARD)
    try:
        return base64.b64decode(body + "=" * (-len(body) % 4), validate=True)
    except binascii.Error as exc:
        raise InvalidValueError("invalid base64") from exc


def decode(text: Any, encoding: Encoding = Encoding.URL_UNPADDED) -> bytes:
    """Strictly decode base64 text, rejecting bad lengths and non-canonical input."""
    text = _as_text(text)
    if encoding.padded:
        if len(text) % 4:
            raise LengthError("invalid base64 length")
        body = text.rstrip("=")
        if len(text) - len(body) > 2:
            raise InvalidValueError("invalid base64 padding")
    else:
        body = text
    if len(body) % 4 == 1:
        raise LengthError("invalid base64 length")
    data = _decode_unpadded(body, encoding)
    if encode(data, encoding) != text:
        raise InvalidValueError("non-canonical base64")
    return data


class Bytes(bytes):
    """Bytes that serialize to JSON as a base64 string."""

    encoding: Encoding

    def __new__(cls, data: Any = b"", encoding: Encoding = Encoding.URL_UNPADDED) -> "Bytes":
        obj = super().__new__(cls, data)
        obj.encoding = encoding
        return obj

    def __repr__(self) -> str:
        return f"{type(self).__name__}({bytes(self)!r})"

    @classmethod
    def from_str(cls, text: Any, encoding: Encoding = Encoding.URL_UNPADDED) -> "Bytes":
        """Decode base64 text."""
        return cls(decode(text, encoding), encoding)

    @classmethod
    def from_json(
        cls,
        value: Any,
        encoding: Encoding = Encoding.URL_UNPADDED,
        length: int | None = None,
    ) -> "Bytes":
        """Read a base64 JSON string, optionally requiring an exact decoded length."""
        if not isinstance(value, str):
            raise TypeError("expected a base64 string")
        data = decode(value, encoding)
        if length is not None and len(data) != length:
            raise LengthError("invalid base64 length")
        return cls(data, encoding)

    def to_json(self) -> str:
        """Return the base64 JSON string."""
        return encode(self, self.encoding)


class Secret(Bytes):
    """Base64 bytes with constant-time equality and a redacted representation."""

    def __repr__(self) -> str:
        return "Secret(***)"

    __str__ = __repr__

    def __eq__(self, other: object) -> bool:
        if isinstance(other, (bytes, bytearray, memoryview)):
            return hmac.compare_digest(bytes(self), bytes(other))
        return NotImplemented

    def __ne__(self, other: object) -> bool:
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    __hash__ = bytes.__hash__

    @classmethod
    def from_json(cls, value: Any, encoding: Encoding = Encoding.URL_UNPADDED) -> "Secret":
        """Read a base64 JSON string."""
        if not isinstance(value, str):
            raise TypeError("expected a base64 string")
        return cls(decode(value, encoding), encoding)

    def to_json(self) -> str:
        """Return the base64 JSON string."""
        return encode(self, self.encoding)


def _compact_json(document: Any) -> bytes:
    return json.dumps(document, separators=(",", ":"), ensure_ascii=False).encode("utf-8")


@dataclass(frozen=True)
class Json:
    """A parsed value together with the exact JSON bytes it was read from.

    Serialization always emits the stored bytes; the value is never re-serialized.
    """

    raw: Bytes
    value: Any

    @classmethod
    def new(cls, value: Any, dump: Callable[[Any], Any] | None = None) -> "Json":
        """Serialize ``value`` (through ``dump`` if given) to compact JSON."""
        document = value if dump is None else dump(value)
        return cls(Bytes(_compact_json(document)), value)

    @classmethod
    def from_bytes(cls, raw: Any, parse: Callable[[Any], Any] | None = None) -> "Json":
        """Parse JSON bytes, passing the document through ``parse`` if given."""
        buf = raw if isinstance(raw, Bytes) else Bytes(raw)
        document = json.loads(bytes(buf))
        return cls(buf, document if parse is None else parse(document))

    @classmethod
    def from_str(cls, text: Any, parse: Callable[[Any], Any] | None = None) -> "Json":
        """Decode base64url text holding JSON and parse it."""
        return cls.from_bytes(Bytes.from_str(text), parse)

    def to_json(self) -> str:
        """Return the stored bytes as a base64 string."""
        return self.raw.to_json()

    def __bytes__(self) -> bytes:
        return bytes(self.raw)