"""Streaming base64 encoding and decoding.

Invalid base64 is reported block by block, so these types must not be used
to decode secrets.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

from .b64 import Encoding, InvalidValueError, decode, encode


def _as_bytes(chunk: Any) -> bytes:
    if isinstance(chunk, str):
        return chunk.encode("utf-8")
    return bytes(chunk)


class Update(ABC):
    """Something that can be fed bytes."""

    @abstractmethod
    def update(self, chunk: Any) -> None:
        """Feed a chunk of bytes (or UTF-8 text)."""

    def chain(self, chunk: Any) -> "Update":
        """Feed a chunk and return self."""
        self.update(chunk)
        return self


@dataclass
class ByteSink(Update):
    """Collects all bytes fed to it."""

    data: bytearray = field(default_factory=bytearray)

    def update(self, chunk: Any) -> None:
        self.data += _as_bytes(chunk)

    def __bytes__(self) -> bytes:
        return bytes(self.data)


@dataclass
class TextSink(Update):
    """Collects UTF-8 text; each chunk must be valid UTF-8 on its own."""

    text: str = ""

    def update(self, chunk: Any) -> None:
        self.text += _as_bytes(chunk).decode("utf-8")


@dataclass
class Fanout(Update):
    """Feeds every chunk to each of its sinks."""

    sinks: list = field(default_factory=list)

    def update(self, chunk: Any) -> None:
        data = _as_bytes(chunk)
        for sink in self.sinks:
            sink.update(data)


class Encoder(Update):
    """Base64-encodes a byte stream into an inner sink."""

    def __init__(self, inner: Any, encoding: Encoding = Encoding.URL_UNPADDED) -> None:
        self.inner = inner
        self.encoding = encoding
        self._pending = b""

    def update(self, chunk: Any) -> None:
        data = self._pending + _as_bytes(chunk)
        cut = len(data) - len(data) % 3
        self._pending = data[cut:]
        if cut:
            self.inner.update(encode(data[:cut], self.encoding).encode("ascii"))

    def finish(self) -> Any:
        """Flush the final partial block and return the inner sink."""
        tail, self._pending = self._pending, b""
        self.inner.update(encode(tail, self.encoding).encode("ascii"))
        return self.inner

    def __repr__(self) -> str:
        return f"Encoder(inner={self.inner!r})"


class Decoder(Update):
    """Decodes a base64 stream into an inner sink."""

    def __init__(self, inner: Any, encoding: Encoding = Encoding.URL_UNPADDED) -> None:
        self.inner = inner
        self.encoding = encoding
        self._pending = b""

    def update(self, chunk: Any) -> None:
        data = self._pending + _as_bytes(chunk)
        # The last block is held back so that finish() can apply padding rules.
        full = (len(data) - 1) // 4 * 4 if data else 0
        if not full:
            self._pending = data
            return
        block = data[:full]
        if b"=" in block:
            raise InvalidValueError("padding inside base64 stream")
        decoded = decode(block, self.encoding)
        self._pending = data[full:]
        self.inner.update(decoded)

    def finish(self) -> Any:
        """Decode the final block and return the inner sink."""
        tail, self._pending = self._pending, b""
        self.inner.update(decode(tail, self.encoding))
        return self.inner

    def __repr__(self) -> str:
        return f"Decoder(inner={self.inner!r})"


class Optional(Update):
    """Passes bytes through, base64-encoding them only when asked to."""

    def __init__(self, inner: Any, b64: bool, encoding: Encoding = Encoding.URL_UNPADDED) -> None:
        self.inner = inner
        self._target = Encoder(inner, encoding) if b64 else inner

    def update(self, chunk: Any) -> None:
        self._target.update(chunk)

    def finish(self) -> Any:
        """Complete any encoding and return the inner sink."""
        if isinstance(self._target, Encoder):
            return self._target.finish()
        return self.inner