"""Interfaces for creating and verifying JWS signatures."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Iterable

from .jws import Flattened, General, Protected, Signature, Unprotected
from .stream import Update


class VerificationError(ValueError):
    """A signature could not be verified."""


def _as_bytes(chunk: Any) -> bytes:
    if isinstance(chunk, str):
        return chunk.encode("utf-8")
    return bytes(chunk)


class Signer(Update):
    """Signature creation state, fed with the signing input."""

    @abstractmethod
    def update(self, chunk: Any) -> None:
        """Feed more of the signing input."""

    @abstractmethod
    def finish(self) -> Signature:
        """Finish processing the payload and create the signature."""


class SigningKey(ABC):
    """A key able to create signatures."""

    @abstractmethod
    def sign(self, protected: Protected | None = None, header: Unprotected | None = None) -> Signer:
        """Begin creating a signature with the given headers."""


class Verifier(Update):
    """Signature verification state, fed with the signing input."""

    @abstractmethod
    def update(self, chunk: Any) -> None:
        """Feed more of the signing input."""

    @abstractmethod
    def finish(self) -> None:
        """Finish processing the payload; raise if the signature is invalid."""


class VerifierSet(Verifier):
    """Several verifiers fed with the same input; one accepting is enough."""

    def __init__(self, verifiers: Iterable[Verifier] = ()) -> None:
        self.verifiers = list(verifiers)

    def update(self, chunk: Any) -> None:
        data = _as_bytes(chunk)
        for verifier in self.verifiers:
            verifier.update(data)

    def finish(self) -> None:
        """Succeed at the first verifier that accepts; otherwise raise the last error."""
        last: Exception = VerificationError("no verifier accepted the signature")
        for verifier in self.verifiers:
            try:
                verifier.finish()
            except ValueError as exc:
                last = exc
            else:
                return None
        raise last

    def __len__(self) -> int:
        return len(self.verifiers)


class VerifyingKey(ABC):
    """A key able to verify signatures."""

    @abstractmethod
    def verify_signature(self, signature: Signature) -> Verifier:
        """Begin verifying a single signature."""

    def verify(self, target: Any) -> Verifier:
        """Begin verifying a signature, a flattened JWS or a general JWS."""
        if isinstance(target, Signature):
            return self.verify_signature(target)
        if isinstance(target, Flattened):
            return VerifierSet([self.verify_signature(target.signature)])
        if isinstance(target, General):
            return VerifierSet(self.verify_signature(sig) for sig in target.signatures)
        raise TypeError(f"cannot verify {type(target).__name__}")


def verify_with_any(keys: Iterable[VerifyingKey], target: Any) -> VerifierSet:
    """Begin verification against every key; one accepting is enough."""
    collected: list = []
    for key in keys:
        verifier = key.verify(target)
        if isinstance(verifier, VerifierSet):
            collected.extend(verifier.verifiers)
        else:
            collected.append(verifier)
    return VerifierSet(collected)