"""JSON Web Algorithm identifiers."""

from __future__ import annotations

from enum import Enum
from typing import Any


class Signing(Enum):
    """Algorithms used for digital signatures and MACs."""

    EDDSA = "EdDSA"
    ES256 = "ES256"
    ES256K = "ES256K"
    ES384 = "ES384"
    ES512 = "ES512"
    HS256 = "HS256"
    HS384 = "HS384"
    HS512 = "HS512"
    PS256 = "PS256"
    PS384 = "PS384"
    PS512 = "PS512"
    RS256 = "RS256"
    RS384 = "RS384"
    RS512 = "RS512"
    NULL = "none"

    def __str__(self) -> str:
        return self.value

    def to_json(self) -> str:
        """Return the algorithm's JSON name."""
        return self.value

    @classmethod
    def from_json(cls, value: Any) -> "Signing":
        """Read an algorithm from its JSON name."""
        if not isinstance(value, str):
            raise TypeError("algorithm must be a string")
        try:
            return cls(value)
        except ValueError:
            raise ValueError(f"unknown signing algorithm {value!r}") from None


# Only signing algorithms can currently appear in an "alg" descriptor.
Algorithm = Signing


def algorithm_from_json(value: Any) -> Algorithm:
    """Read any supported "alg" value."""
    return Signing.from_json(value)