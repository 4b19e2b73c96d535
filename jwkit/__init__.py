"""JSON Web Algorithms, Keys and Signatures with base64 and key-conversion helpers."""

__version__ = "0.1.2"

__all__ = [
    "b64",
    "stream",
    "jwa",
    "jwk",
    "keyinfo",
    "ec",
    "rsakeys",
    "crypto",
    "jws",
    "jws_crypto",
]