# jwkit

Data types and helpers for JSON Web Algorithms, Keys and Signatures.

- `jwkit.jwa`: the `Signing` algorithm identifiers (`ES256`, `RS256`,
  `EDDSA` for "EdDSA", `NULL` for "none", ...) and `algorithm_from_json`.
- `jwkit.jwk`: JSON Web Keys and key sets (`Jwk`, `JwkSet`, `Ec`, `Rsa`,
  `Oct`, `Okp`, `Parameters`, `Thumbprint`), each with `to_json()` and
  `from_json()` working on plain JSON values (dicts, lists, strings).
- `jwkit.jws`: JSON Web Signature containers in general, flattened and
  compact form (`General`, `Flattened`, `Signature`, `Protected`,
  `Unprotected`, `jws_from_json`, `jws_from_compact`).
- `jwkit.b64`: strict base64 `encode` / `decode` for the standard and
  URL-safe unpadded alphabets, and the wrappers `Bytes`, `Secret`
  (constant-time equality, redacted repr) and `Json` (a parsed value that
  keeps the exact bytes it was read from).
- `jwkit.stream`: streaming base64 `Encoder` / `Decoder`, `Optional`, and
  the sinks `ByteSink`, `TextSink` and `Fanout`.
- `jwkit.keyinfo`, `jwkit.ec`, `jwkit.rsakeys`, `jwkit.crypto`: key
  strength and algorithm checks, and conversion between JWKs and
  `cryptography` key objects.
- `jwkit.jws_crypto`: abstract interfaces for signing and verifying
  (`Signer`, `SigningKey`, `Verifier`, `VerifyingKey`), plus `VerifierSet`
  and `verify_with_any` for accepting any one of several signatures or keys.

## Installation

```
pip install jwkit
```

## Reading a key set

```python
import json
from jwkit.jwk import JwkSet

with open("keys.json") as fh:
    keys = JwkSet.from_json(json.load(fh))

for jwk in keys.keys:
    print(jwk.prm.kid, jwk.prm.cls)

print(json.dumps(keys.to_json()))
```

## Checking what a key can do

```python
from jwkit.jwa import Signing
from jwkit.keyinfo import strength, is_supported

print(strength(jwk))                     # comparable symmetric key size in bytes
print(is_supported(jwk, Signing.RS256))  # also respects the key's "alg"
```

## Turning a JWK into a usable key

```python
from jwkit.crypto import CryptoKey

key = CryptoKey.from_jwk(jwk)       # EC (P-256, P-384, P-521), RSA or oct
print(key.kind, key.strength())
native = CryptoKey.from_native(some_cryptography_key)
print(native.to_jwk())
```

The lower-level functions are also available: `public_key_from_ec`,
`secret_key_from_ec`, `ec_from_public_key` and `ec_from_secret_key` in
`jwkit.ec`, and `rsa_public_key_from_jwk`, `rsa_private_key_from_jwk`,
`rsa_from_public_key` and `rsa_from_private_key` in `jwkit.rsakeys`.

## Compact JWS

```python
from jwkit.jws import Flattened

jws = Flattened.from_compact(token_text)
print(jws.signature.protected.value)  # the decoded protected header
print(jws.to_compact())
```

The protected header is written back from the bytes it was read from, so it
is never re-serialized.

## Streaming base64

```python
from jwkit.stream import ByteSink, Decoder, Encoder, TextSink

enc = Encoder(TextSink())
enc.update(b"Hello world!")
print(enc.finish().text)  # SGVsbG8gd29ybGQh

dec = Decoder(ByteSink())
dec.update("SGVsbG8gd29ybGQh")
print(bytes(dec.finish()))  # b'Hello world!'
```

The streaming decoder reports errors block by block and should not be used to
decode secrets.

## Errors

Invalid base64 raises `jwkit.b64.LengthError` or
`jwkit.b64.InvalidValueError` (both subclasses of `B64Error`, itself a
`ValueError`). Problems with key material raise subclasses of
`jwkit.keyinfo.KeyMaterialError`: `InvalidKeyError`, `NotPrivateError`,
`AlgMismatchError` and `UnsupportedKeyError`.

## What this package does not do

- It does not compute or check signatures. `jwkit.jws_crypto` only defines
  the interfaces; a signing or verifying key must be supplied by the caller.
- It has no support for encrypted tokens or for token claims.
- OKP keys (Ed25519, Ed448, X25519, X448) and secp256k1 EC JWKs cannot be
  turned into usable keys with `CryptoKey.from_jwk`; multi-prime RSA
  private keys are rejected.
- It has no command-line tool.

## Running the tests

```
pip install -e ".[test]"
pytest
```