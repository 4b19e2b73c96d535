import pytest
from cryptography.hazmat.primitives.asymmetric import rsa as native_rsa

from jwkit.jwa import Signing
from jwkit.jwk import Rsa, RsaOtherPrimes, RsaPrivate
from jwkit.keyinfo import InvalidKeyError, NotPrivateError, UnsupportedKeyError
from jwkit.rsakeys import (
    rsa_from_private_key,
    rsa_from_public_key,
    rsa_key_strength,
    rsa_key_supports,
    rsa_private_key_from_jwk,
    rsa_public_key_from_jwk,
)

RFC7517_N = "0vx7agoebGcQSuuPiLJXZptN9nndrQmbXEps2aiAFbWhM78LhWx4cbbfAAtVT86zwu1RK7aPFFxuhDR1L6tSoc_BJECPebWKRXjBZCiFV4n3oknjhMstn64tZ_2W-5JsGY4Hc5n9yBXArwl93lqt7_RN5w6Cf0h4QyQ5v-65YGjQR0_FDW2QvzqY368QQMicAtaSqzs8KJZgnYb9c7d0zgdAZHzu6qMQvRL5hajrn1n91CbOpbISD08qNLyrdkt-bFTWhAI4vMQFh6WeZu0fM4lFd2NcRwr3XPksINHaQ-G_xBniIqbw0Ls1jF44-csFCur-kEgU8awapJzKnqDKgw"

RFC7517_A1 = {"kty": "RSA", "n": RFC7517_N, "e": "AQAB", "alg": "RS256", "kid": "2011-04-29"}

RFC7517_A2 = {
    "kty": "RSA",
    "n": RFC7517_N,
    "e": "AQAB",
    "d": "X4cTteJY_gn4FYPsXB8rdXix5vwsg1FLN5E3EaG6RJoVH-HLLKD9M7dx5oo7GURknchnrRweUkC7hT5fJLM0WbFAKNLWY2vv7B6NqXSzUvxT0_YSfqijwp3RTzlBaCxWp4doFk5N2o8Gy_nHNKroADIkJ46pRUohsXywbReAdYaMwFs9tv8d_cPVY3i07a3t8MN6TNwm0dSawm9v47UiCl3Sk5ZiG7xojPLu4sbg1U2jx4IBTNBznbJSzFHK66jT8bgkuqsk0GjskDJk19Z4qwjwbsnn4j2WBii3RL-Us2lGVkY8fkFzme1z0HbIkfz0Y6mqnOYtqc0X4jfcKoAC8Q",
    "p": "83i-7IvMGXoMXCskv73TKr8637FiO7Z27zv8oj6pbWUQyLPQBQxtPVnwD20R-60eTDmD2ujnMt5PoqMrm8RfmNhVWDtjjMmCMjOpSXicFHj7XOuVIYQyqVWlWEh6dN36GVZYk93N8Bc9vY41xy8B9RzzOGVQzXvNEvn7O0nVbfs",
    "q": "3dfOR9cuYq-0S-mkFLzgItgMEfFzB2q3hWehMuG0oCuqnb3vobLyumqjVZQO1dIrdwgTnCdpYzBcOfW5r370AFXjiWft_NGEiovonizhKpo9VVS78TzFgxkIdrecRezsZ-1kYd_s1qDbxtkDEgfAITAG9LUnADun4vIcb6yelxk",
    "dp": "G4sPXkc6Ya9y8oJW9_ILj4xuppu0lzi_H7VTkS8xj5SdX3coE0oimYwxIi2emTAue0UOa5dpgFGyBJ4c8tQ2VF402XRugKDTP8akYhFo5tAA77Qe_NmtuYZc3C3m3I24G2GvR5sSDxUyAN2zq8Lfn9EUms6rY3Ob8YeiKkTiBj0",
    "dq": "s9lAH9fggBsoFR8Oac2R_E2gw282rT2kGOAhvIllETE1efrA6huUUvMfBcMpn8lqeW6vzznYY5SSQF7pMdC_agI3nG8Ibp1BUb0JUiraRNqUfLhcQb_d9GF4Dh7e74WbRsobRonujTYN1xCaP6TO61jvWrX-L18txXw494Q_cgk",
    "qi": "GyM_p6JrXySiz1toFgKbWV-JdI3jQ4ypu9rbMWx3rQJBfmt0FoYzgUIZEVFEcOqwemRN81zoDAaa-Bk0KWNGDjJHZDdDmFhW3AN7lI-puxk_mHZGJ11rxyR8O55XLSe3SPmRfKwZI6yU24ZxvQKFYItdldUKGzO6Ia6zTKhAVRU",
    "alg": "RS256",
    "kid": "2011-04-29",
}

RFC7517_B = {
    "kty": "RSA",
    "use": "sig",
    "kid": "1b94c",
    "n": "vrjOfz9Ccdgx5nQudyhdoR17V-IubWMeOZCwX_jj0hgAsz2J_pqYW08PLbK_PdiVGKPrqzmDIsLI7sA25VEnHU1uCLNwBuUiCO11_-7dYbsr4iJmG0Qu2j8DsVyT1azpJC_NG84Ty5KKthuCaPod7iI7w0LK9orSMhBEwwZDCxTWq4aYWAchc8t-emd9qOvWtVMDC2BXksRngh6X5bUYLy6AyHKvj-nUy1wgzjYQDwHMTplCoLtU-o-8SNnZ1tmRoGE9uJkBLdh5gFENabWnU5m1ZqZPdwS-qo-meMvVfJb6jJVWRpl2SUtCnYG2C32qvbWbjZ_jBPD5eunqsIo1vQ",
    "e": "AQAB",
}


@pytest.fixture(scope="module")
def small_private_key():
    return native_rsa.generate_private_key(public_exponent=65537, key_size=1024)


def test_rfc7517_a1_public_roundtrip():
    jwk = Rsa.from_json(RFC7517_A1)
    pk = rsa_public_key_from_jwk(jwk)
    assert rsa_from_public_key(pk) == jwk
    assert pk.public_numbers().e == 65537
    assert bytes(jwk.n)[:3] == bytes([210, 252, 123])
    assert bytes(jwk.e) == bytes([1, 0, 1])


def test_rfc7517_a2_private_roundtrip():
    jwk = Rsa.from_json(RFC7517_A2)
    sk = rsa_private_key_from_jwk(jwk)
    assert rsa_from_private_key(sk) == jwk
    assert bytes(jwk.prv.d)[:3] == bytes([95, 135, 19])
    assert bytes(jwk.prv.opt.p)[:3] == bytes([243, 120, 190])


def test_rfc7517_a2_public_part_matches_a1():
    private = rsa_private_key_from_jwk(Rsa.from_json(RFC7517_A2))
    public = rsa_public_key_from_jwk(Rsa.from_json(RFC7517_A1))
    assert private.public_key().public_numbers() == public.public_numbers()


def test_rfc7517_b_public_roundtrip():
    jwk = Rsa.from_json(RFC7517_B)
    pk = rsa_public_key_from_jwk(jwk)
    assert rsa_from_public_key(pk) == jwk
    assert bytes(jwk.n)[:3] == bytes([190, 184, 206])


def test_strength_of_2048_bit_keys():
    public = rsa_public_key_from_jwk(Rsa.from_json(RFC7517_A1))
    private = rsa_private_key_from_jwk(Rsa.from_json(RFC7517_A2))
    assert rsa_key_strength(public) == 16
    assert rsa_key_strength(private) == 16


def test_public_key_supports_every_rsa_algorithm_once_strong_enough():
    public = rsa_public_key_from_jwk(Rsa.from_json(RFC7517_A1))
    for alg in (Signing.RS256, Signing.RS384, Signing.RS512, Signing.PS256, Signing.PS384, Signing.PS512):
        assert rsa_key_supports(public, alg) is True
    assert rsa_key_supports(public, Signing.ES256) is False
    assert rsa_key_supports(public, Signing.HS256) is False


def test_private_key_support_depends_on_algorithm_strength():
    private = rsa_private_key_from_jwk(Rsa.from_json(RFC7517_A2))
    assert rsa_key_supports(private, Signing.RS256) is True
    assert rsa_key_supports(private, Signing.PS256) is True
    assert rsa_key_supports(private, Signing.RS384) is False
    assert rsa_key_supports(private, Signing.PS512) is False
    assert rsa_key_supports(private, Signing.EDDSA) is False


def test_weak_keys_are_not_supported(small_private_key):
    assert rsa_key_strength(small_private_key) == 8
    assert rsa_key_supports(small_private_key, Signing.RS256) is False
    assert rsa_key_supports(small_private_key.public_key(), Signing.RS256) is False


def test_generated_key_roundtrip(small_private_key):
    jwk = rsa_from_private_key(small_private_key)
    rebuilt = rsa_private_key_from_jwk(jwk)
    assert rebuilt.private_numbers() == small_private_key.private_numbers()
    assert rsa_from_private_key(rebuilt) == jwk
    public_jwk = rsa_from_public_key(small_private_key.public_key())
    assert public_jwk.prv is None
    assert public_jwk.n == jwk.n


def test_private_from_public_jwk_raises_not_private():
    with pytest.raises(NotPrivateError):
        rsa_private_key_from_jwk(Rsa.from_json(RFC7517_A1))


def test_private_without_primes_is_unsupported():
    full = Rsa.from_json(RFC7517_A2)
    partial = Rsa(n=full.n, e=full.e, prv=RsaPrivate(d=full.prv.d))
    with pytest.raises(UnsupportedKeyError):
        rsa_private_key_from_jwk(partial)


def test_multi_prime_key_is_unsupported():
    jwk = Rsa.from_json(RFC7517_A2)
    jwk.prv.opt.oth = [RsaOtherPrimes(r=b"\x07", d=b"\x01", t=b"\x01")]
    with pytest.raises(UnsupportedKeyError):
        rsa_private_key_from_jwk(jwk)


def test_mismatched_primes_are_invalid():
    jwk = Rsa.from_json(RFC7517_A2)
    jwk.prv.opt.p = jwk.prv.opt.q
    with pytest.raises(InvalidKeyError):
        rsa_private_key_from_jwk(jwk)


def test_even_public_exponent_is_invalid():
    jwk = Rsa.from_json(RFC7517_A1)
    jwk.e = type(jwk.e)(bytes([1, 0, 0]))
    with pytest.raises(InvalidKeyError):
        rsa_public_key_from_jwk(jwk)


def test_oversized_modulus_is_invalid():
    n = (1 << 4096) + 1
    jwk = Rsa(n=n.to_bytes(513, "big"), e=bytes([1, 0, 1]))
    with pytest.raises(InvalidKeyError):
        rsa_public_key_from_jwk(jwk)


def test_conversions_reject_wrong_types():
    with pytest.raises(TypeError):
        rsa_from_public_key(b"not a key")
    with pytest.raises(TypeError):
        rsa_from_private_key(b"not a key")
    with pytest.raises(TypeError):
        rsa_key_strength(b"not a key")