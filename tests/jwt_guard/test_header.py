import pytest

from jwt_guard import (
    HeaderMissingFields,
    KeyFamily,
    UnsupportedAlgorithm,
    validate_header,
)


@pytest.mark.parametrize("header", [{"typ": "JWT"}, {"alg": "HS256"}, {}])
def test_missing_typ_or_alg(header):
    with pytest.raises(HeaderMissingFields):
        validate_header(header)


@pytest.mark.parametrize("alg", ["ZZ999", "none", "hs256", "PS256", None, 256])
def test_unsupported_algorithm(alg):
    with pytest.raises(UnsupportedAlgorithm):
        validate_header({"typ": "JWT", "alg": alg})


@pytest.mark.parametrize(
    ("alg", "family"),
    [
        ("HS256", KeyFamily.HMAC),
        ("HS512", KeyFamily.HMAC),
        ("RS256", KeyFamily.RSA),
        ("ES384", KeyFamily.EC),
        ("EdDSA", KeyFamily.OKP),
    ],
)
def test_supported_algorithm_resolves_family(alg: str, family: KeyFamily):
    spec = validate_header({"typ": "JWT", "alg": alg, "kid": "k1"})

    assert spec.name == alg
    assert spec.family is family


def test_family_maps_to_jwk_key_type():
    assert KeyFamily.RSA.kty == "RSA"
    assert KeyFamily.EC.kty == "EC"
    assert KeyFamily.OKP.kty == "OKP"
    assert KeyFamily.HMAC.kty == "oct"
