from typing import Any

import jwt
import pytest
from cryptography.hazmat.primitives.asymmetric import ec, ed25519, rsa
from flask import Flask
from jwt.algorithms import ECAlgorithm, OKPAlgorithm, RSAAlgorithm

from jwt_guard import FrozenClock

from token_vectors import SECRET


@pytest.fixture()
def app():
    app = Flask(__name__)
    app.config["TESTING"] = True
    return app


@pytest.fixture()
def clock() -> FrozenClock:
    return FrozenClock(1_610_086_801)


@pytest.fixture()
def make_hs_token():
    """
    Factory fixture for HMAC-signed tokens.

    Usage in tests:
        token = make_hs_token({"exp": now + 1}, alg="HS384")
    """

    def _make(
        claims: dict[str, Any] | None = None,
        *,
        alg: str = "HS256",
        secret: bytes = SECRET,
        headers: dict[str, Any] | None = None,
    ) -> str:
        return jwt.encode(claims or {}, secret, algorithm=alg, headers=headers)

    return _make


@pytest.fixture(scope="session")
def rsa_private_key() -> rsa.RSAPrivateKey:
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def ec_private_key() -> ec.EllipticCurvePrivateKey:
    return ec.generate_private_key(ec.SECP256R1())


@pytest.fixture(scope="session")
def ed_private_key() -> ed25519.Ed25519PrivateKey:
    return ed25519.Ed25519PrivateKey.generate()


@pytest.fixture()
def public_jwk(rsa_private_key, ec_private_key, ed_private_key):
    """
    Factory fixture returning the public JWK dict for a generated key.

    Usage in tests:
        jwk = public_jwk("RSA", kid="k1")
    """
    converters = {
        "RSA": lambda: RSAAlgorithm.to_jwk(rsa_private_key.public_key(), as_dict=True),
        "EC": lambda: ECAlgorithm.to_jwk(ec_private_key.public_key(), as_dict=True),
        "OKP": lambda: OKPAlgorithm.to_jwk(ed_private_key.public_key(), as_dict=True),
    }

    def _make(kty: str, *, kid: str = "key-id-1", **extra: Any) -> dict[str, Any]:
        jwk = dict(converters[kty]())
        jwk["kid"] = kid
        jwk.update(extra)
        return jwk

    return _make

