"""
JWT verification against a shared secret or a JSON Web Key Set.

High-level flow (per token)
---------------------------
1. ``decode``: split the compact token and base64url-decode header, claims
   and signature.
2. ``validate_header``: require ``typ`` and ``alg``; ``alg`` must be in the
   allow-list (HS*, RS*, ES*, EdDSA).
3. ``resolve_key``: HMAC tokens use the static secret (or a matching ``oct``
   JWK); RSA/EC/OKP tokens need a JWKS entry with matching ``kty``/``kid``.
4. ``verify_signature_and_claims``: check the signature over the original
   segments, then ``exp`` against an injected clock, then configured
   required-claim values.

Security notes
--------------
- Claims are untrusted until the signature is verified.
- Only allow-listed algorithms are accepted; ``none`` never is.
- A missing key is always ``ErrorGeneratingSigner``, never a signature error.
- HMAC signatures are compared in constant time.

Example usage
-------------

.. code-block:: python

    from jwt_guard import FrozenClock, verify

    result = verify(token, b"shared-secret", jwks, claim_validators={"aud": "authenticated"})
    if result.ok:
        user_id = result.claims["sub"]
    elif result.reason == "token_expired":
        now = result.payload["message"]

    # Flask
    from jwt_guard import AuthExtension

    auth = AuthExtension()
    auth.init_app(app)  # JWT_SECRET, JWT_JWKS, JWT_CLAIM_VALIDATORS

    @app.get("/me")
    @auth.require()
    def me():
        return {"sub": g.jwt["sub"]}
"""

# Claims
from .claims import verify_signature_and_claims

# Clocks
from .clock import FrozenClock, SystemClock

# Config
from .config import VerifierSettings

# Decoder
from .decoder import DecodedToken, decode

# Errors
from .errors import (
    AuthError,
    ClaimMismatch,
    ClaimsNotAMap,
    ClaimValidationError,
    ErrorGeneratingSigner,
    HeaderMissingFields,
    HeaderNotAMap,
    MissingToken,
    NotAString,
    SignatureError,
    TokenExpired,
    TokenMalformed,
    UnsupportedAlgorithm,
    VerificationError,
)

# Extractors
from .extractors import BearerExtractor, CookieExtractor

# Flask extension
from .flask_extension import AuthExtension

# Header, keys
from .header import SUPPORTED_ALGORITHMS, AlgorithmSpec, KeyFamily, validate_header
from .keys import VerificationKey, find_jwk, resolve_key

# Protocols
from .protocols import JWKS, Claims, Clock, Extractor, Secret, TokenVerifier, ViewFunc

# Verifier
from .verifier import JWTVerifier, JWTVerifyOptions, VerificationResult, verify

__all__ = [
    # Errors
    "AuthError",
    "ClaimMismatch",
    "ClaimValidationError",
    "ClaimsNotAMap",
    "ErrorGeneratingSigner",
    "HeaderMissingFields",
    "HeaderNotAMap",
    "MissingToken",
    "NotAString",
    "SignatureError",
    "TokenExpired",
    "TokenMalformed",
    "UnsupportedAlgorithm",
    "VerificationError",
    # Protocols
    "JWKS",
    "Claims",
    "Clock",
    "Extractor",
    "Secret",
    "TokenVerifier",
    "ViewFunc",
    # Clocks
    "FrozenClock",
    "SystemClock",
    # Config
    "VerifierSettings",
    # Stages
    "AlgorithmSpec",
    "DecodedToken",
    "KeyFamily",
    "SUPPORTED_ALGORITHMS",
    "VerificationKey",
    "decode",
    "find_jwk",
    "resolve_key",
    "validate_header",
    "verify_signature_and_claims",
    # Verifier
    "JWTVerifier",
    "JWTVerifyOptions",
    "VerificationResult",
    "verify",
    # Extractors
    "BearerExtractor",
    "CookieExtractor",
    # Flask extension
    "AuthExtension",
]
