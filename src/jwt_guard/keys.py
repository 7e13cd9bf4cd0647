"""Verification key resolution.

Turns a validated algorithm plus the caller's key material (a static shared
secret and/or an already-fetched JWKS document) into a ready-to-use
``VerificationKey``. Key parsing and the signature primitives come from PyJWT's
algorithm implementations (backed by ``cryptography``).

Resolution rules
----------------
HMAC (HS*):
    If a JWKS is supplied and it holds an ``oct`` entry whose ``kid`` equals
    the header ``kid``, that entry's ``k`` is the key. Otherwise the static
    secret is the key.

RSA / EC / OKP:
    A JWKS is mandatory. The first entry with the family's ``kty`` and the
    header's ``kid`` (when the header has one) is used. Anything else is
    ``ErrorGeneratingSigner``; a missing key is never reported as a more
    specific error.

Entries that declare an ``alg`` only match tokens with that same ``alg``.
Private JWK members are dropped before loading, so a JWKS that accidentally
contains private keys still yields public verification keys.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass
from typing import Any, Final

from jwt.algorithms import (
    Algorithm,
    ECAlgorithm,
    HMACAlgorithm,
    OKPAlgorithm,
    RSAAlgorithm,
)
from jwt.exceptions import InvalidKeyError

from .errors import ErrorGeneratingSigner
from .header import AlgorithmSpec, KeyFamily
from .protocols import JWKS, Secret

_PRIVATE_MEMBERS: Final = frozenset({"d", "p", "q", "dp", "dq", "qi", "oth"})

_ALGORITHMS: Final[Mapping[str, Callable[[], Algorithm]]] = {
    "HS256": lambda: HMACAlgorithm(HMACAlgorithm.SHA256),
    "HS384": lambda: HMACAlgorithm(HMACAlgorithm.SHA384),
    "HS512": lambda: HMACAlgorithm(HMACAlgorithm.SHA512),
    "RS256": lambda: RSAAlgorithm(RSAAlgorithm.SHA256),
    "RS384": lambda: RSAAlgorithm(RSAAlgorithm.SHA384),
    "RS512": lambda: RSAAlgorithm(RSAAlgorithm.SHA512),
    "ES256": lambda: ECAlgorithm(ECAlgorithm.SHA256),
    "ES384": lambda: ECAlgorithm(ECAlgorithm.SHA384),
    "ES512": lambda: ECAlgorithm(ECAlgorithm.SHA512),
    "EdDSA": OKPAlgorithm,
    "Ed25519": OKPAlgorithm,
    "Ed448": OKPAlgorithm,
}

_LOAD_ERRORS: Final = (InvalidKeyError, ValueError, TypeError, KeyError)


@dataclass(frozen=True, slots=True)
class VerificationKey:
    """A resolved key bound to the algorithm that checks signatures with it.

    Attributes:
        spec: The token's algorithm.
        algorithm: PyJWT algorithm implementation for ``spec.name``.
        key: Prepared key: HMAC bytes or an RSA/EC/OKP public key object.
        kid: ``kid`` of the JWKS entry used, ``None`` for the static secret.
    """

    spec: AlgorithmSpec
    algorithm: Algorithm
    key: Any
    kid: str | None = None

    def verify(self, message: bytes, signature: bytes) -> bool:
        """Return whether ``signature`` is valid for ``message``.

        HMAC comparison goes through ``hmac.compare_digest``.
        """
        return self.algorithm.verify(message, self.key, signature)


def _public_members(entry: Mapping[str, Any]) -> dict[str, Any]:
    return {k: v for k, v in entry.items() if k not in _PRIVATE_MEMBERS}


def _iter_entries(jwks: JWKS | None) -> Iterator[Mapping[str, Any]]:
    if not isinstance(jwks, Mapping):
        return
    keys = jwks.get("keys")
    if not isinstance(keys, list):
        return
    for entry in keys:
        if isinstance(entry, Mapping):
            yield entry


def find_jwk(
    jwks: JWKS | None,
    *,
    kty: str,
    kid: Any,
    alg: str,
) -> Mapping[str, Any] | None:
    """Return the first JWKS entry matching ``kty``, ``kid`` and ``alg``.

    ``kid=None`` matches any entry of the right type. An entry without an
    ``alg`` member matches any algorithm.
    """
    for entry in _iter_entries(jwks):
        if entry.get("kty") != kty:
            continue
        if kid is not None and entry.get("kid") != kid:
            continue
        if "alg" in entry and entry["alg"] != alg:
            continue
        return entry
    return None


def _load_jwk(algorithm: Algorithm, entry: Mapping[str, Any]) -> Any:
    # from_jwk is a static method on each concrete algorithm class.
    material = type(algorithm).from_jwk(_public_members(entry))
    return algorithm.prepare_key(material)


def resolve_key(
    spec: AlgorithmSpec,
    kid: Any,
    static_secret: Secret | None,
    jwks: JWKS | None = None,
) -> VerificationKey:
    """Produce the verification key for a token.

    Args:
        spec: Validated algorithm from the token header.
        kid: The header ``kid`` (``None`` if absent).
        static_secret: Shared secret for HMAC tokens.
        jwks: Already-fetched JWKS document, if any.

    Returns:
        A ``VerificationKey`` ready to check the signature.

    Raises:
        ErrorGeneratingSigner: No usable key for this algorithm.
    """
    algorithm = _ALGORITHMS[spec.name]()

    if spec.family is KeyFamily.HMAC:
        if kid is not None:
            entry = find_jwk(jwks, kty=KeyFamily.HMAC.kty, kid=kid, alg=spec.name)
            if entry is not None:
                try:
                    return VerificationKey(spec, algorithm, _load_jwk(algorithm, entry), kid)
                except _LOAD_ERRORS as e:
                    raise ErrorGeneratingSigner("Invalid symmetric JWK") from e

        if static_secret is None:
            raise ErrorGeneratingSigner("No shared secret configured")
        try:
            return VerificationKey(spec, algorithm, algorithm.prepare_key(static_secret))
        except _LOAD_ERRORS as e:
            raise ErrorGeneratingSigner("Invalid shared secret") from e

    entry = find_jwk(jwks, kty=spec.family.kty, kid=kid, alg=spec.name)
    if entry is None:
        raise ErrorGeneratingSigner(f"No matching {spec.family.kty} key in JWKS")

    try:
        return VerificationKey(spec, algorithm, _load_jwk(algorithm, entry), entry.get("kid"))
    except _LOAD_ERRORS as e:
        raise ErrorGeneratingSigner(f"Invalid {spec.family.kty} JWK") from e
