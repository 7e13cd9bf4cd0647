"""JOSE header validation and the algorithm allow-list."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, Final

from .errors import HeaderMissingFields, UnsupportedAlgorithm


class KeyFamily(Enum):
    """Key family of a signing algorithm; the value is the matching JWK ``kty``."""

    HMAC = "oct"
    RSA = "RSA"
    EC = "EC"
    OKP = "OKP"

    @property
    def kty(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class AlgorithmSpec:
    """A supported ``alg`` value and its key family."""

    name: str
    family: KeyFamily


SUPPORTED_ALGORITHMS: Final[Mapping[str, KeyFamily]] = {
    "HS256": KeyFamily.HMAC,
    "HS384": KeyFamily.HMAC,
    "HS512": KeyFamily.HMAC,
    "RS256": KeyFamily.RSA,
    "RS384": KeyFamily.RSA,
    "RS512": KeyFamily.RSA,
    "ES256": KeyFamily.EC,
    "ES384": KeyFamily.EC,
    "ES512": KeyFamily.EC,
    "EdDSA": KeyFamily.OKP,
    "Ed25519": KeyFamily.OKP,
    "Ed448": KeyFamily.OKP,
}
"""Allow-list of accepted ``alg`` values. ``none`` is never accepted."""


def validate_header(header: Mapping[str, Any]) -> AlgorithmSpec:
    """Check header shape and resolve its algorithm.

    Raises:
        HeaderMissingFields: ``typ`` or ``alg`` is absent.
        UnsupportedAlgorithm: ``alg`` is not in ``SUPPORTED_ALGORITHMS``.
    """
    if "typ" not in header or "alg" not in header:
        raise HeaderMissingFields("Token header must contain 'typ' and 'alg'")

    alg = header["alg"]
    if not isinstance(alg, str) or alg not in SUPPORTED_ALGORITHMS:
        raise UnsupportedAlgorithm(f"Unsupported algorithm: {alg!r}")

    return AlgorithmSpec(name=alg, family=SUPPORTED_ALGORITHMS[alg])
