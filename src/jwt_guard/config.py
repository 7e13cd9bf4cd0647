"""Verifier settings loaded from a Flask-style config mapping.

Keys read:

- ``JWT_SECRET``: shared secret for HMAC tokens (``str`` or ``bytes``).
- ``JWT_JWKS``: JWKS document, as a mapping or a JSON string.
- ``JWT_CLAIM_VALIDATORS``: claim name -> required value, as a mapping or a
  JSON object string.

All of them are optional. Values come from wherever the application loads its
config (``app.config.from_prefixed_env()``, a settings file, ...); this module
only validates and normalizes them.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Final

from .protocols import JWKS, Secret

SECRET_KEY: Final[str] = "JWT_SECRET"
JWKS_KEY: Final[str] = "JWT_JWKS"
CLAIM_VALIDATORS_KEY: Final[str] = "JWT_CLAIM_VALIDATORS"


def _as_mapping(name: str, raw: Any) -> Mapping[str, Any] | None:
    if raw is None or raw == "":
        return None
    if isinstance(raw, (str, bytes)):
        try:
            raw = json.loads(raw)
        except ValueError as e:
            raise ValueError(f"{name} is not valid JSON") from e
    if not isinstance(raw, Mapping):
        raise ValueError(f"{name} must be a JSON object, got {type(raw).__name__}")
    return raw


@dataclass(frozen=True, slots=True)
class VerifierSettings:
    """Validated verifier configuration."""

    static_secret: Secret | None = None
    jwks: JWKS | None = None
    claim_validators: Mapping[str, Any] = field(default_factory=dict)

    @classmethod
    def from_mapping(cls, config: Mapping[str, Any]) -> VerifierSettings:
        """Build settings from ``config`` (e.g. ``app.config``).

        Raises:
            ValueError: A value has the wrong type or is not valid JSON.
        """
        secret = config.get(SECRET_KEY)
        if secret is not None and not isinstance(secret, (str, bytes)):
            raise ValueError(f"{SECRET_KEY} must be str or bytes")

        jwks = _as_mapping(JWKS_KEY, config.get(JWKS_KEY))
        if jwks is not None and not isinstance(jwks.get("keys"), list):
            raise ValueError(f"{JWKS_KEY} must contain a 'keys' list")

        validators = _as_mapping(CLAIM_VALIDATORS_KEY, config.get(CLAIM_VALIDATORS_KEY))

        return cls(
            static_secret=secret or None,
            jwks=jwks,
            claim_validators=dict(validators or {}),
        )
