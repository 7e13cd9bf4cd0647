"""JWT verification pipeline.

Composes the four verification stages in a fixed order:

1. ``decoder.decode``: split and base64url-decode the token
2. ``header.validate_header``: check ``typ``/``alg`` and the allow-list
3. ``keys.resolve_key``: pick the key from the static secret or the JWKS
4. ``claims.verify_signature_and_claims``: signature, ``exp``, expected claims

A stage failure stops the pipeline. ``JWTVerifier.verify`` raises the typed
error; ``verify`` and ``JWTVerifier.verify_result`` return a
``VerificationResult`` instead and never raise for bad input.

The verifier holds only read-only configuration, so one instance can be shared
across threads.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, cast

from .claims import verify_signature_and_claims
from .clock import SystemClock
from .decoder import decode
from .errors import ClaimValidationError, VerificationError
from .header import validate_header
from .keys import resolve_key
from .protocols import JWKS, Claims, Clock, Secret


@dataclass(frozen=True, slots=True)
class JWTVerifyOptions:
    """Claim validation rules.

    Attributes:
        claim_validators: Claim name -> required value. Checked in insertion
            order after ``exp``. Empty means no extra checks.
        clock: Source of "now" for ``exp``. Inject a ``FrozenClock`` in tests.

    Example:
        ```python
        options = JWTVerifyOptions(
            claim_validators={"iss": "https://auth.example.com", "aud": "realtime"},
        )
        verifier = JWTVerifier(secret, jwks=jwks, options=options)
        ```
    """

    claim_validators: Mapping[str, Any] = field(default_factory=dict)
    clock: Clock = field(default_factory=SystemClock)

    def __post_init__(self) -> None:
        # Freeze a copy so later mutation by the caller cannot leak into calls.
        object.__setattr__(
            self, "claim_validators", MappingProxyType(dict(self.claim_validators))
        )


@dataclass(frozen=True, slots=True)
class VerificationResult:
    """Outcome of one verification: claims on success, an error otherwise."""

    claims: Claims | None = None
    error: VerificationError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def reason(self) -> str | None:
        """Machine-readable failure reason, ``None`` on success."""
        return None if self.error is None else self.error.reason

    @property
    def payload(self) -> dict[str, Any] | None:
        """Structured claim failure data (``message``/``claim``/``claim_val``)."""
        if isinstance(self.error, ClaimValidationError):
            return self.error.payload
        return None

    def unwrap(self) -> Claims:
        """Return the claims or raise the stored error."""
        if self.error is not None:
            raise self.error
        return cast(Claims, self.claims)


class JWTVerifier:
    """Verifies compact JWTs against a static secret and/or a JWKS.

    Implements the ``TokenVerifier`` protocol, so it plugs straight into
    ``AuthExtension``.

    Example:
        ```python
        verifier = JWTVerifier(
            static_secret=app_secret,
            jwks=jwks_document,  # already fetched by the caller
            options=JWTVerifyOptions(claim_validators={"aud": "authenticated"}),
        )

        try:
            claims = verifier.verify(raw_token)
        except TokenExpired as e:
            seconds_late = e.message - e.claim_val
        except VerificationError:
            ...
        ```

    Attributes:
        _secret: Shared secret for HMAC tokens.
        _jwks: JWKS document for asymmetric (and ``oct``) keys.
        _opt: Claim validation options.
    """

    def __init__(
        self,
        static_secret: Secret | None,
        jwks: JWKS | None = None,
        options: JWTVerifyOptions | None = None,
    ) -> None:
        self._secret = static_secret
        self._jwks = jwks
        self._opt = options or JWTVerifyOptions()

    def verify(self, token: str) -> Claims:
        """Verify a JWT and return its claims.

        Args:
            token: Raw compact JWT.

        Returns:
            The token's claims.

        Raises:
            VerificationError: The matching subclass for the first failing
                stage (see ``jwt_guard.errors``).
        """
        decoded = decode(token)
        spec = validate_header(decoded.header)
        key = resolve_key(spec, decoded.header.get("kid"), self._secret, self._jwks)
        return verify_signature_and_claims(
            decoded, key, self._opt.clock, self._opt.claim_validators
        )

    def verify_result(self, token: str) -> VerificationResult:
        """Like ``verify`` but reports failure as a value instead of raising."""
        try:
            return VerificationResult(claims=self.verify(token))
        except VerificationError as e:
            return VerificationResult(error=e)


def verify(
    token: str,
    static_secret: Secret | None,
    jwks: JWKS | None = None,
    *,
    claim_validators: Mapping[str, Any] | None = None,
    clock: Clock | None = None,
) -> VerificationResult:
    """Verify ``token`` in one call.

    Args:
        token: Raw compact JWT. Non-``str`` values fail with ``not_a_string``.
        static_secret: Shared secret for HMAC tokens.
        jwks: Already-fetched JWKS document, or ``None``.
        claim_validators: Claim name -> required value.
        clock: Time source; defaults to the system clock.

    Returns:
        ``VerificationResult`` with the claims, or the error of the first
        failing stage.
    """
    options = JWTVerifyOptions(
        claim_validators=claim_validators or {},
        clock=clock or SystemClock(),
    )
    return JWTVerifier(static_secret, jwks, options).verify_result(token)
