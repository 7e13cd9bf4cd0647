"""Authentication and token verification errors.

Every failure of the verification pipeline is a subclass of
``VerificationError`` carrying a short machine-readable ``reason``. The Flask
layer maps all of them to HTTP 401 through ``error_code`` and ``description``.

Security Note:
    ``description`` is intentionally generic. The precise ``reason`` and claim
    payloads are for server-side handling and logs, not for clients.
"""

from __future__ import annotations

from typing import Any, ClassVar


class AuthError(Exception):
    """Base exception for all authentication failures.

    Attributes:
        error_code: HTTP status the web layer should answer with.
        description: Client-safe message.
    """

    error_code: ClassVar[int] = 401
    description: ClassVar[str] = "Authentication failed"


class MissingToken(AuthError):  # noqa: N818
    """Raised when the request carries no usable token."""

    description = "Missing token"


class VerificationError(AuthError):
    """Base class for failures raised while verifying a token.

    Subclasses set ``reason``; two results with the same ``reason`` (and, for
    claim errors, the same payload) describe the same failure.
    """

    reason: ClassVar[str] = "verification_failed"
    description = "Invalid token"


class NotAString(VerificationError):  # noqa: N818
    """The token handed to the verifier is not a ``str``."""

    reason = "not_a_string"


class TokenMalformed(VerificationError):  # noqa: N818
    """Wrong segment count, bad base64url, or a segment that is not JSON."""

    reason = "token_malformed"


class HeaderNotAMap(VerificationError):  # noqa: N818
    reason = "expected_header_map"


class ClaimsNotAMap(VerificationError):  # noqa: N818
    reason = "expected_claims_map"


class HeaderMissingFields(VerificationError):  # noqa: N818
    """The header lacks ``typ`` or ``alg``."""

    reason = "header_missing_fields"


class UnsupportedAlgorithm(VerificationError):  # noqa: N818
    """The header ``alg`` is not in the allow-list."""

    reason = "unsupported_algorithm"


class ErrorGeneratingSigner(VerificationError):  # noqa: N818
    """No usable verification key could be built for the token.

    Raised uniformly for every asymmetric key type when no JWKS entry matches
    the token's ``kty``/``kid``, when no JWKS is supplied, or when the matched
    entry's key material cannot be loaded.
    """

    reason = "error_generating_signer"


class SignatureError(VerificationError):  # noqa: N818
    """The recomputed signature does not match the token's signature."""

    reason = "signature_error"


class ClaimValidationError(VerificationError):
    """A claim failed validation after the signature was accepted.

    Carries structured data instead of a fixed string so callers can act on
    it (e.g. compute how long ago a token expired).

    Attributes:
        message: For expiry, the clock's current time. Otherwise
            ``"Invalid token"``.
        claim: Name of the claim that failed.
        claim_val: The token's value for that claim (``None`` if absent).
    """

    reason = "claim_validation_failed"

    def __init__(self, message: Any, claim: str, claim_val: Any) -> None:
        super().__init__(message, claim, claim_val)
        self.message = message
        self.claim = claim
        self.claim_val = claim_val

    @property
    def payload(self) -> dict[str, Any]:
        return {"message": self.message, "claim": self.claim, "claim_val": self.claim_val}


class TokenExpired(ClaimValidationError):  # noqa: N818
    """``exp`` is at or before the current time.

    ``message`` holds the current time at check time.
    """

    reason = "token_expired"
    description = "Expired token"

    def __init__(self, current_time: int, claim_val: Any) -> None:
        super().__init__(current_time, "exp", claim_val)


class ClaimMismatch(ClaimValidationError):  # noqa: N818
    """A configured claim does not equal its expected value."""

    reason = "claim_mismatch"

    def __init__(self, claim: str, claim_val: Any) -> None:
        super().__init__("Invalid token", claim, claim_val)
