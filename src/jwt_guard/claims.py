"""Signature verification and claim validation.

Runs after a key is resolved. The signature is checked first; claims are only
looked at once it is known the token was signed by the expected key.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from numbers import Real
from typing import Any

from jwt.exceptions import InvalidKeyError

from .decoder import DecodedToken
from .errors import ClaimMismatch, SignatureError, TokenExpired
from .keys import VerificationKey
from .protocols import Claims, Clock

_MISSING = object()


def validate_exp(claims: Claims, clock: Clock) -> None:
    """Reject tokens whose ``exp`` is at or before ``clock.current_time()``.

    A token without ``exp`` never expires. A non-numeric or non-finite ``exp``
    (``NaN``, ``Infinity``) is treated as expired.

    Raises:
        TokenExpired: With the current time as ``message``.
    """
    if "exp" not in claims:
        return

    exp = claims["exp"]
    now = clock.current_time()
    numeric = isinstance(exp, Real) and not isinstance(exp, bool)
    if not numeric or not math.isfinite(exp) or exp <= now:
        raise TokenExpired(now, exp)


def validate_expected_claims(claims: Claims, expected: Mapping[str, Any]) -> None:
    """Require each configured claim to equal its expected value.

    Claims are checked in ``expected``'s iteration order; the first mismatch
    wins. An absent claim is a mismatch reported with ``claim_val=None``.

    Raises:
        ClaimMismatch: With ``message="Invalid token"``.
    """
    for name, value in expected.items():
        actual = claims.get(name, _MISSING)
        if actual is _MISSING:
            raise ClaimMismatch(name, None)
        if actual != value:
            raise ClaimMismatch(name, actual)


def verify_signature_and_claims(
    decoded: DecodedToken,
    key: VerificationKey,
    clock: Clock,
    claim_validators: Mapping[str, Any],
) -> Claims:
    """Verify the signature, then ``exp``, then configured claims.

    Returns:
        The token's claims.

    Raises:
        SignatureError: Signature does not match the signing input.
        TokenExpired: ``exp`` has passed.
        ClaimMismatch: A configured claim differs.
    """
    try:
        valid = key.verify(decoded.signing_input, decoded.signature)
    except InvalidKeyError as e:
        # Key type or curve does not fit the declared algorithm.
        raise SignatureError("Signature verification failed") from e

    if not valid:
        raise SignatureError("Signature verification failed")

    validate_exp(decoded.claims, clock)
    validate_expected_claims(decoded.claims, claim_validators)

    return decoded.claims
