"""Protocol definitions and shared type aliases.

Structural interfaces (PEP 544) for the pieces callers inject:

- Token verification (used by the Flask extension)
- Clock (current time for ``exp`` checks)
- Token extraction from a request

Any object with the right methods satisfies a protocol, so tests can pass
simple stand-ins without inheriting from anything.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any, Protocol, TypeAlias

# ============================================================================
# Type Aliases
# ============================================================================

Claims: TypeAlias = Mapping[str, Any]
"""Decoded JWT payload."""

JWKS: TypeAlias = Mapping[str, Any]
"""A JSON Web Key Set document: ``{"keys": [ {...}, ... ]}``."""

Secret: TypeAlias = bytes | str
"""Static HMAC secret. ``str`` values are UTF-8 encoded before use."""

ViewFunc: TypeAlias = Callable[..., Any]
"""Flask view function."""


# ============================================================================
# Core Protocols
# ============================================================================


class Clock(Protocol):
    """Source of "now" for time-based claim checks.

    Production code uses ``SystemClock``; tests use ``FrozenClock`` so that
    expiration outcomes do not depend on when the suite runs.
    """

    def current_time(self) -> int:
        """Return the current Unix time in whole seconds."""
        ...


class TokenVerifier(Protocol):
    """Anything that turns a raw JWT into verified claims.

    Implementations raise a ``VerificationError`` subclass on failure.
    """

    def verify(self, token: str) -> Claims: ...


class Extractor(Protocol):
    """Pulls the raw JWT out of the current Flask request.

    Raises:
        MissingToken: Token not present or improperly formatted.
    """

    def extract(self) -> str: ...
