"""Request token extractors for the Flask integration.

- ``BearerExtractor``: ``Authorization: Bearer <token>`` (default)
- ``CookieExtractor``: a named cookie

Tokens are never read from query strings; those end up in access logs.
"""

from __future__ import annotations

from flask import request

from .errors import MissingToken


class BearerExtractor:
    """Reads the token from the ``Authorization`` header."""

    def extract(self) -> str:
        """Return the bearer token.

        Raises:
            MissingToken: Header absent, scheme not ``Bearer``, or empty token.
        """
        header = request.headers.get("Authorization", "").strip()
        if not header:
            raise MissingToken("Missing Authorization header")

        scheme, _, token = header.partition(" ")
        if scheme.lower() != "bearer":
            raise MissingToken("Invalid authorization scheme (expected 'Bearer')")

        token = token.strip()
        if not token:
            raise MissingToken("Bearer token is empty")
        return token


class CookieExtractor:
    """Reads the token from a cookie, for browser clients."""

    def __init__(self, cookie_name: str = "access_token") -> None:
        if not cookie_name or not cookie_name.strip():
            raise ValueError("cookie_name cannot be empty")
        self._name = cookie_name

    def extract(self) -> str:
        token = request.cookies.get(self._name)
        if not token:
            raise MissingToken(f"Missing cookie '{self._name}'")
        return token
