"""Flask integration for JWT verification.

Glue between an HTTP request and the verifier:

1. Extract the raw token from the request (header or cookie)
2. Verify it with a ``TokenVerifier`` (by default a ``JWTVerifier`` built
   from ``app.config``)
3. Store the verified claims in ``flask.g.jwt``
4. Turn auth errors into HTTP 401 responses

The failure reason is logged server-side; clients only see the generic
description of the error class.
"""

from __future__ import annotations

import logging
from functools import wraps
from typing import TYPE_CHECKING, Any, Final

from flask import Flask, abort, current_app, g

from .clock import SystemClock
from .config import VerifierSettings
from .errors import AuthError, VerificationError
from .extractors import BearerExtractor
from .verifier import JWTVerifier, JWTVerifyOptions

if TYPE_CHECKING:
    from .protocols import Clock, Extractor, TokenVerifier, ViewFunc

logger = logging.getLogger(__name__)

_EXT_KEY: Final[str] = "jwt_guard"
"""Flask extensions registry key for AuthExtension."""


class AuthExtension:
    """
    Flask decorator glue for JWT authentication.

    Pattern:
        auth = AuthExtension()
        auth.init_app(app)   # reads JWT_SECRET / JWT_JWKS / JWT_CLAIM_VALIDATORS

    Usage:
        @app.get("/channels")
        @auth.require()
        def channels():
            return {"sub": g.jwt["sub"]}
    """

    def __init__(
        self,
        app: Flask | None = None,
        *,
        verifier: TokenVerifier | None = None,
        extractor: Extractor | None = None,
        clock: Clock | None = None,
    ) -> None:
        self._verifier: TokenVerifier | None = verifier
        self._extractor: Extractor = extractor or BearerExtractor()
        self._clock = clock

        if app is not None:
            self.init_app(app)

    def init_app(
        self,
        app: Flask,
        *,
        verifier: TokenVerifier | None = None,
        extractor: Extractor | None = None,
    ) -> None:
        """Register the extension on ``app``.

        If no verifier was given, one is built from ``app.config``.

        Raises:
            ValueError: The JWT settings in ``app.config`` are invalid.
        """
        if verifier is not None:
            self._verifier = verifier
        if extractor is not None:
            self._extractor = extractor

        if self._verifier is None:
            self._verifier = self._verifier_from_config(app)

        app.extensions[_EXT_KEY] = self

    def _verifier_from_config(self, app: Flask) -> JWTVerifier:
        settings = VerifierSettings.from_mapping(app.config)
        options = JWTVerifyOptions(
            claim_validators=settings.claim_validators,
            clock=self._clock or SystemClock(),
        )
        return JWTVerifier(settings.static_secret, settings.jwks, options)

    def _current_verifier(self) -> TokenVerifier:
        if self._verifier is not None:
            return self._verifier
        ext = current_app.extensions.get(_EXT_KEY)
        if ext is None or ext._verifier is None:
            raise RuntimeError("AuthExtension is not initialized; call init_app()")
        return ext._verifier

    def require(self):
        """Decorator that rejects requests without a valid JWT.

        On success the verified claims are available as ``flask.g.jwt``.

        Error mapping:
        - ``MissingToken``       -> HTTP 401 ("Missing token")
        - ``TokenExpired``       -> HTTP 401 ("Expired token")
        - other verification     -> HTTP 401 ("Invalid token")
        - any other error        -> HTTP 401 ("Authentication failed")
        """

        def decorator(view: ViewFunc) -> ViewFunc:
            @wraps(view)
            def wrapper(*args: Any, **kwargs: Any) -> Any:
                verifier = self._current_verifier()
                try:
                    token = self._extractor.extract()
                    g.jwt = verifier.verify(token)
                except VerificationError as e:
                    logger.info("JWT rejected: %s (%s)", e.reason, e)
                    abort(e.error_code, description=e.description)
                except AuthError as e:
                    logger.info("JWT missing: %s", e)
                    abort(e.error_code, description=e.description)
                except Exception:
                    logger.exception("JWT verification crashed")
                    abort(401, description="Authentication failed")

                return view(*args, **kwargs)

            return wrapper

        return decorator
