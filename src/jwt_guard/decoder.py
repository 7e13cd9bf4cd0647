"""Compact JWT decoding.

Splits a token into its three segments and base64url-decodes them. Header and
claims must be JSON objects; the signature stays raw bytes. No field is
trusted at this point: this only establishes that the token is well formed.
"""

from __future__ import annotations

import binascii
import json
import re
from dataclasses import dataclass
from typing import Any, Final

from jwt.utils import base64url_decode

from .errors import ClaimsNotAMap, HeaderNotAMap, NotAString, TokenMalformed

_SEGMENT_RE: Final = re.compile(r"[A-Za-z0-9_-]*")
"""Unpadded base64url alphabet (RFC 7515 section 2)."""


@dataclass(frozen=True, slots=True)
class DecodedToken:
    """A structurally valid, not yet verified, JWT.

    Attributes:
        header: Decoded JOSE header.
        claims: Decoded payload.
        signature: Raw signature bytes.
        signing_input: The original ``<header>.<claims>`` segments as ASCII
            bytes. Signatures are checked against these, never against a
            re-encoding of ``header``/``claims``.
    """

    header: dict[str, Any]
    claims: dict[str, Any]
    signature: bytes
    signing_input: bytes


def _decode_segment(segment: str) -> bytes:
    if not _SEGMENT_RE.fullmatch(segment):
        raise TokenMalformed("Segment is not base64url")
    try:
        return base64url_decode(segment)
    except (binascii.Error, ValueError) as e:
        raise TokenMalformed("Segment is not base64url") from e


def _load_json(raw: bytes) -> Any:
    try:
        return json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, ValueError, RecursionError) as e:
        raise TokenMalformed("Segment is not JSON") from e


def decode(token: object) -> DecodedToken:
    """Split and decode a compact JWT.

    Args:
        token: The raw token. Anything that is not a ``str`` is rejected.

    Returns:
        The decoded header, claims, signature and signing input.

    Raises:
        NotAString: ``token`` is not a ``str``.
        TokenMalformed: Not three segments, a segment is not base64url, or
            header/claims are not JSON.
        HeaderNotAMap: Header decodes to something other than an object.
        ClaimsNotAMap: Claims decode to something other than an object.
    """
    if not isinstance(token, str):
        raise NotAString("Token must be a string")

    parts = token.split(".")
    if len(parts) != 3:
        raise TokenMalformed("Token must have exactly three segments")

    header_seg, claims_seg, signature_seg = parts

    header = _load_json(_decode_segment(header_seg))
    claims = _load_json(_decode_segment(claims_seg))
    signature = _decode_segment(signature_seg)

    if not isinstance(header, dict):
        raise HeaderNotAMap("Token header is not a JSON object")
    if not isinstance(claims, dict):
        raise ClaimsNotAMap("Token claims are not a JSON object")

    return DecodedToken(
        header=header,
        claims=claims,
        signature=signature,
        signing_input=f"{header_seg}.{claims_seg}".encode("ascii"),
    )
