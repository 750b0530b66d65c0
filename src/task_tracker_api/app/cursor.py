"""Opaque pagination tokens.

A token is URL-safe base64 over the JSON form of a Cursor, for example
``{"t": "2024-05-01T10:00:00Z", "id": 7}``. Clients must treat it as an
opaque string and send it back unchanged.
"""

from __future__ import annotations

import base64
import binascii

from pydantic import ValidationError

from .errors import InvalidCursorError
from .models import Cursor


def encode_cursor(cursor: Cursor | None) -> str | None:
    if cursor is None:
        return None
    raw = cursor.model_dump_json(by_alias=True)
    return base64.urlsafe_b64encode(raw.encode("utf-8")).decode("ascii")


def decode_cursor(token: str | None) -> Cursor | None:
    """Decode a token produced by encode_cursor; empty means "from the start"."""
    if token is None or not token.strip():
        return None
    try:
        raw = base64.urlsafe_b64decode(token.strip().encode("ascii"))
        return Cursor.model_validate_json(raw)
    except (binascii.Error, UnicodeEncodeError, ValueError, ValidationError) as exc:
        raise InvalidCursorError(f"Invalid cursor: {token!r}") from exc
