"""Opaque pagination cursors.

A cursor records, per entity type, the id of the last record in that
adapter's fetched window. It is serialized as URL-safe base64 JSON so
callers treat it as an opaque token.
"""

from __future__ import annotations

import base64
import binascii
import json

from hubsearch.core.exceptions import ValidationError
from hubsearch.models.query import EntityType


def encode_cursor(positions: dict[EntityType, str]) -> str | None:
    """Encode per-type positions; returns None when there is nothing to resume."""
    if not positions:
        return None
    payload = json.dumps({t.value: pos for t, pos in positions.items()}, sort_keys=True, separators=(",", ":"))
    return base64.urlsafe_b64encode(payload.encode("utf-8")).decode("ascii").rstrip("=")


def decode_cursor(cursor: str | None) -> dict[EntityType, str]:
    """Decode a cursor produced by :func:`encode_cursor`.

    Raises:
        ValidationError: If the cursor is malformed.
    """
    if not cursor:
        return {}
    padded = cursor + "=" * (-len(cursor) % 4)
    try:
        data = json.loads(base64.urlsafe_b64decode(padded.encode("ascii")))
        return {EntityType(k): str(v) for k, v in data.items()}
    except (binascii.Error, UnicodeError, ValueError, AttributeError) as e:
        raise ValidationError(f"Invalid cursor: {cursor!r}") from e
