"""Timestamp normalization.

Stores hand back creation times in several shapes: raw epoch milliseconds,
``datetime`` objects, ISO-8601 strings, and store-native timestamp objects
(``{"seconds": ..., "nanoseconds": ...}`` mappings or objects exposing
``to_datetime()``). Everything is converted to a single canonical value,
signed epoch milliseconds, before any comparison.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import UTC, datetime
from typing import Any

# Integers below this are treated as epoch seconds rather than milliseconds
# (1e11 ms is March 1973; 1e11 s is far beyond any realistic date).
_SECONDS_THRESHOLD = 100_000_000_000


def _datetime_to_millis(value: datetime) -> int:
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return int(value.timestamp() * 1000)


def to_epoch_millis(value: Any) -> int:
    """Convert a heterogeneous timestamp representation to epoch milliseconds.

    Args:
        value: The raw timestamp value read from a store record.

    Returns:
        Signed epoch milliseconds. Missing or unparseable values map to 0.
    """
    if value is None or isinstance(value, bool):
        return 0

    if isinstance(value, datetime):
        return _datetime_to_millis(value)

    if isinstance(value, int):
        return value * 1000 if abs(value) < _SECONDS_THRESHOLD else value

    if isinstance(value, float):
        if abs(value) < _SECONDS_THRESHOLD:
            return int(value * 1000)
        return int(value)

    if isinstance(value, str):
        text = value.strip()
        if not text:
            return 0
        if text.lstrip("-").isdigit():
            return to_epoch_millis(int(text))
        try:
            return _datetime_to_millis(datetime.fromisoformat(text.replace("Z", "+00:00")))
        except ValueError:
            return 0

    if isinstance(value, Mapping):
        seconds = value.get("seconds", value.get("_seconds"))
        if seconds is None:
            return 0
        nanos = value.get("nanoseconds", value.get("_nanoseconds", 0)) or 0
        return int(seconds) * 1000 + int(nanos) // 1_000_000

    to_datetime = getattr(value, "to_datetime", None)
    if callable(to_datetime):
        return _datetime_to_millis(to_datetime())

    timestamp = getattr(value, "timestamp", None)
    if callable(timestamp):
        return int(timestamp() * 1000)

    return 0
