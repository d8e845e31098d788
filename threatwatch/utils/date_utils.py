"""Date normalization utilities for ThreatWatch.

Search-provider date fields are inconsistent: ISO strings, free-form strings,
datetime objects, or epoch numbers in seconds or milliseconds. Always route
them through normalize_published_date() before storing them on an event.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Optional

from dateutil import parser as dateutil_parser

# Epoch values above this are milliseconds, not seconds
_EPOCH_MS_THRESHOLD = 1e12


def utc_now_iso() -> str:
    """Return the current UTC time as an ISO 8601 string with millisecond precision."""
    return to_iso(datetime.now(timezone.utc))


def to_iso(value: datetime) -> str:
    """Format a datetime as ISO 8601 UTC (``YYYY-MM-DDTHH:MM:SS.mmmZ``).

    Naive datetimes are assumed to already be UTC.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    value = value.astimezone(timezone.utc)
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"


def normalize_published_date(raw: Any) -> Optional[str]:
    """Normalize a provider date value to ISO 8601 UTC.

    Args:
        raw: String, datetime, or epoch number (seconds or milliseconds).

    Returns:
        ISO 8601 string, or None when the value is empty or unparseable.
    """
    if raw is None or raw == "":
        return None

    if isinstance(raw, datetime):
        return to_iso(raw)

    if isinstance(raw, bool):
        return None

    if isinstance(raw, (int, float)):
        seconds = raw / 1000.0 if raw > _EPOCH_MS_THRESHOLD else float(raw)
        try:
            return to_iso(datetime.fromtimestamp(seconds, tz=timezone.utc))
        except (OverflowError, OSError, ValueError):
            return None

    if isinstance(raw, str):
        try:
            return to_iso(dateutil_parser.parse(raw.strip()))
        except (ValueError, OverflowError, TypeError):
            return None

    return None


def parse_iso(value: str) -> Optional[datetime]:
    """Parse an ISO 8601 timestamp into an aware datetime, or None."""
    if not value:
        return None
    try:
        parsed = dateutil_parser.isoparse(value)
    except (ValueError, OverflowError, TypeError):
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed
