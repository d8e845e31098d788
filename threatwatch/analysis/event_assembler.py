"""Event assembly for ThreatWatch.

Turns one search result (title, content, resolved location) into a canonical
ThreatEvent: normalizes text, classifies category and threat level, and
extracts keywords and entities. Also provides the list-level helpers the
event feed applies after assembly (title dedup, recency sort).

Callers must drop results whose location resolved to the (0, 0) sentinel
before calling assemble_event(); see is_unresolved_location().
"""

from __future__ import annotations

import itertools
import time
import uuid
from datetime import datetime, timezone
from typing import Callable, Iterable, List, Optional, Set

from config.defaults import MAX_KEYWORDS, SUMMARY_MAX_CHARS
from threatwatch.analysis.classifier import classify_category, classify_threat_level
from threatwatch.analysis.extractor import extract_entities, extract_keywords
from threatwatch.exceptions import ValidationError
from threatwatch.models.events import GeoLocation, ThreatEvent
from threatwatch.utils.date_utils import parse_iso, to_iso
from threatwatch.utils.geo_utils import is_unresolved, is_valid_coordinate
from threatwatch.utils.text import normalize_content

_id_counter = itertools.count(1)

_OLDEST = datetime.min.replace(tzinfo=timezone.utc)


def generate_event_id() -> str:
    """Return a process-unique event ID.

    Combines epoch milliseconds, a process-wide monotonic counter and a random
    suffix, so concurrent callers never collide.
    """
    millis = int(time.time() * 1000)
    return f"evt-{millis}-{next(_id_counter)}-{uuid.uuid4().hex[:8]}"


def is_unresolved_location(location: Optional[GeoLocation]) -> bool:
    """Return True when a geocoder could not place a result (missing or (0, 0))."""
    return location is None or is_unresolved(location.latitude, location.longitude)


def _validate_inputs(title: str, content: str, location: GeoLocation, source: str) -> None:
    if not isinstance(title, str) or not title.strip():
        raise ValidationError("Event title is required")
    if not isinstance(content, str):
        raise ValidationError("Event content must be a string")
    if not isinstance(source, str) or not source.strip():
        raise ValidationError("Event source is required")
    if not isinstance(location, GeoLocation):
        raise ValidationError("Event location is required")
    if not is_valid_coordinate(location.latitude, location.longitude):
        raise ValidationError(
            f"Event location out of range: ({location.latitude}, {location.longitude})"
        )


def assemble_event(
    title: str,
    content: str,
    location: GeoLocation,
    source: str,
    source_url: Optional[str] = None,
    timestamp: Optional[str] = None,
    clock: Optional[Callable[[], datetime]] = None,
    summary_max_chars: int = SUMMARY_MAX_CHARS,
    max_keywords: int = MAX_KEYWORDS,
) -> ThreatEvent:
    """Build a ThreatEvent from a single search result.

    Title and content are normalized independently; classification and
    extraction run on ``normalized_title + " " + normalized_content``.

    Args:
        title: Raw result title.
        content: Raw result body text (may be empty).
        location: Resolved location for the result.
        source: Source label (publisher or "web").
        source_url: Optional link to the original article.
        timestamp: ISO 8601 publication time; defaults to now.
        clock: Zero-argument callable returning the current datetime, used
            when ``timestamp`` is not supplied.
        summary_max_chars: Length of the summary prefix.
        max_keywords: Maximum keywords attached to the event.

    Returns:
        A new, frozen ThreatEvent with a fresh ID.

    Raises:
        ValidationError: If a required field is missing or malformed.
    """
    _validate_inputs(title, content, location, source)

    clean_title = normalize_content(title)
    if not clean_title:
        raise ValidationError(f"Event title {title!r} is empty once boilerplate is removed")
    clean_content = normalize_content(content)
    full_text = f"{clean_title} {clean_content}"

    if not timestamp:
        now = clock() if clock is not None else datetime.now(timezone.utc)
        timestamp = to_iso(now)

    return ThreatEvent(
        id=generate_event_id(),
        title=clean_title,
        summary=clean_content[:summary_max_chars],
        category=classify_category(full_text),
        threat_level=classify_threat_level(full_text),
        location=location,
        timestamp=timestamp,
        source=source,
        source_url=source_url,
        entities=extract_entities(full_text),
        keywords=extract_keywords(full_text, limit=max_keywords),
        raw_content=clean_content,
    )


def dedupe_by_title(events: Iterable[ThreatEvent]) -> List[ThreatEvent]:
    """Keep the first event for each exact (case-sensitive) title."""
    seen: Set[str] = set()
    result: List[ThreatEvent] = []
    for event in events:
        if event.title in seen:
            continue
        seen.add(event.title)
        result.append(event)
    return result


def sort_by_recency(events: Iterable[ThreatEvent]) -> List[ThreatEvent]:
    """Sort events newest first; events with unparseable timestamps go last."""
    def _key(event: ThreatEvent) -> datetime:
        parsed = parse_iso(event.timestamp)
        return parsed if parsed is not None else _OLDEST

    return sorted(events, key=_key, reverse=True)
