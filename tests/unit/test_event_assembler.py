"""Unit tests for threatwatch.analysis.event_assembler.

Covers:
- assemble_event: normalization, classification, extraction, summary cap,
  timestamp handling, validation errors
- generate_event_id: uniqueness under concurrency
- dedupe_by_title / sort_by_recency / is_unresolved_location
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

import pytest

from threatwatch.analysis.event_assembler import (
    assemble_event,
    dedupe_by_title,
    generate_event_id,
    is_unresolved_location,
    sort_by_recency,
)
from threatwatch.exceptions import ValidationError
from threatwatch.models.events import EventCategory, GeoLocation, ThreatLevel

KYIV = GeoLocation(latitude=48.3794, longitude=31.1656, place_name="Ukraine", country="Ukraine")


# ── assemble_event ────────────────────────────────────────────────────────────────

class TestAssembleEvent:
    def test_classified_event(self):
        """Category, level, keywords and entities come from title + content."""
        event = assemble_event(
            title="Massive protest rally erupts",
            content="Crowds gathered amid economic sanctions talks. NATO observers watched.",
            location=KYIV,
            source="Example Wire",
            source_url="https://example.com/a",
            timestamp="2024-01-15T12:00:00.000Z",
        )
        assert event.category == EventCategory.PROTEST
        assert event.threat_level == ThreatLevel.MEDIUM
        assert event.keywords == ["protest", "rally", "talks", "sanctions", "nato"]
        assert event.entities == ["NATO"]
        assert event.source == "Example Wire"
        assert event.source_url == "https://example.com/a"
        assert event.timestamp == "2024-01-15T12:00:00.000Z"
        assert event.location is KYIV
        assert event.id.startswith("evt-")

    def test_text_normalized(self):
        """Title and content are stripped of boilerplate independently."""
        event = assemble_event(
            title="Skip to content Troops advance",
            content="Menu\nTroops advance on the city\nPrivacy Policy",
            location=KYIV,
            source="web",
        )
        assert event.title == "Troops advance"
        assert event.raw_content == "Troops advance on the city"
        assert event.summary == "Troops advance on the city"

    def test_summary_capped(self):
        """The summary is a prefix of the normalized content."""
        content = "Troops advance. " * 100
        event = assemble_event(
            title="Troops advance", content=content, location=KYIV, source="web",
            summary_max_chars=40,
        )
        assert len(event.summary) == 40
        assert event.raw_content.startswith(event.summary)

    def test_empty_content_allowed(self):
        """Empty content yields an empty summary."""
        event = assemble_event(title="Earthquake strikes", content="", location=KYIV, source="web")
        assert event.summary == ""
        assert event.category == EventCategory.CONFLICT

    def test_default_timestamp_from_clock(self, fixed_clock):
        """Without a timestamp the injected clock supplies one."""
        event = assemble_event(
            title="Talks resume", content="", location=KYIV, source="web", clock=fixed_clock
        )
        assert event.timestamp == "2024-01-15T12:00:00.000Z"

    def test_keyword_limit(self):
        """max_keywords bounds the keyword list."""
        event = assemble_event(
            title="war battle fighting combat", content="", location=KYIV, source="web",
            max_keywords=2,
        )
        assert event.keywords == ["war", "battle"]

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"title": ""},
            {"title": "   "},
            {"title": "Read more"},
            {"content": None},
            {"source": ""},
            {"location": None},
            {"location": GeoLocation(latitude=95.0, longitude=10.0)},
        ],
    )
    def test_invalid_inputs(self, kwargs):
        """Missing or malformed fields raise ValidationError."""
        params = {"title": "Talks resume", "content": "", "location": KYIV, "source": "web"}
        params.update(kwargs)
        with pytest.raises(ValidationError):
            assemble_event(**params)


# ── IDs ───────────────────────────────────────────────────────────────────────────

class TestGenerateEventId:
    def test_unique_under_concurrency(self):
        """IDs generated from many threads never collide."""
        with ThreadPoolExecutor(max_workers=8) as pool:
            ids = list(pool.map(lambda _: generate_event_id(), range(2000)))
        assert len(set(ids)) == len(ids)


# ── List helpers ──────────────────────────────────────────────────────────────────

class TestListHelpers:
    def test_dedupe_keeps_first(self, event_factory):
        """Only the first event per exact title survives."""
        first = event_factory(country="Poland", title="Same headline")
        second = event_factory(country="Russia", title="Same headline")
        other = event_factory(country="China", title="Other headline")
        assert dedupe_by_title([first, second, other]) == [first, other]

    def test_dedupe_is_case_sensitive(self, event_factory):
        """Titles differing only in case are distinct."""
        a = event_factory(title="Border clash")
        b = event_factory(title="border clash")
        assert len(dedupe_by_title([a, b])) == 2

    def test_sort_newest_first(self, event_factory):
        """Events sort by timestamp descending; unparseable ones go last."""
        old = event_factory(title="old", timestamp="2024-01-10T00:00:00.000Z")
        new = event_factory(title="new", timestamp="2024-01-15T00:00:00.000Z")
        broken = event_factory(title="broken", timestamp="garbage")
        mid = event_factory(title="mid", timestamp="2024-01-12T00:00:00+00:00")
        assert [e.title for e in sort_by_recency([old, broken, new, mid])] == [
            "new", "mid", "old", "broken",
        ]

    def test_unresolved_location(self):
        """(0, 0) and missing locations are unresolved."""
        assert is_unresolved_location(None)
        assert is_unresolved_location(GeoLocation(0.0, 0.0, place_name="Unknown"))
        assert not is_unresolved_location(KYIV)
