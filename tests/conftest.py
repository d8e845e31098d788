"""Shared pytest fixtures for ThreatWatch tests.

Conventions:
- Synthetic relationship graphs are built inline; the real country table is
  loaded once per session.
- SequenceRandomSource replays fixed draws so cascade outputs are exact.
- mock_valyu_client is a MagicMock spec'd on ValyuClient; no real external
  HTTP calls are made in any test.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Iterable, List
from unittest.mock import MagicMock

import pytest

from config.settings import PipelineConfig
from threatwatch.analysis.cascade_estimator import RandomSource
from threatwatch.analysis.relationship_graph import RelationshipGraph, load_relationship_graph
from threatwatch.clients.valyu_client import ValyuClient
from threatwatch.models.events import GeoLocation, ThreatEvent


class SequenceRandomSource(RandomSource):
    """RandomSource that replays ``values`` in order, cycling when exhausted."""

    def __init__(self, values: Iterable[float]) -> None:
        self.values: List[float] = list(values)
        self.calls = 0

    def next(self) -> float:
        value = self.values[self.calls % len(self.values)]
        self.calls += 1
        return value


# ── Relationship graphs ──────────────────────────────────────────────────────────

SMALL_TABLE = {
    "Alpha": {
        "code": "AA", "lat": 10.0, "lng": 20.0,
        "neighbors": ["Beta", "Ghost"],
        "economicPartners": ["Gamma", "Beta"],
        "alliances": ["Pact"],
        "region": "North",
    },
    "Beta": {
        "code": "BB", "lat": 11.0, "lng": 21.0,
        "neighbors": ["Alpha"],
        "economicPartners": [],
        "alliances": ["Pact"],
        "region": "North",
    },
    "Gamma": {
        "code": "GG", "lat": -5.0, "lng": 40.0,
        "neighbors": [],
        "economicPartners": ["Alpha"],
        "alliances": [],
        "region": "South",
    },
    "Delta": {
        "code": "DD", "lat": 30.0, "lng": -10.0,
        "neighbors": [],
        "economicPartners": [],
        "alliances": [],
        "region": "North",
    },
}


@pytest.fixture
def small_graph() -> RelationshipGraph:
    """Four profiled countries plus one dangling reference ("Ghost").

    Alpha: neighbors Beta, Ghost; partners Gamma, Beta; alliance Pact; North
    Beta:  neighbor Alpha; alliance Pact; North
    Gamma: partner Alpha; South
    Delta: no relationships; North
    """
    return RelationshipGraph.from_mapping(SMALL_TABLE)


@pytest.fixture(scope="session")
def country_graph() -> RelationshipGraph:
    """The built-in country relationship graph."""
    return load_relationship_graph()


# ── Random sources and clocks ────────────────────────────────────────────────────

@pytest.fixture
def replay_random():
    """Factory fixture: ``replay_random([0.5, 0.0])`` builds a SequenceRandomSource."""
    return SequenceRandomSource


@pytest.fixture
def midpoint_random() -> SequenceRandomSource:
    """Every draw returns 0.5: jitter 0, timeframes at the window midpoint."""
    return SequenceRandomSource([0.5])


@pytest.fixture
def fixed_clock():
    """Clock pinned to 2024-01-15T12:00:00Z."""
    return lambda: datetime(2024, 1, 15, 12, 0, 0, tzinfo=timezone.utc)


# ── Events ───────────────────────────────────────────────────────────────────────

def make_event(
    country: str = "Ukraine",
    category: str = "conflict",
    title: str = "Heavy fighting reported near the border",
    timestamp: str = "2024-01-15T12:00:00.000Z",
    lat: float = 48.3794,
    lng: float = 31.1656,
) -> ThreatEvent:
    """Build a ThreatEvent directly, bypassing classification."""
    return ThreatEvent(
        id=f"evt-test-{country.lower().replace(' ', '-')}",
        title=title,
        summary=title,
        category=category,
        threat_level="high",
        location=GeoLocation(latitude=lat, longitude=lng, place_name=country, country=country),
        timestamp=timestamp,
        source="test-wire",
    )


@pytest.fixture
def event_factory():
    """Factory fixture wrapping make_event(country=..., category=..., ...)."""
    return make_event


@pytest.fixture
def ukraine_event() -> ThreatEvent:
    """Conflict event located in Ukraine."""
    return make_event()


# ── Clients and config ───────────────────────────────────────────────────────────

@pytest.fixture
def mock_valyu_client() -> MagicMock:
    """ValyuClient mock; configure search/answer return values per test."""
    client = MagicMock(spec=ValyuClient)
    client.search.return_value = []
    client.answer.return_value = {"contents": ""}
    return client


@pytest.fixture
def pipeline_config(tmp_path) -> PipelineConfig:
    """PipelineConfig isolated from the environment and writing under tmp_path."""
    return PipelineConfig(
        valyu_api_key="test-key",
        valyu_base_url="https://api.valyu.test",
        country_profiles_path=None,
        output_root=str(tmp_path / "runs"),
        log_level="DEBUG",
    )
