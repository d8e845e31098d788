"""Gazetteer geocoder for ThreatWatch search results.

Resolves a result to the first relationship-graph country it names, using
the country's profile coordinates. Results naming no known country resolve
to the (0, 0) sentinel and are dropped by the event feed.
"""

from __future__ import annotations

import logging
import re
from typing import Dict, Mapping, Optional, Pattern

from threatwatch.analysis.relationship_graph import RelationshipGraph
from threatwatch.models.events import GeoLocation

logger = logging.getLogger(__name__)

# Common alternate names and demonyms → canonical country name
DEFAULT_ALIASES: Mapping[str, str] = {
    "U.S.": "United States",
    "USA": "United States",
    "American": "United States",
    "Washington": "United States",
    "UK": "United Kingdom",
    "Britain": "United Kingdom",
    "British": "United Kingdom",
    "Ukrainian": "Ukraine",
    "Kyiv": "Ukraine",
    "Russian": "Russia",
    "Moscow": "Russia",
    "Kremlin": "Russia",
    "Chinese": "China",
    "Beijing": "China",
    "Taiwanese": "Taiwan",
    "Taipei": "Taiwan",
    "Israeli": "Israel",
    "Iranian": "Iran",
    "Tehran": "Iran",
    "German": "Germany",
    "Berlin": "Germany",
    "Polish": "Poland",
    "Warsaw": "Poland",
    "Japanese": "Japan",
    "Tokyo": "Japan",
    "Seoul": "South Korea",
    "Pyongyang": "North Korea",
    "Indian": "India",
    "New Delhi": "India",
    "Pakistani": "Pakistan",
    "Saudi": "Saudi Arabia",
    "Turkish": "Turkey",
    "Ankara": "Turkey",
    "French": "France",
    "Paris": "France",
    "Syrian": "Syria",
    "Damascus": "Syria",
    "Lebanese": "Lebanon",
    "Beirut": "Lebanon",
    "Egyptian": "Egypt",
    "Cairo": "Egypt",
    "Sudanese": "Sudan",
    "Khartoum": "Sudan",
    "Ethiopian": "Ethiopia",
    "Nigerian": "Nigeria",
    "Brazilian": "Brazil",
    "Australian": "Australia",
}


class GazetteerGeocoder:
    """Place search results using the country relationship graph.

    Matching is case-sensitive on whole words, so "turkey" in a recipe or
    "china" the porcelain do not resolve.

    Args:
        graph: Relationship graph supplying names and coordinates.
        aliases: Alternate name → canonical country. Aliases pointing at a
            country without a profile are ignored.
    """

    def __init__(
        self,
        graph: RelationshipGraph,
        aliases: Optional[Mapping[str, str]] = None,
    ) -> None:
        self.graph = graph
        lookup: Dict[str, str] = {name: name for name in graph.countries()}
        for alias, country in (DEFAULT_ALIASES if aliases is None else aliases).items():
            if country in graph and alias not in lookup:
                lookup[alias] = country
        self._lookup = lookup
        self._pattern = self._compile(lookup)

    @staticmethod
    def _compile(lookup: Mapping[str, str]) -> Optional[Pattern[str]]:
        if not lookup:
            return None
        # Longest names first so "South Korea" wins over a shorter overlap
        names = sorted(lookup, key=len, reverse=True)
        alternation = "|".join(re.escape(n) for n in names)
        return re.compile(rf"(?<![\w.])({alternation})(?!\w)")

    def find_country(self, text: Optional[str]) -> Optional[str]:
        """Return the canonical country first named in ``text``, or None."""
        if not text or self._pattern is None:
            return None
        match = self._pattern.search(text)
        if match is None:
            return None
        return self._lookup[match.group(1)]

    def geocode(self, text: str, title: Optional[str] = None) -> GeoLocation:
        """Resolve a search result to a map location.

        Args:
            text: Text to scan, typically ``title + " " + content``.
            title: Optional title; a country named here takes precedence.

        Returns:
            The matched country's location, or GeoLocation(0, 0) when no
            known country is named.
        """
        country = self.find_country(title) or self.find_country(text)
        if country is None:
            logger.debug("Geocoder: no known country in %.80r", title or text)
            return GeoLocation(latitude=0.0, longitude=0.0, place_name="Unknown")
        profile = self.graph.profile(country)
        return GeoLocation(
            latitude=profile.lat,
            longitude=profile.lng,
            place_name=country,
            country=country,
            region=profile.region,
        )
