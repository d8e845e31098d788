"""Unit tests for threatwatch.analysis.geocoder.

Covers:
- GazetteerGeocoder.find_country: names, aliases, whole-word and case rules
- GazetteerGeocoder.geocode: title precedence, coordinates, (0, 0) sentinel
"""

from __future__ import annotations

import pytest

from threatwatch.analysis.geocoder import GazetteerGeocoder


@pytest.fixture(scope="module")
def geocoder():
    from threatwatch.analysis.relationship_graph import load_relationship_graph

    return GazetteerGeocoder(load_relationship_graph())


# ── find_country ──────────────────────────────────────────────────────────────────

class TestFindCountry:
    def test_canonical_name(self, geocoder):
        """A canonical country name resolves to itself."""
        assert geocoder.find_country("Flooding across Nigeria displaces thousands") == "Nigeria"

    def test_multi_word_name(self, geocoder):
        """Multi-word names resolve whole."""
        assert geocoder.find_country("Drills near South Korea") == "South Korea"

    def test_capital_alias(self, geocoder):
        """Capitals map to their country."""
        assert geocoder.find_country("Missile strike hits Kyiv suburbs") == "Ukraine"

    def test_demonym_alias(self, geocoder):
        """Demonyms map to their country."""
        assert geocoder.find_country("Iranian officials deny report") == "Iran"

    def test_abbreviation_with_dots(self, geocoder):
        """'U.S.' resolves to the United States."""
        assert geocoder.find_country("The U.S. Navy deployed a carrier") == "United States"

    def test_earliest_mention_wins(self, geocoder):
        """The first name in the text decides."""
        assert geocoder.find_country("Talks in Paris with German officials") == "France"

    def test_case_sensitive(self, geocoder):
        """Lower-case common nouns do not resolve."""
        assert geocoder.find_country("Roast turkey on fine china") is None

    def test_whole_word_only(self, geocoder):
        """Names embedded in longer words do not resolve."""
        assert geocoder.find_country("Storms batter Indiana farms") is None

    def test_empty_text(self, geocoder):
        """Empty or None text resolves to nothing."""
        assert geocoder.find_country("") is None
        assert geocoder.find_country(None) is None


class TestCustomAliases:
    def test_custom_alias_map(self, small_graph):
        """Caller-supplied aliases replace the defaults."""
        geocoder = GazetteerGeocoder(small_graph, aliases={"Alphan": "Alpha"})
        assert geocoder.find_country("Alphan troops mobilize") == "Alpha"
        assert geocoder.find_country("Kyiv") is None

    def test_alias_to_unprofiled_country_ignored(self, small_graph):
        """Aliases pointing at countries without a profile are dropped."""
        geocoder = GazetteerGeocoder(small_graph, aliases={"Ghostly": "Ghost"})
        assert geocoder.find_country("Ghostly lights seen") is None

    def test_no_aliases(self, small_graph):
        """Canonical names still work with an empty alias map."""
        geocoder = GazetteerGeocoder(small_graph, aliases={})
        assert geocoder.find_country("Unrest in Gamma") == "Gamma"


# ── geocode ───────────────────────────────────────────────────────────────────────

class TestGeocode:
    def test_resolved_location(self, geocoder):
        """A resolved location carries profile coordinates and region."""
        location = geocoder.geocode("Shelling near Kyiv overnight")
        assert location.country == "Ukraine"
        assert location.place_name == "Ukraine"
        assert location.region == "Eastern Europe"
        assert (location.latitude, location.longitude) == (48.3794, 31.1656)
        assert not location.is_unresolved

    def test_title_takes_precedence(self, geocoder):
        """A country in the title beats an earlier mention in the body text."""
        location = geocoder.geocode(
            "Moscow responds. Polish farmers protest grain imports",
            title="Polish farmers protest grain imports",
        )
        assert location.country == "Poland"

    def test_falls_back_to_text(self, geocoder):
        """A title naming no country falls back to the full text."""
        location = geocoder.geocode("Talks stall. Officials in Cairo met", title="Talks stall")
        assert location.country == "Egypt"

    def test_unresolved_sentinel(self, geocoder):
        """Text naming no known country resolves to (0, 0)."""
        location = geocoder.geocode("Local bakery opens new branch")
        assert location.is_unresolved
        assert location.place_name == "Unknown"
        assert location.country is None
