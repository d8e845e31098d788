"""Unit tests for threatwatch.analysis.cascade_payload.

Covers:
- parse_external_payload: JSON string, fenced JSON, decoded dict, bytes
- Schema violations raise ParseError with a raw-payload preview
- build_analysis_from_payload: graph mapping, skips, ranking, summaries
"""

from __future__ import annotations

import json

import pytest

from threatwatch.analysis.cascade_payload import (
    CASCADE_OUTPUT_SCHEMA,
    build_analysis_from_payload,
    parse_external_payload,
)
from threatwatch.exceptions import ParseError
from threatwatch.models.cascade import ImpactType, StructuredCascade


def _payload(**overrides):
    effect = {
        "country": "Beta",
        "probability": 72.4,
        "timeframe_hours": 36,
        "impact_type": "Military",
        "description": "Border crossings close.",
        "factors": ["Neighboring country"],
    }
    effect.update(overrides)
    return {"summary": "Spillover expected.", "effects": [effect]}


# ── parse_external_payload ────────────────────────────────────────────────────────

class TestParseExternalPayload:
    def test_dict_payload(self):
        """An already-decoded dict must be accepted and normalized."""
        structured = parse_external_payload(_payload())
        assert structured.summary == "Spillover expected."
        effect = structured.effects[0]
        assert effect.country == "Beta"
        assert effect.probability == 72
        assert effect.timeframe_hours == 36
        assert effect.impact_type == ImpactType.MILITARY
        assert effect.factors == ["Neighboring country"]

    def test_json_string_payload(self):
        """A JSON string must be decoded."""
        structured = parse_external_payload(json.dumps(_payload()))
        assert structured.effects[0].country == "Beta"

    def test_fenced_json_payload(self):
        """Markdown code fences around the JSON must be tolerated."""
        text = "```json\n" + json.dumps(_payload()) + "\n```"
        assert parse_external_payload(text).effects[0].country == "Beta"

    def test_json_embedded_in_prose(self):
        """The outermost object is recovered from surrounding prose."""
        text = "Here is the analysis: " + json.dumps(_payload()) + " Hope this helps."
        assert parse_external_payload(text).effects[0].country == "Beta"

    def test_bytes_payload(self):
        """UTF-8 bytes must be decoded like a string."""
        raw = json.dumps(_payload()).encode("utf-8")
        assert parse_external_payload(raw).effects[0].country == "Beta"

    def test_probability_clamped_and_rounded(self):
        """Probabilities outside 0..100 are clamped after rounding."""
        assert parse_external_payload(_payload(probability=140)).effects[0].probability == 100
        assert parse_external_payload(_payload(probability=-3)).effects[0].probability == 0

    def test_fractional_timeframe_at_least_one(self):
        """Tiny positive timeframes round up to one hour."""
        assert parse_external_payload(_payload(timeframe_hours=0.2)).effects[0].timeframe_hours == 1

    def test_empty_effects_list_is_valid(self):
        """A payload with no effects is valid; the summary becomes None when blank."""
        structured = parse_external_payload({"effects": [], "summary": "  "})
        assert structured.effects == []
        assert structured.summary is None

    def test_optional_fields_default(self):
        """Missing description and factors default to empty."""
        payload = _payload()
        del payload["effects"][0]["description"]
        del payload["effects"][0]["factors"]
        effect = parse_external_payload(payload).effects[0]
        assert effect.description == ""
        assert effect.factors == []

    def test_schema_lists_every_impact_type(self):
        """The request schema enumerates the accepted impact types."""
        items = CASCADE_OUTPUT_SCHEMA["properties"]["effects"]["items"]
        assert items["properties"]["impact_type"]["enum"] == list(ImpactType.ALL)


class TestParseErrors:
    @pytest.mark.parametrize(
        "raw",
        [
            "",
            "not json at all",
            "{broken json",
            "[1, 2, 3]",
            42,
            None,
            ["effects"],
            '{"effects": [{"country": "Beta", "probability": NaN, "timeframe_hours": 24, "impact_type": "military"}]}',
            '{"effects": [{"country": "Beta", "probability": 50, "timeframe_hours": Infinity, "impact_type": "military"}]}',
        ],
    )
    def test_unreadable_payloads(self, raw):
        """Non-objects and non-finite numbers raise ParseError."""
        with pytest.raises(ParseError):
            parse_external_payload(raw)

    def test_missing_effects(self):
        """A payload without an effects list raises ParseError."""
        with pytest.raises(ParseError, match="effects"):
            parse_external_payload({"summary": "x"})

    @pytest.mark.parametrize(
        "overrides",
        [
            {"country": ""},
            {"country": 12},
            {"probability": "high"},
            {"probability": True},
            {"timeframe_hours": 0},
            {"timeframe_hours": None},
            {"probability": float("inf")},
            {"probability": float("nan")},
            {"timeframe_hours": float("-inf")},
            {"impact_type": "cultural"},
            {"description": 5},
            {"factors": "Neighboring country"},
            {"factors": [1, 2]},
        ],
    )
    def test_invalid_effect_fields(self, overrides):
        """Each malformed effect field raises ParseError."""
        with pytest.raises(ParseError):
            parse_external_payload(_payload(**overrides))

    def test_non_string_summary(self):
        """A non-string summary raises ParseError."""
        with pytest.raises(ParseError, match="summary"):
            parse_external_payload({"effects": [], "summary": ["a"]})

    def test_error_carries_preview(self):
        """ParseError keeps a bounded preview of the raw payload."""
        raw = "x" * 2000
        with pytest.raises(ParseError) as exc_info:
            parse_external_payload(raw)
        assert exc_info.value.raw_preview == "x" * 500


# ── build_analysis_from_payload ───────────────────────────────────────────────────

class TestBuildAnalysisFromPayload:
    def test_effects_mapped_onto_graph(self, small_graph, event_factory, fixed_clock):
        """Known countries take coordinates and codes from the graph."""
        structured = parse_external_payload(_payload())
        analysis = build_analysis_from_payload(
            event_factory(country="Alpha"), structured, small_graph, clock=fixed_clock
        )

        effect = analysis.effects[0]
        assert effect.target_country == "Beta"
        assert effect.target_country_code == "BB"
        assert (effect.latitude, effect.longitude) == (11.0, 21.0)
        assert effect.probability == 72
        assert effect.description == "Border crossings close."
        assert analysis.summary == "Spillover expected."
        assert analysis.high_risk_count == 1
        assert analysis.generated_at == "2024-01-15T12:00:00.000Z"

    def test_unknown_source_and_duplicate_countries_skipped(self, small_graph, event_factory):
        """Unprofiled countries, the source itself, and repeats are dropped."""
        structured = parse_external_payload({
            "effects": [
                {"country": "Atlantis", "probability": 90, "timeframe_hours": 5, "impact_type": "social"},
                {"country": "Alpha", "probability": 80, "timeframe_hours": 5, "impact_type": "social"},
                {"country": "Gamma", "probability": 40, "timeframe_hours": 5, "impact_type": "economic"},
                {"country": "Gamma", "probability": 99, "timeframe_hours": 5, "impact_type": "economic"},
                {"country": "Delta", "probability": 65, "timeframe_hours": 5, "impact_type": "political"},
            ],
        })
        analysis = build_analysis_from_payload(event_factory(country="Alpha"), structured, small_graph)

        assert [(e.target_country, e.probability) for e in analysis.effects] == [
            ("Delta", 65),
            ("Gamma", 40),
        ]
        assert [e.rank_delay for e in analysis.effects] == [0, 150]
        assert analysis.total_affected_countries == 2

    def test_default_description_and_summary(self, small_graph, event_factory):
        """Blank descriptions and summaries are filled from templates."""
        structured = StructuredCascade(effects=parse_external_payload(
            _payload(description="", probability=30)
        ).effects)
        analysis = build_analysis_from_payload(
            event_factory(country="Alpha", category="protest"), structured, small_graph
        )

        assert analysis.effects[0].description == "Beta may experience military effects."
        assert analysis.high_risk_count == 0
        assert analysis.summary == (
            "This protest event in Alpha could potentially cascade to 1 countries. "
            "0 countries face high probability (60%+) of being affected. "
            "Primary impact vectors include military effects."
        )

    def test_no_usable_effects(self, small_graph, event_factory):
        """A payload naming no mappable country yields an empty analysis."""
        structured = parse_external_payload({"effects": []})
        analysis = build_analysis_from_payload(event_factory(country="Alpha"), structured, small_graph)

        assert analysis.effects == []
        assert analysis.summary.startswith("No country-level cascade correlations")
