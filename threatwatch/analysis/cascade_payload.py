"""Structured cascade output from the answer provider.

When the cascade flow runs in "structured" mode the answer provider is asked
to fill CASCADE_OUTPUT_SCHEMA itself. The provider's ``contents`` may come
back as a JSON string (sometimes wrapped in markdown fences) or as an
already-decoded object. parse_external_payload() accepts both and raises
ParseError for anything else; it never guesses a default.

build_analysis_from_payload() maps the validated payload onto the
relationship graph and produces the same CascadeAnalysis shape the
heuristic estimator returns.
"""

from __future__ import annotations

import json
import logging
import math
import re
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional

from config.defaults import (
    CASCADE_HIGH_RISK_THRESHOLD,
    CASCADE_RANK_DELAY_STEP,
    CASCADE_SUMMARY_TOP_N,
)
from threatwatch.analysis.cascade_estimator import (
    UNKNOWN_COUNTRY,
    count_high_risk,
    new_effect_id,
    rank_effects,
    summarize_effects,
)
from threatwatch.analysis.relationship_graph import RelationshipGraph
from threatwatch.analysis.taxonomy import DEFAULT_CATEGORY
from threatwatch.exceptions import ParseError
from threatwatch.models.cascade import (
    CascadeAnalysis,
    CascadeEffect,
    ExternalCascadeEffect,
    ImpactType,
    StructuredCascade,
)
from threatwatch.models.events import ThreatEvent
from threatwatch.utils.date_utils import to_iso

logger = logging.getLogger(__name__)

CASCADE_OUTPUT_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "summary": {"type": "string"},
        "effects": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "country": {"type": "string"},
                    "probability": {"type": "number", "minimum": 0, "maximum": 100},
                    "timeframe_hours": {"type": "number", "exclusiveMinimum": 0},
                    "impact_type": {"type": "string", "enum": list(ImpactType.ALL)},
                    "description": {"type": "string"},
                    "factors": {"type": "array", "items": {"type": "string"}},
                },
                "required": ["country", "probability", "timeframe_hours", "impact_type"],
            },
        },
    },
    "required": ["effects"],
}

_FENCE_PATTERN = re.compile(r"```(?:json)?\s*")


def _decode_json_text(text: str) -> Any:
    """Decode a JSON object from provider text, tolerating markdown fences."""
    cleaned = _FENCE_PATTERN.sub("", text).strip().rstrip("`").strip()
    if not cleaned:
        raise ParseError("Structured cascade payload is empty", raw=text)
    try:
        return json.loads(cleaned)
    except json.JSONDecodeError:
        pass
    # Fall back to the outermost object boundaries
    start = cleaned.find("{")
    end = cleaned.rfind("}")
    if start != -1 and end > start:
        try:
            return json.loads(cleaned[start : end + 1])
        except json.JSONDecodeError as exc:
            raise ParseError(f"Structured cascade payload is not valid JSON: {exc}", raw=text) from exc
    raise ParseError("Structured cascade payload contains no JSON object", raw=text)


def _is_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def _parse_effect(item: Any, index: int, raw: Any) -> ExternalCascadeEffect:
    if not isinstance(item, dict):
        raise ParseError(f"effects[{index}] is not an object", raw=raw)

    country = item.get("country")
    if not isinstance(country, str) or not country.strip():
        raise ParseError(f"effects[{index}].country must be a non-empty string", raw=raw)

    probability = item.get("probability")
    if not _is_number(probability):
        raise ParseError(f"effects[{index}].probability must be a finite number", raw=raw)

    timeframe = item.get("timeframe_hours")
    if not _is_number(timeframe) or timeframe <= 0:
        raise ParseError(f"effects[{index}].timeframe_hours must be a positive finite number", raw=raw)

    impact_type = item.get("impact_type")
    if not isinstance(impact_type, str) or impact_type.lower() not in ImpactType.ALL:
        raise ParseError(
            f"effects[{index}].impact_type must be one of {', '.join(ImpactType.ALL)}", raw=raw
        )

    description = item.get("description") or ""
    if not isinstance(description, str):
        raise ParseError(f"effects[{index}].description must be a string", raw=raw)

    factors = item.get("factors") or []
    if not isinstance(factors, list) or not all(isinstance(f, str) for f in factors):
        raise ParseError(f"effects[{index}].factors must be a list of strings", raw=raw)

    return ExternalCascadeEffect(
        country=country.strip(),
        probability=int(min(100, max(0, round(probability)))),
        timeframe_hours=max(1, int(round(timeframe))),
        impact_type=impact_type.lower(),
        description=description.strip(),
        factors=list(factors),
    )


def parse_external_payload(raw: Any) -> StructuredCascade:
    """Validate the answer provider's structured cascade output.

    Args:
        raw: Either a JSON string (optionally fenced) or a decoded dict
            shaped like CASCADE_OUTPUT_SCHEMA.

    Returns:
        A validated StructuredCascade. ``effects`` may be empty.

    Raises:
        ParseError: If ``raw`` is neither form, or the decoded value does
            not match the schema. The error carries a preview of ``raw``.
    """
    if isinstance(raw, (str, bytes)):
        text = raw.decode("utf-8", errors="replace") if isinstance(raw, bytes) else raw
        data = _decode_json_text(text)
    elif isinstance(raw, dict):
        data = raw
    else:
        raise ParseError(
            f"Unsupported structured cascade payload type: {type(raw).__name__}", raw=raw
        )

    if not isinstance(data, dict):
        raise ParseError("Structured cascade payload must be a JSON object", raw=raw)

    effects = data.get("effects")
    if not isinstance(effects, list):
        raise ParseError("Structured cascade payload has no 'effects' list", raw=raw)

    summary = data.get("summary")
    if summary is not None and not isinstance(summary, str):
        raise ParseError("Structured cascade 'summary' must be a string", raw=raw)

    return StructuredCascade(
        effects=[_parse_effect(item, i, raw) for i, item in enumerate(effects)],
        summary=summary.strip() if summary and summary.strip() else None,
    )


def build_analysis_from_payload(
    source_event: ThreatEvent,
    structured: StructuredCascade,
    graph: RelationshipGraph,
    high_risk_threshold: int = CASCADE_HIGH_RISK_THRESHOLD,
    rank_delay_step: int = CASCADE_RANK_DELAY_STEP,
    summary_top_n: int = CASCADE_SUMMARY_TOP_N,
    clock: Optional[Callable[[], datetime]] = None,
) -> CascadeAnalysis:
    """Turn a validated provider payload into a ranked CascadeAnalysis.

    Countries without a profile cannot be placed on the map and are skipped.
    Probabilities and timeframes are taken from the payload as-is; ranking,
    rank delays and the high-risk count are recomputed locally.
    """
    source_country = source_event.location.country or UNKNOWN_COUNTRY
    category = source_event.category or DEFAULT_CATEGORY

    effects: List[CascadeEffect] = []
    seen = set()
    for index, external in enumerate(structured.effects):
        profile = graph.profile(external.country)
        if profile is None:
            logger.warning("Structured cascade: no profile for %r, skipping", external.country)
            continue
        if external.country == source_country or external.country in seen:
            continue
        seen.add(external.country)

        description = external.description or (
            f"{external.country} may experience {external.impact_type} effects."
        )
        effects.append(
            CascadeEffect(
                id=new_effect_id(index),
                target_country=external.country,
                target_country_code=profile.code,
                latitude=profile.lat,
                longitude=profile.lng,
                probability=external.probability,
                timeframe_hours=external.timeframe_hours,
                impact_type=external.impact_type,
                description=description,
                factors=list(external.factors),
            )
        )

    ranked = rank_effects(effects, rank_delay_step)
    high_risk = count_high_risk(ranked, high_risk_threshold)
    summary = structured.summary or summarize_effects(
        category, source_country, ranked, high_risk, high_risk_threshold, summary_top_n
    )
    now = clock() if clock is not None else datetime.now(timezone.utc)

    return CascadeAnalysis(
        source_event=source_event,
        effects=ranked,
        summary=summary,
        total_affected_countries=len(ranked),
        high_risk_count=high_risk,
        generated_at=to_iso(now),
    )
