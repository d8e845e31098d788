"""Cascade-effect data models for ThreatWatch.

Defines the impact-type vocabulary, per-country CascadeEffect, the complete
CascadeAnalysis returned to the dashboard, and the intermediate
StructuredCascade parsed from an answer provider's structured output.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from threatwatch.models.events import ThreatEvent


class ImpactType:
    """Kinds of downstream impact a cascade effect can carry."""

    ECONOMIC = "economic"
    MILITARY = "military"
    POLITICAL = "political"
    HUMANITARIAN = "humanitarian"
    SOCIAL = "social"

    ALL: Tuple[str, ...] = (ECONOMIC, MILITARY, POLITICAL, HUMANITARIAN, SOCIAL)


@dataclass
class CascadeEffect:
    """Estimated knock-on effect of a source event on one country."""

    id: str
    target_country: str
    target_country_code: str
    latitude: float
    longitude: float
    probability: int          # 0–100
    timeframe_hours: int      # > 0
    impact_type: str          # one of ImpactType.ALL
    description: str
    factors: List[str] = field(default_factory=list)
    rank_delay: int = 0       # Animation stagger in ms, reassigned after ranking

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "targetCountry": self.target_country,
            "targetCountryCode": self.target_country_code,
            "latitude": self.latitude,
            "longitude": self.longitude,
            "probability": self.probability,
            "timeframeHours": self.timeframe_hours,
            "impactType": self.impact_type,
            "description": self.description,
            "factors": list(self.factors),
            "delay": self.rank_delay,
        }


@dataclass
class CascadeAnalysis:
    """Ranked cascade effects for one source event."""

    source_event: ThreatEvent
    effects: List[CascadeEffect] = field(default_factory=list)   # probability descending
    summary: str = ""
    total_affected_countries: int = 0
    high_risk_count: int = 0
    generated_at: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "sourceEvent": self.source_event.to_dict(),
            "effects": [e.to_dict() for e in self.effects],
            "summary": self.summary,
            "totalAffectedCountries": self.total_affected_countries,
            "highRiskCount": self.high_risk_count,
            "generatedAt": self.generated_at,
        }


@dataclass
class ExternalCascadeEffect:
    """One affected country as reported by the answer provider's structured output."""

    country: str
    probability: int
    timeframe_hours: int
    impact_type: str
    description: str = ""
    factors: List[str] = field(default_factory=list)


@dataclass
class StructuredCascade:
    """Validated structured cascade payload from the answer provider."""

    effects: List[ExternalCascadeEffect] = field(default_factory=list)
    summary: Optional[str] = None
