"""Threat event data models for ThreatWatch.

Defines the category and threat-level vocabularies, GeoLocation, and the
canonical ThreatEvent produced by the event assembler. Events are frozen
after construction.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple


class EventCategory:
    """Event categories in canonical order.

    Order matters: the category classifier resolves score ties in favour of
    the category declared first, and CONFLICT is the no-match fallback.
    """

    CONFLICT = "conflict"
    PROTEST = "protest"
    DISASTER = "disaster"
    DIPLOMATIC = "diplomatic"
    ECONOMIC = "economic"
    TERRORISM = "terrorism"
    CYBER = "cyber"
    HEALTH = "health"
    ENVIRONMENTAL = "environmental"
    MILITARY = "military"
    CRIME = "crime"
    PIRACY = "piracy"
    INFRASTRUCTURE = "infrastructure"
    COMMODITIES = "commodities"

    ALL: Tuple[str, ...] = (
        CONFLICT,
        PROTEST,
        DISASTER,
        DIPLOMATIC,
        ECONOMIC,
        TERRORISM,
        CYBER,
        HEALTH,
        ENVIRONMENTAL,
        MILITARY,
        CRIME,
        PIRACY,
        INFRASTRUCTURE,
        COMMODITIES,
    )


class ThreatLevel:
    """Threat levels in fixed priority order (most severe first)."""

    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
    INFO = "info"

    ALL: Tuple[str, ...] = (CRITICAL, HIGH, MEDIUM, LOW, INFO)


@dataclass(frozen=True)
class GeoLocation:
    """A resolved point on the map. (0, 0) marks an unresolved location."""

    latitude: float
    longitude: float
    place_name: Optional[str] = None
    country: Optional[str] = None
    region: Optional[str] = None

    @property
    def is_unresolved(self) -> bool:
        return self.latitude == 0 and self.longitude == 0

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"latitude": self.latitude, "longitude": self.longitude}
        if self.place_name is not None:
            data["placeName"] = self.place_name
        if self.country is not None:
            data["country"] = self.country
        if self.region is not None:
            data["region"] = self.region
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GeoLocation":
        return cls(
            latitude=float(data.get("latitude", 0.0)),
            longitude=float(data.get("longitude", 0.0)),
            place_name=data.get("placeName"),
            country=data.get("country"),
            region=data.get("region"),
        )


@dataclass(frozen=True)
class ThreatEvent:
    """A single map-plotted threat event built from one search result."""

    id: str
    title: str
    summary: str
    category: str          # one of EventCategory.ALL
    threat_level: str      # one of ThreatLevel.ALL
    location: GeoLocation
    timestamp: str         # ISO 8601
    source: str
    source_url: Optional[str] = None
    entities: List[str] = field(default_factory=list)
    keywords: List[str] = field(default_factory=list)
    raw_content: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize with the camelCase keys the dashboard consumes."""
        data: Dict[str, Any] = {
            "id": self.id,
            "title": self.title,
            "summary": self.summary,
            "category": self.category,
            "threatLevel": self.threat_level,
            "location": self.location.to_dict(),
            "timestamp": self.timestamp,
            "source": self.source,
            "entities": list(self.entities),
            "keywords": list(self.keywords),
        }
        if self.source_url is not None:
            data["sourceUrl"] = self.source_url
        if self.raw_content is not None:
            data["rawContent"] = self.raw_content
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ThreatEvent":
        """Rebuild an event posted back by a client (e.g. a cascade request)."""
        return cls(
            id=str(data.get("id", "")),
            title=str(data.get("title", "")),
            summary=str(data.get("summary", "")),
            category=data.get("category") or EventCategory.CONFLICT,
            threat_level=data.get("threatLevel") or ThreatLevel.MEDIUM,
            location=GeoLocation.from_dict(data.get("location") or {}),
            timestamp=str(data.get("timestamp", "")),
            source=str(data.get("source", "")),
            source_url=data.get("sourceUrl"),
            entities=list(data.get("entities") or []),
            keywords=list(data.get("keywords") or []),
            raw_content=data.get("rawContent"),
        )
