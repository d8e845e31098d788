"""Search-provider and event-feed data models for ThreatWatch."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from threatwatch.models.events import ThreatEvent


@dataclass
class SearchResult:
    """One news result returned by the search provider."""

    title: str
    url: str
    content: str
    published_date: Optional[str] = None   # ISO 8601, normalized via date_utils
    source: Optional[str] = None


@dataclass
class EventFeed:
    """Output of the EventAgent: the deduplicated, newest-first event list."""

    events: List[ThreatEvent] = field(default_factory=list)
    timestamp: str = ""
    status: str = "OK"
    error: Optional[str] = None
    requires_reauth: bool = False
    dropped_unresolved: int = 0
    warnings: List[str] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.events)

    def to_dict(self) -> Dict[str, Any]:
        if self.error:
            data: Dict[str, Any] = {"error": self.error}
            if self.requires_reauth:
                data["requiresReauth"] = True
            return data
        return {
            "events": [e.to_dict() for e in self.events],
            "count": self.count,
            "timestamp": self.timestamp,
        }
