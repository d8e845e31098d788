"""ThreatWatch data models package.

All pipeline inputs and outputs are typed dataclasses defined here.
Never return raw Dict from analysis or agent code; serialize with to_dict().
"""

from threatwatch.models.cascade import (
    CascadeAnalysis,
    CascadeEffect,
    ExternalCascadeEffect,
    ImpactType,
    StructuredCascade,
)
from threatwatch.models.countries import CountryProfile
from threatwatch.models.events import EventCategory, GeoLocation, ThreatEvent, ThreatLevel
from threatwatch.models.pipeline import CascadeAgentResult, PhaseRecord, PipelineContext
from threatwatch.models.search import EventFeed, SearchResult

__all__ = [
    # events
    "EventCategory",
    "ThreatLevel",
    "GeoLocation",
    "ThreatEvent",
    # countries
    "CountryProfile",
    # cascade
    "ImpactType",
    "CascadeEffect",
    "CascadeAnalysis",
    "ExternalCascadeEffect",
    "StructuredCascade",
    # search
    "SearchResult",
    "EventFeed",
    # pipeline
    "PipelineContext",
    "PhaseRecord",
    "CascadeAgentResult",
]
