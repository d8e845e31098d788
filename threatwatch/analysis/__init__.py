"""ThreatWatch analysis package.

Pure analytical functions only. No I/O, no API calls, no side effects.
All functions operate on typed models from threatwatch.models.
"""

from threatwatch.analysis.cascade_estimator import (
    CascadeEstimator,
    RandomSource,
    SystemRandomSource,
)
from threatwatch.analysis.cascade_payload import (
    CASCADE_OUTPUT_SCHEMA,
    build_analysis_from_payload,
    parse_external_payload,
)
from threatwatch.analysis.classifier import (
    classify_category,
    classify_threat_level,
    score_categories,
)
from threatwatch.analysis.event_assembler import (
    assemble_event,
    dedupe_by_title,
    generate_event_id,
    is_unresolved_location,
    sort_by_recency,
)
from threatwatch.analysis.extractor import extract_entities, extract_keywords
from threatwatch.analysis.geocoder import GazetteerGeocoder
from threatwatch.analysis.query_builder import CascadeQueryBuilder
from threatwatch.analysis.relationship_graph import RelationshipGraph, load_relationship_graph

__all__ = [
    "CascadeEstimator",
    "RandomSource",
    "SystemRandomSource",
    "CASCADE_OUTPUT_SCHEMA",
    "build_analysis_from_payload",
    "parse_external_payload",
    "classify_category",
    "classify_threat_level",
    "score_categories",
    "assemble_event",
    "dedupe_by_title",
    "generate_event_id",
    "is_unresolved_location",
    "sort_by_recency",
    "extract_entities",
    "extract_keywords",
    "GazetteerGeocoder",
    "CascadeQueryBuilder",
    "RelationshipGraph",
    "load_relationship_graph",
]
