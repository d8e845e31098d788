"""ThreatWatch configuration package."""

from config.defaults import (
    CASCADE_HIGH_RISK_THRESHOLD,
    CASCADE_MAX_CANDIDATES,
    DEFAULT_LOG_LEVEL,
    MAX_KEYWORDS,
    OUTPUT_ROOT,
    SUMMARY_MAX_CHARS,
    THREAT_QUERIES,
    VALYU_BASE_URL,
)
from config.settings import CascadeWeights, PipelineConfig

__all__ = [
    "PipelineConfig",
    "CascadeWeights",
    "SUMMARY_MAX_CHARS",
    "MAX_KEYWORDS",
    "CASCADE_MAX_CANDIDATES",
    "CASCADE_HIGH_RISK_THRESHOLD",
    "THREAT_QUERIES",
    "VALYU_BASE_URL",
    "OUTPUT_ROOT",
    "DEFAULT_LOG_LEVEL",
]
