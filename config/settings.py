"""ThreatWatch — PipelineConfig and environment-based configuration loading.

All runtime configuration flows through PipelineConfig. No module-level globals,
no hard-coded values. API keys come exclusively from environment variables.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from dotenv import load_dotenv

from config.defaults import (
    ANSWER_REQUEST_TIMEOUT,
    CASCADE_ALLIANCE_BONUS,
    CASCADE_BASE_PROBABILITY,
    CASCADE_DISTANT_TIMEFRAME,
    CASCADE_EXCLUDED_SOURCES,
    CASCADE_HIGH_RISK_THRESHOLD,
    CASCADE_JITTER_MIN,
    CASCADE_JITTER_SPAN,
    CASCADE_MAX_CANDIDATES,
    CASCADE_MAX_ECONOMIC_PARTNERS,
    CASCADE_NEIGHBOR_BONUS,
    CASCADE_NEIGHBOR_TIMEFRAME,
    CASCADE_PARTNER_BONUS,
    CASCADE_PROBABILITY_CEILING,
    CASCADE_PROBABILITY_FLOOR,
    CASCADE_RANK_DELAY_STEP,
    CASCADE_SUMMARY_TOP_N,
    DEFAULT_LOG_LEVEL,
    DEFAULT_QUERY_COUNT,
    EVENT_MAX_WORKERS,
    EVENTS_MAX_QUERIES,
    MAX_KEYWORDS,
    OUTPUT_ROOT,
    SEARCH_MAX_RESULTS,
    SEARCH_REQUEST_TIMEOUT,
    SEARCH_SINGLE_QUERY_MAX_RESULTS,
    SUMMARY_MAX_CHARS,
    THREAT_QUERIES,
    VALYU_BASE_URL,
)

# Load .env file if present; silently skip if missing
load_dotenv()


@dataclass
class CascadeWeights:
    """Relationship bonuses and clamp bounds for cascade probability scoring."""

    base: int = CASCADE_BASE_PROBABILITY
    neighbor: int = CASCADE_NEIGHBOR_BONUS
    partner: int = CASCADE_PARTNER_BONUS
    alliance: int = CASCADE_ALLIANCE_BONUS
    jitter_min: int = CASCADE_JITTER_MIN
    jitter_span: int = CASCADE_JITTER_SPAN
    floor: int = CASCADE_PROBABILITY_FLOOR
    ceiling: int = CASCADE_PROBABILITY_CEILING
    high_risk_threshold: int = CASCADE_HIGH_RISK_THRESHOLD

    def __post_init__(self) -> None:
        if self.floor > self.ceiling:
            raise ValueError(
                f"CascadeWeights floor ({self.floor}) exceeds ceiling ({self.ceiling})"
            )
        if self.jitter_span <= 0:
            raise ValueError(f"CascadeWeights jitter_span must be positive, got {self.jitter_span}")


@dataclass
class PipelineConfig:
    """Single configuration object threaded through all pipeline agents.

    All tuneable thresholds, API keys, and file paths live here.
    Never use module-level globals or hard-coded values in agent code.
    """

    # ── Feed queries ───────────────────────────────────────────────────────────
    queries: List[str] = field(default_factory=list)
    threat_queries: Tuple[str, ...] = THREAT_QUERIES
    default_query_count: int = DEFAULT_QUERY_COUNT
    events_max_queries: int = EVENTS_MAX_QUERIES
    search_max_results: int = SEARCH_MAX_RESULTS
    search_single_query_max_results: int = SEARCH_SINGLE_QUERY_MAX_RESULTS
    event_max_workers: int = EVENT_MAX_WORKERS

    # ── Search / answer provider ──────────────────────────────────────────────
    valyu_api_key: Optional[str] = field(default_factory=lambda: os.getenv("VALYU_API_KEY"))
    valyu_base_url: str = field(
        default_factory=lambda: os.getenv("VALYU_BASE_URL", VALYU_BASE_URL)
    )
    search_request_timeout: int = SEARCH_REQUEST_TIMEOUT
    answer_request_timeout: int = ANSWER_REQUEST_TIMEOUT
    cascade_excluded_sources: Tuple[str, ...] = CASCADE_EXCLUDED_SOURCES

    # ── Event assembly ─────────────────────────────────────────────────────────
    summary_max_chars: int = SUMMARY_MAX_CHARS
    max_keywords: int = MAX_KEYWORDS

    # ── Cascade estimation ─────────────────────────────────────────────────────
    cascade_mode: str = "heuristic"   # "heuristic" or "structured"
    cascade_weights: CascadeWeights = field(default_factory=CascadeWeights)
    cascade_max_candidates: int = CASCADE_MAX_CANDIDATES
    cascade_max_economic_partners: int = CASCADE_MAX_ECONOMIC_PARTNERS
    cascade_neighbor_timeframe: Tuple[int, int] = CASCADE_NEIGHBOR_TIMEFRAME
    cascade_distant_timeframe: Tuple[int, int] = CASCADE_DISTANT_TIMEFRAME
    cascade_rank_delay_step: int = CASCADE_RANK_DELAY_STEP
    cascade_summary_top_n: int = CASCADE_SUMMARY_TOP_N

    # Optional YAML file replacing the built-in country relationship table
    country_profiles_path: Optional[str] = field(
        default_factory=lambda: os.getenv("COUNTRY_PROFILES_PATH") or None
    )

    # ── Output and logging ─────────────────────────────────────────────────────
    output_root: str = field(default_factory=lambda: os.getenv("OUTPUT_ROOT", OUTPUT_ROOT))
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", DEFAULT_LOG_LEVEL))

    def __post_init__(self) -> None:
        self.cascade_mode = self.cascade_mode.lower()
        if self.cascade_mode not in ("heuristic", "structured"):
            raise ValueError(f"Unknown cascade_mode {self.cascade_mode!r}")
        # Cap caller-supplied queries to the configured maximum
        if len(self.queries) > self.events_max_queries:
            self.queries = list(self.queries[: self.events_max_queries])

    def effective_queries(self) -> List[str]:
        """Return the queries a feed refresh should run."""
        if self.queries:
            return list(self.queries)
        return list(self.threat_queries[: self.default_query_count])

    def results_per_query(self) -> int:
        """Single ad-hoc queries fetch fewer results than batch refreshes."""
        if len(self.queries) == 1:
            return self.search_single_query_max_results
        return self.search_max_results
