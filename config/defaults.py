"""ThreatWatch — All default threshold values and configuration constants.

All tuneable values live here. Never hard-code magic numbers in source files.
Import constants from this module; override via PipelineConfig at runtime.
"""

from typing import Tuple

# ── Event assembly ─────────────────────────────────────────────────────────────
# Maximum characters of normalized content kept as the event summary
SUMMARY_MAX_CHARS: int = 500

# Maximum keywords attached to a single event
MAX_KEYWORDS: int = 10

# Characters of an unparseable external payload echoed back in ParseError
PARSE_ERROR_PREVIEW_CHARS: int = 500

# ── Cascade scoring ────────────────────────────────────────────────────────────
# Starting score for every cascade candidate
CASCADE_BASE_PROBABILITY: int = 30

# Score bonuses per relationship with the source country
CASCADE_NEIGHBOR_BONUS: int = 40
CASCADE_PARTNER_BONUS: int = 20
CASCADE_ALLIANCE_BONUS: int = 15

# Integer jitter drawn uniformly from [JITTER_MIN, JITTER_MIN + JITTER_SPAN)
CASCADE_JITTER_MIN: int = -10
CASCADE_JITTER_SPAN: int = 20

# Final probability clamp
CASCADE_PROBABILITY_FLOOR: int = 15
CASCADE_PROBABILITY_CEILING: int = 95

# Effects at or above this probability count as high risk
CASCADE_HIGH_RISK_THRESHOLD: int = 60

# ── Cascade candidate selection ────────────────────────────────────────────────
# Hard cap on candidates considered per analysis
CASCADE_MAX_CANDIDATES: int = 12

# Leading economic partners of the source country added as candidates
CASCADE_MAX_ECONOMIC_PARTNERS: int = 5

# Timeframe windows in hours as (start, span): draws fall in [start, start + span)
CASCADE_NEIGHBOR_TIMEFRAME: Tuple[int, int] = (24, 48)
CASCADE_DISTANT_TIMEFRAME: Tuple[int, int] = (72, 168)

# Milliseconds between successive ranked effects (map animation staggering)
CASCADE_RANK_DELAY_STEP: int = 150

# Number of top-ranked effects whose impact types are cited in the summary
CASCADE_SUMMARY_TOP_N: int = 5

# ── Search / answer provider ───────────────────────────────────────────────────
VALYU_BASE_URL: str = "https://api.valyu.ai"

# HTTP request timeout (seconds) for a search call
SEARCH_REQUEST_TIMEOUT: int = 30

# Answer calls run a model server-side and take longer
ANSWER_REQUEST_TIMEOUT: int = 90

# Results requested per query for batch (multi-query) feed refreshes
SEARCH_MAX_RESULTS: int = 15

# Results requested when a single ad-hoc query is supplied
SEARCH_SINGLE_QUERY_MAX_RESULTS: int = 10

# Maximum caller-supplied queries honoured per feed refresh
EVENTS_MAX_QUERIES: int = 5

# Built-in queries used when none are supplied (first DEFAULT_QUERY_COUNT)
THREAT_QUERIES: Tuple[str, ...] = (
    "breaking news conflict military",
    "geopolitical crisis tensions",
    "protest demonstration unrest",
    "natural disaster emergency",
    "terrorism attack security",
    "cyber attack breach",
    "diplomatic summit sanctions",
)
DEFAULT_QUERY_COUNT: int = 3

# Sources excluded from cascade answer calls
CASCADE_EXCLUDED_SOURCES: Tuple[str, ...] = ("wikipedia.org",)

# Concurrent workers used for search fan-out and per-result assembly
EVENT_MAX_WORKERS: int = 4

# ── Output and logging ─────────────────────────────────────────────────────────
OUTPUT_ROOT: str = "outputs/runs"
DEFAULT_LOG_LEVEL: str = "INFO"
