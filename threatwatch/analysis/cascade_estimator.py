"""Heuristic cascade-effect estimation for ThreatWatch.

Given a source ThreatEvent and free-text analysis of it, estimates which
other countries the event is likely to affect, how likely, how soon, and in
what way. Candidates come from the source country's declared neighbors, its
leading economic partners, and any profiled country named in the analysis
text. Each candidate's probability is a relationship score plus integer
jitter, clamped; timeframes are drawn from neighbor/distant windows.

Jitter and timeframes are intentionally random, so repeated runs on the same
input differ. All randomness flows through an injected RandomSource so tests
can replay a fixed sequence and assert exact outputs.

No I/O; completes in O(candidates) graph lookups.
"""

from __future__ import annotations

import logging
import math
import random
import time
import uuid
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Callable, List, Optional, Sequence, Tuple

from config.defaults import (
    CASCADE_DISTANT_TIMEFRAME,
    CASCADE_MAX_CANDIDATES,
    CASCADE_MAX_ECONOMIC_PARTNERS,
    CASCADE_NEIGHBOR_TIMEFRAME,
    CASCADE_RANK_DELAY_STEP,
    CASCADE_SUMMARY_TOP_N,
)
from config.settings import CascadeWeights, PipelineConfig
from threatwatch.analysis.relationship_graph import RelationshipGraph
from threatwatch.analysis.taxonomy import DEFAULT_CATEGORY, impact_types_for
from threatwatch.models.cascade import CascadeAnalysis, CascadeEffect
from threatwatch.models.events import ThreatEvent
from threatwatch.utils.date_utils import to_iso

logger = logging.getLogger(__name__)

FACTOR_NEIGHBOR = "Neighboring country"
FACTOR_TRADE_PARTNER = "Major trade partner"
FACTOR_ALLIANCE = "Alliance member"
FACTOR_SAME_REGION = "Same region"

UNKNOWN_COUNTRY = "Unknown"


# ── Random sources ────────────────────────────────────────────────────────────

class RandomSource(ABC):
    """Source of uniform floats in [0, 1) used for jitter and timeframe draws."""

    @abstractmethod
    def next(self) -> float:
        """Return the next float in [0, 1)."""


class SystemRandomSource(RandomSource):
    """RandomSource backed by ``random.Random``; pass a seed for reproducible runs."""

    def __init__(self, seed: Optional[int] = None) -> None:
        self._random = random.Random(seed)

    def next(self) -> float:
        return self._random.random()


def draw_int(source: RandomSource, start: int, span: int) -> int:
    """Draw an integer uniformly from [start, start + span)."""
    offset = int(math.floor(source.next() * span))
    return start + min(max(offset, 0), span - 1)


# ── Ranking helpers (shared with the structured-payload variant) ──────────────

def rank_effects(effects: Sequence[CascadeEffect], step: int = CASCADE_RANK_DELAY_STEP) -> List[CascadeEffect]:
    """Sort effects by probability, highest first, and reassign rank delays.

    The sort is stable: equal probabilities keep their incoming order.
    """
    ranked = sorted(effects, key=lambda e: e.probability, reverse=True)
    for index, effect in enumerate(ranked):
        effect.rank_delay = index * step
    return ranked


def count_high_risk(effects: Sequence[CascadeEffect], threshold: int) -> int:
    """Count effects whose probability is at or above ``threshold``."""
    return sum(1 for e in effects if e.probability >= threshold)


def summarize_effects(
    category: str,
    country: str,
    effects: Sequence[CascadeEffect],
    high_risk_count: int,
    high_risk_threshold: int,
    top_n: int = CASCADE_SUMMARY_TOP_N,
) -> str:
    """Compose the one-paragraph cascade summary for ranked ``effects``."""
    if not effects:
        return (
            f"No country-level cascade correlations were found for this {category} "
            f"event in {country}."
        )
    impact_vectors: List[str] = []
    for effect in effects[:top_n]:
        if effect.impact_type not in impact_vectors:
            impact_vectors.append(effect.impact_type)
    return (
        f"This {category} event in {country} could potentially cascade to "
        f"{len(effects)} countries. {high_risk_count} countries face high probability "
        f"({high_risk_threshold}%+) of being affected. Primary impact vectors include "
        f"{', '.join(impact_vectors)} effects."
    )


def new_effect_id(index: int) -> str:
    """Return a unique cascade-effect ID for the candidate at ``index``."""
    return f"cascade-{int(time.time() * 1000)}-{index}-{uuid.uuid4().hex[:6]}"


# ── Estimator ─────────────────────────────────────────────────────────────────

class CascadeEstimator:
    """Rank the countries a source event is likely to ripple into.

    Args:
        graph: Country relationship graph (shared, read-only).
        weights: Scoring weights and clamp bounds.
        random_source: Source of jitter/timeframe randomness.
        max_candidates: Cap on candidates considered, applied before
            dropping candidates without a profile.
        max_economic_partners: Leading economic partners taken as candidates.
        neighbor_timeframe: (start, span) hour window for neighbors.
        distant_timeframe: (start, span) hour window for everyone else.
        rank_delay_step: Milliseconds between successive ranked effects.
        summary_top_n: Ranked effects whose impact types the summary cites.
        clock: Zero-argument callable returning the current datetime.
    """

    def __init__(
        self,
        graph: RelationshipGraph,
        weights: Optional[CascadeWeights] = None,
        random_source: Optional[RandomSource] = None,
        max_candidates: int = CASCADE_MAX_CANDIDATES,
        max_economic_partners: int = CASCADE_MAX_ECONOMIC_PARTNERS,
        neighbor_timeframe: Tuple[int, int] = CASCADE_NEIGHBOR_TIMEFRAME,
        distant_timeframe: Tuple[int, int] = CASCADE_DISTANT_TIMEFRAME,
        rank_delay_step: int = CASCADE_RANK_DELAY_STEP,
        summary_top_n: int = CASCADE_SUMMARY_TOP_N,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self.graph = graph
        self.weights = weights or CascadeWeights()
        self.random_source = random_source or SystemRandomSource()
        self.max_candidates = max_candidates
        self.max_economic_partners = max_economic_partners
        self.neighbor_timeframe = neighbor_timeframe
        self.distant_timeframe = distant_timeframe
        self.rank_delay_step = rank_delay_step
        self.summary_top_n = summary_top_n
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    @classmethod
    def from_config(
        cls,
        config: PipelineConfig,
        graph: RelationshipGraph,
        random_source: Optional[RandomSource] = None,
    ) -> "CascadeEstimator":
        return cls(
            graph=graph,
            weights=config.cascade_weights,
            random_source=random_source,
            max_candidates=config.cascade_max_candidates,
            max_economic_partners=config.cascade_max_economic_partners,
            neighbor_timeframe=config.cascade_neighbor_timeframe,
            distant_timeframe=config.cascade_distant_timeframe,
            rank_delay_step=config.cascade_rank_delay_step,
            summary_top_n=config.cascade_summary_top_n,
        )

    def select_candidates(self, source_country: str, analysis_text: str) -> List[str]:
        """Return the capped, ordered candidate list for ``source_country``.

        Order: declared neighbors, then the leading economic partners, then
        every profiled country mentioned (case-insensitively) in
        ``analysis_text`` other than the source itself. Duplicates keep their
        first position. Candidates without a profile are still present here;
        they occupy a slot in the cap and are skipped during scoring.
        """
        ordered: List[str] = []
        seen = set()

        def _add(country: str) -> None:
            if country not in seen:
                seen.add(country)
                ordered.append(country)

        profile = self.graph.profile(source_country)
        if profile is not None:
            for neighbor in profile.neighbors:
                _add(neighbor)
            for partner in profile.economic_partners[: self.max_economic_partners]:
                _add(partner)

        lower_text = (analysis_text or "").lower()
        if lower_text:
            for country in self.graph.countries():
                if country != source_country and country.lower() in lower_text:
                    _add(country)

        return ordered[: self.max_candidates]

    def _score(self, source: str, target: str) -> int:
        w = self.weights
        score = w.base
        if self.graph.is_neighbor(source, target):
            score += w.neighbor
        if self.graph.is_economic_partner(source, target):
            score += w.partner
        if self.graph.shares_alliance(source, target):
            score += w.alliance
        score += draw_int(self.random_source, w.jitter_min, w.jitter_span)
        return min(w.ceiling, max(w.floor, score))

    def _timeframe(self, is_neighbor: bool) -> int:
        start, span = self.neighbor_timeframe if is_neighbor else self.distant_timeframe
        return draw_int(self.random_source, start, span)

    def _factors(self, source: str, target: str) -> List[str]:
        factors: List[str] = []
        if self.graph.is_neighbor(source, target):
            factors.append(FACTOR_NEIGHBOR)
        if self.graph.is_economic_partner(source, target):
            factors.append(FACTOR_TRADE_PARTNER)
        if self.graph.shares_alliance(source, target):
            factors.append(FACTOR_ALLIANCE)
        if self.graph.same_region(source, target):
            factors.append(FACTOR_SAME_REGION)
        return factors

    @staticmethod
    def _describe(country: str, impact_type: str, factors: List[str]) -> str:
        description = f"{country} may experience {impact_type} effects"
        if FACTOR_NEIGHBOR in factors:
            description += " due to direct proximity"
        if FACTOR_TRADE_PARTNER in factors:
            description += " through trade disruption"
        return description + "."

    def estimate(self, source_event: ThreatEvent, analysis_text: str = "") -> CascadeAnalysis:
        """Estimate ranked cascade effects for ``source_event``.

        An unknown source country or an analysis text naming no profiled
        country can leave no candidates; the result is then an analysis with
        no effects, not an error.

        Args:
            source_event: The event being analyzed.
            analysis_text: Free-text analysis (e.g. an answer-API response)
                scanned for country mentions.

        Returns:
            CascadeAnalysis with effects sorted by probability, highest first.
        """
        source_country = source_event.location.country or UNKNOWN_COUNTRY
        category = source_event.category or DEFAULT_CATEGORY
        impact_cycle = impact_types_for(category)

        candidates = self.select_candidates(source_country, analysis_text)

        effects: List[CascadeEffect] = []
        for index, country in enumerate(candidates):
            target = self.graph.profile(country)
            if target is None:
                logger.debug("Cascade: skipping %s (no country profile)", country)
                continue

            # Draw order per candidate: jitter, then timeframe
            probability = self._score(source_country, country)
            is_neighbor = self.graph.is_neighbor(source_country, country)
            timeframe_hours = self._timeframe(is_neighbor)

            impact_type = impact_cycle[index % len(impact_cycle)]
            factors = self._factors(source_country, country)

            effects.append(
                CascadeEffect(
                    id=new_effect_id(index),
                    target_country=country,
                    target_country_code=target.code,
                    latitude=target.lat,
                    longitude=target.lng,
                    probability=probability,
                    timeframe_hours=timeframe_hours,
                    impact_type=impact_type,
                    description=self._describe(country, impact_type, factors),
                    factors=factors,
                )
            )

        ranked = rank_effects(effects, self.rank_delay_step)
        high_risk = count_high_risk(ranked, self.weights.high_risk_threshold)

        logger.info(
            "Cascade: %s event in %s → %d effects (%d high risk) from %d candidates",
            category,
            source_country,
            len(ranked),
            high_risk,
            len(candidates),
        )

        return CascadeAnalysis(
            source_event=source_event,
            effects=ranked,
            summary=summarize_effects(
                category,
                source_country,
                ranked,
                high_risk,
                self.weights.high_risk_threshold,
                self.summary_top_n,
            ),
            total_affected_countries=len(ranked),
            high_risk_count=high_risk,
            generated_at=to_iso(self._clock()),
        )
