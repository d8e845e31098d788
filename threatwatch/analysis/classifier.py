"""Rule-based category and threat-level classification for ThreatWatch.

Two deliberately different algorithms:

- classify_category is best-score: every category is scored and the highest
  count wins, with ties going to the earlier-declared category.
- classify_threat_level is first-hit: levels are scanned in priority order and
  the first keyword found decides.

Both use plain substring matching on lower-cased text, not word boundaries,
so "strike" inside "hunger strike" or "airstrike" counts toward conflict.

Pure functions. No I/O or external calls.
"""

from __future__ import annotations

from typing import Dict, Mapping, Optional, Tuple

from threatwatch.analysis.taxonomy import (
    CATEGORY_KEYWORDS,
    DEFAULT_CATEGORY,
    DEFAULT_THREAT_LEVEL,
    THREAT_LEVEL_KEYWORDS,
)


def score_categories(
    text: str,
    taxonomy: Optional[Mapping[str, Tuple[str, ...]]] = None,
) -> Dict[str, int]:
    """Count distinct keyword hits per category.

    Each keyword contributes at most 1 regardless of how often it occurs.

    Args:
        text: Text to score (any case).
        taxonomy: Category → keywords mapping; defaults to CATEGORY_KEYWORDS.

    Returns:
        Dict of category → score in taxonomy declaration order.
    """
    taxonomy = CATEGORY_KEYWORDS if taxonomy is None else taxonomy
    lower_text = text.lower()
    return {
        category: sum(1 for keyword in keywords if keyword.lower() in lower_text)
        for category, keywords in taxonomy.items()
    }


def classify_category(
    text: str,
    taxonomy: Optional[Mapping[str, Tuple[str, ...]]] = None,
) -> str:
    """Pick the category whose keyword set scores highest against ``text``.

    Only a strictly higher score displaces the current best, so equal scores
    resolve to the category declared first. When nothing matches, every score
    is 0 and the result is "conflict" even if that is a poor description of
    the text.

    Args:
        text: Text to classify.
        taxonomy: Category → keywords mapping; defaults to CATEGORY_KEYWORDS.

    Returns:
        Winning category name.
    """
    best_match = DEFAULT_CATEGORY
    best_score = 0
    for category, score in score_categories(text, taxonomy).items():
        if score > best_score:
            best_score = score
            best_match = category
    return best_match


def classify_threat_level(
    text: str,
    levels: Optional[Mapping[str, Tuple[str, ...]]] = None,
) -> str:
    """Return the level of the first keyword found, scanning levels by priority.

    Levels are walked critical → info and keywords in declared order; the
    position of a keyword within the text is irrelevant. Text with no
    threat keyword at all is "medium".

    Args:
        text: Text to classify.
        levels: Level → keywords mapping in priority order; defaults to
            THREAT_LEVEL_KEYWORDS.

    Returns:
        Threat level name.
    """
    levels = THREAT_LEVEL_KEYWORDS if levels is None else levels
    lower_text = text.lower()
    for level, keywords in levels.items():
        for keyword in keywords:
            if keyword.lower() in lower_text:
                return level
    return DEFAULT_THREAT_LEVEL
