"""Keyword and entity extraction for ThreatWatch events.

Pure functions. No I/O or external calls.
"""

from __future__ import annotations

import re
from typing import List, Pattern, Set, Tuple

from config.defaults import MAX_KEYWORDS
from threatwatch.analysis.taxonomy import keyword_vocabulary

# Fixed international organizations. Matched case-sensitively, not
# case-insensitively, so the pronoun "who" is never read as the WHO.
_ORGANIZATION_PATTERN = re.compile(
    r"\b(United Nations|UN|NATO|EU|European Union|WHO|IMF|World Bank)\b"
)

# "<Capitalized Phrase> government|military|ministry|president|prime minister"
# The trailing \b keeps "Russian governmental" from yielding "Russian".
_ROLE_PATTERN = re.compile(
    r"\b([A-Z][a-z]+(?:\s+[A-Z][a-z]+)*)\s+"
    r"(?i:government|military|ministry|president|prime minister)\b"
)

_ENTITY_PATTERNS: Tuple[Pattern[str], ...] = (_ORGANIZATION_PATTERN, _ROLE_PATTERN)


def extract_keywords(text: str, limit: int = MAX_KEYWORDS) -> List[str]:
    """Return taxonomy keywords present in ``text``.

    Scans the category vocabulary followed by the threat-level vocabulary in
    declaration order, keeps the substrings present in the lower-cased text,
    drops duplicates, and truncates.

    Args:
        text: Text to scan.
        limit: Maximum keywords returned.

    Returns:
        At most ``limit`` keywords in vocabulary order.
    """
    if limit <= 0:
        return []
    lower_text = text.lower()
    seen: Set[str] = set()
    found: List[str] = []
    for keyword in keyword_vocabulary():
        if keyword in seen or keyword not in lower_text:
            continue
        seen.add(keyword)
        found.append(keyword)
        if len(found) >= limit:
            break
    return found


def extract_entities(text: str) -> List[str]:
    """Extract organization and government-actor names from ``text``.

    Patterns run in order (organizations first, then capitalized phrases
    followed by a role word); matches are collected in encounter order with
    duplicates removed. Never raises; returns [] when nothing matches.

    Args:
        text: Text to scan.

    Returns:
        Distinct entity names.
    """
    entities: List[str] = []
    seen: Set[str] = set()
    for pattern in _ENTITY_PATTERNS:
        for match in pattern.finditer(text):
            name = match.group(1).strip()
            if name and name not in seen:
                seen.add(name)
                entities.append(name)
    return entities
