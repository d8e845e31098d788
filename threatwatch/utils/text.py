"""Text processing utilities for ThreatWatch.

Pure functions for stripping scraped-page boilerplate and normalizing
whitespace ahead of classification. No I/O or external calls.
"""

from __future__ import annotations

import re
from typing import List, Pattern

# ── Boilerplate patterns ──────────────────────────────────────────────────────
# Applied in order; matched spans are removed outright.
_BOILERPLATE_PATTERNS: List[Pattern[str]] = [
    re.compile(p, re.IGNORECASE)
    for p in (
        r"skip to (?:main |primary )?content",
        r"keyboard shortcuts?(?: for audio player)?",
        r"toggle navigation",
        r"search(?:\s+the site)?",
        r"sign (?:in|up|out)",
        r"log (?:in|out)",
        r"subscribe(?:\s+now)?",
        r"newsletter",
        r"privacy policy",
        r"terms (?:of (?:service|use)|and conditions)",
        r"cookie (?:policy|settings|preferences)",
        r"about us",
        r"contact us",
        r"advertise (?:with us)?",
        r"careers",
        r"weather (?:today|forecast)?",
        r"all rights reserved",
        r"copyright \d{4}",
        r"follow us on",
        r"share (?:this|on)",
        r"related (?:articles|stories|posts)",
        r"recommended (?:for you|articles)",
        r"trending (?:now|stories)",
        r"most (?:read|popular|viewed)",
        r"read more",
        r"continue reading",
        r"load(?:ing)? more",
        r"view (?:all|more)",
        r"see (?:all|more)",
        r"advertisement",
        r"sponsored (?:content|by)",
        r"click here",
        r"tap (?:here|to)",
        r"download (?:our )?app",
        r"get the app",
        r"breaking news alert",
        r"live updates?",
    )
]

# Section labels standing alone on a line
_SECTION_LABEL_PATTERNS: List[Pattern[str]] = [
    re.compile(rf"^[^\S\n]*{label}[^\S\n]*$", re.IGNORECASE | re.MULTILINE)
    for label in (
        r"menu",
        r"home",
        r"news",
        r"sports?",
        r"entertainment",
        r"business",
        r"tech(?:nology)?",
        r"opinion",
        r"video",
        r"photos?",
    )
]

_LINE_EDGE_WS = re.compile(r"^[^\S\n]+|[^\S\n]+$", re.MULTILINE)
_HORIZONTAL_WS_RUN = re.compile(r"[^\S\n]{2,}")
_EXCESS_NEWLINES = re.compile(r"\n{3,}")


def _clean_once(text: str) -> str:
    for pattern in _BOILERPLATE_PATTERNS:
        text = pattern.sub("", text)
    for pattern in _SECTION_LABEL_PATTERNS:
        text = pattern.sub("", text)
    text = _LINE_EDGE_WS.sub("", text)
    text = _HORIZONTAL_WS_RUN.sub(" ", text)
    text = _EXCESS_NEWLINES.sub("\n\n", text)
    return text.strip()


def normalize_content(text: str) -> str:
    """Strip navigation, cookie, subscription and ad boilerplate from scraped text.

    Matched boilerplate spans are deleted rather than replaced. Whitespace is
    then tidied: leading/trailing whitespace is trimmed per line, runs of two
    or more spaces/tabs collapse to one space, and three or more consecutive
    newlines collapse to exactly two.

    The rules are re-applied until the text stops changing, because removing
    one span can splice together a new match (``"sign sign inin"``). Every
    productive pass shortens the text, so the loop terminates, and the result
    is idempotent: ``normalize_content(normalize_content(s)) == normalize_content(s)``.

    Args:
        text: Raw title or body text from a search result.

    Returns:
        Cleaned text; empty string for empty input.
    """
    if not text:
        return ""
    # Line-anchored rules only see "\n" boundaries
    current = text.replace("\r\n", "\n").replace("\r", "\n")
    while True:
        cleaned = _clean_once(current)
        if cleaned == current:
            return cleaned
        current = cleaned

