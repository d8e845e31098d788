"""Keyword taxonomy for ThreatWatch event classification.

Immutable configuration data only: category keywords, threat-level keywords,
and the category → impact-type mapping used by the cascade estimator. The
scoring algorithms live in classifier.py and extractor.py.

All keywords are lower-case and matched as plain substrings of the lower-cased
text. Some keywords deliberately appear in more than one category ("strike"
counts for both conflict and protest, "sanctions" for both diplomatic and
economic).
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping, Tuple

from threatwatch.models.cascade import ImpactType
from threatwatch.models.events import EventCategory, ThreatLevel

# Keys are inserted in EventCategory.ALL order; classify_category relies on it.
CATEGORY_KEYWORDS: Mapping[str, Tuple[str, ...]] = MappingProxyType({
    EventCategory.CONFLICT: (
        "war", "battle", "fighting", "combat", "clash",
        "strike", "attack", "offensive", "invasion", "troops",
    ),
    EventCategory.PROTEST: (
        "protest", "demonstration", "rally", "march", "riot",
        "unrest", "uprising", "dissent", "activist", "strike",
    ),
    EventCategory.DISASTER: (
        "earthquake", "flood", "hurricane", "typhoon", "tsunami",
        "wildfire", "tornado", "volcanic", "landslide", "disaster",
    ),
    EventCategory.DIPLOMATIC: (
        "summit", "treaty", "agreement", "diplomatic", "embassy",
        "ambassador", "negotiation", "talks", "bilateral", "sanctions",
    ),
    EventCategory.ECONOMIC: (
        "economy", "trade", "tariff", "currency", "inflation",
        "recession", "market", "sanctions", "gdp", "debt",
    ),
    EventCategory.TERRORISM: (
        "terrorist", "terrorism", "bomb", "explosion", "hostage",
        "extremist", "militant", "isis", "al-qaeda", "jihad",
    ),
    EventCategory.CYBER: (
        "cyber", "hack", "breach", "malware", "ransomware",
        "ddos", "phishing", "data leak", "cyber attack", "vulnerability",
    ),
    EventCategory.HEALTH: (
        "pandemic", "epidemic", "outbreak", "virus", "disease",
        "covid", "vaccine", "health emergency", "who", "infection",
    ),
    EventCategory.ENVIRONMENTAL: (
        "climate", "pollution", "environmental", "emission", "deforestation",
        "biodiversity", "carbon", "renewable", "conservation", "ecosystem",
    ),
    EventCategory.MILITARY: (
        "military", "army", "navy", "air force", "missile",
        "nuclear", "weapons", "defense", "pentagon", "nato",
    ),
    EventCategory.CRIME: (
        "murder", "homicide", "kidnapping", "abduction", "disappearance",
        "shooting", "gunfire", "drug trafficking", "cartel", "gang",
        "robbery", "assault", "organized crime", "manslaughter", "crime",
    ),
    EventCategory.PIRACY: (
        "piracy", "pirate", "hijack", "shipping attack", "maritime",
        "vessel seized", "ship attack", "sea attack", "somali", "gulf of aden",
        "red sea attack", "houthi",
    ),
    EventCategory.INFRASTRUCTURE: (
        "reservoir", "water level", "dam", "power grid", "blackout",
        "power outage", "utility", "electricity", "water supply", "infrastructure",
        "pipeline", "bridge collapse",
    ),
    EventCategory.COMMODITIES: (
        "grocery price", "food price", "commodity", "wheat", "corn",
        "rice price", "food shortage", "food supply", "agriculture", "crop",
        "harvest", "famine", "food security",
    ),
})

# Keys are inserted in ThreatLevel.ALL (priority) order; keyword order within
# a level is significant because the first hit wins.
THREAT_LEVEL_KEYWORDS: Mapping[str, Tuple[str, ...]] = MappingProxyType({
    ThreatLevel.CRITICAL: (
        "emergency", "imminent", "catastrophic", "mass casualty", "nuclear",
        "wmd", "urgent", "crisis", "immediate threat",
    ),
    ThreatLevel.HIGH: (
        "severe", "major", "significant", "escalating", "dangerous",
        "critical", "serious", "alarming", "warning",
    ),
    ThreatLevel.MEDIUM: (
        "moderate", "developing", "ongoing", "tensions", "concern",
        "elevated", "increasing", "notable",
    ),
    ThreatLevel.LOW: (
        "minor", "limited", "contained", "isolated", "localized",
        "manageable", "stable",
    ),
    ThreatLevel.INFO: (
        "update", "report", "announcement", "statement", "analysis",
        "brief", "summary", "overview",
    ),
})

DEFAULT_CATEGORY: str = EventCategory.CONFLICT
DEFAULT_THREAT_LEVEL: str = ThreatLevel.MEDIUM

# Impact types cycled across cascade candidates, by source event category
IMPACT_MAPPINGS: Mapping[str, Tuple[str, ...]] = MappingProxyType({
    EventCategory.CONFLICT: (
        ImpactType.MILITARY, ImpactType.HUMANITARIAN, ImpactType.ECONOMIC, ImpactType.POLITICAL,
    ),
    EventCategory.MILITARY: (ImpactType.MILITARY, ImpactType.POLITICAL, ImpactType.ECONOMIC),
    EventCategory.TERRORISM: (ImpactType.POLITICAL, ImpactType.SOCIAL, ImpactType.ECONOMIC),
    EventCategory.PROTEST: (ImpactType.POLITICAL, ImpactType.SOCIAL, ImpactType.ECONOMIC),
    EventCategory.ECONOMIC: (ImpactType.ECONOMIC, ImpactType.POLITICAL, ImpactType.SOCIAL),
    EventCategory.DIPLOMATIC: (ImpactType.POLITICAL, ImpactType.ECONOMIC),
    EventCategory.DISASTER: (ImpactType.HUMANITARIAN, ImpactType.ECONOMIC),
    EventCategory.CYBER: (ImpactType.ECONOMIC, ImpactType.MILITARY, ImpactType.POLITICAL),
    EventCategory.HEALTH: (ImpactType.HUMANITARIAN, ImpactType.ECONOMIC, ImpactType.SOCIAL),
    EventCategory.ENVIRONMENTAL: (ImpactType.HUMANITARIAN, ImpactType.ECONOMIC),
})

# Fallback for categories without an explicit mapping (crime, piracy, ...)
DEFAULT_IMPACT_TYPES: Tuple[str, ...] = (ImpactType.POLITICAL, ImpactType.ECONOMIC)


def impact_types_for(category: str) -> Tuple[str, ...]:
    """Return the impact-type cycle for a source event category."""
    return IMPACT_MAPPINGS.get(category, DEFAULT_IMPACT_TYPES)


def keyword_vocabulary() -> Tuple[str, ...]:
    """Return every category keyword followed by every threat-level keyword.

    Declaration order is preserved and duplicates are kept; callers dedupe.
    """
    vocabulary = []
    for keywords in CATEGORY_KEYWORDS.values():
        vocabulary.extend(keywords)
    for keywords in THREAT_LEVEL_KEYWORDS.values():
        vocabulary.extend(keywords)
    return tuple(vocabulary)
