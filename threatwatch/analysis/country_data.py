"""Built-in country relationship table for ThreatWatch.

Keyed by canonical country name. Relationship lists may name countries that
have no entry of their own (e.g. "Belarus"); those references are tolerated
and simply contribute nothing to cascade scoring.

Override at runtime with a YAML file of the same shape via
PipelineConfig.country_profiles_path.
"""

from __future__ import annotations

from typing import Any, Dict

COUNTRY_PROFILES: Dict[str, Dict[str, Any]] = {
    "Ukraine": {
        "code": "UA", "lat": 48.3794, "lng": 31.1656,
        "neighbors": ["Russia", "Belarus", "Poland", "Slovakia", "Hungary", "Romania", "Moldova"],
        "economicPartners": ["Germany", "Poland", "Turkey", "China", "Italy"],
        "alliances": ["EU-candidate"],
        "region": "Eastern Europe",
    },
    "Russia": {
        "code": "RU", "lat": 61.524, "lng": 105.3188,
        "neighbors": [
            "Ukraine", "Belarus", "Finland", "Estonia", "Latvia", "Lithuania", "Poland",
            "Georgia", "Azerbaijan", "Kazakhstan", "China", "Mongolia", "North Korea",
        ],
        "economicPartners": ["China", "India", "Turkey", "Belarus", "Kazakhstan"],
        "alliances": ["CSTO", "BRICS"],
        "region": "Eurasia",
    },
    "China": {
        "code": "CN", "lat": 35.8617, "lng": 104.1954,
        "neighbors": [
            "Russia", "Mongolia", "North Korea", "Vietnam", "Laos", "Myanmar", "India",
            "Bhutan", "Nepal", "Pakistan", "Afghanistan", "Tajikistan", "Kyrgyzstan", "Kazakhstan",
        ],
        "economicPartners": [
            "United States", "Japan", "South Korea", "Germany", "Australia", "Vietnam",
        ],
        "alliances": ["SCO", "BRICS"],
        "region": "East Asia",
    },
    "United States": {
        "code": "US", "lat": 37.0902, "lng": -95.7129,
        "neighbors": ["Canada", "Mexico"],
        "economicPartners": [
            "China", "Canada", "Mexico", "Japan", "Germany", "United Kingdom", "South Korea",
        ],
        "alliances": ["NATO", "AUKUS", "Five Eyes"],
        "region": "North America",
    },
    "Israel": {
        "code": "IL", "lat": 31.0461, "lng": 34.8516,
        "neighbors": ["Lebanon", "Syria", "Jordan", "Egypt", "Palestine"],
        "economicPartners": ["United States", "China", "United Kingdom", "Germany", "India"],
        "alliances": ["US-ally"],
        "region": "Middle East",
    },
    "Iran": {
        "code": "IR", "lat": 32.4279, "lng": 53.688,
        "neighbors": [
            "Iraq", "Turkey", "Armenia", "Azerbaijan", "Turkmenistan", "Afghanistan", "Pakistan",
        ],
        "economicPartners": ["China", "UAE", "Turkey", "Iraq", "India"],
        "alliances": ["SCO-observer"],
        "region": "Middle East",
    },
    "Germany": {
        "code": "DE", "lat": 51.1657, "lng": 10.4515,
        "neighbors": [
            "France", "Belgium", "Netherlands", "Luxembourg", "Switzerland", "Austria",
            "Czech Republic", "Poland", "Denmark",
        ],
        "economicPartners": [
            "United States", "China", "France", "Netherlands", "United Kingdom", "Italy", "Poland",
        ],
        "alliances": ["NATO", "EU"],
        "region": "Western Europe",
    },
    "Poland": {
        "code": "PL", "lat": 51.9194, "lng": 19.1451,
        "neighbors": [
            "Germany", "Czech Republic", "Slovakia", "Ukraine", "Belarus", "Lithuania", "Russia",
        ],
        "economicPartners": ["Germany", "Czech Republic", "United Kingdom", "France", "Italy"],
        "alliances": ["NATO", "EU"],
        "region": "Eastern Europe",
    },
    "Taiwan": {
        "code": "TW", "lat": 23.6978, "lng": 120.9605,
        "neighbors": [],
        "economicPartners": ["China", "United States", "Japan", "South Korea", "Singapore"],
        "alliances": ["US-partner"],
        "region": "East Asia",
    },
    "Japan": {
        "code": "JP", "lat": 36.2048, "lng": 138.2529,
        "neighbors": [],
        "economicPartners": ["China", "United States", "South Korea", "Taiwan", "Thailand"],
        "alliances": ["US-ally", "Quad"],
        "region": "East Asia",
    },
    "South Korea": {
        "code": "KR", "lat": 35.9078, "lng": 127.7669,
        "neighbors": ["North Korea"],
        "economicPartners": ["China", "United States", "Japan", "Vietnam", "Taiwan"],
        "alliances": ["US-ally"],
        "region": "East Asia",
    },
    "North Korea": {
        "code": "KP", "lat": 40.3399, "lng": 127.5101,
        "neighbors": ["South Korea", "China", "Russia"],
        "economicPartners": ["China", "Russia"],
        "alliances": [],
        "region": "East Asia",
    },
    "India": {
        "code": "IN", "lat": 20.5937, "lng": 78.9629,
        "neighbors": ["Pakistan", "China", "Nepal", "Bhutan", "Bangladesh", "Myanmar"],
        "economicPartners": ["United States", "China", "UAE", "Saudi Arabia", "Iraq"],
        "alliances": ["Quad", "BRICS"],
        "region": "South Asia",
    },
    "Pakistan": {
        "code": "PK", "lat": 30.3753, "lng": 69.3451,
        "neighbors": ["India", "Afghanistan", "Iran", "China"],
        "economicPartners": ["China", "UAE", "Saudi Arabia", "United States"],
        "alliances": ["China-ally"],
        "region": "South Asia",
    },
    "Saudi Arabia": {
        "code": "SA", "lat": 23.8859, "lng": 45.0792,
        "neighbors": ["Jordan", "Iraq", "Kuwait", "Qatar", "UAE", "Oman", "Yemen"],
        "economicPartners": ["China", "United States", "Japan", "India", "South Korea"],
        "alliances": ["GCC", "US-partner"],
        "region": "Middle East",
    },
    "Turkey": {
        "code": "TR", "lat": 38.9637, "lng": 35.2433,
        "neighbors": ["Greece", "Bulgaria", "Georgia", "Armenia", "Iran", "Iraq", "Syria"],
        "economicPartners": ["Germany", "United Kingdom", "Italy", "Iraq", "United States"],
        "alliances": ["NATO"],
        "region": "Middle East",
    },
    "United Kingdom": {
        "code": "GB", "lat": 55.3781, "lng": -3.436,
        "neighbors": ["Ireland"],
        "economicPartners": ["United States", "Germany", "Netherlands", "France", "China"],
        "alliances": ["NATO", "Five Eyes", "AUKUS"],
        "region": "Western Europe",
    },
    "France": {
        "code": "FR", "lat": 46.2276, "lng": 2.2137,
        "neighbors": [
            "Belgium", "Luxembourg", "Germany", "Switzerland", "Italy", "Spain", "Andorra", "Monaco",
        ],
        "economicPartners": ["Germany", "United States", "Italy", "Spain", "Belgium"],
        "alliances": ["NATO", "EU"],
        "region": "Western Europe",
    },
    "Syria": {
        "code": "SY", "lat": 34.8021, "lng": 38.9968,
        "neighbors": ["Turkey", "Iraq", "Jordan", "Israel", "Lebanon"],
        "economicPartners": ["Russia", "China", "Iran", "UAE"],
        "alliances": ["Russia-ally", "Iran-ally"],
        "region": "Middle East",
    },
    "Lebanon": {
        "code": "LB", "lat": 33.8547, "lng": 35.8623,
        "neighbors": ["Syria", "Israel"],
        "economicPartners": ["UAE", "Saudi Arabia", "China", "Turkey"],
        "alliances": [],
        "region": "Middle East",
    },
    "Egypt": {
        "code": "EG", "lat": 26.8206, "lng": 30.8025,
        "neighbors": ["Libya", "Sudan", "Israel", "Palestine"],
        "economicPartners": ["United States", "UAE", "Saudi Arabia", "China", "Turkey"],
        "alliances": ["US-partner", "Arab League"],
        "region": "Middle East",
    },
    "Sudan": {
        "code": "SD", "lat": 12.8628, "lng": 30.2176,
        "neighbors": [
            "Egypt", "Libya", "Chad", "Central African Republic", "South Sudan", "Ethiopia", "Eritrea",
        ],
        "economicPartners": ["UAE", "China", "Saudi Arabia", "India"],
        "alliances": [],
        "region": "Africa",
    },
    "Ethiopia": {
        "code": "ET", "lat": 9.145, "lng": 40.4897,
        "neighbors": ["Eritrea", "Djibouti", "Somalia", "Kenya", "South Sudan", "Sudan"],
        "economicPartners": ["China", "United States", "Saudi Arabia", "UAE"],
        "alliances": ["AU"],
        "region": "Africa",
    },
    "Nigeria": {
        "code": "NG", "lat": 9.082, "lng": 8.6753,
        "neighbors": ["Benin", "Niger", "Chad", "Cameroon"],
        "economicPartners": ["India", "United States", "Spain", "Netherlands", "France"],
        "alliances": ["AU", "ECOWAS"],
        "region": "Africa",
    },
    "Brazil": {
        "code": "BR", "lat": -14.235, "lng": -51.9253,
        "neighbors": [
            "Argentina", "Paraguay", "Bolivia", "Peru", "Colombia", "Venezuela", "Guyana",
            "Suriname", "French Guiana", "Uruguay",
        ],
        "economicPartners": ["China", "United States", "Argentina", "Netherlands", "Germany"],
        "alliances": ["BRICS", "Mercosur"],
        "region": "South America",
    },
    "Australia": {
        "code": "AU", "lat": -25.2744, "lng": 133.7751,
        "neighbors": [],
        "economicPartners": ["China", "Japan", "United States", "South Korea", "India"],
        "alliances": ["AUKUS", "Five Eyes", "Quad"],
        "region": "Oceania",
    },
}
