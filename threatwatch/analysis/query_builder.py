"""Answer-provider prompt construction for ThreatWatch cascade analysis.

Builds the free-text analysis request sent to the answer provider for one
source event. The heuristic estimator only scans the answer for country
names, so the prompt steers the provider toward naming affected countries
explicitly; the structured variant additionally asks for schema output.
"""

from __future__ import annotations

import logging

from threatwatch.analysis.cascade_estimator import UNKNOWN_COUNTRY
from threatwatch.analysis.taxonomy import DEFAULT_CATEGORY
from threatwatch.models.events import ThreatEvent

logger = logging.getLogger(__name__)

_FOCUS_AREAS = (
    "Neighboring countries",
    "Major trading partners",
    "Military allies",
    "Countries with historical tensions",
    "Supply chain dependencies",
)


class CascadeQueryBuilder:
    """Compose cascade analysis prompts for the answer provider.

    Args:
        min_countries: Lower bound of the "top N" countries requested.
        max_countries: Upper bound of the "top N" countries requested.
    """

    def __init__(self, min_countries: int = 8, max_countries: int = 12) -> None:
        self.min_countries = min_countries
        self.max_countries = max_countries

    def build(self, event: ThreatEvent, structured: bool = False) -> str:
        """Build the analysis prompt for ``event``.

        Args:
            event: Source event being analyzed.
            structured: When True, ask for output matching the structured
                cascade schema instead of prose.

        Returns:
            Prompt string.
        """
        country = event.location.country or UNKNOWN_COUNTRY
        category = event.category or DEFAULT_CATEGORY

        lines = [
            "Analyze the potential geopolitical and economic ripple effects of this "
            f'event: "{event.title}".',
            "",
            f"The event occurred in {country} and is categorized as: {category}.",
            "",
            "For each potentially affected country, provide:",
            "1. How likely they are to be affected (probability 0-100%)",
            "2. Expected timeframe for impact (hours/days)",
            "3. Type of impact (economic, military, political, humanitarian, social)",
            "4. Brief explanation of why they would be affected",
            "",
            "Focus on:",
        ]
        lines.extend(f"- {area}" for area in _FOCUS_AREAS)
        lines.append("")
        lines.append(
            f"List the top {self.min_countries}-{self.max_countries} most likely affected countries."
        )
        if structured:
            lines.append(
                "Respond with a JSON object containing an 'effects' array "
                "(country, probability, timeframe_hours, impact_type, description, factors) "
                "and a one-paragraph 'summary'."
            )

        query = "\n".join(lines)
        logger.debug("Cascade query built (%d chars, structured=%s)", len(query), structured)
        return query
