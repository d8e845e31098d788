"""CascadeAgent — Estimate which countries a selected event will ripple into.

Sends an analysis request for the selected event to the answer provider,
then either:
  - heuristic mode: scans the free-text answer for country names and scores
    candidates locally with CascadeEstimator, or
  - structured mode: asks for CASCADE_OUTPUT_SCHEMA and maps the provider's
    own probabilities onto the relationship graph.

Provider failures make a single attempt and surface as a FAILED result with
a retry message. A structured payload that cannot be parsed is also FAILED,
with its own message; an analysis with zero effects is a normal OK result.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Optional

from threatwatch.agents.base import AgentStatus, BaseAgent
from threatwatch.analysis.cascade_estimator import CascadeEstimator, RandomSource
from threatwatch.analysis.cascade_payload import (
    CASCADE_OUTPUT_SCHEMA,
    build_analysis_from_payload,
    parse_external_payload,
)
from threatwatch.analysis.query_builder import CascadeQueryBuilder
from threatwatch.analysis.relationship_graph import RelationshipGraph, load_relationship_graph
from threatwatch.clients.valyu_client import ValyuClient
from threatwatch.exceptions import ParseError, SearchAPIError
from threatwatch.models.pipeline import CascadeAgentResult

logger = logging.getLogger(__name__)

CASCADE_FAILED_MESSAGE = "Cascade analysis failed, please retry"
CASCADE_UNREADABLE_MESSAGE = "Cascade analysis returned an unreadable result, please retry"
NO_EVENT_MESSAGE = "No source event selected for cascade analysis"


def _answer_text(contents: Any) -> str:
    """Flatten answer ``contents`` into text for country-mention scanning."""
    if contents is None:
        return ""
    if isinstance(contents, str):
        return contents
    return json.dumps(contents, ensure_ascii=False)


class CascadeAgent(BaseAgent):
    """Run cascade analysis for ``context.selected_event``.

    Args:
        client: Answer provider client. Built from the config when omitted.
        graph: Relationship graph. Loaded from the config when omitted.
        random_source: Randomness for the heuristic estimator.
        query_builder: Prompt builder for the answer request.
    """

    name = "CascadeAgent"

    def __init__(
        self,
        client: Optional[ValyuClient] = None,
        graph: Optional[RelationshipGraph] = None,
        random_source: Optional[RandomSource] = None,
        query_builder: Optional[CascadeQueryBuilder] = None,
    ) -> None:
        self._client = client
        self._graph = graph
        self._random_source = random_source
        self._query_builder = query_builder or CascadeQueryBuilder()

    def run(self, context: Any) -> CascadeAgentResult:
        """Estimate cascade effects for the selected event.

        Args:
            context: PipelineContext with config and selected_event.

        Returns:
            CascadeAgentResult with the analysis, or a FAILED status.
        """
        cfg = context.config
        result = CascadeAgentResult()

        event = context.selected_event
        if event is None:
            result.status = AgentStatus.FAILED
            result.error = NO_EVENT_MESSAGE
            return result

        structured = cfg.cascade_mode == "structured"
        graph = self._graph or load_relationship_graph(cfg.country_profiles_path)
        query = self._query_builder.build(event, structured=structured)

        logger.info(
            "CascadeAgent: %s event in %s (mode=%s)",
            event.category,
            event.location.country or "Unknown",
            cfg.cascade_mode,
        )

        client = self._client or ValyuClient.from_config(cfg)
        try:
            response = client.answer(
                query,
                structured_output=CASCADE_OUTPUT_SCHEMA if structured else None,
                excluded_sources=cfg.cascade_excluded_sources,
            )
        except SearchAPIError as exc:
            logger.warning("CascadeAgent: answer call failed: %s", exc)
            result.status = AgentStatus.FAILED
            result.error = CASCADE_FAILED_MESSAGE
            result.requires_reauth = exc.requires_reauth
            return result
        finally:
            if self._client is None:
                client.close()

        contents = response.get("contents")

        if structured:
            try:
                payload = parse_external_payload(contents)
            except ParseError as exc:
                logger.warning("CascadeAgent: %s", exc)
                result.status = AgentStatus.FAILED
                result.error = CASCADE_UNREADABLE_MESSAGE
                return result
            analysis = build_analysis_from_payload(
                event,
                payload,
                graph,
                high_risk_threshold=cfg.cascade_weights.high_risk_threshold,
                rank_delay_step=cfg.cascade_rank_delay_step,
                summary_top_n=cfg.cascade_summary_top_n,
            )
        else:
            estimator = CascadeEstimator.from_config(cfg, graph, self._random_source)
            analysis = estimator.estimate(event, _answer_text(contents))

        if not analysis.effects:
            result.warnings.append("No cascade effects found")

        result.analysis = analysis
        return result
