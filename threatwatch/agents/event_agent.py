"""EventAgent — Build the map's threat event feed from news search results.

Flow:
  1. Run each feed query against the search provider in parallel.
  2. Geocode every result from its title and content; drop results that
     resolve to the (0, 0) sentinel.
  3. Assemble the remaining results into ThreatEvents in parallel.
  4. Deduplicate on exact title (first occurrence wins) and sort newest first.

A credential rejection on any query fails the whole feed with
requires_reauth set. Other provider failures degrade the feed to PARTIAL
while at least one query succeeded, and fail it otherwise.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Any, Dict, List, Optional, Tuple

from threatwatch.agents.base import AgentStatus, BaseAgent
from threatwatch.analysis.event_assembler import (
    assemble_event,
    dedupe_by_title,
    is_unresolved_location,
    sort_by_recency,
)
from threatwatch.analysis.geocoder import GazetteerGeocoder
from threatwatch.analysis.relationship_graph import RelationshipGraph, load_relationship_graph
from threatwatch.clients.valyu_client import ValyuClient
from threatwatch.exceptions import SearchAPIError, ValidationError
from threatwatch.models.events import ThreatEvent
from threatwatch.models.search import EventFeed, SearchResult
from threatwatch.utils.date_utils import utc_now_iso

logger = logging.getLogger(__name__)

FETCH_FAILED_MESSAGE = "Event fetch failed, please retry"
SESSION_EXPIRED_MESSAGE = "Session expired, please sign in again"


class EventAgent(BaseAgent):
    """Fetch, geocode, classify and rank threat events for the dashboard feed.

    Args:
        client: Search provider client. Built from the config when omitted.
        geocoder: Geocoder for search results. Defaults to a gazetteer over
            ``graph``.
        graph: Relationship graph used by the default geocoder.
    """

    name = "EventAgent"

    def __init__(
        self,
        client: Optional[ValyuClient] = None,
        geocoder: Optional[GazetteerGeocoder] = None,
        graph: Optional[RelationshipGraph] = None,
    ) -> None:
        self._client = client
        self._geocoder = geocoder
        self._graph = graph

    def run(self, context: Any) -> EventFeed:
        """Refresh the event feed.

        Args:
            context: PipelineContext with config (queries, limits, credentials).

        Returns:
            EventFeed with deduplicated events, newest first.
        """
        cfg = context.config
        feed = EventFeed(timestamp=utc_now_iso())

        queries = cfg.effective_queries()
        per_query = cfg.results_per_query()
        logger.info(
            "EventAgent: %d queries, %d results each", len(queries), per_query
        )

        client = self._client or ValyuClient.from_config(cfg)
        try:
            results, failures = self._search_all(client, queries, per_query, cfg.event_max_workers)
        finally:
            if self._client is None:
                client.close()

        reauth = next((exc for _, exc in failures if exc.requires_reauth), None)
        if reauth is not None:
            feed.status = AgentStatus.FAILED
            feed.error = SESSION_EXPIRED_MESSAGE
            feed.requires_reauth = True
            return feed

        if failures and len(failures) == len(queries):
            feed.status = AgentStatus.FAILED
            feed.error = FETCH_FAILED_MESSAGE
            return feed

        for query, exc in failures:
            feed.warnings.append(f"Query {query!r} failed: {exc}")
        if failures:
            feed.status = AgentStatus.PARTIAL

        geocoder = self._geocoder or GazetteerGeocoder(
            self._graph or load_relationship_graph(cfg.country_profiles_path)
        )

        with ThreadPoolExecutor(max_workers=cfg.event_max_workers) as executor:
            assembled = list(
                executor.map(lambda r: self._process_result(r, geocoder, cfg), results)
            )

        events: List[ThreatEvent] = []
        for event in assembled:
            if event is None:
                feed.dropped_unresolved += 1
            else:
                events.append(event)

        unique = dedupe_by_title(events)
        feed.events = sort_by_recency(unique)

        logger.info(
            "EventAgent: %d results → %d events (%d unplaced, %d duplicates)",
            len(results),
            feed.count,
            feed.dropped_unresolved,
            len(events) - len(unique),
        )
        return feed

    @staticmethod
    def _search_all(
        client: ValyuClient,
        queries: List[str],
        per_query: int,
        max_workers: int,
    ) -> Tuple[List[SearchResult], List[Tuple[str, SearchAPIError]]]:
        """Run all queries in parallel; results are concatenated in query order."""
        by_query: Dict[int, List[SearchResult]] = {}
        failures: List[Tuple[str, SearchAPIError]] = []

        with ThreadPoolExecutor(max_workers=max(1, max_workers)) as executor:
            future_map = {
                executor.submit(client.search, query, per_query): (i, query)
                for i, query in enumerate(queries)
            }
            for future in as_completed(future_map):
                index, query = future_map[future]
                try:
                    by_query[index] = future.result()
                except SearchAPIError as exc:
                    logger.warning("EventAgent: query %r failed: %s", query, exc)
                    failures.append((query, exc))

        results: List[SearchResult] = []
        for index in sorted(by_query):
            results.extend(by_query[index])
        return results, failures

    @staticmethod
    def _process_result(
        result: SearchResult,
        geocoder: GazetteerGeocoder,
        cfg: Any,
    ) -> Optional[ThreatEvent]:
        """Geocode and assemble one result; None when it cannot be placed."""
        location = geocoder.geocode(f"{result.title} {result.content}", result.title)
        if is_unresolved_location(location):
            logger.debug("EventAgent: dropping unplaced result %.80r", result.title)
            return None
        try:
            return assemble_event(
                title=result.title,
                content=result.content,
                location=location,
                source=result.source or "web",
                source_url=result.url or None,
                timestamp=result.published_date,
                summary_max_chars=cfg.summary_max_chars,
                max_keywords=cfg.max_keywords,
            )
        except ValidationError as exc:
            logger.debug("EventAgent: rejecting result %.80r: %s", result.title, exc)
            return None
