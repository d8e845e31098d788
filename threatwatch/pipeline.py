"""ThreatWatch pipeline orchestrator.

Two independent flows share one PipelineContext lifecycle:
  Events:  EventAgent refreshes the threat event feed.
  Cascade: CascadeAgent estimates knock-on effects for one selected event.

Usage:
    from config.settings import PipelineConfig
    from threatwatch.pipeline import run_cascade, run_events

    context = run_events(PipelineConfig(queries=["Red Sea shipping attacks"]))
    event = context.event_feed.events[0]
    context = run_cascade(PipelineConfig(), event)
"""

from __future__ import annotations

import logging
import re
from datetime import datetime, timezone
from typing import Optional

from config.settings import PipelineConfig
from threatwatch.agents.base import AgentStatus, BaseAgent
from threatwatch.agents.cascade_agent import CascadeAgent
from threatwatch.agents.event_agent import EventAgent
from threatwatch.analysis.cascade_estimator import RandomSource
from threatwatch.analysis.relationship_graph import RelationshipGraph
from threatwatch.clients.valyu_client import ValyuClient
from threatwatch.io.persistence import (
    ensure_output_dir,
    export_cascade_analysis,
    export_event_feed,
)
from threatwatch.models.events import ThreatEvent
from threatwatch.models.pipeline import PhaseRecord, PipelineContext
from threatwatch.utils.logging_utils import get_run_logger

logger = logging.getLogger(__name__)


def _make_run_id(label: str) -> str:
    """Generate a sortable run ID from UTC timestamp and a label slug.

    Returns:
        Run ID string in the form ``YYYYMMDD_HHMMSS_<slug>``.
    """
    timestamp = datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S")
    slug = re.sub(r"[^a-z0-9]+", "_", label.lower())[:40].strip("_") or "run"
    return f"{timestamp}_{slug}"


def _new_context(config: PipelineConfig, label: str, export: bool) -> PipelineContext:
    run_id = _make_run_id(label)
    output_dir = ensure_output_dir(config.output_root, run_id) if export else None
    context = PipelineContext(config=config, run_id=run_id, output_dir=output_dir)
    context.start_time = datetime.now(timezone.utc)
    logger.info("Pipeline: starting run %s → %s", run_id, output_dir or "(no export)")
    return context


def _run_phase(
    context: PipelineContext,
    phase_name: str,
    agent: BaseAgent,
    result_attr: str,
) -> bool:
    """Execute a single pipeline phase and record its timing.

    Args:
        context: Shared pipeline context.
        phase_name: Human-readable phase label for logs and phase_log.
        agent: Agent instance with a ``run(context)`` method.
        result_attr: Name of the PipelineContext field to write the result to.

    Returns:
        True if the phase completed without a FAILED status.
    """
    record: PhaseRecord = context.log_phase_start(phase_name)
    logger.info("Pipeline: starting %s", phase_name)

    try:
        result = agent._run_timed(context)
    except Exception as exc:
        context.log_phase_end(record, status=AgentStatus.FAILED)
        logger.exception("Pipeline: %s raised unhandled exception: %s", phase_name, exc)
        context.add_error(f"{phase_name} failed with exception: {exc}")
        return False

    setattr(context, result_attr, result)
    status = getattr(result, "status", AgentStatus.OK)
    context.log_phase_end(record, status=str(status))

    for w in getattr(result, "warnings", []):
        context.add_warning(f"[{phase_name}] {w}")

    if status == AgentStatus.FAILED:
        context.add_error(f"{phase_name}: {getattr(result, 'error', None) or 'failed'}")
        return False

    logger.info("Pipeline: %s complete (%.1fs, status=%s)",
                phase_name, record.elapsed_seconds, status)
    return True


def run_events(
    config: PipelineConfig,
    client: Optional[ValyuClient] = None,
    graph: Optional[RelationshipGraph] = None,
    export: bool = True,
) -> PipelineContext:
    """Refresh the threat event feed.

    Args:
        config: Runtime configuration (queries, limits, credentials).
        client: Optional pre-built search client.
        graph: Optional relationship graph for geocoding.
        export: Write events.json into a fresh run directory.

    Returns:
        PipelineContext with ``event_feed`` populated.
    """
    label = config.queries[0] if len(config.queries) == 1 else "events"
    context = _new_context(config, label, export)

    ok = _run_phase(context, "EventAgent", EventAgent(client=client, graph=graph), "event_feed")
    if context.output_dir is not None and context.event_feed is not None and ok:
        export_event_feed(context.event_feed, context.output_dir)

    _finalise(context)
    return context


def run_cascade(
    config: PipelineConfig,
    event: ThreatEvent,
    client: Optional[ValyuClient] = None,
    graph: Optional[RelationshipGraph] = None,
    random_source: Optional[RandomSource] = None,
    export: bool = True,
) -> PipelineContext:
    """Run cascade analysis for one selected event.

    Args:
        config: Runtime configuration (cascade mode, weights, credentials).
        event: Source event to analyze.
        client: Optional pre-built answer client.
        graph: Optional relationship graph.
        random_source: Optional randomness for the heuristic estimator.
        export: Write cascade.json into a fresh run directory.

    Returns:
        PipelineContext with ``cascade_result`` populated.
    """
    context = _new_context(config, f"cascade_{event.location.country or 'unknown'}", export)
    context.selected_event = event

    agent = CascadeAgent(client=client, graph=graph, random_source=random_source)
    _run_phase(context, "CascadeAgent", agent, "cascade_result")
    if context.output_dir is not None and context.cascade_result is not None:
        export_cascade_analysis(context.cascade_result, context.output_dir)

    _finalise(context)
    return context


def _finalise(context: PipelineContext) -> None:
    """Record pipeline end time and emit a summary log line."""
    context.end_time = datetime.now(timezone.utc)
    elapsed = (context.end_time - context.start_time).total_seconds() if context.start_time else 0.0
    run_logger = get_run_logger("pipeline", context.run_id)
    run_logger.info(
        "Pipeline: complete in %.1fs | phases=%d | warnings=%d | errors=%d",
        elapsed,
        len(context.phase_log),
        len(context.warnings),
        len(context.errors),
    )
    for err in context.errors:
        run_logger.error("Pipeline error: %s", err)
