"""Pipeline orchestration data models for ThreatWatch.

Defines PipelineContext (shared state object), CascadeAgentResult, and
PhaseRecord (per-phase timing log).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

from config.settings import PipelineConfig
from threatwatch.models.cascade import CascadeAnalysis
from threatwatch.models.events import ThreatEvent
from threatwatch.models.search import EventFeed


@dataclass
class CascadeAgentResult:
    """Output of the CascadeAgent.

    ``analysis`` is None only when the run failed; an analysis with zero
    effects is a successful, if uneventful, outcome.
    """

    analysis: Optional[CascadeAnalysis] = None
    status: str = "OK"
    error: Optional[str] = None
    requires_reauth: bool = False
    warnings: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize as the analysis itself, or an ``{"error": ...}`` object on failure."""
        if self.analysis is not None:
            return self.analysis.to_dict()
        data: Dict[str, Any] = {"error": self.error or "Cascade analysis failed"}
        if self.requires_reauth:
            data["requiresReauth"] = True
        return data


@dataclass
class PhaseRecord:
    """Timing and status record for a single pipeline phase."""

    phase_name: str
    start_time: datetime
    end_time: Optional[datetime] = None
    status: str = "OK"

    @property
    def elapsed_seconds(self) -> float:
        if self.end_time is None:
            return 0.0
        return (self.end_time - self.start_time).total_seconds()


@dataclass
class PipelineContext:
    """Shared state object threaded through the pipeline agents.

    The event feed flow populates ``event_feed``; the cascade flow reads
    ``selected_event`` and populates ``cascade_result``.
    """

    config: PipelineConfig
    run_id: str
    output_dir: Optional[Path] = None

    selected_event: Optional[ThreatEvent] = None
    event_feed: Optional[EventFeed] = None
    cascade_result: Optional[CascadeAgentResult] = None

    phase_log: List[PhaseRecord] = field(default_factory=list)
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    warnings: List[str] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)

    def log_phase_start(self, phase_name: str) -> PhaseRecord:
        record = PhaseRecord(phase_name=phase_name, start_time=datetime.now(timezone.utc))
        self.phase_log.append(record)
        return record

    def log_phase_end(self, record: PhaseRecord, status: str = "OK") -> None:
        record.end_time = datetime.now(timezone.utc)
        record.status = status

    def add_warning(self, warning: str) -> None:
        self.warnings.append(warning)

    def add_error(self, error: str) -> None:
        self.errors.append(error)
