"""Agent base class and status codes.

EventAgent and CascadeAgent both subclass BaseAgent. The pipeline only ever
calls ``_run_timed(context)``, which wraps ``run()`` with timing and an
output sanity check.
"""

from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from threatwatch.models.pipeline import PipelineContext

logger = logging.getLogger(__name__)


class AgentStatus:
    """Values of EventFeed.status and CascadeAgentResult.status.

    PARTIAL means the agent produced usable output despite some upstream
    failures (e.g. one of several search queries erroring).
    """

    OK = "OK"
    PARTIAL = "PARTIAL"
    FAILED = "FAILED"

    ALL = (OK, PARTIAL, FAILED)


class BaseAgent(ABC):
    """A single pipeline step.

    Collaborators (the Valyu client, the relationship graph, random sources)
    are injected at construction and shared across runs; anything specific to
    one run travels on the PipelineContext.
    """

    name: str = "BaseAgent"

    @abstractmethod
    def run(self, context: "PipelineContext") -> Any:
        """Produce this agent's result (EventFeed or CascadeAgentResult).

        Agents translate provider failures into a FAILED/PARTIAL status on the
        result instead of raising; only programming errors escape.
        """

    def validate_output(self, result: Any) -> bool:
        """Return True if ``result`` carries a recognised status and serializes."""
        if result is None or not hasattr(result, "to_dict"):
            return False
        return getattr(result, "status", None) in AgentStatus.ALL

    def _run_timed(self, context: "PipelineContext") -> Any:
        start = time.monotonic()
        try:
            result = self.run(context)
        except Exception:
            logger.error(
                "Agent %s raised after %.2fs", self.name, time.monotonic() - start, exc_info=True
            )
            raise

        if not self.validate_output(result):
            logger.warning("Agent %s returned an unexpected result: %r", self.name, result)
        logger.info(
            "Agent %s finished in %.2fs (status=%s)",
            self.name,
            time.monotonic() - start,
            getattr(result, "status", "?"),
        )
        return result
