"""ThreatWatch agents package.

All agents inherit from BaseAgent and operate on PipelineContext.
Agents do not import from each other; all communication flows through context.
"""

from threatwatch.agents.base import AgentStatus, BaseAgent
from threatwatch.agents.cascade_agent import CascadeAgent
from threatwatch.agents.event_agent import EventAgent

__all__ = [
    "BaseAgent",
    "AgentStatus",
    "CascadeAgent",
    "EventAgent",
]
