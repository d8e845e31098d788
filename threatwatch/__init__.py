"""ThreatWatch — geopolitical threat event classification and cascade estimation.

Public API surface:
    - PipelineConfig: Runtime configuration
    - run_events: Refresh the threat event feed
    - run_cascade: Estimate cascade effects for one event
"""

__version__ = "1.0.0"
__author__ = "ThreatWatch Contributors"

from config.settings import PipelineConfig
from threatwatch.pipeline import run_cascade, run_events

__all__ = [
    "__version__",
    "PipelineConfig",
    "run_cascade",
    "run_events",
]
