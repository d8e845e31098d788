"""ThreatWatch I/O package.

File read/write operations only. No business logic in this layer.
"""

from threatwatch.io.persistence import (
    ensure_output_dir,
    export_cascade_analysis,
    export_event_feed,
    load_event,
    load_json,
    save_json,
)

__all__ = [
    "save_json",
    "load_json",
    "load_event",
    "ensure_output_dir",
    "export_event_feed",
    "export_cascade_analysis",
]
