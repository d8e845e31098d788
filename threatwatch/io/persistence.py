"""JSON persistence utilities for ThreatWatch.

Provides atomic file writes (write-to-temp-then-rename), safe JSON
load/save operations, and the per-run artifact exporters. File I/O only,
no business logic.
"""

from __future__ import annotations

import dataclasses
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Optional

from threatwatch.models.events import ThreatEvent
from threatwatch.models.pipeline import CascadeAgentResult
from threatwatch.models.search import EventFeed

logger = logging.getLogger(__name__)

EVENTS_FILENAME = "events.json"
CASCADE_FILENAME = "cascade.json"


class _DataclassEncoder(json.JSONEncoder):
    """JSON encoder that handles dataclasses and Path objects."""

    def default(self, obj: Any) -> Any:
        if hasattr(obj, "to_dict"):
            return obj.to_dict()
        if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
            return dataclasses.asdict(obj)
        if isinstance(obj, Path):
            return str(obj)
        return super().default(obj)


def save_json(data: Any, path: str | Path, indent: int = 2) -> None:
    """Atomically write data to a JSON file.

    Uses a write-to-temp-then-rename strategy to prevent partial writes.
    Creates parent directories if they do not exist.

    Args:
        data: Data to serialize. Supports dicts, lists, models with
            to_dict(), plain dataclasses, and Path objects.
        path: Output file path.
        indent: JSON indentation level (default: 2).
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    try:
        serialized = json.dumps(data, indent=indent, ensure_ascii=False, cls=_DataclassEncoder)
    except (TypeError, ValueError) as exc:
        logger.error("JSON serialization failed for %s: %s", path, exc)
        raise

    with tempfile.NamedTemporaryFile(
        mode="w",
        encoding="utf-8",
        dir=path.parent,
        delete=False,
        suffix=".tmp",
    ) as tmp:
        tmp.write(serialized)
        tmp_path = tmp.name

    try:
        os.replace(tmp_path, path)
    except OSError as exc:
        os.unlink(tmp_path)
        logger.error("Atomic rename failed for %s: %s", path, exc)
        raise

    logger.debug("Saved JSON to %s (%d bytes)", path, len(serialized))


def load_json(path: str | Path) -> Optional[Any]:
    """Load and parse a JSON file.

    Returns None if the file does not exist or cannot be parsed.
    """
    path = Path(path)
    if not path.exists():
        logger.debug("JSON file not found: %s", path)
        return None

    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except (json.JSONDecodeError, OSError) as exc:
        logger.warning("Failed to load JSON from %s: %s", path, exc)
        return None


def ensure_output_dir(base_dir: str | Path, run_id: str) -> Path:
    """Create and return the output directory for a pipeline run.

    Args:
        base_dir: Root output directory (e.g., outputs/runs).
        run_id: Pipeline run identifier (YYYYMMDD_HHMMSS_<slug>).

    Returns:
        Path to the created run output directory.
    """
    run_dir = Path(base_dir) / run_id
    run_dir.mkdir(parents=True, exist_ok=True)
    return run_dir


def load_event(path: str | Path) -> Optional[ThreatEvent]:
    """Load a single ThreatEvent from a JSON file.

    Accepts either a bare event object or an events.json feed, in which case
    the first event is returned.
    """
    data = load_json(path)
    if isinstance(data, dict) and isinstance(data.get("events"), list):
        data = data["events"][0] if data["events"] else None
    if not isinstance(data, dict):
        logger.warning("No event object found in %s", path)
        return None
    return ThreatEvent.from_dict(data)


def export_event_feed(feed: EventFeed, output_dir: str | Path) -> Path:
    """Write the event feed to ``output_dir/events.json``."""
    path = Path(output_dir) / EVENTS_FILENAME
    save_json(feed.to_dict(), path)
    logger.info("Exported %d events to %s", feed.count, path)
    return path


def export_cascade_analysis(result: CascadeAgentResult, output_dir: str | Path) -> Path:
    """Write a cascade result to ``output_dir/cascade.json``.

    Failed results are written as ``{"error": ...}`` so the artifact always
    reflects the outcome the caller saw.
    """
    path = Path(output_dir) / CASCADE_FILENAME
    save_json(result.to_dict(), path)
    logger.info("Exported cascade analysis to %s", path)
    return path
