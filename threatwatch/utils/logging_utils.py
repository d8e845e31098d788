"""Logging setup for the ThreatWatch CLI and pipeline.

config/logging.yaml is the single source of handler and level settings;
--log-level and --log-file from scripts/run_pipeline.py are layered on top.
"""

from __future__ import annotations

import logging
import logging.config
import os
from pathlib import Path
from typing import Any, MutableMapping, Optional

import yaml


def configure_logging(
    config_path: Optional[str] = None,
    log_level: Optional[str] = None,
    log_file: Optional[str] = None,
) -> None:
    """Apply config/logging.yaml, or basicConfig when the file is missing.

    Args:
        config_path: Path to logging.yaml (defaults to config/logging.yaml).
        log_level: Override log level (e.g., "DEBUG", "INFO", "WARNING").
        log_file: Optional log file; adds a FileHandler to every configured logger.
    """
    if config_path is None:
        config_path = str(Path(__file__).parent.parent.parent / "config" / "logging.yaml")

    if os.path.exists(config_path):
        with open(config_path, "r", encoding="utf-8") as f:
            cfg = yaml.safe_load(f)

        if log_file:
            cfg.setdefault("handlers", {})["file"] = {
                "class": "logging.FileHandler",
                "formatter": next(iter(cfg.get("formatters", {})), None),
                "filename": log_file,
                "encoding": "utf-8",
            }
            if cfg["handlers"]["file"]["formatter"] is None:
                del cfg["handlers"]["file"]["formatter"]
            for logger_cfg in cfg.get("loggers", {}).values():
                logger_cfg.setdefault("handlers", []).append("file")

        if log_level and "loggers" in cfg:
            for logger_cfg in cfg["loggers"].values():
                logger_cfg["level"] = log_level.upper()
            if "root" in cfg:
                cfg["root"]["level"] = log_level.upper()

        logging.config.dictConfig(cfg)
    else:
        logging.basicConfig(
            level=getattr(logging, (log_level or "INFO").upper(), logging.INFO),
            format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            filename=log_file,
        )


def get_logger(name: str) -> logging.Logger:
    """Return ``threatwatch.<name>`` unless ``name`` is already namespaced."""
    if name.startswith("threatwatch"):
        return logging.getLogger(name)
    return logging.getLogger(f"threatwatch.{name}")


class RunContextAdapter(logging.LoggerAdapter):
    """Prefix every message with the pipeline run id, e.g. ``[20240115_120000_events]``."""

    def process(
        self, msg: str, kwargs: MutableMapping[str, Any]
    ) -> tuple[str, MutableMapping[str, Any]]:
        run_id = self.extra.get("run_id", "unknown")
        return f"[{run_id}] {msg}", kwargs


def get_run_logger(name: str, run_id: str) -> RunContextAdapter:
    """Logger for one pipeline run; see pipeline._make_run_id for the id format."""
    return RunContextAdapter(get_logger(name), {"run_id": run_id})
