#!/usr/bin/env python3
"""ThreatWatch CLI — refresh the event feed or run a cascade analysis.

Usage:
    python scripts/run_pipeline.py events
    python scripts/run_pipeline.py events --query "Red Sea shipping attacks"
    python scripts/run_pipeline.py cascade --event outputs/runs/<run>/events.json
    python scripts/run_pipeline.py cascade --event event.json --mode structured --seed 7
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

# Ensure project root is on sys.path for consistent import resolution
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

from config.defaults import (  # noqa: E402
    DEFAULT_LOG_LEVEL,
    EVENT_MAX_WORKERS,
    OUTPUT_ROOT,
    SEARCH_MAX_RESULTS,
)
from config.settings import PipelineConfig  # noqa: E402


def build_arg_parser() -> argparse.ArgumentParser:
    """Build the argparse parser with ``events`` and ``cascade`` subcommands."""
    parser = argparse.ArgumentParser(
        prog="run_pipeline",
        description="ThreatWatch — threat event feed and cascade analysis",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )

    # ── Shared options ──────────────────────────────────────────────────────────
    parser.add_argument(
        "--output-root",
        type=str,
        default=OUTPUT_ROOT,
        help="Root directory for per-run output folders",
    )
    parser.add_argument(
        "--no-export",
        action="store_true",
        default=False,
        help="Print the result instead of writing run artifacts",
    )
    parser.add_argument(
        "--country-profiles",
        type=str,
        default=None,
        help="YAML file replacing the built-in country relationship table",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=DEFAULT_LOG_LEVEL,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity",
    )
    parser.add_argument(
        "--log-file",
        type=str,
        default=None,
        help="Also write logs to this file",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    # ── events ──────────────────────────────────────────────────────────────────
    events = subparsers.add_parser(
        "events",
        help="Refresh the threat event feed",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    events.add_argument(
        "--query",
        type=str,
        action="append",
        default=[],
        dest="queries",
        metavar="QUERY",
        help="Search query (repeatable, max 5). Defaults to the built-in threat queries.",
    )
    events.add_argument(
        "--max-results",
        type=int,
        default=SEARCH_MAX_RESULTS,
        help="Results per query for multi-query refreshes",
    )
    events.add_argument(
        "--workers",
        type=int,
        default=EVENT_MAX_WORKERS,
        help="Concurrent search/assembly workers",
    )

    # ── cascade ─────────────────────────────────────────────────────────────────
    cascade = subparsers.add_parser(
        "cascade",
        help="Estimate cascade effects for one event",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    cascade.add_argument(
        "--event",
        type=str,
        required=True,
        help="JSON file holding an event object or an events.json feed (first event used)",
    )
    cascade.add_argument(
        "--mode",
        type=str,
        default="heuristic",
        choices=["heuristic", "structured"],
        help="Score locally or use the provider's structured estimates",
    )
    cascade.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for the heuristic estimator's jitter (reproducible runs)",
    )

    return parser


def args_to_config(args: argparse.Namespace) -> PipelineConfig:
    """Convert parsed CLI arguments to a PipelineConfig instance."""
    kwargs = {
        "output_root": args.output_root,
        "log_level": args.log_level,
    }
    if args.country_profiles:
        kwargs["country_profiles_path"] = args.country_profiles
    if args.command == "events":
        kwargs.update(
            queries=list(args.queries),
            search_max_results=args.max_results,
            event_max_workers=args.workers,
        )
    else:
        kwargs["cascade_mode"] = args.mode
    return PipelineConfig(**kwargs)


def main() -> None:
    """CLI entrypoint — parse arguments, build config, run the selected flow."""
    parser = build_arg_parser()
    args = parser.parse_args()

    from threatwatch.utils.logging_utils import configure_logging

    configure_logging(log_level=args.log_level, log_file=args.log_file)
    logger = logging.getLogger("threatwatch.cli")

    try:
        config = args_to_config(args)
    except ValueError as exc:
        parser.error(str(exc))

    from threatwatch import pipeline

    export = not args.no_export
    try:
        if args.command == "events":
            context = pipeline.run_events(config, export=export)
            output = context.event_feed.to_dict() if context.event_feed else None
        else:
            from threatwatch.analysis.cascade_estimator import SystemRandomSource
            from threatwatch.io.persistence import load_event

            event = load_event(args.event)
            if event is None:
                logger.error("Could not read an event from %s", args.event)
                sys.exit(1)
            context = pipeline.run_cascade(
                config,
                event,
                random_source=SystemRandomSource(args.seed),
                export=export,
            )
            result = context.cascade_result
            if result is None:
                output = None
            elif result.analysis is not None:
                output = result.analysis.to_dict()
            else:
                output = {"error": result.error}
    except KeyboardInterrupt:
        logger.info("Run interrupted by user")
        sys.exit(0)
    except Exception as exc:
        logger.exception("Run failed with unhandled exception: %s", exc)
        sys.exit(1)

    if not export and output is not None:
        print(json.dumps(output, indent=2, ensure_ascii=False))

    if context.errors:
        sys.exit(1)
    logger.info("Run complete. Run ID: %s", context.run_id)


if __name__ == "__main__":
    main()
