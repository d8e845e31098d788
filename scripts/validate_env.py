#!/usr/bin/env python3
"""ThreatWatch pre-flight environment validation.

Sections:
  1. Interpreter and third-party packages
  2. ThreatWatch configuration (PipelineConfig, country table)
  3. Offline smoke run of the classifier and cascade estimator
  4. Output directory
  5. Valyu API reachability (optional)

Usage:
    python scripts/validate_env.py
    python scripts/validate_env.py --skip-network
"""

from __future__ import annotations

import argparse
import importlib
import sys
from pathlib import Path
from typing import Callable, List, NamedTuple

_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

MIN_PYTHON = (3, 10)

# (import name, distribution name)
THIRD_PARTY = [
    ("requests", "requests"),
    ("networkx", "networkx"),
    ("yaml", "PyYAML"),
    ("dotenv", "python-dotenv"),
    ("dateutil", "python-dateutil"),
]

OK, FAIL, WARN = "ok", "fail", "warn"

_MARKS = {
    OK: "\033[32m✓\033[0m",
    FAIL: "\033[31m✗\033[0m",
    WARN: "\033[33m⚠\033[0m",
}


class Check(NamedTuple):
    status: str
    message: str


# ── 1. Interpreter and packages ──────────────────────────────────────────────────

def check_interpreter() -> List[Check]:
    version = ".".join(str(part) for part in sys.version_info[:3])
    if sys.version_info[:2] < MIN_PYTHON:
        wanted = ".".join(str(part) for part in MIN_PYTHON)
        return [Check(FAIL, f"Python {version} is older than {wanted}")]
    return [Check(OK, f"Python {version}")]


def check_packages() -> List[Check]:
    """Import each third-party dependency and report its version."""
    checks = []
    for import_name, dist_name in THIRD_PARTY:
        try:
            module = importlib.import_module(import_name)
        except ImportError:
            checks.append(Check(FAIL, f"{dist_name} missing, install with: pip install {dist_name}"))
            continue
        checks.append(Check(OK, f"{dist_name} {getattr(module, '__version__', '')}".rstrip()))
    return checks


# ── 2. Configuration ─────────────────────────────────────────────────────────────

def check_configuration() -> List[Check]:
    """Build a PipelineConfig from the environment and load its country table."""
    from config.settings import PipelineConfig
    from threatwatch.analysis.relationship_graph import load_relationship_graph

    try:
        config = PipelineConfig()
    except ValueError as exc:
        return [Check(FAIL, f"PipelineConfig rejected the environment: {exc}")]

    checks = []
    if config.valyu_api_key:
        key = config.valyu_api_key
        shown = f"{key[:4]}…{key[-4:]}" if len(key) > 8 else "set"
        checks.append(Check(OK, f"VALYU_API_KEY {shown}"))
    else:
        checks.append(Check(FAIL, "VALYU_API_KEY is not set; search and answer calls will fail"))
    checks.append(Check(OK, f"Valyu endpoint {config.valyu_base_url}"))
    checks.append(Check(OK, f"Cascade mode {config.cascade_mode}"))

    source = config.country_profiles_path or "built-in table"
    try:
        graph = load_relationship_graph(config.country_profiles_path or None)
    except (OSError, ValueError) as exc:
        checks.append(Check(FAIL, f"Country table ({source}) failed to load: {exc}"))
        return checks
    dangling = graph.dangling_references()
    status = OK if len(graph) else FAIL
    checks.append(Check(status, f"Country table ({source}): {len(graph)} profiles"))
    if dangling:
        checks.append(Check(WARN, f"{len(dangling)} referenced countries have no profile"))
    return checks


# ── 3. Smoke run ─────────────────────────────────────────────────────────────────

def check_smoke_run() -> List[Check]:
    """Classify a canned headline and estimate its cascade without network access."""
    from threatwatch.analysis.cascade_estimator import CascadeEstimator, SystemRandomSource
    from threatwatch.analysis.event_assembler import assemble_event
    from threatwatch.analysis.geocoder import GazetteerGeocoder
    from threatwatch.analysis.relationship_graph import load_relationship_graph

    graph = load_relationship_graph()
    title = "Border clash reported as Ukraine mobilizes troops"
    location = GazetteerGeocoder(graph).geocode(title, title=title)
    if location.is_unresolved():
        return [Check(FAIL, "Geocoder could not place the smoke-test headline")]

    event = assemble_event(title=title, content="", location=location, source="validate_env")
    estimator = CascadeEstimator(graph, random_source=SystemRandomSource(seed=0))
    analysis = estimator.estimate(event)
    return [
        Check(OK, f"Classified as {event.category}/{event.threat_level}"),
        Check(
            OK if analysis.effects else FAIL,
            f"Cascade estimate: {analysis.total_affected_countries} countries, "
            f"{analysis.high_risk_count} high risk",
        ),
    ]


# ── 4. Output directory ──────────────────────────────────────────────────────────

def check_output_dir() -> List[Check]:
    from config.settings import PipelineConfig

    output_path = Path(PipelineConfig().output_root)
    if not output_path.is_absolute():
        output_path = _ROOT / output_path
    probe = output_path / ".write_probe"
    try:
        output_path.mkdir(parents=True, exist_ok=True)
        probe.write_text("ok", encoding="utf-8")
        probe.unlink()
    except OSError as exc:
        return [Check(FAIL, f"Cannot write to {output_path}: {exc}")]
    return [Check(OK, f"Writable: {output_path}")]


# ── 5. Network ───────────────────────────────────────────────────────────────────

def check_network(timeout: int = 10) -> List[Check]:
    """Unreachable endpoints are reported as warnings, not failures."""
    import requests

    from config.settings import PipelineConfig

    base_url = PipelineConfig().valyu_base_url
    try:
        resp = requests.head(base_url, timeout=timeout)
    except requests.exceptions.RequestException as exc:
        return [Check(WARN, f"{base_url} unreachable: {exc}")]
    return [Check(OK, f"{base_url} answered HTTP {resp.status_code}")]


# ── Report ───────────────────────────────────────────────────────────────────────

def _run_section(title: str, check_fn: Callable[[], List[Check]]) -> int:
    print(f"\n\033[1m{title}\033[0m")
    try:
        checks = check_fn()
    except ImportError as exc:
        checks = [Check(FAIL, f"Import failed: {exc}")]
    for check in checks:
        print(f"  {_MARKS[check.status]}  {check.message}")
    return sum(1 for check in checks if check.status == FAIL)


def main() -> None:
    parser = argparse.ArgumentParser(description="ThreatWatch pre-flight environment validation")
    parser.add_argument(
        "--skip-network",
        action="store_true",
        help="Do not contact the Valyu API",
    )
    args = parser.parse_args()

    sections = [
        ("1. Interpreter and packages", lambda: check_interpreter() + check_packages()),
        ("2. Configuration", check_configuration),
        ("3. Smoke run", check_smoke_run),
        ("4. Output directory", check_output_dir),
    ]
    if not args.skip_network:
        sections.append(("5. Network", check_network))

    failures = sum(_run_section(title, fn) for title, fn in sections)

    print()
    if failures:
        print(f"{failures} check(s) failed. Fix them before running ThreatWatch.")
        sys.exit(1)
    print("Environment is ready.")


if __name__ == "__main__":
    main()
