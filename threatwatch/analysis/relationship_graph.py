"""Country relationship graph for ThreatWatch cascade analysis.

Wraps the static country table in a frozen NetworkX DiGraph. Each country
with a profile is a node; every neighbor or economic-partner reference is a
directed edge from the declaring country, flagged ``neighbor`` and/or
``partner``. Relationships are one-directional as declared: Ukraine listing
Germany as a partner does not make Ukraine a partner of Germany.

References to countries without a profile become bare nodes. They answer
relationship queries normally but profile() returns None for them, so they
contribute nothing to cascade scoring.

The graph is built once and never mutated; share one instance freely across
concurrent requests.
"""

from __future__ import annotations

import logging
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple, Union

import networkx as nx
import yaml

from threatwatch.analysis.country_data import COUNTRY_PROFILES
from threatwatch.models.countries import CountryProfile

logger = logging.getLogger(__name__)


def _link(graph: "nx.DiGraph", source: str, target: str, relation: str) -> None:
    if graph.has_edge(source, target):
        graph[source][target][relation] = True
    else:
        graph.add_edge(source, target, **{relation: True})


class RelationshipGraph:
    """Read-only lookup of country profiles and their relationships.

    Args:
        profiles: Canonical country name → CountryProfile. Iteration order
            is preserved and defines countries() order.
    """

    def __init__(self, profiles: Mapping[str, CountryProfile]) -> None:
        self._profiles: Mapping[str, CountryProfile] = MappingProxyType(dict(profiles))

        graph = nx.DiGraph()
        for name in self._profiles:
            graph.add_node(name, has_profile=True)
        for name, profile in self._profiles.items():
            for neighbor in profile.neighbors:
                _link(graph, name, neighbor, "neighbor")
            for partner in profile.economic_partners:
                _link(graph, name, partner, "partner")
        self._graph = nx.freeze(graph)

    # ── Construction ──────────────────────────────────────────────────────────

    @classmethod
    def from_mapping(cls, table: Mapping[str, Mapping[str, Any]]) -> "RelationshipGraph":
        """Build a graph from a raw name → fields table.

        Raises:
            ValueError: If an entry lacks code/lat/lng or has non-numeric coordinates.
        """
        profiles: Dict[str, CountryProfile] = {}
        for name, data in table.items():
            try:
                profiles[name] = CountryProfile.from_mapping(name, data)
            except (KeyError, TypeError, ValueError) as exc:
                raise ValueError(f"Invalid country profile for {name!r}: {exc}") from exc
        return cls(profiles)

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> "RelationshipGraph":
        """Load a graph from a YAML file shaped like the built-in table."""
        with open(path, "r", encoding="utf-8") as f:
            table = yaml.safe_load(f)
        if not isinstance(table, dict):
            raise ValueError(f"Country profile file {path} must contain a mapping at top level")
        return cls.from_mapping(table)

    # ── Lookup ────────────────────────────────────────────────────────────────

    def profile(self, country: Optional[str]) -> Optional[CountryProfile]:
        """Return the profile for ``country``, or None when it has no entry."""
        if not country:
            return None
        return self._profiles.get(country)

    def countries(self) -> Tuple[str, ...]:
        """Return every profiled country name in table order."""
        return tuple(self._profiles)

    def __contains__(self, country: object) -> bool:
        return country in self._profiles

    def __len__(self) -> int:
        return len(self._profiles)

    def __iter__(self) -> Iterator[str]:
        return iter(self._profiles)

    # ── Relationship queries ──────────────────────────────────────────────────

    def _edge_flag(self, source: str, target: str, relation: str) -> bool:
        if not self._graph.has_edge(source, target):
            return False
        return bool(self._graph[source][target].get(relation, False))

    def is_neighbor(self, source: str, target: str) -> bool:
        """True if ``source`` declares ``target`` as a neighbor."""
        return self._edge_flag(source, target, "neighbor")

    def is_economic_partner(self, source: str, target: str) -> bool:
        """True if ``source`` declares ``target`` as an economic partner."""
        return self._edge_flag(source, target, "partner")

    def shares_alliance(self, a: str, b: str) -> bool:
        """True if both countries have profiles with at least one common alliance tag."""
        profile_a = self.profile(a)
        profile_b = self.profile(b)
        if profile_a is None or profile_b is None:
            return False
        return bool(set(profile_a.alliances) & set(profile_b.alliances))

    def same_region(self, a: str, b: str) -> bool:
        """True if both countries have profiles in the same region."""
        profile_a = self.profile(a)
        profile_b = self.profile(b)
        if profile_a is None or profile_b is None:
            return False
        return profile_a.region == profile_b.region

    def dangling_references(self) -> List[str]:
        """Country names referenced by some profile but lacking one themselves."""
        return sorted(
            node for node, has_profile in self._graph.nodes(data="has_profile") if not has_profile
        )


def load_relationship_graph(path: Optional[Union[str, Path]] = None) -> RelationshipGraph:
    """Load the relationship graph from ``path`` or the built-in table.

    Args:
        path: Optional YAML file replacing the built-in country table.

    Returns:
        A frozen RelationshipGraph.
    """
    if path:
        graph = RelationshipGraph.from_yaml(path)
        logger.info("Loaded %d country profiles from %s", len(graph), path)
    else:
        graph = RelationshipGraph.from_mapping(COUNTRY_PROFILES)

    dangling = graph.dangling_references()
    if dangling:
        logger.debug(
            "Relationship graph: %d referenced countries have no profile: %s",
            len(dangling),
            ", ".join(dangling),
        )
    return graph
