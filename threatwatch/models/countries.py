"""Country relationship data model for ThreatWatch."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Tuple


@dataclass(frozen=True)
class CountryProfile:
    """Static relationship-graph entry for one country.

    Relationship lists keep their declared order: the cascade estimator takes
    the leading economic partners, so order is part of the data.
    """

    name: str
    code: str               # ISO 3166-1 alpha-2
    lat: float
    lng: float
    neighbors: Tuple[str, ...] = ()
    economic_partners: Tuple[str, ...] = ()
    alliances: Tuple[str, ...] = ()
    region: str = ""

    @classmethod
    def from_mapping(cls, name: str, data: Dict[str, Any]) -> "CountryProfile":
        """Build a profile from a raw table entry (camelCase or snake_case keys)."""
        partners = data.get("economicPartners", data.get("economic_partners", ()))
        return cls(
            name=name,
            code=str(data["code"]).upper(),
            lat=float(data["lat"]),
            lng=float(data["lng"]),
            neighbors=tuple(data.get("neighbors") or ()),
            economic_partners=tuple(partners or ()),
            alliances=tuple(data.get("alliances") or ()),
            region=str(data.get("region", "")),
        )
