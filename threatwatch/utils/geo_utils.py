"""Geographic utility functions for ThreatWatch.

Pure coordinate checks. No I/O, no external calls.
"""

from __future__ import annotations


def is_valid_coordinate(lat: float, lon: float) -> bool:
    """Return True when (lat, lon) lies within WGS84 bounds.

    Args:
        lat: Latitude in decimal degrees.
        lon: Longitude in decimal degrees.
    """
    return -90.0 <= lat <= 90.0 and -180.0 <= lon <= 180.0


def is_unresolved(lat: float, lon: float) -> bool:
    """Return True for the (0, 0) sentinel geocoders emit when nothing matched."""
    return lat == 0 and lon == 0
