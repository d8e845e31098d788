"""ThreatWatch utilities package.

All utilities are stateless pure functions with no external calls or side effects.
"""

from threatwatch.utils.date_utils import normalize_published_date, parse_iso, utc_now_iso
from threatwatch.utils.geo_utils import is_unresolved, is_valid_coordinate
from threatwatch.utils.text import normalize_content

__all__ = [
    "normalize_published_date",
    "parse_iso",
    "utc_now_iso",
    "is_unresolved",
    "is_valid_coordinate",
    "normalize_content",
]
