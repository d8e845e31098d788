"""Exception hierarchy for ThreatWatch.

Unknown-country lookups are not errors: the relationship graph returns None
and dependent scoring treats the country as contributing nothing.
"""

from __future__ import annotations

from typing import Any, Optional

from config.defaults import PARSE_ERROR_PREVIEW_CHARS


class ThreatWatchError(Exception):
    """Base class for all ThreatWatch errors."""


class ValidationError(ThreatWatchError):
    """Malformed input rejected before an event is constructed."""


class ParseError(ThreatWatchError):
    """An external structured payload could not be read as the expected schema.

    Args:
        message: Description of what failed to parse.
        raw: The offending payload (string or native object).
    """

    def __init__(self, message: str, raw: Any = None) -> None:
        super().__init__(message)
        self.raw_preview = _preview(raw)

    def __str__(self) -> str:
        base = super().__str__()
        if self.raw_preview:
            return f"{base} (payload starts: {self.raw_preview!r})"
        return base


class SearchAPIError(ThreatWatchError):
    """Transport or HTTP failure from the search/answer provider.

    Args:
        message: Human-readable failure description.
        status_code: HTTP status code, when a response was received.
        requires_reauth: True when the provider rejected the credentials.
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        requires_reauth: bool = False,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.requires_reauth = requires_reauth


def _preview(raw: Any) -> str:
    if raw is None:
        return ""
    text = raw if isinstance(raw, str) else repr(raw)
    return text[:PARSE_ERROR_PREVIEW_CHARS]
