"""Valyu search/answer REST API client for ThreatWatch.

Handles all HTTP communication with the Valyu API: request construction,
credential headers, and response-shape normalization.

No business logic lives here. This client returns SearchResult models and
raw answer dicts. Classification, geocoding and cascade estimation happen in
the analysis and agent layers.

Provider rules:
- One attempt per call with the caller's timeout. No retry loop: a failed
  call surfaces immediately as SearchAPIError so the user can retry.
- HTTP 401/403 means the credentials were rejected; the error carries
  requires_reauth=True.
- Result dates arrive as ISO strings or epoch numbers; normalize via date_utils.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Sequence

import requests
from requests import Session
from requests.adapters import HTTPAdapter

from config.defaults import (
    ANSWER_REQUEST_TIMEOUT,
    SEARCH_MAX_RESULTS,
    SEARCH_REQUEST_TIMEOUT,
    VALYU_BASE_URL,
)
from threatwatch.exceptions import SearchAPIError
from threatwatch.models.search import SearchResult
from threatwatch.utils.date_utils import normalize_published_date

logger = logging.getLogger(__name__)

_SEARCH_PATH = "/v1/search"
_ANSWER_PATH = "/v1/answer"

_REAUTH_STATUS_CODES = (401, 403)


def _to_search_result(item: Dict[str, Any]) -> SearchResult:
    """Normalize one raw provider result into a SearchResult."""
    content = item.get("content")
    return SearchResult(
        title=item.get("title") or "Untitled",
        url=item.get("url") or "",
        content=content if isinstance(content, str) else "",
        published_date=normalize_published_date(item.get("date") or item.get("publication_date")),
        source=item.get("source") or None,
    )


class ValyuClient:
    """Client for the Valyu search and answer endpoints.

    Args:
        api_key: Valyu API key (from PipelineConfig / VALYU_API_KEY).
        base_url: API base URL.
        search_timeout: HTTP timeout in seconds for search calls.
        answer_timeout: HTTP timeout in seconds for answer calls.
    """

    def __init__(
        self,
        api_key: Optional[str],
        base_url: str = VALYU_BASE_URL,
        search_timeout: int = SEARCH_REQUEST_TIMEOUT,
        answer_timeout: int = ANSWER_REQUEST_TIMEOUT,
    ) -> None:
        self.api_key = api_key or ""
        self.base_url = base_url.rstrip("/")
        self.search_timeout = search_timeout
        self.answer_timeout = answer_timeout

        if not self.api_key:
            logger.warning("Valyu API key not configured. Set the VALYU_API_KEY environment variable.")

        self._session = Session()
        adapter = HTTPAdapter(max_retries=0)   # Single attempt per call
        self._session.mount("https://", adapter)
        self._session.mount("http://", adapter)
        self._session.headers.update(
            {"x-api-key": self.api_key, "Content-Type": "application/json"}
        )

    @classmethod
    def from_config(cls, config: Any) -> "ValyuClient":
        return cls(
            api_key=config.valyu_api_key,
            base_url=config.valyu_base_url,
            search_timeout=config.search_request_timeout,
            answer_timeout=config.answer_request_timeout,
        )

    def _post(self, path: str, body: Dict[str, Any], timeout: int) -> Dict[str, Any]:
        """POST ``body`` to ``path`` once and return the decoded JSON object.

        Raises:
            SearchAPIError: On transport failure, non-200 status, or a body
                that is not a JSON object.
        """
        url = f"{self.base_url}{path}"
        try:
            resp = self._session.post(url, json=body, timeout=timeout)
        except requests.exceptions.Timeout as exc:
            logger.warning("Valyu request to %s timed out after %ss", path, timeout)
            raise SearchAPIError(f"Valyu request to {path} timed out") from exc
        except requests.exceptions.RequestException as exc:
            logger.warning("Valyu request to %s failed: %s", path, exc)
            raise SearchAPIError(f"Valyu request to {path} failed: {exc}") from exc

        if resp.status_code in _REAUTH_STATUS_CODES:
            logger.warning("Valyu rejected credentials (HTTP %d) for %s", resp.status_code, path)
            raise SearchAPIError(
                "Session expired", status_code=resp.status_code, requires_reauth=True
            )
        if resp.status_code != 200:
            logger.warning("Valyu returned HTTP %d for %s", resp.status_code, path)
            raise SearchAPIError(
                f"API call failed: {resp.status_code}", status_code=resp.status_code
            )

        try:
            data = resp.json()
        except ValueError as exc:
            logger.debug("Valyu unparseable response body: %.200s", resp.text)
            raise SearchAPIError(
                f"Valyu returned a non-JSON body for {path}", status_code=resp.status_code
            ) from exc
        if not isinstance(data, dict):
            raise SearchAPIError(
                f"Valyu returned an unexpected body for {path}", status_code=resp.status_code
            )
        return data

    def search(self, query: str, max_results: int = SEARCH_MAX_RESULTS) -> List[SearchResult]:
        """Run a news search.

        Args:
            query: Free-text search query.
            max_results: Maximum results requested from the provider.

        Returns:
            List of SearchResult (empty when the provider has none).

        Raises:
            SearchAPIError: On any transport or HTTP failure.
        """
        body = {"query": query, "searchType": "news", "maxNumResults": max_results}
        data = self._post(_SEARCH_PATH, body, self.search_timeout)

        raw_results = data.get("results") or []
        results = [_to_search_result(r) for r in raw_results if isinstance(r, dict)]
        logger.debug("Valyu search %r → %d results", query, len(results))
        return results

    def answer(
        self,
        query: str,
        structured_output: Optional[Dict[str, Any]] = None,
        excluded_sources: Sequence[str] = (),
    ) -> Dict[str, Any]:
        """Ask the answer endpoint to analyze ``query``.

        Args:
            query: Analysis prompt.
            structured_output: Optional JSON schema the answer should follow.
                When set, ``contents`` in the response may be a JSON string or
                an already-decoded object.
            excluded_sources: Domains the provider must not cite.

        Returns:
            The raw response dict (``contents``, ``search_results``, ...).

        Raises:
            SearchAPIError: On any transport or HTTP failure.
        """
        body: Dict[str, Any] = {"query": query}
        if excluded_sources:
            body["excluded_sources"] = list(excluded_sources)
        if structured_output is not None:
            body["structured_output"] = structured_output

        data = self._post(_ANSWER_PATH, body, self.answer_timeout)
        logger.debug(
            "Valyu answer returned %s contents",
            type(data.get("contents")).__name__,
        )
        return data

    def close(self) -> None:
        self._session.close()
