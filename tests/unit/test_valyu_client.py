"""Unit tests for threatwatch.clients.valyu_client.

Covers:
- _to_search_result: defaults and date normalization
- ValyuClient.search: request body, result mapping, error statuses
- ValyuClient.answer: optional body fields, passthrough of the response
- Transport failures and unparseable bodies

No real HTTP calls are made; requests.Session.post is patched throughout.
"""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest
import requests

from threatwatch.clients.valyu_client import ValyuClient, _to_search_result
from threatwatch.exceptions import SearchAPIError


def _response(status_code: int = 200, payload=None, json_error: bool = False) -> MagicMock:
    resp = MagicMock()
    resp.status_code = status_code
    resp.text = "<html>oops</html>" if json_error else ""
    if json_error:
        resp.json.side_effect = ValueError("No JSON object could be decoded")
    else:
        resp.json.return_value = payload if payload is not None else {}
    return resp


@pytest.fixture
def client():
    c = ValyuClient(api_key="test-key", base_url="https://api.valyu.test/")
    yield c
    c.close()


# ── _to_search_result ─────────────────────────────────────────────────────────────

class TestToSearchResult:
    def test_full_item(self):
        """All provider fields must map onto SearchResult."""
        result = _to_search_result({
            "title": "Troops mass at border",
            "url": "https://example.com/a",
            "content": "Body text",
            "date": "2024-01-15T14:00:00+02:00",
            "source": "Example Wire",
        })
        assert result.title == "Troops mass at border"
        assert result.url == "https://example.com/a"
        assert result.content == "Body text"
        assert result.published_date == "2024-01-15T12:00:00.000Z"
        assert result.source == "Example Wire"

    def test_missing_fields_default(self):
        """Missing title, url, content and source get safe defaults."""
        result = _to_search_result({})
        assert result.title == "Untitled"
        assert result.url == ""
        assert result.content == ""
        assert result.published_date is None
        assert result.source is None

    def test_non_string_content_dropped(self):
        """Structured (non-string) content is replaced with an empty string."""
        assert _to_search_result({"content": [{"a": 1}]}).content == ""

    def test_publication_date_fallback_epoch(self):
        """publication_date is used when date is absent, including epoch values."""
        result = _to_search_result({"publication_date": 1705320000})
        assert result.published_date == "2024-01-15T12:00:00.000Z"


# ── search ────────────────────────────────────────────────────────────────────────

class TestSearch:
    def test_request_shape(self, client):
        """search must POST the news query to /v1/search with the timeout."""
        with patch("requests.Session.post", return_value=_response(payload={"results": []})) as post:
            client.search("border clashes", max_results=7)

        args, kwargs = post.call_args
        assert args[0] == "https://api.valyu.test/v1/search"
        assert kwargs["json"] == {
            "query": "border clashes",
            "searchType": "news",
            "maxNumResults": 7,
        }
        assert kwargs["timeout"] == client.search_timeout

    def test_api_key_header(self, client):
        """The API key must be sent in the x-api-key header."""
        assert client._session.headers["x-api-key"] == "test-key"

    def test_results_mapped(self, client):
        """Each dict result becomes a SearchResult; non-dict entries are skipped."""
        payload = {"results": [{"title": "A", "url": "u1"}, "junk", {"title": "B", "url": "u2"}]}
        with patch("requests.Session.post", return_value=_response(payload=payload)):
            results = client.search("q")
        assert [r.title for r in results] == ["A", "B"]

    def test_missing_results_key(self, client):
        """A body without results returns an empty list."""
        with patch("requests.Session.post", return_value=_response(payload={"success": True})):
            assert client.search("q") == []

    @pytest.mark.parametrize("status", [401, 403])
    def test_auth_rejection_requires_reauth(self, client, status):
        """401/403 must raise SearchAPIError flagged requires_reauth."""
        with patch("requests.Session.post", return_value=_response(status_code=status)):
            with pytest.raises(SearchAPIError) as exc_info:
                client.search("q")
        assert exc_info.value.requires_reauth is True
        assert exc_info.value.status_code == status
        assert str(exc_info.value) == "Session expired"

    def test_server_error(self, client):
        """Other non-200 statuses raise without requires_reauth."""
        with patch("requests.Session.post", return_value=_response(status_code=500)):
            with pytest.raises(SearchAPIError) as exc_info:
                client.search("q")
        assert exc_info.value.requires_reauth is False
        assert str(exc_info.value) == "API call failed: 500"

    def test_single_attempt_on_failure(self, client):
        """A failing call is not retried."""
        with patch("requests.Session.post", return_value=_response(status_code=503)) as post:
            with pytest.raises(SearchAPIError):
                client.search("q")
        assert post.call_count == 1

    def test_timeout(self, client):
        """A transport timeout raises SearchAPIError."""
        with patch("requests.Session.post", side_effect=requests.exceptions.Timeout()):
            with pytest.raises(SearchAPIError, match="timed out"):
                client.search("q")

    def test_connection_error(self, client):
        """Connection failures raise SearchAPIError."""
        with patch(
            "requests.Session.post",
            side_effect=requests.exceptions.ConnectionError("refused"),
        ):
            with pytest.raises(SearchAPIError, match="failed"):
                client.search("q")

    def test_non_json_body(self, client):
        """An unparseable body raises SearchAPIError."""
        with patch("requests.Session.post", return_value=_response(json_error=True)):
            with pytest.raises(SearchAPIError, match="non-JSON"):
                client.search("q")

    def test_non_object_body(self, client):
        """A JSON array body raises SearchAPIError."""
        with patch("requests.Session.post", return_value=_response(payload=[1, 2])):
            with pytest.raises(SearchAPIError, match="unexpected body"):
                client.search("q")


# ── answer ────────────────────────────────────────────────────────────────────────

class TestAnswer:
    def test_minimal_body(self, client):
        """Without options only the query is sent."""
        with patch("requests.Session.post", return_value=_response(payload={"contents": "x"})) as post:
            data = client.answer("analyze this")

        args, kwargs = post.call_args
        assert args[0] == "https://api.valyu.test/v1/answer"
        assert kwargs["json"] == {"query": "analyze this"}
        assert kwargs["timeout"] == client.answer_timeout
        assert data == {"contents": "x"}

    def test_structured_and_exclusions(self, client):
        """Schema and excluded sources are forwarded when given."""
        schema = {"type": "object"}
        with patch("requests.Session.post", return_value=_response(payload={"contents": {}})) as post:
            client.answer("q", structured_output=schema, excluded_sources=("wikipedia.org",))

        body = post.call_args.kwargs["json"]
        assert body["structured_output"] == schema
        assert body["excluded_sources"] == ["wikipedia.org"]

    def test_auth_rejection(self, client):
        """Answer calls surface credential rejection the same way."""
        with patch("requests.Session.post", return_value=_response(status_code=401)):
            with pytest.raises(SearchAPIError) as exc_info:
                client.answer("q")
        assert exc_info.value.requires_reauth is True


class TestFromConfig:
    def test_config_values_applied(self, pipeline_config):
        """from_config copies key, base URL and timeouts."""
        c = ValyuClient.from_config(pipeline_config)
        try:
            assert c.api_key == "test-key"
            assert c.base_url == "https://api.valyu.test"
            assert c.search_timeout == pipeline_config.search_request_timeout
            assert c.answer_timeout == pipeline_config.answer_request_timeout
        finally:
            c.close()
