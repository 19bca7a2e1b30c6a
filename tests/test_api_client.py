"""Tests for the HTTP request client."""

import httpx
import pytest

from restcli.core.api_client import (
    ApiClient,
    FormattedResponse,
    OutputMode,
    build_path,
    parse_header,
    parse_headers,
)
from restcli.core.config import AuthenticationSettings
from restcli.core.errors import RequestError, RequestTimeoutError, TransportError

BASE_URL = "http://api.test"


class TestBuildPath:
    """Test placeholder substitution."""

    def test_single_parameter(self):
        assert build_path("files/{fileId}", {"fileId": "42"}) == "files/42"

    def test_multiple_parameters(self):
        path = build_path(
            "users/{userId}/files/{fileId}",
            {"userId": "7", "fileId": "42"},
        )
        assert path == "users/7/files/42"

    def test_order_independent(self):
        """Substitution order should not change the result."""
        template = "files/{fileId}/download/{version}"
        forward = build_path(template, {"fileId": "1", "version": "v2"})
        backward = build_path(template, {"version": "v2", "fileId": "1"})
        assert forward == backward == "files/1/download/v2"

    def test_idempotent(self):
        """Substituting into an already substituted path is a no-op."""
        params = {"fileId": "42"}
        once = build_path("files/{fileId}", params)
        assert build_path(once, params) == once

    def test_repeated_placeholder_replaced_everywhere(self):
        assert build_path("{id}/x/{id}", {"id": "9"}) == "9/x/9"

    def test_unsubstituted_placeholder_passes_through(self):
        assert build_path("files/{fileId}", {"other": "1"}) == "files/{fileId}"

    def test_no_parameters(self):
        assert build_path("files", None) == "files"


class TestParseHeaders:
    """Test "Key:Value" header parsing."""

    def test_trims_both_sides(self):
        assert parse_header("X-Custom: value") == ("X-Custom", "value")

    def test_splits_on_first_colon(self):
        assert parse_header("X-Time: 12:30:00") == ("X-Time", "12:30:00")

    def test_malformed_returns_none(self):
        assert parse_header("NoColonHere") is None

    def test_malformed_entries_skipped(self):
        """Malformed entries are dropped; duplicates are kept in order."""
        headers = parse_headers(["A: 1", "NoColonHere", "A: 2", "B:3"])
        assert headers == [("A", "1"), ("A", "2"), ("B", "3")]


class TestRequestBuilding:
    """Test what goes out on the wire."""

    def test_url_joins_base_and_path(self, fake_api, api_client):
        fake_api.add("GET", "/files/42", text="ok")

        api_client.send_raw("GET", "files/{fileId}", parameters={"fileId": "42"})

        assert str(fake_api.requests[0].url) == f"{BASE_URL}/files/42"

    def test_trailing_and_leading_slashes_collapse(self, fake_api):
        fake_api.add("GET", "/files", text="ok")

        with ApiClient(f"{BASE_URL}/", transport=fake_api.transport) as api:
            api.send_raw("GET", "/files")

        assert str(fake_api.requests[0].url) == f"{BASE_URL}/files"

    def test_method_is_case_insensitive(self, fake_api, api_client):
        fake_api.add("DELETE", "/delete", text="gone")

        assert api_client.send_raw("delete", "delete") == "gone"

    def test_custom_headers_sent(self, fake_api, api_client):
        fake_api.add("GET", "/get", text="ok")

        api_client.send_raw("GET", "get", headers=["X-Custom: value", "broken", "X-Multi: a", "X-Multi: b"])

        request = fake_api.requests[0]
        assert request.headers["X-Custom"] == "value"
        assert request.headers.get_list("X-Multi") == ["a", "b"]
        assert "broken" not in request.headers

    def test_auth_header_attached(self, fake_api, api_client):
        fake_api.add("GET", "/files/1", text="ok")

        api_client.send_raw("GET", "files/1", auth_token="abc123", requires_auth=True)

        assert fake_api.requests[0].headers["Authorization"] == "Bearer abc123"

    def test_auth_header_uses_configured_name_and_prefix(self, fake_api):
        fake_api.add("GET", "/files/1", text="ok")
        auth = AuthenticationSettings(token_header_name="X-Api-Token", token_prefix="Token")

        with ApiClient(BASE_URL, auth=auth, transport=fake_api.transport) as api:
            api.send_raw("GET", "files/1", auth_token="t1")

        headers = fake_api.requests[0].headers
        assert headers["X-Api-Token"] == "Token t1"
        assert "Authorization" not in headers

    def test_no_auth_header_without_token(self, fake_api, api_client):
        fake_api.add("GET", "/files/1", text="ok")

        api_client.send_raw("GET", "files/1", auth_token="", requires_auth=True)

        assert "Authorization" not in fake_api.requests[0].headers

    def test_no_auth_header_when_not_required(self, fake_api, api_client):
        fake_api.add("GET", "/files/1", text="ok")

        api_client.send_raw("GET", "files/1", auth_token="abc", requires_auth=False)

        assert "Authorization" not in fake_api.requests[0].headers

    @pytest.mark.parametrize("method", ["POST", "put", "Patch"])
    def test_body_sent_for_body_methods(self, fake_api, api_client, method):
        fake_api.add(method.upper(), "/post", text="ok")

        api_client.send_raw(method, "post", body='{"a": 1}')

        request = fake_api.requests[0]
        assert request.content == b'{"a": 1}'
        assert request.headers["Content-Type"].startswith("application/json")

    def test_body_not_validated(self, fake_api, api_client):
        """Non-JSON text is still sent with the JSON content type."""
        fake_api.add("POST", "/post", text="ok")

        api_client.send_raw("POST", "post", body="not json")

        request = fake_api.requests[0]
        assert request.content == b"not json"
        assert request.headers["Content-Type"].startswith("application/json")

    @pytest.mark.parametrize("method", ["GET", "DELETE"])
    def test_body_ignored_for_other_methods(self, fake_api, api_client, method):
        fake_api.add(method, "/x", text="ok")

        api_client.send_raw(method, "x", body='{"a": 1}')

        request = fake_api.requests[0]
        assert request.content == b""
        assert "Content-Type" not in request.headers

    def test_body_logged_at_debug(self, fake_api, api_client, debug_log):
        fake_api.add("POST", "/post", text="ok")

        api_client.send_raw("POST", "post", body='{"a": 1}')

        assert 'Request body: {"a": 1}' in debug_log.text

    def test_empty_body_not_sent(self, fake_api, api_client):
        fake_api.add("POST", "/post", text="ok")

        api_client.send_raw("POST", "post", body="")

        assert "Content-Type" not in fake_api.requests[0].headers


class TestRawMode:
    """Raw mode returns the body or raises."""

    def test_returns_body_unchanged(self, fake_api, api_client):
        fake_api.add("GET", "/files/1", text='{"name": "report.pdf"}')

        body = api_client.send("GET", "files/1", mode=OutputMode.RAW)

        assert body == '{"name": "report.pdf"}'

    def test_404_raises_request_error(self, fake_api, api_client):
        fake_api.add("GET", "/files/404", status=404, text="missing")

        with pytest.raises(RequestError) as exc_info:
            api_client.send_raw("GET", "files/404")

        error = exc_info.value
        assert error.status_code == 404
        assert error.body == "missing"
        assert error.reason == "Not Found"


class TestDiagnosticMode:
    """Diagnostic mode always returns formatted text."""

    def test_success_format(self, fake_api, api_client):
        fake_api.add("GET", "/get", text="hello")

        response = api_client.send_diagnostic("GET", "get")

        assert isinstance(response, FormattedResponse)
        assert response.success
        assert response.text == "Status: 200 OK\nBody:\nhello"
        assert response.body == "hello"

    def test_404_does_not_raise(self, fake_api, api_client):
        fake_api.add("GET", "/files/404", status=404, text="missing")

        response = api_client.send_diagnostic("GET", "files/{fileId}", parameters={"fileId": "404"})

        assert not response.success
        assert response.status_code == 404
        assert "Status: 404" in response.text
        assert response.text.endswith("Body:\nmissing")

    def test_verbose_includes_url_and_headers(self, fake_api):
        fake_api.add("GET", "/get", text="hi", headers={"X-Request-Id": "r1"})

        with ApiClient(BASE_URL, verbose=True, transport=fake_api.transport) as api:
            response = api.send_diagnostic("GET", "get")

        assert f"Full URL: {BASE_URL}/get\n" in response.text
        assert "Headers:\n" in response.text
        assert "  x-request-id: r1\n" in response.text
        assert ("x-request-id", "r1") in response.headers
        assert response.text.endswith("\n\nBody:\nhi")

    def test_non_verbose_omits_headers(self, fake_api, api_client):
        fake_api.add("GET", "/get", text="hi", headers={"X-Request-Id": "r1"})

        response = api_client.send_diagnostic("GET", "get")

        assert "Full URL" not in response.text
        assert "x-request-id" not in response.text


class TestTransportFailures:
    """Timeouts and connection errors map to distinct errors."""

    def test_timeout(self, fake_api, api_client):
        fake_api.add_handler("GET", "/slow", httpx.ReadTimeout("timed out"))

        with pytest.raises(RequestTimeoutError):
            api_client.send_raw("GET", "slow")

    def test_timeout_in_diagnostic_mode(self, fake_api, api_client):
        """Timeouts raise even in diagnostic mode; no partial response."""
        fake_api.add_handler("GET", "/slow", httpx.ConnectTimeout("timed out"))

        with pytest.raises(RequestTimeoutError):
            api_client.send_diagnostic("GET", "slow")

    def test_timeout_is_not_request_error(self, fake_api, api_client):
        fake_api.add_handler("GET", "/slow", httpx.ReadTimeout("timed out"))

        with pytest.raises(TransportError) as exc_info:
            api_client.send_raw("GET", "slow")

        assert not isinstance(exc_info.value, RequestError)

    def test_connection_error(self, fake_api, api_client):
        fake_api.add_handler("GET", "/down", httpx.ConnectError("refused"))

        with pytest.raises(TransportError) as exc_info:
            api_client.send_raw("GET", "down")

        assert not isinstance(exc_info.value, RequestTimeoutError)


class TestLifecycle:
    """The httpx client is released on close."""

    def test_timeout_applies_to_every_phase(self):
        """The configured seconds bound connect, read, write and pool waits."""
        with ApiClient(BASE_URL, timeout=7) as api:
            assert api._client.timeout == httpx.Timeout(7)

        assert api._client.timeout.connect == 7
        assert api._client.timeout.read == 7
        assert api._client.timeout.write == 7
        assert api._client.timeout.pool == 7

    def test_context_manager_closes_client(self, fake_api):
        with ApiClient(BASE_URL, transport=fake_api.transport) as api:
            pass

        assert api._client.is_closed

    def test_closes_on_error(self, fake_api):
        fake_api.add("GET", "/x", status=500, text="boom")

        with pytest.raises(RequestError):
            with ApiClient(BASE_URL, transport=fake_api.transport) as api:
                api.send_raw("GET", "x")

        assert api._client.is_closed
