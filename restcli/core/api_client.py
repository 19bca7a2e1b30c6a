"""HTTP client for the configured REST API."""

from __future__ import annotations

import enum
import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Optional

import httpx

from restcli.core.config import AuthenticationSettings
from restcli.core.errors import RequestError, RequestTimeoutError, TransportError

logger = logging.getLogger(__name__)

BODY_METHODS = frozenset({"POST", "PUT", "PATCH"})
JSON_CONTENT_TYPE = "application/json; charset=utf-8"


class OutputMode(enum.Enum):
    """How a response is turned into the value returned by ``send``."""

    # Always a formatted text with the status embedded
    DIAGNOSTIC = "diagnostic"
    # Only the body; non-2xx raises RequestError
    RAW = "raw"


@dataclass(frozen=True)
class FormattedResponse:
    """A response rendered for display."""

    status_code: int
    reason_phrase: str
    url: str
    body: str
    text: str
    headers: list[tuple[str, str]] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return 200 <= self.status_code <= 299


def build_path(template: str, parameters: Optional[Mapping[str, str]] = None) -> str:
    """Replace every ``{key}`` in ``template`` with its parameter value.

    Placeholders without a parameter are left in the path.
    """
    path = template
    for key, value in (parameters or {}).items():
        path = path.replace(f"{{{key}}}", value)
    return path


def parse_header(text: str) -> Optional[tuple[str, str]]:
    """Parse ``"Key: Value"`` into ``("Key", "Value")``; None when there is no colon."""
    key, sep, value = text.partition(":")
    if not sep:
        return None
    return key.strip(), value.strip()


def parse_headers(texts: Iterable[str]) -> list[tuple[str, str]]:
    headers = []
    for text in texts:
        parsed = parse_header(text)
        if parsed is None:
            logger.debug("Skipping malformed header %r", text)
            continue
        headers.append(parsed)
    return headers


class ApiClient:
    """HTTP client bound to one base address.

    The httpx client is opened here and released by ``close()``; use the
    instance as a context manager so that happens on every exit path.
    """

    DEFAULT_TIMEOUT = 30

    def __init__(
        self,
        base_url: str,
        timeout: float = DEFAULT_TIMEOUT,
        auth: Optional[AuthenticationSettings] = None,
        verbose: bool = False,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.auth = auth or AuthenticationSettings()
        self.verbose = verbose
        # Applies to each phase (connect, read, write, pool), not to the whole request
        self._client = httpx.Client(timeout=httpx.Timeout(timeout), transport=transport)

    def close(self) -> None:
        """Close the HTTP client."""
        self._client.close()

    def __enter__(self) -> "ApiClient":
        return self

    def __exit__(self, *args) -> None:
        self.close()

    def build_url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def auth_header(self, token: str) -> tuple[str, str]:
        return self.auth.token_header_name, f"{self.auth.token_prefix} {token}"

    def _request(
        self,
        method: str,
        path_template: str,
        parameters: Optional[Mapping[str, str]] = None,
        headers: Iterable[str] = (),
        body: Optional[str] = None,
        auth_token: Optional[str] = None,
        requires_auth: bool = True,
        log_body: bool = True,
    ) -> tuple[str, httpx.Response]:
        """Build and send one request, returning the URL and the response.

        Args:
            method: HTTP method, any case
            path_template: Path with ``{name}`` placeholders
            parameters: Placeholder substitutions
            headers: ``"Key:Value"`` strings; malformed entries are skipped
            body: JSON text, sent only for POST, PUT and PATCH
            auth_token: Bearer token for the auth header
            requires_auth: Attach the auth header when a token is given
            log_body: Include the body in the debug log; off for credentials
        """
        method = method.upper()
        url = self.build_url(build_path(path_template, parameters))
        logger.debug("Sending %s request to: %s", method, url)

        request_headers = parse_headers(headers)
        for key, value in request_headers:
            logger.debug("Header: %s = %s", key, value)

        if requires_auth and auth_token:
            request_headers.append(self.auth_header(auth_token))
            logger.debug("Header: %s = %s ***", self.auth.token_header_name, self.auth.token_prefix)

        content = None
        if body and method in BODY_METHODS:
            content = body.encode("utf-8")
            request_headers.append(("Content-Type", JSON_CONTENT_TYPE))
            if log_body:
                logger.debug("Request body: %s", body)
            else:
                logger.debug("Request body: <redacted, %d bytes>", len(content))

        try:
            response = self._client.request(method, url, headers=request_headers, content=content)
        except httpx.TimeoutException as e:
            raise RequestTimeoutError(f"Request timed out after {self.timeout}s: {url}") from e
        except httpx.TransportError as e:
            raise TransportError(f"Request failed: {type(e).__name__}: {e}") from e

        logger.debug("Received %s %s", response.status_code, response.reason_phrase)
        return url, response

    def format_response(self, url: str, response: httpx.Response) -> FormattedResponse:
        """Render the status line, verbose details and body as display text."""
        body = response.text
        headers = list(response.headers.multi_items())

        lines = [f"Status: {response.status_code} {response.reason_phrase}\n"]
        if self.verbose:
            lines.append(f"Full URL: {url}\n")
            lines.append("Headers:\n")
            for key, value in headers:
                lines.append(f"  {key}: {value}\n")
            lines.append("\n")
        lines.append(f"Body:\n{body}")

        return FormattedResponse(
            status_code=response.status_code,
            reason_phrase=response.reason_phrase,
            url=url,
            body=body,
            text="".join(lines),
            headers=headers,
        )

    def send(
        self,
        method: str,
        path_template: str,
        parameters: Optional[Mapping[str, str]] = None,
        headers: Iterable[str] = (),
        body: Optional[str] = None,
        auth_token: Optional[str] = None,
        requires_auth: bool = True,
        mode: OutputMode = OutputMode.RAW,
        log_body: bool = True,
    ) -> FormattedResponse | str:
        """Send a request and shape the result according to ``mode``."""
        url, response = self._request(
            method,
            path_template,
            parameters=parameters,
            headers=headers,
            body=body,
            auth_token=auth_token,
            requires_auth=requires_auth,
            log_body=log_body,
        )

        if mode is OutputMode.DIAGNOSTIC:
            return self.format_response(url, response)

        if not response.is_success:
            raise RequestError(response.status_code, response.reason_phrase, response.text)
        return response.text

    def send_diagnostic(self, method: str, path_template: str, **kwargs) -> FormattedResponse:
        """Send and always return formatted text, whatever the status."""
        return self.send(method, path_template, mode=OutputMode.DIAGNOSTIC, **kwargs)

    def send_raw(self, method: str, path_template: str, **kwargs) -> str:
        """Send and return the body; raise RequestError on a non-2xx status."""
        return self.send(method, path_template, mode=OutputMode.RAW, **kwargs)
