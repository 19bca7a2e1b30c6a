"""Login and in-memory token cache."""

from __future__ import annotations

import json
import logging
import threading
from concurrent.futures import Future
from typing import Any, Optional

from restcli.core.api_client import ApiClient
from restcli.core.config import Settings
from restcli.core.errors import AuthenticationError, RequestError

logger = logging.getLogger(__name__)

# Tried in order; the first path present in the login response wins.
TOKEN_FIELD_PATHS: tuple[tuple[str, ...], ...] = (
    ("token",),
    ("accessToken",),
    ("data", "token"),
)

_MISSING = object()


def _lookup(document: Any, path: tuple[str, ...]) -> Any:
    value = document
    for key in path:
        if not isinstance(value, dict) or key not in value:
            return _MISSING
        value = value[key]
    return value


def extract_token(body: str) -> str:
    """Pull the token out of a login response body.

    Raises:
        AuthenticationError: If the body is not JSON, no known field is
            present, or the matched value is not a non-empty string.
    """
    try:
        document = json.loads(body)
    except ValueError as e:
        raise AuthenticationError(f"Authentication response is not valid JSON: {e}") from e

    for path in TOKEN_FIELD_PATHS:
        value = _lookup(document, path)
        if value is _MISSING:
            continue
        if not isinstance(value, str) or not value:
            raise AuthenticationError("Authentication token is empty")
        return value

    raise AuthenticationError(
        "Could not find token in authentication response. "
        "Expected 'token', 'accessToken', or 'data.token' field."
    )


class AuthenticationService:
    """Obtains a token with the configured login and keeps it for the process.

    Concurrent callers share one login: the first caller performs it, the
    others wait for the same token or the same error.
    """

    def __init__(self, settings: Settings, api: ApiClient):
        self.settings = settings
        self.api = api
        self._token: Optional[str] = None
        self._inflight: Optional[Future] = None
        self._lock = threading.Lock()

    @property
    def is_authenticated(self) -> bool:
        return self._token is not None

    def get_token(self) -> str:
        """Return the cached token, logging in first if there is none."""
        token = self._token
        if token is not None:
            return token

        with self._lock:
            if self._token is not None:
                return self._token
            flight = self._inflight
            leader = flight is None
            if leader:
                flight = self._inflight = Future()

        if not leader:
            logger.debug("Waiting for in-flight login")
            return flight.result()

        try:
            token = self._login()
        except BaseException as e:
            with self._lock:
                self._inflight = None
            flight.set_exception(e)
            raise

        with self._lock:
            self._token = token
            self._inflight = None
        flight.set_result(token)
        return token

    def clear_cache(self) -> None:
        """Forget the cached token."""
        with self._lock:
            self._token = None

    def _login(self) -> str:
        auth = self.settings.authentication
        credentials = self.settings.api
        login_body = json.dumps({
            "username": credentials.login,
            "password": credentials.password,
        })

        logger.debug("Logging in at %s as %r", auth.login_endpoint, credentials.login)
        try:
            body = self.api.send_raw(
                "POST",
                auth.login_endpoint,
                body=login_body,
                requires_auth=False,
                log_body=False,
            )
        except RequestError as e:
            raise AuthenticationError(f"Authentication failed: {e}") from e

        token = extract_token(body)
        logger.debug("Authentication successful")
        return token
