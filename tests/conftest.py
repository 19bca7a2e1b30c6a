"""Pytest configuration and shared fixtures."""

import json
import logging
from typing import Any, Callable, Optional, Union

import httpx
import pytest

from restcli.core.api_client import ApiClient
from restcli.core.config import Settings

BASE_URL = "http://api.test"

Route = Union[Callable[[httpx.Request], httpx.Response], Exception]


class FakeApi:
    """In-memory HTTP server backed by httpx.MockTransport.

    Routes are keyed by (method, path); every request is recorded.
    """

    def __init__(self):
        self.routes: dict[tuple[str, str], Route] = {}
        self.requests: list[httpx.Request] = []
        self.transport = httpx.MockTransport(self._handle)

    def add(
        self,
        method: str,
        path: str,
        status: int = 200,
        json_body: Any = None,
        text: Optional[str] = None,
        headers: Optional[dict[str, str]] = None,
    ) -> None:
        def respond(request: httpx.Request) -> httpx.Response:
            if json_body is not None:
                return httpx.Response(status, json=json_body, headers=headers)
            return httpx.Response(status, text=text or "", headers=headers)

        self.routes[(method, path)] = respond

    def add_handler(self, method: str, path: str, route: Route) -> None:
        self.routes[(method, path)] = route

    def calls(self, method: str, path: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.method == method and r.url.path == path]

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get((request.method, request.url.path))
        if route is None:
            return httpx.Response(404, text="no route")
        if isinstance(route, Exception):
            raise route
        return route(request)


@pytest.fixture
def fake_api():
    return FakeApi()


@pytest.fixture
def settings():
    """Settings pointing at the fake API with test credentials."""
    return Settings(
        api={
            "base_address": BASE_URL,
            "login": "alice",
            "password": "s3cret",
            "timeout_seconds": 5,
        },
        authentication={
            "login_endpoint": "auth/login",
            "token_header_name": "Authorization",
            "token_prefix": "Bearer",
        },
    )


@pytest.fixture
def api_client(fake_api, settings):
    """ApiClient wired to the fake API; closed after the test."""
    client = ApiClient(
        BASE_URL,
        timeout=5,
        auth=settings.authentication,
        transport=fake_api.transport,
    )
    yield client
    client.close()


@pytest.fixture
def config_file(tmp_path):
    """Write a JSON settings file for CLI tests."""
    path = tmp_path / "appsettings.json"
    path.write_text(json.dumps({
        "api": {
            "base_address": BASE_URL,
            "login": "alice",
            "password": "s3cret",
            "timeout_seconds": 5,
        },
        "authentication": {
            "login_endpoint": "auth/login",
        },
    }), encoding="utf-8")
    return path


@pytest.fixture
def debug_log(caplog):
    """Capture DEBUG records from the request client.

    The ``restcli`` logger stops propagation once a command has configured
    logging, so the capture handler is attached to the module logger itself.
    """
    logger = logging.getLogger("restcli.core.api_client")
    caplog.set_level(logging.DEBUG, logger=logger.name)
    logger.addHandler(caplog.handler)
    yield caplog
    logger.removeHandler(caplog.handler)
