"""Call command - send a request to any named endpoint."""

from __future__ import annotations

import logging
from typing import Any, Optional

import httpx

from restcli.commands.base import BaseCommand
from restcli.core.api_client import ApiClient
from restcli.core.auth import AuthenticationService
from restcli.core.config import Settings
from restcli.core.endpoints import EndpointRegistry, default_registry
from restcli.core.errors import RequestError, UsageError
from restcli.ui.console import console
from restcli.ui.spinners import create_spinner
from restcli.ui.tables import create_endpoints_table

logger = logging.getLogger(__name__)


def parse_parameters(items: list[str]) -> dict[str, str]:
    """Turn ``key=value`` strings into a mapping; a later key overrides an earlier one."""
    parameters = {}
    for item in items:
        key, sep, value = item.partition("=")
        if not sep or not key:
            raise UsageError(f"Invalid parameter '{item}', expected key=value")
        parameters[key] = value
    return parameters


class CallCommand(BaseCommand):
    """Send a request to a named endpoint and show the formatted response."""

    name = "call"
    description = "Call any named endpoint and print status, headers and body"
    usage = (
        "<endpoint-name> [--base ADDR] [--method M] [--param k=v]... "
        "[--header \"K:V\"]... [--body TEXT] [--timeout N] [--output PATH] "
        "[--auth] [--verbose] [--list]"
    )

    short_flags = {
        "b": "base",
        "m": "method",
        "p": "param",
        "H": "header",
        "d": "body",
        "t": "timeout",
        "o": "output",
        "a": "auth",
        "v": "verbose",
        "l": "list",
    }
    boolean_flags = frozenset({"verbose", "list", "auth"})
    repeatable_flags = frozenset({"param", "header"})
    value_flags = frozenset({"base", "method", "body", "timeout", "output"})

    def __init__(
        self,
        settings: Settings,
        transport: Optional[httpx.BaseTransport] = None,
        registry: EndpointRegistry = default_registry,
    ):
        super().__init__(settings, transport)
        self.registry = registry

    def run(self, flags: dict[str, Any], remaining: list[str]) -> bool:
        if flags.get("list"):
            console.print(create_endpoints_table(self.registry))
            return True

        base = self.string_flag(flags, "base") or self.settings.api.base_address
        if not base:
            raise UsageError("Base address is required (use --base or configure api.base_address)")
        if not remaining:
            raise UsageError(f"Endpoint name is required. Usage: {self.usage}")
        if len(remaining) > 1:
            raise UsageError(f"Unexpected arguments: {' '.join(remaining[1:])}")

        endpoint_name = remaining[0]
        template = self.registry.resolve(endpoint_name)

        method = (self.string_flag(flags, "method") or "GET").upper()
        parameters = parse_parameters(self._list_flag(flags, "param"))
        headers = self._list_flag(flags, "header")
        body = self.string_flag(flags, "body")
        timeout = self._timeout(flags)
        output = self.string_flag(flags, "output")

        logger.debug("Endpoint %s -> %s", endpoint_name, template)

        with ApiClient(
            base,
            timeout=timeout,
            auth=self.settings.authentication,
            verbose=self.verbose,
            transport=self.transport,
        ) as api:
            token = None
            if flags.get("auth"):
                with create_spinner("Authenticating...", style="auth", enabled=not self.verbose):
                    token = AuthenticationService(self.settings, api).get_token()

            with create_spinner(f"{method} {endpoint_name}...", style="loading", enabled=not self.verbose):
                response = api.send_diagnostic(
                    method,
                    template,
                    parameters=parameters,
                    headers=headers,
                    body=body,
                    auth_token=token,
                    requires_auth=token is not None,
                )

        self.write_result(response.text, output)

        if not response.success:
            raise RequestError(response.status_code, response.reason_phrase)
        return True

    @staticmethod
    def _list_flag(flags: dict[str, Any], key: str) -> list[str]:
        values = flags.get(key, [])
        if any(value is True for value in values):
            raise UsageError(f"--{key} requires a value")
        return values

    def _timeout(self, flags: dict[str, Any]) -> int:
        raw: Optional[str] = self.string_flag(flags, "timeout")
        if raw is None:
            return self.settings.api.timeout_seconds
        try:
            timeout = int(raw)
        except ValueError:
            raise UsageError(f"Invalid timeout: {raw}") from None
        if timeout <= 0:
            raise UsageError(f"Timeout must be a positive number of seconds, got {timeout}")
        return timeout
