"""Download-file command - fetch a file record with an authenticated request."""

from __future__ import annotations

import logging
from typing import Any

from restcli.commands.base import BaseCommand
from restcli.core.api_client import ApiClient
from restcli.core.auth import AuthenticationService
from restcli.core.errors import UsageError
from restcli.ui.spinners import create_spinner

logger = logging.getLogger(__name__)

FILE_ENDPOINT = "files/{fileId}"
FILE_FULL_ENDPOINT = "files/{fileId}/full"


class DownloadFileCommand(BaseCommand):
    """Log in, then download a file by ID."""

    name = "download-file"
    description = "Download a file from the API"
    usage = "download-file <file-id> [--full] [--output PATH] [--verbose]"

    short_flags = {"F": "full", "o": "output", "v": "verbose"}
    boolean_flags = frozenset({"full", "verbose"})
    value_flags = frozenset({"output"})

    def run(self, flags: dict[str, Any], remaining: list[str]) -> bool:
        if not remaining:
            raise UsageError(f"File ID is required. Usage: {self.usage}")
        if len(remaining) > 1:
            raise UsageError(f"Unexpected arguments: {' '.join(remaining[1:])}")

        file_id = remaining[0]
        full = bool(flags.get("full", False))
        output = self.string_flag(flags, "output")

        api_settings = self.settings.api
        if not api_settings.base_address:
            raise UsageError("Base address is not configured (api.base_address)")

        logger.debug("Starting download-file command...")
        with ApiClient(
            api_settings.base_address,
            timeout=api_settings.timeout_seconds,
            auth=self.settings.authentication,
            verbose=self.verbose,
            transport=self.transport,
        ) as api:
            auth = AuthenticationService(self.settings, api)

            logger.debug("Authenticating...")
            with create_spinner("Authenticating...", style="auth", enabled=not self.verbose):
                token = auth.get_token()

            logger.debug("Downloading file %s (full: %s)", file_id, full)
            with create_spinner(f"Downloading file {file_id}...", style="loading", enabled=not self.verbose):
                body = api.send_raw(
                    "GET",
                    FILE_FULL_ENDPOINT if full else FILE_ENDPOINT,
                    parameters={"fileId": file_id},
                    auth_token=token,
                    requires_auth=True,
                )

        self.write_result(body, output)
        return True
