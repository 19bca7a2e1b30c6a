"""Spinner shown on stderr while a request is in flight."""

from __future__ import annotations

from collections.abc import Generator
from contextlib import contextmanager

from rich.markup import escape

from restcli.ui.console import err_console

SPINNER_STYLES = {
    "default": "dots",
    "loading": "dots12",
    "auth": "arc",
}


@contextmanager
def create_spinner(
    message: str,
    style: str = "default",
    enabled: bool = True,
) -> Generator[None, None, None]:
    """Context manager for showing a spinner during an operation.

    Only animates on a terminal; otherwise, or when disabled (verbose logging
    would interleave with it), the body runs without any output.
    """
    if not enabled or not err_console.is_terminal:
        yield
        return

    spinner_type = SPINNER_STYLES.get(style, "dots")
    with err_console.status(
        f"[primary]{escape(message)}[/primary]",
        spinner=spinner_type,
        spinner_style="spinner",
    ):
        yield
