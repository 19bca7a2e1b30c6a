"""Rich console instances, message helpers and logging setup."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from restcli.ui.theme import get_theme

# Responses go to stdout; everything else goes to stderr so output can be piped
console = Console(theme=get_theme().to_rich_theme(), highlight=False)
err_console = Console(theme=get_theme().to_rich_theme(), stderr=True, highlight=False)


def print_output(text: str) -> None:
    """Write a response exactly as received.

    Bypasses rich rendering, which would expand tabs and drop control codes.
    """
    console.file.write(text + "\n")
    console.file.flush()


def print_error(message: str, title: str = "Error") -> None:
    """Print an error message to stderr."""
    err_console.print(f"[error]✖ {title}:[/error] {escape(message)}", soft_wrap=True)


def print_detail(message: str) -> None:
    """Print extra error detail to stderr, shown under --verbose."""
    err_console.print(f"[muted]Details:[/muted] {escape(message)}", soft_wrap=True)


def print_success(message: str) -> None:
    err_console.print(f"[success]✔[/success] {escape(message)}", soft_wrap=True)


def print_warning(message: str) -> None:
    err_console.print(f"[warning]⚠ {escape(message)}[/warning]", soft_wrap=True)


def configure_logging(verbose: bool = False) -> None:
    """Route ``restcli`` log records to stderr; DEBUG when verbose."""
    logger = logging.getLogger("restcli")
    logger.handlers.clear()
    handler = RichHandler(
        console=err_console,
        show_time=False,
        show_path=False,
        markup=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    logger.propagate = False
