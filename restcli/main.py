"""Main CLI entry point."""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence
from typing import Optional

import httpx

from restcli import __version__
from restcli.commands.base import BaseCommand
from restcli.commands.call import CallCommand
from restcli.commands.download import DownloadFileCommand
from restcli.core.config import Settings, load_settings
from restcli.core.errors import ConfigurationError
from restcli.ui.console import print_error

EPILOG = """\
commands:
  <endpoint-name> [--base ADDR] [--method M] [--param k=v]... [--header "K:V"]...
                  [--body TEXT] [--timeout N] [--output PATH] [--auth] [--verbose]
      Call a named endpoint and print status, headers and body.
  --list
      Show the available endpoints.
  download-file <file-id> [--full] [--output PATH] [--verbose]
      Log in and download a file.
"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="restcli",
        description="REST API Client - Preconfigured CLI tool",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        allow_abbrev=False,
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to a JSON settings file (default: ./appsettings.json if present)",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"restcli {__version__}",
    )
    return parser


def create_command(
    args: list[str],
    settings: Settings,
    transport: Optional[httpx.BaseTransport] = None,
) -> tuple[BaseCommand, list[str]]:
    """Pick the command for ``args`` and return it with its own arguments."""
    if args and args[0] == DownloadFileCommand.name:
        return DownloadFileCommand(settings, transport), args[1:]
    return CallCommand(settings, transport), args


def run(
    argv: Optional[Sequence[str]] = None,
    transport: Optional[httpx.BaseTransport] = None,
) -> int:
    """Run one command and return its exit code."""
    parser = build_parser()

    # Command flags are parsed by the command itself
    options, remaining = parser.parse_known_args(argv)

    if not remaining:
        parser.print_help(sys.stderr)
        return 1

    try:
        settings = load_settings(options.config)
    except ConfigurationError as e:
        print_error(str(e))
        return 1

    command, command_args = create_command(remaining, settings, transport)
    success = command.execute(command_args)
    return 0 if success else 1


def main() -> None:
    """Main entry point."""
    sys.exit(run())


if __name__ == "__main__":
    main()
