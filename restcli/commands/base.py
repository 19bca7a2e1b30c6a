"""Base command class for CLI commands."""

from __future__ import annotations

import logging
import traceback
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Optional

import httpx

from restcli.core.config import Settings
from restcli.core.errors import RestClientError, UsageError
from restcli.ui.console import (
    configure_logging,
    print_detail,
    print_error,
    print_output,
    print_success,
)

logger = logging.getLogger(__name__)


class BaseCommand(ABC):
    """Base class for all CLI commands."""

    name: str = "base"
    description: str = "Base command"
    usage: str = ""

    # Single-letter aliases, e.g. {"o": "output"}
    short_flags: dict[str, str] = {}
    # Flags that never consume the following argument
    boolean_flags: frozenset[str] = frozenset()
    # Flags that may be given more than once; collected into lists
    repeatable_flags: frozenset[str] = frozenset()
    # Flags that take a single value
    value_flags: frozenset[str] = frozenset()

    def __init__(self, settings: Settings, transport: Optional[httpx.BaseTransport] = None):
        self.settings = settings
        self.transport = transport
        self.verbose = False

    def execute(self, args: list[str]) -> bool:
        """
        Execute the command.

        Args:
            args: Command arguments

        Returns:
            True if successful, False otherwise
        """
        try:
            flags, remaining = self.parse_flags(args)
            self.start(flags)
            return self.run(flags, remaining)
        except (RestClientError, OSError) as e:
            logger.debug("%s failed: %s", self.name, type(e).__name__)
            self.report(e)
            return False

    @abstractmethod
    def run(self, flags: dict[str, Any], remaining: list[str]) -> bool:
        """Command body; raise RestClientError to report a failure."""
        pass

    @property
    def known_flags(self) -> frozenset[str]:
        return (
            frozenset(self.short_flags.values())
            | self.boolean_flags
            | self.repeatable_flags
            | self.value_flags
        )

    def parse_flags(self, args: list[str]) -> tuple[dict[str, Any], list[str]]:
        """Parse command-line flags from arguments.

        Raises:
            UsageError: For a flag the command does not define.
        """
        known = self.known_flags
        flags: dict[str, Any] = {}
        remaining = []

        i = 0
        while i < len(args):
            arg = args[i]
            value: Any = None
            if arg.startswith("--") and len(arg) > 2:
                key = arg[2:]
                if "=" in key:
                    key, value = key.split("=", 1)
                if key not in known:
                    raise UsageError(f"Unknown option --{key}")
            elif arg.startswith("-") and len(arg) == 2:
                if arg[1] not in self.short_flags:
                    raise UsageError(f"Unknown option {arg}")
                key = self.short_flags[arg[1]]
            else:
                remaining.append(arg)
                i += 1
                continue

            if value is None:
                if key in self.boolean_flags:
                    value = True
                elif i + 1 < len(args) and not args[i + 1].startswith("-"):
                    value = args[i + 1]
                    i += 1
                else:
                    value = True

            if key in self.repeatable_flags:
                flags.setdefault(key, []).append(value)
            else:
                flags[key] = value
            i += 1

        return flags, remaining

    def start(self, flags: dict[str, Any]) -> None:
        """Apply the flags shared by every command."""
        self.verbose = bool(flags.get("verbose", False))
        configure_logging(self.verbose)

    @staticmethod
    def string_flag(flags: dict[str, Any], key: str, default: Optional[str] = None) -> Optional[str]:
        """Return a flag's text value; a bare flag with no value is a usage error."""
        value = flags.get(key, default)
        if value is True:
            raise UsageError(f"--{key} requires a value")
        return value

    def write_result(self, text: str, output: Optional[str]) -> None:
        """Save to ``output`` when given, else print to stdout."""
        if output:
            Path(output).write_text(text, encoding="utf-8")
            print_success(f"File saved to: {output}")
        else:
            print_output(text)

    def report(self, error: Exception) -> None:
        """Print a failure, with the full chain under --verbose."""
        print_error(str(error))
        if self.verbose:
            detail = "".join(traceback.format_exception(error)).rstrip()
            print_detail(detail)

