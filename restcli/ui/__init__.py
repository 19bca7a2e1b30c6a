"""UI components for restcli."""

from restcli.ui.console import (
    configure_logging,
    console,
    err_console,
    print_detail,
    print_error,
    print_output,
    print_success,
    print_warning,
)
from restcli.ui.spinners import create_spinner
from restcli.ui.tables import create_endpoints_table
from restcli.ui.theme import Theme, get_theme

__all__ = [
    # Theme
    "Theme",
    "get_theme",
    # Console
    "console",
    "err_console",
    "configure_logging",
    "print_output",
    "print_error",
    "print_detail",
    "print_success",
    "print_warning",
    # Widgets
    "create_spinner",
    "create_endpoints_table",
]
