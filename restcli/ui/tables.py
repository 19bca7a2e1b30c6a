"""Table rendering for the endpoint registry."""

from __future__ import annotations

from rich import box
from rich.table import Table
from rich.text import Text

from restcli.core.endpoints import EndpointRegistry, placeholders


def create_endpoints_table(registry: EndpointRegistry) -> Table:
    """Create a table of endpoint names, templates and their parameters."""
    table = Table(
        title="Available endpoints",
        title_style="primary",
        box=box.SIMPLE,
        header_style="muted",
        padding=(0, 1),
    )
    table.add_column("Endpoint", style="endpoint", no_wrap=True)
    table.add_column("Path", style="template", no_wrap=True)
    table.add_column("Parameters", style="placeholder")

    for name, template in registry.list_endpoints():
        params = placeholders(template)
        table.add_row(name, Text(template), ", ".join(params) if params else "-")

    return table
