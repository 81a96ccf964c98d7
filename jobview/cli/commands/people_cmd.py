"""``jobview people VIEW`` — who changed what most recently.

The activity index is recomputed from the catalog on every invocation.
"""

from __future__ import annotations

from pathlib import Path

import typer

from jobview.cli.commands._common import catalog_option, console, open_catalog, require_view
from jobview.display.renderer import ConsoleRenderer


def people_cmd(
    view_name: str = typer.Argument(..., help="The view to scan."),
    catalog_path: Path = catalog_option(),
) -> None:
    """Show the contributor activity index of a view."""
    catalog = open_catalog(catalog_path)
    view = require_view(catalog, view_name)
    ConsoleRenderer(console).print_people(view.get_people())
