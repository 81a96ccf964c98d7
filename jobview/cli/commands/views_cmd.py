"""``jobview views`` and ``jobview items VIEW`` — navigation listings."""

from __future__ import annotations

from pathlib import Path

import typer
from rich.markup import escape

from jobview.cli.commands._common import catalog_option, console, open_catalog, require_view
from jobview.config import config
from jobview.display.renderer import ConsoleRenderer


def views_cmd(catalog_path: Path = catalog_option()) -> None:
    """List every view, sorted by name."""
    catalog = open_catalog(catalog_path)
    console.print(ConsoleRenderer(console).views_table(catalog.views))


def items_cmd(
    view_name: str = typer.Argument(..., help="The view to list."),
    catalog_path: Path = catalog_option(),
) -> None:
    """List the items of a view."""
    catalog = open_catalog(catalog_path)
    view = require_view(catalog, view_name)
    console.print(f"[dim]{view.absolute_url(config.root_url)}[/dim]")
    if view.description:
        console.print(escape(view.description))
    console.print(ConsoleRenderer(console).items_table(view))
