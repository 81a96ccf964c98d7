"""``jobview search VIEW QUERY`` — look up items through a view's search index."""

from __future__ import annotations

from pathlib import Path

import typer

from jobview.cli.commands._common import catalog_option, console, open_catalog, require_view
from jobview.display.renderer import ConsoleRenderer


def search_cmd(
    view_name: str = typer.Argument(..., help="The view whose index to query."),
    query: str = typer.Argument(..., help="Name or name fragment."),
    exact: bool = typer.Option(False, "--exact", "-e", help="Exact matches only."),
    catalog_path: Path = catalog_option(),
) -> None:
    """Search a view and its items by name."""
    catalog = open_catalog(catalog_path)
    index = require_view(catalog, view_name).make_search_index()
    hits = index.find(query) if exact else index.suggest(query)
    ConsoleRenderer(console).print_search_hits(query, hits)
