"""Helpers shared by the CLI commands."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import typer
from rich.console import Console
from rich.markup import escape

from jobview.config import config
from jobview.core.catalog import Catalog, CatalogError
from jobview.core.production_guard import (
    ProductionConfigError,
    enforce_production_constraints,
)
from jobview.core.view import View

console = Console()


def catalog_option() -> Any:
    return typer.Option(
        config.catalog_path,
        "--catalog",
        "-c",
        help="Path to the catalog JSON file.",
    )


def open_catalog(path: Path) -> Catalog:
    """Load the catalog and run the production guard, exiting on failure."""
    try:
        catalog = Catalog.load(path, root_view_name=config.root_view_name)
        enforce_production_constraints(config, catalog)
    except (CatalogError, ProductionConfigError) as exc:
        console.print(f"[bold red]{escape(str(exc))}[/bold red]")
        raise typer.Exit(code=1) from exc
    return catalog


def require_view(catalog: Catalog, name: str) -> View:
    view = catalog.get_view(name)
    if view is None:
        console.print(f"[bold red]View not found:[/bold red] {escape(name)}")
        console.print("\n[bold]Available views:[/bold]")
        for v in catalog.views:
            console.print(f"  [cyan]{escape(v.view_name)}[/cyan]")
        raise typer.Exit(code=1)
    return view
