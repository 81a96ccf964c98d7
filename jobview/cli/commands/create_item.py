"""``jobview create-item VIEW NAME`` — create an item through a view.

The acting principal must hold ``item.Create`` in the view's scope.
The catalog is saved only when creation succeeds.
"""

from __future__ import annotations

from pathlib import Path

import typer
from rich.markup import escape

from jobview.cli.commands._common import catalog_option, console, open_catalog, require_view
from jobview.config import config
from jobview.core.acl import AuthorizationError
from jobview.core.view import ItemValidationError


def create_item_cmd(
    view_name: str = typer.Argument(..., help="The view to create the item in."),
    name: str = typer.Argument(..., help="Name of the new item."),
    mode: str = typer.Option(
        "freestyle",
        "--type",
        "-t",
        help="freestyle, multi-config, external or copy.",
    ),
    copy_from: str = typer.Option(None, "--copy-from", help="Item to copy (copy mode)."),
    configurations: list[str] = typer.Option(
        None, "--configuration", help="Matrix configuration name (repeatable)."
    ),
    description: str = typer.Option("", "--description", "-d"),
    principal: str = typer.Option(
        None, "--as", help="Acting principal (defaults to JOBVIEW_DEFAULT_PRINCIPAL)."
    ),
    catalog_path: Path = catalog_option(),
) -> None:
    """Create a new item in a view."""
    catalog = open_catalog(catalog_path)
    view = require_view(catalog, view_name)

    request: dict[str, object] = {"name": name, "mode": mode, "description": description}
    if copy_from:
        request["copy_from"] = copy_from
    if configurations:
        request["configurations"] = list(configurations)

    try:
        item = view.create_item(request, principal or config.default_principal)
    except AuthorizationError as exc:
        console.print(f"[bold red]Access denied:[/bold red] {escape(str(exc))}")
        raise typer.Exit(code=1) from exc
    except ItemValidationError as exc:
        console.print(f"[bold red]Invalid request:[/bold red] {escape(str(exc))}")
        raise typer.Exit(code=1) from exc

    catalog.persist(catalog_path)
    console.print(
        f"[bold green]Created[/bold green] {item.kind} item "
        f"[cyan]{item.name}[/cyan] at /{item.url}"
    )
