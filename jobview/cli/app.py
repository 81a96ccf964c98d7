"""Main Typer application — imports and registers all CLI commands.

Entry point: ``jobview`` (configured via pyproject.toml project.scripts).
"""

from __future__ import annotations

import logging

import typer
from rich.logging import RichHandler

from jobview.cli.commands.create_item import create_item_cmd
from jobview.cli.commands.feed_cmd import feed_cmd
from jobview.cli.commands.people_cmd import people_cmd
from jobview.cli.commands.search_cmd import search_cmd
from jobview.cli.commands.views_cmd import items_cmd, views_cmd
from jobview.config import config

app = typer.Typer(
    name="jobview",
    help="jobview: permission-gated job views, contributor activity and build feeds.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
)


@app.callback()
def _configure(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log at DEBUG level."),
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose or config.debug else config.log_level,
        format="%(message)s",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
        force=True,
    )


# Register subcommands
app.command(name="views", help="List all views.")(views_cmd)
app.command(name="items", help="List the items of a view.")(items_cmd)
app.command(name="people", help="Show who changed what most recently in a view.")(people_cmd)
app.command(name="feed", help="Export the all-builds or failed-builds feed of a view.")(feed_cmd)
app.command(name="search", help="Search a view and its items by name.")(search_cmd)
app.command(name="create-item", help="Create a new item in a view.")(create_item_cmd)


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
