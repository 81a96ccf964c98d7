"""``jobview feed VIEW`` — the all-builds or failed-builds stream of a view."""

from __future__ import annotations

from pathlib import Path

import typer

from jobview.cli.commands._common import catalog_option, console, open_catalog, require_view
from jobview.config import config
from jobview.core.feed import FeedExporter
from jobview.display.renderer import ConsoleRenderer
from jobview.models.feeds import FeedFilter


def feed_cmd(
    view_name: str = typer.Argument(..., help="The view to export."),
    failed: bool = typer.Option(
        False,
        "--failed",
        "-f",
        help="Only builds that did not succeed.",
    ),
    catalog_path: Path = catalog_option(),
) -> None:
    """Export a build feed for a view."""
    catalog = open_catalog(catalog_path)
    view = require_view(catalog, view_name)
    exporter = FeedExporter(
        view,
        recent_days=config.feed_recent_days,
        min_builds=config.feed_min_builds,
    )
    feed = exporter.export(FeedFilter.FAILED if failed else FeedFilter.ALL)
    ConsoleRenderer(console).render_feed(feed)
