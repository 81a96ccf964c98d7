"""Rich terminal renderer for views, people and build feeds.

Color scheme
------------
- green     : SUCCESS
- yellow    : UNSTABLE
- bold red  : FAILURE
- dim       : NOT_BUILT / ABORTED
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime, timezone

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from jobview.core.search import SearchHit
from jobview.core.view import View
from jobview.models.activity import ActivityIndex
from jobview.models.feeds import Feed
from jobview.models.hierarchy import BuildHistoryProvider, BuildResult

_RESULT_STYLES: dict[BuildResult, str] = {
    BuildResult.SUCCESS: "green",
    BuildResult.UNSTABLE: "yellow",
    BuildResult.FAILURE: "bold red",
    BuildResult.NOT_BUILT: "dim",
    BuildResult.ABORTED: "dim",
}


class ConsoleRenderer:
    """Renders jobview read models as Rich tables.

    Also satisfies the ``FeedRenderer`` protocol.

    Parameters
    ----------
    console:
        Rich Console instance.  A new one is created if not provided.
    """

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------

    def views_table(self, views: Sequence[View]) -> Table:
        table = Table(title="Views", header_style="bold cyan")
        table.add_column("Name", style="cyan")
        table.add_column("URL")
        table.add_column("Items", justify="right")
        table.add_column("Description", style="dim")
        for view in views:
            table.add_row(
                view.view_name,
                view.url or "[dim](root)[/dim]",
                str(len(view.get_items())),
                escape(view.description or ""),
            )
        return table

    def items_table(self, view: View) -> Table:
        table = Table(title=f"{view.display_name}: items", header_style="bold cyan")
        table.add_column("Name", style="cyan")
        table.add_column("Kind")
        table.add_column("Jobs", justify="right")
        table.add_column("Last build")
        for item in view.get_items():
            last = "[dim]-[/dim]"
            if isinstance(item, BuildHistoryProvider) and item.get_builds():
                build = item.get_builds()[0]
                style = _RESULT_STYLES.get(build.result, "")
                last = f"[{style}]{build.display_name} {build.result.value}[/{style}]"
            table.add_row(item.name, item.kind, str(len(item.get_all_jobs())), last)
        return table

    # ------------------------------------------------------------------
    # People
    # ------------------------------------------------------------------

    def people_table(self, index: ActivityIndex, now: datetime | None = None) -> Table:
        now = now or datetime.now(timezone.utc)
        table = Table(title=f"People in {index.view_name}", header_style="bold cyan")
        table.add_column("User", style="cyan")
        table.add_column("Last active")
        table.add_column("On project")
        for info in index.users:
            table.add_row(
                escape(info.user.display_name),
                info.last_change_time_string(now),
                info.project,
            )
        return table

    def print_people(self, index: ActivityIndex, now: datetime | None = None) -> None:
        if index.is_empty:
            self.console.print(
                f"[dim]No change log authors recorded in view {index.view_name}.[/dim]"
            )
            return
        self.console.print(self.people_table(index, now))

    # ------------------------------------------------------------------
    # Feeds
    # ------------------------------------------------------------------

    def feed_panel(self, feed: Feed) -> Panel:
        table = Table(show_header=True, header_style="bold cyan", expand=True)
        table.add_column("Build", min_width=20)
        table.add_column("Result", justify="center")
        table.add_column("Published")
        table.add_column("Link", style="dim")
        for entry in feed.entries:
            style = _RESULT_STYLES.get(entry.result, "")
            table.add_row(
                f"{entry.job_name} #{entry.build_number}",
                f"[{style}]{entry.result.value}[/{style}]",
                entry.published.strftime("%Y-%m-%d %H:%M:%S UTC"),
                entry.link,
            )
        return Panel(
            table,
            title=f"[bold]{feed.title}[/bold]",
            subtitle=feed.link or "/",
            border_style="blue",
        )

    def render_feed(self, feed: Feed) -> None:
        if not feed.entries:
            self.console.print(f"[bold]{feed.title}[/bold]  [dim](no builds)[/dim]")
            return
        self.console.print(self.feed_panel(feed))

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------

    def print_search_hits(self, query: str, hits: Sequence[SearchHit]) -> None:
        if not hits:
            self.console.print(f"[dim]Nothing matches '{escape(query)}'.[/dim]")
            return
        for hit in hits:
            self.console.print(
                f"  [cyan]{escape(hit.name)}[/cyan]  [dim]/{escape(hit.url)}[/dim]"
            )
