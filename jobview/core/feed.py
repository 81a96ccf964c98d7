"""FeedExporter — the "all builds" and "failed builds" streams of a view.

The exporter owns three things only: which builds go in (filtering), the
feed title, and the canonical link.  Ordering comes from ``RunList`` and
serialization from whatever ``FeedRenderer`` the caller plugs in.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from jobview.core.run_list import DEFAULT_MIN_BUILDS, DEFAULT_RECENT_DAYS, RunList, RunRef
from jobview.models.feeds import FEED_TITLE_SUFFIXES, Feed, FeedEntry, FeedFilter

if TYPE_CHECKING:
    from jobview.core.view import View

logger = logging.getLogger(__name__)


@runtime_checkable
class FeedRenderer(Protocol):
    """Serializes a ``Feed`` into some external representation."""

    def render_feed(self, feed: Feed) -> None: ...


def to_feed_entry(run: RunRef) -> FeedEntry:
    build = run.build
    return FeedEntry(
        title=f"{run.display_name} ({build.result.value})",
        link=run.url,
        guid=f"{run.job_name}#{build.number}",
        published=build.timestamp,
        job_name=run.job_name,
        build_number=build.number,
        result=build.result,
    )


class FeedExporter:
    """Derives build syndication streams from a view.

    Parameters
    ----------
    view:
        The view whose items supply the builds.
    run_list_factory:
        Builds the ordered ``RunList`` for the view.  Defaults to
        ``RunList.from_view``.
    recent_days, min_builds:
        Passed through to ``RunList.new_builds``.
    """

    def __init__(
        self,
        view: View,
        run_list_factory: Callable[[View], RunList] = RunList.from_view,
        *,
        recent_days: int = DEFAULT_RECENT_DAYS,
        min_builds: int = DEFAULT_MIN_BUILDS,
    ) -> None:
        self._view = view
        self._run_list_factory = run_list_factory
        self._recent_days = recent_days
        self._min_builds = min_builds

    def export(self, feed_filter: FeedFilter, now: datetime | None = None) -> Feed:
        runs = self._run_list_factory(self._view)
        if feed_filter == FeedFilter.FAILED:
            runs = runs.failure_only()
        runs = runs.new_builds(
            now, recent_days=self._recent_days, min_builds=self._min_builds
        )

        feed = Feed(
            title=self._view.display_name + FEED_TITLE_SUFFIXES[feed_filter],
            link=self._view.url,
            filter=feed_filter,
            entries=tuple(to_feed_entry(r) for r in runs),
        )
        logger.debug(
            "Exported %s feed for view %s: %d entries",
            feed_filter.value,
            self._view.view_name,
            len(feed.entries),
        )
        return feed

    def all_builds(self, now: datetime | None = None) -> Feed:
        return self.export(FeedFilter.ALL, now)

    def failed_builds(self, now: datetime | None = None) -> Feed:
        return self.export(FeedFilter.FAILED, now)
