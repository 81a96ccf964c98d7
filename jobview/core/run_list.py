"""RunList — ordering and outcome classification of builds.

Collects every build of every build-producing job reachable from a set of
items and orders them newest first.  Sort keys are snapshotted into plain
tuples up front, so a concurrent change to the underlying records cannot
make the comparator inconsistent mid-sort.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from datetime import datetime, timedelta, timezone
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict

from jobview.models.hierarchy import Build, BuildHistoryProvider, BuildResult, Item
from jobview.timespan import datetime_to_epoch_ms

if TYPE_CHECKING:
    from jobview.core.view import View

DEFAULT_RECENT_DAYS = 7
DEFAULT_MIN_BUILDS = 10


class RunRef(BaseModel):
    """A build together with the job that produced it."""

    model_config = ConfigDict(frozen=True)

    job_name: str
    job_url: str
    build: Build

    @property
    def url(self) -> str:
        return f"{self.job_url}{self.build.number}/"

    @property
    def display_name(self) -> str:
        return f"{self.job_name} {self.build.display_name}"


class RunList:
    """Immutable, newest-first list of ``RunRef``.

    Filtering methods return a new ``RunList``.
    """

    def __init__(self, runs: Iterable[RunRef]) -> None:
        keyed = [
            ((-r.build.timestamp_ms, r.job_name, -r.build.number), r) for r in runs
        ]
        keyed.sort(key=lambda pair: pair[0])
        self._runs: tuple[RunRef, ...] = tuple(r for _, r in keyed)

    @classmethod
    def from_items(cls, items: Iterable[Item]) -> RunList:
        runs: list[RunRef] = []
        for item in items:
            for job in item.get_all_jobs():
                if not isinstance(job, BuildHistoryProvider):
                    continue
                runs.extend(
                    RunRef(job_name=job.name, job_url=job.url, build=b)
                    for b in job.get_builds()
                )
        return cls(runs)

    @classmethod
    def from_view(cls, view: View) -> RunList:
        return cls.from_items(view.get_items())

    def __iter__(self) -> Iterator[RunRef]:
        return iter(self._runs)

    def __len__(self) -> int:
        return len(self._runs)

    def failure_only(self) -> RunList:
        """Drop successful builds; unstable, failed and aborted remain."""
        return RunList(r for r in self._runs if r.build.result != BuildResult.SUCCESS)

    def new_builds(
        self,
        now: datetime | None = None,
        *,
        recent_days: int = DEFAULT_RECENT_DAYS,
        min_builds: int = DEFAULT_MIN_BUILDS,
    ) -> RunList:
        """Keep builds from the last *recent_days*, but never fewer than *min_builds*."""
        now = now or datetime.now(timezone.utc)
        cutoff_ms = datetime_to_epoch_ms(now - timedelta(days=recent_days))
        kept = [
            r
            for i, r in enumerate(self._runs)
            if i < min_builds or r.build.timestamp_ms >= cutoff_ms
        ]
        return RunList(kept)
