"""Contributor activity index — "who changed what most recently".

The index is a pure fold over the observations reachable from a view's
items::

    item -> job (with build history) -> build -> authored change entry

Each observation is ``(user, job, build timestamp)``.  The fold keeps one
``UserInfo`` per user and replaces it only when a strictly newer timestamp
is seen.  Equal timestamps keep whichever record arrived first, but that
order depends on item iteration and is not part of the contract.

Nothing here is cached: every call re-walks the hierarchy.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from functools import reduce
from typing import NamedTuple

from jobview.models.activity import ActivityIndex, UserInfo
from jobview.models.hierarchy import BuildHistoryProvider, Item, Job, User

logger = logging.getLogger(__name__)


class Observation(NamedTuple):
    user: User
    job: Job
    timestamp_ms: int


def iter_observations(items: Iterable[Item]) -> Iterator[Observation]:
    """Yield one observation per authored change entry, in traversal order.

    Jobs without the build-history capability and change entries without
    an author are skipped; neither is an error.
    """
    for item in items:
        for job in item.get_all_jobs():
            if not isinstance(job, BuildHistoryProvider):
                continue
            for build in job.get_builds():
                timestamp_ms = build.timestamp_ms
                for entry in build.change_set:
                    if entry.author is not None:
                        yield Observation(entry.author, job, timestamp_ms)


def _fold(acc: dict[str, UserInfo], obs: Observation) -> dict[str, UserInfo]:
    current = acc.get(obs.user.user_id)
    if current is None or obs.timestamp_ms > current.last_change_ms:
        acc[obs.user.user_id] = UserInfo(
            user=obs.user if current is None else current.user,
            project=obs.job.name,
            project_url=obs.job.url,
            last_change_ms=obs.timestamp_ms,
        )
    return acc


def build_activity_index(view_name: str, items: Iterable[Item]) -> ActivityIndex:
    """Scan *items* and return the per-user latest-activity index.

    The accumulator is local to this call and is finalized exactly once:
    records are sorted descending by ``last_change_ms``.
    """
    latest = reduce(_fold, iter_observations(items), {})
    users = sorted(latest.values(), key=lambda info: -info.last_change_ms)
    logger.debug(
        "Built activity index for view %s: %d users", view_name, len(users)
    )
    return ActivityIndex(view_name=view_name, users=tuple(users))


def has_people(items: Iterable[Item]) -> bool:
    """Return ``True`` as soon as one authored change entry is found."""
    return next(iter_observations(items), None) is not None
