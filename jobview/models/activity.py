"""Contributor activity models — the "People" read model of a view."""

from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict

from jobview.models.hierarchy import User
from jobview.timespan import (
    datetime_to_epoch_ms,
    epoch_ms_to_datetime,
    format_time_span,
    xs_datetime,
)


class UserInfo(BaseModel):
    """Latest recorded activity of one user within a single scan.

    ``project`` names the job that owns the build carrying the user's most
    recent change; ``last_change_ms`` is that build's timestamp.
    """

    model_config = ConfigDict(frozen=True)

    user: User
    project: str
    project_url: str
    last_change_ms: int

    @property
    def last_change(self) -> datetime:
        return epoch_ms_to_datetime(self.last_change_ms)

    @property
    def time_sort_key(self) -> str:
        return xs_datetime(self.last_change_ms)

    def last_change_time_string(self, now: datetime | None = None) -> str:
        """Human-readable age of the last change, e.g. ``"3 hr 2 min"``."""
        now = now or datetime.now(timezone.utc)
        return format_time_span(datetime_to_epoch_ms(now) - self.last_change_ms)


class ActivityIndex(BaseModel):
    """Per-user latest-activity records, newest first.

    Computed fresh on every request and never persisted.
    """

    model_config = ConfigDict(frozen=True)

    view_name: str
    users: tuple[UserInfo, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.users

    def get(self, user_id: str) -> UserInfo | None:
        for info in self.users:
            if info.user.user_id == user_id:
                return info
        return None
