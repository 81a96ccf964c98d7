"""Build hierarchy models — item -> job -> build -> change entry.

Builds and change entries are frozen Pydantic models.  Items and jobs are
described by Protocols so that any record store can supply them; the
traversal code only ever asks whether a job *has* the build-history
capability, never what concrete class it is.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime
from enum import Enum
from typing import Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field, field_validator

from jobview.timespan import datetime_to_epoch_ms


class User(BaseModel):
    """A person who authored one or more recorded changes.

    Identity is the ``user_id``; ``full_name`` is display-only.
    """

    model_config = ConfigDict(frozen=True)

    user_id: str
    full_name: str = ""

    @property
    def display_name(self) -> str:
        return self.full_name or self.user_id


class ChangeEntry(BaseModel):
    """One recorded change in a build's change set."""

    model_config = ConfigDict(frozen=True)

    author: User | None = None  # unattributed changes are legal
    message: str = ""
    commit_id: str = ""
    affected_paths: tuple[str, ...] = ()


class BuildResult(str, Enum):
    """Outcome of a single build, ordered from best to worst."""

    SUCCESS = "success"
    UNSTABLE = "unstable"
    FAILURE = "failure"
    NOT_BUILT = "not_built"
    ABORTED = "aborted"


class Build(BaseModel):
    """One historical execution of a job.

    ``timestamp`` must be timezone-aware.  Every ordering decision in the
    package goes through ``timestamp_ms`` so that comparisons happen on a
    single integer epoch value.
    """

    model_config = ConfigDict(frozen=True)

    number: int = Field(ge=1)
    timestamp: datetime
    result: BuildResult = BuildResult.SUCCESS
    duration_ms: int = 0
    change_set: tuple[ChangeEntry, ...] = ()

    @field_validator("timestamp")
    @classmethod
    def _require_aware(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            raise ValueError("build timestamp must be timezone-aware")
        return value

    @property
    def timestamp_ms(self) -> int:
        """Build start time in epoch milliseconds."""
        return datetime_to_epoch_ms(self.timestamp)

    @property
    def display_name(self) -> str:
        return f"#{self.number}"


# ---------------------------------------------------------------------------
# Capability protocols
# ---------------------------------------------------------------------------


@runtime_checkable
class Job(Protocol):
    """Any entity reachable from an item."""

    @property
    def name(self) -> str: ...

    @property
    def url(self) -> str: ...


@runtime_checkable
class BuildHistoryProvider(Protocol):
    """Optional capability: a job that records its builds.

    ``get_builds()`` returns builds newest first.
    """

    def get_builds(self) -> Sequence[Build]: ...


@runtime_checkable
class Item(Protocol):
    """Top-level named entity owned by a view."""

    @property
    def name(self) -> str: ...

    @property
    def url(self) -> str: ...

    def get_all_jobs(self) -> Sequence[Job]: ...
