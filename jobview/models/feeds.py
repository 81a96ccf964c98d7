"""Build syndication models.

Serialization to RSS or Atom is the renderer's job; these models only
carry the title, canonical link and ordered entries.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict

from jobview.models.hierarchy import BuildResult


class FeedFilter(str, Enum):
    ALL = "all"
    FAILED = "failed"


# Title suffix appended to the view's display name.
FEED_TITLE_SUFFIXES: dict[FeedFilter, str] = {
    FeedFilter.ALL: " all builds",
    FeedFilter.FAILED: " failed builds",
}


class FeedEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str  # "<job> #<number> (<result>)"
    link: str
    guid: str
    published: datetime
    job_name: str
    build_number: int
    result: BuildResult


class Feed(BaseModel):
    """One syndication stream derived from a view."""

    model_config = ConfigDict(frozen=True)

    title: str
    link: str
    filter: FeedFilter = FeedFilter.ALL
    entries: tuple[FeedEntry, ...] = ()
