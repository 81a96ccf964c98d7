"""jobview data models — all Pydantic v2, all frozen (immutable)."""

from jobview.models.activity import ActivityIndex, UserInfo
from jobview.models.feeds import Feed, FeedEntry, FeedFilter
from jobview.models.hierarchy import (
    Build,
    BuildHistoryProvider,
    BuildResult,
    ChangeEntry,
    Item,
    Job,
    User,
)
from jobview.models.items import (
    AnyItem,
    CreateItemRequest,
    CreateMode,
    ExternalJob,
    FreestyleProject,
    MatrixConfiguration,
    MultiConfigProject,
)
from jobview.models.security import Permission

__all__ = [
    # hierarchy
    "User",
    "ChangeEntry",
    "BuildResult",
    "Build",
    "Item",
    "Job",
    "BuildHistoryProvider",
    # items
    "AnyItem",
    "FreestyleProject",
    "MatrixConfiguration",
    "MultiConfigProject",
    "ExternalJob",
    "CreateMode",
    "CreateItemRequest",
    # activity
    "UserInfo",
    "ActivityIndex",
    # feeds
    "FeedFilter",
    "FeedEntry",
    "Feed",
    # security
    "Permission",
]
