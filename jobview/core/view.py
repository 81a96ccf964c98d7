"""Views — named, permission-gated presentations of a set of items.

A ``View`` exposes identity (name, URL, description), membership (items,
lookup, containment) and one mutating operation, ``create_item``, guarded
by the view's ACL.  The activity index, search index and build feeds are
all derived from ``get_items()`` on demand.

Two concrete views are provided:

* ``AllView`` — the single root view; shows every stored item and has the
  empty URL.
* ``ListView`` — a named subset selected by explicit job names and an
  optional regular expression.
"""

from __future__ import annotations

import abc
import logging
import re
from collections.abc import Iterable, Mapping
from datetime import datetime
from typing import Any, final

from pydantic import ValidationError

from jobview.core import acl as acl_mod
from jobview.core.acl import ACL, UnsecuredACL
from jobview.core.activity import build_activity_index, has_people
from jobview.core.feed import FeedExporter
from jobview.core.search import CollectionSearchIndex, SearchIndexBuilder, UnionSearchIndex
from jobview.core.store import ItemStore, blank_copy
from jobview.models.activity import ActivityIndex
from jobview.models.feeds import Feed
from jobview.models.items import (
    AnyItem,
    CreateItemRequest,
    CreateMode,
    ExternalJob,
    FreestyleProject,
    MatrixConfiguration,
    MultiConfigProject,
)
from jobview.models.security import ITEM_CREATE, Permission

logger = logging.getLogger(__name__)

_DEFAULT_ACL = UnsecuredACL()


class ItemValidationError(RuntimeError):
    """Raised when item-creation input is malformed or conflicts with state."""


def item_create_permission() -> Permission:
    """The permission ``create_item`` requires."""
    return ITEM_CREATE


def view_sort_key(view: View) -> str:
    """Sort key ordering sibling views by name."""
    return view.view_name


class View(abc.ABC):
    """Abstract base for every view.

    Parameters
    ----------
    store:
        The record store supplying items.
    acl:
        The view's dedicated authorization scope, or ``None`` when the view
        has none.
    default_acl:
        Process-wide scope used when ``acl`` is ``None``.  Defaults to an
        ``UnsecuredACL``.
    """

    def __init__(
        self,
        store: ItemStore,
        *,
        acl: ACL | None = None,
        default_acl: ACL = _DEFAULT_ACL,
    ) -> None:
        self._store = store
        self._acl = acl
        self._default_acl = default_acl

    # ------------------------------------------------------------------
    # Identity
    # ------------------------------------------------------------------

    @property
    @abc.abstractmethod
    def view_name(self) -> str: ...

    @property
    @abc.abstractmethod
    def description(self) -> str | None:
        """Message shown at the top of the view.  May contain HTML."""

    @property
    @abc.abstractmethod
    def url(self) -> str:
        """Path relative to the context root.

        Never starts with ``/`` and always ends with ``/``, except for the
        root view, which returns ``""``.
        """

    @property
    def display_name(self) -> str:
        return self.view_name

    @property
    def search_url(self) -> str:
        return self.url

    def absolute_url(self, root_url: str) -> str:
        return root_url.rstrip("/") + "/" + self.url

    # ------------------------------------------------------------------
    # Membership
    # ------------------------------------------------------------------

    @abc.abstractmethod
    def get_items(self) -> tuple[AnyItem, ...]:
        """Read-only snapshot of the items in this view."""

    def get_item(self, name: str) -> AnyItem | None:
        """The item called *name* if it belongs to this view, else ``None``."""
        for item in self.get_items():
            if item.name == name:
                return item
        return None

    def contains(self, item: AnyItem) -> bool:
        return item in self.get_items()

    # ------------------------------------------------------------------
    # Access control
    # ------------------------------------------------------------------

    @property
    def acl(self) -> ACL:
        return self._acl if self._acl is not None else self._default_acl

    def check_permission(self, principal: str, permission: Permission) -> None:
        """Raise ``AuthorizationError`` unless *principal* holds *permission*."""
        acl_mod.check_permission(self.acl, principal, permission)

    def has_permission(self, principal: str, permission: Permission) -> bool:
        return self.acl.has_permission(principal, permission)

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    @final
    def create_item(
        self, request: CreateItemRequest | Mapping[str, Any], principal: str
    ) -> AnyItem:
        """Create a new item in this view.

        The permission check happens before the request is parsed, so an
        unauthorized caller learns nothing about input validity and no
        state changes.

        Raises
        ------
        AuthorizationError
            If *principal* lacks ``ITEM_CREATE``.
        ItemValidationError
            If the request is malformed, the name is taken, or the copy
            source does not exist.
        """
        self.check_permission(principal, item_create_permission())

        if not isinstance(request, CreateItemRequest):
            try:
                request = CreateItemRequest.model_validate(dict(request))
            except ValidationError as exc:
                raise ItemValidationError(str(exc)) from exc

        if request.name in self._store:
            raise ItemValidationError(
                f"An item named '{request.name}' already exists."
            )

        item = self._instantiate(request)
        self._store.add(item)
        self._on_item_created(item)
        logger.info(
            "Created %s item %s in view %s (by %s)",
            item.kind,
            item.name,
            self.view_name,
            principal,
        )
        return item

    def _instantiate(self, request: CreateItemRequest) -> AnyItem:
        if request.mode == CreateMode.COPY:
            source = self._store.get(request.copy_from or "")
            if source is None:
                raise ItemValidationError(
                    f"No item named '{request.copy_from}' to copy from."
                )
            return blank_copy(source, request.name)
        if request.mode == CreateMode.EXTERNAL:
            return ExternalJob(name=request.name, description=request.description)
        if request.mode == CreateMode.MULTI_CONFIG:
            return MultiConfigProject(
                name=request.name,
                description=request.description,
                configurations=tuple(
                    MatrixConfiguration(name=c, parent_name=request.name)
                    for c in request.configurations
                ),
            )
        return FreestyleProject(name=request.name, description=request.description)

    def _on_item_created(self, item: AnyItem) -> None:
        """Hook for views that track membership explicitly."""

    # ------------------------------------------------------------------
    # Derived read models
    # ------------------------------------------------------------------

    def get_people(self) -> ActivityIndex:
        """Users appearing in the change logs of this view, newest first."""
        return build_activity_index(self.view_name, self.get_items())

    def has_people(self) -> bool:
        return has_people(self.get_items())

    def make_search_index(self) -> UnionSearchIndex:
        return (
            SearchIndexBuilder()
            .add(self.search_url, self.view_name)
            .add_index(CollectionSearchIndex(self.get_item, self.get_items))
            .make()
        )

    def feeds(self) -> FeedExporter:
        return FeedExporter(self)

    def rss_all(self, now: datetime | None = None) -> Feed:
        return self.feeds().all_builds(now)

    def rss_failed(self, now: datetime | None = None) -> Feed:
        return self.feeds().failed_builds(now)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.view_name!r})"


class AllView(View):
    """The root view: every stored item, empty URL."""

    def __init__(
        self,
        store: ItemStore,
        name: str = "all",
        description: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(store, **kwargs)
        self._name = name
        self._description = description

    @property
    def view_name(self) -> str:
        return self._name

    @property
    def description(self) -> str | None:
        return self._description

    @property
    def url(self) -> str:
        return ""

    def get_items(self) -> tuple[AnyItem, ...]:
        return self._store.all()

    def get_item(self, name: str) -> AnyItem | None:
        return self._store.get(name)


class ListView(View):
    """A named subset of the store.

    An item belongs to the view if its name was added explicitly or matches
    ``include_regex`` (full match).  Items created through this view are
    added explicitly.
    """

    def __init__(
        self,
        store: ItemStore,
        name: str,
        *,
        job_names: Iterable[str] = (),
        include_regex: str | None = None,
        description: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(store, **kwargs)
        self._name = name
        self._description = description
        self._job_names: set[str] = set(job_names)
        self._include_pattern = re.compile(include_regex) if include_regex else None

    @property
    def view_name(self) -> str:
        return self._name

    @property
    def description(self) -> str | None:
        return self._description

    @property
    def url(self) -> str:
        return f"view/{self._name}/"

    @property
    def job_names(self) -> frozenset[str]:
        return frozenset(self._job_names)

    @property
    def include_regex(self) -> str | None:
        return self._include_pattern.pattern if self._include_pattern else None

    def _includes(self, name: str) -> bool:
        if name in self._job_names:
            return True
        return bool(self._include_pattern and self._include_pattern.fullmatch(name))

    def get_items(self) -> tuple[AnyItem, ...]:
        return tuple(item for item in self._store.all() if self._includes(item.name))

    def get_item(self, name: str) -> AnyItem | None:
        if not self._includes(name):
            return None
        return self._store.get(name)

    def add_job(self, name: str) -> None:
        self._job_names.add(name)

    def _on_item_created(self, item: AnyItem) -> None:
        self._job_names.add(item.name)
