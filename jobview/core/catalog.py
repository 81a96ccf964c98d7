"""JSON catalog — a local-first description of items, views and grants.

The catalog is what the CLI loads and saves.  Layout::

    {
      "secured": true,
      "grants": {"alice": ["item.Create"], "anonymous": ["system.Read"]},
      "items": [{"kind": "freestyle", "name": "core", "builds": [...]}, ...],
      "views": [{"name": "team", "job_names": ["core"], "include_regex": "lib-.*"}]
    }

When ``secured`` is false every principal may do everything.
"""

from __future__ import annotations

import json
import logging
import re
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from jobview.core.acl import ACL, MatrixACL, UnsecuredACL
from jobview.core.store import ItemStore
from jobview.core.view import AllView, ListView, View, view_sort_key
from jobview.models.items import AnyItem, check_good_name

logger = logging.getLogger(__name__)


class CatalogError(RuntimeError):
    """Raised when a catalog file cannot be read or is invalid."""


class ListViewSpec(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    description: str | None = None
    job_names: list[str] = []
    include_regex: str | None = None

    @field_validator("name")
    @classmethod
    def _good_name(cls, value: str) -> str:
        return check_good_name(value)


class CatalogDocument(BaseModel):
    """On-disk shape of a catalog file."""

    model_config = ConfigDict(frozen=True)

    secured: bool = False
    grants: dict[str, list[str]] = Field(default_factory=dict)
    items: list[AnyItem] = Field(default_factory=list)
    views: list[ListViewSpec] = Field(default_factory=list)


class Catalog:
    """Live objects built from a ``CatalogDocument``.

    Raises ``CatalogError`` when the document is well-formed but inconsistent:
    duplicate item or view names, unknown permission ids in ``grants``, or an
    invalid ``include_regex``.

    Parameters
    ----------
    document:
        The parsed catalog.
    root_view_name:
        Name under which the root ``AllView`` is addressed.
    """

    def __init__(self, document: CatalogDocument, root_view_name: str = "all") -> None:
        try:
            self._build(document, root_view_name)
        except (ValueError, KeyError, re.error) as exc:
            raise CatalogError(f"Invalid catalog: {exc}") from exc

    def _build(self, document: CatalogDocument, root_view_name: str) -> None:
        self.secured = document.secured
        self.store = ItemStore(document.items)
        self.acl: ACL = (
            MatrixACL(document.grants) if document.secured else UnsecuredACL()
        )
        self.root = AllView(self.store, name=root_view_name, default_acl=self.acl)
        self._views: dict[str, View] = {root_view_name: self.root}
        for spec in document.views:
            if spec.name in self._views:
                raise CatalogError(f"Duplicate view name '{spec.name}'.")
            self._views[spec.name] = ListView(
                self.store,
                spec.name,
                job_names=spec.job_names,
                include_regex=spec.include_regex,
                description=spec.description,
                default_acl=self.acl,
            )

    @classmethod
    def load(cls, path: Path, root_view_name: str = "all") -> Catalog:
        """Read a catalog file; a missing file yields an empty catalog."""
        if not path.exists():
            logger.debug("No catalog file at %s; starting empty.", path)
            return cls(CatalogDocument(), root_view_name)
        try:
            document = CatalogDocument.model_validate_json(
                path.read_text(encoding="utf-8")
            )
        except (OSError, ValidationError) as exc:
            raise CatalogError(f"Cannot load catalog {path}: {exc}") from exc
        logger.info("Loaded catalog %s: %d item(s)", path, len(document.items))
        return cls(document, root_view_name)

    def get_view(self, name: str) -> View | None:
        return self._views.get(name)

    @property
    def views(self) -> list[View]:
        """Every view, sorted by name."""
        return sorted(self._views.values(), key=view_sort_key)

    def to_document(self) -> CatalogDocument:
        list_views = [v for v in self._views.values() if isinstance(v, ListView)]
        return CatalogDocument(
            secured=self.secured,
            grants=self.acl.to_grants() if isinstance(self.acl, MatrixACL) else {},
            items=list(self.store.all()),
            views=[
                ListViewSpec(
                    name=v.view_name,
                    description=v.description,
                    job_names=sorted(v.job_names),
                    include_regex=v.include_regex,
                )
                for v in sorted(list_views, key=view_sort_key)
            ],
        )

    def persist(self, path: Path) -> None:
        """Write the catalog to *path*, creating parent directories."""
        path.parent.mkdir(parents=True, exist_ok=True)
        data = json.loads(self.to_document().model_dump_json())
        path.write_text(json.dumps(data, indent=2, sort_keys=True), encoding="utf-8")
        logger.debug("Persisted catalog to %s.", path)
