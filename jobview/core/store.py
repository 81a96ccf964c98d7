"""In-memory item store — the record store that views read from.

Items are frozen models.  Recording a build replaces the stored item with
an updated copy, so a tuple returned by ``all()`` is a stable snapshot that
later writes cannot disturb.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from jobview.models.hierarchy import Build
from jobview.models.items import (
    AnyItem,
    ExternalJob,
    FreestyleProject,
    MultiConfigProject,
)

logger = logging.getLogger(__name__)


class ItemStore:
    """Name-keyed registry of top-level items.

    Examples
    --------
    >>> store = ItemStore()
    >>> store.add(FreestyleProject(name="core"))
    >>> store.get("core").name
    'core'
    >>> store.get("missing") is None
    True
    """

    def __init__(self, items: Iterable[AnyItem] = ()) -> None:
        self._items: dict[str, AnyItem] = {}
        for item in items:
            self.add(item)

    def add(self, item: AnyItem) -> None:
        """Register a new item.

        Raises
        ------
        ValueError
            If an item with the same name already exists.
        """
        if item.name in self._items:
            raise ValueError(f"An item named '{item.name}' already exists.")
        self._items[item.name] = item
        logger.debug("Stored item %s (%s)", item.name, item.kind)

    def get(self, name: str) -> AnyItem | None:
        return self._items.get(name)

    def all(self) -> tuple[AnyItem, ...]:
        """Snapshot of every stored item, ordered by name."""
        return tuple(self._items[name] for name in sorted(self._items))

    def __contains__(self, name: object) -> bool:
        return name in self._items

    def __len__(self) -> int:
        return len(self._items)

    def record_build(self, job_path: str, build: Build) -> None:
        """Prepend *build* to the history of the job at *job_path*.

        *job_path* is an item name, or ``"<item>/<configuration>"`` for a
        matrix configuration of a ``MultiConfigProject``.

        Raises
        ------
        KeyError
            If no such job exists.
        TypeError
            If the job records no build history.
        """
        item_name, _, config_name = job_path.partition("/")
        item = self._items.get(item_name)
        if item is None:
            raise KeyError(f"No item named '{item_name}'.")
        if isinstance(item, ExternalJob):
            raise TypeError(f"'{item_name}' does not record builds.")

        if not config_name:
            self._items[item_name] = item.model_copy(
                update={"builds": (build, *item.builds)}
            )
            return

        if not isinstance(item, MultiConfigProject):
            raise KeyError(f"'{item_name}' has no configurations.")
        config = item.get_configuration(config_name)
        if config is None:
            raise KeyError(f"No configuration '{config_name}' in '{item_name}'.")
        updated = config.model_copy(update={"builds": (build, *config.builds)})
        self._items[item_name] = item.model_copy(
            update={
                "configurations": tuple(
                    updated if c.name == config_name else c
                    for c in item.configurations
                )
            }
        )


def blank_copy(source: AnyItem, new_name: str) -> AnyItem:
    """Clone an item's configuration under a new name, without its history."""
    if isinstance(source, ExternalJob):
        return source.model_copy(update={"name": new_name})
    if isinstance(source, MultiConfigProject):
        return source.model_copy(
            update={
                "name": new_name,
                "builds": (),
                "configurations": tuple(
                    c.model_copy(update={"parent_name": new_name, "builds": ()})
                    for c in source.configurations
                ),
            }
        )
    if isinstance(source, FreestyleProject):
        return source.model_copy(update={"name": new_name, "builds": ()})
    raise TypeError(f"Cannot copy item of type {type(source).__name__}")
