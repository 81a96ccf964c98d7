"""Permission models and the built-in permission set.

Permissions form an implication chain: holding ``ADMINISTER`` implies
``CREATE``, which implies both ``ITEM_CREATE`` and ``VIEW_CREATE``.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class Permission(BaseModel):
    """A named capability within a permission group."""

    model_config = ConfigDict(frozen=True)

    group: str
    name: str
    implied_by: Permission | None = None

    @property
    def permission_id(self) -> str:
        return f"{self.group}.{self.name}"

    def implication_chain(self) -> list[Permission]:
        """This permission followed by every permission that implies it."""
        chain: list[Permission] = []
        current: Permission | None = self
        while current is not None:
            chain.append(current)
            current = current.implied_by
        return chain


Permission.model_rebuild()


ADMINISTER = Permission(group="system", name="Administer")
READ = Permission(group="system", name="Read", implied_by=ADMINISTER)
CREATE = Permission(group="system", name="Create", implied_by=ADMINISTER)
DELETE = Permission(group="system", name="Delete", implied_by=ADMINISTER)
CONFIGURE = Permission(group="system", name="Configure", implied_by=ADMINISTER)

ITEM_CREATE = Permission(group="item", name="Create", implied_by=CREATE)

VIEW_CREATE = Permission(group="view", name="Create", implied_by=CREATE)
VIEW_DELETE = Permission(group="view", name="Delete", implied_by=DELETE)
VIEW_CONFIGURE = Permission(group="view", name="Configure", implied_by=CONFIGURE)

ALL_PERMISSIONS: dict[str, Permission] = {
    p.permission_id: p
    for p in (
        ADMINISTER,
        READ,
        CREATE,
        DELETE,
        CONFIGURE,
        ITEM_CREATE,
        VIEW_CREATE,
        VIEW_DELETE,
        VIEW_CONFIGURE,
    )
}


def permission_by_id(permission_id: str) -> Permission:
    """Look up a built-in permission, e.g. ``"item.Create"``.

    Raises ``KeyError`` for unknown ids.
    """
    try:
        return ALL_PERMISSIONS[permission_id]
    except KeyError:
        raise KeyError(
            f"Unknown permission '{permission_id}'. "
            f"Known: {sorted(ALL_PERMISSIONS)}"
        ) from None
