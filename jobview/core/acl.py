"""Access control — a single permission check per (principal, permission, scope).

An ``ACL`` is any object with a ``has_permission(principal, permission)``
method.  ``check_permission`` is the gate every mutating operation calls
before it touches state.

Two backends are shipped:

* ``UnsecuredACL`` — everything is permitted (development default).
* ``MatrixACL`` — explicit grants per principal, with the pseudo-principals
  ``anonymous`` (applies to everyone) and ``authenticated`` (applies to
  everyone who is not ``anonymous``).
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Protocol, runtime_checkable

from jobview.models.security import Permission, permission_by_id

logger = logging.getLogger(__name__)

ANONYMOUS = "anonymous"
AUTHENTICATED = "authenticated"


class AuthorizationError(RuntimeError):
    """Raised when the acting principal lacks a required permission."""

    def __init__(self, principal: str, permission: Permission) -> None:
        self.principal = principal
        self.permission = permission
        super().__init__(
            f"{principal} is missing the {permission.permission_id} permission"
        )


@runtime_checkable
class ACL(Protocol):
    """Protocol for authorization backends."""

    def has_permission(self, principal: str, permission: Permission) -> bool:
        """Return ``True`` if *principal* holds *permission*."""
        ...


def check_permission(acl: ACL, principal: str, permission: Permission) -> None:
    """Raise ``AuthorizationError`` unless *principal* holds *permission*.

    No observable effect on success.
    """
    if not acl.has_permission(principal, permission):
        logger.warning(
            "Permission denied: %s lacks %s", principal, permission.permission_id
        )
        raise AuthorizationError(principal, permission)


class UnsecuredACL:
    """Permissive ACL that grants every permission to every principal."""

    def has_permission(self, principal: str, permission: Permission) -> bool:
        return True


class MatrixACL:
    """Grant table keyed by principal.

    Parameters
    ----------
    grants:
        Mapping of principal -> permissions (``Permission`` objects or
        permission ids such as ``"item.Create"``).
    """

    def __init__(
        self, grants: Mapping[str, Iterable[Permission | str]] | None = None
    ) -> None:
        self._grants: dict[str, set[Permission]] = {}
        for principal, perms in (grants or {}).items():
            for perm in perms:
                self.grant(principal, perm)

    def grant(self, principal: str, permission: Permission | str) -> None:
        if isinstance(permission, str):
            permission = permission_by_id(permission)
        self._grants.setdefault(principal, set()).add(permission)

    def _effective_principals(self, principal: str) -> list[str]:
        principals = [principal, ANONYMOUS]
        if principal != ANONYMOUS:
            principals.append(AUTHENTICATED)
        return principals

    def has_permission(self, principal: str, permission: Permission) -> bool:
        held: set[Permission] = set()
        for p in self._effective_principals(principal):
            held |= self._grants.get(p, set())
        return any(p in held for p in permission.implication_chain())

    def to_grants(self) -> dict[str, list[str]]:
        """Serializable form, the inverse of the constructor."""
        return {
            principal: sorted(p.permission_id for p in perms)
            for principal, perms in sorted(self._grants.items())
        }
