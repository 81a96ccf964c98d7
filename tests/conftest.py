"""Shared test fixtures for jobview."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timedelta, timezone

import pytest

from jobview.core.acl import MatrixACL
from jobview.core.store import ItemStore
from jobview.core.view import AllView, ListView
from jobview.models.hierarchy import Build, BuildResult, ChangeEntry, User
from jobview.timespan import datetime_to_epoch_ms

# All test timestamps are offsets (in seconds) from this instant.
EPOCH = datetime(2026, 1, 1, tzinfo=timezone.utc)
EPOCH_MS = datetime_to_epoch_ms(EPOCH)


def at(seconds: int) -> datetime:
    return EPOCH + timedelta(seconds=seconds)


def ms(seconds: int) -> int:
    return EPOCH_MS + seconds * 1000


@pytest.fixture
def alice() -> User:
    return User(user_id="alice", full_name="Alice Liddell")


@pytest.fixture
def bob() -> User:
    return User(user_id="bob", full_name="Bob Builder")


@pytest.fixture
def make_build() -> Callable[..., Build]:
    """Factory fixture: a build at ``EPOCH + t`` seconds with the given authors.

    ``None`` in *authors* produces an unattributed change entry.
    """

    def _factory(
        number: int,
        t: int,
        *authors: User | None,
        result: BuildResult = BuildResult.SUCCESS,
    ) -> Build:
        return Build(
            number=number,
            timestamp=at(t),
            result=result,
            change_set=tuple(
                ChangeEntry(author=a, message=f"change {i}")
                for i, a in enumerate(authors)
            ),
        )

    return _factory


@pytest.fixture
def store() -> ItemStore:
    """Provide an empty in-memory item store."""
    return ItemStore()


@pytest.fixture
def root_view(store: ItemStore) -> AllView:
    return AllView(store)


@pytest.fixture
def team_view(store: ItemStore) -> ListView:
    return ListView(store, "team")


@pytest.fixture
def secured_acl() -> MatrixACL:
    """alice may create items; everyone may read."""
    return MatrixACL({"alice": ["item.Create"], "anonymous": ["system.Read"]})


@pytest.fixture
def clock() -> Callable[[int], datetime]:
    """``clock(t)`` is the instant ``EPOCH + t`` seconds."""
    return at
