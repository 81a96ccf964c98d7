"""Tests for the contributor activity index ("People").

Verifies that:
1. One record per user, carrying the newest timestamp and its job.
2. Records are sorted newest first.
3. Jobs without build history and unattributed entries are skipped.
4. ``has_people`` agrees with the full index.
"""

from __future__ import annotations

from collections import Counter

import pytest
from pydantic import ValidationError

from jobview.core.activity import build_activity_index, has_people, iter_observations
from jobview.core.store import ItemStore
from jobview.core.view import AllView, ListView
from jobview.models.hierarchy import User
from jobview.models.items import (
    ExternalJob,
    FreestyleProject,
    MatrixConfiguration,
    MultiConfigProject,
)

# ---------------------------------------------------------------------------
# Test: spec scenarios
# ---------------------------------------------------------------------------


class TestActivityScenarios:
    def test_newer_build_overwrites_project(self, store, root_view, make_build, alice, bob):
        """Alice's record moves from J1@100 to J2@200; Bob stays on J2@50."""
        b1 = make_build(1, 100, alice)
        b2 = make_build(1, 50, bob)
        b3 = make_build(2, 200, alice)
        store.add(FreestyleProject(name="J1", builds=(b1,)))
        store.add(FreestyleProject(name="J2", builds=(b3, b2)))

        people = root_view.get_people()

        assert [(u.user.user_id, u.project, u.last_change_ms) for u in people.users] == [
            ("alice", "J2", b3.timestamp_ms),
            ("bob", "J2", b2.timestamp_ms),
        ]

    def test_unattributed_entries_only(self, store, root_view, make_build):
        """A change with no author is ignored; nothing else means no people."""
        store.add(FreestyleProject(name="J1", builds=(make_build(1, 10, None),)))

        assert root_view.has_people() is False
        people = root_view.get_people()
        assert people.users == ()
        assert people.is_empty

    def test_empty_view_yields_empty_index(self, root_view):
        people = root_view.get_people()
        assert people is not None
        assert people.view_name == "all"
        assert people.users == ()
        assert root_view.has_people() is False


# ---------------------------------------------------------------------------
# Test: traversal
# ---------------------------------------------------------------------------


class TestActivityTraversal:
    def test_external_jobs_are_skipped(self, store, root_view, make_build, alice):
        store.add(ExternalJob(name="cron"))
        store.add(FreestyleProject(name="core", builds=(make_build(1, 5, alice),)))

        people = root_view.get_people()
        assert [u.project for u in people.users] == ["core"]

    def test_only_external_jobs_means_no_people(self, store, root_view):
        store.add(ExternalJob(name="cron"))
        assert root_view.has_people() is False
        assert root_view.get_people().is_empty

    def test_matrix_configurations_are_traversed(self, store, root_view, make_build, alice, bob):
        """Configurations are jobs of the item and contribute their own builds."""
        config = MatrixConfiguration(
            name="jdk=17", parent_name="matrix", builds=(make_build(1, 300, bob),)
        )
        store.add(
            MultiConfigProject(
                name="matrix",
                builds=(make_build(1, 100, alice),),
                configurations=(config,),
            )
        )

        people = root_view.get_people()
        bob_info = people.get("bob")
        assert bob_info is not None
        assert bob_info.project == "jdk=17"
        assert bob_info.project_url == "job/matrix/jdk=17/"
        assert people.get("alice").project == "matrix"

    def test_only_view_members_are_scanned(self, store, make_build, alice, bob):
        store.add(FreestyleProject(name="in", builds=(make_build(1, 1, alice),)))
        store.add(FreestyleProject(name="out", builds=(make_build(1, 2, bob),)))
        view = ListView(store, "team", job_names=["in"])

        assert [u.user.user_id for u in view.get_people().users] == ["alice"]

    def test_multiple_entries_in_one_build(self, store, root_view, make_build, alice, bob):
        store.add(
            FreestyleProject(name="core", builds=(make_build(1, 7, alice, None, bob, alice),))
        )
        people = root_view.get_people()
        assert {u.user.user_id for u in people.users} == {"alice", "bob"}
        assert len(list(iter_observations(root_view.get_items()))) == 3

    def test_index_is_recomputed_per_access(self, store, root_view, make_build, alice):
        """No caching: a build recorded after the first scan shows up in the next."""
        store.add(FreestyleProject(name="core"))
        assert root_view.get_people().is_empty

        store.record_build("core", make_build(1, 42, alice))
        assert root_view.get_people().get("alice") is not None


# ---------------------------------------------------------------------------
# Test: properties
# ---------------------------------------------------------------------------


@pytest.fixture
def busy_store(make_build, alice, bob) -> ItemStore:
    """Several jobs with overlapping authors and out-of-order histories."""
    carol = User(user_id="carol")
    return ItemStore(
        [
            FreestyleProject(
                name="api",
                builds=(
                    make_build(3, 900, alice, carol),
                    make_build(2, 400, bob),
                    make_build(1, 100, alice, None),
                ),
            ),
            FreestyleProject(
                name="web",
                builds=(make_build(2, 950, bob), make_build(1, 20, carol)),
            ),
            ExternalJob(name="nightly"),
            FreestyleProject(name="docs", builds=(make_build(1, 500, None),)),
        ]
    )


class TestActivityProperties:
    def test_one_record_per_user(self, busy_store):
        people = AllView(busy_store).get_people()
        counts = Counter(u.user.user_id for u in people.users)
        assert all(n == 1 for n in counts.values())

    def test_last_change_is_max_over_reachable_entries(self, busy_store):
        view = AllView(busy_store)
        expected: dict[str, int] = {}
        for obs in iter_observations(view.get_items()):
            uid = obs.user.user_id
            expected[uid] = max(expected.get(uid, obs.timestamp_ms), obs.timestamp_ms)

        people = view.get_people()
        assert {u.user.user_id: u.last_change_ms for u in people.users} == expected

    def test_project_owns_the_maximal_build(self, busy_store):
        people = AllView(busy_store).get_people()
        assert people.get("alice").project == "api"
        assert people.get("bob").project == "web"
        assert people.get("carol").project == "api"

    def test_sorted_non_increasing(self, busy_store):
        users = AllView(busy_store).get_people().users
        stamps = [u.last_change_ms for u in users]
        assert stamps == sorted(stamps, reverse=True)

    def test_has_people_matches_index(self, busy_store, store):
        for view in (AllView(busy_store), AllView(store)):
            assert view.has_people() == (not view.get_people().is_empty)

    def test_module_functions_match_view_methods(self, busy_store):
        view = AllView(busy_store)
        items = view.get_items()
        assert build_activity_index(view.view_name, items) == view.get_people()
        assert has_people(items) is view.has_people()

    def test_index_is_immutable(self, busy_store):
        people = AllView(busy_store).get_people()
        with pytest.raises(ValidationError):
            people.users = ()  # type: ignore[misc]
