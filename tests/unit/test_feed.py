"""Tests for RunList ordering/filtering and the FeedExporter."""

from __future__ import annotations

import pytest

from jobview.core.feed import FeedExporter, FeedRenderer, to_feed_entry
from jobview.core.run_list import RunList
from jobview.core.view import AllView, ListView
from jobview.models.feeds import FeedFilter
from jobview.models.hierarchy import BuildResult
from jobview.models.items import ExternalJob, FreestyleProject, MatrixConfiguration, MultiConfigProject

S = BuildResult.SUCCESS
F = BuildResult.FAILURE
U = BuildResult.UNSTABLE


@pytest.fixture
def mixed_store(store, make_build):
    store.add(
        FreestyleProject(
            name="api",
            builds=(make_build(3, 300, result=F), make_build(2, 200), make_build(1, 100)),
        )
    )
    store.add(FreestyleProject(name="web", builds=(make_build(1, 250, result=U),)))
    store.add(ExternalJob(name="nightly"))
    return store


class TestRunList:
    def test_newest_first_across_jobs(self, mixed_store):
        runs = RunList.from_items(mixed_store.all())
        assert [(r.job_name, r.build.number) for r in runs] == [
            ("api", 3),
            ("web", 1),
            ("api", 2),
            ("api", 1),
        ]

    def test_ties_break_by_job_then_number(self, store, make_build):
        store.add(FreestyleProject(name="b", builds=(make_build(1, 10),)))
        store.add(FreestyleProject(name="a", builds=(make_build(2, 10), make_build(1, 10))))
        runs = RunList.from_items(store.all())
        assert [(r.job_name, r.build.number) for r in runs] == [("a", 2), ("a", 1), ("b", 1)]

    def test_failure_only_keeps_unstable(self, mixed_store):
        runs = RunList.from_items(mixed_store.all()).failure_only()
        assert [r.build.result for r in runs] == [F, U]

    def test_new_builds_keeps_minimum(self, store, make_build, clock):
        store.add(
            FreestyleProject(
                name="old", builds=tuple(make_build(n, n) for n in range(15, 0, -1))
            )
        )
        runs = RunList.from_items(store.all())
        far_future = clock(365 * 24 * 3600)
        assert len(runs.new_builds(far_future)) == 10
        assert len(runs.new_builds(far_future, min_builds=3)) == 3

    def test_new_builds_keeps_recent(self, store, make_build, clock):
        store.add(
            FreestyleProject(
                name="busy", builds=tuple(make_build(n, n) for n in range(15, 0, -1))
            )
        )
        runs = RunList.from_items(store.all())
        assert len(runs.new_builds(clock(60))) == 15

    def test_matrix_configuration_builds_included(self, store, make_build):
        config = MatrixConfiguration(name="jdk=21", parent_name="m", builds=(make_build(1, 5),))
        store.add(MultiConfigProject(name="m", configurations=(config,)))
        runs = list(RunList.from_items(store.all()))
        assert runs[0].url == "job/m/jdk=21/1/"


class TestFeedExporter:
    def test_all_builds_title_and_link(self, mixed_store, clock):
        view = ListView(mixed_store, "team", include_regex=".*")
        feed = FeedExporter(view).all_builds(clock(400))
        assert feed.title == "team all builds"
        assert feed.link == "view/team/"
        assert feed.filter == FeedFilter.ALL
        assert [e.guid for e in feed.entries] == ["api#3", "web#1", "api#2", "api#1"]

    def test_failed_builds(self, mixed_store, clock):
        feed = AllView(mixed_store).rss_failed(clock(400))
        assert feed.title == "all failed builds"
        assert feed.link == ""
        assert [e.title for e in feed.entries] == ["api #3 (failure)", "web #1 (unstable)"]

    def test_failed_feed_of_only_successes_is_empty(self, store, make_build, clock):
        """Correct title/link even when nothing passes the filter."""
        store.add(FreestyleProject(name="green", builds=(make_build(1, 1),)))
        view = ListView(store, "team", job_names=["green"])

        feed = view.rss_failed(clock(10))

        assert feed.entries == ()
        assert feed.title == "team failed builds"
        assert feed.link == "view/team/"

    def test_all_builds_via_view(self, mixed_store, clock):
        assert AllView(mixed_store).rss_all(clock(400)).title == "all all builds"

    def test_custom_run_list_factory(self, mixed_store, clock):
        view = AllView(mixed_store)
        exporter = FeedExporter(view, run_list_factory=lambda v: RunList([]))
        assert exporter.export(FeedFilter.ALL, clock(0)).entries == ()

    def test_entry_fields(self, store, make_build):
        store.add(FreestyleProject(name="api", builds=(make_build(7, 70, result=F),)))
        entry = to_feed_entry(next(iter(RunList.from_items(store.all()))))
        assert entry.link == "job/api/7/"
        assert entry.job_name == "api"
        assert entry.build_number == 7
        assert entry.result == F

    def test_console_renderer_is_a_feed_renderer(self):
        from jobview.display.renderer import ConsoleRenderer

        assert isinstance(ConsoleRenderer(), FeedRenderer)
