"""Unit tests for the CLI — command registration and behavior via CliRunner."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from jobview.cli.app import app
from jobview.core.catalog import Catalog

runner = CliRunner()


@pytest.fixture
def catalog_file(tmp_path: Path) -> Path:
    path = tmp_path / "catalog.json"
    path.write_text(
        json.dumps(
            {
                "secured": True,
                "grants": {"alice": ["item.Create"], "anonymous": ["system.Read"]},
                "items": [
                    {
                        "kind": "freestyle",
                        "name": "api",
                        "builds": [
                            {
                                "number": 2,
                                "timestamp": "2026-01-02T00:00:00Z",
                                "result": "failure",
                                "change_set": [{"author": {"user_id": "bob"}}],
                            },
                            {
                                "number": 1,
                                "timestamp": "2026-01-01T00:00:00Z",
                                "change_set": [{"author": {"user_id": "alice"}}],
                            },
                        ],
                    },
                    {"kind": "external", "name": "cron"},
                ],
                "views": [{"name": "team", "job_names": ["api"]}],
            }
        ),
        encoding="utf-8",
    )
    return path


class TestCliApp:
    def test_help_lists_commands(self):
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        for name in ("views", "items", "people", "feed", "search", "create-item"):
            assert name in result.output


class TestReadCommands:
    def test_views(self, catalog_file):
        result = runner.invoke(app, ["views", "--catalog", str(catalog_file)])
        assert result.exit_code == 0
        assert "team" in result.output
        assert "view/team/" in result.output

    def test_items(self, catalog_file):
        result = runner.invoke(app, ["items", "all", "--catalog", str(catalog_file)])
        assert result.exit_code == 0
        assert "api" in result.output
        assert "cron" in result.output

    def test_people(self, catalog_file):
        result = runner.invoke(app, ["people", "team", "--catalog", str(catalog_file)])
        assert result.exit_code == 0
        assert "alice" in result.output
        assert "bob" in result.output

    def test_failed_feed(self, catalog_file):
        result = runner.invoke(app, ["feed", "team", "--failed", "--catalog", str(catalog_file)])
        assert result.exit_code == 0
        assert "team failed builds" in result.output
        assert "api #2" in result.output

    def test_search(self, catalog_file):
        result = runner.invoke(app, ["search", "all", "cr", "--catalog", str(catalog_file)])
        assert result.exit_code == 0
        assert "cron" in result.output

    def test_unknown_view(self, catalog_file):
        result = runner.invoke(app, ["people", "ghost", "--catalog", str(catalog_file)])
        assert result.exit_code == 1
        assert "View not found" in result.output

    def test_broken_catalog(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("[]", encoding="utf-8")
        result = runner.invoke(app, ["views", "--catalog", str(path)])
        assert result.exit_code == 1

    @pytest.mark.parametrize(
        "data",
        [
            {"items": [{"kind": "freestyle", "name": "a"}, {"kind": "freestyle", "name": "a"}]},
            {"secured": True, "grants": {"a": ["bogus.Perm"]}},
            {"views": [{"name": "team", "include_regex": "("}]},
        ],
        ids=["duplicate-item", "unknown-grant", "bad-regex"],
    )
    def test_inconsistent_catalog(self, tmp_path, data):
        path = tmp_path / "catalog.json"
        path.write_text(json.dumps(data), encoding="utf-8")
        result = runner.invoke(app, ["views", "--catalog", str(path)])
        assert result.exit_code == 1
        assert isinstance(result.exception, SystemExit)
        assert "Invalid catalog" in result.output

    def test_search_with_markup_characters(self, catalog_file):
        result = runner.invoke(app, ["search", "all", "[/x]", "--catalog", str(catalog_file)])
        assert result.exit_code == 0, result.output
        assert "Nothing matches '[/x]'" in result.output

    def test_unknown_view_with_markup_characters(self, catalog_file):
        result = runner.invoke(app, ["items", "[bold]", "--catalog", str(catalog_file)])
        assert result.exit_code == 1
        assert "View not found: [bold]" in result.output

    def test_description_is_printed_verbatim(self, tmp_path):
        path = tmp_path / "catalog.json"
        path.write_text(
            json.dumps({"views": [{"name": "team", "description": "see [/docs]"}]}),
            encoding="utf-8",
        )
        result = runner.invoke(app, ["items", "team", "--catalog", str(path)])
        assert result.exit_code == 0, result.output
        assert "see [/docs]" in result.output


class TestCreateItemCommand:
    def test_denied(self, catalog_file):
        result = runner.invoke(
            app, ["create-item", "team", "web", "--as", "mallory", "--catalog", str(catalog_file)]
        )
        assert result.exit_code == 1
        assert "Access denied" in result.output
        assert Catalog.load(catalog_file).store.get("web") is None

    def test_invalid_name(self, catalog_file):
        result = runner.invoke(
            app, ["create-item", "team", "a/b", "--as", "alice", "--catalog", str(catalog_file)]
        )
        assert result.exit_code == 1
        assert "Invalid request" in result.output

    def test_created_and_persisted(self, catalog_file):
        result = runner.invoke(
            app,
            ["create-item", "team", "web", "--as", "alice", "--catalog", str(catalog_file)],
        )
        assert result.exit_code == 0, result.output
        assert "Created" in result.output

        catalog = Catalog.load(catalog_file)
        assert catalog.store.get("web") is not None
        assert "web" in catalog.get_view("team").job_names
