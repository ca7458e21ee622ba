"""Smoke tests for the CLI."""

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from insights.cli import app
from insights.content.models import Collection
from insights.content.store import ContentStore
from insights.homepage.schema import DEFAULT_TITLES


@pytest.fixture
def runner() -> CliRunner:
    """Create a CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch, tmp_path: Path):
    for key in (
        "INSIGHTS_STORE_DIR",
        "INSIGHTS_LOG_LEVEL",
        "INSIGHTS_PUBLIC_PAGE_SIZE",
        "INSIGHTS_ADMIN_PAGE_SIZE",
    ):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def store_dir(tmp_path: Path) -> Path:
    path = tmp_path / "content"
    path.mkdir()
    return path


def _invoke(runner: CliRunner, store_dir: Path, *args: str):
    return runner.invoke(app, ["--store", str(store_dir), *args])


def _seed_articles(store_dir: Path, count: int) -> ContentStore:
    store = ContentStore(store_dir)
    for n in range(1, count + 1):
        store.create(
            Collection.ARTICLES,
            {"slug": f"post-{n}", "title": f"Post {n}", "category": "Market"},
        )
    return store


class TestCLI:
    """Tests for the CLI entry point."""

    def test_main_help(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "homepage" in result.output
        assert "hero" in result.output

    def test_version(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert "insights" in result.output


class TestContentCommands:
    def test_create_and_show(self, runner: CliRunner, store_dir: Path) -> None:
        result = _invoke(
            runner, store_dir, "create", "articles",
            "-f", "slug=hello-world", "-f", "title=Hello World", "-f", "category=Guides",
        )
        assert result.exit_code == 0, result.output
        assert "#1" in result.output

        shown = _invoke(runner, store_dir, "show", "articles", "1")
        assert shown.exit_code == 0
        data = json.loads(shown.output)
        assert data["slug"] == "hello-world"
        assert data["category"] == "Guides"
        assert data["isHero"] is False

    def test_create_rejects_bad_slug(self, runner: CliRunner, store_dir: Path) -> None:
        result = _invoke(
            runner, store_dir, "create", "articles", "-f", "slug=Bad Slug", "-f", "title=T"
        )
        assert result.exit_code == 1
        assert "slug" in result.output

    def test_create_requires_title(self, runner: CliRunner, store_dir: Path) -> None:
        result = _invoke(runner, store_dir, "create", "reels", "-f", "slug=clip")
        assert result.exit_code == 1
        assert "title" in result.output

    def test_duplicate_slug(self, runner: CliRunner, store_dir: Path) -> None:
        _seed_articles(store_dir, 1)
        result = _invoke(
            runner, store_dir, "create", "articles", "-f", "slug=post-1", "-f", "title=Again"
        )
        assert result.exit_code == 1
        assert len(ContentStore(store_dir).list(Collection.ARTICLES)) == 1

    def test_update_keeps_other_fields(self, runner: CliRunner, store_dir: Path) -> None:
        _seed_articles(store_dir, 1)
        result = _invoke(runner, store_dir, "update", "articles", "1", "-f", "title=Renamed")
        assert result.exit_code == 0, result.output

        article = ContentStore(store_dir).get(Collection.ARTICLES, 1)
        assert article.title == "Renamed"
        assert article.slug == "post-1"
        assert article.category == "Market"

    def test_show_missing(self, runner: CliRunner, store_dir: Path) -> None:
        result = _invoke(runner, store_dir, "show", "articles", "99")
        assert result.exit_code == 1
        assert "Error" in result.output

    def test_delete(self, runner: CliRunner, store_dir: Path) -> None:
        _seed_articles(store_dir, 2)
        result = _invoke(runner, store_dir, "delete", "articles", "1")
        assert result.exit_code == 0
        assert [a.id for a in ContentStore(store_dir).list(Collection.ARTICLES)] == [2]

    def test_feature(self, runner: CliRunner, store_dir: Path) -> None:
        _seed_articles(store_dir, 1)
        result = _invoke(runner, store_dir, "feature", "1")
        assert result.exit_code == 0
        assert ContentStore(store_dir).get(Collection.ARTICLES, 1).featured is True

        _invoke(runner, store_dir, "feature", "1", "--off")
        assert ContentStore(store_dir).get(Collection.ARTICLES, 1).featured is False

    def test_list_paginates(self, runner: CliRunner, store_dir: Path) -> None:
        _seed_articles(store_dir, 23)
        result = _invoke(runner, store_dir, "list", "articles", "--page", "3")
        assert result.exit_code == 0, result.output
        assert "Showing 21-23 of 23" in result.output
        assert "Page 3/3" in result.output

    def test_list_page_clamped(self, runner: CliRunner, store_dir: Path) -> None:
        _seed_articles(store_dir, 5)
        result = _invoke(runner, store_dir, "list", "articles", "--page", "9")
        assert "Page 1/1" in result.output

    def test_list_empty_category(self, runner: CliRunner, store_dir: Path) -> None:
        _seed_articles(store_dir, 5)
        result = _invoke(runner, store_dir, "list", "articles", "--category", "Guides")
        assert result.exit_code == 0
        assert "Showing 0-0 of 0" in result.output
        assert "Page 1/1" in result.output


class TestHeroCommands:
    def test_set_and_show(self, runner: CliRunner, store_dir: Path) -> None:
        _seed_articles(store_dir, 3)
        assert _invoke(runner, store_dir, "hero", "set", "articles", "2").exit_code == 0
        assert _invoke(runner, store_dir, "hero", "set", "articles", "3").exit_code == 0

        shown = _invoke(runner, store_dir, "hero", "show", "articles")
        assert json.loads(shown.output)["id"] == 3
        store = ContentStore(store_dir)
        assert [a.id for a in store.list(Collection.ARTICLES) if a.is_hero] == [3]

    def test_show_without_hero(self, runner: CliRunner, store_dir: Path) -> None:
        result = _invoke(runner, store_dir, "hero", "show", "home-tours")
        assert result.exit_code == 0
        assert "no hero" in result.output

    def test_reels_have_no_hero(self, runner: CliRunner, store_dir: Path) -> None:
        ContentStore(store_dir).create(Collection.REELS, {"slug": "clip", "title": "Clip"})
        result = _invoke(runner, store_dir, "hero", "set", "reels", "1")
        assert result.exit_code == 1

    def test_set_missing(self, runner: CliRunner, store_dir: Path) -> None:
        result = _invoke(runner, store_dir, "hero", "set", "articles", "5")
        assert result.exit_code == 1

    def test_clear(self, runner: CliRunner, store_dir: Path) -> None:
        _seed_articles(store_dir, 1)
        _invoke(runner, store_dir, "hero", "set", "articles", "1")
        assert _invoke(runner, store_dir, "hero", "clear", "articles").exit_code == 0
        assert ContentStore(store_dir).get(Collection.ARTICLES, 1).is_hero is False

    def test_check_clean(self, runner: CliRunner, store_dir: Path) -> None:
        _seed_articles(store_dir, 2)
        _invoke(runner, store_dir, "hero", "set", "articles", "1")
        assert _invoke(runner, store_dir, "hero", "check").exit_code == 0


class TestHomepageCommands:
    def test_show_defaults(self, runner: CliRunner, store_dir: Path) -> None:
        result = _invoke(runner, store_dir, "homepage", "show")
        assert result.exit_code == 0
        document = json.loads(result.output)
        assert document["sections"]["hero"] is True
        assert len(document["nuggets"]) == 6

    def test_hide_section(self, runner: CliRunner, store_dir: Path) -> None:
        result = _invoke(runner, store_dir, "homepage", "section", "hero", "--off")
        assert result.exit_code == 0
        assert ContentStore(store_dir).read_config()["sections"]["hero"] is False

    def test_unknown_section(self, runner: CliRunner, store_dir: Path) -> None:
        result = _invoke(runner, store_dir, "homepage", "section", "sidebar", "--off")
        assert result.exit_code == 1

    def test_limit_clamped(self, runner: CliRunner, store_dir: Path) -> None:
        result = _invoke(runner, store_dir, "homepage", "limit", "reels", "80")
        assert result.exit_code == 0
        assert ContentStore(store_dir).read_config()["limits"]["reels"] == 50

    def test_title_and_reset(self, runner: CliRunner, store_dir: Path) -> None:
        _invoke(runner, store_dir, "homepage", "title", "latestPosts", "Fresh")
        assert ContentStore(store_dir).read_config()["titles"]["latestPosts"] == "Fresh"

        assert _invoke(runner, store_dir, "homepage", "reset").exit_code == 0
        titles = ContentStore(store_dir).read_config()["titles"]
        assert titles["latestPosts"] == DEFAULT_TITLES["latestPosts"]

    def test_podcast(self, runner: CliRunner, store_dir: Path) -> None:
        result = _invoke(runner, store_dir, "homepage", "podcast", "-f", "title=Ep 12")
        assert result.exit_code == 0, result.output
        assert json.loads(result.output)["title"] == "Ep 12"
        assert ContentStore(store_dir).read_config()["podcast"]["title"] == "Ep 12"


class TestStripCommands:
    def test_add(self, runner: CliRunner, store_dir: Path) -> None:
        result = _invoke(
            runner, store_dir, "homepage", "strip", "add", "nuggets",
            "-f", "title=New clip", "-f", "slug=new-clip",
        )
        assert result.exit_code == 0, result.output
        assert "Added nuggets card" in result.output

        nuggets = ContentStore(store_dir).read_config()["nuggets"]
        assert len(nuggets) == 7
        assert nuggets[-1]["title"] == "New clip"

    def test_remove(self, runner: CliRunner, store_dir: Path) -> None:
        result = _invoke(runner, store_dir, "homepage", "strip", "remove", "nuggets", "1")
        assert result.exit_code == 0, result.output
        nuggets = ContentStore(store_dir).read_config()["nuggets"]
        assert [n["id"] for n in nuggets] == ["2", "3", "4", "5", "6"]

    def test_move(self, runner: CliRunner, store_dir: Path) -> None:
        result = _invoke(
            runner, store_dir, "homepage", "strip", "move", "methodology", "1", "down"
        )
        assert result.exit_code == 0, result.output
        methodology = ContentStore(store_dir).read_config()["methodology"]
        assert [m["id"] for m in methodology] == ["2", "1", "3"]

    def test_update_keeps_id(self, runner: CliRunner, store_dir: Path) -> None:
        result = _invoke(
            runner, store_dir, "homepage", "strip", "update", "methodology", "2",
            "-f", "title=Renamed", "-f", "id=zzz",
        )
        assert result.exit_code == 0, result.output
        card = ContentStore(store_dir).read_config()["methodology"][1]
        assert card["title"] == "Renamed"
        assert card["id"] == "2"

    def test_unknown_strip(self, runner: CliRunner, store_dir: Path) -> None:
        result = _invoke(
            runner, store_dir, "homepage", "strip", "add", "webinars", "-f", "title=x"
        )
        assert result.exit_code == 1
        assert "Error" in result.output

    def test_position_out_of_range(self, runner: CliRunner, store_dir: Path) -> None:
        result = _invoke(runner, store_dir, "homepage", "strip", "remove", "nuggets", "40")
        assert result.exit_code == 1


class TestSectionCommands:
    def test_add_section_to_empty_article(self, runner: CliRunner, store_dir: Path) -> None:
        _seed_articles(store_dir, 1)
        result = _invoke(runner, store_dir, "sections", "add", "1", "--heading", "Intro")
        assert result.exit_code == 0, result.output

        sections = ContentStore(store_dir).get(Collection.ARTICLES, 1).sections
        assert len(sections) == 1
        assert sections[0].heading == "Intro"
        assert sections[0].paragraphs == [""]

    def test_paragraphs(self, runner: CliRunner, store_dir: Path) -> None:
        _seed_articles(store_dir, 1)
        _invoke(runner, store_dir, "sections", "add", "1")
        _invoke(runner, store_dir, "sections", "add-paragraph", "1", "1", "Second")

        sections = ContentStore(store_dir).get(Collection.ARTICLES, 1).sections
        assert sections[0].paragraphs == ["", "Second"]

        assert _invoke(runner, store_dir, "sections", "remove-paragraph", "1", "1", "1").exit_code == 0
        result = _invoke(runner, store_dir, "sections", "remove-paragraph", "1", "1", "1")
        assert result.exit_code == 1
        assert ContentStore(store_dir).get(Collection.ARTICLES, 1).sections[0].paragraphs == [
            "Second"
        ]

    def test_move(self, runner: CliRunner, store_dir: Path) -> None:
        _seed_articles(store_dir, 1)
        _invoke(runner, store_dir, "sections", "add", "1", "--heading", "A")
        _invoke(runner, store_dir, "sections", "add", "1", "--heading", "B")

        assert _invoke(runner, store_dir, "sections", "move", "1", "2", "up").exit_code == 0
        headings = [s.heading for s in ContentStore(store_dir).get(Collection.ARTICLES, 1).sections]
        assert headings == ["B", "A"]


class TestSettingsCommands:
    def test_set_and_show(self, runner: CliRunner, store_dir: Path) -> None:
        assert _invoke(runner, store_dir, "settings", "set", "siteTitle", "Mine").exit_code == 0
        result = _invoke(runner, store_dir, "settings", "show")
        assert json.loads(result.output)["siteTitle"] == "Mine"

    def test_unknown_setting(self, runner: CliRunner, store_dir: Path) -> None:
        result = _invoke(runner, store_dir, "settings", "set", "bogus", "x")
        assert result.exit_code == 1
