import json
import logging

import pytest
from typer.testing import CliRunner

from blogweave.cli.app import app

runner = CliRunner()


def _write_site(site_dir, feed_type="all"):
    (site_dir / ".blogweave.toml").write_text(
        f"""
[site]
title = "Acme"

[blog]
posts_per_page = 1

[blog.feed_options]
type = "{feed_type}"
""",
        encoding="utf-8",
    )
    blog = site_dir / "blog"
    blog.mkdir()
    (blog / "2024-01-01-first.md").write_text("---\ntitle: First\ntags: [News]\n---\nHello\n", encoding="utf-8")
    (blog / "2024-01-02-second.md").write_text("---\ntitle: Second\n---\nWorld\n", encoding="utf-8")


def test_build_command(tmp_path):
    _write_site(tmp_path)

    result = runner.invoke(app, ["build", str(tmp_path)])

    assert result.exit_code == 0, result.output
    assert (tmp_path / "build" / "blog" / "rss.xml").exists()
    assert (tmp_path / "build" / "blog" / "atom.xml").exists()

    routes = json.loads((tmp_path / ".blogweave" / "blog" / "routes.json").read_text())
    paths = [route["path"] for route in routes]
    assert "/blog" in paths
    assert "/blog/page/2" in paths
    assert "/blog/tags" in paths
    assert "/blog/tags/news" in paths


def test_build_with_no_posts(tmp_path):
    result = runner.invoke(app, ["build", str(tmp_path)])

    assert result.exit_code == 0, result.output
    assert "Nothing to do" in result.output
    assert not (tmp_path / ".blogweave").exists()
    assert not (tmp_path / "build").exists()


def test_invalid_feed_type_exits_with_error(tmp_path):
    _write_site(tmp_path, feed_type="jsonfeed")

    result = runner.invoke(app, ["build", str(tmp_path)])

    assert result.exit_code == 1
    assert "jsonfeed" in result.output


def test_head_tags_command(tmp_path):
    _write_site(tmp_path, feed_type="rss")

    result = runner.invoke(app, ["head-tags", str(tmp_path)])

    assert result.exit_code == 0, result.output
    assert result.output.strip() == (
        '<link rel="alternate" type="application/rss+xml" href="/blog/rss.xml" title="Acme Blog RSS Feed">'
    )


def test_watch_paths_command(tmp_path):
    result = runner.invoke(app, ["watch-paths", str(tmp_path)])

    assert result.exit_code == 0, result.output
    lines = result.output.strip().splitlines()
    assert lines == [f"{tmp_path.resolve()}/blog/*.md", f"{tmp_path.resolve()}/blog/*.mdx"]


@pytest.fixture
def root_logger():
    root = logging.getLogger()
    level = root.level
    yield root
    root.setLevel(level)


def test_log_level_from_environment(tmp_path, root_logger):
    result = runner.invoke(app, ["watch-paths", str(tmp_path)], env={"BLOGWEAVE_LOG_LEVEL": "DEBUG"})

    assert result.exit_code == 0, result.output
    assert root_logger.level == logging.DEBUG


def test_log_level_option_overrides_environment(tmp_path, root_logger):
    result = runner.invoke(
        app, ["--log-level", "WARNING", "watch-paths", str(tmp_path)], env={"BLOGWEAVE_LOG_LEVEL": "DEBUG"}
    )

    assert result.exit_code == 0, result.output
    assert root_logger.level == logging.WARNING


def test_log_level_defaults_to_info(tmp_path, root_logger, monkeypatch):
    monkeypatch.delenv("BLOGWEAVE_LOG_LEVEL", raising=False)

    result = runner.invoke(app, ["watch-paths", str(tmp_path)])

    assert result.exit_code == 0, result.output
    assert root_logger.level == logging.INFO
