"""Shared fixtures for Blogweave tests."""

from datetime import UTC, datetime, timedelta
from pathlib import Path

import pytest

from blogweave.core.config import BlogOptions, BlogweaveConfig, FeedOptions, SiteSettings
from blogweave.core.types import Post, PostMetadata


def make_post(index: int, *, tags=None, title: str | None = None) -> Post:
    """Post number ``index``; lower numbers are newer."""
    return Post(
        id=f"post-{index}",
        metadata=PostMetadata(
            title=title or f"Post {index}",
            date=datetime(2024, 1, 1, tzinfo=UTC) - timedelta(days=index),
            source=f"@site/blog/post-{index}.md",
            permalink=f"/blog/post-{index}",
            description=f"Summary of post {index}",
            tags=tags if tags is not None else [],
        ),
        content=f"Body of post {index}\n\n<!-- truncate -->\n\nMore.",
    )


@pytest.fixture
def posts_factory():
    def _factory(count: int) -> list[Post]:
        return [make_post(i) for i in range(1, count + 1)]

    return _factory


@pytest.fixture
def config(tmp_path: Path) -> BlogweaveConfig:
    return BlogweaveConfig(
        site=SiteSettings(title="Test Site", url="https://example.com", site_dir=tmp_path),
        blog=BlogOptions(posts_per_page=2, feed_options=FeedOptions(type="all")),
    )


class StaticPostLoader:
    """PostLoader returning a fixed list of posts."""

    def __init__(self, posts: list[Post]) -> None:
        self.posts = posts

    def load(self, config: BlogweaveConfig) -> list[Post]:
        return list(self.posts)


class RecordingRegistry:
    """In-memory RouteRegistry that records every call."""

    def __init__(self) -> None:
        self.data: dict[str, object] = {}
        self.routes = []
        self.published = False

    async def create_data(self, name: str, data) -> Path:
        assert name not in self.data, f"data blob {name} written twice"
        self.data[name] = data
        return Path("/data") / name

    def aliased_source(self, data_path: Path) -> str:
        return f"~blog/{Path(data_path).name}"

    def add_route(self, route) -> None:
        self.routes.append(route)

    async def publish(self) -> None:
        self.published = True

    def route(self, path: str):
        matches = [route for route in self.routes if route.path == path]
        assert len(matches) == 1, f"expected one route for {path}, got {len(matches)}"
        return matches[0]


class MemoryFeedSink:
    """In-memory FeedSink; optionally fails for one path."""

    def __init__(self, fail_on: str | None = None) -> None:
        self.files: dict[str, bytes] = {}
        self.fail_on = fail_on

    async def write(self, relative_path: Path, content: bytes) -> Path:
        if self.fail_on and Path(relative_path).name == self.fail_on:
            raise OSError("disk full")
        self.files[Path(relative_path).as_posix()] = content
        return Path(relative_path)


@pytest.fixture
def registry() -> RecordingRegistry:
    return RecordingRegistry()


@pytest.fixture
def feed_sink() -> MemoryFeedSink:
    return MemoryFeedSink()
