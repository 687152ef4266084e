import asyncio
import json
from pathlib import Path

import pytest

from blogweave.core.types import RouteConfig
from blogweave.infra.registry import ROUTES_MANIFEST, FileSystemRouteRegistry
from blogweave.infra.sinks.feed import FileFeedSink


@pytest.mark.asyncio
async def test_create_data_writes_json(tmp_path):
    registry = FileSystemRouteRegistry(tmp_path / "data")

    path = await registry.create_data("page-abc.json", {"permalink": "/blog", "nextPageLink": None})

    assert path == tmp_path / "data" / "page-abc.json"
    assert json.loads(path.read_text(encoding="utf-8")) == {"permalink": "/blog", "nextPageLink": None}
    assert registry.aliased_source(path) == "~blog/page-abc.json"


@pytest.mark.asyncio
async def test_routes_are_written_only_on_publish(tmp_path):
    registry = FileSystemRouteRegistry(tmp_path)
    registry.add_route(RouteConfig(path="/blog/b", component="Post", modules={"content": "@site/b.md"}))
    registry.add_route(RouteConfig(path="/blog/a", component="Post", modules={"content": "@site/a.md"}))

    assert not (tmp_path / ROUTES_MANIFEST).exists()

    manifest = await registry.publish()

    routes = json.loads(manifest.read_text())
    assert [route["path"] for route in routes] == ["/blog/a", "/blog/b"]
    assert routes[0] == {"path": "/blog/a", "component": "Post", "exact": True, "modules": {"content": "@site/a.md"}}


@pytest.mark.asyncio
async def test_feed_sink_creates_directories(tmp_path):
    sink = FileFeedSink(tmp_path / "build")

    path = await sink.write(Path("blog/rss.xml"), b"<rss/>")

    assert path == tmp_path / "build" / "blog" / "rss.xml"
    assert path.read_bytes() == b"<rss/>"


@pytest.mark.asyncio
async def test_publish_writes_manifest_in_a_worker_thread(tmp_path, monkeypatch):
    offloaded = []
    to_thread = asyncio.to_thread

    async def recording_to_thread(func, *args):
        offloaded.append(args[0])
        return await to_thread(func, *args)

    monkeypatch.setattr(asyncio, "to_thread", recording_to_thread)
    registry = FileSystemRouteRegistry(tmp_path)
    registry.add_route(RouteConfig(path="/blog", component="List"))

    manifest = await registry.publish()

    assert offloaded == [manifest]
