from pathlib import Path
from typing import Any, Protocol, runtime_checkable

from blogweave.core.config import BlogweaveConfig
from blogweave.core.types import Feed, FeedType, Post, RouteConfig


@runtime_checkable
class PostLoader(Protocol):
    """Turns the content directory into Post records, newest first."""

    def load(self, config: BlogweaveConfig) -> list[Post]: ...


@runtime_checkable
class RouteRegistry(Protocol):
    """Router/bundler capability that receives addressable units.

    Route modules hold literal values, aliased data paths returned by
    ``create_data`` or :class:`ContentImport` pointers. How the router
    resolves a pointer is not the core's concern.
    """

    async def create_data(self, name: str, data: Any) -> Path:
        """Persists a JSON data blob and returns where it lives."""
        ...

    def aliased_source(self, data_path: Path) -> str:
        """Returns the importable alias for a path returned by ``create_data``."""
        ...

    def add_route(self, route: RouteConfig) -> None: ...

    async def publish(self) -> Path | None:
        """Makes the registered routes visible once a phase completes."""
        ...


@runtime_checkable
class FeedSink(Protocol):
    """Final destination for feed byte streams."""

    async def write(self, relative_path: Path, content: bytes) -> Path: ...


@runtime_checkable
class FeedSerializer(Protocol):
    """Pure function from feed model and format to bytes."""

    def __call__(self, feed: Feed, feed_type: FeedType) -> bytes: ...

