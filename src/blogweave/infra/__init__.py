"""Default adapters for the Blogweave ports."""

from blogweave.infra.loader import FrontMatterPostLoader
from blogweave.infra.registry import FileSystemRouteRegistry
from blogweave.infra.sinks.feed import FileFeedSink

__all__ = ["FileFeedSink", "FileSystemRouteRegistry", "FrontMatterPostLoader"]
