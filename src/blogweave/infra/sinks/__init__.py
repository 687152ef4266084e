"""Output sinks."""

from blogweave.infra.sinks.feed import FileFeedSink

__all__ = ["FileFeedSink"]
