"""Core exceptions for the Blogweave application."""

from typing import Any


class BlogweaveError(Exception):
    """Base exception for all Blogweave errors."""


class ConfigError(BlogweaveError):
    """Base exception for all configuration-related errors."""


class InvalidFeedTypeError(ConfigError):
    """Raised when ``feed_options.type`` is not one of rss, atom or all."""

    def __init__(self, value: Any) -> None:
        self.value = value
        super().__init__(f"Invalid feedOptions type: {value!r}. It must be either 'rss', 'atom', or 'all'")


class InvalidPostsPerPageError(ConfigError):
    """Raised when ``posts_per_page`` is not a positive integer."""

    def __init__(self, value: Any) -> None:
        self.value = value
        super().__init__(f"Invalid postsPerPage: {value!r}. It must be a positive integer")


class PostLoadError(BlogweaveError):
    """Raised when a post file cannot be turned into a Post record."""

    def __init__(self, path: Any, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load post {path}: {reason}")


class FeedWriteError(BlogweaveError):
    """Raised when writing a feed file fails."""

    def __init__(self, feed_type: str, original_exception: Exception) -> None:
        self.feed_type = feed_type
        self.original_exception = original_exception
        super().__init__(f"Generating {feed_type} feed failed: {original_exception}")
