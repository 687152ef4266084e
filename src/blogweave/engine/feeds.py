"""Feed generation: ordered posts to RSS/Atom files."""

import logging
from collections.abc import Sequence
from pathlib import Path

from blogweave.core.config import BlogweaveConfig, resolve_feed_types
from blogweave.core.exceptions import FeedWriteError
from blogweave.core.ports import FeedSerializer, FeedSink
from blogweave.core.syndication import render_feed
from blogweave.core.types import Feed, FeedItem, FeedType, Post
from blogweave.core.utils import normalize_url

logger = logging.getLogger(__name__)

__all__ = ["build_feed", "feed_path", "resolve_feed_types", "write_feeds"]


def build_feed(posts: Sequence[Post], config: BlogweaveConfig) -> Feed | None:
    """Build the feed model for the ordered posts, or None when there are none."""
    if not posts:
        return None

    site = config.site
    options = config.blog.feed_options
    blog_base_url = normalize_url([site.url, site.base_url, config.blog.route_base_path])
    default_title = f"{site.title} Blog"

    return Feed(
        id=blog_base_url,
        title=(options.title if options else None) or default_title,
        link=blog_base_url,
        updated=posts[0].metadata.date,
        description=(options.description if options else None) or default_title,
        language=options.language if options else None,
        copyright=options.copyright if options else None,
        favicon=normalize_url([site.url, site.base_url, site.favicon]) if site.favicon else None,
        items=[
            FeedItem(
                id=post.metadata.permalink,
                title=post.metadata.title,
                link=normalize_url([site.url, post.metadata.permalink]),
                date=post.metadata.date,
                description=post.metadata.description or None,
            )
            for post in posts
        ],
    )


def feed_path(route_base_path: str, feed_type: FeedType) -> Path:
    """Output path of a feed, relative to the output root."""
    return Path(route_base_path.strip("/")) / f"{feed_type.value}.xml"


async def write_feeds(
    feed: Feed,
    feed_types: Sequence[FeedType],
    sink: FeedSink,
    route_base_path: str,
    serializer: FeedSerializer = render_feed,
) -> list[Path]:
    """Serialize and write one file per feed type.

    Fail-fast: the first failing write is wrapped in :class:`FeedWriteError`
    and the remaining feed types are not written.
    """
    written: list[Path] = []
    for feed_type in feed_types:
        content = serializer(feed, feed_type)
        try:
            written.append(await sink.write(feed_path(route_base_path, feed_type), content))
        except Exception as exc:
            raise FeedWriteError(feed_type.value, exc) from exc
        logger.info("Wrote %s feed with %d items", feed_type.value, len(feed.items))
    return written
