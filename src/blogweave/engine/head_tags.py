"""Discovery metadata for enabled feeds."""

from collections.abc import Sequence
from typing import NamedTuple

from markupsafe import escape

from blogweave.core.config import SiteSettings
from blogweave.core.types import FeedType, HeadTag
from blogweave.core.utils import normalize_url


class _FeedLink(NamedTuple):
    mime_type: str
    path: str
    title: str


_FEED_LINKS = {
    FeedType.RSS: _FeedLink("application/rss+xml", "rss.xml", "{title} Blog RSS Feed"),
    FeedType.ATOM: _FeedLink("application/atom+xml", "atom.xml", "{title} Blog Atom Feed"),
}


def feed_head_tags(feed_types: Sequence[FeedType], site: SiteSettings, route_base_path: str) -> list[HeadTag]:
    """One ``<link rel="alternate">`` per enabled feed type, in feed-type order."""
    head_tags: list[HeadTag] = []
    for feed_type in feed_types:
        link = _FEED_LINKS[feed_type]
        head_tags.append(
            HeadTag(
                tag_name="link",
                attributes={
                    "rel": "alternate",
                    "type": link.mime_type,
                    "href": normalize_url([site.base_url, route_base_path, link.path]),
                    "title": link.title.format(title=site.title),
                },
            )
        )
    return head_tags


def render_head_tag(tag: HeadTag) -> str:
    """HTML for a void head tag such as ``<link>``."""
    attributes = " ".join(f'{name}="{escape(value)}"' for name, value in tag.attributes.items())
    return f"<{tag.tag_name} {attributes}>"
