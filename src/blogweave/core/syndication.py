"""RSS and Atom serialization for Blogweave feeds."""

from datetime import UTC, datetime
from email.utils import format_datetime
from functools import cache
from pathlib import Path

import jinja2

from blogweave.core.types import Feed, FeedType, format_iso_utc

GENERATOR = "blogweave"

_TEMPLATES = {
    FeedType.RSS: "rss.xml.jinja",
    FeedType.ATOM: "atom.xml.jinja",
}


def _rfc822(dt: datetime) -> str:
    """RFC 822 date as RSS 2.0 requires."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return format_datetime(dt.astimezone(UTC), usegmt=True)


@cache
def _environment() -> jinja2.Environment:
    template_dir = Path(__file__).parent / "templates"
    env = jinja2.Environment(
        loader=jinja2.FileSystemLoader(template_dir),
        autoescape=True,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )
    env.filters["rfc822"] = _rfc822
    env.filters["iso_utc"] = format_iso_utc
    return env


def render_feed(feed: Feed, feed_type: FeedType) -> bytes:
    """Serialize a Feed object to RSS 2.0 or Atom 1.0 bytes."""
    template = _environment().get_template(_TEMPLATES[FeedType(feed_type)])
    return template.render(feed=feed, generator=GENERATOR).encode("utf-8")
