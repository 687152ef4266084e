"""Markdown post loader.

Reads ``*.md``/``*.mdx`` files with YAML front matter from the blog content
directory and turns them into :class:`Post` records, newest first.
"""

import logging
import re
from datetime import UTC, date, datetime
from pathlib import Path
from typing import Any

import frontmatter
import yaml

from blogweave.core.config import BlogweaveConfig
from blogweave.core.exceptions import PostLoadError
from blogweave.core.types import Post, PostMetadata
from blogweave.core.utils import aliased_site_path, normalize_url

logger = logging.getLogger(__name__)

# e.g. 2019-05-30-hello-world.md
FILENAME_DATE_RE = re.compile(r"^(\d{4}-\d{1,2}-\d{1,2})-?(.*?)\.mdx?$")
WORDS_PER_MINUTE = 200


def _as_datetime(value: Any) -> datetime | None:
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    elif isinstance(value, str):
        try:
            parsed = datetime.fromisoformat(value.strip())
        except ValueError:
            return None
    else:
        return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def _excerpt(body: str) -> str:
    """First paragraph line that is not a heading, import or truncate marker."""
    for line in body.splitlines():
        text = line.strip()
        if not text or text.startswith(("#", "import ", "<!--")):
            continue
        return text
    return ""


def _reading_time(body: str) -> float:
    return round(len(body.split()) / WORDS_PER_MINUTE, 2)


class FrontMatterPostLoader:
    """Loads posts from files matched by the configured include patterns."""

    def load(self, config: BlogweaveConfig) -> list[Post]:
        content_path = config.content_path
        if not content_path.is_dir():
            logger.warning("Blog content directory %s does not exist", content_path)
            return []

        files = sorted({path for pattern in config.blog.include for path in content_path.glob(pattern) if path.is_file()})
        posts: list[Post] = []
        seen: dict[str, Path] = {}
        for path in files:
            post = self.load_post(path, config)
            if post.id in seen:
                raise PostLoadError(path, f"duplicate post id {post.id!r}, also used by {seen[post.id]}")
            seen[post.id] = path
            posts.append(post)

        # Newest first
        posts.sort(key=lambda post: post.metadata.date, reverse=True)
        return posts

    def load_post(self, path: Path, config: BlogweaveConfig) -> Post:
        try:
            document = frontmatter.load(path)
        except (yaml.YAMLError, UnicodeDecodeError) as exc:
            raise PostLoadError(path, str(exc)) from exc

        front_matter = document.metadata
        body = document.content
        blog = config.blog
        site = config.site

        match = FILENAME_DATE_RE.match(path.name)
        link_name = match.group(2) if match and match.group(2) else path.name.split(".")[0]

        post_date = _as_datetime(front_matter.get("date"))
        if post_date is None and match:
            post_date = _as_datetime(match.group(1))
        if post_date is None:
            post_date = datetime.fromtimestamp(path.stat().st_mtime, tz=UTC)

        slug = front_matter.get("slug")
        title = str(front_matter.get("title") or link_name)
        permalink = normalize_url([site.base_url, blog.route_base_path, slug or f"{post_date:%Y/%m/%d}/{link_name}"])

        try:
            source = aliased_site_path(path, site.site_dir)
            edit_url = None
            if blog.edit_url:
                relative = path.resolve().relative_to(site.site_dir.resolve())
                edit_url = normalize_url([blog.edit_url, relative.as_posix()])

            metadata = PostMetadata(
                title=title,
                date=post_date,
                source=source,
                permalink=permalink,
                description=str(front_matter.get("description") or _excerpt(body)),
                tags=front_matter.get("tags") or [],
                edit_url=edit_url,
                reading_time=_reading_time(body) if blog.show_reading_time else None,
                truncated=re.search(blog.truncate_marker, body) is not None,
            )
        except ValueError as exc:
            raise PostLoadError(path, str(exc)) from exc

        # Titles repeat across posts, the source path does not
        post_id = str(slug or front_matter.get("id") or source)
        return Post(id=post_id, metadata=metadata, content=body)
