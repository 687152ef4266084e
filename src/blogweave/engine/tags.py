"""Tag normalization and the tag -> posts index."""

import logging

from blogweave.core.types import Post, Tag, TagEntry
from blogweave.core.utils import normalize_url, slugify

logger = logging.getLogger(__name__)


def index_tags(posts: list[Post], tags_path: str) -> dict[str, TagEntry]:
    """Normalize every post's tags and aggregate them by slug.

    Raw string labels become ``Tag`` references that keep the original
    casing, while the shared ``TagEntry.name`` is the lowercased label of
    the first post that introduced the slug. ``post_ids`` follow the
    traversal order of ``posts``.

    Pre-structured ``Tag`` values pass through untouched and are not
    indexed; their permalinks are managed by whoever supplied them.
    """
    tags: dict[str, TagEntry] = {}

    for post in posts:
        raw_tags = post.metadata.tags
        if not raw_tags:
            post.metadata.tags = []
            continue

        normalized: list[str | Tag] = []
        for tag in raw_tags:
            if not isinstance(tag, str):
                normalized.append(tag)
                continue

            slug = slugify(tag)
            permalink = normalize_url([tags_path, slug])
            entry = tags.get(slug)
            if entry is None:
                # Only the first occurrence decides the display name
                entry = TagEntry(slug=slug, name=tag.lower(), permalink=permalink)
                tags[slug] = entry
            if not entry.post_ids or entry.post_ids[-1] != post.id:
                entry.post_ids.append(post.id)
            normalized.append(Tag(label=tag, permalink=permalink))

        post.metadata.tags = normalized

    logger.debug("Indexed %d tags across %d posts", len(tags), len(posts))
    return tags


def tags_list_path(tags: dict[str, TagEntry], tags_path: str) -> str | None:
    """The tag index path, or None when no tag was registered."""
    return tags_path if tags else None
