"""Prev/next adjacency between consecutive posts."""

from blogweave.core.types import AdjacentPost, Post


def _adjacent(post: Post) -> AdjacentPost:
    return AdjacentPost(title=post.metadata.title, permalink=post.metadata.permalink)


def link_adjacent_posts(posts: list[Post]) -> list[Post]:
    """Colocate prev/next metadata on each post.

    Posts keep the order the loader supplied (newest first). The first post
    has no ``prev_item`` and the last has no ``next_item``.
    """
    for index, post in enumerate(posts):
        post.metadata.prev_item = _adjacent(posts[index - 1]) if index > 0 else None
        post.metadata.next_item = _adjacent(posts[index + 1]) if index < len(posts) - 1 else None
    return posts
