"""Blog pagination.

Example permalinks: ``/blog``, ``/blog/page/2``, ``/blog/page/3``.
"""

import math
from collections.abc import Sequence

from blogweave.core.exceptions import InvalidPostsPerPageError
from blogweave.core.types import ListPage
from blogweave.core.utils import normalize_url


def page_permalink(base_path: str, page: int) -> str:
    """Permalink of the 0-based ``page``."""
    if page > 0:
        return normalize_url([base_path, f"page/{page + 1}"])
    return base_path


def paginate(post_ids: Sequence[str], posts_per_page: int, base_path: str) -> list[ListPage]:
    """Split ordered post ids into contiguous pages of ``posts_per_page``.

    The last page may be shorter. Zero posts yield zero pages.
    """
    if isinstance(posts_per_page, bool) or not isinstance(posts_per_page, int) or posts_per_page < 1:
        raise InvalidPostsPerPageError(posts_per_page)

    total_count = len(post_ids)
    total_pages = math.ceil(total_count / posts_per_page)

    pages: list[ListPage] = []
    for page in range(total_pages):
        start = page * posts_per_page
        pages.append(
            ListPage(
                permalink=page_permalink(base_path, page),
                page_number=page + 1,
                posts_per_page=posts_per_page,
                total_pages=total_pages,
                total_count=total_count,
                previous_page_link=page_permalink(base_path, page - 1) if page > 0 else None,
                next_page_link=page_permalink(base_path, page + 1) if page < total_pages - 1 else None,
                post_ids=list(post_ids[start : start + posts_per_page]),
            )
        )
    return pages
