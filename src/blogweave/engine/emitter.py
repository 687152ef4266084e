"""Route/unit emission: turns loaded blog content into router units.

Post bodies are emitted once, as the data of their own post unit. List pages
and tag pages reference them through :class:`ContentImport` pointers, so a
post listed on several pages is still serialized a single time.
"""

import asyncio
import logging
from typing import Any

from blogweave.core.config import BlogOptions
from blogweave.core.ports import RouteRegistry
from blogweave.core.types import (
    BlogContent,
    ContentImport,
    ListPage,
    Post,
    PostMetadata,
    RouteConfig,
    TagEntry,
    TagSummary,
)
from blogweave.core.utils import docu_hash

logger = logging.getLogger(__name__)


def truncated_items(post_ids: list[str], metadata_by_id: dict[str, PostMetadata]) -> list[dict[str, Any]]:
    """One truncated content import per post id, in order."""
    return [
        {
            "content": ContentImport(
                source_path=metadata_by_id[post_id].source,
                query={"truncated": True},
            ).to_json_dict(),
        }
        for post_id in post_ids
    ]


async def _emit_post(
    post: Post,
    registry: RouteRegistry,
    options: BlogOptions,
    metadata_by_id: dict[str, PostMetadata],
) -> None:
    metadata = post.metadata
    # This data path must stay in sync with the metadata path the content
    # loader derives from the same source.
    await registry.create_data(f"{docu_hash(metadata.source)}.json", metadata.to_json_dict())
    registry.add_route(
        RouteConfig(
            path=metadata.permalink,
            component=options.blog_post_component,
            modules={"content": metadata.source},
        )
    )
    metadata_by_id[post.id] = metadata


async def _emit_page(
    page: ListPage,
    registry: RouteRegistry,
    options: BlogOptions,
    metadata_by_id: dict[str, PostMetadata],
) -> None:
    page_metadata_path = await registry.create_data(f"{docu_hash(page.permalink)}.json", page.metadata_dict())
    registry.add_route(
        RouteConfig(
            path=page.permalink,
            component=options.blog_list_component,
            modules={
                "items": truncated_items(page.post_ids, metadata_by_id),
                "metadata": registry.aliased_source(page_metadata_path),
            },
        )
    )


async def _emit_tag(
    summary: TagSummary,
    entry: TagEntry,
    registry: RouteRegistry,
    options: BlogOptions,
    metadata_by_id: dict[str, PostMetadata],
) -> None:
    tag_metadata_path = await registry.create_data(f"{docu_hash(entry.permalink)}.json", summary.to_json_dict())
    registry.add_route(
        RouteConfig(
            path=entry.permalink,
            component=options.blog_tags_posts_component,
            modules={
                "items": truncated_items(entry.post_ids, metadata_by_id),
                "metadata": registry.aliased_source(tag_metadata_path),
            },
        )
    )


async def _emit_tags_list(
    tags_list_path: str,
    summaries: dict[str, TagSummary],
    registry: RouteRegistry,
    options: BlogOptions,
) -> None:
    tags_module = {slug: summary.to_json_dict() for slug, summary in summaries.items()}
    tags_data_path = await registry.create_data(f"{docu_hash(f'{tags_list_path}-tags')}.json", tags_module)
    registry.add_route(
        RouteConfig(
            path=tags_list_path,
            component=options.blog_tags_list_component,
            modules={"tags": registry.aliased_source(tags_data_path)},
        )
    )


def summarize_tags(tags: dict[str, TagEntry], tags_list_path: str) -> dict[str, TagSummary]:
    return {
        slug: TagSummary(
            all_tags_path=tags_list_path,
            slug=slug,
            name=entry.name,
            count=len(entry.post_ids),
            permalink=entry.permalink,
        )
        for slug, entry in tags.items()
    }


async def emit_units(content: BlogContent, registry: RouteRegistry, options: BlogOptions) -> int:
    """Create data blobs and routes for posts, list pages and tags.

    Post units are created first and all of them must finish before any
    page or tag unit is built, because those look up post metadata by id.
    The first failing task propagates out of this coroutine.

    Returns:
        Number of routes registered.

    """
    metadata_by_id: dict[str, PostMetadata] = {}

    await asyncio.gather(*(_emit_post(post, registry, options, metadata_by_id) for post in content.posts))
    route_count = len(content.posts)
    logger.debug("Emitted %d post units", route_count)

    tasks = [_emit_page(page, registry, options, metadata_by_id) for page in content.pages]
    route_count += len(content.pages)

    if content.tags_list_path is not None:
        summaries = summarize_tags(content.tags, content.tags_list_path)
        tasks.extend(
            _emit_tag(summaries[slug], entry, registry, options, metadata_by_id) for slug, entry in content.tags.items()
        )
        tasks.append(_emit_tags_list(content.tags_list_path, summaries, registry, options))
        route_count += len(content.tags) + 1

    await asyncio.gather(*tasks)
    logger.info(
        "Emitted %d routes (%d posts, %d pages, %d tags)",
        route_count,
        len(content.posts),
        len(content.pages),
        len(content.tags) if content.tags_list_path is not None else 0,
    )
    return route_count
