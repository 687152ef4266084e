"""Build phases for blog content.

A build runs strictly in order: discover, load content (sequence, paginate,
index tags), emit units, post build (feeds). Every phase receives the
:class:`BuildContext` and whatever earlier phases produced as arguments.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from blogweave.core.config import BlogweaveConfig
from blogweave.core.context import BuildContext
from blogweave.core.ports import FeedSink, PostLoader, RouteRegistry
from blogweave.core.types import BlogContent, HeadTag
from blogweave.core.utils import normalize_url
from blogweave.engine.emitter import emit_units
from blogweave.engine.feeds import build_feed, write_feeds
from blogweave.engine.head_tags import feed_head_tags
from blogweave.engine.paginator import paginate
from blogweave.engine.sequencer import link_adjacent_posts
from blogweave.engine.tags import index_tags, tags_list_path

logger = logging.getLogger(__name__)

ADMONITION_STYLES_MODULE = "remark-admonitions/styles/infima.css"


class BuildStatus(str, Enum):
    COMPLETED = "completed"
    NOTHING_TO_DO = "nothing_to_do"


@dataclass(frozen=True)
class BuildResult:
    status: BuildStatus
    run_id: str
    post_count: int = 0
    page_count: int = 0
    tag_count: int = 0
    route_count: int = 0
    feed_paths: tuple[Path, ...] = ()
    head_tags: tuple[HeadTag, ...] = ()


def blog_base_path(config: BlogweaveConfig) -> str:
    return normalize_url([config.site.base_url, config.blog.route_base_path])


def discover(config: BlogweaveConfig, loader: PostLoader) -> BuildContext:
    """Load posts once and open the build context."""
    posts = loader.load(config)
    logger.info("Discovered %d posts in %s", len(posts), config.content_path)
    return BuildContext(config=config, posts=tuple(posts))


def paths_to_watch(ctx: BuildContext) -> list[str]:
    content_path = ctx.config.content_path
    return [f"{content_path}/{pattern}" for pattern in ctx.config.blog.include]


def client_modules(ctx: BuildContext) -> list[str]:
    if ctx.config.blog.admonitions is None:
        return []
    return [ADMONITION_STYLES_MODULE]


def load_content(ctx: BuildContext) -> BlogContent | None:
    """Derive adjacency, pages and tags for the discovered posts.

    Returns None, the "nothing to do" sentinel, when there are no posts.
    The context's posts are copied first so each build derives from the
    loader's records.
    """
    if ctx.is_empty:
        logger.info("No blog posts found, skipping pagination, tags and feeds")
        return None

    blog = ctx.config.blog
    posts = link_adjacent_posts([post.model_copy(deep=True) for post in ctx.posts])

    base_page_url = blog_base_path(ctx.config)
    pages = paginate([post.id for post in posts], blog.posts_per_page, base_page_url)

    tags_path = normalize_url([base_page_url, "tags"])
    tags = index_tags(posts, tags_path)

    return BlogContent(
        posts=posts,
        pages=pages,
        tags=tags,
        tags_list_path=tags_list_path(tags, tags_path),
    )


async def content_loaded(ctx: BuildContext, content: BlogContent | None, registry: RouteRegistry) -> int:
    """Emit every unit, then publish the routes in one step."""
    if content is None:
        return 0
    route_count = await emit_units(content, registry, ctx.config.blog)
    await registry.publish()
    return route_count


async def post_build(ctx: BuildContext, content: BlogContent | None, sink: FeedSink) -> list[Path]:
    """Write feed files when feeds are configured and there is content."""
    if ctx.config.blog.feed_options is None or content is None:
        return []

    feed = build_feed(content.posts, ctx.config)
    if feed is None:
        return []
    return await write_feeds(feed, ctx.config.feed_types, sink, ctx.config.blog.route_base_path)


def inject_html_tags(ctx: BuildContext) -> list[HeadTag]:
    return feed_head_tags(ctx.config.feed_types, ctx.config.site, ctx.config.blog.route_base_path)


async def run_build(
    config: BlogweaveConfig,
    loader: PostLoader,
    registry: RouteRegistry,
    sink: FeedSink,
) -> BuildResult:
    """Run every phase for one build."""
    ctx = discover(config, loader)
    content = load_content(ctx)
    if content is None:
        return BuildResult(status=BuildStatus.NOTHING_TO_DO, run_id=ctx.run_id)

    route_count = await content_loaded(ctx, content, registry)
    feed_paths = await post_build(ctx, content, sink)

    return BuildResult(
        status=BuildStatus.COMPLETED,
        run_id=ctx.run_id,
        post_count=len(content.posts),
        page_count=len(content.pages),
        tag_count=len(content.tags),
        route_count=route_count,
        feed_paths=tuple(feed_paths),
        head_tags=tuple(inject_html_tags(ctx)),
    )
