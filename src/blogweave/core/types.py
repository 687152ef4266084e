"""Core Data Types for Blogweave."""

from datetime import UTC, datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


def format_iso_utc(dt: datetime) -> str:
    """Provides a consistent ISO 8601 format with UTC timezone for templates."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    # Ensure 'Z' for Zulu time, required by some strict RFC3339 parsers
    return dt.astimezone(UTC).isoformat().replace("+00:00", "Z")


class CamelModel(BaseModel):
    """Model whose JSON form uses camelCase keys, as theme components expect."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_json_dict(self, *, exclude_none: bool = True, **kwargs: Any) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=exclude_none, **kwargs)


class FeedType(str, Enum):
    RSS = "rss"
    ATOM = "atom"


# --- Posts ---
class AdjacentPost(CamelModel):
    title: str
    permalink: str


class Tag(CamelModel):
    label: str
    permalink: str


class PostMetadata(CamelModel):
    """Loader-produced metadata for one post.

    ``tags`` holds raw labels until the tag indexer replaces them with
    ``Tag`` references. Unknown loader fields are kept and serialized.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    title: str
    date: datetime
    source: str
    permalink: str
    description: str = ""
    tags: list[str | Tag] | None = Field(default_factory=list)
    prev_item: AdjacentPost | None = None
    next_item: AdjacentPost | None = None
    edit_url: str | None = None
    reading_time: float | None = None
    truncated: bool = False


class Post(BaseModel):
    id: str
    metadata: PostMetadata
    content: str = ""


# --- Derived structures ---
class ListPage(CamelModel):
    permalink: str
    page_number: int
    posts_per_page: int
    total_pages: int
    total_count: int
    previous_page_link: str | None = None
    next_page_link: str | None = None
    post_ids: list[str] = Field(default_factory=list)

    def metadata_dict(self) -> dict[str, Any]:
        """Page metadata blob; post ids travel as content imports instead."""
        return self.to_json_dict(exclude_none=False, exclude={"post_ids"})


class TagEntry(BaseModel):
    slug: str
    name: str
    permalink: str
    post_ids: list[str] = Field(default_factory=list)


class TagSummary(CamelModel):
    all_tags_path: str
    slug: str
    name: str
    count: int
    permalink: str


class BlogContent(BaseModel):
    """Everything the load phase derives for one build."""

    posts: list[Post]
    pages: list[ListPage]
    tags: dict[str, TagEntry] = Field(default_factory=dict)
    tags_list_path: str | None = None


# --- Router descriptors ---
class ContentImport(CamelModel):
    """Pointer to another unit's content, resolved by the router."""

    import_ref: bool = True
    source_path: str
    query: dict[str, Any] | None = None


class RouteConfig(BaseModel):
    path: str
    component: str
    exact: bool = True
    modules: dict[str, Any] = Field(default_factory=dict)


class HeadTag(BaseModel):
    tag_name: str
    attributes: dict[str, str] = Field(default_factory=dict)


# --- Syndication ---
class FeedItem(BaseModel):
    id: str
    title: str
    link: str
    date: datetime
    description: str | None = None


class Feed(BaseModel):
    id: str
    title: str
    link: str
    updated: datetime
    description: str | None = None
    language: str | None = None
    copyright: str | None = None
    favicon: str | None = None
    items: list[FeedItem] = Field(default_factory=list)
