import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from blogweave.core.exceptions import InvalidFeedTypeError, InvalidPostsPerPageError
from blogweave.core.types import FeedType

CONFIG_FILENAME = ".blogweave.toml"
FEED_TYPE_CHOICES = ("rss", "atom", "all")
DEFAULT_TRUNCATE_MARKER = r"<!--\s*(truncate)\s*-->"


def _deep_merge(destination: dict[str, Any], source: dict[str, Any]) -> dict[str, Any]:
    """Merge source into destination, with source values overwriting."""
    for key, value in source.items():
        if isinstance(value, Mapping) and key in destination and isinstance(destination[key], Mapping):
            destination[key] = _deep_merge(destination.get(key, {}), value)
        else:
            destination[key] = value
    return destination


def resolve_feed_types(value: Any) -> list[FeedType]:
    """Expand a configured feed type into the feeds to generate.

    ``all`` expands to ``[rss, atom]`` in that order. Anything outside
    ``rss``/``atom``/``all`` raises :class:`InvalidFeedTypeError`.
    """
    if isinstance(value, FeedType):
        return [value]
    if not isinstance(value, str) or value not in FEED_TYPE_CHOICES:
        raise InvalidFeedTypeError(value)
    if value == "all":
        return [FeedType.RSS, FeedType.ATOM]
    return [FeedType(value)]


class FeedOptions(BaseModel):
    """Syndication feed configuration. Feeds are generated only when present."""

    type: str = Field(default="all", description="One of 'rss', 'atom' or 'all'")
    title: str | None = None
    description: str | None = None
    copyright: str | None = None
    language: str | None = None

    @field_validator("type", mode="before")
    @classmethod
    def _check_type(cls, value: Any) -> Any:
        resolve_feed_types(value)
        return value.value if isinstance(value, FeedType) else value

    @property
    def feed_types(self) -> list[FeedType]:
        return resolve_feed_types(self.type)


class SiteSettings(BaseModel):
    """Site-wide settings.

    Relative paths resolve against ``site_dir``, which defaults to the
    current working directory.
    """

    title: str = Field(default="My Site", description="Site title, used in feed titles")
    url: str = Field(default="https://example.com", description="Public site origin")
    base_url: str = Field(default="/", description="Path prefix the site is served under")
    favicon: str | None = None

    site_dir: Path = Field(default_factory=Path.cwd, description="Root directory of the site")
    generated_files_dir: Path = Field(default=Path(".blogweave"), description="Generated data directory")
    out_dir: Path = Field(default=Path("build"), description="Build output directory")

    @property
    def abs_generated_files_dir(self) -> Path:
        return self._resolve(self.generated_files_dir)

    @property
    def abs_out_dir(self) -> Path:
        return self._resolve(self.out_dir)

    def _resolve(self, path: Path) -> Path:
        if path.is_absolute():
            return path
        return self.site_dir / path


class BlogOptions(BaseModel):
    """Blog content options."""

    path: Path = Field(default=Path("blog"), description="Content directory, relative to the site")
    route_base_path: str = "blog"
    include: list[str] = Field(default_factory=lambda: ["*.md", "*.mdx"])
    posts_per_page: int = 10

    blog_list_component: str = "@theme/BlogListPage"
    blog_post_component: str = "@theme/BlogPostPage"
    blog_tags_list_component: str = "@theme/BlogTagsListPage"
    blog_tags_posts_component: str = "@theme/BlogTagsPostsPage"

    show_reading_time: bool = True
    edit_url: str | None = None
    truncate_marker: str = DEFAULT_TRUNCATE_MARKER
    # None disables admonitions, a mapping (even empty) enables them.
    admonitions: dict[str, Any] | None = Field(default_factory=dict)
    feed_options: FeedOptions | None = None

    @field_validator("posts_per_page")
    @classmethod
    def _check_posts_per_page(cls, value: int) -> int:
        if value < 1:
            raise InvalidPostsPerPageError(value)
        return value


class BlogweaveConfig(BaseSettings):
    """Root configuration for Blogweave.

    Supports environment variable overrides with the pattern:
    BLOGWEAVE_SECTION__KEY (e.g., BLOGWEAVE_BLOG__POSTS_PER_PAGE)
    """

    site: SiteSettings = Field(default_factory=SiteSettings)
    blog: BlogOptions = Field(default_factory=BlogOptions)

    model_config = SettingsConfigDict(
        extra="ignore",
        env_prefix="BLOGWEAVE_",
        env_nested_delimiter="__",
    )

    @property
    def content_path(self) -> Path:
        return self.site._resolve(self.blog.path)

    @property
    def data_dir(self) -> Path:
        return self.site.abs_generated_files_dir / "blog"

    @property
    def feed_types(self) -> list[FeedType]:
        if self.blog.feed_options is None:
            return []
        return self.blog.feed_options.feed_types

    @classmethod
    def load(cls, site_root: Path | None = None) -> "BlogweaveConfig":
        """Loads configuration from .blogweave.toml and environment variables.

        Priority (highest to lowest):
        1. Environment variables (BLOGWEAVE_SECTION__KEY)
        2. Config file (.blogweave.toml)
        3. Defaults
        """
        root_path = site_root if site_root is not None else Path.cwd()
        config_file = root_path / CONFIG_FILENAME

        # 1. Load from TOML file
        file_settings: dict[str, Any] = {}
        if config_file.is_file():
            with config_file.open("rb") as f:
                file_settings = tomllib.load(f)

        # 2. Load from environment variables
        env_config = cls()
        env_settings = env_config.model_dump(exclude_unset=True)

        # 3. Merge configurations: env > toml
        merged_config = _deep_merge(file_settings, env_settings)

        # 4. Inject site_dir
        merged_config.setdefault("site", {})["site_dir"] = root_path

        # 5. Validate and build the final model object
        return cls.model_validate(merged_config)
