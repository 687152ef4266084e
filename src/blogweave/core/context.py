"""Build execution context.

Carries build-scoped state between phases without globals."""
import uuid
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from blogweave.core.config import BlogweaveConfig
from blogweave.core.types import Post


@dataclass(frozen=True)
class BuildContext:
    """Build-scoped context created at discovery time.

    Every phase after discovery receives this object explicitly; nothing is
    read from module state.

    Attributes:
        config: Resolved configuration
        posts: Posts as supplied by the loader, newest first
        run_id: Unique identifier for this build
        metadata: Additional run metadata (frozen dict)
    """

    config: BlogweaveConfig
    posts: tuple[Post, ...] = ()
    run_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    metadata: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        """Ensure posts and metadata cannot be swapped out mid-build."""
        object.__setattr__(self, "posts", tuple(self.posts))
        if not isinstance(self.metadata, MappingProxyType):
            object.__setattr__(self, "metadata", MappingProxyType(dict(self.metadata)))

    @property
    def is_empty(self) -> bool:
        return not self.posts
