from dataclasses import FrozenInstanceError

import pytest
from conftest import make_post

from blogweave.core.config import BlogweaveConfig
from blogweave.core.context import BuildContext


def test_build_context_defaults():
    ctx = BuildContext(config=BlogweaveConfig())

    assert ctx.run_id
    assert ctx.posts == ()
    assert ctx.is_empty
    assert ctx.metadata == {}


def test_build_context_posts_become_tuple():
    ctx = BuildContext(config=BlogweaveConfig(), posts=[make_post(1)])

    assert isinstance(ctx.posts, tuple)
    assert not ctx.is_empty


def test_build_context_is_frozen():
    ctx = BuildContext(config=BlogweaveConfig(), metadata={"key": "value"})

    with pytest.raises(FrozenInstanceError):
        ctx.posts = ()
    with pytest.raises(TypeError):
        ctx.metadata["key"] = "other"
