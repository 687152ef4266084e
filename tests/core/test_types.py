from datetime import UTC, datetime, timedelta, timezone

from blogweave.core.types import AdjacentPost, ListPage, PostMetadata, Tag, format_iso_utc


def test_post_metadata_json_uses_camel_case_and_drops_absent_fields():
    metadata = PostMetadata(
        title="Hello",
        date=datetime(2024, 5, 1, tzinfo=UTC),
        source="@site/blog/hello.md",
        permalink="/blog/hello",
        tags=[Tag(label="News", permalink="/blog/tags/news")],
        next_item=AdjacentPost(title="Older", permalink="/blog/older"),
        edit_url="https://github.com/o/r/edit/main/blog/hello.md",
    )

    data = metadata.to_json_dict()

    assert data["nextItem"] == {"title": "Older", "permalink": "/blog/older"}
    assert "prevItem" not in data
    assert data["editUrl"].endswith("hello.md")
    assert data["tags"] == [{"label": "News", "permalink": "/blog/tags/news"}]
    assert data["date"].startswith("2024-05-01")


def test_post_metadata_keeps_loader_fields():
    metadata = PostMetadata(
        title="Hello",
        date=datetime(2024, 5, 1, tzinfo=UTC),
        source="@site/blog/hello.md",
        permalink="/blog/hello",
        author="Ada",
    )

    assert metadata.to_json_dict()["author"] == "Ada"


def test_post_metadata_accepts_mixed_tag_refs():
    metadata = PostMetadata(
        title="Hello",
        date=datetime(2024, 5, 1, tzinfo=UTC),
        source="@site/blog/hello.md",
        permalink="/blog/hello",
        tags=["raw", {"label": "Shaped", "permalink": "/elsewhere/shaped"}],
    )

    assert metadata.tags[0] == "raw"
    assert metadata.tags[1] == Tag(label="Shaped", permalink="/elsewhere/shaped")


def test_list_page_metadata_keeps_null_links_and_omits_post_ids():
    page = ListPage(
        permalink="/blog",
        page_number=1,
        posts_per_page=10,
        total_pages=1,
        total_count=3,
        post_ids=["a", "b", "c"],
    )

    assert page.metadata_dict() == {
        "permalink": "/blog",
        "pageNumber": 1,
        "postsPerPage": 10,
        "totalPages": 1,
        "totalCount": 3,
        "previousPageLink": None,
        "nextPageLink": None,
    }


def test_format_iso_utc():
    assert format_iso_utc(datetime(2024, 1, 2, 3, 4, 5, tzinfo=UTC)) == "2024-01-02T03:04:05Z"
    assert format_iso_utc(datetime(2024, 1, 2, 3, 4, 5)) == "2024-01-02T03:04:05Z"
    offset = timezone(timedelta(hours=2))
    assert format_iso_utc(datetime(2024, 1, 2, 5, 0, tzinfo=offset)) == "2024-01-02T03:00:00Z"
