"""Tests for the page-serving service (mocked Block Source)."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from notion_client.errors import APIResponseError

from notion_cms.config import Settings
from notion_cms.models.blocks import ChildPageBlock, TextBlock, UnsupportedBlock
from notion_cms.models.page import PageType
from notion_cms.models.rich_text import RichTextSpan
from notion_cms.notion.errors import ContentUnavailable, NotConfigured, PageNotFound
from notion_cms.site.service import (
    extract_description,
    get_blog_post,
    get_homepage,
    get_page_detail,
    invalidate_caches,
    page_cover,
    page_icon,
)


@pytest.fixture(autouse=True)
def _clear_caches():
    invalidate_caches()
    yield
    invalidate_caches()


def _settings(**overrides) -> Settings:
    return Settings(_env_file=None, notion_token="secret", **overrides)


def _para(text: str, block_id: str = "") -> TextBlock:
    return TextBlock(kind="paragraph", id=block_id, rich_text=[RichTextSpan(plain_text=text)])


def _page(page_id: str, title: str, **properties) -> dict:
    props = {"title": {"title": [{"plain_text": title}]}}
    props.update(properties)
    return {
        "id": page_id,
        "parent": {"type": "workspace", "workspace": True},
        "properties": props,
        "icon": {"type": "emoji", "emoji": "🏠"},
        "cover": None,
        "created_time": "2026-01-01T00:00:00.000Z",
        "last_edited_time": "2026-02-01T00:00:00.000Z",
    }


def _status(name: str) -> dict:
    return {"select": {"name": name}}


def _text_prop(value: str) -> dict:
    return {"rich_text": [{"plain_text": value}]}


def _source(pages: dict[str, dict], children: dict[str, list]) -> MagicMock:
    source = MagicMock()

    async def retrieve(page_id):
        if page_id not in pages:
            error = APIResponseError.__new__(APIResponseError)
            error.status = 404
            error.code = "object_not_found"
            raise error
        return pages[page_id]

    async def list_children(block_id):
        return children.get(block_id, [])

    source.retrieve_page = AsyncMock(side_effect=retrieve)
    source.list_children = AsyncMock(side_effect=list_children)
    source.client.search = AsyncMock()
    return source


def _patches(source: MagicMock, settings: Settings):
    return (
        patch("notion_cms.site.service.get_block_source", new_callable=AsyncMock, return_value=source),
        patch("notion_cms.site.service.get_settings", return_value=settings),
    )


# --- helpers ---


def test_extract_description_first_non_empty_paragraph():
    heading = TextBlock(kind="heading_1", rich_text=[RichTextSpan(plain_text="Title")])
    blocks = [heading, _para("   "), _para("First words."), _para("Second.")]
    assert extract_description(blocks, 200) == "First words."


def test_extract_description_truncates_with_ellipsis():
    assert extract_description([_para("abcdefghij")], 5) == "abcde..."
    assert extract_description([_para("abcde")], 5) == "abcde"


def test_extract_description_empty():
    assert extract_description([], 200) == ""


def test_page_icon_and_cover():
    page = {
        "icon": {"type": "emoji", "emoji": "🚀"},
        "cover": {"type": "external", "external": {"url": "https://x.test/c.png"}},
    }
    assert page_icon(page) == "🚀"
    assert page_cover(page) == "https://x.test/c.png"
    assert page_icon({}) is None
    assert page_cover({}) is None


# --- get_page_detail ---


async def test_get_page_detail_by_id():
    source = _source(
        {"p1": _page("p1", "About Us", **{"Meta Description": _text_prop("About the team")})},
        {"p1": [_para("Welcome to the team.")]},
    )
    get_source, get_settings = _patches(source, _settings())
    with get_source, get_settings:
        detail = await get_page_detail(page_id="p1")

    assert detail.id == "p1"
    assert detail.title == "About Us"
    assert detail.slug == "about-us"
    assert detail.content == '<p class="notion-paragraph">Welcome to the team.</p>'
    assert detail.description == "Welcome to the team."
    assert detail.icon == "🏠"
    assert detail.meta_title == "About Us"
    assert detail.meta_description == "About the team"
    assert detail.status == "Published"
    assert detail.page_type == PageType.LANDING
    assert detail.layout.layout == "full-width"


async def test_get_page_detail_by_slug_uses_search_index():
    source = _source({"p2": _page("p2", "Pricing")}, {"p2": [_para("Plans")]})
    source.client.search.return_value = {
        "results": [_page("p1", "About"), _page("p2", "Pricing")],
        "has_more": False,
    }
    get_source, get_settings = _patches(source, _settings())
    with get_source, get_settings:
        detail = await get_page_detail(slug="pricing")
        await get_page_detail(slug="pricing")

    assert detail.id == "p2"
    assert detail.slug == "pricing"
    source.client.search.assert_called_once()


async def test_get_page_detail_unknown_slug():
    source = _source({}, {})
    source.client.search.return_value = {"results": [], "has_more": False}
    get_source, get_settings = _patches(source, _settings())
    with get_source, get_settings, pytest.raises(PageNotFound):
        await get_page_detail(slug="nope")


async def test_get_page_detail_missing_page_propagates():
    source = _source({}, {})
    get_source, get_settings = _patches(source, _settings())
    with get_source, get_settings, pytest.raises(APIResponseError):
        await get_page_detail(page_id="gone")


async def test_get_page_detail_blog_child_type():
    blog_id = "blog-parent"
    page = _page("post", "Hello")
    page["parent"] = {"type": "page_id", "page_id": blog_id}
    source = _source({"post": page}, {"post": [_para("Hi")]})
    get_source, get_settings = _patches(source, _settings(notion_blog_page_id=blog_id))
    with get_source, get_settings:
        detail = await get_page_detail(page_id="post")
    assert detail.page_type == PageType.BLOG
    assert detail.layout.show_date


async def test_get_page_detail_degraded_blocks_still_render():
    source = _source(
        {"p1": _page("p1", "Mixed")},
        {"p1": [_para("Kept"), UnsupportedBlock(id="u1", notion_type="ai_block")]},
    )
    get_source, get_settings = _patches(source, _settings())
    with get_source, get_settings:
        detail = await get_page_detail(page_id="p1")
    assert detail.content == (
        '<p class="notion-paragraph">Kept</p><!-- Unsupported block type: ai_block -->'
    )


# --- get_homepage ---


async def test_get_homepage_not_configured():
    get_source, get_settings = _patches(_source({}, {}), _settings())
    with get_source, get_settings, pytest.raises(NotConfigured):
        await get_homepage()


async def test_get_homepage_published():
    source = _source({"home": _page("home", "")}, {"home": [_para("Hero")]})
    get_source, get_settings = _patches(source, _settings(notion_homepage_id="home"))
    with get_source, get_settings:
        detail = await get_homepage()
    assert detail.title == "Home"
    assert detail.slug == "home"
    assert detail.page_type == PageType.LANDING


async def test_get_homepage_draft_hidden_without_preview():
    source = _source({"home": _page("home", "Home", Status=_status("Draft"))}, {})
    get_source, get_settings = _patches(
        source, _settings(notion_homepage_id="home", preview_secret="let-me-in")
    )
    with get_source, get_settings, pytest.raises(ContentUnavailable):
        await get_homepage(preview="wrong")


async def test_get_homepage_draft_served_with_preview_secret():
    source = _source({"home": _page("home", "Home", Status=_status("Draft"))}, {"home": []})
    get_source, get_settings = _patches(
        source, _settings(notion_homepage_id="home", preview_secret="let-me-in")
    )
    with get_source, get_settings:
        detail = await get_homepage(preview="let-me-in")
    assert detail.status == "Draft"
    assert detail.content == ""


# --- get_blog_post ---


async def test_get_blog_post_matches_title_slug():
    source = _source(
        {"p1": _page("p1", "First Post"), "p2": _page("p2", "Second Post")},
        {
            "blog": [
                ChildPageBlock(kind="child_page", id="p1", title="First Post"),
                _para("not a post"),
                ChildPageBlock(kind="child_page", id="p2", title="Second Post"),
            ],
            "p2": [_para("Body")],
        },
    )
    get_source, get_settings = _patches(source, _settings(notion_blog_page_id="blog"))
    with get_source, get_settings:
        detail = await get_blog_post("second-post")

    assert detail.id == "p2"
    assert detail.url == "/blog/second-post"
    assert detail.page_type == PageType.BLOG
    assert detail.layout.layout == "article"


async def test_get_blog_post_custom_slug_wins():
    source = _source(
        {"p1": _page("p1", "Long Title", Slug=_text_prop("short"))},
        {"blog": [ChildPageBlock(kind="child_page", id="p1", title="Long Title")], "p1": []},
    )
    get_source, get_settings = _patches(source, _settings(notion_blog_page_id="blog"))
    with get_source, get_settings:
        detail = await get_blog_post("short")
        with pytest.raises(PageNotFound):
            await get_blog_post("long-title")
    assert detail.slug == "short"


async def test_get_blog_post_skips_unreadable_posts():
    source = _source(
        {"ok": _page("ok", "Hello")},
        {
            "blog": [
                ChildPageBlock(kind="child_page", id="broken", title="Hello"),
                ChildPageBlock(kind="child_page", id="ok", title="Hello"),
            ],
            "ok": [],
        },
    )
    get_source, get_settings = _patches(source, _settings(notion_blog_page_id="blog"))
    with get_source, get_settings:
        detail = await get_blog_post("hello")
    assert detail.id == "ok"


async def test_get_blog_post_not_configured():
    get_source, get_settings = _patches(_source({}, {}), _settings())
    with get_source, get_settings, pytest.raises(NotConfigured):
        await get_blog_post("anything")
