"""Page-serving service: locate a page, fetch its block tree, render it.

Wires the Block Source, fetch step, renderer, and page type detection into
the three payloads the website consumes: any page by slug or ID, the
configured homepage, and a blog post under the configured blog parent.
"""

import logging

from cachetools import TTLCache
from notion_client.errors import HTTPResponseError, RequestTimeoutError

from notion_cms.config import Settings, get_settings
from notion_cms.models.blocks import Block
from notion_cms.models.page import PageDetail, PageType
from notion_cms.notion.client import get_notion_client
from notion_cms.notion.errors import ContentUnavailable, NotConfigured, PageNotFound
from notion_cms.notion.parse import (
    file_url,
    page_title,
    parse_icon,
    rich_text_property,
    select_property,
)
from notion_cms.notion.source import NotionBlockSource
from notion_cms.notion.tree import fetch_page_blocks
from notion_cms.render import RenderPolicy, plain_text, render_blocks, slugify
from notion_cms.site.page_types import determine_page_type, layout_for

logger = logging.getLogger(__name__)

_title_cache: TTLCache = TTLCache(maxsize=512, ttl=300)  # 5-minute TTL
_slug_cache: TTLCache = TTLCache(maxsize=1, ttl=300)
_SLUG_CACHE_KEY = "slug_index"
_SEARCH_PAGE_SIZE = 100


async def get_block_source() -> NotionBlockSource:
    """Build a Block Source over the cached Notion client."""
    client = await get_notion_client()
    return NotionBlockSource(
        client,
        safety_cap=get_settings().children_safety_cap,
        title_cache=_title_cache,
    )


def invalidate_caches() -> None:
    """Clear page title and slug caches. Used for testing."""
    _title_cache.clear()
    _slug_cache.clear()


def extract_description(blocks: list[Block], max_chars: int) -> str:
    """Plain text of the first non-empty paragraph, truncated with '...'."""
    for block in blocks:
        if block.kind != "paragraph":
            continue
        text = plain_text(block.rich_text).strip()
        if text:
            return text if len(text) <= max_chars else text[:max_chars].rstrip() + "..."
    return ""


def page_icon(page: dict) -> str | None:
    icon = parse_icon(page.get("icon"))
    if icon is None:
        return None
    return icon.emoji or icon.url


def page_cover(page: dict) -> str | None:
    return file_url(page.get("cover"))


async def _slug_index(source: NotionBlockSource) -> dict[str, str]:
    """Map title slugs to page IDs for every page the integration can see.

    First match wins on slug collisions. Cached for 5 minutes.
    """
    cached = _slug_cache.get(_SLUG_CACHE_KEY)
    if cached is not None:
        return cached

    settings = get_settings()
    index: dict[str, str] = {}
    seen = 0
    cursor: str | None = None
    while True:
        kwargs: dict = {
            "filter": {"property": "object", "value": "page"},
            "page_size": _SEARCH_PAGE_SIZE,
        }
        if cursor:
            kwargs["start_cursor"] = cursor
        response = await source.client.search(**kwargs)
        for page in response.get("results", []):
            index.setdefault(slugify(page_title(page)), page["id"])
        seen += len(response.get("results", []))
        if not response.get("has_more") or seen >= settings.children_safety_cap:
            break
        cursor = response.get("next_cursor")

    _slug_cache[_SLUG_CACHE_KEY] = index
    return index


async def _render_page(
    source: NotionBlockSource,
    settings: Settings,
    page_id: str,
    page: dict,
    *,
    title: str,
    slug: str,
    page_type: PageType,
    url: str | None = None,
) -> PageDetail:
    blocks = await fetch_page_blocks(
        source,
        page_id,
        concurrency=settings.fetch_concurrency,
        max_depth=settings.max_render_depth,
    )
    result = render_blocks(blocks, RenderPolicy.from_settings(settings))
    if result.issues:
        logger.info(
            "Rendered page %s with %d degraded blocks",
            page_id,
            len(result.issues),
            extra={"issues": [issue.model_dump(mode="json") for issue in result.issues]},
        )

    return PageDetail(
        id=page_id,
        title=title,
        slug=slug,
        content=result.html,
        description=extract_description(blocks, settings.description_max_chars),
        icon=page_icon(page),
        cover=page_cover(page),
        status=select_property(page, "Status") or "Published",
        meta_title=rich_text_property(page, "Meta Title") or title,
        meta_description=rich_text_property(page, "Meta Description"),
        created_time=page.get("created_time"),
        last_edited_time=page.get("last_edited_time"),
        url=url,
        page_type=page_type,
        layout=layout_for(page_type),
    )


async def get_page_detail(slug: str | None = None, page_id: str | None = None) -> PageDetail:
    """Fetch any page by ID, or by title slug, and render it.

    Raises PageNotFound when no visible page has the slug. Notion API errors
    propagate to the caller.
    """
    settings = get_settings()
    source = await get_block_source()

    if not page_id:
        if not slug:
            raise PageNotFound("Page slug or ID is required")
        page_id = (await _slug_index(source)).get(slug)
        if page_id is None:
            raise PageNotFound(f"No page with slug {slug!r}")

    page = await source.retrieve_page(page_id)
    title = page_title(page)
    page_type = await determine_page_type(source, settings, page_id, page)
    return await _render_page(
        source,
        settings,
        page_id,
        page,
        title=title,
        slug=slug or slugify(title),
        page_type=page_type,
    )


async def get_homepage(preview: str | None = None) -> PageDetail:
    """Render the configured homepage.

    Draft homepages are only served when ``preview`` matches the configured
    preview secret; otherwise ContentUnavailable is raised.
    """
    settings = get_settings()
    if not settings.notion_homepage_id:
        raise NotConfigured("NOTION_HOMEPAGE_ID environment variable not set")
    source = await get_block_source()

    page_id = settings.notion_homepage_id
    page = await source.retrieve_page(page_id)
    is_preview = bool(settings.preview_secret and preview == settings.preview_secret)
    if select_property(page, "Status") == "Draft" and not is_preview:
        raise ContentUnavailable("Homepage is currently in draft mode")

    title = page_title(page, default="Home")
    return await _render_page(
        source,
        settings,
        page_id,
        page,
        title=title,
        slug=slugify(title),
        page_type=PageType.LANDING,
    )


async def get_blog_post(slug: str) -> PageDetail:
    """Render the blog post whose slug matches, under the blog parent page.

    A post's custom ``Slug`` property wins over its title slug; a post with a
    custom slug is matched only on that. Posts that fail to load are skipped.
    """
    settings = get_settings()
    if not settings.notion_blog_page_id:
        raise NotConfigured("NOTION_BLOG_PAGE_ID environment variable not set")
    source = await get_block_source()

    children = await source.list_children(settings.notion_blog_page_id)
    for child in children:
        if child.kind != "child_page":
            continue
        try:
            page = await source.retrieve_page(child.id)
        except (HTTPResponseError, RequestTimeoutError) as exc:
            logger.warning("Skipping blog post %s: %s", child.id, exc)
            continue

        title = page_title(page, default="Untitled Post")
        custom_slug = rich_text_property(page, "Slug")
        resolved = custom_slug or slugify(title)
        if resolved != slug:
            continue

        return await _render_page(
            source,
            settings,
            child.id,
            page,
            title=title,
            slug=resolved,
            page_type=PageType.BLOG,
            url=f"/blog/{resolved}",
        )

    raise PageNotFound(f"No blog post with slug {slug!r}")
