"""Page type detection from the parent page hierarchy.

A page is a blog post, landing page, or docs page depending on which
configured parent (NOTION_BLOG_PAGE_ID, NOTION_LANDING_PAGE_ID,
NOTION_DOCS_PAGE_ID) it lives under. Pages under none of them are landing
pages.
"""

import logging

from notion_client.errors import HTTPResponseError, RequestTimeoutError

from notion_cms.config import Settings
from notion_cms.models.page import LayoutConfig, PageType
from notion_cms.notion.source import NotionBlockSource

logger = logging.getLogger(__name__)

_MAX_PARENT_DEPTH = 10

LAYOUTS: dict[PageType, LayoutConfig] = {
    PageType.BLOG: LayoutConfig(
        layout="article",
        show_date=True,
        show_author=True,
        show_share_buttons=True,
        container_class="container-content",
        content_class="article-content",
    ),
    PageType.LANDING: LayoutConfig(
        layout="full-width",
        container_class="container",
        content_class="landing-content",
    ),
    PageType.DOCS: LayoutConfig(
        layout="sidebar",
        show_date=True,
        show_table_of_contents=True,
        show_sidebar=True,
        show_prev_next=True,
        container_class="container-docs",
        content_class="docs-content",
    ),
}


def normalize_id(notion_id: str | None) -> str | None:
    """Strip hyphens and lower-case so dashed and undashed IDs compare equal."""
    if not notion_id:
        return None
    return notion_id.replace("-", "").lower()


def configured_parents(settings: Settings) -> dict[PageType, str]:
    parents = {
        PageType.BLOG: settings.notion_blog_page_id,
        PageType.LANDING: settings.notion_landing_page_id,
        PageType.DOCS: settings.notion_docs_page_id,
    }
    return {page_type: parent for page_type, parent in parents.items() if parent}


async def is_child_of_page(
    source: NotionBlockSource,
    page_id: str,
    parent_id: str,
    max_depth: int = _MAX_PARENT_DEPTH,
) -> bool:
    """Walk up ``parent.page_id`` links looking for ``parent_id``.

    Stops at the workspace root, a database parent, an inaccessible page, or
    after ``max_depth`` hops.
    """
    target = normalize_id(parent_id)
    current: str | None = page_id
    for _ in range(max_depth):
        if current is None:
            return False
        if normalize_id(current) == target:
            return True
        try:
            page = await source.retrieve_page(current)
        except (HTTPResponseError, RequestTimeoutError):
            return False
        parent = page.get("parent") or {}
        current = parent.get("page_id") if parent.get("type") == "page_id" else None
    return False


async def determine_page_type(
    source: NotionBlockSource,
    settings: Settings,
    page_id: str,
    page: dict | None = None,
) -> PageType:
    """Decide the page type for ``page_id``; ``page`` may be pre-fetched."""
    parents = configured_parents(settings)
    normalized = normalize_id(page_id)

    for page_type, parent_id in parents.items():
        if normalize_id(parent_id) == normalized:
            return page_type

    # Direct parent (page or database) is the cheap check.
    if page is not None:
        parent = page.get("parent") or {}
        direct = parent.get("page_id") or parent.get("database_id")
        for page_type, parent_id in parents.items():
            if direct and normalize_id(parent_id) == normalize_id(direct):
                return page_type

    for page_type, parent_id in parents.items():
        if await is_child_of_page(source, page_id, parent_id):
            return page_type

    logger.debug("Page %s is under no configured parent, using landing", page_id)
    return PageType.LANDING


def layout_for(page_type: PageType) -> LayoutConfig:
    return LAYOUTS.get(page_type, LAYOUTS[PageType.LANDING])
