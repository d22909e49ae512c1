"""Page-serving endpoints consumed by the static website."""

import logging

from fastapi import APIRouter, HTTPException, Response
from notion_client.errors import HTTPResponseError, RequestTimeoutError

from notion_cms.models.page import PageDetail
from notion_cms.notion.errors import (
    ContentUnavailable,
    NotConfigured,
    NotionCMSError,
    PageNotFound,
)
from notion_cms.site.service import get_blog_post, get_homepage, get_page_detail

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["pages"])

_PAGE_CACHE = "public, max-age=600"
_HOMEPAGE_CACHE = "public, max-age=300"
_FAILURES = (NotionCMSError, HTTPResponseError, RequestTimeoutError)


def _notion_code(exc: BaseException) -> str | None:
    """Notion API error code of ``exc`` or the exception it wraps."""
    for candidate in (exc, exc.__cause__):
        code = getattr(candidate, "code", None)
        if isinstance(code, str):
            return code
    return None


def _http_error(exc: BaseException, what: str) -> HTTPException:
    """Map a lookup/render failure to the status code the frontend expects.

    Missing configuration and bad integration credentials are 503 (the site
    is misconfigured, not the request); missing pages are 404.
    """
    if isinstance(exc, NotConfigured):
        return HTTPException(status_code=503, detail=f"Notion not configured: {exc}")
    if isinstance(exc, ContentUnavailable):
        return HTTPException(status_code=503, detail=f"{what} not available: {exc}")
    if isinstance(exc, PageNotFound):
        return HTTPException(status_code=404, detail=f"{what} not found")

    code = _notion_code(exc)
    if code == "unauthorized":
        return HTTPException(status_code=503, detail="Notion integration not configured properly")
    if code == "object_not_found":
        return HTTPException(status_code=404, detail=f"{what} not found")

    logger.error("Failed to fetch %s: %s", what.lower(), exc, exc_info=exc)
    return HTTPException(status_code=500, detail=f"Failed to fetch {what.lower()}")


@router.get("/page", response_model=PageDetail)
async def page_detail(
    response: Response,
    slug: str | None = None,
    id: str | None = None,
) -> PageDetail:
    """Any Notion page by title slug or page ID."""
    if not slug and not id:
        raise HTTPException(status_code=400, detail="Page slug or ID is required")
    try:
        detail = await get_page_detail(slug=slug, page_id=id)
    except _FAILURES as exc:
        raise _http_error(exc, "Page") from exc
    response.headers["Cache-Control"] = _PAGE_CACHE
    return detail


@router.get("/homepage", response_model=PageDetail)
async def homepage(response: Response, preview: str | None = None) -> PageDetail:
    """The configured homepage; drafts need the preview secret."""
    try:
        detail = await get_homepage(preview=preview)
    except _FAILURES as exc:
        raise _http_error(exc, "Homepage") from exc
    response.headers["Cache-Control"] = _HOMEPAGE_CACHE
    return detail


@router.get("/blog/{slug}", response_model=PageDetail)
async def blog_post(response: Response, slug: str) -> PageDetail:
    """A blog post under the configured blog parent page."""
    try:
        detail = await get_blog_post(slug)
    except _FAILURES as exc:
        raise _http_error(exc, "Blog post") from exc
    response.headers["Cache-Control"] = _PAGE_CACHE
    return detail
