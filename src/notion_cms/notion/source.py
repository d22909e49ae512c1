"""Block Source: paginated child listing and page resolution over the Notion API.

Transient Notion failures (rate limits, 5xx, timeouts) are retried with
tenacity. Anything still failing surfaces as SourceUnavailable or
UnresolvedReference so the fetch step can degrade one block at a time.
"""

import logging

from cachetools import TTLCache
from notion_client import AsyncClient
from notion_client.errors import HTTPResponseError, RequestTimeoutError
from tenacity import (
    before_sleep_log,
    retry,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential_jitter,
)

from notion_cms.models.blocks import Block
from notion_cms.notion.errors import SourceUnavailable, UnresolvedReference
from notion_cms.notion.models import PageRef
from notion_cms.notion.parse import page_title, parse_blocks

logger = logging.getLogger(__name__)

_PAGE_SIZE = 100
_NOTION_ERRORS = (HTTPResponseError, RequestTimeoutError)


def _is_retryable(error: BaseException) -> bool:
    """Determine if a Notion API error is transient and worth retrying.

    Returns True for timeouts, rate limits (429), and server errors (5xx).
    Returns False for permanent client errors (400, 401, 403, 404).
    """
    if isinstance(error, RequestTimeoutError):
        return True
    if isinstance(error, HTTPResponseError):
        return error.status == 429 or error.status >= 500
    return False


_notion_retry = retry(
    retry=retry_if_exception(_is_retryable),
    wait=wait_exponential_jitter(initial=1, max=10, jitter=1),
    stop=stop_after_attempt(4),
    before_sleep=before_sleep_log(logger, logging.WARNING),
    reraise=True,
)


@_notion_retry
async def _list_children_page(
    client: AsyncClient, block_id: str, start_cursor: str | None
) -> dict:
    kwargs: dict = {"block_id": block_id, "page_size": _PAGE_SIZE}
    if start_cursor:
        kwargs["start_cursor"] = start_cursor
    return await client.blocks.children.list(**kwargs)


@_notion_retry
async def _retrieve_page(client: AsyncClient, page_id: str) -> dict:
    return await client.pages.retrieve(page_id=page_id)


class NotionBlockSource:
    """Reads block children and page titles for one Notion integration."""

    def __init__(
        self,
        client: AsyncClient,
        safety_cap: int = 500,
        title_cache: TTLCache | None = None,
    ) -> None:
        self.client = client
        self.safety_cap = safety_cap
        self._titles = title_cache if title_cache is not None else TTLCache(maxsize=256, ttl=300)

    async def list_children_raw(self, block_id: str) -> list[dict]:
        """Return all immediate children of a block as raw Notion JSON.

        Follows ``next_cursor`` until ``has_more`` is false, stopping once
        ``safety_cap`` items have accumulated. Raises SourceUnavailable on
        any Notion failure.
        """
        results: list[dict] = []
        cursor: str | None = None
        try:
            while True:
                response = await _list_children_page(self.client, block_id, cursor)
                results.extend(response.get("results", []))
                if not response.get("has_more"):
                    break
                if len(results) >= self.safety_cap:
                    logger.warning(
                        "Child listing for %s stopped at safety cap (%d)",
                        block_id,
                        self.safety_cap,
                    )
                    break
                cursor = response.get("next_cursor")
        except _NOTION_ERRORS as exc:
            raise SourceUnavailable(block_id, str(exc)) from exc
        return results[: self.safety_cap]

    async def list_children(self, block_id: str) -> list[Block]:
        """Return all immediate children of a block, parsed into models."""
        return parse_blocks(await self.list_children_raw(block_id))

    async def retrieve_page(self, page_id: str) -> dict:
        """Return the raw page object. Notion errors propagate to the caller."""
        return await _retrieve_page(self.client, page_id)

    async def resolve_page(self, page_id: str) -> PageRef:
        """Resolve a page ID to its title. Raises UnresolvedReference on failure."""
        cached = self._titles.get(page_id)
        if cached is not None:
            return cached
        try:
            page = await _retrieve_page(self.client, page_id)
        except _NOTION_ERRORS as exc:
            raise UnresolvedReference(page_id, str(exc)) from exc
        ref = PageRef(id=page_id, title=page_title(page))
        self._titles[page_id] = ref
        return ref
