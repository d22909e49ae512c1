"""Fetch step: attach children to container blocks and resolve page links.

This is the I/O half of rendering. It walks a block sequence, fetches the
children of every container kind (recursively), and resolves link_to_page
titles, producing a fully populated tree for the pure renderer.

Sibling fetches run concurrently under a semaphore; ``asyncio.gather``
returns results in submission order, so document order is preserved.
A failed fetch is attached to its block as ``children_error`` and never
propagates.
"""

import asyncio
import logging
from typing import Protocol

from notion_cms.models.blocks import Block
from notion_cms.notion.models import PageRef

logger = logging.getLogger(__name__)

CONTAINER_KINDS = frozenset(
    {
        "toggle",
        "table",
        "column_list",
        "column",
        "synced_block",
        "bulleted_list_item",
        "numbered_list_item",
        "quote",
        "callout",
    }
)


class BlockSource(Protocol):
    async def list_children(self, block_id: str) -> list[Block]: ...

    async def resolve_page(self, page_id: str) -> PageRef: ...


def _children_source_id(block: Block) -> str | None:
    """ID whose children this block displays, or None if nothing to fetch."""
    if block.kind not in CONTAINER_KINDS:
        return None
    if block.kind == "synced_block" and block.synced_from:
        return block.synced_from
    return block.id if block.has_children else None


class _TreeFetcher:
    def __init__(self, source: BlockSource, concurrency: int, max_depth: int) -> None:
        self.source = source
        self.max_depth = max_depth
        self._semaphore = asyncio.Semaphore(max(concurrency, 1))

    async def attach(self, blocks: list[Block], depth: int) -> list[Block]:
        return list(await asyncio.gather(*(self._expand(block, depth) for block in blocks)))

    async def _expand(self, block: Block, depth: int) -> Block:
        if block.kind == "link_to_page":
            return await self._resolve_link(block)

        source_id = _children_source_id(block)
        if source_id is None:
            return block
        if depth >= self.max_depth:
            logger.warning("Max depth %d reached at block %s", self.max_depth, block.id)
            return block.with_children([], error="maximum nesting depth reached")

        try:
            async with self._semaphore:
                children = await self.source.list_children(source_id)
        except Exception as exc:
            # SourceUnavailable, or an httpx transport error notion-client leaves unwrapped
            logger.warning("Child fetch failed for %s block %s: %s", block.kind, block.id, exc)
            return block.with_children([], error=str(exc) or type(exc).__name__)

        return block.with_children(await self.attach(children, depth + 1))

    async def _resolve_link(self, block: Block) -> Block:
        if not block.target_id:
            return block
        try:
            async with self._semaphore:
                ref = await self.source.resolve_page(block.target_id)
        except Exception as exc:
            logger.warning("Broken link_to_page %s: %s", block.id, exc)
            return block
        return block.model_copy(update={"resolved_title": ref.title})


async def fetch_tree(
    source: BlockSource,
    blocks: list[Block],
    concurrency: int = 8,
    max_depth: int = 8,
) -> list[Block]:
    """Return ``blocks`` with container children and link titles attached."""
    return await _TreeFetcher(source, concurrency, max_depth).attach(blocks, depth=0)


async def fetch_page_blocks(
    source: BlockSource,
    page_id: str,
    concurrency: int = 8,
    max_depth: int = 8,
) -> list[Block]:
    """Fetch a page's top-level blocks and their full child tree.

    Unlike nested fetches, failure to list the page's own blocks is not
    recoverable and raises SourceUnavailable.
    """
    blocks = await source.list_children(page_id)
    return await fetch_tree(source, blocks, concurrency=concurrency, max_depth=max_depth)
