"""Notion access: client, JSON mapping, Block Source, and tree fetching."""

from notion_cms.notion.client import get_notion_client, reset_client
from notion_cms.notion.errors import (
    ContentUnavailable,
    NotConfigured,
    NotionCMSError,
    PageNotFound,
    SourceUnavailable,
    UnresolvedReference,
)
from notion_cms.notion.models import PageRef
from notion_cms.notion.parse import page_title, parse_block, parse_blocks, parse_rich_text
from notion_cms.notion.source import NotionBlockSource
from notion_cms.notion.tree import BlockSource, fetch_page_blocks, fetch_tree

__all__ = [
    "BlockSource",
    "ContentUnavailable",
    "fetch_page_blocks",
    "fetch_tree",
    "get_notion_client",
    "NotConfigured",
    "NotionBlockSource",
    "NotionCMSError",
    "page_title",
    "PageNotFound",
    "PageRef",
    "parse_block",
    "parse_blocks",
    "parse_rich_text",
    "reset_client",
    "SourceUnavailable",
    "UnresolvedReference",
]
