"""Block renderer: typed Notion blocks to an HTML fragment."""

from notion_cms.render.policy import RenderPolicy
from notion_cms.render.renderer import render, render_block, render_blocks
from notion_cms.render.report import BlockResult, IssueKind, RenderIssue, RenderResult
from notion_cms.render.rich_text import plain_text, render_rich_text
from notion_cms.render.sanitize import is_safe_url, safe_url
from notion_cms.render.slug import slugify

__all__ = [
    "BlockResult",
    "IssueKind",
    "is_safe_url",
    "plain_text",
    "render",
    "render_block",
    "render_blocks",
    "render_rich_text",
    "RenderIssue",
    "RenderPolicy",
    "RenderResult",
    "safe_url",
    "slugify",
]
