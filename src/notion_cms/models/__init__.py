"""Data models for blocks, rich text, and served pages."""

from notion_cms.models.blocks import (
    LIST_ITEM_KINDS,
    Block,
    BlockBase,
    CalloutBlock,
    ChildPageBlock,
    CodeBlock,
    EquationBlock,
    Icon,
    LayoutBlock,
    LinkBlock,
    LinkToPageBlock,
    MediaBlock,
    SyncedBlock,
    TableBlock,
    TableRowBlock,
    TextBlock,
    ToDoBlock,
    UnsupportedBlock,
)
from notion_cms.models.page import LayoutConfig, PageDetail, PageType
from notion_cms.models.rich_text import (
    Annotations,
    DateMention,
    InlineEquation,
    PageMention,
    RichTextSpan,
    UserMention,
)

__all__ = [
    "LIST_ITEM_KINDS",
    "Annotations",
    "Block",
    "BlockBase",
    "CalloutBlock",
    "ChildPageBlock",
    "CodeBlock",
    "DateMention",
    "EquationBlock",
    "Icon",
    "InlineEquation",
    "LayoutBlock",
    "LayoutConfig",
    "LinkBlock",
    "LinkToPageBlock",
    "MediaBlock",
    "PageDetail",
    "PageMention",
    "PageType",
    "RichTextSpan",
    "SyncedBlock",
    "TableBlock",
    "TableRowBlock",
    "TextBlock",
    "ToDoBlock",
    "UnsupportedBlock",
    "UserMention",
]
