"""Block models: a tagged union discriminated by ``kind``.

Kind values use Notion's own type names. Each model carries only the payload
its kind needs; unrecognized Notion types become ``UnsupportedBlock``.
Children are attached by the fetch step via ``with_children`` and are never
mutated in place.
"""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from notion_cms.models.rich_text import RichTextSpan

LIST_ITEM_KINDS = frozenset({"bulleted_list_item", "numbered_list_item"})


class BlockBase(BaseModel):
    """Fields shared by every block kind."""

    model_config = ConfigDict(frozen=True)

    id: str = ""
    has_children: bool = False
    children: list["Block"] = Field(default_factory=list)
    children_error: str | None = None  # set when the child fetch failed

    def with_children(self, children: list["Block"], error: str | None = None):
        """Return a copy carrying fetched children (or the fetch error)."""
        return self.model_copy(update={"children": children, "children_error": error})


class TextBlock(BlockBase):
    kind: Literal[
        "paragraph",
        "heading_1",
        "heading_2",
        "heading_3",
        "bulleted_list_item",
        "numbered_list_item",
        "quote",
        "toggle",
        "template",
    ]
    rich_text: list[RichTextSpan] = Field(default_factory=list)
    color: str | None = None


class ToDoBlock(BlockBase):
    kind: Literal["to_do"] = "to_do"
    rich_text: list[RichTextSpan] = Field(default_factory=list)
    checked: bool = False


class Icon(BaseModel):
    """Callout/page icon: either an emoji or an image URL."""

    model_config = ConfigDict(frozen=True)

    emoji: str | None = None
    url: str | None = None


class CalloutBlock(BlockBase):
    kind: Literal["callout"] = "callout"
    rich_text: list[RichTextSpan] = Field(default_factory=list)
    icon: Icon | None = None
    color: str = "default"


class CodeBlock(BlockBase):
    kind: Literal["code"] = "code"
    rich_text: list[RichTextSpan] = Field(default_factory=list)
    language: str = "text"
    caption: list[RichTextSpan] = Field(default_factory=list)


class MediaBlock(BlockBase):
    kind: Literal["image", "video", "audio", "file", "pdf"]
    url: str | None = None
    caption: list[RichTextSpan] = Field(default_factory=list)
    name: str | None = None  # file blocks only carry a display name


class LinkBlock(BlockBase):
    kind: Literal["embed", "bookmark", "link_preview"]
    url: str | None = None
    caption: list[RichTextSpan] = Field(default_factory=list)


class TableBlock(BlockBase):
    kind: Literal["table"] = "table"
    table_width: int = 0
    has_column_header: bool = False
    has_row_header: bool = False


class TableRowBlock(BlockBase):
    kind: Literal["table_row"] = "table_row"
    cells: list[list[RichTextSpan]] = Field(default_factory=list)


class ChildPageBlock(BlockBase):
    kind: Literal["child_page", "child_database"]
    title: str = ""


class LinkToPageBlock(BlockBase):
    kind: Literal["link_to_page"] = "link_to_page"
    target_id: str | None = None
    resolved_title: str | None = None  # filled in by the fetch step


class EquationBlock(BlockBase):
    kind: Literal["equation"] = "equation"
    expression: str = ""


class SyncedBlock(BlockBase):
    kind: Literal["synced_block"] = "synced_block"
    synced_from: str | None = None  # None for the original synced block


class LayoutBlock(BlockBase):
    """Payload-free blocks: markers and pure layout containers."""

    kind: Literal["divider", "table_of_contents", "breadcrumb", "column_list", "column"]


class UnsupportedBlock(BlockBase):
    kind: Literal["unsupported"] = "unsupported"
    notion_type: str = ""


Block = Annotated[
    Union[
        TextBlock,
        ToDoBlock,
        CalloutBlock,
        CodeBlock,
        MediaBlock,
        LinkBlock,
        TableBlock,
        TableRowBlock,
        ChildPageBlock,
        LinkToPageBlock,
        EquationBlock,
        SyncedBlock,
        LayoutBlock,
        UnsupportedBlock,
    ],
    Field(discriminator="kind"),
]

for _model in (
    BlockBase,
    TextBlock,
    ToDoBlock,
    CalloutBlock,
    CodeBlock,
    MediaBlock,
    LinkBlock,
    TableBlock,
    TableRowBlock,
    ChildPageBlock,
    LinkToPageBlock,
    EquationBlock,
    SyncedBlock,
    LayoutBlock,
    UnsupportedBlock,
):
    _model.model_rebuild()
