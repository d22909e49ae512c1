"""Pure functions mapping Notion API JSON to block and rich text models.

Notion block objects look like ``{"id", "type", "has_children", <type>: {...}}``
where the payload key repeats the type name. Unknown types map to
UnsupportedBlock rather than failing.
"""

from collections.abc import Callable

from notion_cms.models.blocks import (
    Block,
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
from notion_cms.models.rich_text import (
    Annotations,
    DateMention,
    InlineEquation,
    PageMention,
    RichTextSpan,
    UserMention,
)


def file_url(payload: dict | None) -> str | None:
    """URL of a Notion file object (hosted ``file`` or ``external``)."""
    if not payload:
        return None
    for key in ("file", "external"):
        url = (payload.get(key) or {}).get("url")
        if url:
            return url
    return None


def parse_icon(raw: dict | None) -> Icon | None:
    """Map a page/callout icon to an emoji or image URL."""
    if not raw:
        return None
    icon_type = raw.get("type")
    if icon_type == "emoji":
        return Icon(emoji=raw.get("emoji"))
    if icon_type == "custom_emoji":
        return Icon(url=(raw.get("custom_emoji") or {}).get("url"))
    url = file_url(raw)
    return Icon(url=url) if url else None


def _parse_special(raw: dict, text: str):
    span_type = raw.get("type")
    if span_type == "equation":
        return InlineEquation(expression=(raw.get("equation") or {}).get("expression", ""))
    if span_type != "mention":
        return None

    mention = raw.get("mention") or {}
    mention_type = mention.get("type")
    if mention_type == "user":
        name = (mention.get("user") or {}).get("name") or text.lstrip("@")
        return UserMention(name=name)
    if mention_type == "date":
        date = mention.get("date") or {}
        if not date.get("start"):
            return None
        return DateMention(start=date["start"], end=date.get("end"))
    if mention_type == "page":
        return PageMention(page_id=(mention.get("page") or {}).get("id", ""))
    # database, link_preview, template mentions render as their plain text
    return None


def parse_span(raw: dict) -> RichTextSpan:
    """Map one Notion rich text object to a RichTextSpan."""
    text_payload = raw.get("text") or {}
    text = raw.get("plain_text")
    if text is None:
        text = text_payload.get("content", "")
    annotations = raw.get("annotations") or {}
    color = annotations.get("color")
    href = raw.get("href") or (text_payload.get("link") or {}).get("url")
    return RichTextSpan(
        plain_text=text,
        annotations=Annotations(
            bold=bool(annotations.get("bold")),
            italic=bool(annotations.get("italic")),
            strikethrough=bool(annotations.get("strikethrough")),
            underline=bool(annotations.get("underline")),
            code=bool(annotations.get("code")),
        ),
        color=None if color in (None, "default") else color,
        href=href,
        special=_parse_special(raw, text),
    )


def parse_rich_text(raw: list[dict] | None) -> list[RichTextSpan]:
    return [parse_span(item) for item in raw or []]


# --- Per-kind payload parsers: (kind, payload, base fields) -> Block ---


def _text(kind: str, payload: dict, base: dict) -> Block:
    color = payload.get("color")
    return TextBlock(
        kind=kind,
        rich_text=parse_rich_text(payload.get("rich_text")),
        color=None if color in (None, "default") else color,
        **base,
    )


def _to_do(kind: str, payload: dict, base: dict) -> Block:
    return ToDoBlock(
        rich_text=parse_rich_text(payload.get("rich_text")),
        checked=bool(payload.get("checked")),
        **base,
    )


def _callout(kind: str, payload: dict, base: dict) -> Block:
    return CalloutBlock(
        rich_text=parse_rich_text(payload.get("rich_text")),
        icon=parse_icon(payload.get("icon")),
        color=payload.get("color") or "default",
        **base,
    )


def _code(kind: str, payload: dict, base: dict) -> Block:
    return CodeBlock(
        rich_text=parse_rich_text(payload.get("rich_text")),
        language=payload.get("language") or "text",
        caption=parse_rich_text(payload.get("caption")),
        **base,
    )


def _media(kind: str, payload: dict, base: dict) -> Block:
    return MediaBlock(
        kind=kind,
        url=file_url(payload),
        caption=parse_rich_text(payload.get("caption")),
        name=payload.get("name"),
        **base,
    )


def _link(kind: str, payload: dict, base: dict) -> Block:
    return LinkBlock(
        kind=kind,
        url=payload.get("url"),
        caption=parse_rich_text(payload.get("caption")),
        **base,
    )


def _table(kind: str, payload: dict, base: dict) -> Block:
    return TableBlock(
        table_width=payload.get("table_width") or 0,
        has_column_header=bool(payload.get("has_column_header")),
        has_row_header=bool(payload.get("has_row_header")),
        **base,
    )


def _table_row(kind: str, payload: dict, base: dict) -> Block:
    return TableRowBlock(
        cells=[parse_rich_text(cell) for cell in payload.get("cells") or []],
        **base,
    )


def _child_page(kind: str, payload: dict, base: dict) -> Block:
    return ChildPageBlock(kind=kind, title=payload.get("title") or "", **base)


def _link_to_page(kind: str, payload: dict, base: dict) -> Block:
    return LinkToPageBlock(
        target_id=payload.get("page_id") or payload.get("database_id"),
        **base,
    )


def _equation(kind: str, payload: dict, base: dict) -> Block:
    return EquationBlock(expression=payload.get("expression") or "", **base)


def _synced_block(kind: str, payload: dict, base: dict) -> Block:
    synced_from = payload.get("synced_from") or {}
    return SyncedBlock(synced_from=synced_from.get("block_id"), **base)


def _layout(kind: str, payload: dict, base: dict) -> Block:
    return LayoutBlock(kind=kind, **base)


_PARSERS: dict[str, Callable[[str, dict, dict], Block]] = {
    "paragraph": _text,
    "heading_1": _text,
    "heading_2": _text,
    "heading_3": _text,
    "bulleted_list_item": _text,
    "numbered_list_item": _text,
    "quote": _text,
    "toggle": _text,
    "template": _text,
    "to_do": _to_do,
    "callout": _callout,
    "code": _code,
    "image": _media,
    "video": _media,
    "audio": _media,
    "file": _media,
    "pdf": _media,
    "embed": _link,
    "bookmark": _link,
    "link_preview": _link,
    "table": _table,
    "table_row": _table_row,
    "child_page": _child_page,
    "child_database": _child_page,
    "link_to_page": _link_to_page,
    "equation": _equation,
    "synced_block": _synced_block,
    "divider": _layout,
    "table_of_contents": _layout,
    "breadcrumb": _layout,
    "column_list": _layout,
    "column": _layout,
}


def parse_block(raw: dict) -> Block:
    """Map one Notion block object to its typed model."""
    kind = raw.get("type") or ""
    base = {"id": raw.get("id") or "", "has_children": bool(raw.get("has_children"))}
    parser = _PARSERS.get(kind)
    if parser is None:
        return UnsupportedBlock(notion_type=kind, **base)
    return parser(kind, raw.get(kind) or {}, base)


def parse_blocks(raw: list[dict]) -> list[Block]:
    return [parse_block(item) for item in raw]


def page_title(page: dict, default: str = "Untitled") -> str:
    """Title of a Notion page object, joining all title segments.

    Looks at the ``title``/``Title``/``Name``/``name`` properties in that
    order; database-style pages may use any of them.
    """
    properties = page.get("properties") or {}
    for key in ("title", "Title", "Name", "name"):
        prop = properties.get(key)
        if prop and isinstance(prop.get("title"), list):
            title = "".join(item.get("plain_text") or "" for item in prop["title"]).strip()
            if title:
                return title
    return default


def rich_text_property(page: dict, name: str) -> str:
    """First plain text segment of a rich_text property, or ''."""
    items = ((page.get("properties") or {}).get(name) or {}).get("rich_text") or []
    return items[0].get("plain_text", "") if items else ""


def select_property(page: dict, name: str) -> str | None:
    select = ((page.get("properties") or {}).get(name) or {}).get("select")
    return select.get("name") if select else None
