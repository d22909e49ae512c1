"""Block kind to HTML handlers.

``HANDLERS`` maps every block kind to a function ``(block, ctx) -> str``.
Adding a kind means adding one handler and one table entry. List items are
not dispatched here directly: the sequence renderer groups them first and
calls ``render_list``.
"""

import logging
import re
from collections.abc import Callable
from html import escape

from notion_cms.models.blocks import (
    CalloutBlock,
    ChildPageBlock,
    CodeBlock,
    EquationBlock,
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
from notion_cms.render.context import RenderContext
from notion_cms.render.embeds import video_embed_url
from notion_cms.render.lists import InList
from notion_cms.render.report import IssueKind
from notion_cms.render.rich_text import plain_text
from notion_cms.render.sanitize import safe_url
from notion_cms.render.slug import slugify

logger = logging.getLogger(__name__)

_CSS_TOKEN = re.compile(r"^[a-z0-9_-]+$")
# Notion language names that are not valid class tokens
_LANGUAGE_ALIASES = {"c++": "cpp", "c#": "csharp", "f#": "fsharp"}

Handler = Callable[..., str]


def _css_token(value: str, fallback: str = "default") -> str:
    """Keep user-controlled class fragments to a safe character set."""
    value = value.lower().replace(" ", "-")
    return value if _CSS_TOKEN.match(value) else fallback


def _figcaption(ctx: RenderContext, block) -> str:
    caption = ctx.rich(block.caption, block.id)
    return f"<figcaption>{caption}</figcaption>" if caption else ""


def _checked_url(ctx: RenderContext, block) -> str | None:
    """Sanitized media/link URL, reporting rejected ones."""
    if not block.url:
        return None
    url = safe_url(block.url)
    if url is None:
        ctx.issue(IssueKind.UNSAFE_URL, block.id, block.url)
        return None
    return escape(url)


def _fetched_children(ctx: RenderContext, block) -> str:
    """Render attached children, or report the failed fetch and render nothing."""
    if block.children_error:
        ctx.issue(IssueKind.SOURCE_UNAVAILABLE, block.id, block.children_error)
        return ""
    return ctx.children(block.children)


# --- Text blocks ---


def render_paragraph(block: TextBlock, ctx: RenderContext) -> str:
    if ctx.policy.skip_empty_paragraphs and not plain_text(block.rich_text).strip():
        return ""
    return f'<p class="notion-paragraph">{ctx.rich(block.rich_text, block.id)}</p>'


def render_heading(block: TextBlock, ctx: RenderContext) -> str:
    level = block.kind[-1]
    text = ctx.rich(block.rich_text, block.id)
    anchor = slugify(plain_text(block.rich_text))
    id_attr = f' id="{anchor}"' if anchor else ""
    return f'<h{level}{id_attr} class="notion-h{level}">{text}</h{level}>'


def render_quote(block: TextBlock, ctx: RenderContext) -> str:
    text = ctx.rich(block.rich_text, block.id)
    inner = _fetched_children(ctx, block)
    return f'<blockquote class="notion-quote">{text}{inner}</blockquote>'


def render_template(block: TextBlock, ctx: RenderContext) -> str:
    return f'<div class="notion-template">{ctx.rich(block.rich_text, block.id)}</div>'


def render_to_do(block: ToDoBlock, ctx: RenderContext) -> str:
    text = ctx.rich(block.rich_text, block.id)
    if block.checked:
        box = '<input type="checkbox" checked disabled>'
        label = f'<span class="notion-todo--checked">{text}</span>'
    else:
        box = '<input type="checkbox" disabled>'
        label = f"<span>{text}</span>"
    return f'<div class="notion-todo">{box}{label}</div>'


def render_callout(block: CalloutBlock, ctx: RenderContext) -> str:
    icon_html = ""
    if block.icon is not None:
        if block.icon.emoji:
            icon_html = f'<span class="notion-callout-icon">{escape(block.icon.emoji)}</span>'
        elif block.icon.url:
            src = safe_url(block.icon.url)
            if src is None:
                ctx.issue(IssueKind.UNSAFE_URL, block.id, block.icon.url)
            else:
                icon_html = f'<img class="notion-callout-icon" src="{escape(src)}" alt="">'
    color = _css_token(block.color)
    text = ctx.rich(block.rich_text, block.id)
    return (
        f'<div class="notion-callout notion-callout--{color}">{icon_html}'
        f'<div class="notion-callout-content">{text}{_fetched_children(ctx, block)}</div></div>'
    )


def render_code(block: CodeBlock, ctx: RenderContext) -> str:
    # Only escaping inside code; annotations would corrupt the source text.
    source = escape(plain_text(block.rich_text))
    language = block.language.lower()
    language = _css_token(_LANGUAGE_ALIASES.get(language, language), fallback="text")
    html = f'<pre class="notion-code"><code class="language-{language}">{source}</code></pre>'
    caption = ctx.rich(block.caption, block.id)
    if caption:
        html = (
            f'<figure class="notion-code-figure">{html}'
            f'<figcaption class="notion-code-caption">{caption}</figcaption></figure>'
        )
    return html


def render_list(group: InList, ctx: RenderContext) -> str:
    """Render a grouped run of same-kind list items as one <ul>/<ol>."""
    items = "".join(
        f"<li>{ctx.rich(item.rich_text, item.id)}{_fetched_children(ctx, item)}</li>"
        for item in group.items
    )
    return f'<{group.tag} class="notion-list">{items}</{group.tag}>'


# --- Media ---


def render_image(block: MediaBlock, ctx: RenderContext) -> str:
    src = _checked_url(ctx, block)
    if src is None:
        return ""
    alt = escape(plain_text(block.caption))
    return (
        f'<figure class="notion-image"><img src="{src}" alt="{alt}" loading="lazy">'
        f"{_figcaption(ctx, block)}</figure>"
    )


def render_video(block: MediaBlock, ctx: RenderContext) -> str:
    src = _checked_url(ctx, block)
    if src is None:
        return ""
    embed = video_embed_url(block.url)
    if embed:
        player = (
            f'<div class="notion-video-wrapper"><iframe src="{embed}" frameborder="0" '
            f'allowfullscreen loading="lazy"></iframe></div>'
        )
    else:
        player = f'<video controls preload="metadata"><source src="{src}"></video>'
    return f'<figure class="notion-video">{player}{_figcaption(ctx, block)}</figure>'


def render_audio(block: MediaBlock, ctx: RenderContext) -> str:
    src = _checked_url(ctx, block)
    if src is None:
        return ""
    return (
        f'<figure class="notion-audio"><audio controls preload="metadata">'
        f'<source src="{src}"></audio>{_figcaption(ctx, block)}</figure>'
    )


def render_file(block: MediaBlock, ctx: RenderContext) -> str:
    href = _checked_url(ctx, block)
    if href is None:
        return ""
    name = escape(block.name or "Download file")
    return (
        f'<figure class="notion-file"><a href="{href}" class="notion-file-link" download '
        f'target="_blank" rel="noopener noreferrer"><span class="notion-file-icon">📎</span>'
        f'<span class="notion-file-name">{name}</span></a>{_figcaption(ctx, block)}</figure>'
    )


def render_pdf(block: MediaBlock, ctx: RenderContext) -> str:
    src = _checked_url(ctx, block)
    if src is None:
        return ""
    return (
        f'<figure class="notion-pdf"><iframe src="{src}" class="notion-pdf-embed" '
        f'loading="lazy"></iframe>{_figcaption(ctx, block)}</figure>'
    )


# --- Embeds and links ---


def render_embed(block: LinkBlock, ctx: RenderContext) -> str:
    src = _checked_url(ctx, block)
    if src is None:
        return ""
    return (
        f'<figure class="notion-embed"><iframe src="{src}" class="notion-embed-iframe" '
        f'loading="lazy" allowfullscreen></iframe>{_figcaption(ctx, block)}</figure>'
    )


def render_bookmark(block: LinkBlock, ctx: RenderContext) -> str:
    href = _checked_url(ctx, block)
    if href is None:
        return ""
    caption = ctx.rich(block.caption, block.id)
    caption_html = f'<p class="notion-bookmark-caption">{caption}</p>' if caption else ""
    return (
        f'<div class="notion-bookmark"><a href="{href}" target="_blank" '
        f'rel="noopener noreferrer" class="notion-bookmark-link">'
        f'<span class="notion-bookmark-url">{href}</span></a>{caption_html}</div>'
    )


def render_link_preview(block: LinkBlock, ctx: RenderContext) -> str:
    href = _checked_url(ctx, block)
    if href is None:
        return ""
    return (
        f'<div class="notion-link-preview"><a href="{href}" target="_blank" '
        f'rel="noopener noreferrer">{href}</a></div>'
    )


def render_child_page(block: ChildPageBlock, ctx: RenderContext) -> str:
    title = block.title or "Untitled"
    return (
        f'<div class="notion-child-page"><a href="/page/{slugify(title)}">'
        f"📄 {escape(title)}</a></div>"
    )


def render_child_database(block: ChildPageBlock, ctx: RenderContext) -> str:
    title = block.title or "Untitled"
    return f'<div class="notion-child-database"><span>📊 {escape(title)}</span></div>'


def render_link_to_page(block: LinkToPageBlock, ctx: RenderContext) -> str:
    if block.resolved_title is None:
        ctx.issue(IssueKind.UNRESOLVED_REFERENCE, block.id, block.target_id or "")
        return '<div class="notion-page-link notion-page-link--broken">Broken link</div>'
    title = block.resolved_title
    return (
        f'<div class="notion-page-link"><a href="/page/{slugify(title)}">'
        f"↗ {escape(title)}</a></div>"
    )


# --- Containers ---


def render_table(block: TableBlock, ctx: RenderContext) -> str:
    if block.children_error:
        ctx.issue(IssueKind.SOURCE_UNAVAILABLE, block.id, block.children_error)
        return ""
    rows = [row for row in block.children if isinstance(row, TableRowBlock)]
    if not rows:
        return ""

    def cells(row: TableRowBlock, header_row: bool) -> str:
        out = []
        for index, cell in enumerate(row.cells):
            is_header = header_row or (block.has_row_header and index == 0)
            tag = "th" if is_header else "td"
            out.append(f"<{tag}>{ctx.rich(cell, row.id)}</{tag}>")
        return f"<tr>{''.join(out)}</tr>"

    html = '<table class="notion-table">'
    if block.has_column_header:
        html += f"<thead>{cells(rows[0], True)}</thead>"
        rows = rows[1:]
    if rows:
        html += f"<tbody>{''.join(cells(row, False) for row in rows)}</tbody>"
    return html + "</table>"


def render_toggle(block: TextBlock, ctx: RenderContext) -> str:
    summary = ctx.rich(block.rich_text, block.id)
    inner = _fetched_children(ctx, block)
    return (
        f'<details class="notion-toggle"><summary>{summary}</summary>'
        f'<div class="notion-toggle-content">{inner}</div></details>'
    )


def render_column_list(block: LayoutBlock, ctx: RenderContext) -> str:
    if block.children_error:
        ctx.issue(IssueKind.SOURCE_UNAVAILABLE, block.id, block.children_error)
        return ""
    columns = [child for child in block.children if child.kind == "column"]
    if not columns:
        return ""
    inner = "".join(
        f'<div class="notion-column">{_fetched_children(ctx, column)}</div>'
        for column in columns
    )
    return (
        f'<div class="notion-columns" style="display:grid;'
        f'grid-template-columns:repeat({len(columns)},minmax(0,1fr))">{inner}</div>'
    )


def render_column(block: LayoutBlock, ctx: RenderContext) -> str:
    # Only reached for a column outside a column_list; render its content inline.
    return _fetched_children(ctx, block)


def render_synced_block(block: SyncedBlock, ctx: RenderContext) -> str:
    # Transparent: the synced wrapper itself contributes no markup.
    return _fetched_children(ctx, block)


# --- Markers ---


def render_divider(block: LayoutBlock, ctx: RenderContext) -> str:
    return '<hr class="notion-divider">'


def render_equation(block: EquationBlock, ctx: RenderContext) -> str:
    expression = escape(block.expression)
    return f'<div class="notion-equation" data-equation="{expression}">{expression}</div>'


def render_table_of_contents(block: LayoutBlock, ctx: RenderContext) -> str:
    return '<nav class="notion-toc" data-toc="true"></nav>'


def render_breadcrumb(block: LayoutBlock, ctx: RenderContext) -> str:
    return '<nav class="notion-breadcrumb" data-breadcrumb="true"></nav>'


def render_table_row(block: TableRowBlock, ctx: RenderContext) -> str:
    # Rows are rendered by their table.
    return ""


def render_unsupported(block: UnsupportedBlock, ctx: RenderContext) -> str:
    logger.debug("Unsupported block type: %s (%s)", block.notion_type, block.id)
    ctx.issue(IssueKind.UNKNOWN_BLOCK_KIND, block.id, block.notion_type)
    if ctx.policy.annotate_unsupported:
        return f"<!-- Unsupported block type: {_css_token(block.notion_type, 'unknown')} -->"
    return ""


HANDLERS: dict[str, Handler] = {
    "paragraph": render_paragraph,
    "heading_1": render_heading,
    "heading_2": render_heading,
    "heading_3": render_heading,
    "quote": render_quote,
    "template": render_template,
    "to_do": render_to_do,
    "callout": render_callout,
    "code": render_code,
    "divider": render_divider,
    "image": render_image,
    "video": render_video,
    "audio": render_audio,
    "file": render_file,
    "pdf": render_pdf,
    "embed": render_embed,
    "bookmark": render_bookmark,
    "link_preview": render_link_preview,
    "table": render_table,
    "table_row": render_table_row,
    "toggle": render_toggle,
    "column_list": render_column_list,
    "column": render_column,
    "child_page": render_child_page,
    "child_database": render_child_database,
    "link_to_page": render_link_to_page,
    "equation": render_equation,
    "table_of_contents": render_table_of_contents,
    "breadcrumb": render_breadcrumb,
    "synced_block": render_synced_block,
    "unsupported": render_unsupported,
}
