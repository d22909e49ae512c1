"""Rich text span to HTML conversion.

Each span is escaped exactly once, then wrapped in a fixed order regardless
of how its flags were set: bold, italic, strikethrough, underline, inline
code, then color, then link. Mentions and inline equations replace the
escaped text body before the wrappers apply.
"""

import re
from datetime import datetime
from html import escape

from notion_cms.models.rich_text import (
    DateMention,
    InlineEquation,
    PageMention,
    RichTextSpan,
    UserMention,
)
from notion_cms.render.report import IssueKind, RenderIssue
from notion_cms.render.sanitize import safe_url
from notion_cms.render.slug import slugify

# (flag, open tag, close tag), innermost first
_ANNOTATION_TAGS = (
    ("bold", "<strong>", "</strong>"),
    ("italic", "<em>", "</em>"),
    ("strikethrough", "<del>", "</del>"),
    ("underline", "<u>", "</u>"),
    ("code", '<code class="notion-inline-code">', "</code>"),
)
_COLOR_NAME = re.compile(r"^[a-z]+$")


def plain_text(spans: list[RichTextSpan]) -> str:
    """Concatenate the unformatted text of all spans."""
    return "".join(span.plain_text for span in spans)


def format_date(value: str) -> str:
    """Render an ISO date or datetime as e.g. 'Mar 5, 2026' / 'Mar 5, 2026 14:30'."""
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        return value
    if len(value) <= 10:
        return f"{parsed:%b} {parsed.day}, {parsed.year}"
    return f"{parsed:%b} {parsed.day}, {parsed.year} {parsed:%H:%M}"


def _special_body(span: RichTextSpan) -> str:
    special = span.special
    if isinstance(special, UserMention):
        return f'<span class="notion-mention notion-mention--user">@{escape(special.name)}</span>'
    if isinstance(special, DateMention):
        text = format_date(special.start)
        if special.end:
            text = f"{text} → {format_date(special.end)}"
        return f'<span class="notion-mention notion-mention--date">{escape(text)}</span>'
    if isinstance(special, PageMention):
        return (
            f'<a href="/page/{slugify(span.plain_text)}" '
            f'class="notion-mention notion-mention--page">{escape(span.plain_text)}</a>'
        )
    if isinstance(special, InlineEquation):
        expression = escape(special.expression)
        return f'<span class="notion-equation-inline" data-equation="{expression}">{expression}</span>'
    return escape(span.plain_text)


def _color_class(color: str | None) -> str | None:
    if not color or color == "default":
        return None
    if color.endswith("_background"):
        name = color.removesuffix("_background")
        return f"notion-bg-{name}" if _COLOR_NAME.match(name) else None
    return f"notion-color-{color}" if _COLOR_NAME.match(color) else None


def render_span(span: RichTextSpan, issues: list[RenderIssue] | None = None) -> str:
    """Render one span. Unsafe links are dropped and reported into ``issues``."""
    if span.special is None:
        if not span.plain_text:
            return ""
        html = escape(span.plain_text)
    else:
        html = _special_body(span)

    for flag, open_tag, close_tag in _ANNOTATION_TAGS:
        if getattr(span.annotations, flag):
            html = f"{open_tag}{html}{close_tag}"

    color_class = _color_class(span.color)
    if color_class:
        html = f'<span class="{color_class}">{html}</span>'

    # page mentions already link to the site page
    if span.href and not isinstance(span.special, PageMention):
        href = safe_url(span.href)
        if href is None:
            if issues is not None:
                issues.append(RenderIssue(kind=IssueKind.UNSAFE_URL, detail=span.href))
        else:
            html = (
                f'<a href="{escape(href)}" target="_blank" '
                f'rel="noopener noreferrer">{html}</a>'
            )
    return html


def render_rich_text(
    spans: list[RichTextSpan], issues: list[RenderIssue] | None = None
) -> str:
    """Render a rich text sequence; spans are concatenated with no separator."""
    return "".join(render_span(span, issues) for span in spans)
