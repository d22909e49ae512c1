"""Per-render state threaded through block handlers."""

from collections.abc import Callable
from dataclasses import dataclass, field

from notion_cms.models.rich_text import RichTextSpan
from notion_cms.render.policy import RenderPolicy
from notion_cms.render.report import IssueKind, RenderIssue
from notion_cms.render.rich_text import render_rich_text


@dataclass
class RenderContext:
    """Policy, issue sink, and the sequence renderer used for recursion.

    One context per render call; nothing here is shared across renders.
    """

    policy: RenderPolicy = field(default_factory=RenderPolicy)
    issues: list[RenderIssue] = field(default_factory=list)
    render_sequence: Callable[[list, "RenderContext"], str] | None = None

    def children(self, blocks: list) -> str:
        """Render a child sequence with the same policy and issue sink."""
        if not blocks or self.render_sequence is None:
            return ""
        return self.render_sequence(blocks, self)

    def rich(self, spans: list[RichTextSpan], block_id: str = "") -> str:
        start = len(self.issues)
        html = render_rich_text(spans, self.issues)
        if block_id:
            # rich text does not know which block it belongs to
            for i in range(start, len(self.issues)):
                self.issues[i] = self.issues[i].model_copy(update={"block_id": block_id})
        return html

    def issue(self, kind: IssueKind, block_id: str = "", detail: str = "") -> None:
        self.issues.append(RenderIssue(kind=kind, block_id=block_id, detail=detail))
