"""Block sequence renderer.

Pure and synchronous over an already-fetched block tree (see
``notion_cms.notion.tree`` for the I/O half). One streaming pass groups
adjacent same-kind list items and dispatches every other block through
``HANDLERS``. Identical input always yields byte-identical output.
"""

from notion_cms.models.blocks import Block
from notion_cms.render.blocks import HANDLERS, render_list, render_unsupported
from notion_cms.render.context import RenderContext
from notion_cms.render.lists import InList, group_lists
from notion_cms.render.policy import RenderPolicy
from notion_cms.render.report import BlockResult, RenderResult


def _render_unit(unit: Block | InList, ctx: RenderContext) -> str:
    if isinstance(unit, InList):
        return render_list(unit, ctx)
    handler = HANDLERS.get(unit.kind, render_unsupported)
    return handler(unit, ctx)


def _render_sequence(blocks: list[Block], ctx: RenderContext) -> str:
    return "".join(_render_unit(unit, ctx) for unit in group_lists(blocks))


def _new_context(policy: RenderPolicy | None) -> RenderContext:
    return RenderContext(policy=policy or RenderPolicy(), render_sequence=_render_sequence)


def _unit_result(unit: Block | InList, ctx: RenderContext) -> BlockResult:
    start = len(ctx.issues)
    html = _render_unit(unit, ctx)
    return BlockResult(html=html, issues=ctx.issues[start:])


def render_block(block: Block, policy: RenderPolicy | None = None) -> BlockResult:
    """Render one block on its own (a lone list item becomes a one-item list)."""
    ctx = _new_context(policy)
    return BlockResult(html=_render_sequence([block], ctx), issues=ctx.issues)


def render_blocks(blocks: list[Block], policy: RenderPolicy | None = None) -> RenderResult:
    """Render a block sequence to HTML, collecting every degraded sub-block.

    Each top-level unit (a block, or a run of list items) yields its own
    BlockResult; the page result concatenates their HTML and issues in order.
    """
    ctx = _new_context(policy)
    results = [_unit_result(unit, ctx) for unit in group_lists(blocks)]
    return RenderResult(
        html="".join(result.html for result in results),
        issues=[issue for result in results for issue in result.issues],
    )


def render(blocks: list[Block], policy: RenderPolicy | None = None) -> str:
    """Render a block sequence to an HTML fragment."""
    return render_blocks(blocks, policy).html
