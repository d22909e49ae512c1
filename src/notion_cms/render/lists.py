"""List grouping as a two-state machine: NoList | InList(kind, items).

Transitions are pure: ``step`` returns the next state plus any list group
that had to be closed, and ``finish`` closes whatever is still open. HTML
building happens elsewhere, on the emitted groups.
"""

from dataclasses import dataclass

from notion_cms.models.blocks import LIST_ITEM_KINDS, Block


@dataclass(frozen=True)
class NoList:
    pass


@dataclass(frozen=True)
class InList:
    kind: str  # "bulleted_list_item" or "numbered_list_item"
    items: tuple[Block, ...] = ()

    @property
    def tag(self) -> str:
        return "ul" if self.kind == "bulleted_list_item" else "ol"


ListState = NoList | InList

NO_LIST = NoList()


def step(state: ListState, block: Block) -> tuple[ListState, InList | None]:
    """Advance the machine by one block.

    Returns ``(next_state, flushed)`` where ``flushed`` is the list group
    closed by this block, if any. A non-list block always leaves the machine
    in ``NoList`` and flushes any open group first.
    """
    if block.kind in LIST_ITEM_KINDS:
        if isinstance(state, InList) and state.kind == block.kind:
            return InList(state.kind, state.items + (block,)), None
        flushed = state if isinstance(state, InList) else None
        return InList(block.kind, (block,)), flushed

    return NO_LIST, finish(state)


def finish(state: ListState) -> InList | None:
    """Close the open group at the end of a sequence."""
    if isinstance(state, InList) and state.items:
        return state
    return None


def group_lists(blocks: list[Block]) -> list[Block | InList]:
    """Run the machine over a sequence, yielding blocks with list items grouped.

    Non-list blocks pass through in order; each run of same-kind list items is
    replaced by a single InList at the run's position.
    """
    out: list[Block | InList] = []
    state: ListState = NO_LIST
    for block in blocks:
        state, flushed = step(state, block)
        if flushed is not None:
            out.append(flushed)
        if block.kind not in LIST_ITEM_KINDS:
            out.append(block)
    tail = finish(state)
    if tail is not None:
        out.append(tail)
    return out
