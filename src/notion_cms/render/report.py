"""Render issues and results.

Sub-block failures never abort a page render. Each one is recorded as a
RenderIssue so callers can log or inspect what degraded.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class IssueKind(str, Enum):
    """Why a block rendered with less markup than its content implies."""

    SOURCE_UNAVAILABLE = "source_unavailable"
    UNRESOLVED_REFERENCE = "unresolved_reference"
    UNKNOWN_BLOCK_KIND = "unknown_block_kind"
    UNSAFE_URL = "unsafe_url"


class RenderIssue(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: IssueKind
    block_id: str = ""
    detail: str = ""


class BlockResult(BaseModel):
    """HTML produced by a single top-level block plus the issues it raised."""

    html: str = ""
    issues: list[RenderIssue] = Field(default_factory=list)


class RenderResult(BaseModel):
    """Rendered HTML for a block sequence and the aggregated issue report."""

    html: str = ""
    issues: list[RenderIssue] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.issues

    def count(self, kind: IssueKind) -> int:
        return sum(1 for issue in self.issues if issue.kind == kind)
