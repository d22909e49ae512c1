"""Configurable rendering decisions that are product choices, not Notion semantics."""

from pydantic import BaseModel, ConfigDict

from notion_cms.config import Settings


class RenderPolicy(BaseModel):
    model_config = ConfigDict(frozen=True)

    skip_empty_paragraphs: bool = True  # drop <p> for empty/whitespace-only text
    annotate_unsupported: bool = True  # emit an HTML comment for unknown kinds

    @classmethod
    def from_settings(cls, settings: Settings) -> "RenderPolicy":
        return cls(
            skip_empty_paragraphs=settings.skip_empty_paragraphs,
            annotate_unsupported=settings.annotate_unsupported,
        )
