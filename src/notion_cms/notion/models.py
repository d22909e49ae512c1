"""Result types for Notion lookups."""

from pydantic import BaseModel


class PageRef(BaseModel):
    """A resolved page reference."""

    id: str
    title: str
