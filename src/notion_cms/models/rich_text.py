"""Rich text span model with annotations and inline special kinds."""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class Annotations(BaseModel):
    """Independent, composable inline formatting flags."""

    model_config = ConfigDict(frozen=True)

    bold: bool = False
    italic: bool = False
    strikethrough: bool = False
    underline: bool = False
    code: bool = False


class UserMention(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["user"] = "user"
    name: str


class DateMention(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["date"] = "date"
    start: str
    end: str | None = None


class PageMention(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["page"] = "page"
    page_id: str = ""


class InlineEquation(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["equation"] = "equation"
    expression: str


SpecialKind = Annotated[
    Union[UserMention, DateMention, PageMention, InlineEquation],
    Field(discriminator="kind"),
]


class RichTextSpan(BaseModel):
    """One element of a text-bearing block's rich text sequence."""

    model_config = ConfigDict(frozen=True)

    plain_text: str = ""
    annotations: Annotations = Field(default_factory=Annotations)
    color: str | None = None  # None means Notion's "default"
    href: str | None = None
    special: SpecialKind | None = None
