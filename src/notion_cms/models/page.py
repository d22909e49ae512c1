"""Page payload models served to the website."""

from enum import Enum

from pydantic import BaseModel


class PageType(str, Enum):
    """Layout family, decided by which configured parent a page lives under."""

    BLOG = "blog"
    LANDING = "landing"
    DOCS = "docs"


class LayoutConfig(BaseModel):
    """Frontend layout switches for a page type."""

    layout: str
    show_date: bool = False
    show_author: bool = False
    show_share_buttons: bool = False
    show_table_of_contents: bool = False
    show_sidebar: bool = False
    show_prev_next: bool = False
    container_class: str = "container"
    content_class: str = "landing-content"


class PageDetail(BaseModel):
    """A rendered page: metadata plus the HTML body."""

    id: str
    title: str
    slug: str
    content: str  # rendered HTML fragment
    description: str = ""
    icon: str | None = None  # emoji or image URL
    cover: str | None = None
    status: str = "Published"
    meta_title: str | None = None
    meta_description: str = ""
    created_time: str | None = None
    last_edited_time: str | None = None
    url: str | None = None
    page_type: PageType = PageType.LANDING
    layout: LayoutConfig | None = None
