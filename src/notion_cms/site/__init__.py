"""Page-serving endpoints and the services behind them."""

from notion_cms.site.service import (
    extract_description,
    get_blog_post,
    get_homepage,
    get_page_detail,
    invalidate_caches,
)

__all__ = [
    "extract_description",
    "get_blog_post",
    "get_homepage",
    "get_page_detail",
    "invalidate_caches",
]
