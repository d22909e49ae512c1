"""Async Notion client singleton.

Creates a cached AsyncClient instance configured with the integration token
from application settings.
"""

from notion_client import AsyncClient

from notion_cms.config import get_settings
from notion_cms.notion.errors import NotConfigured

_client: AsyncClient | None = None


async def get_notion_client() -> AsyncClient:
    """Return a cached async Notion client instance.

    Creates the client on first call using notion_token from settings.
    Raises NotConfigured if no token is set.
    """
    global _client
    if _client is None:
        settings = get_settings()
        if not settings.notion_token:
            raise NotConfigured("NOTION_TOKEN environment variable not set")
        _client = AsyncClient(auth=settings.notion_token)
    return _client


def reset_client() -> None:
    """Reset the cached client. Used for testing."""
    global _client
    _client = None
