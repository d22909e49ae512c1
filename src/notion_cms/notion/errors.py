"""Domain exceptions raised by the Notion access layer."""


class NotionCMSError(Exception):
    """Base class for errors raised by this package."""


class SourceUnavailable(NotionCMSError):
    """Fetching a block's children failed (network, permission, missing block)."""

    def __init__(self, block_id: str, reason: str = "") -> None:
        self.block_id = block_id
        self.reason = reason
        super().__init__(f"Children of {block_id} unavailable: {reason}".rstrip(": "))


class UnresolvedReference(NotionCMSError):
    """A referenced page could not be retrieved."""

    def __init__(self, page_id: str, reason: str = "") -> None:
        self.page_id = page_id
        self.reason = reason
        super().__init__(f"Page {page_id} could not be resolved: {reason}".rstrip(": "))


class PageNotFound(NotionCMSError):
    """No page matches the requested slug or ID."""


class NotConfigured(NotionCMSError):
    """A required setting (token, parent page ID) is missing."""


class ContentUnavailable(NotionCMSError):
    """The page exists but is not publishable (e.g. still a draft)."""
