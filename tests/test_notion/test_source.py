"""Tests for the Notion-backed Block Source (mocked Notion client)."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from notion_client.errors import APIResponseError, HTTPResponseError, RequestTimeoutError

from notion_cms.models.blocks import TextBlock, UnsupportedBlock
from notion_cms.notion.errors import SourceUnavailable, UnresolvedReference
from notion_cms.notion.source import NotionBlockSource, _is_retryable


def _api_error(status: int, code: str = "object_not_found") -> APIResponseError:
    """Build an APIResponseError without going through its constructor."""
    error = APIResponseError.__new__(APIResponseError)
    error.status = status
    error.code = code
    return error


def _http_error(status: int) -> HTTPResponseError:
    error = HTTPResponseError.__new__(HTTPResponseError)
    error.status = status
    return error


def _paragraph(block_id: str) -> dict:
    return {
        "id": block_id,
        "type": "paragraph",
        "has_children": False,
        "paragraph": {"rich_text": [{"type": "text", "plain_text": block_id}]},
    }


def _listing(ids: list[str], next_cursor: str | None = None) -> dict:
    return {
        "results": [_paragraph(i) for i in ids],
        "has_more": next_cursor is not None,
        "next_cursor": next_cursor,
    }


def _mock_client() -> MagicMock:
    client = MagicMock()
    client.blocks.children.list = AsyncMock()
    client.pages.retrieve = AsyncMock()
    return client


# --- retry classification ---


def test_retryable_errors():
    assert _is_retryable(_http_error(429))
    assert _is_retryable(_http_error(502))
    assert _is_retryable(RequestTimeoutError.__new__(RequestTimeoutError))


def test_permanent_errors_not_retried():
    assert not _is_retryable(_api_error(404))
    assert not _is_retryable(_api_error(401, "unauthorized"))
    assert not _is_retryable(ValueError("boom"))


# --- list_children ---


async def test_list_children_single_page():
    client = _mock_client()
    client.blocks.children.list.return_value = _listing(["a", "b"])
    source = NotionBlockSource(client)

    blocks = await source.list_children("page-1")

    assert [b.id for b in blocks] == ["a", "b"]
    assert all(isinstance(b, TextBlock) for b in blocks)
    client.blocks.children.list.assert_called_once_with(block_id="page-1", page_size=100)


async def test_list_children_follows_cursor_in_order():
    client = _mock_client()
    client.blocks.children.list.side_effect = [
        _listing(["a", "b"], next_cursor="c1"),
        _listing(["c"], next_cursor="c2"),
        _listing(["d"]),
    ]
    source = NotionBlockSource(client)

    blocks = await source.list_children("page-1")

    assert [b.id for b in blocks] == ["a", "b", "c", "d"]
    assert client.blocks.children.list.call_count == 3
    second_call = client.blocks.children.list.call_args_list[1]
    assert second_call.kwargs["start_cursor"] == "c1"


async def test_list_children_stops_at_safety_cap():
    client = _mock_client()
    client.blocks.children.list.side_effect = [
        _listing(["a", "b"], next_cursor="c1"),
        _listing(["c", "d"], next_cursor="c2"),
        _listing(["e"]),
    ]
    source = NotionBlockSource(client, safety_cap=3)

    blocks = await source.list_children("page-1")

    assert [b.id for b in blocks] == ["a", "b", "c"]
    assert client.blocks.children.list.call_count == 2


async def test_list_children_unknown_type_parsed_as_unsupported():
    client = _mock_client()
    client.blocks.children.list.return_value = {
        "results": [{"id": "x", "type": "ai_block", "has_children": False, "ai_block": {}}],
        "has_more": False,
    }
    blocks = await NotionBlockSource(client).list_children("page-1")
    assert isinstance(blocks[0], UnsupportedBlock)


async def test_list_children_failure_raises_source_unavailable():
    client = _mock_client()
    client.blocks.children.list.side_effect = _api_error(404)
    source = NotionBlockSource(client)

    with pytest.raises(SourceUnavailable) as exc_info:
        await source.list_children("missing")

    assert exc_info.value.block_id == "missing"
    client.blocks.children.list.assert_called_once()


async def test_list_children_raw_returns_json():
    client = _mock_client()
    client.blocks.children.list.return_value = _listing(["a"])
    raw = await NotionBlockSource(client).list_children_raw("page-1")
    assert raw[0]["type"] == "paragraph"


# --- resolve_page ---


def _page(title: str) -> dict:
    return {"id": "p1", "properties": {"title": {"title": [{"plain_text": title}]}}}


async def test_resolve_page_returns_title_and_caches():
    client = _mock_client()
    client.pages.retrieve.return_value = _page("Pricing")
    source = NotionBlockSource(client)

    first = await source.resolve_page("p1")
    second = await source.resolve_page("p1")

    assert first.title == "Pricing"
    assert second == first
    client.pages.retrieve.assert_called_once_with(page_id="p1")


async def test_resolve_page_failure_raises_unresolved_reference():
    client = _mock_client()
    client.pages.retrieve.side_effect = _api_error(404)
    source = NotionBlockSource(client)

    with pytest.raises(UnresolvedReference) as exc_info:
        await source.resolve_page("gone")

    assert exc_info.value.page_id == "gone"


async def test_retrieve_page_propagates_errors():
    client = _mock_client()
    client.pages.retrieve.side_effect = _api_error(404)
    with pytest.raises(APIResponseError):
        await NotionBlockSource(client).retrieve_page("gone")
