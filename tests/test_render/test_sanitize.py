"""Tests for the URL scheme allow-list."""

import pytest

from notion_cms.render.sanitize import is_safe_url, safe_url


@pytest.mark.parametrize(
    "url",
    [
        "https://example.com/a.png",
        "http://example.com",
        "mailto:hello@example.com",
        "tel:+15551234567",
        "#section-2",
        "/page/about",
        "data:image/png;base64,iVBORw0KGgo=",
        "data:image/jpeg;base64,/9j/4AAQ",
    ],
)
def test_allowed_urls_pass_through_unchanged(url):
    assert safe_url(url) == url


@pytest.mark.parametrize(
    "url",
    [
        "javascript:alert(1)",
        "JavaScript:alert(1)",
        " javascript:alert(1)",
        "java\tscript:alert(1)",
        "vbscript:msgbox(1)",
        "data:image/svg+xml;base64,PHN2Zz48L3N2Zz4=",
        "DATA:IMAGE/SVG+XML;base64,PHN2Zz48L3N2Zz4=",
        "data:text/html;base64,PGgxPmhpPC9oMT4=",
        "ftp://example.com/file",
        "//evil.example.com/x.png",
        "relative/path.png",
    ],
)
def test_disallowed_urls_rejected(url):
    assert safe_url(url) is None


def test_empty_and_none_rejected():
    assert safe_url(None) is None
    assert safe_url("") is None
    assert safe_url("   ") is None


def test_is_safe_url():
    assert is_safe_url("https://example.com")
    assert not is_safe_url("javascript:void(0)")
