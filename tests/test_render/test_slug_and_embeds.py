"""Tests for slug derivation and video host detection."""

from notion_cms.render.embeds import extract_vimeo_id, extract_youtube_id, video_embed_url
from notion_cms.render.slug import slugify


# --- slugify ---


def test_slugify_basic():
    assert slugify("Getting Started") == "getting-started"


def test_slugify_collapses_runs_and_trims():
    assert slugify("  Hello,   World!! ") == "hello-world"
    assert slugify("--Intro--") == "intro"


def test_slugify_drops_non_ascii():
    assert slugify("Café & Crème 2026") == "caf-cr-me-2026"


def test_slugify_empty():
    assert slugify("") == ""
    assert slugify("!!!") == ""


# --- video ids ---


def test_extract_youtube_id_watch():
    assert extract_youtube_id("https://www.youtube.com/watch?v=dQw4w9WgXcQ") == "dQw4w9WgXcQ"


def test_extract_youtube_id_short():
    assert extract_youtube_id("https://youtu.be/dQw4w9WgXcQ") == "dQw4w9WgXcQ"


def test_extract_youtube_id_with_params():
    url = "https://www.youtube.com/watch?v=dQw4w9WgXcQ&t=120&list=PLxxx"
    assert extract_youtube_id(url) == "dQw4w9WgXcQ"


def test_extract_youtube_id_invalid():
    assert extract_youtube_id("https://example.com/page") is None


def test_extract_vimeo_id():
    assert extract_vimeo_id("https://vimeo.com/123456789") == "123456789"
    assert extract_vimeo_id("https://player.vimeo.com/video/42") == "42"
    assert extract_vimeo_id("https://vimeo.com/about") is None


def test_video_embed_url():
    assert (
        video_embed_url("https://youtu.be/dQw4w9WgXcQ")
        == "https://www.youtube.com/embed/dQw4w9WgXcQ"
    )
    assert video_embed_url("https://vimeo.com/76979871") == "https://player.vimeo.com/video/76979871"
    assert video_embed_url("https://cdn.example.com/clip.mp4") is None
