"""Video host detection for responsive iframe embeds."""

import re

# Comprehensive regex for all YouTube URL formats
YOUTUBE_ID_PATTERN = re.compile(
    r"(?:youtube\.com/(?:watch\?.*v=|shorts/|embed/|v/)|youtu\.be/)([a-zA-Z0-9_-]{11})"
)
VIMEO_ID_PATTERN = re.compile(r"vimeo\.com/(?:.*/)?(\d+)")


def extract_youtube_id(url: str) -> str | None:
    """Extract the 11-character video ID from a YouTube URL.

    Handles: youtube.com/watch?v=, youtu.be/, youtube.com/shorts/, youtube.com/embed/
    Also handles URLs with additional query params (e.g., &t=123, &list=PLxxx).
    """
    match = YOUTUBE_ID_PATTERN.search(url)
    return match.group(1) if match else None


def extract_vimeo_id(url: str) -> str | None:
    """Extract the numeric video ID from a vimeo.com or player.vimeo.com URL."""
    match = VIMEO_ID_PATTERN.search(url)
    return match.group(1) if match else None


def video_embed_url(url: str) -> str | None:
    """Return the player iframe URL for YouTube/Vimeo links, else None."""
    youtube_id = extract_youtube_id(url)
    if youtube_id:
        return f"https://www.youtube.com/embed/{youtube_id}"
    vimeo_id = extract_vimeo_id(url)
    if vimeo_id:
        return f"https://player.vimeo.com/video/{vimeo_id}"
    return None
