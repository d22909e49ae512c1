"""Scheme allow-list for every URL the renderer emits.

Accepted: http, https, mailto, tel, same-document fragments, root-relative
paths, and raster ``data:image/*`` URIs. SVG data URIs can carry script and
are rejected along with every other scheme.
"""

import re

_ALLOWED_SCHEMES = frozenset({"http", "https", "mailto", "tel"})
_SCHEME = re.compile(r"^([a-zA-Z][a-zA-Z0-9+.-]*):")
_DATA_IMAGE = re.compile(r"^data:image/([a-z0-9.+-]+)[;,]", re.IGNORECASE)
# Browsers ignore these when parsing a scheme, so "java\tscript:" must not slip past.
_IGNORED_CHARS = re.compile(r"[\x00-\x20\x7f]")


def safe_url(url: str | None) -> str | None:
    """Return ``url`` unchanged if its scheme is allowed, otherwise None."""
    if not url:
        return None
    candidate = _IGNORED_CHARS.sub("", url)
    if not candidate:
        return None

    if candidate.startswith("#"):
        return url
    if candidate.startswith("/"):
        # "//host" and "/\host" are protocol-relative, not root-relative
        return url if candidate[1:2] not in ("/", "\\") else None

    match = _SCHEME.match(candidate)
    if match is None:
        return None
    scheme = match.group(1).lower()
    if scheme in _ALLOWED_SCHEMES:
        return url
    if scheme == "data":
        image = _DATA_IMAGE.match(candidate)
        if image and image.group(1).lower() != "svg+xml":
            return url
    return None


def is_safe_url(url: str | None) -> bool:
    return safe_url(url) is not None
