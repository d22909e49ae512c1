"""URL slug derivation shared by headings, page links, and page lookup."""

import re

_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def slugify(text: str) -> str:
    """Lower-case, collapse non-alphanumeric runs to '-', trim edge hyphens."""
    return _NON_ALNUM.sub("-", text.lower()).strip("-")
