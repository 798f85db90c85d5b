"""Slug generation for output filenames and heading anchors"""

import re


# any run of non-word characters or underscores; \w keeps Unicode letters and digits
_SEPARATOR_RE = re.compile(r'[\W_]+')


def slugify(text: str) -> str:
    """Convert text to a lowercase, hyphen-separated URL-safe slug."""
    return _SEPARATOR_RE.sub('-', text.lower()).strip('-')


def unique_slug(text: str, seen: dict[str, int]) -> str:
    """Slugify text, suffixing -1, -2, ... when the slug was already produced."""
    slug = slugify(text)
    count = seen.get(slug, 0)
    seen[slug] = count + 1
    return slug if count == 0 else f"{slug}-{count}"
