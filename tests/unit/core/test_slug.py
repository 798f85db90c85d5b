"""Unit tests for core/utils/slug.py"""

import pytest

from pageturtle.core.utils.slug import slugify, unique_slug


@pytest.mark.parametrize("text,expected", [
    ("Hello World", "hello-world"),
    ("my_file_name", "my-file-name"),
    ("  leading and trailing  ", "leading-and-trailing"),
    ("multiple---hyphens", "multiple-hyphens"),
    ("Special! Ch@rs#", "special-ch-rs"),
    ("Hello, World!", "hello-world"),
    ("", ""),
])
def test_slugify_basic(text, expected):
    """slugify lowercases and collapses non-alphanumerics into single hyphens."""
    assert slugify(text) == expected


def test_slugify_strips_leading_trailing_hyphens():
    """slugify strips leading/trailing hyphens from result."""
    assert slugify("!leading!") == "leading"


def test_unique_slug_suffixes_repeats():
    """unique_slug appends -1, -2 for repeated slugs within one scope."""
    seen: dict[str, int] = {}
    assert [unique_slug(t, seen) for t in ["Setup", "setup", "Setup!", "Other"]] == [
        "setup", "setup-1", "setup-2", "other",
    ]


@pytest.mark.parametrize("text,expected", [
    ("Über uns", "über-uns"),
    ("Café crème", "café-crème"),
    ("日本語の記事", "日本語の記事"),
    ("Привет, мир!", "привет-мир"),
])
def test_slugify_keeps_unicode_letters(text, expected):
    """Letters outside ASCII are alphanumerics and survive slugification."""
    assert slugify(text) == expected
