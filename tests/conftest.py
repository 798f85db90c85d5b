"""Root test configuration: shared site config and content helpers"""

import textwrap

import pytest

from pageturtle.config import Link, SiteConfig
from pageturtle.core.parse import BuildContext


def make_post(title: str = "Hello", date: str = "2024-01-05", body: str = "Body text.\n", **fields) -> str:
    """Return a content document with front-matter built from the given fields."""
    lines = [f"title: {title}", f"date: {date}"]
    for key, value in fields.items():
        lines.append(f"{key}: {value}")
    return "---\n" + "\n".join(lines) + "\n---\n\n" + textwrap.dedent(body)


@pytest.fixture(name="site_config")
def site_config_fixture():
    return SiteConfig(
        blog_title="Turtle Notes",
        author="Sam Shell",
        base_url="https://example.com",
        extra_links_start=[Link(name="Start", href="https://start.example")],
        extra_links_end=[Link(name="About", href="/about.html")],
    )


@pytest.fixture(name="ctx")
def ctx_fixture(site_config):
    return BuildContext(config=site_config)


@pytest.fixture(name="post_text")
def post_text_fixture():
    """Factory for content documents; see make_post."""
    return make_post
