"""Atom feed model built from publishable documents"""

import datetime as dt
from dataclasses import dataclass, field

from pageturtle.config import SiteConfig
from pageturtle.core.models import PublishableDocument


@dataclass
class FeedEntry:
    id:      str
    title:   str
    link:    str
    author:  str
    content: str
    updated: str     # RFC 3339


@dataclass
class Feed:
    title:   str
    link:    str
    author:  str
    updated: str     # RFC 3339
    entries: list[FeedEntry] = field(default_factory=list)


def rfc3339(value: dt.date | dt.datetime) -> str:
    """Format as YYYY-MM-DDTHH:MM:SS+00:00; plain dates get midnight."""
    if not isinstance(value, dt.datetime):
        value = dt.datetime.combine(value, dt.time())
    elif value.tzinfo is not None:
        value = value.astimezone(dt.timezone.utc)
    return f"{value:%Y-%m-%dT%H:%M:%S}+00:00"


def to_entry(post: PublishableDocument, config: SiteConfig) -> FeedEntry:
    url = f"{config.base_url}/{post.output_filename}"
    meta = post.metadata
    return FeedEntry(
        id=url,
        title=meta.title,
        link=url,
        author=', '.join(meta.authors) if meta.authors else config.author,
        content=post.rendered_html,
        updated=rfc3339(meta.date),
    )


def build_feed(
    config: SiteConfig,
    posts: list[PublishableDocument],
    now: dt.datetime | None = None,
    ) -> Feed:
    """Map config and posts to a Feed; now defaults to the current UTC time."""
    now = now or dt.datetime.now(dt.timezone.utc)
    return Feed(
        title=config.blog_title,
        link=config.base_url,
        author=config.author,
        updated=rfc3339(now),
        entries=[to_entry(p, config) for p in posts],
    )
