"""Site configuration: settings schema and pageturtle.toml loader"""

import os
import tomllib
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError


CONFIG_FILE = "pageturtle.toml"
POSTS_DIR = "posts"

# scalar fields that may be overridden with PAGETURTLE_<FIELD>
ENV_FIELDS = ("blog_title", "author", "base_url", "enable_rss")


class Link(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    href: str


class SiteConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    blog_title:        str
    author:            str
    base_url:          str = Field(default="", description="Absolute site URL without trailing slash")
    enable_rss:        bool = Field(default=True, description="Write atom.xml")
    extra_links_start: list[Link] = Field(default_factory=list, description="Nav links before Home")
    extra_links_end:   list[Link] = Field(default_factory=list, description="Nav links after Tags")
    is_dev_server:     bool = Field(default=False, description="Inject the live-reload client into pages")


def load_config(directory: Path, overrides: dict[str, Any] = None) -> SiteConfig:
    """Load SiteConfig from directory/pageturtle.toml, then PAGETURTLE_<FIELD> env vars, then non-None overrides."""
    path = Path(directory) / CONFIG_FILE
    if not path.is_file():
        raise ValueError(f"Missing {CONFIG_FILE} in {directory}")
    try:
        data: dict[str, Any] = tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as e:
        raise ValueError(f"Invalid {CONFIG_FILE}: {e}") from e

    for name in ENV_FIELDS:
        if val := os.getenv(f"PAGETURTLE_{name.upper()}"):
            data[name] = val

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    try:
        return SiteConfig(**data)
    except ValidationError as e:
        raise ValueError(f"Invalid {CONFIG_FILE}: {e}") from e
