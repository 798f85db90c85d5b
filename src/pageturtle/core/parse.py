"""File discovery, markdown-it parser setup, and the per-build parse arena"""

from dataclasses import dataclass, field
from pathlib import Path

from markdown_it import MarkdownIt
from mdit_py_plugins.front_matter import front_matter_plugin

from pageturtle.config import SiteConfig
from pageturtle.core.render import install_decorators


MD_EXTENSIONS = {'.md', '.markdown'}
ASSETS_ROOT = 'img'


def _make_parser(preset: str = 'gfm-like') -> MarkdownIt:
    """Build a MarkdownIt instance with front-matter support and render decorators."""
    md = MarkdownIt(preset, options_update={"linkify": False}).use(front_matter_plugin)
    install_decorators(md)
    return md


def discover_files(path: Path, exclude: Path | None = None) -> list[Path]:
    """Return sorted content files under path, or [path] if a single file.

    Files below exclude (typically the output directory) are skipped.
    """
    if path.is_file():
        return [path] if path.suffix in MD_EXTENSIONS else []
    excluded = exclude.resolve() if exclude else None
    files = []
    for p in path.rglob('*'):
        if p.suffix not in MD_EXTENSIONS or not p.is_file():
            continue
        if excluded and p.resolve().is_relative_to(excluded):
            continue
        files.append(p)
    return sorted(files)


class ParseArena:
    """Owns every token tree parsed during one build pass, addressed by handle."""

    def __init__(self):
        self._trees: list[list] = []
        self._rewritten: set[int] = set()

    def add(self, tokens: list) -> int:
        self._trees.append(tokens)
        return len(self._trees) - 1

    def __getitem__(self, handle: int) -> list:
        return self._trees[handle]

    def __len__(self) -> int:
        return len(self._trees)

    def mark_rewritten(self, handle: int) -> None:
        self._rewritten.add(handle)

    def is_rewritten(self, handle: int) -> bool:
        return handle in self._rewritten


@dataclass
class BuildContext:
    """State shared by every component for exactly one build pass."""
    config:      SiteConfig
    md:          MarkdownIt = field(default_factory=_make_parser)
    arena:       ParseArena = field(default_factory=ParseArena)
    assets_root: str = ASSETS_ROOT

    def parse(self, content: str) -> int:
        """Parse content into the arena and return the tree handle."""
        return self.arena.add(self.md.parse(content))

    def tokens(self, handle: int) -> list:
        return self.arena[handle]
