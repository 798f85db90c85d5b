"""Table-of-contents construction from the flat heading stream of a document"""

from pageturtle.core.models import Heading, TocEntry
from pageturtle.core.utils.slug import unique_slug
from pageturtle.core.utils.tokens import direct_text, heading_level, inline_after


def assign_anchors(tokens: list) -> None:
    """Store a document-unique anchor in meta['anchor'] of every heading_open token.

    Repeated anchors get -1, -2, ... suffixes in document order. The heading
    renderer and the TOC both read the stored value.
    """
    seen: dict[str, int] = {}
    for i, tok in enumerate(tokens):
        if heading_level(tok) is None:
            continue
        title = ' '.join(''.join(direct_text(inline_after(tokens, i))).split())
        tok.meta['title'] = title
        tok.meta['anchor'] = unique_slug(title, seen)


def headings_from_tokens(tokens: list) -> list[Heading]:
    """Return one Heading per heading_open token, in document order.

    Only immediate text children form the title; emphasis, links and inline
    code inside a heading are dropped, and the whitespace around them
    collapses to a single space.
    """
    assign_anchors(tokens)
    headings = []
    for tok in tokens:
        level = heading_level(tok)
        if level is None:
            continue
        headings.append(Heading(level=level, title=tok.meta['title'], anchor=tok.meta['anchor']))
    return headings


class _HeadingQueue:
    """Front-consuming view over a heading list with a push-back stack."""

    def __init__(self, entries: list[TocEntry]):
        self._entries = entries
        self._cursor = 0
        self._pushed: list[TocEntry] = []

    def __bool__(self) -> bool:
        return bool(self._pushed) or self._cursor < len(self._entries)

    def pop_front(self) -> TocEntry:
        if self._pushed:
            return self._pushed.pop()
        entry = self._entries[self._cursor]
        self._cursor += 1
        return entry

    def push_front(self, entry: TocEntry) -> None:
        self._pushed.append(entry)


def _build_node(queue: _HeadingQueue) -> TocEntry | None:
    if not queue:
        return None
    root = queue.pop_front()

    while queue:
        node = queue.pop_front()
        if node.level <= root.level:
            queue.push_front(node)
            return root

        child = _build_node(queue)
        if child is not None:
            if child.level <= node.level:
                # child closes node's run; it belongs to an ancestor
                queue.push_front(child)
                root.children.append(node)
                return root
            node.children.append(child)
        root.children.append(node)

    return root


def build_toc(headings: list[Heading]) -> list[TocEntry]:
    """Nest a flat, pre-order heading list into a forest of TocEntry roots."""
    queue = _HeadingQueue([TocEntry(h) for h in headings])
    roots = []
    while (root := _build_node(queue)) is not None:
        roots.append(root)
    return roots
