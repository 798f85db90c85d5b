"""Shared markdown-it token utilities"""

from typing import Iterator


def heading_level(token) -> int | None:
    """Return the heading level (1-6) for a heading_open token, else None."""
    if token.type == 'heading_open' and token.tag and token.tag[0] == 'h' and token.tag[1:].isdigit():
        return int(token.tag[1:])
    return None


def walk(tokens: list) -> Iterator:
    """Yield tokens in pre-order, descending into inline children."""
    for tok in tokens:
        yield tok
        if tok.children:
            yield from walk(tok.children)


def inline_after(tokens: list, i: int):
    """Return the inline token belonging to the block opened at index i, else None."""
    for tok in tokens[i + 1:]:
        if tok.type == 'inline':
            return tok
        if tok.nesting < 0:
            return None
    return None


def direct_text(inline) -> list[str]:
    """Return contents of the immediate (unformatted) text children of an inline token."""
    if inline is None or not inline.children:
        return []
    return [c.content for c in inline.children if c.type == 'text' and c.level == 0]


def word_count(text: str) -> int:
    """Count whitespace-delimited words."""
    return len(text.split())
