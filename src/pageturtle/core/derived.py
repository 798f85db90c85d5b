"""Derived document fields: reading time and automatic description"""

import math

from pageturtle.core.utils.tokens import direct_text, inline_after, walk, word_count


WORDS_PER_MINUTE = 225
DESCRIPTION_WORDS = 25
ELLIPSIS = '...'

_CODE_TYPES = {'fence', 'code_block'}


def reading_time(tokens: list) -> int:
    """Minutes needed to read all text and code blocks, rounded up."""
    words = 0
    for tok in walk(tokens):
        if tok.type == 'text' or tok.type in _CODE_TYPES:
            words += word_count(tok.content)
    return math.ceil(words / WORDS_PER_MINUTE)


def build_description(tokens: list) -> str:
    """First DESCRIPTION_WORDS words of the first paragraph plus an ellipsis; '' if none."""
    for i, tok in enumerate(tokens):
        if tok.type != 'paragraph_open':
            continue
        text = ' '.join(direct_text(inline_after(tokens, i)))
        return ' '.join(text.split()[:DESCRIPTION_WORDS]) + ELLIPSIS
    return ''
