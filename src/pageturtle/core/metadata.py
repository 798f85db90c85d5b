"""Front-matter extraction and validation from a parsed token tree"""

from typing import Any

import yaml
from pydantic import ValidationError

from pageturtle.core.models import CompileError, DocumentMetadata
from pageturtle.core.utils.tokens import walk


MISSING_FRONTMATTER = "could not find frontmatter section in file"


def find_frontmatter(tokens: list):
    """Return the first front_matter token in pre-order, else None."""
    return next((tok for tok in walk(tokens) if tok.type == 'front_matter'), None)


def _value_position(text: str, key: str) -> tuple[int, int] | None:
    """Return 0-based (line, column) of key's value inside a YAML mapping, else None."""
    try:
        node = yaml.compose(text)
    except yaml.YAMLError:
        return None
    if not isinstance(node, yaml.MappingNode):
        return None
    for key_node, value_node in node.value:
        if getattr(key_node, 'value', None) == key:
            return value_node.start_mark.line, value_node.start_mark.column
    return None


def _validation_error(e: ValidationError, text: str, first_line: int) -> CompileError:
    err = e.errors()[0]
    loc = err.get('loc') or ()
    field = str(loc[0]) if loc else ''
    message = f"{field}: {err['msg']}" if field else err['msg']
    pos = _value_position(text, field) if field else None
    if pos is None:
        return CompileError(message, line=first_line, column=1)
    line, column = pos
    return CompileError(message, line=first_line + 1 + line, column=column + 1)


def parse_metadata(text: str, first_line: int = 1) -> DocumentMetadata:
    """Deserialize front-matter YAML into DocumentMetadata.

    first_line is the 1-based line of the opening delimiter, used to report
    error positions relative to the whole document.
    """
    try:
        data: Any = yaml.safe_load(text)
    except (yaml.YAMLError, ValueError) as e:
        # out-of-range dates such as 2024-13-01 fail in the YAML constructor with ValueError
        mark = getattr(e, 'problem_mark', None)
        if mark is None:
            raise CompileError(f"invalid YAML frontmatter: {e}", line=first_line) from e
        raise CompileError(
            f"invalid YAML frontmatter: {e}",
            line=first_line + 1 + mark.line,
            column=mark.column + 1,
        ) from e
    if not isinstance(data, dict):
        raise CompileError(
            f"invalid YAML frontmatter: expected a mapping, got {type(data).__name__}",
            line=first_line,
        )
    try:
        return DocumentMetadata.model_validate(data)
    except ValidationError as e:
        raise _validation_error(e, text, first_line) from e


def extract_metadata(tokens: list) -> DocumentMetadata:
    """Locate the front-matter block in tokens and return validated metadata."""
    token = find_frontmatter(tokens)
    if token is None:
        raise CompileError(MISSING_FRONTMATTER)
    first_line = token.map[0] + 1 if token.map else 1
    return parse_metadata(token.content, first_line)
