"""Per-document compilation: parse, metadata, TOC, and reading time"""

from pathlib import Path

from pageturtle.core.derived import reading_time
from pageturtle.core.metadata import extract_metadata
from pageturtle.core.models import CompiledDocument
from pageturtle.core.parse import BuildContext
from pageturtle.core.toc import build_toc, headings_from_tokens


def compile_document(ctx: BuildContext, content: str, source_path: Path | None = None) -> CompiledDocument:
    """Compile one document's source text; raises CompileError on invalid front-matter.

    Image references are left as authored: rewriting them mutates the tree and
    belongs to publishing, after every scan here has run.
    """
    handle = ctx.parse(content)
    tokens = ctx.tokens(handle)
    metadata = extract_metadata(tokens)
    return CompiledDocument(
        metadata=metadata,
        raw_content=content,
        tree=handle,
        toc=build_toc(headings_from_tokens(tokens)),
        reading_time=reading_time(tokens),
        source_path=source_path,
    )
