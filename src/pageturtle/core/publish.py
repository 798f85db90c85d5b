"""Publish assembly: asset rewrite, HTML rendering, output identity, and ordering"""

from pathlib import Path

from loguru import logger

from pageturtle.core.assets import rewrite_assets
from pageturtle.core.derived import build_description
from pageturtle.core.models import (
    BuildFailure,
    CompileError,
    CompiledDocument,
    PublishableDocument,
)
from pageturtle.core.parse import BuildContext
from pageturtle.core.utils.slug import slugify


FALLBACK_FILENAME = 'untitled'

# pages written by the site writer; posts may not take these names
RESERVED_PAGES = {
    'index.html': 'the site index',
    'tags.html':  'the tag listing',
}


def output_filename(doc: CompiledDocument) -> str:
    """Slug-derived page filename: explicit slug if set, else the title."""
    meta = doc.metadata
    stem = slugify(meta.slug) if meta.slug else slugify(meta.title)
    return f"{stem or FALLBACK_FILENAME}.html"


def render_html(ctx: BuildContext, handle: int) -> str:
    """Render a tree whose asset references have already been rewritten."""
    if not ctx.arena.is_rewritten(handle):
        raise RuntimeError(f"tree {handle} rendered before its assets were rewritten")
    return ctx.md.renderer.render(ctx.tokens(handle), ctx.md.options, {})


def prepare_for_publish(ctx: BuildContext, doc: CompiledDocument) -> PublishableDocument:
    """Turn a compiled document into a publishable one."""
    # rewrite must happen-before render: render reads the mutated image nodes
    assets = rewrite_assets(ctx, doc.tree)
    html = render_html(ctx, doc.tree)

    description = doc.metadata.description
    if description is None:
        description = build_description(ctx.tokens(doc.tree))

    return PublishableDocument(
        document=doc,
        output_filename=output_filename(doc),
        description=description,
        rendered_html=html,
        assets=assets,
    )


def sort_for_publish(posts: list[PublishableDocument]) -> list[PublishableDocument]:
    """Order by date, newest first; ties keep their incoming order."""
    return sorted(posts, key=lambda p: p.metadata.date, reverse=True)


def assemble(
    ctx: BuildContext,
    docs: list[CompiledDocument],
    ) -> tuple[list[PublishableDocument], list[BuildFailure]]:
    """Prepare every document for publishing and order the result.

    A document whose filename is already taken by an earlier document (in the
    given order) or by a site page is reported as a failure instead of
    overwriting it.
    """
    claimed: dict[str, CompiledDocument | str] = dict(RESERVED_PAGES)
    published: list[PublishableDocument] = []
    failures: list[BuildFailure] = []

    for doc in docs:
        post = prepare_for_publish(ctx, doc)
        owner = claimed.get(post.output_filename)
        if owner is not None:
            if isinstance(owner, str):
                used_by = owner
            else:
                used_by = repr(str(owner.source_path or owner.metadata.title))
            error = CompileError(f"output filename {post.output_filename} is already used by {used_by}")
            logger.warning("Skipping {}: {}", doc.source_path, error.message)
            failures.append(BuildFailure(path=doc.source_path or Path(post.output_filename), error=error))
            continue
        claimed[post.output_filename] = doc
        published.append(post)

    return sort_for_publish(published), failures


def collect_tags(posts: list[PublishableDocument]) -> dict[str, list[PublishableDocument]]:
    """Map each tag (alphabetical) to the posts carrying it, in publish order."""
    tags: dict[str, list[PublishableDocument]] = {}
    for post in posts:
        for tag in dict.fromkeys(post.metadata.tags):
            tags.setdefault(tag, []).append(post)
    return dict(sorted(tags.items()))
