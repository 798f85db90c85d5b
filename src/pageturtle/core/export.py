"""Site writer: render pages from templates and write the output tree"""

import datetime as dt
import shutil
from pathlib import Path

from loguru import logger

from pageturtle.core.feed import build_feed
from pageturtle.core.models import AssetReference, PublishableDocument
from pageturtle.core.parse import BuildContext
from pageturtle.core.publish import collect_tags
from pageturtle.core.render import make_environment, render_page, stylesheet


REMOTE_PREFIXES = ('http://', 'https://', '//', 'data:')


def _write(path: Path, text: str) -> None:
    path.write_text(text, encoding='utf-8')
    logger.debug("wrote {}", path)


def copy_asset(ref: AssetReference, source_path: Path | None, output_dir: Path) -> bool:
    """Copy a local image next to the published pages; False when skipped."""
    if ref.original_path.startswith(REMOTE_PREFIXES):
        logger.debug("not copying remote image {}", ref.original_path)
        return False
    base = source_path.parent if source_path else Path('.')
    src = (base / ref.original_path.split('?', 1)[0].split('#', 1)[0]).resolve()
    if not src.is_file():
        logger.warning("image {} referenced by {} not found", ref.original_path, source_path)
        return False
    dest = output_dir / ref.final_path.lstrip('/')
    dest.parent.mkdir(parents=True, exist_ok=True)
    shutil.copy2(src, dest)
    return True


def write_site(
    ctx: BuildContext,
    posts: list[PublishableDocument],
    output_dir: Path,
    now: dt.datetime | None = None,
    ) -> list[Path]:
    """Write index, tags, post pages, stylesheet, feed, and assets. Returns written page paths.

    Pages left over from an earlier build, such as a deleted post, are removed.

    Any OSError propagates: output failures abort the build.
    """
    config = ctx.config
    env = make_environment()
    output_dir.mkdir(parents=True, exist_ok=True)
    written = []

    def emit(name: str, text: str) -> None:
        path = output_dir / name
        _write(path, text)
        written.append(path)

    emit('index.html', render_page(env, 'index.html', config=config, posts=posts))
    emit('tags.html', render_page(env, 'tags.html', config=config, tags=collect_tags(posts)))
    for post in posts:
        emit(post.output_filename, render_page(env, 'post.html', config=config, post=post))
    emit('styles.css', stylesheet())
    if config.enable_rss:
        emit('atom.xml', render_page(env, 'atom.xml', feed=build_feed(config, posts, now)))

    for post in posts:
        for ref in post.assets:
            copy_asset(ref, post.document.source_path, output_dir)
    prune_stale_pages(output_dir, written)
    return written


def prune_stale_pages(output_dir: Path, written: list[Path]) -> list[Path]:
    """Delete top-level .html pages this build did not write, e.g. of a removed post."""
    keep = set(written)
    removed = []
    for path in sorted(output_dir.glob('*.html')):
        if path in keep:
            continue
        path.unlink()
        logger.info("removed stale page {}", path)
        removed.append(path)
    return removed
