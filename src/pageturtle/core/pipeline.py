"""Build orchestration: discover, compile, assemble, and write a site"""

import datetime as dt
from pathlib import Path

from loguru import logger

from pageturtle.config import POSTS_DIR, SiteConfig
from pageturtle.core.compiler import compile_document
from pageturtle.core.export import write_site
from pageturtle.core.models import BuildFailure, BuildReport, CompileError, CompiledDocument
from pageturtle.core.parse import BuildContext, discover_files
from pageturtle.core.publish import assemble


def run_compile(
    ctx: BuildContext,
    directory: Path,
    exclude: Path | None = None,
    ) -> tuple[list[CompiledDocument], list[BuildFailure]]:
    """Compile every content file under directory. Read errors propagate; compile errors are collected."""
    compiled, failures = [], []
    for path in discover_files(directory, exclude):
        content = path.read_text(encoding='utf-8')
        try:
            compiled.append(compile_document(ctx, content, path))
        except CompileError as e:
            logger.warning("{}:{}", path, e)
            failures.append(BuildFailure(path=path, error=e))
    return compiled, failures


def run_build(
    directory: Path,
    output_dir: Path,
    config: SiteConfig,
    now: dt.datetime | None = None,
    ) -> BuildReport:
    """Full build pass with a fresh BuildContext; OSError aborts, per-document errors are reported.

    Content is read from the posts/ directory below directory.
    """
    directory, output_dir = Path(directory), Path(output_dir)
    posts_dir = directory / POSTS_DIR
    if not posts_dir.is_dir():
        raise FileNotFoundError(f"No {POSTS_DIR}/ directory in {directory}")
    ctx = BuildContext(config=config)

    compiled, failures = run_compile(ctx, posts_dir, exclude=output_dir)
    published, publish_failures = assemble(ctx, compiled)
    failures.extend(publish_failures)

    write_site(ctx, published, output_dir, now)
    logger.info(
        "Built {} post(s) into {} ({} failure(s))",
        len(published), output_dir, len(failures),
    )
    return BuildReport(output_dir=output_dir, published=published, failures=failures)
