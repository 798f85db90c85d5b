"""CLI command implementations"""

import datetime as dt
from pathlib import Path
from typing import Annotated, Optional

import typer

from pageturtle.config import CONFIG_FILE, SiteConfig, load_config
from pageturtle.core.models import BuildReport
from pageturtle.core.pipeline import run_build
from pageturtle.logging_config import configure_logging


STARTER_CONFIG = """\
blog_title = "My pageturtle blog"
author = "Your Name"
base_url = "http://localhost:8000"
enable_rss = true

# extra_links_end = [{ name = "About", href = "/about.html" }]
"""

STARTER_POST = """\
---
title: Hello, world
date: {date}
tags: [meta]
table_of_contents: true
---

Welcome to your new blog. Edit this file in `posts/` and run `pageturtle dev`
to see the result live in your browser.

## Writing posts

Every post starts with a front-matter block holding its title and date.

## Publishing

Run `pageturtle build` and upload the output directory.
"""


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(directory: Path, overrides: dict = None) -> SiteConfig:
    """Load config with standard CLI error handling."""
    try:
        return load_config(directory, overrides=overrides)
    except ValueError as e:
        _fail(str(e))
    except OSError as e:
        _fail(f"Cannot read {CONFIG_FILE}", e)


def _echo_report(report: BuildReport) -> None:
    """Print per-post output, failures, and a summary line."""
    for post in report.published:
        typer.echo(f"  {post.document.source_path} -> {report.output_dir / post.output_filename}")
    if report.failures:
        typer.echo(f"{len(report.failures)} document(s) failed:", err=True)
        for failure in report.failures:
            typer.echo(f"  {failure}", err=True)
    typer.echo(f"Built {len(report.published)} post(s) to {report.output_dir}/")


def build_cmd(
    directory: Annotated[Path, typer.Option("--directory", "-d", help="Blog directory containing pageturtle.toml")] = Path("."),
    output: Annotated[Path, typer.Option("--output", "-o", help="Output directory")] = Path("dist"),
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Debug logging")] = False,
    ):
    """Build the static site once."""
    configure_logging(verbose=verbose)
    config = _settings(directory)
    try:
        report = run_build(directory, output, config)
    except (OSError, UnicodeDecodeError) as e:
        _fail("Build failed", e)
    _echo_report(report)
    if report.failures:
        raise typer.Exit(1)


def dev_cmd(
    directory: Annotated[Path, typer.Option("--directory", "-d", help="Blog directory containing pageturtle.toml")] = Path("."),
    output: Annotated[Path, typer.Option("--output", "-o", help="Output directory")] = Path("dist"),
    port: Annotated[int, typer.Option("--port", "-p", help="HTTP port")] = 8000,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Debug logging")] = False,
    ):
    """Build, serve, and rebuild on content changes with browser live reload."""
    # imported lazily so build/init do not load the server stack
    from pageturtle.server.app import serve

    configure_logging(verbose=verbose)
    config = _settings(directory, overrides={"is_dev_server": True})
    try:
        serve(directory, output, config, port=port)
    except (OSError, UnicodeDecodeError) as e:
        _fail("Dev server failed", e)


def init_cmd(
    directory: Annotated[Path, typer.Option("--directory", "-d", help="Directory to scaffold")] = Path("."),
    date: Annotated[Optional[str], typer.Option("--date", help="Date for the starter post (YYYY-MM-DD)")] = None,
    ):
    """Scaffold a pageturtle.toml and a starter post."""
    if directory.exists() and not directory.is_dir():
        _fail(f"{directory} exists and is not a directory")
    if directory.is_dir() and any(directory.iterdir()):
        _fail(f"{directory} is not empty")

    date = date or dt.date.today().isoformat()
    try:
        (directory / "posts").mkdir(parents=True, exist_ok=True)
        (directory / CONFIG_FILE).write_text(STARTER_CONFIG, encoding="utf-8")
        (directory / "posts" / "hello-world.md").write_text(STARTER_POST.format(date=date), encoding="utf-8")
    except OSError as e:
        _fail("Init failed", e)
    typer.echo(f"Initialized blog in {directory}/")
