"""Integration tests for full site builds (discover -> compile -> assemble -> write)"""

import datetime as dt

import pytest

from pageturtle.core.pipeline import run_build


NOW = dt.datetime(2024, 6, 1, 12, 0, tzinfo=dt.timezone.utc)

# smallest valid PNG header is enough; the bytes are copied verbatim
PNG = b"\x89PNG\r\n\x1a\n" + b"\x00" * 16


@pytest.fixture(name="blog")
def blog_fixture(tmp_path, post_text):
    posts = tmp_path / "posts"
    posts.mkdir()
    (posts / "first.md").write_text(post_text(
        title="First Post", date="2024-01-05", tags="[python, notes]", table_of_contents="true",
        body="""\
            Opening paragraph of the first post.

            ## Setup

            ![diagram](../images/diagram.png)
            """,
    ))
    (posts / "second.md").write_text(post_text(title="Second Post", date="2024-03-10", tags="[python]"))
    (tmp_path / "images").mkdir()
    (tmp_path / "images" / "diagram.png").write_bytes(PNG)
    return tmp_path


def _snapshot(root) -> dict:
    return {p.relative_to(root).as_posix(): p.read_bytes() for p in sorted(root.rglob("*")) if p.is_file()}


def test_build_writes_site_layout(blog, site_config):
    """A build writes index, tags, stylesheet, feed, posts, and copied images."""
    out = blog / "dist"
    report = run_build(blog, out, site_config, now=NOW)

    assert report.failures == []
    assert [p.output_filename for p in report.published] == ["second-post.html", "first-post.html"]
    assert set(_snapshot(out)) == {
        "index.html", "tags.html", "styles.css", "atom.xml",
        "first-post.html", "second-post.html", "img/diagram.png",
    }
    assert (out / "img" / "diagram.png").read_bytes() == PNG


def test_build_page_contents(blog, site_config):
    """Post pages carry rewritten image paths and the index lists newest first."""
    out = blog / "dist"
    run_build(blog, out, site_config, now=NOW)

    post = (out / "first-post.html").read_text()
    assert 'src="/img/diagram.png"' in post
    assert 'class="toc"' in post
    assert 'href="#setup"' in post
    assert "/livereload" not in post

    index = (out / "index.html").read_text()
    assert index.index("Second Post") < index.index("First Post")
    tags = (out / "tags.html").read_text()
    assert tags.index("notes") < tags.index("python")


def test_build_collects_failures(blog, site_config):
    """A broken document is reported while the other documents still publish."""
    (blog / "posts" / "broken.md").write_text("# No front matter\n")
    report = run_build(blog, blog / "dist", site_config, now=NOW)

    assert [f.path.name for f in report.failures] == ["broken.md"]
    assert len(report.published) == 2
    assert not (blog / "dist" / "broken.html").exists()


def test_rebuild_is_byte_identical(blog, site_config):
    """Two builds of unchanged input with the same clock produce identical output."""
    first = run_build(blog, blog / "dist", site_config, now=NOW)
    before = _snapshot(first.output_dir)
    run_build(blog, blog / "dist", site_config, now=NOW)
    assert _snapshot(blog / "dist") == before


def test_output_dir_not_rediscovered(blog, site_config):
    """Content inside the output directory is never compiled."""
    out = blog / "posts" / "_site"
    out.mkdir()
    (out / "stale.md").write_text("not a post")
    report = run_build(blog, out, site_config, now=NOW)
    assert report.failures == []


def test_rss_disabled_skips_feed(blog, site_config):
    """No atom.xml is written when enable_rss is off."""
    config = site_config.model_copy(update={"enable_rss": False})
    run_build(blog, blog / "dist", config, now=NOW)
    assert not (blog / "dist" / "atom.xml").exists()
    assert (blog / "dist" / "index.html").exists()


def test_feed_contents(blog, site_config):
    """The feed lists every post with absolute links and the injected clock."""
    run_build(blog, blog / "dist", site_config, now=NOW)
    feed = (blog / "dist" / "atom.xml").read_text()
    assert "<updated>2024-06-01T12:00:00+00:00</updated>" in feed
    assert "https://example.com/first-post.html" in feed
    assert "https://example.com/second-post.html" in feed


def test_only_posts_directory_compiled(blog, site_config):
    """Markdown outside posts/ such as a README is not treated as a post."""
    (blog / "README.md").write_text("# About this blog\n")
    (blog / "notes").mkdir()
    (blog / "notes" / "todo.md").write_text("- write more\n")
    report = run_build(blog, blog / "dist", site_config, now=NOW)
    assert report.failures == []
    assert len(report.published) == 2


def test_missing_posts_directory(tmp_path, site_config):
    """A blog directory without posts/ aborts the build."""
    with pytest.raises(FileNotFoundError, match="posts"):
        run_build(tmp_path, tmp_path / "dist", site_config, now=NOW)


def test_reserved_page_title_does_not_replace_index(blog, site_config, post_text):
    """A post titled Index is reported and the site index stays intact."""
    (blog / "posts" / "index-post.md").write_text(post_text(title="Index"))
    report = run_build(blog, blog / "dist", site_config, now=NOW)
    assert [f.path.name for f in report.failures] == ["index-post.md"]
    index = (blog / "dist" / "index.html").read_text()
    assert "Second Post" in index and "First Post" in index


def test_removed_post_page_pruned(blog, site_config):
    """Deleting a post removes its page on the next build; other files stay."""
    out = blog / "dist"
    run_build(blog, out, site_config, now=NOW)
    (out / "notes.txt").write_text("keep")
    (blog / "posts" / "second.md").unlink()

    report = run_build(blog, out, site_config, now=NOW)

    assert [p.output_filename for p in report.published] == ["first-post.html"]
    assert not (out / "second-post.html").exists()
    assert (out / "first-post.html").exists()
    assert (out / "notes.txt").read_text() == "keep"
