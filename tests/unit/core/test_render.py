"""Unit tests for core/render.py"""

from pageturtle.core.compiler import compile_document
from pageturtle.core.publish import assemble, collect_tags
from pageturtle.core.render import highlight_code, make_environment, render_page, stylesheet
from pageturtle.core.toc import assign_anchors


def test_heading_decorator_uses_anchor(parser):
    """Headings render with their stored anchor as id and link target."""
    tokens = parser.parse("## Getting Started\n")
    assign_anchors(tokens)
    html = parser.renderer.render(tokens, parser.options, {})
    assert 'id="getting-started"' in html
    assert 'href="#getting-started"' in html
    assert html.rstrip().endswith("</h2></a>")


def test_fence_highlighted(parser):
    """Known languages are highlighted by Pygments."""
    html = parser.render('```python\nprint("hi")\n```\n')
    assert '<pre class="highlight"><code class="language-python">' in html
    assert "<span" in html


def test_unknown_language_falls_back():
    """Unknown or missing languages defer to the default escaping."""
    assert highlight_code("x", "no-such-lang", "") == ""
    assert highlight_code("x", "", "") == ""


def test_front_matter_not_rendered(parser):
    """The front-matter block produces no HTML."""
    html = parser.render("---\ntitle: X\n---\n\nBody\n")
    assert "title" not in html
    assert "<p>Body</p>" in html


def test_stylesheet_includes_highlight_styles():
    """The stylesheet bundles Pygments token styles."""
    assert ".highlight" in stylesheet()


def test_base_template_live_reload(site_config):
    """The live-reload client is only injected for the dev server."""
    env = make_environment()
    assert "WebSocket" not in render_page(env, "index.html", config=site_config, posts=[])
    dev = site_config.model_copy(update={"is_dev_server": True})
    assert "/livereload" in render_page(env, "index.html", config=dev, posts=[])


def test_navigation_links(site_config):
    """Extra links surround the built-in navigation."""
    html = render_page(make_environment(), "index.html", config=site_config, posts=[])
    assert html.index("https://start.example") < html.index('href="/index.html">Home') < html.index("/about.html")


def test_tag_ids_and_links_slugified(ctx, site_config, post_text):
    """Tags with spaces or # become valid ids, and post pages link to the same fragment."""
    doc = compile_document(ctx, post_text(tags='["Machine Learning", "C#"]'))
    published, _ = assemble(ctx, [doc])
    env = make_environment()

    tags_page = render_page(env, "tags.html", config=site_config, tags=collect_tags(published))
    assert 'id="machine-learning"' in tags_page
    assert 'id="c"' in tags_page

    post_page = render_page(env, "post.html", config=site_config, post=published[0])
    assert 'href="/tags.html#machine-learning"' in post_page
    assert 'href="/tags.html#c"' in post_page
