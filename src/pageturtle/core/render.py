"""HTML rendering: markdown-it decorators, Pygments highlighting, and Jinja2 page templates"""

from html import escape
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape
from markdown_it import MarkdownIt
from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexers import get_lexer_by_name
from pygments.util import ClassNotFound

from pageturtle.core.utils.slug import slugify


TEMPLATES_DIR = Path(__file__).parent / 'templates'
PYGMENTS_STYLE = 'monokai'

_formatter = HtmlFormatter(nowrap=True, style=PYGMENTS_STYLE)


def highlight_code(code: str, lang: str, attrs: str) -> str:
    """Highlight a fenced block; '' lets markdown-it fall back to plain escaping."""
    if not lang:
        return ''
    try:
        lexer = get_lexer_by_name(lang)
    except ClassNotFound:
        return ''
    body = highlight(code, lexer, _formatter)
    return f'<pre class="highlight"><code class="language-{escape(lang)}">{body}</code></pre>'


def _heading_open(self, tokens, idx, options, env) -> str:
    tok = tokens[idx]
    anchor = escape(tok.meta.get('anchor', ''))
    return (
        f'<a class="heading-link" href="#{anchor}">'
        f'<{tok.tag} id="{anchor}" class="heading">'
        f'<span class="heading-marker">#</span>'
    )


def _heading_close(self, tokens, idx, options, env) -> str:
    return f'</{tokens[idx].tag}></a>\n'


def install_decorators(md: MarkdownIt) -> None:
    """Attach the heading anchor decorator and the syntax highlighter to md."""
    md.options['highlight'] = highlight_code
    md.add_render_rule('heading_open', _heading_open)
    md.add_render_rule('heading_close', _heading_close)


def stylesheet() -> str:
    """Base stylesheet plus Pygments token styles."""
    base = (TEMPLATES_DIR / 'styles.css').read_text(encoding='utf-8')
    return base + '\n' + HtmlFormatter(style=PYGMENTS_STYLE).get_style_defs('.highlight') + '\n'


def make_environment() -> Environment:
    env = Environment(
        loader=FileSystemLoader(str(TEMPLATES_DIR)),
        autoescape=select_autoescape(['html', 'xml']),
        keep_trailing_newline=True,
    )
    env.filters['slugify'] = slugify
    return env


def render_page(env: Environment, template: str, **context) -> str:
    """Fill a named template with context."""
    return env.get_template(template).render(**context)
