"""Unit tests for core/render.py"""

import pytest

from mdhtml.core.models import NodeType, Tree
from mdhtml.core.pipeline import render_html
from mdhtml.core.render import escape_html, render
from mdhtml.core.tree import build_tree


SAMPLE_HTML = (
    "<h1>Heading 1</h1>\n"
    "<p>A paragraph with <strong>bold</strong> text.</p>\n"
    "<h2>Setext heading</h2>\n"
    "<ul>\n<li>item one</li>\n<li>item two</li>\n</ul>\n"
    "<blockquote>\n<p>quoted text</p>\n</blockquote>\n"
    '<pre><code class="language-python">print(&quot;hello&quot;)\n</code></pre>\n'
    "<pre><code>indented code\n</code></pre>\n"
    "<div>\nraw html\n</div>\n"
    "<hr />\n"
    "<p>Footer paragraph.</p>\n"
)


def test_render_sample(sample_md):
    """The shared sample renders every block kind."""
    assert render_html(sample_md) == SAMPLE_HTML


@pytest.mark.parametrize("source,expected", [
    ("# Hi",            "<h1>Hi</h1>\n"),
    ("###### Hi",       "<h6>Hi</h6>\n"),
    ("####### Hi",      "<p>####### Hi</p>\n"),
    ("---",             "<hr />\n"),
    ("Title\n=====",    "<h1>Title</h1>\n"),
    ("Title\n---",      "<h2>Title</h2>\n"),
    ("=====",           "<p>=====</p>\n"),
    ("one\ntwo",        "<p>onetwo</p>\n"),
    ("a  \nb",          "<p>a<br />\nb</p>\n"),
    ("*a* and **b**",   "<p><em>a</em> and <strong>b</strong></p>\n"),
    ("***a***",         "<p><strong><em>a</em></strong></p>\n"),
    ("2 * 3",           "<p>2 * 3</p>\n"),
])
def test_render_leaf_blocks(source, expected):
    """Headings, breaks and paragraphs render to their HTML elements."""
    assert render_html(source) == expected


@pytest.mark.parametrize("source,expected", [
    ("```\n<a>\n```",          "<pre><code>&lt;a&gt;\n</code></pre>\n"),
    ("```js extra\nx\n```",    '<pre><code class="language-js">x\n</code></pre>\n'),
    ("```\n```",               "<pre><code></code></pre>\n"),
    ("    *not em*",           "<pre><code>*not em*\n</code></pre>\n"),
])
def test_render_code(source, expected):
    """Code contents are escaped, never parsed for inlines."""
    assert render_html(source) == expected


def test_render_html_block_verbatim():
    """HTML blocks pass through unescaped."""
    assert render_html("<div class=\"x\">\n& *raw*\n</div>") == "<div class=\"x\">\n& *raw*\n</div>\n"


def test_render_block_quote():
    """Quotes wrap their rendered contents."""
    assert render_html("> a") == "<blockquote>\n<p>a</p>\n</blockquote>\n"
    assert render_html("> > a") == (
        "<blockquote>\n<blockquote>\n<p>a</p>\n</blockquote>\n</blockquote>\n"
    )


# --- lists ---

@pytest.mark.parametrize("source,expected", [
    ("- a\n- b",       "<ul>\n<li>a</li>\n<li>b</li>\n</ul>\n"),
    ("1. a\n2. b",     "<ol>\n<li>a</li>\n<li>b</li>\n</ol>\n"),
    ("3. a",           '<ol start="3">\n<li>a</li>\n</ol>\n'),
    ("- a\n\n- b",     "<ul>\n<li><p>a</p></li>\n<li><p>b</p></li>\n</ul>\n"),
    ("- a\n  - b",     "<ul>\n<li>a\n<ul>\n<li>b</li>\n</ul></li>\n</ul>\n"),
    ("- *a*",          "<ul>\n<li><em>a</em></li>\n</ul>\n"),
])
def test_render_lists(source, expected):
    """Tight lists unwrap item paragraphs; loose lists keep them."""
    assert render_html(source) == expected


def test_render_multi_paragraph_tight_item():
    """Tight items join their pieces with newlines."""
    assert render_html("- one\n  two\n  > q") == (
        "<ul>\n<li>onetwo\n<blockquote>\n<p>q</p>\n</blockquote></li>\n</ul>\n"
    )


# --- escaping ---

@pytest.mark.parametrize("text,expected", [
    ("a & b",    "a &amp; b"),
    ("<tag>",    "&lt;tag&gt;"),
    ('"q"',      "&quot;q&quot;"),
    ("it's",     "it&apos;s"),
    ("x\0y",     "x\ufffdy"),
    ("&amp;",    "&amp;amp;"),
])
def test_escape_html(text, expected):
    """Reserved characters become entities; NUL becomes U+FFFD."""
    assert escape_html(text) == expected


def test_text_is_escaped():
    """Paragraph text is escaped on output."""
    assert render_html("a < b & c") == "<p>a &lt; b &amp; c</p>\n"


def test_nul_replaced_in_html_block():
    """NUL in raw HTML is replaced without escaping anything else."""
    assert render_html("<p>\0</p>") == "<p>\ufffd</p>\n"


def test_empty_document_renders_empty():
    """A blank document renders to the empty string."""
    assert render_html("") == ""
    assert render_html("\n\n  \n") == ""


def test_render_subtree():
    """render accepts any node index and renders just that subtree."""
    tree = build_tree("# Title\n\nbody")
    heading = tree[Tree.ROOT].children[0]
    assert tree[heading].type is NodeType.heading
    assert render(tree, heading) == "<h1>Title</h1>\n"


def test_render_is_deterministic(sample_md):
    """Rendering the same tree twice gives identical output."""
    tree = build_tree(sample_md)
    assert render(tree) == render(tree)
