"""HTML rendering of the document tree"""

from typing import Callable

from mdhtml.core.models import Node, NodeType, Tree


ESCAPES = str.maketrans({
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    '"': "&quot;",
    "'": "&apos;",
    "\0": "\ufffd",
})

INLINE = {NodeType.text, NodeType.emph, NodeType.strong, NodeType.softbreak, NodeType.linebreak}


def escape_html(text: str) -> str:
    """Escape HTML-reserved characters and replace NUL with U+FFFD."""
    return text.translate(ESCAPES)


def _children(tree: Tree, node: Node) -> str:
    return "".join(render(tree, i) for i in node.children)


def _document(tree: Tree, node: Node) -> str:
    return _children(tree, node)


def _block_quote(tree: Tree, node: Node) -> str:
    return f"<blockquote>\n{_children(tree, node)}</blockquote>\n"


def _list(tree: Tree, node: Node) -> str:
    if not node.attributes.get("ordered"):
        return f"<ul>\n{_children(tree, node)}</ul>\n"
    start = node.attributes.get("start", 1)
    opening = "<ol>" if start == 1 else f'<ol start="{start}">'
    return f"{opening}\n{_children(tree, node)}</ol>\n"


def _list_item(tree: Tree, node: Node) -> str:
    # tight items unwrap their paragraphs; pieces are joined by newlines
    tight = node.attributes.get("tight", True)
    pieces: list[str] = []
    inline: list[str] = []
    for i in node.children:
        child = tree[i]
        if child.type in INLINE:
            inline.append(render(tree, i))
            continue
        if inline:
            pieces.append("".join(inline))
            inline = []
        if tight and child.type is NodeType.paragraph:
            pieces.append(_children(tree, child))
        else:
            pieces.append(render(tree, i).rstrip("\n"))
    if inline:
        pieces.append("".join(inline))
    return "<li>" + "\n".join(pieces) + "</li>\n"


def _code_block(tree: Tree, node: Node) -> str:
    info = node.attributes.get("info")
    opening = f'<code class="language-{escape_html(info)}">' if info else "<code>"
    return f"<pre>{opening}{escape_html(node.contents or '')}</code></pre>\n"


def _paragraph(tree: Tree, node: Node) -> str:
    return f"<p>{_children(tree, node)}</p>\n"


def _heading(tree: Tree, node: Node) -> str:
    level = node.attributes.get("level", 1)
    return f"<h{level}>{_children(tree, node)}</h{level}>\n"


def _thematic_break(tree: Tree, node: Node) -> str:
    return "<hr />\n"


def _html_block(tree: Tree, node: Node) -> str:
    return (node.contents or "").replace("\0", "\ufffd") + "\n"


def _text(tree: Tree, node: Node) -> str:
    return escape_html(node.contents or "")


def _emph(tree: Tree, node: Node) -> str:
    return f"<em>{_children(tree, node)}</em>"


def _strong(tree: Tree, node: Node) -> str:
    return f"<strong>{_children(tree, node)}</strong>"


def _softbreak(tree: Tree, node: Node) -> str:
    return ""


def _linebreak(tree: Tree, node: Node) -> str:
    return "<br />\n"


RENDERERS: dict[NodeType, Callable[[Tree, Node], str]] = {
    NodeType.document:       _document,
    NodeType.block_quote:    _block_quote,
    NodeType.list:           _list,
    NodeType.list_item:      _list_item,
    NodeType.code_block:     _code_block,
    NodeType.paragraph:      _paragraph,
    NodeType.heading:        _heading,
    NodeType.thematic_break: _thematic_break,
    NodeType.html_block:     _html_block,
    NodeType.text:           _text,
    NodeType.emph:           _emph,
    NodeType.strong:         _strong,
    NodeType.softbreak:      _softbreak,
    NodeType.linebreak:      _linebreak,
}


def render(tree: Tree, index: int = Tree.ROOT) -> str:
    """Render the subtree rooted at index to HTML."""
    node = tree[index]
    return RENDERERS[node.type](tree, node)
