"""Tree building: map classified blocks to document nodes, recursing into quotes and lists"""

import logging
import re
from dataclasses import dataclass
from typing import Callable

from mdhtml.core.blocks import (
    BLANK_RE,
    BULLET_RE,
    FENCE_CLOSE_RE,
    FENCE_RE,
    ORDERED_RE,
    classify_lines,
)
from mdhtml.core.errors import TooDeeplyNested
from mdhtml.core.inline import parse_inlines
from mdhtml.core.lines import line_text, segment_lines
from mdhtml.core.models import Block, BlockType, Line, NodeType, Tree


logger = logging.getLogger("mdhtml.core.tree")

DEFAULT_MAX_DEPTH = 64

ATX_OPEN_RE = re.compile(r'^(#{1,6})(.*)$')
ATX_CLOSE_RE = re.compile(r'(?:^|[ \t]+)#+[ \t]*$')
QUOTE_MARKER_RE = re.compile(r'^ {0,3}>[ \t]?')


@dataclass
class _Context:
    """State shared by the builders of one (possibly nested) document."""
    tree:      Tree
    source:    str
    lines:     list[Line]
    depth:     int
    max_depth: int

    def texts(self, block: Block) -> list[str]:
        return [line_text(self.source, line) for line in self.lines[block.first_line:block.last_line + 1]]

    def descend(self, parent: int, source: str) -> None:
        build_into(self.tree, parent, source, self.depth + 1, self.max_depth)


def _expect(block: Block, *types: BlockType) -> None:
    if block.type not in types:
        expected = " or ".join(t.value for t in types)
        raise ValueError(f"Cannot build a {expected} node from a {block.type.value} block")


def _leading_ws(text: str) -> int:
    return len(text) - len(text.lstrip(" \t"))


def _paragraph_text(lines: list[str]) -> str:
    """Join lines, dropping each line's indentation and the outer whitespace."""
    return "\n".join(line.lstrip(" \t") for line in lines).strip()


def _code_text(lines: list[str]) -> str:
    return "".join(line + "\n" for line in lines)


def _build_thematic_break(ctx: _Context, parent: int, block: Block) -> None:
    _expect(block, BlockType.thematic_break)
    ctx.tree.add(NodeType.thematic_break, parent)


def _build_atx_heading(ctx: _Context, parent: int, block: Block) -> None:
    _expect(block, BlockType.atx_heading)
    hashes, rest = ATX_OPEN_RE.match(ctx.texts(block)[0].strip()).groups()
    content = ATX_CLOSE_RE.sub("", rest).strip()
    heading = ctx.tree.add(NodeType.heading, parent, level=len(hashes))
    parse_inlines(content, ctx.tree, heading)


def _build_setext_heading(ctx: _Context, parent: int, block: Block) -> None:
    _expect(block, BlockType.setext_heading)
    lines = ctx.texts(block)
    level = 1 if lines[-1].strip().startswith("=") else 2
    heading = ctx.tree.add(NodeType.heading, parent, level=level)
    parse_inlines(_paragraph_text(lines[:-1]), ctx.tree, heading)


def _build_indented_code(ctx: _Context, parent: int, block: Block) -> None:
    _expect(block, BlockType.indented_code)
    stripped = []
    for line in ctx.texts(block):
        lead = line[:4]
        cut = lead.index("\t") + 1 if "\t" in lead else len(lead) - len(lead.lstrip(" "))
        stripped.append(line[cut:])
    ctx.tree.add(NodeType.code_block, parent, contents=_code_text(stripped))


def _build_fenced_code(ctx: _Context, parent: int, block: Block) -> None:
    _expect(block, BlockType.fenced_code)
    lines = ctx.texts(block)
    indent, fence, info = FENCE_RE.match(lines[0]).groups()
    body = lines[1:]
    if body:
        m = FENCE_CLOSE_RE.match(body[-1])
        if m and m.group(1)[0] == fence[0] and len(m.group(1)) >= len(fence):
            body = body[:-1]
    body = [line[min(len(indent), _leading_ws(line)):] for line in body]

    attributes = {}
    if info.strip():
        attributes["info"] = info.split()[0]
    ctx.tree.add(NodeType.code_block, parent, contents=_code_text(body), **attributes)


def _build_html_block(ctx: _Context, parent: int, block: Block) -> None:
    _expect(block, BlockType.html_block)
    ctx.tree.add(NodeType.html_block, parent, contents=ctx.source[block.start:block.end])


def _build_paragraph(ctx: _Context, parent: int, block: Block) -> None:
    _expect(block, BlockType.paragraph)
    paragraph = ctx.tree.add(NodeType.paragraph, parent)
    parse_inlines(_paragraph_text(ctx.texts(block)), ctx.tree, paragraph)


def _build_block_quote(ctx: _Context, parent: int, block: Block) -> None:
    _expect(block, BlockType.block_quote)
    inner = "\n".join(QUOTE_MARKER_RE.sub("", line, count=1) for line in ctx.texts(block))
    quote = ctx.tree.add(NodeType.block_quote, parent)
    ctx.descend(quote, inner)


def _split_items(lines: list[str], marker_re: re.Pattern) -> list[tuple[int, list[str]]]:
    """Split list lines into (start_number, body_lines) runs, one per item.

    A marker line opens a new item only when it is indented less than the
    current item's content width; deeper markers belong to the current item.
    """
    ordered = marker_re is ORDERED_RE
    items: list[tuple[int, list[str]]] = []
    width = 0
    for text in lines:
        m = marker_re.match(text)
        if m and (not items or _leading_ws(text) < width):
            marker_end = m.end(3) if ordered else m.end(2)
            rest = text[marker_end:]
            spaces = _leading_ws(rest)
            if not rest.strip():
                width, content = marker_end + 1, ""
            elif spaces > 4:
                width, content = marker_end + 1, rest[1:]
            else:
                width, content = marker_end + spaces, rest[spaces:]
            number = int(m.group(2)) if ordered else 1
            items.append((number, [content]))
        elif items:
            items[-1][1].append(text[min(width, _leading_ws(text)):])
        else:
            raise ValueError(f"List block does not start with a list marker: {text!r}")
    return items


def _build_list(ctx: _Context, parent: int, block: Block) -> None:
    _expect(block, BlockType.bullet_list, BlockType.ordered_list)
    lines = ctx.texts(block)
    ordered = block.type is BlockType.ordered_list
    items = _split_items(lines, ORDERED_RE if ordered else BULLET_RE)
    tight = not any(BLANK_RE.match(line) for line in lines)

    attributes = {"ordered": ordered, "tight": tight}
    if ordered:
        attributes["start"] = items[0][0]
    node = ctx.tree.add(NodeType.list, parent, **attributes)

    for _, body in items:
        item = ctx.tree.add(NodeType.list_item, node, tight=tight)
        while len(body) > 1 and not body[-1].strip():
            body.pop()
        if tight and len(body) == 1:
            parse_inlines(body[0].strip(), ctx.tree, item)
        else:
            ctx.descend(item, "\n".join(body))


def _build_blank_line(ctx: _Context, parent: int, block: Block) -> None:
    _expect(block, BlockType.blank_line)


BUILDERS: dict[BlockType, Callable[[_Context, int, Block], None]] = {
    BlockType.thematic_break: _build_thematic_break,
    BlockType.atx_heading:    _build_atx_heading,
    BlockType.setext_heading: _build_setext_heading,
    BlockType.indented_code:  _build_indented_code,
    BlockType.fenced_code:    _build_fenced_code,
    BlockType.html_block:     _build_html_block,
    BlockType.paragraph:      _build_paragraph,
    BlockType.block_quote:    _build_block_quote,
    BlockType.bullet_list:    _build_list,
    BlockType.ordered_list:   _build_list,
    BlockType.blank_line:     _build_blank_line,
}


def build_into(tree: Tree, parent: int, source: str, depth: int = 0, max_depth: int = DEFAULT_MAX_DEPTH) -> None:
    """Run segment -> classify -> build over source, appending nodes under parent.

    Nested quote/list bodies are built straight into their container node, so
    no nested document root is ever kept.
    """
    if depth > max_depth:
        raise TooDeeplyNested(depth, max_depth)
    if depth:
        logger.debug("building nested content at depth %d", depth)
    lines = list(segment_lines(source))
    ctx = _Context(tree, source, lines, depth, max_depth)
    for block in classify_lines(source, lines):
        BUILDERS[block.type](ctx, parent, block)


def build_tree(source: str, max_depth: int = DEFAULT_MAX_DEPTH) -> Tree:
    """Build the document tree for source; node 0 is the document root."""
    tree = Tree()
    build_into(tree, Tree.ROOT, source, 0, max_depth)
    return tree
