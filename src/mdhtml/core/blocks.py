"""Block classification: ordered line rules and merging of lines into block regions"""

import logging
import re
from dataclasses import replace
from typing import Callable, Optional

from mdhtml.core.lines import line_text, segment_lines
from mdhtml.core.models import Block, BlockType, Line


logger = logging.getLogger("mdhtml.core.blocks")

BULLET_RE = re.compile(r'^( {0,3})([-+*])([ \t]+|$)')
ORDERED_RE = re.compile(r'^( {0,3})(\d{1,9})([.)])([ \t]+|$)')
SETEXT_RE = re.compile(r'^ {0,3}(=+|-+)[ \t]*$')
THEMATIC_RE = re.compile(r'^(?: {0,3}|\t+)(?:(?:\*[ \t]*){3,}|(?:-[ \t]*){3,}|(?:_[ \t]*){3,})$')
ATX_RE = re.compile(r'^ {0,3}#{1,6}(?:[ \t].*)?$')
QUOTE_RE = re.compile(r'^ {0,3}>')
INDENTED_RE = re.compile(r'^(?: {4}| {0,3}\t).*\S')
FENCE_RE = re.compile(r'^( {0,3})(`{3,}|~{3,})(.*)$')
FENCE_CLOSE_RE = re.compile(r'^ {0,3}(`{3,}|~{3,})[ \t]*$')
HTML_OPEN_RE = re.compile(r'^ {0,3}<[A-Za-z/!?]')
HTML_SELF_CLOSED_RE = re.compile(r'</|/>\s*$|-->\s*$')
HTML_COMMENT_END_RE = re.compile(r'-->\s*$')
BLANK_RE = re.compile(r'^[ \t]*$')

# Classifier-only kind: a setext underline becomes a heading, a break or a paragraph
SETEXT_UNDERLINE = "setext_underline"

CONTINUABLE = {
    BlockType.paragraph,
    BlockType.blank_line,
    BlockType.block_quote,
    BlockType.bullet_list,
    BlockType.ordered_list,
    BlockType.indented_code,
}
LISTS = (BlockType.bullet_list, BlockType.ordered_list)


def _is_bullet(text: str) -> bool:
    return bool(BULLET_RE.match(text)) and not THEMATIC_RE.match(text)


def _is_ordered(text: str) -> bool:
    return bool(ORDERED_RE.match(text))


# Evaluated top to bottom, first match wins; the paragraph fallback must stay last.
RULES: tuple[tuple[object, Callable[[str], object]], ...] = (
    (BlockType.bullet_list,  _is_bullet),
    (BlockType.ordered_list, _is_ordered),
    (SETEXT_UNDERLINE,       SETEXT_RE.match),
    (BlockType.thematic_break, THEMATIC_RE.match),
    (BlockType.atx_heading,  ATX_RE.match),
    (BlockType.block_quote,  QUOTE_RE.match),
    (BlockType.indented_code, INDENTED_RE.match),
    (BlockType.fenced_code,  FENCE_RE.match),
    (BlockType.html_block,   HTML_OPEN_RE.match),
    (BlockType.blank_line,   BLANK_RE.match),
    (BlockType.paragraph,    lambda text: True),
)


def classify_line(text: str):
    """Return the kind of the first rule matching text."""
    for kind, rule in RULES:
        if rule(text):
            return kind
    raise AssertionError("paragraph fallback rule did not match")


def _scan_fence(texts: list[str], first: int) -> int:
    """Index of the closing fence line for the fence opened at first, else the last line."""
    fence = FENCE_RE.match(texts[first]).group(2)
    for j in range(first + 1, len(texts)):
        m = FENCE_CLOSE_RE.match(texts[j])
        if m and m.group(1)[0] == fence[0] and len(m.group(1)) >= len(fence):
            return j
    return len(texts) - 1


def _scan_html(texts: list[str], first: int) -> int:
    """Index of the line closing the HTML block opened at first, else the last line."""
    if HTML_SELF_CLOSED_RE.search(texts[first]):
        return first
    for j in range(first + 1, len(texts)):
        if texts[j].lstrip().startswith("</") or HTML_COMMENT_END_RE.search(texts[j]):
            return j
    return len(texts) - 1


def _next_content_index(texts: list[str]) -> list[Optional[int]]:
    """For each line, the index of the first non-blank line after it, if any."""
    following: list[Optional[int]] = [None] * len(texts)
    upcoming = None
    for i in range(len(texts) - 1, -1, -1):
        following[i] = upcoming
        if not BLANK_RE.match(texts[i]):
            upcoming = i
    return following


class _Builder:
    """Append-only block list with one open (last) block that may be extended."""

    def __init__(self, lines: list[Line]):
        self.lines = lines
        self.blocks: list[Block] = []

    def last_type(self) -> Optional[BlockType]:
        return self.blocks[-1].type if self.blocks else None

    def open(self, type: BlockType, first: int, last: int) -> None:
        self.blocks.append(Block(
            type=type,
            start=self.lines[first].start,
            end=self.lines[last].end,
            first_line=first,
            last_line=last,
        ))

    def extend(self, last: int, type: Optional[BlockType] = None) -> None:
        block = self.blocks[-1]
        self.blocks[-1] = replace(
            block,
            type=type or block.type,
            end=self.lines[last].end,
            last_line=last,
        )


def classify_lines(source: str, lines: list[Line]) -> list[Block]:
    """Group lines into blocks covering the whole of lines without gaps."""
    texts = [line_text(source, line) for line in lines]
    following = _next_content_index(texts)
    out = _Builder(lines)
    i = 0

    while i < len(lines):
        text = texts[i]
        kind = classify_line(text)
        previous = out.last_type()

        if previous in LISTS and kind is not BlockType.blank_line and text[:1] in (" ", "\t"):
            # indented continuation of the open list item
            out.extend(i)
        elif previous in LISTS and kind is BlockType.blank_line:
            nxt = following[i]
            upcoming = texts[nxt] if nxt is not None else None
            if upcoming is not None and (upcoming[:1] in (" ", "\t") or classify_line(upcoming) is previous):
                out.extend(i)
            else:
                out.open(kind, i, i)
        elif kind == SETEXT_UNDERLINE:
            if previous is BlockType.paragraph:
                out.extend(i, BlockType.setext_heading)
            elif THEMATIC_RE.match(text):
                out.open(BlockType.thematic_break, i, i)
            else:
                out.open(BlockType.paragraph, i, i)
        elif kind is BlockType.indented_code and previous in (BlockType.indented_code, BlockType.paragraph):
            out.extend(i)
        elif kind is BlockType.fenced_code:
            last = _scan_fence(texts, i)
            out.open(kind, i, last)
            i = last
        elif kind is BlockType.html_block:
            last = _scan_html(texts, i)
            out.open(kind, i, last)
            i = last
        elif kind in CONTINUABLE and kind is previous:
            out.extend(i)
        else:
            out.open(kind, i, i)
        i += 1

    logger.debug("classified %d line(s) into %d block(s)", len(lines), len(out.blocks))
    return out.blocks


def classify_blocks(source: str) -> list[Block]:
    """Segment source into lines and classify them into an ordered block list."""
    return classify_lines(source, list(segment_lines(source)))


def block_text(source: str, block: Block) -> str:
    """Source text of a block, internal terminators included."""
    return source[block.start:block.end]
