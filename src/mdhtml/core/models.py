"""Data models for the line, block, token and node stages of the compiler"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel


@dataclass(frozen=True)
class Line:
    """One source line: half-open [start, end) content range plus its terminator."""
    number:     int
    start:      int
    end:        int
    terminator: str = ""        # "\n", "\r", "\r\n" or "" for an unterminated final line

    @property
    def next_start(self) -> int:
        return self.end + len(self.terminator)


class BlockType(str, Enum):
    """Block kinds assigned by the classifier"""
    thematic_break = "thematic_break"
    atx_heading = "atx_heading"
    setext_heading = "setext_heading"
    indented_code = "indented_code"
    fenced_code = "fenced_code"
    html_block = "html_block"
    paragraph = "paragraph"
    block_quote = "block_quote"
    bullet_list = "bullet_list"
    ordered_list = "ordered_list"
    blank_line = "blank_line"


@dataclass(frozen=True)
class Block:
    """A contiguous run of lines classified as one structural unit."""
    type:       BlockType
    start:      int             # first line's start offset
    end:        int             # last line's content end (exclusive, terminator excluded)
    first_line: int
    last_line:  int             # inclusive

    @property
    def line_count(self) -> int:
        return self.last_line - self.first_line + 1


class BlockInfo(BaseModel):
    """Serializable view of a Block for the CLI and the inspector."""
    type: BlockType
    start: int
    end: int
    first_line: int
    last_line: int
    text: str


class TokenType(str, Enum):
    """Inline token kinds"""
    word = "word"
    whitespace = "whitespace"
    line_ending = "line_ending"
    emph_marker = "emph_marker"
    strong_marker = "strong_marker"


@dataclass(frozen=True)
class Token:
    """A transient inline token; value is the exact source slice."""
    type:  TokenType
    start: int
    end:   int
    value: str


class NodeType(str, Enum):
    """Node kinds of the document tree"""
    document = "document"
    block_quote = "block_quote"
    list = "list"
    list_item = "list_item"
    code_block = "code_block"
    paragraph = "paragraph"
    heading = "heading"
    thematic_break = "thematic_break"
    html_block = "html_block"
    text = "text"
    emph = "emph"
    strong = "strong"
    softbreak = "softbreak"
    linebreak = "linebreak"


@dataclass
class Node:
    """A tree node; parent and children are indices into the owning Tree."""
    type:       NodeType
    contents:   Optional[str] = None
    attributes: dict[str, Any] = field(default_factory=dict)
    children:   list[int] = field(default_factory=list)
    parent:     Optional[int] = None


class Tree:
    """Arena of nodes; index 0 is always the document root."""

    ROOT = 0

    def __init__(self):
        self.nodes: list[Node] = [Node(NodeType.document)]

    def __len__(self) -> int:
        return len(self.nodes)

    def __getitem__(self, index: int) -> Node:
        return self.nodes[index]

    def add(self, type: NodeType, parent: int, contents: Optional[str] = None, **attributes) -> int:
        """Append a node under parent and return its index."""
        index = len(self.nodes)
        self.nodes.append(Node(type, contents=contents, attributes=attributes, parent=parent))
        self.nodes[parent].children.append(index)
        return index

    def children(self, index: int) -> list[Node]:
        return [self.nodes[i] for i in self.nodes[index].children]

    def walk(self, index: int = ROOT):
        """Yield (index, node) depth-first in rendering order."""
        stack = [index]
        while stack:
            i = stack.pop()
            yield i, self.nodes[i]
            stack.extend(reversed(self.nodes[i].children))


@dataclass
class SourceDoc:
    """A markdown file read from disk, frontmatter already separated."""
    path:        Path
    slug:        str
    markdown:    str            # body handed to the compiler
    frontmatter: dict[str, Any]

    @property
    def title(self) -> str:
        return str(self.frontmatter.get("title") or self.slug)
