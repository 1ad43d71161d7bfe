"""Inline tokenization and emphasis/strong resolution for leaf text"""

from typing import Optional

from mdhtml.core.models import NodeType, Token, TokenType, Tree


MARKERS = "*_"
SPACE = " \t"
NEWLINE = "\r\n"


def _intraword(text: str, start: int, end: int) -> bool:
    """True when the marker run text[start:end] sits between two alphanumerics."""
    return (
        start > 0 and end < len(text)
        and text[start - 1].isalnum() and text[end].isalnum()
    )


def _run_end(text: str, i: int, chars: str) -> int:
    while i < len(text) and text[i] in chars:
        i += 1
    return i


def _marker_tokens(text: str, start: int, end: int) -> list[Token]:
    """Split a marker run into strong/emphasis tokens; longer runs stay literal."""
    run = text[start:end]
    size = len(run)
    if size == 1:
        sizes = [1]
    elif size == 2:
        sizes = [2]
    elif size == 3:
        opening = end < len(text) and not text[end].isspace()
        sizes = [2, 1] if opening else [1, 2]
    else:
        return [Token(TokenType.word, start, end, run)]

    tokens = []
    pos = start
    for n in sizes:
        kind = TokenType.strong_marker if n == 2 else TokenType.emph_marker
        tokens.append(Token(kind, pos, pos + n, text[pos:pos + n]))
        pos += n
    return tokens


def tokenize(text: str) -> list[Token]:
    """Split text into word, whitespace, line-ending and marker tokens."""
    tokens: list[Token] = []
    i = 0
    n = len(text)

    while i < n:
        ch = text[i]
        if ch in NEWLINE:
            end = i + 2 if text.startswith("\r\n", i) else i + 1
            tokens.append(Token(TokenType.line_ending, i, end, text[i:end]))
        elif ch in SPACE:
            end = _run_end(text, i, SPACE)
            tokens.append(Token(TokenType.whitespace, i, end, text[i:end]))
        elif ch in MARKERS:
            end = _run_end(text, i, ch)
            tokens.extend(_marker_tokens(text, i, end))
        else:
            end = i + 1
            while end < n:
                c = text[end]
                if c in SPACE or c in NEWLINE or c == "*":
                    break
                if c == "_":
                    run_end = _run_end(text, end, "_")
                    if not _intraword(text, end, run_end):
                        break
                    end = run_end
                    continue
                end += 1
            tokens.append(Token(TokenType.word, i, end, text[i:end]))
        i = end

    return tokens


class _Resolver:
    """Folds marker tokens into emph/strong nodes under a parent node."""

    def __init__(self, text: str, tree: Tree, parent: int):
        self.text = text
        self.tree = tree
        self.stack: list[tuple[NodeType, int]] = [(NodeType.document, parent)]
        self.current: Optional[int] = None

    @property
    def container(self) -> int:
        return self.stack[-1][1]

    def is_open(self, kind: NodeType) -> bool:
        return any(k is kind for k, _ in self.stack[1:])

    def append_text(self, value: str) -> None:
        if self.current is None:
            self.current = self.tree.add(NodeType.text, self.container, contents="")
        node = self.tree[self.current]
        node.contents += value

    def can_open(self, token: Token) -> bool:
        return token.end < len(self.text) and not self.text[token.end].isspace()

    def can_close(self, token: Token) -> bool:
        return token.start > 0 and not self.text[token.start - 1].isspace()

    def marker(self, token: Token, kind: NodeType) -> None:
        if self.is_open(kind):
            if not self.can_close(token):
                self.append_text(token.value)
                return
            # no cross-nesting check: closing pops every container opened after kind
            while self.stack[-1][0] is not kind:
                self.stack.pop()
            self.stack.pop()
        elif self.can_open(token):
            self.stack.append((kind, self.tree.add(kind, self.container)))
        else:
            self.append_text(token.value)
            return
        self.current = None

    def run(self, tokens: list[Token]) -> None:
        for i, token in enumerate(tokens):
            if token.type is TokenType.word:
                self.append_text(token.value)
            elif token.type is TokenType.whitespace:
                following = tokens[i + 1] if i + 1 < len(tokens) else None
                if (
                    following is not None and following.type is TokenType.line_ending
                    and token.value.endswith("  ") and i + 2 < len(tokens)
                ):
                    self.tree.add(NodeType.linebreak, self.container)
                    self.current = None
                else:
                    self.append_text(token.value)
            elif token.type is TokenType.emph_marker:
                self.marker(token, NodeType.emph)
            elif token.type is TokenType.strong_marker:
                self.marker(token, NodeType.strong)
            # line endings produce no node


def parse_inlines(text: str, tree: Tree, parent: int) -> list[int]:
    """Append inline nodes for text under parent; return the new direct children."""
    before = len(tree[parent].children)
    _Resolver(text, tree, parent).run(tokenize(text))
    return tree[parent].children[before:]
