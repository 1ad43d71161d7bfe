"""Exceptions raised by the markdown compiler"""


class MarkdownError(Exception):
    """Base class for compiler errors."""


class TooDeeplyNested(MarkdownError):
    """Block quote / list recursion went past the configured depth."""

    def __init__(self, depth: int, limit: int):
        self.depth = depth
        self.limit = limit
        super().__init__(f"Nesting depth {depth} exceeds the limit of {limit}")
