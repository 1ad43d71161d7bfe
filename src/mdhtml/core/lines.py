"""Line segmentation: split source text on \\n, \\r and \\r\\n keeping exact offsets"""

from typing import Iterator

from mdhtml.core.models import Line


def segment_lines(source: str) -> Iterator[Line]:
    """Yield one Line per terminator-delimited line; empty source yields nothing."""
    start = 0
    number = 0
    index = 0
    length = len(source)

    while index < length:
        ch = source[index]
        if ch == "\n" or ch == "\r":
            terminator = "\r\n" if source.startswith("\r\n", index) else ch
            yield Line(number, start, index, terminator)
            number += 1
            index += len(terminator)
            start = index
            continue
        index += 1

    if start < length:
        yield Line(number, start, length)


def line_text(source: str, line: Line) -> str:
    """Content of line without its terminator."""
    return source[line.start:line.end]
