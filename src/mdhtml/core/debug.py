"""Plain-text inspector output: line and block dumps with visible control characters"""

from mdhtml.core.blocks import classify_lines
from mdhtml.core.lines import segment_lines
from mdhtml.core.models import Block


VISIBLE = {
    "\r\n": "[\\r\\n]",
    "\n": "[\\n]",
    "\r": "[\\r]",
    "\t": "[\\t]",
}


def bracketed(text: str) -> str:
    """Render every character as [c], spelling out line terminators and tabs."""
    out = []
    i = 0
    while i < len(text):
        if text.startswith("\r\n", i):
            out.append(VISIBLE["\r\n"])
            i += 2
            continue
        ch = text[i]
        out.append(VISIBLE.get(ch, f"[{ch}]"))
        i += 1
    return "".join(out)


def block_type_name(block: Block) -> str:
    return f"<{block.type.value.upper()}>"


def debug_info(source: str) -> str:
    """Describe how source segments into lines and classifies into blocks."""
    lines = list(segment_lines(source))
    out = [
        f"Source size: {len(source)}",
        f"Number of lines: {len(lines)}",
    ]
    for line in lines:
        text = source[line.start:line.next_start]
        out.append(f"Line {line.number} (length {len(text)}):\t{bracketed(text)}")

    blocks = classify_lines(source, lines)
    out.append(f"Number of Blocks: {len(blocks)}")
    for i, block in enumerate(blocks):
        text = source[block.start:block.end]
        out.append(f"Block {i} (length: {len(text)}): Type: {block_type_name(block)}")
        out.append(bracketed(text))
    return "\n".join(out) + "\n"
