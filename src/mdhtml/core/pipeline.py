"""Public compiler entry points and file-level render/build orchestration"""

import logging
from pathlib import Path
from typing import Optional

from mdhtml.core.blocks import block_text, classify_blocks
from mdhtml.core.debug import debug_info
from mdhtml.core.export import build_page, write_doc
from mdhtml.core.lines import segment_lines
from mdhtml.core.models import BlockInfo, SourceDoc
from mdhtml.core.parse import discover_files, parse_file
from mdhtml.core.render import render
from mdhtml.core.tree import DEFAULT_MAX_DEPTH, build_tree


logger = logging.getLogger("mdhtml.core.pipeline")

__all__ = [
    "segment_lines", "classify_blocks", "build_tree", "render_html", "debug_info",
    "block_infos", "run_render", "run_build",
]


def render_html(source: str, max_depth: int = DEFAULT_MAX_DEPTH) -> str:
    """Full pipeline: source text in, HTML fragment out."""
    return render(build_tree(source, max_depth))


def block_infos(source: str) -> list[BlockInfo]:
    """Blocks of source with their text, for listings and JSON output."""
    return [
        BlockInfo(
            type=b.type, start=b.start, end=b.end,
            first_line=b.first_line, last_line=b.last_line,
            text=block_text(source, b),
        )
        for b in classify_blocks(source)
    ]


def run_render(
    doc: SourceDoc,
    max_depth: int = DEFAULT_MAX_DEPTH,
    fragment: bool = False,
    css: Optional[str] = None,
    ) -> str:
    """Render one document, wrapped in a full page unless fragment is set."""
    body = render_html(doc.markdown, max_depth)
    return body if fragment else build_page(body, doc.title, css)


def run_build(
    path: str,
    output_dir: Path,
    max_depth: int = DEFAULT_MAX_DEPTH,
    fragment: bool = False,
    css: Optional[str] = None,
    frontmatter: bool = True,
    ) -> list[tuple[Path, Path]]:
    """Render every markdown file under path into output_dir. Returns (source, html_path) pairs."""
    results = []
    for p in discover_files(Path(path)):
        try:
            doc = parse_file(p, frontmatter)
            html = run_render(doc, max_depth, fragment, css)
            out_file = write_doc(html, doc.slug, output_dir)
        except Exception as e:
            raise RuntimeError(f"Failed to render {p}: {e}") from e
        results.append((p, out_file))
    logger.debug("built %d document(s) into %s", len(results), output_dir)
    return results
