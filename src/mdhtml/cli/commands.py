"""CLI command implementations"""

import json
import logging
import sys
from pathlib import Path
from typing import Annotated, Optional

import typer

from mdhtml.config import Settings, load_config
from mdhtml.core.errors import MarkdownError
from mdhtml.core.models import SourceDoc
from mdhtml.core.parse import parse_file, parse_text
from mdhtml.core.pipeline import block_infos, debug_info, run_build, run_render


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None) -> Settings:
    """Load config with standard CLI error handling; configures logging once."""
    try:
        settings = load_config(overrides=overrides)
    except ValueError as e:
        _fail(str(e))
    logging.basicConfig(level=settings.log_level, format="%(levelname)s %(name)s: %(message)s")
    return settings


def _read_source(path: str, frontmatter: bool) -> SourceDoc:
    """Read a markdown file, or stdin when path is '-'."""
    try:
        if path == "-":
            return parse_text(sys.stdin.read(), "stdin", frontmatter)
        p = Path(path)
        if not p.is_file():
            _fail(f"'{path}' does not exist or is not a file")
        return parse_file(p, frontmatter)
    except ValueError as e:
        _fail(f"Cannot read {path}", e)


def render_cmd(
    path: Annotated[str, typer.Argument(help="Markdown file to render ('-' for stdin)")],
    output: Annotated[Optional[str], typer.Option("--output", "-o", help="Write HTML here instead of stdout")] = None,
    fragment: Annotated[Optional[bool], typer.Option("--fragment/--page", help="Bare fragment or full HTML page")] = None,
    css: Annotated[Optional[str], typer.Option("--css", help="Stylesheet href for full pages")] = None,
    depth: Annotated[Optional[int], typer.Option("--max-depth", help="Max quote/list nesting depth")] = None,
    ):
    """Render a single markdown document to HTML."""
    settings = _settings(overrides={"fragment": fragment, "css": css, "max_depth": depth})
    doc = _read_source(path, settings.strip_frontmatter)
    try:
        html = run_render(doc, settings.max_depth, settings.fragment, settings.css)
    except MarkdownError as e:
        _fail(f"Cannot render {path}", e)

    if output:
        Path(output).write_text(html, encoding="utf-8")
        typer.echo(f"  {path} -> {output}")
    else:
        typer.echo(html, nl=False)


def build_cmd(
    path: Annotated[str, typer.Argument(help="File or directory to render")],
    out: Annotated[Optional[str], typer.Option("--out-dir", help="Output directory")] = None,
    fragment: Annotated[Optional[bool], typer.Option("--fragment/--page", help="Bare fragments or full HTML pages")] = None,
    css: Annotated[Optional[str], typer.Option("--css", help="Stylesheet href for full pages")] = None,
    depth: Annotated[Optional[int], typer.Option("--max-depth", help="Max quote/list nesting depth")] = None,
    ):
    """Render every markdown file under path into the output directory."""
    settings = _settings(overrides={
        "output_dir": out, "fragment": fragment, "css": css, "max_depth": depth,
    })
    output_dir = Path(settings.output_dir)
    try:
        results = run_build(
            path, output_dir, settings.max_depth, settings.fragment,
            settings.css, settings.strip_frontmatter,
        )
    except RuntimeError as e:
        _fail(str(e))
    if not results:
        typer.echo(f"No markdown files found at {path}.")
        raise typer.Exit(1)
    for src, out_file in results:
        typer.echo(f"  {src} -> {out_file}")
    typer.echo(f"Rendered {len(results)} document(s) to {output_dir}/")


def blocks_cmd(
    path: Annotated[str, typer.Argument(help="Markdown file to classify ('-' for stdin)")],
    as_json: Annotated[bool, typer.Option("--json", help="Print blocks as JSON")] = False,
    ):
    """List the blocks the classifier produces for a document."""
    settings = _settings()
    doc = _read_source(path, settings.strip_frontmatter)
    infos = block_infos(doc.markdown)
    if as_json:
        typer.echo(json.dumps([b.model_dump(mode="json") for b in infos], indent=2))
        return
    for i, b in enumerate(infos):
        typer.echo(f"{i:>4}  {b.type.value:<15} lines {b.first_line}-{b.last_line}  [{b.start}:{b.end}]")
    typer.echo(f"{len(infos)} block(s)")


def inspect_cmd(
    path: Annotated[str, typer.Argument(help="Markdown file to inspect ('-' for stdin)")],
    ):
    """Dump lines and blocks with control characters made visible."""
    settings = _settings()
    doc = _read_source(path, settings.strip_frontmatter)
    typer.echo(debug_info(doc.markdown), nl=False)
