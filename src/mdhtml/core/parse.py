"""Markdown file discovery and YAML frontmatter extraction"""

import logging
import re
from pathlib import Path
from typing import Any

import yaml

from mdhtml.core.models import SourceDoc
from mdhtml.core.utils.slug import slugify


logger = logging.getLogger("mdhtml.core.parse")

FRONTMATTER_RE = re.compile(r'^---[ \t]*\r?\n(.*?)\r?\n---[ \t]*(?:\r?\n|$)', re.DOTALL)
MD_EXTENSIONS = {'.md', '.markdown'}


def strip_frontmatter(text: str) -> tuple[dict[str, Any], str]:
    """Return (frontmatter_dict, body) with a leading YAML header removed.

    A `---` fenced header that is not a YAML mapping is markdown (a thematic
    break and a setext heading, say) and is left in the body.
    """
    m = FRONTMATTER_RE.match(text)
    if not m:
        return {}, text
    try:
        fm = yaml.safe_load(m.group(1))
    except yaml.YAMLError:
        logger.debug("leading --- block is not YAML, keeping it as markdown")
        return {}, text
    if fm is None:
        fm = {}
    if not isinstance(fm, dict):
        logger.debug("leading --- block is a YAML %s, keeping it as markdown", type(fm).__name__)
        return {}, text
    return fm, text[m.end():]


def discover_files(path: Path) -> list[Path]:
    """Return sorted markdown files under path, or [path] if it is a single file."""
    if path.is_file():
        return [path] if path.suffix in MD_EXTENSIONS else []
    return sorted(p for p in path.rglob('*') if p.suffix in MD_EXTENSIONS)


def parse_text(text: str, name: str, frontmatter: bool = True) -> SourceDoc:
    """Wrap raw markdown in a SourceDoc, separating frontmatter when enabled."""
    fm, body = strip_frontmatter(text) if frontmatter else ({}, text)
    slug = fm.get('slug') or slugify(Path(name).stem)
    return SourceDoc(path=Path(name), slug=str(slug), markdown=body, frontmatter=fm)


def parse_file(path: Path, frontmatter: bool = True) -> SourceDoc:
    """Read a markdown file from disk into a SourceDoc."""
    doc = parse_text(path.read_text(encoding='utf-8'), str(path), frontmatter)
    doc.path = path
    return doc
