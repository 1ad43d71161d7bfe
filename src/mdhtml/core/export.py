"""Export: wrap rendered fragments in a page and write output files"""

import logging
from pathlib import Path
from typing import Optional

from mdhtml.core.render import escape_html


logger = logging.getLogger("mdhtml.core.export")

PAGE_TEMPLATE = """\
<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<title>{title}</title>
{css}</head>
<body>
{body}</body>
</html>
"""


def build_page(body: str, title: str, css: Optional[str] = None) -> str:
    """Return body wrapped in a standalone HTML page with an escaped title."""
    link = f'<link rel="stylesheet" href="{escape_html(css)}">\n' if css else ""
    return PAGE_TEMPLATE.format(title=escape_html(title), css=link, body=body)


def write_doc(html: str, slug: str, output_dir: Path) -> Path:
    """Write html to <output_dir>/<slug>.html and return the path."""
    output_dir.mkdir(parents=True, exist_ok=True)
    out_path = output_dir / f"{slug}.html"
    out_path.write_text(html, encoding="utf-8")
    logger.debug("wrote %d characters to %s", len(html), out_path)
    return out_path
