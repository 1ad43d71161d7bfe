"""Unit tests for core/pipeline.py"""

import pytest

from mdhtml.core.errors import TooDeeplyNested
from mdhtml.core.models import BlockType, SourceDoc
from mdhtml.core.pipeline import (
    block_infos,
    build_tree,
    classify_blocks,
    render_html,
    run_build,
    run_render,
    segment_lines,
)


def _doc(markdown: str, **frontmatter) -> SourceDoc:
    return SourceDoc(path=None, slug="doc", markdown=markdown, frontmatter=frontmatter)


def test_stage_entry_points(sample_md, sample_lines, sample_blocks):
    """Each stage is reachable from the pipeline module with its own name."""
    assert list(segment_lines(sample_md)) == sample_lines
    assert classify_blocks(sample_md) == sample_blocks
    assert len(build_tree(sample_md)) > 1


def test_block_infos_carry_text():
    """block_infos pairs each block with its source text."""
    infos = block_infos("# T\n\npara")
    assert [i.type for i in infos] == [BlockType.atx_heading, BlockType.blank_line, BlockType.paragraph]
    assert infos[0].text == "# T"
    assert infos[-1].model_dump(mode="json")["type"] == "paragraph"


def test_render_html_depth_limit():
    """A pathological nesting depth is rejected, not recursed into."""
    with pytest.raises(TooDeeplyNested):
        render_html(">" * 70 + " a")
    assert render_html(">" * 70 + " a", max_depth=100).count("<blockquote>") == 70


def test_run_render_fragment():
    """fragment=True returns the bare body."""
    assert run_render(_doc("# Hi"), fragment=True) == "<h1>Hi</h1>\n"


def test_run_render_page_title():
    """Full pages use the frontmatter title, else the slug."""
    assert "<title>Named</title>" in run_render(_doc("x", title="Named"))
    assert "<title>doc</title>" in run_render(_doc("x"))


def test_run_build_writes_files(tmp_path):
    """run_build renders each discovered file and returns (source, output) pairs."""
    src = tmp_path / "src"
    src.mkdir()
    (src / "a.md").write_text("# A\n")
    (src / "b.md").write_text("---\nslug: bee\n---\nB\n")
    out = tmp_path / "out"

    results = run_build(str(src), out, fragment=True)

    assert [o.name for _, o in results] == ["a.html", "bee.html"]
    assert (out / "a.html").read_text() == "<h1>A</h1>\n"
    assert (out / "bee.html").read_text() == "<p>B</p>\n"


def test_run_build_wraps_failures(tmp_path):
    """A failing file is reported with its path."""
    (tmp_path / "deep.md").write_text("> > > x\n")
    with pytest.raises(RuntimeError, match="deep.md"):
        run_build(str(tmp_path), tmp_path / "out", max_depth=2)


def test_run_build_no_files(tmp_path):
    """A directory without markdown files builds nothing."""
    assert run_build(str(tmp_path), tmp_path / "out") == []
