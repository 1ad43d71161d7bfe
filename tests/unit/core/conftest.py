"""Shared fixtures for core unit tests"""

import pytest

from mdhtml.core.blocks import classify_blocks
from mdhtml.core.lines import segment_lines


SAMPLE_MD = """\
# Heading 1

A paragraph with **bold** text.

Setext heading
--------------

- item one
- item two

> quoted text

```python
print("hello")
```

    indented code

<div>
raw html
</div>

---

Footer paragraph.
"""


@pytest.fixture(name="sample_md")
def sample_md_fixture():
    return SAMPLE_MD


@pytest.fixture(name="sample_lines")
def sample_lines_fixture():
    return list(segment_lines(SAMPLE_MD))


@pytest.fixture(name="sample_blocks")
def sample_blocks_fixture():
    return classify_blocks(SAMPLE_MD)
