"""Slug generation for output file names"""

import re
import unicodedata


MAX_SLUG_LENGTH = 80


def slugify(text: str, fallback: str = "document") -> str:
    """Turn text into an ASCII, lowercase, hyphen-separated file name stem.

    Accented letters are folded to their base letter; anything that leaves
    nothing usable returns fallback.
    """
    text = unicodedata.normalize("NFKD", text).encode("ascii", "ignore").decode("ascii")
    words = re.sub(r'[^\w\s-]', '', text.lower())
    slug = re.sub(r'[-\s_]+', '-', words).strip('-')
    return slug[:MAX_SLUG_LENGTH].rstrip('-') or fallback
