"""Word tokenization for feedback text."""

from __future__ import annotations

import re
from typing import Iterator

WORD_RE = re.compile(r"\w+")


def iter_tokens(text: str | None) -> Iterator[str]:
    """Yield lowercase word tokens lazily, skipping punctuation and whitespace."""
    for match in WORD_RE.finditer((text or "").lower()):
        yield match.group(0)
