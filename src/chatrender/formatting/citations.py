"""Citation marker extraction.

Assistant answers reference their sources with bracketed numbers such as `[1]`. Only a pure
ASCII digit run inside the brackets counts; `[note]`, `[1a]` or `[]` stay plain text.
"""

from __future__ import annotations

import re

from chatrender.models.blocks import CitationSpan, InlineSpan, TextSpan

# Longer digit runs exceed int()'s default string conversion limit and stay text.
_MAX_INDEX_DIGITS = 4000

_CITATION_RE = re.compile(r"\[(?P<index>[0-9]{1,%d})\]" % _MAX_INDEX_DIGITS)


def extract_citations(text: str) -> list[InlineSpan]:
    """Split a plain fragment into text and citation spans.

    Args:
        text: Fragment without bold delimiters.

    Returns:
        Spans in source order. Text between markers is kept verbatim (no trimming) and no empty
        text spans are produced, so a fragment without markers comes back as a single
        `TextSpan` (or nothing at all for an empty fragment).
    """

    spans: list[InlineSpan] = []
    last = 0
    for m in _CITATION_RE.finditer(text):
        if m.start() > last:
            spans.append(TextSpan(text=text[last : m.start()]))
        spans.append(CitationSpan(index=int(m.group("index"))))
        last = m.end()
    if last < len(text):
        spans.append(TextSpan(text=text[last:]))
    return spans


def has_citations(text: str) -> bool:
    """Return True if `text` contains at least one `[N]` marker."""

    return _CITATION_RE.search(text) is not None
