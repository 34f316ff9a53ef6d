"""Inline span tokenization (bold emphasis and citations)."""

from __future__ import annotations

import re

from chatrender.formatting.citations import extract_citations
from chatrender.models.blocks import BoldSpan, InlineSpan

# Non-greedy: the first closing pair ends the span. A single colon right after it belongs to
# the bold text ("**Direct Answer**:" -> "Direct Answer:").
_BOLD_RE = re.compile(r"\*\*(?P<body>.*?)\*\*(?P<colon>:?)")


def tokenize_inline(text: str) -> tuple[InlineSpan, ...]:
    """Tokenize a line's content into text, bold and citation spans.

    Text outside bold spans is handed to :func:`extract_citations` and spliced in place. An
    opening `**` without a matching closing pair is ordinary text.

    Args:
        text: Marker-stripped line content.

    Returns:
        Spans in source order.
    """

    spans: list[InlineSpan] = []
    last = 0
    for m in _BOLD_RE.finditer(text):
        if m.start() > last:
            spans.extend(extract_citations(text[last : m.start()]))
        spans.append(BoldSpan(text=m.group("body") + m.group("colon")))
        last = m.end()
    if last < len(text):
        spans.extend(extract_citations(text[last:]))
    return tuple(spans)
