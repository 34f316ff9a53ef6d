"""Plain-text renderer."""

from __future__ import annotations

from typing import Iterable, Sequence

from chatrender.formatting.sources import summarize_sources
from chatrender.models.blocks import (
    Block,
    BlockKind,
    CitationSpan,
    Document,
    InlineSpan,
    NestedNumberedItemBlock,
    NumberedItemBlock,
)
from chatrender.models.chat import Source

_NESTED_INDENT = "   "


def spans_to_text(spans: Iterable[InlineSpan]) -> str:
    """Flatten spans back to readable text (bold loses its delimiters)."""

    parts: list[str] = []
    for span in spans:
        if isinstance(span, CitationSpan):
            parts.append(f"[{span.index}]")
        else:
            parts.append(span.text)
    return "".join(parts)


def block_prefix(block: Block) -> str:
    """Marker printed in front of a block's text."""

    if block.kind in (BlockKind.BULLET_HEADER, BlockKind.BULLET_ITEM):
        return "• "
    if block.kind == BlockKind.PLUS_BULLET_ITEM:
        return "+ "
    if isinstance(block, NestedNumberedItemBlock):
        return f"{_NESTED_INDENT}{block.number}. "
    if isinstance(block, NumberedItemBlock):
        return f"{block.label}. "
    return ""


def render_text(
    document: Document,
    sources: Sequence[Source] | None = None,
    *,
    excerpt_chars: int = 200,
) -> str:
    """Render a document as plain text, one output line per block."""

    lines = [
        "" if block.kind == BlockKind.SPACER else block_prefix(block) + spans_to_text(block.spans)
        for block in document.blocks
    ]
    if sources:
        lines.append("")
        lines.append(f"Sources ({len(sources)})")
        for row in summarize_sources(sources, excerpt_chars=excerpt_chars):
            lines.append(
                f"[{row.number}] {row.filename} | Chunk {row.chunk_label} | {row.match_label} match"
            )
            lines.append(f"    {row.excerpt}")
    return "\n".join(lines)
