"""HTML renderer.

Produces a self-contained fragment; styling is left to the embedding page via the CSS classes
on each element. Every block becomes one `<div>` whose `data-key` is the block identity.
"""

from __future__ import annotations

from html import escape
from typing import Iterable, Sequence

from chatrender.formatting.sources import summarize_sources
from chatrender.models.blocks import (
    Block,
    BlockKind,
    BoldSpan,
    CitationSpan,
    Document,
    InlineSpan,
    NestedNumberedItemBlock,
    NumberedItemBlock,
)
from chatrender.models.chat import Source


def spans_to_html(spans: Iterable[InlineSpan]) -> str:
    """Render inline spans. Citations always read "Source N", in range or not."""

    parts: list[str] = []
    for span in spans:
        if isinstance(span, BoldSpan):
            parts.append(f"<strong>{escape(span.text)}</strong>")
        elif isinstance(span, CitationSpan):
            parts.append(
                f'<span class="citation" title="Source {span.index}">[{span.index}]</span>'
            )
        else:
            parts.append(escape(span.text))
    return "".join(parts)


def _marker(block: Block) -> str | None:
    if block.kind in (BlockKind.BULLET_HEADER, BlockKind.BULLET_ITEM):
        return "•"
    if block.kind == BlockKind.PLUS_BULLET_ITEM:
        return "+"
    if isinstance(block, NestedNumberedItemBlock):
        return f"{block.number}."
    if isinstance(block, NumberedItemBlock):
        return f"{escape(block.label)}."
    return None


def block_to_html(block: Block) -> str:
    """Render one block as a `<div>`."""

    css = f"block {block.kind.replace('_', '-')}"
    attrs = f'class="{css}" data-key="{escape(block.key)}"'
    if block.kind == BlockKind.SPACER:
        return f"<div {attrs}></div>"

    body = spans_to_html(block.spans)
    marker = _marker(block)
    if marker is None:
        return f"<div {attrs}>{body}</div>"
    return f'<div {attrs}><span class="marker">{marker}</span><div class="item">{body}</div></div>'


def sources_to_html(sources: Sequence[Source], *, excerpt_chars: int = 200) -> str:
    """Render the collapsible "Sources (n)" listing."""

    rows = []
    for row in summarize_sources(sources, excerpt_chars=excerpt_chars):
        rows.append(
            '<div class="source">'
            f'<div class="source-meta"><span class="source-number">[{row.number}]</span> '
            f'<span class="filename">{escape(row.filename)}</span> • '
            f"<span>Chunk {escape(row.chunk_label)}</span> • "
            f'<span class="match">{escape(row.match_label)} match</span></div>'
            f'<div class="excerpt">{escape(row.excerpt)}</div>'
            "</div>"
        )
    return (
        '<details class="sources">'
        f"<summary>Sources ({len(sources)})</summary>"
        + "".join(rows)
        + "</details>"
    )


def render_html(
    document: Document,
    sources: Sequence[Source] | None = None,
    *,
    excerpt_chars: int = 200,
) -> str:
    """Render a document (and optionally its sources) as an HTML fragment."""

    blocks = [block_to_html(b) for b in document.blocks]
    inner = "\n" + "\n".join(blocks) + "\n" if blocks else ""
    out = f'<div class="markdown-content">{inner}</div>'
    if sources:
        out += "\n" + sources_to_html(sources, excerpt_chars=excerpt_chars)
    return out
