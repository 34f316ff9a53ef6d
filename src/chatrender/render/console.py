"""Terminal renderer built on `rich`."""

from __future__ import annotations

import io
from typing import Iterable, Sequence

from rich.console import Console, Group, RenderableType
from rich.table import Table
from rich.text import Text

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

BOLD_STYLE = "bold bright_blue"
CITATION_STYLE = "bold white on blue"

_MARKER_STYLES = {
    BlockKind.BULLET_HEADER.value: "bold blue",
    BlockKind.BULLET_ITEM.value: "blue",
    BlockKind.PLUS_BULLET_ITEM.value: "green",
    BlockKind.NESTED_NUMBERED_ITEM.value: "bold green",
    BlockKind.NUMBERED_ITEM.value: "bold magenta",
}


def spans_to_rich(spans: Iterable[InlineSpan]) -> Text:
    """Build a styled `Text` from inline spans."""

    text = Text()
    for span in spans:
        if isinstance(span, BoldSpan):
            text.append(span.text, style=BOLD_STYLE)
        elif isinstance(span, CitationSpan):
            text.append(f"[{span.index}]", style=CITATION_STYLE)
        else:
            text.append(span.text)
    return text


def block_to_rich(block: Block) -> Text:
    if block.kind == BlockKind.SPACER:
        return Text()

    if isinstance(block, NestedNumberedItemBlock):
        marker = f"   {block.number}. "
    elif isinstance(block, NumberedItemBlock):
        marker = f"{block.label}. "
    elif block.kind == BlockKind.PLUS_BULLET_ITEM:
        marker = "+ "
    elif block.kind in (BlockKind.BULLET_HEADER, BlockKind.BULLET_ITEM):
        marker = "• "
    else:
        marker = ""

    line = Text(marker, style=_MARKER_STYLES.get(block.kind, ""))
    line.append_text(spans_to_rich(block.spans))
    if block.kind == BlockKind.HEADER:
        line.stylize("underline")
    return line


def render_sources_table(sources: Sequence[Source], *, excerpt_chars: int = 200) -> Table:
    """Render the source listing as a table."""

    table = Table(title=f"Sources ({len(sources)})", show_lines=False, expand=False)
    table.add_column("#", justify="right", style="bold")
    table.add_column("File")
    table.add_column("Chunk", justify="right")
    table.add_column("Match", justify="right", style="green")
    table.add_column("Excerpt", overflow="fold")
    for row in summarize_sources(sources, excerpt_chars=excerpt_chars):
        # Text cells so brackets in excerpts are not read as rich markup.
        table.add_row(
            str(row.number),
            Text(row.filename),
            Text(row.chunk_label),
            Text(row.match_label),
            Text(row.excerpt),
        )
    return table


def render_rich(
    document: Document,
    sources: Sequence[Source] | None = None,
    *,
    excerpt_chars: int = 200,
) -> RenderableType:
    """Build a renderable for `Console.print`."""

    items: list[RenderableType] = [block_to_rich(b) for b in document.blocks]
    if sources:
        items.append(Text())
        items.append(render_sources_table(sources, excerpt_chars=excerpt_chars))
    return Group(*items)


def render_console_text(
    document: Document,
    sources: Sequence[Source] | None = None,
    *,
    excerpt_chars: int = 200,
    width: int = 100,
) -> str:
    """Render through `rich` and return the captured text without styles."""

    console = Console(file=io.StringIO(), width=width, record=True, color_system=None)
    console.print(render_rich(document, sources, excerpt_chars=excerpt_chars))
    return console.export_text(styles=False)
