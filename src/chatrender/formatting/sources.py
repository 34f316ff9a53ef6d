"""Citation lookups and source listing rows.

The parser never checks `[N]` markers against the sources returned with an answer. These
helpers are for the render layer: they resolve markers by 1-based position and report the ones
that point nowhere, without touching the document.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from chatrender.logging import get_logger
from chatrender.models.blocks import CitationSpan, Document
from chatrender.models.chat import Source

logger = get_logger(__name__)


def citation_indices(document: Document) -> list[int]:
    """Return cited source numbers in first-seen order, without duplicates."""

    seen: set[int] = set()
    out: list[int] = []
    for block in document.blocks:
        for span in block.spans:
            if isinstance(span, CitationSpan) and span.index not in seen:
                out.append(span.index)
                seen.add(span.index)
    return out


def resolve_citation(index: int, sources: Sequence[Source]) -> Source | None:
    """Look up the source a `[index]` marker refers to (1-based), or None if out of range."""

    if 1 <= index <= len(sources):
        return sources[index - 1]
    return None


def unresolved_citations(document: Document, sources: Sequence[Source]) -> list[int]:
    """Return cited numbers that have no matching source."""

    missing = [i for i in citation_indices(document) if resolve_citation(i, sources) is None]
    if missing:
        logger.warning(
            "Answer cites sources that were not returned",
            extra={"missing": missing, "source_count": len(sources)},
        )
    return missing


@dataclass(frozen=True)
class SourceSummary:
    """Display row for one source in the "Sources (n)" listing."""

    number: int
    filename: str
    chunk_label: str
    match_label: str
    excerpt: str


def summarize_source(number: int, source: Source, *, excerpt_chars: int = 200) -> SourceSummary:
    """Build the display row for a source.

    Args:
        number: 1-based position in the listing.
        source: Source record.
        excerpt_chars: Maximum excerpt length before truncation.
    """

    meta = source.metadata
    filename = (meta.filename or "").strip() or "Unknown"

    if meta.chunk_index is not None:
        chunk_label = str(meta.chunk_index)
    elif meta.page is not None:
        chunk_label = str(meta.page)
    else:
        chunk_label = "N/A"

    score = source.similarity_score
    match_label = f"{score * 100:.1f}%" if score else "N/A"

    text = source.text
    if not text:
        excerpt = "No text"
    elif len(text) > excerpt_chars:
        excerpt = text[:excerpt_chars] + "..."
    else:
        excerpt = text

    return SourceSummary(
        number=number,
        filename=filename,
        chunk_label=chunk_label,
        match_label=match_label,
        excerpt=excerpt,
    )


def summarize_sources(sources: Sequence[Source], *, excerpt_chars: int = 200) -> list[SourceSummary]:
    """Build display rows for all sources, numbered from 1."""

    return [
        summarize_source(i, s, excerpt_chars=excerpt_chars)
        for i, s in enumerate(sources, start=1)
    ]
