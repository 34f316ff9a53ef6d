"""Assistant answer formatting: text to an ordered block document."""

from __future__ import annotations

from chatrender.formatting.assembler import (
    DocumentAssembler,
    NumberingRegister,
    block_key,
    parse_message,
)
from chatrender.formatting.citations import extract_citations, has_citations
from chatrender.formatting.inline import tokenize_inline
from chatrender.formatting.lines import ClassifiedLine, classify_line, classify_lines, split_lines
from chatrender.formatting.sources import (
    SourceSummary,
    citation_indices,
    resolve_citation,
    summarize_source,
    summarize_sources,
    unresolved_citations,
)

__all__ = [
    "ClassifiedLine",
    "DocumentAssembler",
    "NumberingRegister",
    "SourceSummary",
    "block_key",
    "citation_indices",
    "classify_line",
    "classify_lines",
    "extract_citations",
    "has_citations",
    "parse_message",
    "resolve_citation",
    "split_lines",
    "summarize_source",
    "summarize_sources",
    "tokenize_inline",
    "unresolved_citations",
]
