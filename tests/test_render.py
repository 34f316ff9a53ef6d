"""Tests for renderers."""

from __future__ import annotations

import json

import pytest

from chatrender.formatting.assembler import parse_message
from chatrender.models.blocks import Document
from chatrender.models.chat import Source, SourceMetadata
from chatrender.render import render, render_console_text, render_html, render_text

ANSWER = """* **Direct Answer**: Paris [1]
* * First point
* * Second point

+ extra
2. two
**Summary**:
Plain [2] text"""

SOURCES = [
    Source(
        chunk_id="c1",
        text="Paris is the capital.",
        similarity_score=0.5,
        metadata=SourceMetadata(filename="geo.pdf", chunk_index=3),
    )
]


def test_render_text() -> None:
    """It should print one line per block with list markers and plain citations."""

    assert render_text(parse_message(ANSWER)).split("\n") == [
        "• Direct Answer: Paris [1]",
        "   1. First point",
        "   2. Second point",
        "",
        "+ extra",
        "2. two",
        "Summary:",
        "Plain [2] text",
    ]


def test_render_text_with_sources() -> None:
    """It should append the source listing after the answer."""

    out = render_text(parse_message("Answer [1]"), SOURCES)
    assert "Sources (1)" in out
    assert "[1] geo.pdf | Chunk 3 | 50.0% match" in out


def test_render_html_blocks_and_citations() -> None:
    """It should emit keyed divs, strong tags and citation badges titled by source number."""

    html = render_html(parse_message(ANSWER))
    assert '<div class="block bullet-header" data-key="line-0">' in html
    assert "<strong>Direct Answer:</strong>" in html
    assert '<span class="citation" title="Source 1">[1]</span>' in html
    assert '<span class="marker">2.</span>' in html
    assert '<div class="block spacer" data-key="line-3"></div>' in html


def test_render_html_escapes_text() -> None:
    """It should escape raw text so message content cannot inject markup."""

    html = render_html(parse_message("<script>alert(1)</script> **<b>**"))
    assert "<script>" not in html
    assert "&lt;script&gt;" in html
    assert "<strong>&lt;b&gt;</strong>" in html


def test_render_html_out_of_range_citation_still_shown() -> None:
    """It should label citations "Source N" whether or not source N exists."""

    html = render_html(parse_message("claim [7]"), SOURCES)
    assert 'title="Source 7"' in html
    assert "<summary>Sources (1)</summary>" in html


def test_render_html_empty_document() -> None:
    """It should render an empty container for an empty document."""

    assert render_html(Document()) == '<div class="markdown-content"></div>'


def test_render_console_text() -> None:
    """It should render through rich with numbering and a sources table."""

    out = render_console_text(parse_message(ANSWER), SOURCES)
    assert "• Direct Answer: Paris [1]" in out
    assert "1. First point" in out
    assert "Sources (1)" in out
    assert "geo.pdf" in out


def test_render_dispatch_json() -> None:
    """It should dump the document as JSON for the json format."""

    data = json.loads(render(parse_message("* **A**: b"), "json"))
    assert data["blocks"][0]["kind"] == "bullet_header"
    assert data["blocks"][0]["spans"] == [
        {"kind": "bold", "text": "A:"},
        {"kind": "text", "text": " b"},
    ]


def test_render_dispatch_unknown_format() -> None:
    """It should reject unknown formats."""

    with pytest.raises(ValueError):
        render(Document(), "pdf")  # type: ignore[arg-type]
