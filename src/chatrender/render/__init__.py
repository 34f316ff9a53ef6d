"""Renderers turning a parsed `Document` into visual output.

Rendering is a separate step from parsing so the output technology can be swapped without
touching the formatter.
"""

from __future__ import annotations

from typing import Sequence

from chatrender.config import RenderFormat
from chatrender.models.blocks import Document
from chatrender.models.chat import Source
from chatrender.render.console import render_console_text, render_rich, render_sources_table
from chatrender.render.html import render_html
from chatrender.render.text import render_text


def render(
    document: Document,
    fmt: RenderFormat,
    sources: Sequence[Source] | None = None,
    *,
    excerpt_chars: int = 200,
) -> str:
    """Render `document` to a string in the given format.

    `json` dumps the document only; sources are not part of it.
    """

    if fmt == "json":
        return document.model_dump_json(indent=2)
    if fmt == "html":
        return render_html(document, sources, excerpt_chars=excerpt_chars)
    if fmt == "text":
        return render_text(document, sources, excerpt_chars=excerpt_chars)
    if fmt == "rich":
        return render_console_text(document, sources, excerpt_chars=excerpt_chars)
    raise ValueError(f"Unknown render format: {fmt!r}")


__all__ = [
    "render",
    "render_console_text",
    "render_html",
    "render_rich",
    "render_sources_table",
    "render_text",
]
