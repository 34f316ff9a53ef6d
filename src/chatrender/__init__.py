"""chatrender: structured formatting of RAG assistant answers."""

from __future__ import annotations

from chatrender.formatting import DocumentAssembler, parse_message
from chatrender.models import Document

__all__ = ["Document", "DocumentAssembler", "parse_message"]

__version__ = "0.1.0"
