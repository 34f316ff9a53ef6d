"""Pydantic models used across the project."""

from __future__ import annotations

from chatrender.models.blocks import (
    Block,
    BlockKind,
    BoldSpan,
    BulletHeaderBlock,
    BulletItemBlock,
    CitationSpan,
    Document,
    HeaderBlock,
    InlineSpan,
    NestedNumberedItemBlock,
    NumberedItemBlock,
    ParagraphBlock,
    PlusBulletItemBlock,
    SpacerBlock,
    TextSpan,
)
from chatrender.models.chat import (
    Message,
    SearchMetadata,
    SearchResponse,
    Source,
    SourceMetadata,
    TokenUsage,
)

__all__ = [
    "Block",
    "BlockKind",
    "BoldSpan",
    "BulletHeaderBlock",
    "BulletItemBlock",
    "CitationSpan",
    "Document",
    "HeaderBlock",
    "InlineSpan",
    "Message",
    "NestedNumberedItemBlock",
    "NumberedItemBlock",
    "ParagraphBlock",
    "PlusBulletItemBlock",
    "SearchMetadata",
    "SearchResponse",
    "Source",
    "SourceMetadata",
    "SpacerBlock",
    "TextSpan",
    "TokenUsage",
]
