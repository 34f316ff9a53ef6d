"""Block and inline span models.

A parsed assistant message is a `Document`: one `Block` per input line, in input order. Each
block owns the inline spans of its content. All models are frozen so a document cannot be
mutated once it has been handed to a renderer.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class BlockKind(str, Enum):
    """Line-level block categories."""

    SPACER = "spacer"
    BULLET_HEADER = "bullet_header"
    NESTED_NUMBERED_ITEM = "nested_numbered_item"
    BULLET_ITEM = "bullet_item"
    PLUS_BULLET_ITEM = "plus_bullet_item"
    NUMBERED_ITEM = "numbered_item"
    HEADER = "header"
    PARAGRAPH = "paragraph"


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class TextSpan(_Frozen):
    """Plain text, kept exactly as written."""

    kind: Literal["text"] = "text"
    text: str


class BoldSpan(_Frozen):
    """Bold text. A colon right after the closing delimiter is part of `text`."""

    kind: Literal["bold"] = "bold"
    text: str


class CitationSpan(_Frozen):
    """A `[N]` marker referring to the N-th source of the answer."""

    kind: Literal["citation"] = "citation"
    index: int


InlineSpan = Annotated[Union[TextSpan, BoldSpan, CitationSpan], Field(discriminator="kind")]


class _BlockBase(_Frozen):
    key: str = Field(description="Stable identity derived from the line index.")
    line_index: int = Field(ge=0)
    spans: tuple[InlineSpan, ...] = ()


class SpacerBlock(_BlockBase):
    """Blank line."""

    kind: Literal["spacer"] = "spacer"


class BulletHeaderBlock(_BlockBase):
    """Top-level bullet led by a bold span, e.g. `* **Direct Answer**:`."""

    kind: Literal["bullet_header"] = "bullet_header"


class NestedNumberedItemBlock(_BlockBase):
    """Doubled bullet (`* * item`) shown as an auto-numbered entry."""

    kind: Literal["nested_numbered_item"] = "nested_numbered_item"
    number: int = Field(ge=1)


class BulletItemBlock(_BlockBase):
    kind: Literal["bullet_item"] = "bullet_item"


class PlusBulletItemBlock(_BlockBase):
    kind: Literal["plus_bullet_item"] = "plus_bullet_item"


class NumberedItemBlock(_BlockBase):
    """Explicit `N.` entry. `label` is the digit run exactly as written."""

    kind: Literal["numbered_item"] = "numbered_item"
    label: str


class HeaderBlock(_BlockBase):
    """A line that is a single bold span and nothing else."""

    kind: Literal["header"] = "header"


class ParagraphBlock(_BlockBase):
    kind: Literal["paragraph"] = "paragraph"


Block = Annotated[
    Union[
        SpacerBlock,
        BulletHeaderBlock,
        NestedNumberedItemBlock,
        BulletItemBlock,
        PlusBulletItemBlock,
        NumberedItemBlock,
        HeaderBlock,
        ParagraphBlock,
    ],
    Field(discriminator="kind"),
]


class Document(_Frozen):
    """Ordered blocks of one parsed message."""

    blocks: tuple[Block, ...] = ()

    def kinds(self) -> list[str]:
        """Return the block kinds in document order."""

        return [b.kind for b in self.blocks]
