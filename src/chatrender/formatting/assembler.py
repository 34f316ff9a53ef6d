"""Document assembly.

Drives line classification and inline tokenization over a whole message and threads the
nested-list numbering register from line to line.
"""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass

from chatrender.formatting.inline import tokenize_inline
from chatrender.formatting.lines import ClassifiedLine, classify_line, split_lines
from chatrender.logging import get_logger
from chatrender.models.blocks import (
    Block,
    BlockKind,
    BulletHeaderBlock,
    BulletItemBlock,
    Document,
    HeaderBlock,
    NestedNumberedItemBlock,
    NumberedItemBlock,
    ParagraphBlock,
    PlusBulletItemBlock,
    SpacerBlock,
)

logger = get_logger(__name__)


@dataclass
class NumberingRegister:
    """Counter for auto-numbered nested items within one parse.

    Starts at 0, is reset by every bullet header and advanced by every nested item. Other
    block kinds leave it alone.
    """

    value: int = 0

    def reset(self) -> None:
        self.value = 0

    def advance(self) -> int:
        """Increment and return the new value."""

        self.value += 1
        return self.value

    def apply(self, kind: BlockKind) -> int | None:
        """Apply the transition for `kind`.

        Returns:
            The display number for a nested item, otherwise None.
        """

        if kind is BlockKind.BULLET_HEADER:
            self.reset()
        elif kind is BlockKind.NESTED_NUMBERED_ITEM:
            return self.advance()
        return None


def block_key(line_index: int) -> str:
    """Stable block identity used by renderers for reconciliation."""

    return f"line-{line_index}"


class DocumentAssembler:
    """Turn message text into a :class:`Document`.

    The assembler holds no state between calls; every :meth:`assemble` gets a fresh register,
    so one instance can be shared freely.
    """

    def assemble(self, text: str) -> Document:
        """Parse `text` into a document with one block per line.

        Never raises for string input: unknown line shapes become paragraphs and malformed
        markup degrades to plain text.
        """

        register = NumberingRegister()
        blocks: list[Block] = []
        for index, line in enumerate(split_lines(text)):
            blocks.append(self.build_block(index, classify_line(line), register))

        document = Document(blocks=tuple(blocks))
        if logger.isEnabledFor(logging.DEBUG):
            counts = Counter(b.kind for b in document.blocks)
            logger.debug(
                "Assembled document",
                extra={"line_count": len(blocks), "kinds": dict(counts)},
            )
        return document

    @staticmethod
    def build_block(index: int, line: ClassifiedLine, register: NumberingRegister) -> Block:
        """Build the block for one classified line, updating `register`."""

        key = block_key(index)
        if line.kind is BlockKind.SPACER:
            return SpacerBlock(key=key, line_index=index)

        number = register.apply(line.kind)
        spans = tokenize_inline(line.content)

        if line.kind is BlockKind.BULLET_HEADER:
            return BulletHeaderBlock(key=key, line_index=index, spans=spans)
        if line.kind is BlockKind.NESTED_NUMBERED_ITEM:
            return NestedNumberedItemBlock(key=key, line_index=index, spans=spans, number=number)
        if line.kind is BlockKind.BULLET_ITEM:
            return BulletItemBlock(key=key, line_index=index, spans=spans)
        if line.kind is BlockKind.PLUS_BULLET_ITEM:
            return PlusBulletItemBlock(key=key, line_index=index, spans=spans)
        if line.kind is BlockKind.NUMBERED_ITEM:
            return NumberedItemBlock(key=key, line_index=index, spans=spans, label=line.label or "")
        if line.kind is BlockKind.HEADER:
            return HeaderBlock(key=key, line_index=index, spans=spans)
        return ParagraphBlock(key=key, line_index=index, spans=spans)


def parse_message(text: str) -> Document:
    """Parse an assistant message into a :class:`Document`.

    Callers must pass `""` for missing content.
    """

    return DocumentAssembler().assemble(text)
