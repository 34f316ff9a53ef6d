"""Tests for document assembly and nested numbering."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from chatrender.formatting.assembler import DocumentAssembler, NumberingRegister, parse_message
from chatrender.models.blocks import (
    BlockKind,
    BoldSpan,
    BulletHeaderBlock,
    CitationSpan,
    NestedNumberedItemBlock,
    NumberedItemBlock,
    ParagraphBlock,
    SpacerBlock,
    TextSpan,
)


SAMPLE = """**Overview**:
* **Direct Answer**: Paris [1]
* * Capital since 508 [2]
* * Largest city

- Unclosed **bold
+ extra note
3. third as written
Closing remark [note]"""


def _nested_numbers(text: str) -> list[int]:
    return [b.number for b in parse_message(text).blocks if isinstance(b, NestedNumberedItemBlock)]


def test_empty_input_has_no_blocks() -> None:
    """It should return an empty document for an empty string."""

    assert parse_message("").blocks == ()


def test_blank_lines_become_spacers() -> None:
    """It should emit one spacer per blank line, with no spans."""

    doc = parse_message("\n\n")
    assert doc.blocks == (
        SpacerBlock(key="line-0", line_index=0),
        SpacerBlock(key="line-1", line_index=1),
    )


def test_bullet_header_spans() -> None:
    """It should tokenize the header content with the colon folded into bold."""

    (block,) = parse_message("* **Direct Answer**: Paris").blocks
    assert isinstance(block, BulletHeaderBlock)
    assert block.spans == (BoldSpan(text="Direct Answer:"), TextSpan(text=" Paris"))


def test_nested_items_count_up() -> None:
    """It should number consecutive nested items 1, 2, ..."""

    text = "* * Agentic AI refers to autonomy\n* * It plans and acts"
    assert _nested_numbers(text) == [1, 2]


def test_bullet_header_resets_numbering() -> None:
    """It should restart nested numbering after every bullet header."""

    text = "* **First**:\n* * a\n* **Second**:\n* * b"
    assert _nested_numbers(text) == [1, 1]


def test_other_blocks_do_not_touch_numbering() -> None:
    """It should keep counting across paragraphs, spacers and plain bullets."""

    text = "* * one\nplain words\n\n* bullet\n+ plus\n2. two\n**Header**\n* * two"
    assert _nested_numbers(text) == [1, 2]


def test_block_per_line_in_order() -> None:
    """It should produce exactly one block per input line, keyed by line index."""

    doc = parse_message(SAMPLE)
    assert len(doc.blocks) == len(SAMPLE.split("\n"))
    assert [b.key for b in doc.blocks] == [f"line-{i}" for i in range(len(doc.blocks))]
    assert doc.kinds() == [
        BlockKind.HEADER,
        BlockKind.BULLET_HEADER,
        BlockKind.NESTED_NUMBERED_ITEM,
        BlockKind.NESTED_NUMBERED_ITEM,
        BlockKind.SPACER,
        BlockKind.BULLET_ITEM,
        BlockKind.PLUS_BULLET_ITEM,
        BlockKind.NUMBERED_ITEM,
        BlockKind.PARAGRAPH,
    ]


def test_sample_block_details() -> None:
    """It should carry labels, numbers and degraded markup through to the blocks."""

    blocks = parse_message(SAMPLE).blocks
    assert blocks[2].spans == (TextSpan(text="Capital since 508 "), CitationSpan(index=2))
    assert blocks[5].spans == (TextSpan(text="Unclosed **bold"),)
    numbered = blocks[7]
    assert isinstance(numbered, NumberedItemBlock)
    assert numbered.label == "3"
    assert numbered.spans == (TextSpan(text="third as written"),)
    last = blocks[8]
    assert isinstance(last, ParagraphBlock)
    assert last.spans == (TextSpan(text="Closing remark [note]"),)


def test_parse_is_idempotent_and_isolated() -> None:
    """It should give identical documents for the same input and not share numbering."""

    assembler = DocumentAssembler()
    assert assembler.assemble(SAMPLE) == assembler.assemble(SAMPLE)
    assert _nested_numbers("* * a") == [1]
    assert _nested_numbers("* * b") == [1]


def test_document_is_frozen() -> None:
    """It should reject mutation of a returned document."""

    doc = parse_message("hello")
    with pytest.raises(ValidationError):
        doc.blocks = ()  # type: ignore[misc]


def test_numbering_register_transitions() -> None:
    """It should reset on headers, advance on nested items and ignore everything else."""

    register = NumberingRegister()
    assert register.apply(BlockKind.NESTED_NUMBERED_ITEM) == 1
    assert register.apply(BlockKind.PARAGRAPH) is None
    assert register.apply(BlockKind.NESTED_NUMBERED_ITEM) == 2
    assert register.apply(BlockKind.BULLET_HEADER) is None
    assert register.value == 0
    assert register.apply(BlockKind.NESTED_NUMBERED_ITEM) == 1
