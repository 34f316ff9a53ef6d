"""Tests for line splitting and classification."""

from __future__ import annotations

import pytest

from chatrender.formatting.lines import classify_line, classify_lines, split_lines
from chatrender.models.blocks import BlockKind


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("", []),
        ("\n\n", ["", ""]),
        ("a\n", ["a"]),
        ("a\n\nb", ["a", "", "b"]),
        ("a\r\nb\rc\n", ["a", "b", "c"]),
        ("   ", ["   "]),
    ],
)
def test_split_lines_keeps_blank_lines(text: str, expected: list[str]) -> None:
    """It should keep one entry per line, without a phantom line after a final newline."""

    assert split_lines(text) == expected


@pytest.mark.parametrize(
    ("line", "kind", "content"),
    [
        ("   \t", BlockKind.SPACER, ""),
        ("* **Direct Answer**: Paris", BlockKind.BULLET_HEADER, "**Direct Answer**: Paris"),
        ("• **Key Points**", BlockKind.BULLET_HEADER, "**Key Points**"),
        ("-**Tight**:", BlockKind.BULLET_HEADER, "**Tight**:"),
        ("* * Agentic AI refers to autonomy", BlockKind.NESTED_NUMBERED_ITEM, "Agentic AI refers to autonomy"),
        ("- • mixed markers", BlockKind.NESTED_NUMBERED_ITEM, "mixed markers"),
        ("* * * deeper", BlockKind.NESTED_NUMBERED_ITEM, "* deeper"),
        ("* plain item", BlockKind.BULLET_ITEM, "plain item"),
        ("•   spaced out", BlockKind.BULLET_ITEM, "spaced out"),
        ("- dash item [2]", BlockKind.BULLET_ITEM, "dash item [2]"),
        ("+ plus item", BlockKind.PLUS_BULLET_ITEM, "plus item"),
        ("**Summary**:", BlockKind.HEADER, "**Summary**:"),
        ("**Summary**", BlockKind.HEADER, "**Summary**"),
        ("  indented text  ", BlockKind.PARAGRAPH, "indented text"),
        ("**a** and **b**", BlockKind.PARAGRAPH, "**a** and **b**"),
        ("**Summary**: more", BlockKind.PARAGRAPH, "**Summary**: more"),
        ("*emphasis*", BlockKind.PARAGRAPH, "*emphasis*"),
        ("-5 degrees", BlockKind.PARAGRAPH, "-5 degrees"),
        ("+plus", BlockKind.PARAGRAPH, "+plus"),
        ("3.14 is pi", BlockKind.PARAGRAPH, "3.14 is pi"),
        ("*", BlockKind.PARAGRAPH, "*"),
    ],
)
def test_classify_line(line: str, kind: BlockKind, content: str) -> None:
    """It should pick the first matching rule and strip list markers from the content."""

    classified = classify_line(line)
    assert classified.kind == kind
    assert classified.content == content


def test_bold_led_bullet_wins_over_nested_bullet() -> None:
    """It should treat `* **x**` as a bullet header even though `* *` looks nested."""

    assert classify_line("* **Overview**").kind == BlockKind.BULLET_HEADER


def test_numbered_item_keeps_label_verbatim() -> None:
    """It should capture the digit run as written, leading zeros included."""

    classified = classify_line("007. Bond")
    assert classified.kind == BlockKind.NUMBERED_ITEM
    assert classified.label == "007"
    assert classified.content == "Bond"


def test_classify_lines_preserves_order() -> None:
    """It should classify every line in input order."""

    text = "**Title**\n\n* item\n1. first\nclosing words"
    kinds = [c.kind for c in classify_lines(text)]
    assert kinds == [
        BlockKind.HEADER,
        BlockKind.SPACER,
        BlockKind.BULLET_ITEM,
        BlockKind.NUMBERED_ITEM,
        BlockKind.PARAGRAPH,
    ]


def test_byte_order_mark_is_trimmed_like_whitespace() -> None:
    """It should classify a line that starts with a BOM by what follows it."""

    classified = classify_line("\ufeff* **Answer**: x")
    assert classified.kind == BlockKind.BULLET_HEADER
    assert classified.content == "**Answer**: x"
    assert classify_line("\ufeff").kind == BlockKind.SPACER
