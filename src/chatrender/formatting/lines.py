"""Line splitting and classification.

Each line of an assistant answer is classified into a `BlockKind` by trying the patterns below
in order; the first match wins. The order matters: a bold-led bullet must be tried before the
doubled (nested) bullet, which in turn must be tried before the plain bullet, because
`* **x**`, `* * x` and `* x` all start with the same marker.

Classification looks at the trimmed line only. The content handed on to the inline tokenizer
is the trimmed line with its list markers removed.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterator

from chatrender.models.blocks import BlockKind

_LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")
# Unicode whitespace plus the byte order mark.
_EDGE_SPACE_RE = re.compile(r"^[\s\ufeff]+|[\s\ufeff]+$")

_BULLET = r"[*•\-]"

_BULLET_HEADER_RE = re.compile(rf"^{_BULLET}\s*(?P<content>\*\*.*?\*\*.*)$")
_NESTED_RE = re.compile(rf"^{_BULLET}\s+{_BULLET}\s*(?P<content>.*)$")
_BULLET_RE = re.compile(rf"^{_BULLET}\s+(?P<content>.*)$")
_PLUS_RE = re.compile(r"^\+\s+(?P<content>.*)$")
_NUMBERED_RE = re.compile(r"^(?P<label>[0-9]+)\.\s+(?P<content>.*)$")
# One bold span with no `**` inside it, optional colon, nothing else.
_HEADER_RE = re.compile(r"^\*\*(?:(?!\*\*).)*\*\*:?$")


@dataclass(frozen=True)
class ClassifiedLine:
    """A line's block kind and the content to tokenize."""

    kind: BlockKind
    content: str
    label: str | None = None


def split_lines(text: str) -> list[str]:
    """Split text on `\\r\\n`, `\\r` or `\\n`.

    Blank lines are kept. A terminator at the very end does not open an extra line, so
    `"a\\n"` is one line, `"\\n\\n"` is two, and `""` is none.
    """

    if not text:
        return []
    lines = _LINE_BREAK_RE.split(text)
    if lines[-1] == "":
        lines.pop()
    return lines


def classify_line(line: str) -> ClassifiedLine:
    """Classify a single line.

    Args:
        line: Raw line, surrounding whitespace allowed.

    Returns:
        The block kind, marker-stripped content and, for `NUMBERED_ITEM`, the number exactly
        as written.
    """

    s = _EDGE_SPACE_RE.sub("", line)
    if not s:
        return ClassifiedLine(BlockKind.SPACER, "")

    m = _BULLET_HEADER_RE.match(s)
    if m:
        return ClassifiedLine(BlockKind.BULLET_HEADER, m.group("content"))

    m = _NESTED_RE.match(s)
    if m:
        return ClassifiedLine(BlockKind.NESTED_NUMBERED_ITEM, m.group("content"))

    m = _BULLET_RE.match(s)
    if m:
        return ClassifiedLine(BlockKind.BULLET_ITEM, m.group("content"))

    m = _PLUS_RE.match(s)
    if m:
        return ClassifiedLine(BlockKind.PLUS_BULLET_ITEM, m.group("content"))

    m = _NUMBERED_RE.match(s)
    if m:
        return ClassifiedLine(BlockKind.NUMBERED_ITEM, m.group("content"), label=m.group("label"))

    if _HEADER_RE.match(s):
        return ClassifiedLine(BlockKind.HEADER, s)

    return ClassifiedLine(BlockKind.PARAGRAPH, s)


def classify_lines(text: str) -> Iterator[ClassifiedLine]:
    """Classify every line of `text`, in order."""

    for line in split_lines(text):
        yield classify_line(line)
