"""Line-level structure helpers shared by the repair passes."""

from __future__ import annotations

import re
from typing import List, Optional, Tuple

from .labels import is_example_label, is_translation_label

LIST_MARKER_RE = re.compile(r"^([ \t]*)((?:[-*+•]|\d+(?:\.\d+)*[.)])[ \t]+)?")
HEADING_RE = re.compile(r"^[ \t]{0,3}#{1,6}(?:[ \t]|$)")

# Sentence punctuation and closing brackets that a label may be glued to.
GLUE_PUNCTUATION = frozenset(".!?;。！？；)]）】」”\"")

# Characters after which a token may start a label.
SAFE_PREFIX = frozenset("([{（【「-–—>•·,，.。!！?？:：;；“”\"'‘’)]}）】」")

_BACKTICK_RE = re.compile(r"`+[^`\n]*`+")
_URL_RE = re.compile(r"\S*(?:://|www\.)\S*|\S+@\S+\.\S+")

LABELED_LINE_RE = re.compile(
    r"^(?P<lead>[ \t]*(?:(?:[-*+•]|\d+(?:\.\d+)*[.)])[ \t]+)?)"
    r"(?:\*\*(?P<bold>[^*\n]+)\*\*|(?P<bare>[^\s:：*#]{1,32}))"
    r"(?P<colon>[ \t]*[:：])[ \t]*(?P<body>.*)$"
)


def split_list_prefix(line: str) -> Tuple[str, str]:
    """Split ``line`` into its indentation plus list marker and the content."""

    match = LIST_MARKER_RE.match(line)
    prefix = match.group(0) if match else ""
    return prefix, line[len(prefix) :]


def marker_width(line: str) -> int:
    prefix, _ = split_list_prefix(line)
    return len(prefix.expandtabs(4))


def is_heading_line(line: str) -> bool:
    return bool(HEADING_RE.match(line))


def protected_spans(line: str) -> List[Tuple[int, int]]:
    """Inline code and URL-like chunks that no pass may rewrite."""

    spans = [match.span() for match in _BACKTICK_RE.finditer(line)]
    spans.extend(match.span() for match in _URL_RE.finditer(line))
    return spans


def in_spans(index: int, spans: List[Tuple[int, int]]) -> bool:
    return any(start <= index < end for start, end in spans)


def line_label(line: str) -> Optional[str]:
    """Return the leading ``label:`` of a line, bold or bare."""

    match = LABELED_LINE_RE.match(line)
    if not match:
        return None
    return match.group("bold") or match.group("bare")


def is_example_line(line: str) -> bool:
    label = line_label(line)
    return bool(label) and is_example_label(label)


def is_translation_line(line: str) -> bool:
    label = line_label(line)
    return bool(label) and is_translation_label(label)


__all__ = [
    "GLUE_PUNCTUATION",
    "HEADING_RE",
    "LABELED_LINE_RE",
    "LIST_MARKER_RE",
    "SAFE_PREFIX",
    "in_spans",
    "is_example_line",
    "is_heading_line",
    "is_translation_line",
    "line_label",
    "marker_width",
    "protected_spans",
    "split_list_prefix",
]
