"""Example and translation layout passes."""

from __future__ import annotations

import re
from typing import List, Optional, Tuple

from lexiflow.utils.script import (
    contains_han,
    is_ascii_word,
    is_cjk_punctuation,
    is_cjk_sentence_end,
    is_han,
)

from .labels import is_translation_label
from .structure import (
    LABELED_LINE_RE,
    is_example_line,
    is_heading_line,
    is_translation_line,
    marker_width,
)

SEGMENT_MARKER_RE = re.compile(r"\[\[[^\]\n]+\]\]|\{\{[^}\n]+\}\}|#[^#\s]+#")
_MARKER_ONLY_LINE_RE = re.compile(
    r"^[ \t]*(?:(?:\[\[[^\]\n]+\]\]|\{\{[^}\n]+\}\}|#[^#\s]+#)[ \t]*)+$"
)
_INLINE_TRANSLATION_RE = re.compile(
    r"(?:\*\*(?P<bold>[^*\n]+)\*\*|(?P<bare>[^\s:：*]{1,32}))[ \t]*[:：]"
)
_PARENTHETICAL_RE = re.compile(
    r"[ \t]*(?:\((?P<ascii>[^()\n]+)\)|（(?P<wide>[^（）\n]+)）|\[(?P<square>[^\[\]\n]+)\])[ \t]*$"
)
_ASCII_PUNCTUATION = frozenset("!\"#$%&'()*+,-./:;<=>?@[\\]^_`{|}~")


def merge_segmentation_marker_lines(text: str) -> str:
    """Attach a line holding only ``#token#``-style markers to the example above it."""

    lines = text.split("\n")
    merged: List[str] = []
    for line in lines:
        if (
            merged
            and _MARKER_ONLY_LINE_RE.match(line)
            and is_example_line(merged[-1])
        ):
            merged[-1] = f"{merged[-1].rstrip()} {line.strip()}"
            continue
        merged.append(line)
    return "\n".join(merged)


def _looks_like_translation(content: str) -> bool:
    stripped = content.strip()
    if not stripped:
        return False
    return is_han(stripped[0]) or is_cjk_sentence_end(stripped[-1])


def _split_inline_translation(body: str) -> Optional[Tuple[str, str]]:
    for match in _INLINE_TRANSLATION_RE.finditer(body):
        if match.start() == 0:
            continue
        label = match.group("bold") or match.group("bare")
        if not is_translation_label(label):
            continue
        if match.group("bare") is not None and body[match.start() - 1] not in " \t":
            continue
        return body[: match.start()].rstrip(), body[match.start() :].strip()
    return None


def _translation_label_for(example_label: str) -> str:
    return "**翻译**" if contains_han(example_label) else "**Translation**"


def layout_example_translations(text: str) -> str:
    """Give every example's translation its own line under the example.

    The translation is taken from an inline translation label, from a
    translation line directly below, or from a trailing parenthetical that
    reads like a translation.  It is indented to the example's list column.
    """

    lines = text.split("\n")
    result: List[str] = []
    index = 0
    while index < len(lines):
        line = lines[index]
        match = LABELED_LINE_RE.match(line) if not is_heading_line(line) else None
        label = (match.group("bold") or match.group("bare")) if match else None
        if not label or not is_example_line(line):
            result.append(line)
            index += 1
            continue

        indent = " " * marker_width(line)
        head = line[: match.start("body")]
        body = match.group("body")

        inline = _split_inline_translation(body)
        if inline:
            example_body, translation = inline
            result.append(f"{head}{example_body}".rstrip())
            result.append(f"{indent}{translation}")
            index += 1
            continue

        following = lines[index + 1] if index + 1 < len(lines) else None
        if following is not None and is_translation_line(following):
            result.append(line.rstrip())
            result.append(f"{indent}{following.strip()}")
            index += 2
            continue

        suffix = _PARENTHETICAL_RE.search(body)
        if suffix:
            content = suffix.group("ascii") or suffix.group("wide") or suffix.group("square")
            example_body = body[: suffix.start()].rstrip()
            # a Han gloss after a Han example is part of the example
            if _looks_like_translation(content) and not contains_han(example_body):
                result.append(f"{head}{example_body}".rstrip())
                result.append(f"{indent}{_translation_label_for(label)}: {content.strip()}")
                index += 1
                continue

        result.append(line)
        index += 1
    return "\n".join(result)


def _needs_space(char: Optional[str]) -> bool:
    if not char or char.isspace():
        return False
    return not (is_cjk_punctuation(char) or char in _ASCII_PUNCTUATION)


def _space_markers(body: str) -> str:
    pieces: List[str] = []
    cursor = 0
    for match in SEGMENT_MARKER_RE.finditer(body):
        start, end = match.span()
        before = body[start - 1] if start > 0 else None
        after = body[end] if end < len(body) else None
        pieces.append(body[cursor:start])
        if _needs_space(before):
            pieces.append(" ")
        pieces.append(match.group())
        if _needs_space(after):
            pieces.append(" ")
        cursor = end
    pieces.append(body[cursor:])
    return "".join(pieces)


def _space_scripts(body: str) -> str:
    markers = [match.span() for match in SEGMENT_MARKER_RE.finditer(body)]
    out: List[str] = []
    for index, char in enumerate(body):
        if index and not any(start < index < end for start, end in markers):
            previous = body[index - 1]
            if (is_han(previous) and is_ascii_word(char)) or (
                is_ascii_word(previous) and is_han(char)
            ):
                out.append(" ")
        out.append(char)
    return "".join(out)


def space_example_segmentation(text: str) -> str:
    """Normalise spacing inside example and translation lines.

    Segmentation markers (``[[...]]``, ``{{...}}``, ``#...#``) get one space on
    each side unless they touch punctuation.  On example lines adjacent Han
    and Latin runs are separated as well.
    """

    lines = []
    for line in text.split("\n"):
        if is_heading_line(line):
            lines.append(line)
            continue
        example = is_example_line(line)
        if not example and not is_translation_line(line):
            lines.append(line)
            continue
        match = LABELED_LINE_RE.match(line)
        head = line[: match.start("body")]
        body = _space_markers(match.group("body"))
        if example:
            body = _space_scripts(body)
        body = re.sub(r"[ \t]{2,}", " ", body)
        lines.append(f"{head}{body}")
    return "\n".join(lines)


__all__ = [
    "SEGMENT_MARKER_RE",
    "layout_example_translations",
    "merge_segmentation_marker_lines",
    "space_example_segmentation",
]
