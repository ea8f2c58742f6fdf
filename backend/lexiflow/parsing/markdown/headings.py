"""Heading and list-marker repair passes."""

from __future__ import annotations

import re

from lexiflow.utils.script import is_ascii_letter, is_word_content

from .vocabulary import LIST_HEADING_TITLES, SECTION_HEADINGS

_BARE_HASHES_RE = re.compile(r"^[ \t]{0,3}#{1,6}[ \t]*$")
_LIST_ITEM_RE = re.compile(r"^[ \t]*(?:[-*+•]|\d+(?:\.\d+)*[.)])(?:[ \t]|$)")
_GLUED_HASH_RE = re.compile(r"([:：)\]）】])[ \t]*#(?=[ \t]+[^\s#])")
_MISSING_SPACE_RE = re.compile(r"^([ \t]{0,3})(#{1,6})(?=[^\s#])")
_MARKER_LINE_RE = re.compile(r"^[ \t]*#[^#\s]+#")
_INLINE_HEADING_RE = re.compile(r"(?<=\S)[ \t]+(#{2,6})[ \t]+(?=\S)")
_ORDINAL_RE = re.compile(r"^([ \t]*)(\d+)\.(?=[^\s\d.])", re.MULTILINE)

_titles = "|".join(sorted((re.escape(t) for t in LIST_HEADING_TITLES), key=len, reverse=True))
_HEADING_LIST_ITEM_RE = re.compile(
    rf"^(#{{1,6}})[ \t]*({_titles})[ \t]*[-–—][ \t]*(\S.*)$", re.MULTILINE
)

_sections = "|".join(sorted((re.escape(t) for t in SECTION_HEADINGS), key=len, reverse=True))
_SECTION_BODY_RE = re.compile(
    rf"^(#{{1,6}})[ \t]+({_sections})(?:(?P<colon>[ \t]*[:：][ \t]*)|(?P<space>[ \t]+))(?P<body>\S.*)$"
)


def normalize_newlines(text: str) -> str:
    return text.replace("\r\n", "\n").replace("\r", "\n")


def merge_broken_headings(text: str) -> str:
    """Join a bare ``##`` line with the title that slipped onto the next line."""

    lines = text.split("\n")
    merged = []
    index = 0
    while index < len(lines):
        line = lines[index]
        if _BARE_HASHES_RE.match(line) and index + 1 < len(lines):
            following = lines[index + 1]
            if (
                following.strip()
                and not following.lstrip().startswith("#")
                and not _LIST_ITEM_RE.match(following)
            ):
                merged.append(f"{line.strip()} {following.strip()}")
                index += 2
                continue
        merged.append(line)
        index += 1
    return "\n".join(merged)


def break_glued_heading_hashes(text: str) -> str:
    """Move a single ``#`` that follows a colon or closing bracket to a new line."""

    return _GLUED_HASH_RE.sub(lambda m: f"{m.group(1)}\n#", text)


def ensure_heading_space(text: str) -> str:
    lines = []
    for line in text.split("\n"):
        if _MISSING_SPACE_RE.match(line) and not _MARKER_LINE_RE.match(line):
            line = _MISSING_SPACE_RE.sub(r"\1\2 ", line, count=1)
        lines.append(line)
    return "\n".join(lines)


def split_heading_list_items(text: str) -> str:
    """``## 音标-英式: /x/`` becomes ``## 音标`` followed by ``- 英式: /x/``."""

    return _HEADING_LIST_ITEM_RE.sub(lambda m: f"{m.group(1)} {m.group(2)}\n- {m.group(3)}", text)


def isolate_section_headings(text: str) -> str:
    lines = []
    for line in text.split("\n"):
        match = _SECTION_BODY_RE.match(line)
        if match:
            body = match.group("body")
            glued_word = match.group("space") is not None and is_ascii_letter(body[0])
            if any(is_word_content(char) for char in body) and not glued_word:
                lines.append(f"{match.group(1)} {match.group(2)}")
                lines.append(body)
                continue
        lines.append(line)
    return "\n".join(lines)


def separate_inline_headings(text: str) -> str:
    """Start a new paragraph for a ``##`` heading that trails prose on the same line."""

    return _INLINE_HEADING_RE.sub(lambda m: f"\n\n{m.group(1)} ", text)


def space_ordinal_markers(text: str) -> str:
    return _ORDINAL_RE.sub(r"\1\2. ", text)


__all__ = [
    "break_glued_heading_hashes",
    "ensure_heading_space",
    "isolate_section_headings",
    "merge_broken_headings",
    "normalize_newlines",
    "separate_inline_headings",
    "space_ordinal_markers",
    "split_heading_list_items",
]
