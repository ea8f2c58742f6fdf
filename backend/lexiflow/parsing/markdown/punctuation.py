"""Spacing after ASCII punctuation."""

from __future__ import annotations

import re
from typing import List, Optional

from lexiflow.utils.script import (
    is_ascii_digit,
    is_ascii_lower,
    is_ascii_upper,
    is_word_content,
)

_SPACED_PUNCTUATION = frozenset(",.!?;")
_URLISH_RE = re.compile(r"\S*(?:://|@)\S*|www\.\S*")


def _skip_period(before: str, after: str, before_previous: Optional[str]) -> bool:
    if before == "." or after == ".":
        return True
    if is_ascii_digit(before) and is_ascii_digit(after):
        return True
    if is_ascii_upper(before) and is_ascii_upper(after):
        return True
    if is_ascii_lower(after):
        return True
    # single-letter abbreviations such as ``e.g`` or ``U.S``
    return not is_word_content(before_previous)


def _space_segment(segment: str) -> str:
    protected = [match.span() for match in _URLISH_RE.finditer(segment)]
    out: List[str] = []
    for index, char in enumerate(segment):
        out.append(char)
        if char not in _SPACED_PUNCTUATION or index + 1 >= len(segment) or index == 0:
            continue
        if any(start <= index < end for start, end in protected):
            continue
        before, after = segment[index - 1], segment[index + 1]
        if not (is_word_content(before) and is_word_content(after)):
            continue
        if char == "," and is_ascii_digit(before) and is_ascii_digit(after):
            continue
        if char == ".":
            before_previous = segment[index - 2] if index >= 2 else None
            if _skip_period(before, after, before_previous):
                continue
        out.append(" ")
    return "".join(out)


def space_punctuation(text: str) -> str:
    """Insert one space after ``, . ! ? ;`` squeezed between two words.

    Text inside backtick spans (the fence state carries over lines) and
    URL or e-mail chunks is left untouched.
    """

    parts = re.split(r"(`+)", text)
    fenced = False
    out: List[str] = []
    for part in parts:
        if part.startswith("`"):
            out.append(part)
            fenced = not fenced
            continue
        out.append(part if fenced else _space_segment(part))
    return "".join(out)


__all__ = ["space_punctuation"]
