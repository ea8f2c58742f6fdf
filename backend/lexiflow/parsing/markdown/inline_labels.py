"""Inline label repair.

Model output routinely glues several ``label: value`` fields onto one line,
drops the colon after a label or drops the whitespace between a value and the
next label.  The passes here put every label on its own line, indented to
the column of the enclosing list item, and render ASCII labels in bold.
"""

from __future__ import annotations

import re
from typing import List, Optional

from lexiflow.utils.script import is_ascii_word, is_word_content

from .labels import (
    TOKEN_PATTERN,
    TOKEN_RE,
    has_strong_start,
    humanize_label,
    humanize_value,
    is_compound_label,
    is_dynamic_label,
    is_label,
    split_merged_label,
)
from .structure import (
    GLUE_PUNCTUATION,
    SAFE_PREFIX,
    in_spans,
    is_heading_line,
    marker_width,
    protected_spans,
    split_list_prefix,
)

_ASCII_LABEL = r"[A-Za-z][A-Za-z0-9]*(?:[.\-_][A-Za-z0-9]+)*"

_LIST_LABEL_RE = re.compile(
    rf"^(?P<lead>[ \t]*(?:[-*+•]|\d+(?:\.\d+)*[.)])[ \t]+)(?P<label>{_ASCII_LABEL})"
    r"[ \t]*[:：](?!//)[ \t]*(?P<value>.*)$"
)
_LINE_LABEL_RE = re.compile(
    rf"^(?P<lead>[ \t]*(?:(?:[-*+•]|\d+(?:\.\d+)*[.)])[ \t]+)?)(?P<label>{_ASCII_LABEL})"
    r"[ \t]*[:：](?!//)[ \t]*(?P<value>.*)$"
)
_INLINE_LABEL_RE = re.compile(
    r"\*\*(?P<bold>[^*\n]+?)\*\*[ \t]*[:：]"
    rf"|(?<![A-Za-z0-9_\u3400-\u9fff*])(?P<bare>{TOKEN_PATTERN})[ \t]*[:：](?!//)"
)
_BRIDGED_TOKEN_RE = re.compile(rf"(?P<bridge>[.·]*)(?P<token>{TOKEN_PATTERN})")
_DANGLING_HYPHEN_RE = re.compile(r"[ \t]+[-–—]$")
_LEADING_LABEL_RE = re.compile(
    r"^[ \t]*(?:\*\*(?P<bold>[^*\n]+)\*\*|(?P<bare>[^\s:：*]+))[ \t]*[:：]"
)
_BOLD_SPAN_RE = re.compile(r"\*\*[^*\n]+?\*\*")


def _map_lines(text: str, rewrite) -> str:
    return "\n".join(rewrite(line) for line in text.split("\n"))


def _bold_label(match: "re.Match[str]", *, humanize_values: bool) -> Optional[str]:
    label = match.group("label")
    if not is_label(label):
        return None
    value = match.group("value").rstrip()
    if humanize_values:
        value = humanize_value(value)
    rendered = f"{match.group('lead')}**{humanize_label(label)}**:"
    return f"{rendered} {value}" if value else rendered


def bold_list_item_labels(text: str) -> str:
    """Bold a bare ASCII label that opens a list item, keeping dotted compounds whole."""

    def rewrite(line: str) -> str:
        match = _LIST_LABEL_RE.match(line)
        if not match:
            return line
        return _bold_label(match, humanize_values=False) or line

    return _map_lines(text, rewrite)


def bold_line_labels(text: str) -> str:
    """Bold a bare ASCII label that opens any line.

    A single CamelCase value such as ``SingleWord`` is split into words.
    Han-script labels keep their bare form.
    """

    def rewrite(line: str) -> str:
        if is_heading_line(line):
            return line
        match = _LINE_LABEL_RE.match(line)
        if not match:
            return line
        return _bold_label(match, humanize_values=True) or line

    return _map_lines(text, rewrite)


def _previous_visible(line: str, index: int, floor: int) -> Optional[str]:
    cursor = index - 1
    while cursor >= floor:
        if line[cursor] not in " \t":
            return line[cursor]
        cursor -= 1
    return None


def _restore_line(line: str) -> str:
    if not line.strip() or is_heading_line(line):
        return line
    prefix, _ = split_list_prefix(line)
    content_start = len(prefix)
    indent = " " * marker_width(line)
    spans = protected_spans(line)
    spans.extend(match.span() for match in _BOLD_SPAN_RE.finditer(line))

    out: List[str] = [line[:content_start]]
    cursor = content_start
    fresh = True
    chain_end: Optional[int] = None

    while True:
        match = TOKEN_RE.search(line, cursor)
        if not match:
            out.append(line[cursor:])
            break
        start, end = match.span()
        token = match.group()
        gap = line[cursor:start]

        if in_spans(start, spans) or (start > 0 and is_ascii_word(line[start - 1])):
            out.append(line[cursor:end])
            cursor = end
            fresh = False
            chain_end = None
            continue

        at_fresh = fresh and not gap.strip()
        previous = _previous_visible(line, start, content_start)
        after_colon = chain_end is not None and not line[chain_end:start].strip()
        glued = (
            not at_fresh
            and start > content_start
            and line[start - 1] in GLUE_PUNCTUATION
            and (has_strong_start(token) or is_dynamic_label(token))
        )
        safe = at_fresh or after_colon or previous is None or previous in SAFE_PREFIX
        colon_follows = end < len(line) and line[end] in ":："
        label = is_label(token)

        if safe and label and colon_follows:
            if after_colon or glued:
                out.append(gap.rstrip() + "\n" + indent)
            else:
                out.append(gap)
            out.append(token)
            cursor = end
            fresh = False
            chain_end = end + 1
            continue

        if after_colon and colon_follows and not label:
            merged = split_merged_label(token)
            if merged:
                head, suffix = merged
                out.append(f"{gap}{head}\n{indent}{suffix}")
                cursor = end
                fresh = False
                chain_end = end + 1
                continue

        if label and not colon_follows and (at_fresh or glued):
            rewritten = _restore_missing_colon(line, token, end, indent, at_fresh, gap)
            if rewritten is not None:
                emitted, cursor, fresh = rewritten
                out.append(emitted)
                chain_end = None
                continue

        out.append(gap + token)
        cursor = end
        fresh = False
        chain_end = None

    return "".join(out)


def _restore_missing_colon(line, token, end, indent, at_fresh, gap):
    spacing_end = end
    while spacing_end < len(line) and line[spacing_end] in " \t":
        spacing_end += 1
    spacing = line[end:spacing_end]
    if spacing_end >= len(line):
        return None

    following = _BRIDGED_TOKEN_RE.match(line, spacing_end)
    bridge = following.group("bridge") if following else ""
    next_token = following.group("token") if following else None
    if bridge and spacing:
        next_token = None
    if not spacing and not bridge:
        return None
    next_is_label = bool(next_token) and is_label(next_token)
    if bridge and not next_is_label:
        return None

    next_char = line[spacing_end]
    accepted = (
        next_is_label
        or is_compound_label(token)
        or next_char.isupper()
        or is_word_content(next_char) and not next_char.isascii()
        or next_char.isdigit()
    )
    if not accepted:
        return None

    lead = gap if at_fresh else gap.rstrip() + "\n" + indent
    if next_is_label:
        return f"{lead}{token}:\n{indent}", spacing_end + len(bridge), True
    return f"{lead}{token}:{spacing or ' '}", spacing_end, False


def restore_label_delimiters(text: str) -> str:
    """Recover labels that lost their colon or their separating newline.

    ``Senses s1Verb:to move.Examples Example1:...`` is rewritten so that every
    label is followed by a colon and starts its own line.
    """

    return _map_lines(text, _restore_line)


def _inline_split_point(line: str, content_start: int, spans) -> Optional[int]:
    for match in _INLINE_LABEL_RE.finditer(line, content_start):
        start = match.start()
        if start <= content_start or in_spans(start, spans):
            continue
        bold = match.group("bold")
        label = bold if bold is not None else match.group("bare")
        if not is_label(label):
            continue
        gap_start = start
        while gap_start > content_start and line[gap_start - 1] in " \t":
            gap_start -= 1
        if gap_start <= content_start:
            continue
        gap = start - gap_start
        previous = line[gap_start - 1]
        if gap >= 2:
            return gap_start
        if gap == 1 and (bold is not None or not is_word_content(previous)):
            return gap_start
        if gap == 0 and previous in GLUE_PUNCTUATION:
            return gap_start
    return None


def _break_line(line: str) -> List[str]:
    if not line.strip() or is_heading_line(line):
        return [line]
    width = marker_width(line)
    result: List[str] = []
    current = line
    prefix, _ = split_list_prefix(current)
    content_start = len(prefix)
    while True:
        split_at = _inline_split_point(current, content_start, protected_spans(current))
        if split_at is None:
            result.append(current)
            return result
        result.append(current[:split_at].rstrip())
        current = " " * width + current[split_at:].lstrip()
        content_start = width


def break_inline_labels(text: str) -> str:
    """Move every label that trails other content onto its own indented line."""

    lines: List[str] = []
    for line in text.split("\n"):
        lines.extend(_break_line(line))
    return "\n".join(lines)


def strip_dangling_label_hyphens(text: str) -> str:
    """Drop a ``-`` left at the end of a line whose successor opens with a label."""

    lines = text.split("\n")
    for index in range(len(lines) - 1):
        if not _DANGLING_HYPHEN_RE.search(lines[index]):
            continue
        match = _LEADING_LABEL_RE.match(lines[index + 1])
        if match and is_label(match.group("bold") or match.group("bare")):
            lines[index] = _DANGLING_HYPHEN_RE.sub("", lines[index])
    return "\n".join(lines)


__all__ = [
    "bold_line_labels",
    "bold_list_item_labels",
    "break_inline_labels",
    "restore_label_delimiters",
    "strip_dangling_label_hyphens",
]
