"""Tolerant field extraction from JSON documents that are still being streamed.

The scanner never parses the whole document.  It looks for one quoted key,
skips to its value and copies a string value verbatim (escape pairs kept as
they are) until the closing quote or the end of the buffer, whichever comes
first.  That makes it safe to call on every incoming chunk.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

_WHITESPACE = " \t\r\n"

_SIMPLE_ESCAPES = {
    '"': '"',
    "\\": "\\",
    "/": "/",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
}


@dataclass(frozen=True)
class FieldValue:
    """Raw (still escaped) string value of a field and whether it was terminated."""

    raw: str
    closed: bool


def _skip_whitespace(buffer: str, index: int) -> int:
    while index < len(buffer) and buffer[index] in _WHITESPACE:
        index += 1
    return index


def _read_string(buffer: str, start: int) -> FieldValue:
    chars = []
    index = start
    length = len(buffer)
    while index < length:
        char = buffer[index]
        if char == "\\":
            chars.append(buffer[index : index + 2])
            index += 2
            continue
        if char == '"':
            return FieldValue("".join(chars), True)
        chars.append(char)
        index += 1
    return FieldValue("".join(chars), False)


def find_field_value(buffer: Optional[str], field: str) -> Optional[FieldValue]:
    """Locate ``field`` in a possibly truncated JSON ``buffer``.

    Returns ``None`` while the key, its colon or the first character of the
    value has not arrived yet, and for values that are not strings.  A literal
    ``null`` yields an empty, closed value.
    """

    if not buffer or not field:
        return None
    needle = f'"{field}"'
    search_from = 0
    while True:
        key_index = buffer.find(needle, search_from)
        if key_index < 0:
            return None
        cursor = _skip_whitespace(buffer, key_index + len(needle))
        if cursor >= len(buffer):
            return None
        if buffer[cursor] != ":":
            # the literal was a value or part of another key, keep looking
            search_from = key_index + len(needle)
            continue
        cursor = _skip_whitespace(buffer, cursor + 1)
        if cursor >= len(buffer):
            return None
        if buffer.startswith("null", cursor):
            return FieldValue("", True)
        if buffer[cursor] != '"':
            return None
        return _read_string(buffer, cursor + 1)


def decode_json_string(raw: Optional[str]) -> str:
    """Expand JSON escapes in ``raw``.

    Total over any input: a dangling backslash at the end is emitted as a
    literal backslash and a malformed ``\\u`` escape is kept verbatim.
    """

    if not raw:
        return ""
    out = []
    index = 0
    length = len(raw)
    while index < length:
        char = raw[index]
        if char != "\\":
            out.append(char)
            index += 1
            continue
        if index + 1 >= length:
            out.append("\\")
            break
        marker = raw[index + 1]
        if marker in _SIMPLE_ESCAPES:
            out.append(_SIMPLE_ESCAPES[marker])
            index += 2
            continue
        if marker == "u":
            digits = raw[index + 2 : index + 6]
            if len(digits) == 4 and all(c in "0123456789abcdefABCDEF" for c in digits):
                code = int(digits, 16)
                index += 6
                if 0xD800 <= code <= 0xDBFF and raw.startswith("\\u", index):
                    low_digits = raw[index + 2 : index + 6]
                    if len(low_digits) == 4 and all(
                        c in "0123456789abcdefABCDEF" for c in low_digits
                    ):
                        low = int(low_digits, 16)
                        if 0xDC00 <= low <= 0xDFFF:
                            code = 0x10000 + ((code - 0xD800) << 10) + (low - 0xDC00)
                            index += 6
                out.append(chr(code))
                continue
            out.append(raw[index : index + 2])
            index += 2
            continue
        # unknown escape: keep the escaped character
        out.append(marker)
        index += 2
    return "".join(out)


def extract_markdown_preview(text: Optional[str], field: str = "markdown") -> Optional[str]:
    """Return the best markdown preview for ``text``.

    Plain text comes back with normalised newlines.  JSON-looking input yields
    the decoded ``field`` value, ``""`` when it is ``null`` and ``None`` while
    the field has not shown up yet.
    """

    if text is None:
        return None
    normalized = text.replace("\r\n", "\n").replace("\r", "\n")
    if not normalized.lstrip().startswith("{"):
        return normalized
    value = find_field_value(normalized, field)
    if value is None:
        return None
    return decode_json_string(value.raw)


__all__ = [
    "FieldValue",
    "decode_json_string",
    "extract_markdown_preview",
    "find_field_value",
]
