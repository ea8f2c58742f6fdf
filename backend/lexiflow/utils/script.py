"""Character classification helpers shared by the markdown passes."""

from __future__ import annotations

from typing import Optional

CJK_PUNCTUATION = frozenset(
    "，。、；：！？…—“”‘’「」『』（）【】《》〈〉〔〕·～"
)
CJK_SENTENCE_END = frozenset("。！？…")

_HAN_RANGES = (
    (0x3400, 0x4DBF),
    (0x4E00, 0x9FFF),
    (0xF900, 0xFAFF),
    (0x20000, 0x2A6DF),
)


def is_ascii_letter(char: Optional[str]) -> bool:
    return bool(char) and len(char) == 1 and ("a" <= char <= "z" or "A" <= char <= "Z")


def is_ascii_upper(char: Optional[str]) -> bool:
    return bool(char) and len(char) == 1 and "A" <= char <= "Z"


def is_ascii_lower(char: Optional[str]) -> bool:
    return bool(char) and len(char) == 1 and "a" <= char <= "z"


def is_ascii_digit(char: Optional[str]) -> bool:
    return bool(char) and len(char) == 1 and "0" <= char <= "9"


def is_ascii_word(char: Optional[str]) -> bool:
    return is_ascii_letter(char) or is_ascii_digit(char)


def is_han(char: Optional[str]) -> bool:
    if not char or len(char) != 1:
        return False
    code = ord(char)
    return any(start <= code <= end for start, end in _HAN_RANGES)


def is_cjk_punctuation(char: Optional[str]) -> bool:
    return bool(char) and char in CJK_PUNCTUATION


def is_cjk_sentence_end(char: Optional[str]) -> bool:
    return bool(char) and char in CJK_SENTENCE_END


def is_word_content(char: Optional[str]) -> bool:
    """Return True for characters that count as running text (ASCII alnum or Han)."""

    return is_ascii_word(char) or is_han(char)


def contains_han(text: Optional[str]) -> bool:
    return any(is_han(char) for char in text or "")


__all__ = [
    "CJK_PUNCTUATION",
    "CJK_SENTENCE_END",
    "contains_han",
    "is_ascii_digit",
    "is_ascii_letter",
    "is_ascii_lower",
    "is_ascii_upper",
    "is_ascii_word",
    "is_cjk_punctuation",
    "is_cjk_sentence_end",
    "is_han",
    "is_word_content",
]
