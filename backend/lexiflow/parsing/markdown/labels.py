"""Label recognition and display helpers."""

from __future__ import annotations

import re
from typing import Optional, Set, Tuple

from lexiflow.utils.script import is_ascii_digit, is_ascii_lower, is_ascii_upper, is_han

from .vocabulary import (
    DYNAMIC_LABEL_PATTERNS,
    EXAMPLE_LABEL_PATTERN,
    EXAMPLE_LABELS,
    LABEL_VOCABULARY,
    TRANSLATION_LABELS,
)

MAX_LABEL_LENGTH = 48

# Bare label token: ASCII letter or Han start, then word characters and hyphens.
TOKEN_PATTERN = r"[A-Za-z\u3400-\u9fff][A-Za-z0-9_\u3400-\u9fff-]*"
TOKEN_RE = re.compile(TOKEN_PATTERN)

_QUALIFIER_RE = re.compile(r"[（(][^（）()]*[）)]")
_SEPARATORS_RE = re.compile(r"[\s._\-·•]+")
_TRAILING_DIGITS_RE = re.compile(r"\d+$")
_SENSE_RE = re.compile(r"^[Ss](?:ense)?[\s_-]?(\d+)[\s._-]?(.*)$")
_EXAMPLE_RE = re.compile(r"^[Ee]xample[\s_-]?(\d+)$")
_CAMEL_VALUE_RE = re.compile(r"(?:[A-Z][a-z]{2,}){2,}")


def normalize_label(raw: Optional[str]) -> str:
    """Canonical comparison form: no qualifiers, separators or case."""

    if not raw:
        return ""
    text = raw.strip().strip("*").strip()
    text = text.rstrip(":：").strip()
    text = _QUALIFIER_RE.sub("", text)
    return _SEPARATORS_RE.sub("", text).lower()


def label_candidates(raw: Optional[str]) -> Set[str]:
    normalized = normalize_label(raw)
    if not normalized:
        return set()
    candidates = {normalized}
    stripped = _TRAILING_DIGITS_RE.sub("", normalized)
    if stripped:
        candidates.add(stripped)
    if "/" in normalized:
        for part in normalized.split("/"):
            if part:
                candidates.add(part)
                candidates.add(_TRAILING_DIGITS_RE.sub("", part) or part)
    return candidates


def is_label(raw: Optional[str]) -> bool:
    if not raw or len(raw) > MAX_LABEL_LENGTH:
        return False
    candidates = label_candidates(raw)
    if not candidates:
        return False
    if candidates & LABEL_VOCABULARY:
        return True
    normalized = normalize_label(raw)
    return any(pattern.match(normalized) for pattern in DYNAMIC_LABEL_PATTERNS)


def is_exact_label(raw: Optional[str]) -> bool:
    return normalize_label(raw) in LABEL_VOCABULARY


def is_dynamic_label(raw: Optional[str]) -> bool:
    normalized = normalize_label(raw)
    return bool(normalized) and any(
        pattern.match(normalized) for pattern in DYNAMIC_LABEL_PATTERNS
    )


def is_example_label(raw: Optional[str]) -> bool:
    candidates = label_candidates(raw)
    if candidates & EXAMPLE_LABELS:
        return True
    return bool(EXAMPLE_LABEL_PATTERN.match(normalize_label(raw)))


def is_translation_label(raw: Optional[str]) -> bool:
    return bool(label_candidates(raw) & TRANSLATION_LABELS)


def has_strong_start(token: str) -> bool:
    """Labels starting with a capital or a Han character read as field names."""

    return bool(token) and (is_ascii_upper(token[0]) or is_han(token[0]))


def is_compound_label(token: str) -> bool:
    """Numbered or camel-cased labels, e.g. ``s1Verb`` or ``UsageInsight``."""

    if is_dynamic_label(token):
        return True
    if any(is_ascii_digit(char) for char in token):
        return True
    return any(
        is_ascii_lower(prev) and is_ascii_upper(char)
        for prev, char in zip(token, token[1:])
    )


def _split_words(text: str) -> str:
    text = re.sub(r"(?<=[a-z])(?=[A-Z])", " ", text)
    text = re.sub(r"(?<=[A-Z])(?=[A-Z][a-z])", " ", text)
    text = re.sub(r"(?<=[A-Za-z])(?=\d)|(?<=\d)(?=[A-Za-z])", " ", text)
    words = [word[:1].upper() + word[1:] for word in text.split()]
    return " ".join(words)


def humanize_label(token: Optional[str]) -> str:
    """Display form of a label token.

    ``S1Verb`` becomes ``Sense 1 · Verb``, ``Example2`` becomes ``Example 2``
    and other camel case or dotted tokens are split into title-cased words.
    Han-script labels are returned unchanged.
    """

    if not token:
        return ""
    text = token.strip()
    if any(is_han(char) for char in text):
        return text
    sense = _SENSE_RE.match(text)
    if sense:
        number, rest = sense.groups()
        rest = _split_words(rest.replace(".", " ").replace("_", " "))
        return f"Sense {number} · {rest}" if rest else f"Sense {number}"
    example = _EXAMPLE_RE.match(text)
    if example:
        return f"Example {example.group(1)}"
    return _split_words(text.replace(".", " ").replace("_", " "))


def humanize_value(value: str) -> str:
    """Split a single CamelCase value such as ``SingleWord``."""

    if _CAMEL_VALUE_RE.fullmatch(value):
        return _split_words(value)
    return value


def _boundaries(token: str):
    for index in range(1, len(token)):
        prev, char = token[index - 1], token[index]
        if is_ascii_lower(prev) and is_ascii_upper(char):
            yield index
        elif is_ascii_digit(prev) != is_ascii_digit(char):
            yield index
        elif is_han(prev) != is_han(char):
            yield index


def split_merged_label(token: Optional[str]) -> Optional[Tuple[str, str]]:
    """Split ``SingleWordUsageInsight`` into ``("SingleWord", "UsageInsight")``.

    The suffix must be a label.  Among several candidates an exact vocabulary
    hit wins, then a capital or Han start, then the longer suffix.
    """

    if not token:
        return None
    best = None
    best_score = None
    for index in _boundaries(token):
        suffix = token[index:]
        if not is_label(suffix):
            continue
        score = (is_exact_label(suffix), has_strong_start(suffix), len(suffix), -index)
        if best_score is None or score > best_score:
            best = (token[:index], suffix)
            best_score = score
    return best


__all__ = [
    "MAX_LABEL_LENGTH",
    "TOKEN_PATTERN",
    "TOKEN_RE",
    "has_strong_start",
    "humanize_label",
    "humanize_value",
    "is_compound_label",
    "is_dynamic_label",
    "is_exact_label",
    "is_example_label",
    "is_label",
    "is_translation_label",
    "label_candidates",
    "normalize_label",
    "split_merged_label",
]
