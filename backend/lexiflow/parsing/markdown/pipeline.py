"""Ordered markdown normalisation pipeline."""

from __future__ import annotations

import logging
import re
from functools import lru_cache
from typing import Callable, Iterable, Optional, Tuple

from . import examples, headings, inline_labels, punctuation

LOGGER = logging.getLogger(__name__)

NormalizationPass = Callable[[str], str]

_BULLET_RE = re.compile(r"^([ \t]*)•[ \t]*", re.MULTILINE)
_BLANK_RUN_RE = re.compile(r"\n{3,}")


def normalize_bullets(text: str) -> str:
    return _BULLET_RE.sub(r"\1- ", text)


def strip_trailing_spaces(text: str) -> str:
    return "\n".join(line.rstrip() for line in text.split("\n"))


def collapse_blank_lines(text: str) -> str:
    return _BLANK_RUN_RE.sub("\n\n", text)


def trim_document(text: str) -> str:
    return text.strip("\n").rstrip()


DEFAULT_PASSES: Tuple[NormalizationPass, ...] = (
    headings.normalize_newlines,
    normalize_bullets,
    examples.merge_segmentation_marker_lines,
    headings.merge_broken_headings,
    headings.break_glued_heading_hashes,
    headings.ensure_heading_space,
    headings.split_heading_list_items,
    headings.isolate_section_headings,
    headings.separate_inline_headings,
    headings.space_ordinal_markers,
    inline_labels.bold_list_item_labels,
    inline_labels.restore_label_delimiters,
    inline_labels.break_inline_labels,
    inline_labels.strip_dangling_label_hyphens,
    inline_labels.bold_line_labels,
    examples.layout_example_translations,
    examples.space_example_segmentation,
    punctuation.space_punctuation,
    strip_trailing_spaces,
    collapse_blank_lines,
    trim_document,
)


# Spacing passes can expose a label or translation that an earlier layout
# pass only recognises on the next sweep.
SETTLE_ROUNDS = 6


class NormalizationPipeline:
    """Left-to-right composition of text passes.

    A pass that raises is logged and skipped; the text produced by the
    previous pass is carried forward unchanged.  With ``max_rounds`` above
    one the whole sequence is repeated until a sweep changes nothing, which
    makes the result a fixed point of the pipeline.
    """

    def __init__(
        self,
        passes: Optional[Iterable[NormalizationPass]] = None,
        max_rounds: int = 1,
    ) -> None:
        self.passes: Tuple[NormalizationPass, ...] = tuple(
            DEFAULT_PASSES if passes is None else passes
        )
        self.max_rounds = max(1, max_rounds)

    def _sweep(self, current: str) -> str:
        for step in self.passes:
            try:
                current = step(current)
            except Exception:
                LOGGER.warning(
                    "Markdown pass %s failed, keeping previous text",
                    getattr(step, "__name__", repr(step)),
                    exc_info=True,
                )
        return current

    def run(self, text: Optional[str]) -> str:
        current = self._sweep(text or "")
        for _ in range(self.max_rounds - 1):
            settled = self._sweep(current)
            if settled == current:
                return current
            current = settled
        if self.max_rounds > 1:
            LOGGER.debug("Markdown did not settle after %d rounds", self.max_rounds)
        return current

    __call__ = run


@lru_cache(maxsize=1)
def get_normalization_pipeline() -> NormalizationPipeline:
    return NormalizationPipeline(max_rounds=SETTLE_ROUNDS)


def normalize_dictionary_markdown(text: Optional[str]) -> str:
    return get_normalization_pipeline().run(text)


__all__ = [
    "DEFAULT_PASSES",
    "NormalizationPass",
    "NormalizationPipeline",
    "SETTLE_ROUNDS",
    "collapse_blank_lines",
    "get_normalization_pipeline",
    "normalize_bullets",
    "normalize_dictionary_markdown",
    "strip_trailing_spaces",
    "trim_document",
]
