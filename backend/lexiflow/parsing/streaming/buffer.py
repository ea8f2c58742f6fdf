"""Incremental assembly of streamed entry text into a markdown preview."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from lexiflow.parsing.json_scanner import extract_markdown_preview
from lexiflow.parsing.markdown.pipeline import NormalizationPipeline, get_normalization_pipeline
from lexiflow.parsing.markdown.templates import TemplateRegistry, get_template_registry

LOGGER = logging.getLogger(__name__)


@dataclass
class BufferUpdate:
    """What changed after one ``append``/``replace``.

    ``preview`` is ``None`` when the rendered preview did not change;
    ``entry`` is ``None`` unless a newly parsed entity differs from the last one.
    """

    preview: Optional[str] = None
    entry: Optional[Dict[str, Any]] = None


@dataclass
class FinalizedMarkdown:
    markdown: str
    entry: Optional[Dict[str, Any]] = None


@dataclass
class PreviewSnapshot:
    raw: str
    preview: str
    entry: Optional[Dict[str, Any]] = None


class StreamingMarkdownBuffer:
    def __init__(
        self,
        registry: Optional[TemplateRegistry] = None,
        pipeline: Optional[NormalizationPipeline] = None,
    ) -> None:
        self.registry = registry or get_template_registry()
        self.pipeline = pipeline or get_normalization_pipeline()
        self._reset()

    def _reset(self) -> None:
        self._raw = ""
        self._preview = ""
        self._entry: Optional[Dict[str, Any]] = None
        self._last_parsed: Optional[Dict[str, Any]] = None
        self._finalized = False

    @property
    def finalized(self) -> bool:
        return self._finalized

    def _parse(self) -> Optional[Dict[str, Any]]:
        if not self._raw.lstrip().startswith("{"):
            return None
        try:
            parsed = json.loads(self._raw)
        except (ValueError, RecursionError) as exc:
            LOGGER.debug("Accumulated text is not valid JSON yet: %s", exc)
            return None
        return parsed if isinstance(parsed, dict) else None

    def _render(self) -> Tuple[str, Optional[Dict[str, Any]]]:
        parsed = self._parse()
        if parsed is not None:
            return self.registry.build(parsed), parsed
        partial = extract_markdown_preview(self._raw)
        text = partial if partial is not None else self._raw
        return self.pipeline.run(text), None

    def _refresh(self) -> BufferUpdate:
        preview, parsed = self._render()
        self._entry = parsed
        update = BufferUpdate()
        if parsed is not None and parsed != self._last_parsed:
            self._last_parsed = parsed
            update.entry = parsed
        # an empty render never wipes a preview already shown
        if preview != self._preview and (preview or not self._preview):
            self._preview = preview
            update.preview = preview
        return update

    def append(self, chunk: Optional[str]) -> BufferUpdate:
        if self._finalized:
            LOGGER.debug("Ignoring chunk appended after finalize")
            return BufferUpdate()
        self._raw += chunk or ""
        return self._refresh()

    def replace(self, markdown: Optional[str]) -> BufferUpdate:
        """Drop everything accumulated so far and start over from ``markdown``."""

        previous = self._preview
        self._reset()
        self._raw = markdown or ""
        update = self._refresh()
        if update.preview is None and previous != self._preview:
            update.preview = self._preview
        return update

    def finalize(self) -> FinalizedMarkdown:
        if not self._finalized:
            self._refresh()
            self._finalized = True
        return FinalizedMarkdown(markdown=self._preview, entry=self._entry)

    def get_snapshot(self) -> PreviewSnapshot:
        return PreviewSnapshot(raw=self._raw, preview=self._preview, entry=self._entry)


__all__ = [
    "BufferUpdate",
    "FinalizedMarkdown",
    "PreviewSnapshot",
    "StreamingMarkdownBuffer",
]
