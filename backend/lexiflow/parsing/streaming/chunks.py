"""Classification of raw stream chunks into append/replace operations."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Tuple

from lexiflow.parsing.markdown.templates import normalize_markdown_entity

LOGGER = logging.getLogger(__name__)


class ChunkOperation(str, Enum):
    APPEND = "append"
    REPLACE = "replace"


@dataclass
class InterpretedChunk:
    text: str
    entry: Optional[Dict[str, Any]] = None
    operation: ChunkOperation = ChunkOperation.APPEND


def stringify_scalar(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (dict, list)):
        return json.dumps(value, ensure_ascii=False)
    return str(value)


class ChunkStrategy:
    """Base class for chunk shapes understood by the interpreter."""

    name: str = "base"

    def matches(self, payload: Any) -> bool:
        return False

    def interpret(self, payload: Any) -> InterpretedChunk:
        raise NotImplementedError


class MarkdownEntityStrategy(ChunkStrategy):
    """A complete entity with rendered markdown supersedes the accumulator."""

    name = "markdown_entity"

    def matches(self, payload: Any) -> bool:
        return isinstance(payload, dict) and isinstance(payload.get("markdown"), str)

    def interpret(self, payload: Any) -> InterpretedChunk:
        entry = normalize_markdown_entity(payload)
        return InterpretedChunk(entry["markdown"], entry, ChunkOperation.REPLACE)


class ProviderDeltaStrategy(ChunkStrategy):
    """OpenAI-style ``{"choices": [{"delta": {"content": ...}}]}`` payloads."""

    name = "provider_delta"

    @staticmethod
    def _delta(payload: Any) -> Optional[Dict[str, Any]]:
        if not isinstance(payload, dict):
            return None
        choices = payload.get("choices")
        if not isinstance(choices, list) or not choices or not isinstance(choices[0], dict):
            return None
        delta = choices[0].get("delta")
        return delta if isinstance(delta, dict) else None

    def matches(self, payload: Any) -> bool:
        return self._delta(payload) is not None

    def interpret(self, payload: Any) -> InterpretedChunk:
        content = self._delta(payload).get("content")
        if isinstance(content, list):
            parts: List[str] = []
            for part in content:
                if isinstance(part, dict) and isinstance(part.get("text"), str):
                    parts.append(part["text"])
                elif isinstance(part, str):
                    parts.append(part)
            return InterpretedChunk("".join(parts))
        if isinstance(content, str):
            return InterpretedChunk(content)
        return InterpretedChunk("")


class ValueWrapperStrategy(ChunkStrategy):
    name = "value"

    def matches(self, payload: Any) -> bool:
        return isinstance(payload, dict) and "value" in payload

    def interpret(self, payload: Any) -> InterpretedChunk:
        return InterpretedChunk(stringify_scalar(payload.get("value")))


# JSON decoded from a string chunk
DEFAULT_STRATEGIES = (
    MarkdownEntityStrategy(),
    ProviderDeltaStrategy(),
    ValueWrapperStrategy(),
)

# objects handed over as-is; a ``value`` wrapper wins over a delta shape
DEFAULT_OBJECT_STRATEGIES = (
    MarkdownEntityStrategy(),
    ValueWrapperStrategy(),
    ProviderDeltaStrategy(),
)


class ChunkInterpreter:
    """Turns one transport chunk into ``InterpretedChunk``. Never raises."""

    def __init__(
        self,
        strategies: Optional[Iterable[ChunkStrategy]] = None,
        logger: Optional[logging.Logger] = None,
        object_strategies: Optional[Iterable[ChunkStrategy]] = None,
    ) -> None:
        self.strategies = tuple(strategies or DEFAULT_STRATEGIES)
        self.object_strategies = tuple(object_strategies or DEFAULT_OBJECT_STRATEGIES)
        self.logger = logger or LOGGER

    @staticmethod
    def _match(
        payload: Any, strategies: Tuple[ChunkStrategy, ...]
    ) -> Optional[InterpretedChunk]:
        for strategy in strategies:
            if strategy.matches(payload):
                return strategy.interpret(payload)
        return None

    def _parse_json(self, text: str) -> Any:
        stripped = text.strip()
        if not stripped or stripped[0] not in "{[":
            return None
        try:
            return json.loads(stripped)
        except (ValueError, RecursionError) as exc:
            self.logger.debug("Chunk is not complete JSON, appending as text: %s", exc)
            return None

    def interpret(self, chunk: Any) -> InterpretedChunk:
        if chunk is None:
            return InterpretedChunk("")
        if isinstance(chunk, str):
            parsed = self._parse_json(chunk)
            if parsed is not None:
                matched = self._match(parsed, self.strategies)
                if matched is not None:
                    return matched
            return InterpretedChunk(chunk)
        if isinstance(chunk, (bool, int, float)):
            return InterpretedChunk(stringify_scalar(chunk))
        matched = self._match(chunk, self.object_strategies)
        if matched is not None:
            return matched
        self.logger.debug("Unrecognised chunk of type %s, stringifying", type(chunk).__name__)
        return InterpretedChunk(stringify_scalar(chunk))


def create_chunk_interpreter(logger: Optional[logging.Logger] = None) -> ChunkInterpreter:
    return ChunkInterpreter(logger=logger)


__all__ = [
    "ChunkInterpreter",
    "ChunkOperation",
    "ChunkStrategy",
    "DEFAULT_OBJECT_STRATEGIES",
    "DEFAULT_STRATEGIES",
    "InterpretedChunk",
    "MarkdownEntityStrategy",
    "ProviderDeltaStrategy",
    "ValueWrapperStrategy",
    "create_chunk_interpreter",
    "stringify_scalar",
]
