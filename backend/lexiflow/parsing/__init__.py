from __future__ import annotations

from .json_scanner import decode_json_string, extract_markdown_preview, find_field_value
from .markdown import (
    build_dictionary_entry_markdown,
    get_normalization_pipeline,
    get_template_registry,
    normalize_dictionary_markdown,
    normalize_markdown_entity,
)
from .streaming import (
    BufferUpdate,
    ChunkInterpreter,
    ChunkOperation,
    FinalizedMarkdown,
    InterpretedChunk,
    PreviewSnapshot,
    StreamingMarkdownBuffer,
    create_chunk_interpreter,
)

__all__ = [
    "BufferUpdate",
    "ChunkInterpreter",
    "ChunkOperation",
    "FinalizedMarkdown",
    "InterpretedChunk",
    "PreviewSnapshot",
    "StreamingMarkdownBuffer",
    "build_dictionary_entry_markdown",
    "create_chunk_interpreter",
    "decode_json_string",
    "extract_markdown_preview",
    "find_field_value",
    "get_normalization_pipeline",
    "get_template_registry",
    "normalize_dictionary_markdown",
    "normalize_markdown_entity",
]
