from .buffer import BufferUpdate, FinalizedMarkdown, PreviewSnapshot, StreamingMarkdownBuffer
from .chunks import ChunkInterpreter, ChunkOperation, InterpretedChunk, create_chunk_interpreter

__all__ = [
    "BufferUpdate",
    "ChunkInterpreter",
    "ChunkOperation",
    "FinalizedMarkdown",
    "InterpretedChunk",
    "PreviewSnapshot",
    "StreamingMarkdownBuffer",
    "create_chunk_interpreter",
]
