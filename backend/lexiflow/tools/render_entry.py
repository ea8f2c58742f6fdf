from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, List, Optional, Sequence

from lexiflow.parsing import (
    ChunkOperation,
    StreamingMarkdownBuffer,
    build_dictionary_entry_markdown,
    create_chunk_interpreter,
    normalize_dictionary_markdown,
)


LOGGER = logging.getLogger(__name__)

MODES = ("auto", "entry", "markdown", "stream")


def resolve_mode(path: Path, mode: str) -> str:
    if mode != "auto":
        return mode
    suffix = path.suffix.lower()
    if suffix == ".json":
        return "entry"
    if suffix == ".jsonl":
        return "stream"
    return "markdown"


def _load_chunks(text: str) -> List[Any]:
    chunks: List[Any] = []
    for number, line in enumerate(text.splitlines(), start=1):
        if not line.strip():
            continue
        try:
            chunks.append(json.loads(line))
        except (ValueError, RecursionError):
            LOGGER.debug("Line %d is not JSON, using it as a text chunk", number)
            chunks.append(line)
    return chunks


def replay_stream(chunks: Sequence[Any]) -> str:
    interpreter = create_chunk_interpreter(logger=LOGGER)
    buffer = StreamingMarkdownBuffer()
    revisions = 0
    for chunk in chunks:
        interpreted = interpreter.interpret(chunk)
        if interpreted.operation is ChunkOperation.REPLACE:
            update = buffer.replace(interpreted.text)
        else:
            update = buffer.append(interpreted.text)
        if update.preview is not None:
            revisions += 1
            LOGGER.info("Preview revision %d (%d chars)", revisions, len(update.preview))
    final = buffer.finalize()
    print(f"Preview revisions: {revisions}", file=sys.stderr)
    return final.markdown


def render(text: str, mode: str) -> str:
    if mode == "entry":
        return build_dictionary_entry_markdown(json.loads(text))
    if mode == "stream":
        return replay_stream(_load_chunks(text))
    return normalize_dictionary_markdown(text)


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Render a dictionary entry, markdown file or recorded stream into canonical markdown.",
    )
    parser.add_argument("input", type=Path, help="Entry JSON, markdown or JSON Lines chunk file")
    parser.add_argument(
        "--mode",
        choices=MODES,
        default="auto",
        help="How to read the input (default: by file extension)",
    )
    parser.add_argument("--output", type=Path, help="Write the markdown here instead of stdout")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if not args.verbose else logging.DEBUG,
        format="%(levelname)s %(message)s",
    )

    try:
        text = args.input.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        LOGGER.error("Cannot read %s: %s", args.input, exc)
        return 2

    mode = resolve_mode(args.input, args.mode)
    try:
        markdown = render(text, mode)
    except (ValueError, RecursionError) as exc:
        LOGGER.error("Cannot parse %s as %s: %s", args.input, mode, exc)
        return 2

    if args.output:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        args.output.write_text(markdown + "\n", encoding="utf-8")
        LOGGER.info("Wrote %s", args.output)
    else:
        print(markdown)
    return 0


if __name__ == "__main__":
    sys.exit(main())
