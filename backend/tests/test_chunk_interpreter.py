import json
import logging

from lexiflow.parsing.streaming.chunks import (
    ChunkOperation,
    InterpretedChunk,
    create_chunk_interpreter,
)


def _interpret(chunk):
    return create_chunk_interpreter().interpret(chunk)


def test_markdown_entity_replaces_with_normalized_copy():
    chunk = {"term": "run", "markdown": "# run   "}
    result = _interpret(chunk)
    assert result.operation is ChunkOperation.REPLACE
    assert result.text == "# run"
    assert result.entry == {"term": "run", "markdown": "# run"}
    assert chunk["markdown"] == "# run   "


def test_value_wrapper_appends():
    assert _interpret({"value": "abc"}) == InterpretedChunk("abc")
    assert _interpret({"value": None}) == InterpretedChunk("")
    assert _interpret({"value": 2}) == InterpretedChunk("2")


def test_string_chunk_with_json_payloads():
    markdown = _interpret(json.dumps({"markdown": "# Title"}))
    assert markdown.operation is ChunkOperation.REPLACE
    assert markdown.text == "# Title"
    assert _interpret('{"value": "partial "}').text == "partial "


def test_provider_delta_shapes():
    delta = json.dumps({"choices": [{"delta": {"content": "Hel"}}]})
    assert _interpret(delta) == InterpretedChunk("Hel")
    parts = {"choices": [{"delta": {"content": [{"text": "a"}, {"text": "b"}, {"type": "x"}]}}]}
    assert _interpret(parts) == InterpretedChunk("ab")
    assert _interpret({"choices": [{"delta": {}}]}) == InterpretedChunk("")


def test_plain_and_broken_strings_append_verbatim(caplog):
    assert _interpret("  plain text ") == InterpretedChunk("  plain text ")
    with caplog.at_level(logging.DEBUG, logger="lexiflow.parsing.streaming.chunks"):
        assert _interpret('{"markdown": "# Ti') == InterpretedChunk('{"markdown": "# Ti')
    assert "not complete JSON" in caplog.text


def test_unmatched_json_string_keeps_raw_text():
    assert _interpret('{"foo": 1}') == InterpretedChunk('{"foo": 1}')
    assert _interpret("[1, 2]") == InterpretedChunk("[1, 2]")


def test_primitives():
    assert _interpret(None) == InterpretedChunk("")
    assert _interpret(42) == InterpretedChunk("42")
    assert _interpret(1.5) == InterpretedChunk("1.5")
    assert _interpret(2.0) == InterpretedChunk("2")
    assert _interpret(True) == InterpretedChunk("true")
    assert _interpret(False) == InterpretedChunk("false")


def test_unrecognised_objects_are_stringified(caplog):
    with caplog.at_level(logging.DEBUG, logger="lexiflow.parsing.streaming.chunks"):
        result = _interpret({"foo": "中"})
    assert result == InterpretedChunk('{"foo": "中"}')
    assert "Unrecognised chunk" in caplog.text
    assert _interpret(["a", 1]) == InterpretedChunk('["a", 1]')


def test_deeply_nested_string_chunk_appends_verbatim():
    chunk = "[" * 5000 + "]" * 5000
    assert _interpret(chunk) == InterpretedChunk(chunk)


def test_object_chunk_prefers_value_over_delta_shape():
    payload = {"value": "v", "choices": [{"delta": {"content": "d"}}]}
    assert _interpret(payload) == InterpretedChunk("v")
    assert _interpret(json.dumps(payload)) == InterpretedChunk("d")
