from lexiflow.parsing.markdown.templates import (
    LegacyEntryTemplate,
    MarkdownOnlyTemplate,
    MarkdownState,
    StructuredEntryTemplate,
    TemplateRegistry,
    append_section,
    build_dictionary_entry_markdown,
    get_template_registry,
    normalize_markdown_entity,
    sanitize_text,
)


STRUCTURED_ENTRY = {
    "词条": "run",
    "发音": {"英音": "/rʌn/", "美音": "/rʌn/"},
    "发音解释": [
        {
            "释义": [
                {
                    "类别": "动词",
                    "定义": "跑",
                    "关系词": {"同义词": ["sprint", "dash"], "反义词": ["walk"]},
                    "例句": [{"源语言": "He runs every morning.", "翻译": "他每天早上跑步。"}],
                }
            ]
        }
    ],
    "变形": [{"词形": "ran", "状态": "过去式"}],
    "常见词组": [{"词组": "run out", "释义": "用完"}, "run into"],
}


def test_markdown_only_entry_round_trip():
    assert build_dictionary_entry_markdown({"markdown": "# Title   "}) == "# Title"


def test_structured_entry_renders_all_sections():
    assert build_dictionary_entry_markdown(STRUCTURED_ENTRY) == "\n".join(
        [
            "# run",
            "",
            "## 发音",
            "- 英音：/rʌn/",
            "- 美音：/rʌn/",
            "",
            "## 释义",
            "1.1. 动词 · 跑",
            "  - 同义词：sprint、dash",
            "  - 反义词：walk",
            "  - 例句：He runs every morning.",
            "    翻译：他每天早上跑步。",
            "",
            "## 变形",
            "- 过去式：ran",
            "",
            "## 常见词组",
            "- run out — 用完",
            "- run into",
        ]
    )


def test_structured_entry_skips_empty_sections():
    assert build_dictionary_entry_markdown({"词条": "run", "发音": {}, "变形": []}) == "# run"


def test_legacy_entry_renders_sections():
    entry = {
        "term": "run",
        "phonetic": "/rʌn/",
        "definitions": ["to move fast", "to operate"],
        "example": "He runs fast.",
    }
    assert build_dictionary_entry_markdown(entry) == "\n".join(
        [
            "# run",
            "",
            "## Phonetic",
            "- /rʌn/",
            "",
            "## Definitions",
            "1. to move fast",
            "2. to operate",
            "",
            "## Example",
            "- He runs fast.",
        ]
    )


def test_legacy_entry_accepts_single_definition_string():
    markdown = build_dictionary_entry_markdown({"term": "go", "definitions": "to leave"})
    assert markdown == "# go\n\n## Definitions\n1. to leave"


def test_registry_priority_and_fallback():
    registry = get_template_registry()
    assert [template.name for template in registry.templates] == [
        "markdown",
        "structured",
        "legacy",
    ]
    assert registry.render({"markdown": "# A", "发音": {}})[0] == "markdown"
    assert registry.render({"markdown": "   ", "发音解释": []})[0] == "structured"
    assert registry.render({"other": 1}) == ("legacy", "")
    assert registry.render(["not", "an", "entry"]) == ("none", "")
    assert registry.render(None) == ("none", "")


def test_custom_registry_orders_by_priority():
    registry = TemplateRegistry([LegacyEntryTemplate(), MarkdownOnlyTemplate()])
    assert registry.select({"term": "x", "markdown": "# x"}).name == "markdown"
    assert StructuredEntryTemplate().matches({"term": "x"}).matched is False


def test_append_section_is_noop_without_lines():
    state = MarkdownState(entry={}, headings={"phrases": "常见词组"})
    assert append_section(state, "phrases", []) is state
    assert append_section(state, "phrases", ["", ""]) is state
    updated = append_section(state, "phrases", ["- a"])
    assert updated.lines == ("## 常见词组", "- a")


def test_sanitize_text():
    assert sanitize_text(None) == ""
    assert sanitize_text({"a": 1}) == ""
    assert sanitize_text(True) == "true"
    assert sanitize_text(3) == "3"
    assert sanitize_text("  hi ") == "hi"


def test_normalize_markdown_entity_copies():
    entry = {"term": "x", "markdown": "# X   "}
    normalized = normalize_markdown_entity(entry)
    assert normalized == {"term": "x", "markdown": "# X"}
    assert entry["markdown"] == "# X   "
    assert normalize_markdown_entity("text") == "text"
