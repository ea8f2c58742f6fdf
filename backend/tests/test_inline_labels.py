from lexiflow.parsing.markdown.inline_labels import (
    bold_line_labels,
    bold_list_item_labels,
    strip_dangling_label_hyphens,
)
from lexiflow.parsing.markdown.pipeline import normalize_dictionary_markdown


def _lines(*lines):
    return "\n".join(lines)


def test_splits_english_inline_labels():
    source = "- **Meaning**: to light  **Example**: She lights a candle"
    assert normalize_dictionary_markdown(source) == _lines(
        "- **Meaning**: to light",
        "  **Example**: She lights a candle",
    )


def test_splits_labels_separated_by_single_space():
    source = "- **Meaning**: to light **Example**: She lights a candle"
    assert normalize_dictionary_markdown(source) == _lines(
        "- **Meaning**: to light",
        "  **Example**: She lights a candle",
    )


def test_splits_composite_english_inline_labels():
    source = "- **Pronunciation-British**: /ˈhjuː.mən/  **AudioNotes**: authoritative archival"
    assert normalize_dictionary_markdown(source) == _lines(
        "- **Pronunciation-British**: /ˈhjuː.mən/",
        "  **AudioNotes**: authoritative archival",
    )


def test_removes_dangling_label_separators():
    source = "- **Pronunciation-British**: /deɪt/ - **American**: /deɪt/ - **AudioNotes**: crisp"
    assert normalize_dictionary_markdown(source) == _lines(
        "- **Pronunciation-British**: /deɪt/",
        "  **American**: /deɪt/",
        "  **AudioNotes**: crisp",
    )


def test_splits_newly_synced_protocol_labels():
    source = (
        "- **Meaning**: outline the idea  **Recommended Audience**: Intermediate learners"
        "  **Set Expressions**: take a stand  **Historical Resonance**: Rooted in 19th century rhetoric."
    )
    assert normalize_dictionary_markdown(source) == _lines(
        "- **Meaning**: outline the idea",
        "  **Recommended Audience**: Intermediate learners",
        "  **Set Expressions**: take a stand",
        "  **Historical Resonance**: Rooted in 19th century rhetoric.",
    )


def test_formats_sense_label_chains():
    source = (
        "Senses:S1Verb:to move toward the speaker.Examples:Example1:She came home immediately."
        "UsageInsight:Common in storytelling."
    )
    assert normalize_dictionary_markdown(source) == _lines(
        "**Senses**:",
        "**Sense 1 · Verb**: to move toward the speaker.",
        "**Examples**:",
        "**Example 1**: She came home immediately.",
        "**Usage Insight**: Common in storytelling.",
    )


def test_restores_missing_label_delimiters():
    source = (
        "Senses s1Verb:to move toward the speaker.Examples Example1:She came home immediately."
        "UsageInsight:Common in storytelling."
    )
    assert normalize_dictionary_markdown(source) == _lines(
        "**Senses**:",
        "**Sense 1 · Verb**: to move toward the speaker.",
        "**Examples**:",
        "**Example 1**: She came home immediately.",
        "**Usage Insight**: Common in storytelling.",
    )


def test_expands_collapsed_dictionary_metadata():
    source = _lines(
        "Examples:Example1:The train came at exactly 3:15 PM as scheduled.",
        "UsageInsight:Often used when describing precise arrivals.",
        "Register:Formal",
        "EntryType:SingleWord",
    )
    assert normalize_dictionary_markdown(source) == _lines(
        "**Examples**:",
        "**Example 1**: The train came at exactly 3:15 PM as scheduled.",
        "**Usage Insight**: Often used when describing precise arrivals.",
        "**Register**: Formal",
        "**Entry Type**: Single Word",
    )


def test_formats_practice_prompts_metadata():
    source = _lines(
        "PracticePrompts1.SentenceCorrection:",
        "Identify the error in the presentation.",
        "Answer: Replace 'her' with 'their'.",
    )
    assert normalize_dictionary_markdown(source) == _lines(
        "**Practice Prompts 1**:",
        "**Sentence Correction**:",
        "Identify the error in the presentation.",
        "**Answer**: Replace 'her' with 'their'.",
    )


def test_splits_inline_practice_prompts_chains():
    source = "- PracticePrompts1.ContextualTranslation: Translate.  Answer: Provide context."
    assert normalize_dictionary_markdown(source) == _lines(
        "- **Practice Prompts 1 Contextual Translation**: Translate.",
        "  **Answer**: Provide context.",
    )


def test_separates_labels_merged_into_values():
    source = (
        "EntryType:SingleWordUsageInsight:Often used in narratives."
        "Register:FormalExtendedNotes:Retains period usage."
    )
    assert normalize_dictionary_markdown(source) == _lines(
        "**Entry Type**: Single Word",
        "**Usage Insight**: Often used in narratives.",
        "**Register**: Formal",
        "**Extended Notes**: Retains period usage.",
    )


def test_formats_numbered_definition_and_protocol_labels():
    source = (
        "Senses:S1Definition:to restate core meaning.Collocations:make history."
        "SetExpressions:set in stone."
    )
    assert normalize_dictionary_markdown(source) == _lines(
        "**Senses**:",
        "**Sense 1 · Definition**: to restate core meaning.",
        "**Collocations**: make history.",
        "**Set Expressions**: set in stone.",
    )


def test_restores_space_separated_label_chains():
    source = _lines(
        "Senses s1Verb to move toward a place",
        "Examples Example1 The train came at exactly 3:15 PM as scheduled.",
        "UsageInsight Often used when describing precise arrivals.",
        "Register Formal",
        "EntryType SingleWord",
    )
    assert normalize_dictionary_markdown(source) == _lines(
        "**Senses**:",
        "**Sense 1 · Verb**: to move toward a place",
        "**Examples**:",
        "**Example 1**: The train came at exactly 3:15 PM as scheduled.",
        "**Usage Insight**: Often used when describing precise arrivals.",
        "**Register**: Formal",
        "**Entry Type**: Single Word",
    )


def test_preserves_sense_marker_emoji():
    source = "- cooperatewith: 与……合作2️⃣"
    assert normalize_dictionary_markdown(source) == source


def test_preserves_url_colon_usage():
    source = "See http://example.com for details"
    assert normalize_dictionary_markdown(source) == source


def test_bold_list_item_labels_keeps_dotted_compound_whole():
    source = "- PracticePrompts1.ContextualTranslation: Translate."
    assert bold_list_item_labels(source) == (
        "- **Practice Prompts 1 Contextual Translation**: Translate."
    )


def test_bold_line_labels_leaves_han_and_unknown_labels():
    assert bold_line_labels("- 语体：中性") == "- 语体：中性"
    assert bold_line_labels("Mood: calm") == "Mood: calm"
    assert bold_line_labels("Register:Formal") == "**Register**: Formal"


def test_strip_dangling_label_hyphens_requires_following_label():
    assert strip_dangling_label_hyphens("value -\n**American**: x") == "value\n**American**: x"
    assert strip_dangling_label_hyphens("value -\nplain text") == "value -\nplain text"
