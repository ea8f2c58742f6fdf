from lexiflow.parsing.markdown.headings import (
    break_glued_heading_hashes,
    ensure_heading_space,
    merge_broken_headings,
    separate_inline_headings,
    space_ordinal_markers,
    split_heading_list_items,
)
from lexiflow.parsing.markdown.pipeline import normalize_dictionary_markdown


def test_splits_heading_attached_list_markers():
    source = "## 音标-英式: /ˈmenjuː/\n- 美式: /ˈmenjuː/"
    assert normalize_dictionary_markdown(source) == "## 音标\n- 英式: /ˈmenjuː/\n- 美式: /ˈmenjuː/"


def test_keeps_hyphenated_headings_intact():
    assert normalize_dictionary_markdown("## T-shirt: history") == "## T-shirt: history"


def test_isolates_section_headings_from_content():
    result = normalize_dictionary_markdown("## 释义 1. 主要解释")
    assert result.split("\n") == ["## 释义", "1. 主要解释"]


def test_merges_broken_headings_into_single_line():
    source = "\n".join(["##", "词汇学信息", "- 语体：中性"])
    assert normalize_dictionary_markdown(source).split("\n") == ["## 词汇学信息", "- 语体：中性"]


def test_keeps_heading_isolated_when_next_line_is_list():
    source = "\n".join(["##", "- 语体：中性"])
    assert normalize_dictionary_markdown(source).split("\n") == ["##", "- 语体：中性"]


def test_merge_broken_headings_ignores_following_heading():
    assert merge_broken_headings("##\n# Title") == "##\n# Title"


def test_ensure_heading_space():
    assert ensure_heading_space("##释义") == "## 释义"
    assert ensure_heading_space("## 释义") == "## 释义"
    assert ensure_heading_space("#token#") == "#token#"


def test_split_heading_list_items_only_for_list_titles():
    assert split_heading_list_items("## 发音-英音: /a/") == "## 发音\n- 英音: /a/"
    assert split_heading_list_items("## Self-study") == "## Self-study"


def test_break_glued_heading_hashes_needs_cue():
    assert break_glued_heading_hashes("Notes: # Usage") == "Notes:\n# Usage"
    assert break_glued_heading_hashes("Use C# daily") == "Use C# daily"


def test_separate_inline_headings():
    assert separate_inline_headings("end of text ## 例句") == "end of text\n\n## 例句"


def test_space_ordinal_markers():
    assert space_ordinal_markers("1.first\n2. second\n3.5 cups") == "1. first\n2. second\n3.5 cups"
