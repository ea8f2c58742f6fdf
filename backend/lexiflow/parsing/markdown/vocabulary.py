"""Static vocabularies used by the markdown repair passes.

Label entries are stored in their normalised form (lower case, no spaces,
dots, underscores or hyphens) so they can be compared directly with the
output of :func:`lexiflow.parsing.markdown.labels.normalize_label`.
"""

from __future__ import annotations

import re

ENGLISH_LABELS = frozenset(
    {
        "meaning",
        "meanings",
        "definition",
        "definitions",
        "sense",
        "senses",
        "example",
        "examples",
        "translation",
        "translations",
        "usage",
        "usageinsight",
        "usagenotes",
        "register",
        "entrytype",
        "extendednotes",
        "note",
        "notes",
        "collocations",
        "setexpressions",
        "recommendedaudience",
        "historicalresonance",
        "answer",
        "answers",
        "sentencecorrection",
        "contextualtranslation",
        "practiceprompts",
        "pronunciation",
        "pronunciationbritish",
        "pronunciationamerican",
        "british",
        "american",
        "audionotes",
        "phonetic",
        "phonetics",
        "ipa",
        "synonyms",
        "antonyms",
        "related",
        "relatedwords",
        "variants",
        "phrases",
        "commonphrases",
        "idioms",
        "etymology",
        "grammar",
        "partofspeech",
        "category",
        "level",
        "frequency",
        "derivatives",
        "explanation",
    }
)

CHINESE_LABELS = frozenset(
    {
        "例句",
        "例",
        "示例",
        "翻译",
        "译文",
        "中文翻译",
        "英文翻译",
        "释义",
        "定义",
        "含义",
        "英文释义",
        "中文释义",
        "同义词",
        "反义词",
        "相关词",
        "近义词",
        "发音",
        "音标",
        "英音",
        "美音",
        "英式",
        "美式",
        "词性",
        "类别",
        "变形",
        "词形",
        "常见词组",
        "词组",
        "短语",
        "搭配",
        "用法",
        "注释",
        "备注",
        "语体",
        "语域",
        "词源",
        "派生词",
        "习语",
    }
)

LABEL_VOCABULARY = ENGLISH_LABELS | CHINESE_LABELS

DYNAMIC_LABEL_PATTERNS = (
    re.compile(r"^(?:s|sense)\d+"),
    re.compile(r"^example\d+$"),
    re.compile(r"^practiceprompts\d+"),
)

EXAMPLE_LABELS = frozenset({"例句", "例", "示例", "example", "examples"})
EXAMPLE_LABEL_PATTERN = re.compile(r"^example\d+$")

TRANSLATION_LABELS = frozenset(
    {"翻译", "译文", "中文翻译", "英文翻译", "translation", "translations"}
)

# Section titles that may be glued to their first line of content.
SECTION_HEADINGS = frozenset(
    {
        "释义",
        "英文释义",
        "中文释义",
        "例句",
        "音标",
        "发音",
        "变形",
        "常见词组",
        "词组",
        "搭配",
        "用法",
        "同义词",
        "反义词",
        "派生词",
        "词源",
        "注释",
        "Definitions",
        "Meanings",
        "Senses",
        "Examples",
        "Pronunciation",
        "Phonetics",
        "Usage",
        "Synonyms",
        "Antonyms",
        "Phrases",
        "Collocations",
        "Etymology",
        "Variants",
        "Notes",
        "Idioms",
    }
)

# Headings whose items are list entries, e.g. ``## 音标-英式: ...``.
LIST_HEADING_TITLES = frozenset(
    {"音标", "发音", "释义", "例句", "变形", "常见词组", "搭配", "Phonetics", "Pronunciation"}
)

__all__ = [
    "CHINESE_LABELS",
    "DYNAMIC_LABEL_PATTERNS",
    "ENGLISH_LABELS",
    "EXAMPLE_LABELS",
    "EXAMPLE_LABEL_PATTERN",
    "LABEL_VOCABULARY",
    "LIST_HEADING_TITLES",
    "SECTION_HEADINGS",
    "TRANSLATION_LABELS",
]
