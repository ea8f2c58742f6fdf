"""Template registry that renders dictionary entries into canonical markdown."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from functools import lru_cache
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from .pipeline import normalize_dictionary_markdown

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class MarkdownState:
    """Builder state threaded through the section injectors of a template."""

    entry: Dict[str, Any]
    headings: Dict[str, str] = field(default_factory=dict)
    labels: Dict[str, str] = field(default_factory=dict)
    lines: Tuple[str, ...] = ()


SectionInjector = Callable[[MarkdownState], MarkdownState]


@dataclass
class TemplateMatchResult:
    matched: bool
    reason: Optional[str] = None


def sanitize_text(value: Any) -> str:
    if value is None or isinstance(value, (dict, list)):
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value).strip()


def _as_list(value: Any) -> List[Any]:
    if isinstance(value, list):
        return value
    return []


def append_section(state: MarkdownState, key: str, lines: Sequence[str]) -> MarkdownState:
    """Append ``## heading`` plus ``lines``; no-op when there are no lines."""

    body = [line for line in lines if line]
    if not body:
        return state
    block: List[str] = []
    if state.lines:
        block.append("")
    heading = state.headings.get(key)
    if heading:
        block.append(f"## {heading}")
    block.extend(body)
    return replace(state, lines=state.lines + tuple(block))


def resolve_term(entry: Dict[str, Any]) -> str:
    for key in ("term", "词条", "word"):
        term = sanitize_text(entry.get(key))
        if term:
            return term
    return ""


def ensure_term_heading(state: MarkdownState) -> MarkdownState:
    term = resolve_term(state.entry)
    if not term:
        return state
    return replace(state, lines=state.lines + (f"# {term}",))


def finalize_markdown(state: MarkdownState) -> str:
    return normalize_dictionary_markdown("\n".join(state.lines))


def run_injectors(state: MarkdownState, injectors: Iterable[SectionInjector]) -> MarkdownState:
    for inject in injectors:
        state = inject(state)
    return state


class EntryTemplate:
    """Base class for entry renderers."""

    name: str = "base"
    priority: int = 100
    headings: Dict[str, str] = {}
    labels: Dict[str, str] = {}

    def matches(self, entry: Dict[str, Any]) -> TemplateMatchResult:
        return TemplateMatchResult(False)

    def injectors(self) -> Sequence[SectionInjector]:
        return ()

    def create_state(self, entry: Dict[str, Any]) -> MarkdownState:
        return MarkdownState(entry=entry, headings=dict(self.headings), labels=dict(self.labels))

    def build(self, entry: Dict[str, Any]) -> str:
        state = run_injectors(self.create_state(entry), self.injectors())
        return finalize_markdown(state)


class MarkdownOnlyTemplate(EntryTemplate):
    """Entries that already carry rendered markdown."""

    name = "markdown"
    priority = 10

    def matches(self, entry: Dict[str, Any]) -> TemplateMatchResult:
        markdown = entry.get("markdown")
        if isinstance(markdown, str) and markdown.strip():
            return TemplateMatchResult(True, "markdown field")
        return TemplateMatchResult(False)

    def build(self, entry: Dict[str, Any]) -> str:
        return normalize_dictionary_markdown(entry.get("markdown"))


class StructuredEntryTemplate(EntryTemplate):
    """Bilingual entries keyed in Chinese: phonetics, sense groups, variants, phrases."""

    name = "structured"
    priority = 20
    SIGNATURE_KEYS = ("发音解释", "常见词组", "发音")
    headings = {
        "phonetic": "发音",
        "definitions": "释义",
        "variants": "变形",
        "phrases": "常见词组",
    }
    labels = {
        "phonetic_en": "英音",
        "phonetic_us": "美音",
        "synonyms": "同义词",
        "antonyms": "反义词",
        "related": "相关词",
        "example": "例句",
        "translation": "翻译",
    }

    def matches(self, entry: Dict[str, Any]) -> TemplateMatchResult:
        for key in self.SIGNATURE_KEYS:
            if key in entry:
                return TemplateMatchResult(True, f"has {key}")
        return TemplateMatchResult(False)

    def injectors(self) -> Sequence[SectionInjector]:
        return (
            ensure_term_heading,
            self.inject_phonetics,
            self.inject_definitions,
            self.inject_variants,
            self.inject_phrases,
        )

    @staticmethod
    def phonetic_lines(state: MarkdownState) -> List[str]:
        phonetic = state.entry.get("发音")
        if not isinstance(phonetic, dict):
            return []
        lines = []
        for key, label_key in (("英音", "phonetic_en"), ("美音", "phonetic_us")):
            value = sanitize_text(phonetic.get(key))
            if value:
                lines.append(f"- {state.labels[label_key]}：{value}")
        return lines

    @staticmethod
    def definition_line(order: str, category: str, definition: str) -> str:
        if not category and not definition:
            return ""
        if category and definition:
            return f"{order}. {category} · {definition}"
        return f"{order}. {category or definition}"

    @staticmethod
    def relation_lines(state: MarkdownState, relations: Any) -> List[str]:
        if not isinstance(relations, dict):
            return []
        lines = []
        for key, label_key in (("同义词", "synonyms"), ("反义词", "antonyms"), ("相关词", "related")):
            tokens = [sanitize_text(value) for value in _as_list(relations.get(key))]
            tokens = [token for token in tokens if token]
            if tokens:
                lines.append(f"  - {state.labels[label_key]}：{'、'.join(tokens)}")
        return lines

    @staticmethod
    def example_lines(state: MarkdownState, examples: Any) -> List[str]:
        lines = []
        for example in _as_list(examples):
            if not isinstance(example, dict):
                continue
            source = sanitize_text(example.get("源语言"))
            translation = sanitize_text(example.get("翻译"))
            if source:
                lines.append(f"  - {state.labels['example']}：{source}")
            if translation:
                lines.append(f"    {state.labels['translation']}：{translation}")
        return lines

    def definition_blocks(self, state: MarkdownState) -> List[str]:
        lines: List[str] = []
        for group_index, group in enumerate(_as_list(state.entry.get("发音解释")), start=1):
            if not isinstance(group, dict):
                continue
            for sense_index, sense in enumerate(_as_list(group.get("释义")), start=1):
                if not isinstance(sense, dict):
                    continue
                line = self.definition_line(
                    f"{group_index}.{sense_index}",
                    sanitize_text(sense.get("类别")),
                    sanitize_text(sense.get("定义")),
                )
                if line:
                    lines.append(line)
                lines.extend(self.relation_lines(state, sense.get("关系词")))
                lines.extend(self.example_lines(state, sense.get("例句")))
        return lines

    @staticmethod
    def variant_lines(state: MarkdownState) -> List[str]:
        lines = []
        for variant in _as_list(state.entry.get("变形")):
            if not isinstance(variant, dict):
                continue
            form = sanitize_text(variant.get("词形"))
            if not form:
                continue
            status = sanitize_text(variant.get("状态"))
            lines.append(f"- {status}：{form}" if status else f"- {form}")
        return lines

    @staticmethod
    def phrase_lines(state: MarkdownState) -> List[str]:
        lines = []
        for phrase in _as_list(state.entry.get("常见词组")):
            if isinstance(phrase, str):
                value = sanitize_text(phrase)
                if value:
                    lines.append(f"- {value}")
                continue
            if not isinstance(phrase, dict):
                continue
            name = sanitize_text(phrase.get("词组"))
            if not name:
                continue
            meaning = sanitize_text(phrase.get("释义")) or sanitize_text(phrase.get("解释"))
            lines.append(f"- {name} — {meaning}" if meaning else f"- {name}")
        return lines

    def inject_phonetics(self, state: MarkdownState) -> MarkdownState:
        return append_section(state, "phonetic", self.phonetic_lines(state))

    def inject_definitions(self, state: MarkdownState) -> MarkdownState:
        return append_section(state, "definitions", self.definition_blocks(state))

    def inject_variants(self, state: MarkdownState) -> MarkdownState:
        return append_section(state, "variants", self.variant_lines(state))

    def inject_phrases(self, state: MarkdownState) -> MarkdownState:
        return append_section(state, "phrases", self.phrase_lines(state))


class LegacyEntryTemplate(EntryTemplate):
    """Flat entries: term, phonetic, definitions list and a single example."""

    name = "legacy"
    priority = 30
    SIGNATURE_KEYS = ("term", "definitions", "example", "phonetic")
    headings = {
        "phonetic": "Phonetic",
        "definitions": "Definitions",
        "example": "Example",
    }

    def matches(self, entry: Dict[str, Any]) -> TemplateMatchResult:
        for key in self.SIGNATURE_KEYS:
            if key in entry:
                return TemplateMatchResult(True, f"has {key}")
        return TemplateMatchResult(False)

    def injectors(self) -> Sequence[SectionInjector]:
        return (
            ensure_term_heading,
            self.inject_phonetic,
            self.inject_definitions,
            self.inject_example,
        )

    def inject_phonetic(self, state: MarkdownState) -> MarkdownState:
        phonetic = sanitize_text(state.entry.get("phonetic"))
        return append_section(state, "phonetic", [f"- {phonetic}"] if phonetic else [])

    def inject_definitions(self, state: MarkdownState) -> MarkdownState:
        raw = state.entry.get("definitions")
        items = raw if isinstance(raw, list) else [raw]
        definitions = [text for text in (sanitize_text(item) for item in items) if text]
        lines = [f"{index}. {text}" for index, text in enumerate(definitions, start=1)]
        return append_section(state, "definitions", lines)

    def inject_example(self, state: MarkdownState) -> MarkdownState:
        example = sanitize_text(state.entry.get("example"))
        return append_section(state, "example", [f"- {example}"] if example else [])


class TemplateRegistry:
    """Picks the first matching template in priority order."""

    def __init__(self, templates: Iterable[EntryTemplate]) -> None:
        self._templates: List[EntryTemplate] = sorted(
            templates, key=lambda tpl: (tpl.priority, tpl.name)
        )

    @property
    def templates(self) -> Tuple[EntryTemplate, ...]:
        return tuple(self._templates)

    def select(self, entry: Dict[str, Any]) -> EntryTemplate:
        for template in self._templates:
            result = template.matches(entry)
            if result.matched:
                LOGGER.debug("Entry matched template %s (%s)", template.name, result.reason)
                return template
        return self._templates[-1]

    def render(self, entry: Any) -> Tuple[str, str]:
        """Return ``(template name, markdown)`` for ``entry``."""

        if not isinstance(entry, dict):
            return "none", ""
        template = self.select(entry)
        return template.name, template.build(entry)

    def build(self, entry: Any) -> str:
        return self.render(entry)[1]


DEFAULT_TEMPLATES: Tuple[EntryTemplate, ...] = (
    MarkdownOnlyTemplate(),
    StructuredEntryTemplate(),
    LegacyEntryTemplate(),
)


@lru_cache(maxsize=1)
def get_template_registry() -> TemplateRegistry:
    return TemplateRegistry(DEFAULT_TEMPLATES)


def build_dictionary_entry_markdown(entry: Any) -> str:
    return get_template_registry().build(entry)


def normalize_markdown_entity(entry: Any) -> Any:
    """Copy of ``entry`` whose ``markdown`` field has been normalised."""

    if not isinstance(entry, dict):
        return entry
    markdown = entry.get("markdown")
    if not isinstance(markdown, str):
        return dict(entry)
    normalized = dict(entry)
    normalized["markdown"] = normalize_dictionary_markdown(markdown)
    return normalized


__all__ = [
    "DEFAULT_TEMPLATES",
    "EntryTemplate",
    "LegacyEntryTemplate",
    "MarkdownOnlyTemplate",
    "MarkdownState",
    "StructuredEntryTemplate",
    "TemplateMatchResult",
    "TemplateRegistry",
    "append_section",
    "build_dictionary_entry_markdown",
    "ensure_term_heading",
    "finalize_markdown",
    "get_template_registry",
    "normalize_markdown_entity",
    "resolve_term",
    "sanitize_text",
]
