from .pipeline import (
    DEFAULT_PASSES,
    NormalizationPipeline,
    get_normalization_pipeline,
    normalize_dictionary_markdown,
)
from .templates import (
    TemplateRegistry,
    build_dictionary_entry_markdown,
    get_template_registry,
    normalize_markdown_entity,
)

__all__ = [
    "DEFAULT_PASSES",
    "NormalizationPipeline",
    "TemplateRegistry",
    "build_dictionary_entry_markdown",
    "get_normalization_pipeline",
    "get_template_registry",
    "normalize_dictionary_markdown",
    "normalize_markdown_entity",
]
