"""
Translation pipeline for pdf-translate-ai.

Provides:
- Per-page request shaping for the chat-completion translator
- Sequential page discovery with concurrent translation dispatch
- Ordered wait-for-all join of the page results
"""

from pdf_translate_ai.translation.pipeline import (
    PageOutcome,
    PipelineConfig,
    PipelineResult,
    TranslationPipeline,
    discover_and_dispatch,
    join,
)
from pdf_translate_ai.translation.translator import PageTranslator

__all__ = [
    "PageTranslator",
    "TranslationPipeline",
    "PipelineConfig",
    "PipelineResult",
    "PageOutcome",
    "discover_and_dispatch",
    "join",
]
