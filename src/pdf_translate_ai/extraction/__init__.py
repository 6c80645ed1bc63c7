"""
Page text extraction for pdf-translate-ai.

Provides:
- PageExtractor interface probed page by page by the dispatch loop
- PdftotextExtractor backed by the poppler pdftotext executable
"""

from pdf_translate_ai.extraction.base import ExtractionResult, PageExtractor
from pdf_translate_ai.extraction.pdftotext import PdftotextExtractor

__all__ = [
    "ExtractionResult",
    "PageExtractor",
    "PdftotextExtractor",
]
