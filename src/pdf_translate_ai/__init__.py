"""
pdf-translate-ai: translate a PDF page by page with an LLM.

This package provides tools for:
- Downloading a source PDF
- Extracting page text with pdftotext
- Translating every page concurrently through a chat-completion API
- Joining the translated pages back into one document
"""

__version__ = "0.1.0"
__author__ = "yharby"

from pdf_translate_ai.config import Settings, load_config
from pdf_translate_ai.download import DownloadError, download_pdf
from pdf_translate_ai.extraction import ExtractionResult, PageExtractor, PdftotextExtractor
from pdf_translate_ai.llm import LLMProvider, LLMResponse, OpenAIProvider
from pdf_translate_ai.translation import PageTranslator, PipelineResult, TranslationPipeline

__all__ = [
    # Config
    "Settings",
    "load_config",
    # Download
    "download_pdf",
    "DownloadError",
    # Extraction
    "ExtractionResult",
    "PageExtractor",
    "PdftotextExtractor",
    # LLM
    "LLMProvider",
    "LLMResponse",
    "OpenAIProvider",
    # Translation
    "PageTranslator",
    "PipelineResult",
    "TranslationPipeline",
]
