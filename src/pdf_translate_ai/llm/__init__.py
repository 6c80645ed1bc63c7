"""
LLM provider abstraction layer.

Supports OpenAI-compatible chat-completion endpoints.
"""

from pdf_translate_ai.llm.base import LLMProvider, LLMResponse, LLMResponseError
from pdf_translate_ai.llm.openai_chat import OpenAIProvider

__all__ = [
    "LLMProvider",
    "LLMResponse",
    "LLMResponseError",
    "OpenAIProvider",
]
