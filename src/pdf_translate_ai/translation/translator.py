"""
Page translator using LLM providers.

Shapes the per-page chat-completion request: a fixed system instruction
followed by the raw page text.
"""

from __future__ import annotations

import logging

from pdf_translate_ai.llm import LLMProvider

logger = logging.getLogger(__name__)

SYSTEM_PROMPT_TEMPLATE = (
    "Given the text below for a maths competition translate it in {language}. "
    "Try to retain formulas when you can, usage of LateX is ok. "
    "Skip translating Rounds numbers, they are most likely at the bottom."
)

# Sent with every request, independent of configuration
GENERATION_PARAMS = {
    "temperature": 1.0,
    "max_tokens": 2040,
    "top_p": 1.0,
    "frequency_penalty": 0,
    "presence_penalty": 0,
}


def build_system_prompt(language: str) -> str:
    return SYSTEM_PROMPT_TEMPLATE.format(language=language)


def build_messages(text: str, language: str) -> list[dict[str, str]]:
    """System instruction then the page text, unmodified."""
    return [
        {"role": "system", "content": build_system_prompt(language)},
        {"role": "user", "content": text},
    ]


class PageTranslator:
    """
    Translates page text into a single target language.

    One ``translate`` call is one provider request: no batching, caching or
    retry. Provider errors propagate to the caller.
    """

    def __init__(
        self,
        provider: LLMProvider,
        target_language: str,
        *,
        additional_instructions: str | None = None,
    ):
        """
        Initialize page translator.

        Args:
            provider: LLM provider carrying the credential.
            target_language: Free-form language name, e.g. "French".
            additional_instructions: Extra user instructions. Accepted and
                kept, but not sent with requests yet.
        """
        self._provider = provider
        self.target_language = target_language
        self.additional_instructions = additional_instructions

    @property
    def model(self) -> str:
        return self._provider.model

    async def translate(self, text: str) -> str:
        """Translate one page of text and return the model output verbatim."""
        response = await self._provider.complete(
            build_messages(text, self.target_language),
            **GENERATION_PARAMS,
        )
        logger.debug(
            "Translated %d chars into %d chars in %.0f ms",
            len(text),
            len(response.content),
            response.latency_ms,
        )
        return response.content
