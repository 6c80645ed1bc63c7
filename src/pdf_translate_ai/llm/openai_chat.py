"""
OpenAI chat-completion provider.

Talks to any OpenAI-compatible ``/chat/completions`` endpoint through the
official async SDK.
"""

from __future__ import annotations

import time
from typing import Any

from openai import AsyncOpenAI

from pdf_translate_ai.llm.base import LLMProvider, LLMResponse, LLMResponseError


class OpenAIProvider(LLMProvider):
    """
    OpenAI chat-completion provider.

    Sends the bearer credential given at construction time. SDK-level retries
    are disabled so every ``complete`` call is a single POST.
    """

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-3.5-turbo",
        base_url: str = "https://api.openai.com/v1",
        timeout: float | None = None,
        client: AsyncOpenAI | None = None,
    ):
        """
        Initialize OpenAI provider.

        Args:
            api_key: API key sent as the Authorization bearer token.
            model: Chat-completion model identifier.
            base_url: API base URL.
            timeout: Request timeout in seconds (None waits indefinitely).
            client: Pre-built client, mainly for tests.
        """
        if not api_key and client is None:
            raise ValueError("OpenAI provider requires an API key")

        self._model_name = model
        self._client = client or AsyncOpenAI(
            api_key=api_key,
            base_url=base_url,
            timeout=timeout,
            max_retries=0,
        )

    @property
    def name(self) -> str:
        """Provider name."""
        return "openai"

    @property
    def model(self) -> str:
        """Current model name."""
        return self._model_name

    async def complete(
        self,
        messages: list[dict[str, str]],
        *,
        temperature: float = 1.0,
        max_tokens: int = 2040,
        **kwargs: Any,
    ) -> LLMResponse:
        """
        Generate a completion.

        The first choice's content is returned verbatim; a response without
        choices yields an empty string.

        Raises:
            openai.APIError: Network failure or non-2xx response.
            LLMResponseError: Response body without a ``choices`` list.
        """
        start_time = time.perf_counter()

        response = await self._client.chat.completions.create(
            model=self._model_name,
            messages=messages,  # type: ignore[arg-type]
            temperature=temperature,
            max_tokens=max_tokens,
            **kwargs,
        )

        latency_ms = (time.perf_counter() - start_time) * 1000
        choices = getattr(response, "choices", None)
        if choices is None:
            raise LLMResponseError(f"Malformed completion response: {response!r}")

        content = ""
        finish_reason = None
        if choices:
            content = choices[0].message.content or ""
            finish_reason = choices[0].finish_reason

        usage = getattr(response, "usage", None)

        return LLMResponse(
            content=content,
            input_tokens=usage.prompt_tokens if usage else 0,
            output_tokens=usage.completion_tokens if usage else 0,
            model=self._model_name,
            latency_ms=latency_ms,
            metadata={
                "provider": self.name,
                "finish_reason": finish_reason,
                "choices": len(choices),
            },
        )
