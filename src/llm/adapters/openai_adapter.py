# src/llm/adapters/openai_adapter.py — v1
"""OpenAI chat-completions adapter implementing BaseLLMClient.

Uses the official openai SDK against a configurable base URL, so any
OpenAI-compatible endpoint works. Reports prompt-cache hits through
``usage.prompt_tokens_details.cached_tokens``.
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Any

from bankchat.llm.base_client import BaseLLMClient
from bankchat.llm.errors import (
    CompletionError,
    CompletionErrorCategory,
    classify_completion_error,
)
from bankchat.llm.models import LLMResponse, Message

if TYPE_CHECKING:
    from bankchat.config.settings import Settings

logger = logging.getLogger(__name__)


class OpenAIAdapter(BaseLLMClient):
    """OpenAI GPT adapter."""

    def __init__(
        self,
        model: str = "gpt-4.1-mini",
        api_key: str = "",
        base_url: str | None = None,
        timeout: float = 60.0,
        reasoning_models: list[str] | None = None,
        client: Any = None,
    ):
        self._model = model
        self._api_key = api_key
        self._base_url = base_url
        self._timeout = timeout
        self._reasoning_models = set(reasoning_models or ["gpt-5"])
        self._client = client

    @classmethod
    def from_settings(cls, settings: Settings) -> OpenAIAdapter:
        return cls(
            model=settings.llm_default_model,
            api_key=settings.openai_api_key,
            base_url=settings.openai_base_url,
            timeout=settings.llm_timeout_seconds,
            reasoning_models=settings.llm_reasoning_models_list,
        )

    def _get_client(self) -> Any:
        if self._client is None:
            import openai

            self._client = openai.AsyncOpenAI(
                api_key=self._api_key,
                base_url=self._base_url,
                timeout=self._timeout,
                max_retries=0,
            )
        return self._client

    def build_request(
        self,
        messages: list[Message],
        system: str | None = None,
        max_tokens: int = 800,
        temperature: float = 0.2,
        model: str | None = None,
    ) -> dict[str, Any]:
        """Build the chat-completions request body."""
        model = model or self._model
        oai_messages: list[dict[str, Any]] = []
        if system:
            oai_messages.append({"role": "system", "content": system})
        for m in messages:
            oai_messages.append({"role": m.role, "content": m.content})

        kwargs: dict[str, Any] = {"model": model, "messages": oai_messages}
        if model in self._reasoning_models:
            kwargs["reasoning_effort"] = "low"
            kwargs["max_completion_tokens"] = max_tokens
        else:
            kwargs["temperature"] = temperature
            kwargs["max_tokens"] = max_tokens
        return kwargs

    async def complete(
        self,
        messages: list[Message],
        system: str | None = None,
        max_tokens: int = 800,
        temperature: float = 0.2,
        model: str | None = None,
    ) -> LLMResponse:
        kwargs = self.build_request(messages, system, max_tokens, temperature, model)
        client = self._get_client()

        t0 = time.monotonic()
        try:
            resp = await client.chat.completions.create(**kwargs)
        except Exception as e:
            category = classify_completion_error(e)
            logger.error(
                "Completion call failed (%s): %s", category.value, e,
            )
            raise CompletionError(
                category, str(e), code=getattr(e, "code", None)
            ) from e
        latency = int((time.monotonic() - t0) * 1000)

        if not resp.choices:
            raise CompletionError(
                CompletionErrorCategory.UNSPECIFIED, "Provider returned no choices"
            )
        choice = resp.choices[0]
        usage = resp.usage
        cached = 0
        if usage is not None:
            details = getattr(usage, "prompt_tokens_details", None)
            cached = getattr(details, "cached_tokens", 0) or 0

        return LLMResponse(
            content=choice.message.content or "",
            input_tokens=usage.prompt_tokens if usage else 0,
            output_tokens=usage.completion_tokens if usage else 0,
            cache_read_tokens=cached,
            model=kwargs["model"],
            provider="openai",
            latency_ms=latency,
            raw_response=resp,
        )

    @property
    def provider_name(self) -> str:
        return "openai"

    @property
    def default_model(self) -> str:
        return self._model
