# src/llm/base_client.py — v1
"""Abstract LLM client interface."""

from __future__ import annotations

from abc import ABC, abstractmethod

from bankchat.llm.models import LLMResponse, Message


class BaseLLMClient(ABC):
    """Unified interface for completion providers.

    Implementations raise ``CompletionError`` with a category on failure
    and never retry on their own.
    """

    @abstractmethod
    async def complete(
        self,
        messages: list[Message],
        system: str | None = None,
        max_tokens: int = 800,
        temperature: float = 0.2,
        model: str | None = None,
    ) -> LLMResponse:
        """Text completion."""

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Provider identifier (e.g. openai)."""

    @property
    @abstractmethod
    def default_model(self) -> str:
        """Model used when ``complete`` gets no override."""
