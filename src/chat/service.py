# src/chat/service.py — v1
"""Chat service — single entry point for answering a question.

Usage:
    service = ChatService(settings, cache, llm_client)
    result = await service.answer(ChatRequest(question="What is NIM?"))

Flow: validate -> document context (cached) -> optional uploaded document
-> conversation -> completion -> usage tracking. Every failure comes back
as a categorized ``ChatResult``; ``answer`` never raises.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from bankchat.chat.models import ChatRequest, ChatResult, ErrorCategory, UploadedDocument
from bankchat.chat.prompts import build_conversation
from bankchat.core.models import AnalysisKind, DocumentFormat, UnsupportedFormatError
from bankchat.extraction.extractor_factory import extract_document, format_for_path
from bankchat.llm.errors import CompletionError
from bankchat.logging.context import set_analysis_context
from bankchat.tracking.usage_tracker import PromptCacheTracker

if TYPE_CHECKING:
    from bankchat.cache.document_cache import DocumentContextCache
    from bankchat.config.settings import Settings
    from bankchat.llm.base_client import BaseLLMClient

logger = logging.getLogger(__name__)

_LARGE_CONTEXT_CHARS = 50_000


class ChatService:
    """Orchestrates the document cache and the completion provider."""

    def __init__(
        self,
        settings: Settings,
        cache: DocumentContextCache,
        llm_client: BaseLLMClient,
        tracker: PromptCacheTracker | None = None,
    ) -> None:
        self._settings = settings
        self._cache = cache
        self._llm = llm_client
        self._tracker = tracker or PromptCacheTracker()

    @property
    def cache(self) -> DocumentContextCache:
        return self._cache

    @property
    def tracker(self) -> PromptCacheTracker:
        return self._tracker

    async def answer(
        self,
        request: ChatRequest,
        upload: UploadedDocument | None = None,
    ) -> ChatResult:
        """Answer one question; never raises."""
        if not request.question or not request.question.strip():
            return ChatResult.failed(ErrorCategory.MISSING_QUESTION)

        try:
            analysis_kind = AnalysisKind.parse(request.analysis_kind)
        except ValueError as e:
            return ChatResult.failed(ErrorCategory.INVALID_REQUEST, str(e))
        set_analysis_context(analysis_kind.value if analysis_kind else None)

        try:
            return await self._answer(request, analysis_kind, upload)
        except CompletionError as e:
            category = ErrorCategory.from_completion(e.category)
            logger.error("Completion failed (%s): %s", category.value, e)
            return ChatResult.failed(category)
        except Exception:
            logger.exception("Error in chat request")
            return ChatResult.failed(ErrorCategory.UNSPECIFIED)

    async def _answer(
        self,
        request: ChatRequest,
        analysis_kind: AnalysisKind | None,
        upload: UploadedDocument | None,
    ) -> ChatResult:
        context_text = ""
        if request.include_document_context:
            context_text = await self._cache.get_content()

        uploaded_text, uploaded_format = "", None
        if upload is not None:
            uploaded_text, uploaded_format = await self._extract_upload(upload)

        messages = build_conversation(
            question=request.question,
            analysis_kind=analysis_kind,
            context_text=context_text,
            uploaded_text=uploaded_text,
            uploaded_format=uploaded_format,
            history=request.history,
        )
        response = await self._llm.complete(
            messages,
            max_tokens=self._settings.llm_max_output_tokens,
            temperature=self._settings.llm_temperature,
            model=request.model or None,
        )
        self._tracker.record(response)

        logger.info(
            "Answered question (%d chars) with %d chars",
            len(request.question), len(response.content),
            extra={"data": {
                "documents": request.include_document_context,
                "context_chars": len(context_text),
                "upload": bool(uploaded_text),
                "model": response.model,
            }},
        )
        return ChatResult.answered(response.content, usage=response)

    async def _extract_upload(
        self, upload: UploadedDocument,
    ) -> tuple[str, DocumentFormat | None]:
        """Extract an uploaded document in memory; failures only degrade to no text."""
        logger.info("Processing uploaded file: %s (%d bytes)", upload.filename, upload.size)
        try:
            fmt = format_for_path(upload.filename)
        except UnsupportedFormatError:
            logger.warning("Unsupported uploaded file type: %s", upload.filename)
            return "", None

        extraction = await extract_document(upload.content, fmt, upload.filename)
        if extraction.text:
            logger.info("Extracted %d characters from uploaded file", len(extraction.text))
        else:
            logger.warning("No text content extracted from uploaded file %s", upload.filename)
        return extraction.text, fmt

    # --- Administration ---

    async def refresh_documents(self) -> str:
        """Force-reload the document folder."""
        return await self._cache.force_refresh()

    def document_stats(self) -> dict[str, object]:
        """Document cache and prompt-cache diagnostics."""
        prompt_cache = self._tracker.snapshot()
        return {
            **self._cache.stats().model_dump(mode="json"),
            "prompt_cache": {
                **prompt_cache.model_dump(mode="json"),
                "efficiency_pct": prompt_cache.efficiency_pct,
            },
            "tips": self.optimization_tips(),
        }

    def optimization_tips(self) -> list[str]:
        """Hints derived from the current cache counters."""
        stats = self._cache.stats()
        prompt_cache = self._tracker.snapshot()
        tips: list[str] = []
        if prompt_cache.misses > prompt_cache.hits:
            tips.append(
                "Consider standardizing document formats to improve cache consistency"
            )
        if not stats.has_content:
            tips.append(
                "No documents loaded - consider adding documentation for better context"
            )
        if stats.content_length > _LARGE_CONTEXT_CHARS:
            tips.append(
                "Large document set detected - caching will provide significant cost savings"
            )
        return tips
