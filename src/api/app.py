# src/api/app.py — v1
"""FastAPI application — HTTP front door for the chat service.

Routes:
    POST /Chatbot/api/chat           JSON chat request
    POST /Chatbot/api/chat/upload    multipart chat request with a document
    GET  /health                     liveness
    GET  /api/documents/stats        document / prompt cache diagnostics
    POST /api/documents/refresh      force-reload the document folder
"""

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone

from fastapi import Depends, FastAPI, File, Form, Request, UploadFile
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from bankchat.api.models import ChatResponse, ErrorResponse, HealthResponse, RefreshResponse
from bankchat.cache.document_cache import DocumentContextCache
from bankchat.chat.models import ChatRequest, ChatResult, ErrorCategory, UploadedDocument
from bankchat.chat.service import ChatService
from bankchat.config.settings import Settings, load_settings
from bankchat.llm.adapters.openai_adapter import OpenAIAdapter
from bankchat.logging.context import clear_context, set_request_context
from bankchat.version import __version__

logger = logging.getLogger(__name__)


def build_service(settings: Settings) -> ChatService:
    """Wire the document cache and the OpenAI client from settings."""
    if not settings.openai_api_key:
        logger.warning("OPENAI_API_KEY is not set; completion calls will fail")
    cache = DocumentContextCache.from_settings(settings)
    client = OpenAIAdapter.from_settings(settings)
    return ChatService(settings=settings, cache=cache, llm_client=client)


def get_service(request: Request) -> ChatService:
    return request.app.state.service


def _error_response(category: ErrorCategory, message: str | None = None) -> JSONResponse:
    body = ErrorResponse(error=message or category.message, error_category=category.value)
    return JSONResponse(status_code=category.status_code, content=body.model_dump())


def _result_response(result: ChatResult) -> JSONResponse:
    if result.success:
        return JSONResponse(content=ChatResponse(response=result.answer_text or "").model_dump())
    return _error_response(result.error_category, result.error_message)  # type: ignore[arg-type]


def create_app(
    settings: Settings | None = None,
    service: ChatService | None = None,
) -> FastAPI:
    """Build the FastAPI app around an injected (or settings-built) ChatService."""
    settings = settings or load_settings()
    service = service or build_service(settings)

    app = FastAPI(
        title="BankersGPS Chat",
        description="Banking analytics chatbot backend with cached document context",
        version=__version__,
    )
    app.state.settings = settings
    app.state.service = service

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def bind_request_context(request: Request, call_next):
        request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex[:12]
        set_request_context(request_id)
        try:
            response = await call_next(request)
        finally:
            clear_context()
        response.headers["X-Request-ID"] = request_id
        return response

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        logger.warning("Rejected malformed request to %s: %s", request.url.path, exc.errors())
        return _error_response(ErrorCategory.INVALID_REQUEST)

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.error("Unhandled error on %s", request.url.path, exc_info=exc)
        return _error_response(ErrorCategory.UNSPECIFIED)

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="OK", timestamp=datetime.now(timezone.utc).isoformat())

    @app.post(
        "/Chatbot/api/chat",
        response_model=ChatResponse,
        responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    )
    async def chat(
        body: ChatRequest,
        chat_service: ChatService = Depends(get_service),
    ) -> JSONResponse:
        result = await chat_service.answer(body)
        return _result_response(result)

    @app.post(
        "/Chatbot/api/chat/upload",
        response_model=ChatResponse,
        responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    )
    async def chat_with_upload(
        prompt: str = Form(default=""),
        analysis_type: str | None = Form(default=None, alias="analysisType"),
        use_documents: bool = Form(default=True, alias="useDocuments"),
        file: UploadFile | None = File(default=None),
        chat_service: ChatService = Depends(get_service),
    ) -> JSONResponse:
        upload = None
        if file is not None and file.filename:
            upload = UploadedDocument(filename=file.filename, content=await file.read())
        request = ChatRequest(
            question=prompt,
            analysis_kind=analysis_type,
            include_document_context=use_documents,
        )
        result = await chat_service.answer(request, upload=upload)
        return _result_response(result)

    @app.get("/api/documents/stats")
    async def document_stats(
        chat_service: ChatService = Depends(get_service),
    ) -> JSONResponse:
        return JSONResponse(content=chat_service.document_stats())

    @app.post("/api/documents/refresh", response_model=RefreshResponse)
    async def refresh_documents(
        chat_service: ChatService = Depends(get_service),
    ) -> RefreshResponse:
        content = await chat_service.refresh_documents()
        return RefreshResponse(
            success=True,
            message="Documents refreshed successfully",
            content_length=len(content),
        )

    return app
