# src/chat/models.py — v2
"""Chat-level models: ChatRequest, UploadedDocument, ErrorCategory, ChatResult."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

from bankchat.llm.errors import CompletionErrorCategory
from bankchat.llm.models import LLMResponse, Message


class ErrorCategory(str, Enum):
    """Stable failure categories returned to the caller."""

    MISSING_QUESTION = "missing_question"
    INVALID_REQUEST = "invalid_request"
    QUOTA_EXHAUSTED = "quota_exhausted"
    INVALID_CREDENTIAL = "invalid_credential"
    MODEL_UNAVAILABLE = "model_unavailable"
    RATE_LIMITED = "rate_limited"
    UNSPECIFIED = "unspecified"

    @property
    def status_code(self) -> int:
        return _STATUS_CODES[self]

    @property
    def message(self) -> str:
        return _MESSAGES[self]

    @classmethod
    def from_completion(cls, category: CompletionErrorCategory) -> ErrorCategory:
        return cls(category.value)


_STATUS_CODES: dict[ErrorCategory, int] = {
    ErrorCategory.MISSING_QUESTION: 400,
    ErrorCategory.INVALID_REQUEST: 400,
    ErrorCategory.QUOTA_EXHAUSTED: 429,
    ErrorCategory.INVALID_CREDENTIAL: 401,
    ErrorCategory.MODEL_UNAVAILABLE: 503,
    ErrorCategory.RATE_LIMITED: 429,
    ErrorCategory.UNSPECIFIED: 500,
}

_MESSAGES: dict[ErrorCategory, str] = {
    ErrorCategory.MISSING_QUESTION: "Prompt is required.",
    ErrorCategory.INVALID_REQUEST: "Invalid request.",
    ErrorCategory.QUOTA_EXHAUSTED: "API quota exceeded. Please try again later.",
    ErrorCategory.INVALID_CREDENTIAL: "Invalid API key.",
    ErrorCategory.MODEL_UNAVAILABLE: "AI model temporarily unavailable.",
    ErrorCategory.RATE_LIMITED: "Too many requests. Please wait a moment.",
    ErrorCategory.UNSPECIFIED: "Something went wrong. Please try again.",
}


class ChatRequest(BaseModel):
    """One "answer a question" call.

    Field aliases match the JSON the browser UI posts
    (``prompt``, ``analysisType``, ``useDocuments``).
    """

    model_config = ConfigDict(populate_by_name=True)

    question: str = Field(default="", alias="prompt")
    analysis_kind: str | None = Field(default=None, alias="analysisType")
    include_document_context: bool = Field(default=True, alias="useDocuments")
    model: str | None = None
    history: list[Message] = Field(default_factory=list, alias="messages")

    @field_validator("question", mode="before")
    @classmethod
    def null_question_is_blank(cls, v: object) -> object:  # noqa: N805
        return "" if v is None else v


class UploadedDocument(BaseModel):
    """A document uploaded with the request; kept in memory only."""

    filename: str
    content: bytes

    @property
    def size(self) -> int:
        return len(self.content)


class ChatResult(BaseModel):
    """Outcome of ``ChatService.answer``: an answer or a categorized failure."""

    answer_text: str | None = None
    error_category: ErrorCategory | None = None
    error_message: str | None = None
    usage: LLMResponse | None = Field(default=None, exclude=True)

    @property
    def success(self) -> bool:
        return self.error_category is None

    @property
    def status_code(self) -> int:
        return 200 if self.error_category is None else self.error_category.status_code

    @classmethod
    def answered(cls, text: str, usage: LLMResponse | None = None) -> ChatResult:
        return cls(answer_text=text, usage=usage)

    @classmethod
    def failed(cls, category: ErrorCategory, message: str | None = None) -> ChatResult:
        return cls(error_category=category, error_message=message or category.message)
