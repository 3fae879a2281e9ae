# src/llm/errors.py — v1
"""Categorized completion-provider failures.

Provider errors are reduced to five categories so the chat layer can map
each one to a distinct user-facing status.
"""

from __future__ import annotations

from enum import Enum


class CompletionErrorCategory(str, Enum):
    QUOTA_EXHAUSTED = "quota_exhausted"
    INVALID_CREDENTIAL = "invalid_credential"
    MODEL_UNAVAILABLE = "model_unavailable"
    RATE_LIMITED = "rate_limited"
    UNSPECIFIED = "unspecified"


class CompletionError(Exception):
    """A completion call failed; ``category`` says how."""

    def __init__(
        self,
        category: CompletionErrorCategory,
        message: str = "",
        code: str | None = None,
    ) -> None:
        self.category = category
        self.code = code
        super().__init__(message or category.value)


# Provider error codes (body ``error.code``) take precedence over types.
_CODE_CATEGORIES: dict[str, CompletionErrorCategory] = {
    "insufficient_quota": CompletionErrorCategory.QUOTA_EXHAUSTED,
    "invalid_api_key": CompletionErrorCategory.INVALID_CREDENTIAL,
    "model_not_found": CompletionErrorCategory.MODEL_UNAVAILABLE,
    "rate_limit_exceeded": CompletionErrorCategory.RATE_LIMITED,
}

_STATUS_CATEGORIES: dict[int, CompletionErrorCategory] = {
    401: CompletionErrorCategory.INVALID_CREDENTIAL,
    403: CompletionErrorCategory.INVALID_CREDENTIAL,
    404: CompletionErrorCategory.MODEL_UNAVAILABLE,
    429: CompletionErrorCategory.RATE_LIMITED,
    503: CompletionErrorCategory.MODEL_UNAVAILABLE,
}


def classify_completion_error(error: Exception) -> CompletionErrorCategory:
    """Classify a provider/SDK exception into a completion error category.

    Timeouts, connection failures and anything unrecognized are
    ``UNSPECIFIED``.
    """
    if isinstance(error, CompletionError):
        return error.category

    code = getattr(error, "code", None)
    if isinstance(code, str) and code in _CODE_CATEGORIES:
        return _CODE_CATEGORIES[code]

    status = getattr(error, "status_code", None)
    if isinstance(status, int) and status in _STATUS_CATEGORIES:
        return _STATUS_CATEGORIES[status]

    return CompletionErrorCategory.UNSPECIFIED
