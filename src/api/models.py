# src/api/models.py — v1
"""HTTP response models for the chat front door."""

from __future__ import annotations

from pydantic import BaseModel


class ChatResponse(BaseModel):
    """Successful answer."""

    response: str


class ErrorResponse(BaseModel):
    """Structured failure; never carries a stack trace."""

    error: str
    error_category: str


class HealthResponse(BaseModel):
    status: str
    timestamp: str


class RefreshResponse(BaseModel):
    success: bool
    message: str
    content_length: int
