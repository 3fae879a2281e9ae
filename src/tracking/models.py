# src/tracking/models.py — v1
"""Tracking domain models: ModelPricing, UsageRecord, PromptCacheStats."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel


class ModelPricing(BaseModel):
    """LLM model pricing configuration (USD per 1M tokens)."""

    model: str
    input_price_per_1m: float
    output_price_per_1m: float
    cached_input_price_per_1m: float = 0.0


class UsageRecord(BaseModel):
    """Token usage and estimated cost of one completion call."""

    timestamp: datetime
    model: str
    prompt_tokens: int
    cached_tokens: int
    completion_tokens: int
    latency_ms: int
    estimated_cost_usd: float = 0.0
    estimated_savings_usd: float = 0.0

    @property
    def cache_hit_rate(self) -> float:
        """Share of prompt tokens served from the provider's prompt cache."""
        if self.prompt_tokens <= 0:
            return 0.0
        return self.cached_tokens / self.prompt_tokens


class PromptCacheStats(BaseModel):
    """Session-wide prompt cache counters."""

    hits: int = 0
    misses: int = 0
    total_savings_usd: float = 0.0
    total_cost_usd: float = 0.0

    @property
    def efficiency_pct(self) -> float:
        total = self.hits + self.misses
        return round(self.hits / total * 100, 1) if total else 0.0
