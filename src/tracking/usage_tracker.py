# src/tracking/usage_tracker.py — v1
"""Session tracker for provider prompt-cache usage.

A stable document context lets the provider serve most of the prompt
from its cache; this tracker measures how often that happens.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from bankchat.llm.models import LLMResponse
from bankchat.tracking.cost_calculator import compute_cache_savings, compute_call_cost
from bankchat.tracking.models import ModelPricing, PromptCacheStats, UsageRecord

logger = logging.getLogger(__name__)


class PromptCacheTracker:
    """Count prompt-cache hits/misses and accumulate estimated savings."""

    def __init__(self, pricing: dict[str, ModelPricing] | None = None) -> None:
        self._pricing = pricing
        self._stats = PromptCacheStats()

    def record(self, response: LLMResponse) -> UsageRecord:
        """Record the usage of one completion call and log it."""
        record = UsageRecord(
            timestamp=datetime.now(timezone.utc),
            model=response.model,
            prompt_tokens=response.input_tokens,
            cached_tokens=response.cache_read_tokens,
            completion_tokens=response.output_tokens,
            latency_ms=response.latency_ms,
            estimated_cost_usd=compute_call_cost(response, self._pricing),
        )

        if record.cached_tokens > 0:
            self._stats.hits += 1
            record.estimated_savings_usd = compute_cache_savings(response, self._pricing)
            self._stats.total_savings_usd += record.estimated_savings_usd
        else:
            self._stats.misses += 1
        self._stats.total_cost_usd += record.estimated_cost_usd

        logger.info(
            "Completion usage: %d prompt (%d cached), %d completion tokens",
            record.prompt_tokens, record.cached_tokens, record.completion_tokens,
            extra={"data": {
                "model": record.model,
                "estimated_cost_usd": round(record.estimated_cost_usd, 6),
                "cache_hit_rate": f"{record.cache_hit_rate * 100:.1f}%",
                "session_cache_hits": self._stats.hits,
                "session_cache_misses": self._stats.misses,
                "estimated_savings_usd": round(self._stats.total_savings_usd, 6),
            }},
        )
        return record

    def snapshot(self) -> PromptCacheStats:
        """Copy of the current session counters."""
        return self._stats.model_copy()
