# tests/unit/tracking/test_usage_tracker.py — v1
"""Tests for tracking/usage_tracker.py — prompt-cache hit/miss accounting."""

from __future__ import annotations

import pytest

from bankchat.llm.models import LLMResponse
from bankchat.tracking.usage_tracker import PromptCacheTracker


def _response(cached: int, prompt: int = 2000) -> LLMResponse:
    return LLMResponse(
        content="x", input_tokens=prompt, output_tokens=100, cache_read_tokens=cached,
        model="gpt-4o-mini", provider="openai", latency_ms=250,
    )


class TestPromptCacheTracker:
    def test_hit(self):
        tracker = PromptCacheTracker()
        record = tracker.record(_response(cached=1024))
        stats = tracker.snapshot()
        assert stats.hits == 1
        assert stats.misses == 0
        assert record.estimated_savings_usd > 0
        assert stats.total_savings_usd == pytest.approx(record.estimated_savings_usd)

    def test_miss(self):
        tracker = PromptCacheTracker()
        record = tracker.record(_response(cached=0))
        assert tracker.snapshot().misses == 1
        assert record.estimated_savings_usd == 0.0
        assert record.estimated_cost_usd > 0

    def test_efficiency(self):
        tracker = PromptCacheTracker()
        for cached in (0, 1024, 1024):
            tracker.record(_response(cached=cached))
        assert tracker.snapshot().efficiency_pct == 66.7

    def test_cost_accumulates(self):
        tracker = PromptCacheTracker()
        a = tracker.record(_response(cached=0))
        b = tracker.record(_response(cached=0))
        assert tracker.snapshot().total_cost_usd == pytest.approx(
            a.estimated_cost_usd + b.estimated_cost_usd
        )

    def test_snapshot_is_a_copy(self):
        tracker = PromptCacheTracker()
        snap = tracker.snapshot()
        tracker.record(_response(cached=0))
        assert snap.misses == 0

    def test_record_fields(self):
        record = PromptCacheTracker().record(_response(cached=500, prompt=1000))
        assert record.cache_hit_rate == 0.5
        assert record.model == "gpt-4o-mini"
        assert record.latency_ms == 250


class TestEfficiencyEmpty:
    def test_no_calls(self):
        assert PromptCacheTracker().snapshot().efficiency_pct == 0.0
