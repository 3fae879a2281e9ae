# src/tracking/cost_calculator.py — v1
"""Cost calculation from completion usage.

Cached prompt tokens are billed at the discounted cached-input rate;
the difference to the full input rate is reported as savings.
"""

from __future__ import annotations

from bankchat.llm.models import LLMResponse
from bankchat.tracking.models import ModelPricing

# Approximate public pricing per 1M tokens; check the provider dashboard for exact costs.
DEFAULT_PRICING: dict[str, ModelPricing] = {
    "gpt-4o-mini": ModelPricing(
        model="gpt-4o-mini",
        input_price_per_1m=0.15, output_price_per_1m=0.60,
        cached_input_price_per_1m=0.075,
    ),
    "gpt-4o": ModelPricing(
        model="gpt-4o",
        input_price_per_1m=2.50, output_price_per_1m=10.0,
        cached_input_price_per_1m=1.25,
    ),
    "gpt-4.1-mini": ModelPricing(
        model="gpt-4.1-mini",
        input_price_per_1m=0.40, output_price_per_1m=1.60,
        cached_input_price_per_1m=0.10,
    ),
    "gpt-4.1": ModelPricing(
        model="gpt-4.1",
        input_price_per_1m=2.0, output_price_per_1m=8.0,
        cached_input_price_per_1m=0.50,
    ),
    "gpt-5": ModelPricing(
        model="gpt-5",
        input_price_per_1m=1.25, output_price_per_1m=10.0,
        cached_input_price_per_1m=0.125,
    ),
}


def _pricing_for(model: str, pricing: dict[str, ModelPricing] | None) -> ModelPricing | None:
    return (pricing or DEFAULT_PRICING).get(model)


def compute_call_cost(
    response: LLMResponse, pricing: dict[str, ModelPricing] | None = None,
) -> float:
    """Compute estimated cost for a single completion call in USD (0 for unknown models)."""
    p = _pricing_for(response.model, pricing)
    if p is None:
        return 0.0

    cached = min(response.cache_read_tokens, response.input_tokens)
    uncached = response.input_tokens - cached
    return (uncached * p.input_price_per_1m / 1_000_000
            + cached * p.cached_input_price_per_1m / 1_000_000
            + response.output_tokens * p.output_price_per_1m / 1_000_000)


def compute_cache_savings(
    response: LLMResponse, pricing: dict[str, ModelPricing] | None = None,
) -> float:
    """Estimated USD saved by the cached prompt tokens of one call."""
    p = _pricing_for(response.model, pricing)
    if p is None:
        return 0.0
    cached = min(response.cache_read_tokens, response.input_tokens)
    return cached * (p.input_price_per_1m - p.cached_input_price_per_1m) / 1_000_000
