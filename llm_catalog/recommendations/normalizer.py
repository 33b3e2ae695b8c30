"""
Comparable scalar features derived from a single catalog record.

All functions are pure. A missing benchmark is "no signal": it is never
averaged in as zero, except by ``benchmark_total`` which exists for the
value ranking only.
"""
from __future__ import annotations

from .config import DEFAULT_RECOMMENDATION_CONFIG, RecommendationConfig
from .models import CostEstimate, ModelRecord

_TOKENS_PER_UNIT = 1_000_000


def cost_index(model: ModelRecord) -> float:
    """Blended price: mean of the input and output per-million-token prices."""
    return (model.input_cost_per_1m + model.output_cost_per_1m) / 2.0


def quality_index(model: ModelRecord) -> float | None:
    """Mean of the benchmark scores that are present, or ``None`` if there are none."""
    if model.benchmarks is None:
        return None
    scores = [
        s for s in (model.benchmarks.mmlu, model.benchmarks.human_eval) if s is not None
    ]
    if not scores:
        return None
    return sum(scores) / len(scores)


def benchmark_total(model: ModelRecord) -> float:
    if model.benchmarks is None:
        return 0.0
    return (model.benchmarks.mmlu or 0.0) + (model.benchmarks.human_eval or 0.0)


def context_tier(model: ModelRecord) -> int:
    return model.context_window


def capability_set(model: ModelRecord) -> frozenset[str]:
    return frozenset(model.tags)


def estimate_monthly_cost(
    model: ModelRecord,
    tokens_per_month: int,
    config: RecommendationConfig = DEFAULT_RECOMMENDATION_CONFIG,
) -> CostEstimate:
    """Estimate monthly spend assuming a fixed input/output token split."""
    millions = tokens_per_month / _TOKENS_PER_UNIT
    input_cost = model.input_cost_per_1m * millions * config.input_token_share
    output_cost = model.output_cost_per_1m * millions * config.output_token_share
    return CostEstimate(
        model_id=model.id,
        tokens_per_month=tokens_per_month,
        input_cost=input_cost,
        output_cost=output_cost,
        total_cost=input_cost + output_cost,
    )
