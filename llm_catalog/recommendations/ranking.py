from __future__ import annotations

import math
from typing import Iterable

from .models import Criterion, ModelRecord, ScoredCandidate
from .normalizer import benchmark_total, cost_index


def value_score(model: ModelRecord) -> float:
    """
    Benchmark total per unit of blended cost.

    Missing benchmarks count as 0 here so that every candidate gets a
    score. A free model with any benchmark signal is worth ``inf``; a free
    model without one is worth 0.
    """
    total = benchmark_total(model)
    cost = cost_index(model)
    if cost <= 0:
        return math.inf if total > 0 else 0.0
    return total / cost


def rank_by_value(
    candidates: Iterable[ModelRecord],
    limit: int | None = None,
) -> list[ScoredCandidate]:
    scored = [
        ScoredCandidate(model=m, score=value_score(m), criterion=Criterion.value)
        for m in candidates
    ]
    scored = sorted(scored, key=lambda c: c.score, reverse=True)
    if limit is not None:
        scored = scored[:max(limit, 0)]
    return scored
