from __future__ import annotations

from typing import Iterable

from .config import DEFAULT_RECOMMENDATION_CONFIG, RecommendationConfig
from .models import Criterion, ModelRecord, ScoredCandidate
from .normalizer import capability_set, context_tier


def _context_proximity(a: int, b: int) -> float:
    """1.0 for identical windows, approaching 0.0 as they diverge."""
    largest = max(a, b)
    if largest == 0:
        return 1.0
    return 1.0 - abs(a - b) / largest


def _benchmark_proximity(reference: ModelRecord, candidate: ModelRecord) -> list[float]:
    """Per-benchmark proximity for fields present on both records only."""
    if reference.benchmarks is None or candidate.benchmarks is None:
        return []
    pairs = [
        (reference.benchmarks.mmlu, candidate.benchmarks.mmlu),
        (reference.benchmarks.human_eval, candidate.benchmarks.human_eval),
    ]
    return [1.0 - abs(a - b) / 100.0 for a, b in pairs if a is not None and b is not None]


def _tag_overlap(reference: ModelRecord, candidate: ModelRecord) -> float:
    tags_a = capability_set(reference)
    tags_b = capability_set(candidate)
    largest = max(len(tags_a), len(tags_b))
    if largest == 0:
        return 0.0
    return len(tags_a & tags_b) / largest


def similarity_score(
    reference: ModelRecord,
    candidate: ModelRecord,
    config: RecommendationConfig = DEFAULT_RECOMMENDATION_CONFIG,
) -> float:
    """
    Weighted sum of context proximity, benchmark proximity and tag overlap.

    Not normalised; only the relative order of scores is meaningful.
    """
    context = config.context_weight * _context_proximity(
        context_tier(reference), context_tier(candidate)
    )
    benchmarks = sum(
        config.benchmark_weight * p for p in _benchmark_proximity(reference, candidate)
    )
    tags = config.tag_weight * _tag_overlap(reference, candidate)
    return context + benchmarks + tags


def rank_by_similarity(
    reference: ModelRecord,
    catalog: Iterable[ModelRecord],
    limit: int,
    config: RecommendationConfig = DEFAULT_RECOMMENDATION_CONFIG,
) -> list[ScoredCandidate]:
    scored = [
        ScoredCandidate(
            model=candidate,
            score=similarity_score(reference, candidate, config),
            criterion=Criterion.similarity,
        )
        for candidate in catalog
        if candidate.id != reference.id
    ]
    # sorted() is stable: equal scores keep catalog order
    scored = sorted(scored, key=lambda c: c.score, reverse=True)
    return scored[:max(limit, 0)]
