"""
Recommendation engine.

Responsibilities:
- Find models similar to a reference model.
- Find cheaper alternatives that keep most of the reference's quality.
- Find higher-quality alternatives within a budget envelope.
- Match declared usage requirements against the catalog.
- Rank models for a task type under a cost / quality / speed priority.

Every operation is a pure function of its arguments. Empty catalogs,
references without the needed signal and filters that admit nothing all
produce an empty list rather than an error.
"""
from __future__ import annotations

import logging
import math
from typing import Sequence

from .config import DEFAULT_RECOMMENDATION_CONFIG, RecommendationConfig
from .constraints import filter_candidates
from .models import (
    Criterion,
    ModelRecord,
    Priority,
    RecommendationSet,
    RequirementSpec,
    ScoredCandidate,
    TaskProfile,
    TaskType,
)
from .normalizer import cost_index, quality_index
from .ranking import rank_by_value
from .similarity import rank_by_similarity

logger = logging.getLogger(__name__)

_TASK_KEYWORDS: dict[TaskType, tuple[str, ...]] = {
    TaskType.code_generation: ("code", "programming"),
    TaskType.creative_writing: ("creative", "writing", "content"),
}


def _resolve_limit(limit: int | None, config: RecommendationConfig) -> int:
    if limit is None:
        limit = config.default_limit
    return max(limit, 0)


def find_similar(
    model: ModelRecord,
    catalog: Sequence[ModelRecord],
    limit: int | None = None,
    config: RecommendationConfig = DEFAULT_RECOMMENDATION_CONFIG,
) -> list[ScoredCandidate]:
    return rank_by_similarity(model, catalog, _resolve_limit(limit, config), config)


def find_cheaper_alternatives(
    model: ModelRecord,
    catalog: Sequence[ModelRecord],
    limit: int | None = None,
    config: RecommendationConfig = DEFAULT_RECOMMENDATION_CONFIG,
) -> list[ScoredCandidate]:
    """
    Cheaper models that are not categorically worse.

    Cost must fall in ``[cheaper_cost_floor * ref, ref)`` and quality must
    reach ``cheaper_quality_ratio * ref``. Sorted by ascending cost.
    """
    ref_cost = cost_index(model)
    ref_quality = quality_index(model)
    if ref_quality is None or ref_cost <= 0:
        logger.debug("No cheaper alternatives for %s: missing quality or cost signal", model.id)
        return []

    floor = ref_cost * config.cheaper_cost_floor
    min_quality = ref_quality * config.cheaper_quality_ratio

    matches: list[ScoredCandidate] = []
    for candidate in catalog:
        if candidate.id == model.id:
            continue
        quality = quality_index(candidate)
        if quality is None or quality < min_quality:
            continue
        cost = cost_index(candidate)
        if floor <= cost < ref_cost:
            matches.append(
                ScoredCandidate(model=candidate, score=cost, criterion=Criterion.cost_index)
            )

    matches = sorted(matches, key=lambda c: c.score)
    return matches[:_resolve_limit(limit, config)]


def find_better_performance(
    model: ModelRecord,
    catalog: Sequence[ModelRecord],
    max_budget_increase_percent: float | None = None,
    limit: int | None = None,
    config: RecommendationConfig = DEFAULT_RECOMMENDATION_CONFIG,
) -> list[ScoredCandidate]:
    """Strictly higher-quality models costing at most ``ref * (1 + pct/100)``."""
    ref_quality = quality_index(model)
    if ref_quality is None:
        logger.debug("No better-performance search for %s: no benchmark signal", model.id)
        return []

    if max_budget_increase_percent is None:
        max_budget_increase_percent = config.max_budget_increase_percent
    ceiling = cost_index(model) * (1 + max_budget_increase_percent / 100.0)

    matches: list[ScoredCandidate] = []
    for candidate in catalog:
        if candidate.id == model.id:
            continue
        quality = quality_index(candidate)
        if quality is None or quality <= ref_quality:
            continue
        if cost_index(candidate) <= ceiling:
            matches.append(
                ScoredCandidate(model=candidate, score=quality, criterion=Criterion.quality_index)
            )

    matches = sorted(matches, key=lambda c: c.score, reverse=True)
    return matches[:_resolve_limit(limit, config)]


def match_scenario(
    requirements: RequirementSpec,
    catalog: Sequence[ModelRecord],
    limit: int | None = None,
    config: RecommendationConfig = DEFAULT_RECOMMENDATION_CONFIG,
) -> list[ScoredCandidate]:
    candidates = filter_candidates(catalog, requirements, config)
    logger.debug("Scenario filter admitted %d of %d models", len(candidates), len(catalog))
    return rank_by_value(candidates, _resolve_limit(limit, config))


def recommend_all(
    model: ModelRecord,
    catalog: Sequence[ModelRecord],
    limit: int | None = None,
    config: RecommendationConfig = DEFAULT_RECOMMENDATION_CONFIG,
) -> RecommendationSet:
    """Similar, cheaper and better alternatives for one model, with the settings in ``config``."""
    return RecommendationSet(
        similar=find_similar(model, catalog, limit, config),
        cheaper=find_cheaper_alternatives(model, catalog, limit, config),
        better=find_better_performance(
            model, catalog, limit=limit, config=config
        ),
    )


# ---------------------------------------------------------------------------
# Task-driven recommendations
# ---------------------------------------------------------------------------


def _fits_task(model: ModelRecord, task_type: TaskType) -> bool:
    keywords = _TASK_KEYWORDS.get(task_type)
    # Models that declare no use cases are not excluded
    if not keywords or not model.best_for:
        return True
    return any(k in use.lower() for use in model.best_for for k in keywords)


def _task_score(
    model: ModelRecord,
    profile: TaskProfile,
    config: RecommendationConfig,
) -> float:
    quality = quality_index(model)
    if quality is None:
        quality = config.neutral_quality

    max_cost = profile.max_cost_per_1m if profile.max_cost_per_1m else math.inf
    cost_score = max(0.0, 100.0 - cost_index(model) / max_cost * 100.0)
    context_score = min(model.context_window, config.context_cap) / config.context_cap * 100.0

    if profile.priority is Priority.quality:
        return quality * 0.6 + cost_score * 0.2 + context_score * 0.2
    if profile.priority is Priority.cost:
        return cost_score * 0.6 + quality * 0.3 + context_score * 0.1
    if profile.priority is Priority.speed:
        # Smaller models tend to be faster; quality is used as a size proxy
        size_score = 100.0 - quality * 0.5
        return size_score * 0.5 + cost_score * 0.3 + quality * 0.2
    return (quality + cost_score + context_score) / 3.0


def recommend_for_task(
    profile: TaskProfile,
    catalog: Sequence[ModelRecord],
    limit: int | None = None,
    config: RecommendationConfig = DEFAULT_RECOMMENDATION_CONFIG,
) -> list[ScoredCandidate]:
    max_cost = profile.max_cost_per_1m if profile.max_cost_per_1m else math.inf

    scored: list[ScoredCandidate] = []
    for model in catalog:
        if cost_index(model) > max_cost:
            continue
        if (quality_index(model) or 0.0) < profile.min_quality:
            continue
        if model.context_window < profile.min_context_window:
            continue
        if not _fits_task(model, profile.task_type):
            continue
        scored.append(
            ScoredCandidate(
                model=model,
                score=_task_score(model, profile, config),
                criterion=Criterion.task_fit,
            )
        )

    scored = sorted(scored, key=lambda c: c.score, reverse=True)
    return scored[:_resolve_limit(limit, config)]
