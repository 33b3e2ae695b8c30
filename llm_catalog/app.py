from __future__ import annotations

import math

from fastapi import FastAPI, HTTPException, Query

from .catalog.data_store import get_catalog, get_model
from .catalog.search import apply_filters, catalog_metadata, search_models
from .recommendations.config import DEFAULT_RECOMMENDATION_CONFIG
from .recommendations.engine import (
    find_better_performance,
    find_cheaper_alternatives,
    find_similar,
    match_scenario,
    recommend_all,
    recommend_for_task,
)
from .recommendations.models import (
    CostEstimate,
    FilterOptions,
    ModelRecommendationsResponse,
    ModelRecord,
    RecommendationItem,
    RecommendationResponse,
    ScenarioRequest,
    ScoredCandidate,
    TaskRequest,
)
from .recommendations.normalizer import estimate_monthly_cost

app = FastAPI(title="LLM Catalog API", version="0.1.0")


def _require_model(model_id: str) -> ModelRecord:
    model = get_model(model_id)
    if model is None:
        raise HTTPException(status_code=404, detail=f"Unknown model: {model_id}")
    return model


def _to_item(candidate: ScoredCandidate) -> RecommendationItem:
    # inf (free model in value ranking) has no JSON representation
    score = round(candidate.score, 4) if math.isfinite(candidate.score) else None
    return RecommendationItem(model=candidate.model, score=score, criterion=candidate.criterion)


def _to_response(candidates: list[ScoredCandidate], total: int) -> RecommendationResponse:
    return RecommendationResponse(
        recommendations=[_to_item(c) for c in candidates],
        total_candidates=total,
    )


# ── Catalog endpoints ────────────────────────────────────────────────────


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/metadata")
def metadata() -> dict:
    return catalog_metadata(get_catalog())


@app.get("/models", response_model=list[ModelRecord])
def list_models(q: str | None = None) -> list[ModelRecord]:
    return search_models(get_catalog(), q)


@app.post("/models/filter", response_model=list[ModelRecord])
def filter_models(body: FilterOptions) -> list[ModelRecord]:
    return apply_filters(get_catalog(), body)


@app.get("/models/{model_id}", response_model=ModelRecord)
def model_detail(model_id: str) -> ModelRecord:
    return _require_model(model_id)


@app.get("/models/{model_id}/cost", response_model=CostEstimate)
def model_cost(
    model_id: str,
    tokens_per_month: int = Query(default=1_000_000, ge=0),
) -> CostEstimate:
    return estimate_monthly_cost(_require_model(model_id), tokens_per_month)


# ── Model-relative recommendations ───────────────────────────────────────


@app.get("/models/{model_id}/similar", response_model=RecommendationResponse)
def similar_models(
    model_id: str,
    limit: int = Query(default=5, ge=1, le=50),
) -> RecommendationResponse:
    catalog = get_catalog()
    results = find_similar(_require_model(model_id), catalog, limit)
    return _to_response(results, len(results))


@app.get("/models/{model_id}/cheaper", response_model=RecommendationResponse)
def cheaper_models(
    model_id: str,
    limit: int = Query(default=5, ge=1, le=50),
) -> RecommendationResponse:
    results = find_cheaper_alternatives(_require_model(model_id), get_catalog(), limit)
    return _to_response(results, len(results))


@app.get("/models/{model_id}/better", response_model=RecommendationResponse)
def better_models(
    model_id: str,
    max_budget_increase_percent: float = Query(
        default=DEFAULT_RECOMMENDATION_CONFIG.max_budget_increase_percent, ge=0.0
    ),
    limit: int = Query(default=5, ge=1, le=50),
) -> RecommendationResponse:
    results = find_better_performance(
        _require_model(model_id), get_catalog(), max_budget_increase_percent, limit
    )
    return _to_response(results, len(results))


@app.get("/models/{model_id}/recommendations", response_model=ModelRecommendationsResponse)
def model_recommendations(
    model_id: str,
    limit: int = Query(default=5, ge=1, le=50),
) -> ModelRecommendationsResponse:
    bundle = recommend_all(_require_model(model_id), get_catalog(), limit)
    return ModelRecommendationsResponse(
        model_id=model_id,
        similar=[_to_item(c) for c in bundle.similar],
        cheaper=[_to_item(c) for c in bundle.cheaper],
        better=[_to_item(c) for c in bundle.better],
    )


# ── Requirement-driven recommendations ───────────────────────────────────


@app.post("/scenario", response_model=RecommendationResponse)
def scenario(body: ScenarioRequest) -> RecommendationResponse:
    catalog = get_catalog()
    ranked = match_scenario(body.to_requirements(), catalog, limit=len(catalog))
    return _to_response(ranked[: body.limit], len(ranked))


@app.post("/recommend/task", response_model=RecommendationResponse)
def task_recommendations(body: TaskRequest) -> RecommendationResponse:
    catalog = get_catalog()
    ranked = recommend_for_task(body.to_profile(), catalog, limit=len(catalog))
    return _to_response(ranked[: body.limit], len(ranked))
