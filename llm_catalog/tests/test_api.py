from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from llm_catalog.app import app
from llm_catalog.catalog.data_store import get_catalog, get_model
from llm_catalog.recommendations.normalizer import (
    cost_index,
    estimate_monthly_cost,
    quality_index,
)

client = TestClient(app)


def _ids(body):
    return [item["model"]["id"] for item in body["recommendations"]]


# ── Catalog ──────────────────────────────────────────────────────────────


def test_health():
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


def test_metadata():
    resp = client.get("/metadata")
    assert resp.status_code == 200
    body = resp.json()
    assert body["model_count"] == len(get_catalog())
    assert "OpenAI" in body["providers"]
    assert body["providers"] == sorted(body["providers"])


def test_list_models():
    resp = client.get("/models")
    assert resp.status_code == 200
    assert len(resp.json()) == len(get_catalog())


def test_search_models():
    resp = client.get("/models", params={"q": "anthropic"})
    body = resp.json()
    assert len(body) > 0
    assert any(m["provider"] == "Anthropic" for m in body)


def test_filter_models_by_provider():
    resp = client.post("/models/filter", json={"providers": ["Anthropic"]})
    assert resp.status_code == 200
    body = resp.json()
    assert len(body) > 0
    for m in body:
        assert m["provider"] == "Anthropic"


def test_model_detail():
    resp = client.get("/models/gpt-4o")
    assert resp.status_code == 200
    body = resp.json()
    assert body["name"] == "GPT-4o"
    assert body["benchmarks"]["mmlu"] == 88.7


def test_model_detail_unknown():
    resp = client.get("/models/nonexistent12345")
    assert resp.status_code == 404


def test_model_cost():
    resp = client.get("/models/gpt-4o/cost", params={"tokens_per_month": 10_000_000})
    assert resp.status_code == 200
    body = resp.json()
    assert body["input_cost"] == pytest.approx(10.0)
    assert body["output_cost"] == pytest.approx(60.0)
    assert body["total_cost"] == pytest.approx(70.0)


def test_model_cost_rejects_negative_tokens():
    resp = client.get("/models/gpt-4o/cost", params={"tokens_per_month": -1})
    assert resp.status_code == 422


# ── Model-relative recommendations ───────────────────────────────────────


def test_similar_excludes_reference():
    resp = client.get("/models/gpt-4o/similar")
    assert resp.status_code == 200
    body = resp.json()
    ids = _ids(body)
    assert 0 < len(ids) <= 5
    assert "gpt-4o" not in ids
    scores = [item["score"] for item in body["recommendations"]]
    assert scores == sorted(scores, reverse=True)


def test_similar_respects_limit():
    resp = client.get("/models/gpt-4o/similar", params={"limit": 2})
    assert len(resp.json()["recommendations"]) == 2


def test_similar_unknown_model():
    assert client.get("/models/nonexistent12345/similar").status_code == 404


def test_cheaper_alternatives_bounds():
    ref = get_model("gpt-4o")
    resp = client.get("/models/gpt-4o/cheaper", params={"limit": 50})
    assert resp.status_code == 200
    for mid in _ids(resp.json()):
        m = get_model(mid)
        assert 0.6 * cost_index(ref) <= cost_index(m) < cost_index(ref)
        assert quality_index(m) >= 0.85 * quality_index(ref)


def test_better_performance_bounds():
    ref = get_model("gpt-4o-mini")
    resp = client.get(
        "/models/gpt-4o-mini/better",
        params={"max_budget_increase_percent": 200, "limit": 50},
    )
    assert resp.status_code == 200
    for mid in _ids(resp.json()):
        m = get_model(mid)
        assert quality_index(m) > quality_index(ref)
        assert cost_index(m) <= cost_index(ref) * 3


def test_model_recommendations_bundle():
    resp = client.get("/models/gpt-4o/recommendations")
    assert resp.status_code == 200
    body = resp.json()
    assert body["model_id"] == "gpt-4o"
    assert set(body) >= {"similar", "cheaper", "better"}


# ── Scenario matching ────────────────────────────────────────────────────


def test_scenario_respects_requirements():
    requirements = {
        "monthly_budget": 50,
        "expected_tokens_per_month": 10_000_000,
        "min_context_length": 100_000,
        "preferred_providers": ["OpenAI", "Anthropic", "Google"],
        "limit": 50,
    }
    resp = client.post("/scenario", json=requirements)
    assert resp.status_code == 200
    body = resp.json()
    assert body["total_candidates"] >= len(body["recommendations"]) > 0
    for mid in _ids(body):
        m = get_model(mid)
        assert m.context_window >= 100_000
        assert m.provider in requirements["preferred_providers"]
        assert estimate_monthly_cost(m, 10_000_000).total_cost <= 50


def test_scenario_required_capabilities():
    resp = client.post(
        "/scenario",
        json={
            "monthly_budget": 1000,
            "expected_tokens_per_month": 1_000_000,
            "required_capabilities": ["Multimodal", "Vision"],
        },
    )
    for item in resp.json()["recommendations"]:
        assert {"Multimodal", "Vision"} <= set(item["model"]["tags"])


def test_scenario_zero_budget_only_free_models():
    resp = client.post(
        "/scenario",
        json={"monthly_budget": 0, "expected_tokens_per_month": 1_000_000},
    )
    body = resp.json()
    assert "openrouter-auto" in _ids(body)
    for item in body["recommendations"]:
        assert item["model"]["input_cost_per_1m"] == 0
        assert item["model"]["output_cost_per_1m"] == 0


def test_scenario_is_deterministic():
    payload = {"monthly_budget": 100, "expected_tokens_per_month": 5_000_000}
    first = client.post("/scenario", json=payload).json()
    second = client.post("/scenario", json=payload).json()
    assert first == second


def test_scenario_validation_rejects_negative_budget():
    resp = client.post(
        "/scenario",
        json={"monthly_budget": -1, "expected_tokens_per_month": 1000},
    )
    assert resp.status_code == 422


def test_scenario_validation_rejects_bad_limit():
    resp = client.post(
        "/scenario",
        json={"monthly_budget": 10, "expected_tokens_per_month": 1000, "limit": 0},
    )
    assert resp.status_code == 422


# ── Task recommender ─────────────────────────────────────────────────────


def test_task_recommendations():
    resp = client.post(
        "/recommend/task",
        json={"task_type": "code-generation", "priority": "quality", "max_cost_per_1m": 20},
    )
    assert resp.status_code == 200
    body = resp.json()
    assert 0 < len(body["recommendations"]) <= 5
    scores = [item["score"] for item in body["recommendations"]]
    assert scores == sorted(scores, reverse=True)
    for item in body["recommendations"]:
        assert item["criterion"] == "task_fit"


def test_task_validation_rejects_unknown_priority():
    resp = client.post("/recommend/task", json={"priority": "vibes"})
    assert resp.status_code == 422
