from __future__ import annotations

from llm_catalog.recommendations.models import Benchmarks, ModelRecord


def make_model(
    model_id: str,
    *,
    context_window: int = 8192,
    input_cost: float = 1.0,
    output_cost: float = 1.0,
    tags: list[str] | None = None,
    best_for: list[str] | None = None,
    provider: str = "Acme",
    mmlu: float | None = None,
    human_eval: float | None = None,
) -> ModelRecord:
    benchmarks = None
    if mmlu is not None or human_eval is not None:
        benchmarks = Benchmarks(mmlu=mmlu, human_eval=human_eval)
    return ModelRecord(
        id=model_id,
        name=model_id.upper(),
        provider=provider,
        context_window=context_window,
        input_cost_per_1m=input_cost,
        output_cost_per_1m=output_cost,
        tags=tags or [],
        best_for=best_for or [],
        benchmarks=benchmarks,
    )


# The two-model catalog used throughout the scenario examples
MODEL_A = make_model(
    "a", context_window=4096, input_cost=1.0, output_cost=2.0, tags=["chat"], mmlu=70.0,
)
MODEL_B = make_model(
    "b", context_window=128000, input_cost=0.5, output_cost=1.5, tags=["chat", "code"], mmlu=85.0,
)
