from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Speed(str, Enum):
    fast = "fast"
    medium = "medium"
    slow = "slow"


class Benchmarks(BaseModel):
    model_config = ConfigDict(frozen=True)

    mmlu: float | None = Field(default=None, ge=0.0, le=100.0)
    human_eval: float | None = Field(default=None, ge=0.0, le=100.0)
    speed: Speed | None = None


class ModelRecord(BaseModel):
    """A single catalog entry. Read-only once loaded."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    name: str
    provider: str
    description: str = ""
    released: str | None = None
    context_window: int = Field(..., ge=0)
    input_cost_per_1m: float = Field(..., ge=0.0)
    output_cost_per_1m: float = Field(..., ge=0.0)
    tags: list[str] = Field(default_factory=list)
    best_for: list[str] = Field(default_factory=list)
    key_features: list[str] = Field(default_factory=list)
    benchmarks: Benchmarks | None = None

    @field_validator("tags", "best_for")
    @classmethod
    def _dedupe(cls, values: list[str]) -> list[str]:
        # Set semantics, first occurrence keeps its position
        return list(dict.fromkeys(values))


class RequirementSpec(BaseModel):
    """
    Declared usage requirements for scenario matching.

    Deliberately unvalidated: a negative budget simply matches nothing.
    """

    model_config = ConfigDict(frozen=True)

    monthly_budget: float
    expected_tokens_per_month: int
    min_context_length: int = 0
    required_capabilities: list[str] = Field(default_factory=list)
    preferred_providers: list[str] = Field(default_factory=list)


class Criterion(str, Enum):
    similarity = "similarity"
    cost_index = "cost_index"
    quality_index = "quality_index"
    value = "value"
    task_fit = "task_fit"


class ScoredCandidate(BaseModel):
    model_config = ConfigDict(frozen=True)

    model: ModelRecord
    score: float
    criterion: Criterion


class RecommendationSet(BaseModel):
    similar: list[ScoredCandidate] = Field(default_factory=list)
    cheaper: list[ScoredCandidate] = Field(default_factory=list)
    better: list[ScoredCandidate] = Field(default_factory=list)


class CostEstimate(BaseModel):
    model_config = ConfigDict(protected_namespaces=())

    model_id: str
    tokens_per_month: int
    input_cost: float
    output_cost: float
    total_cost: float


class TaskType(str, Enum):
    creative_writing = "creative-writing"
    code_generation = "code-generation"
    data_analysis = "data-analysis"
    chat = "chat"
    reasoning = "reasoning"
    translation = "translation"


class Priority(str, Enum):
    quality = "quality"
    cost = "cost"
    balanced = "balanced"
    speed = "speed"


class TaskProfile(BaseModel):
    model_config = ConfigDict(frozen=True)

    task_type: TaskType = TaskType.chat
    priority: Priority = Priority.balanced
    max_cost_per_1m: float | None = None
    min_quality: float = 0.0
    min_context_window: int = 0


class FilterOptions(BaseModel):
    query: str | None = None
    price_min: float | None = None
    price_max: float | None = None
    context_min: int | None = None
    context_max: int | None = None
    providers: list[str] = Field(default_factory=list)
    capabilities: list[str] = Field(default_factory=list)
    release_year: int | None = None


# ── HTTP request / response models ──────────────────────────────────────


class ScenarioRequest(BaseModel):
    monthly_budget: float = Field(..., ge=0.0, description="Monthly spend ceiling")
    expected_tokens_per_month: int = Field(..., ge=0)
    min_context_length: int = Field(default=0, ge=0)
    required_capabilities: list[str] = Field(default_factory=list)
    preferred_providers: list[str] = Field(default_factory=list)
    limit: int = Field(default=5, ge=1, le=50)

    def to_requirements(self) -> RequirementSpec:
        return RequirementSpec(**self.model_dump(exclude={"limit"}))


class TaskRequest(TaskProfile):
    max_cost_per_1m: float | None = Field(default=None, gt=0.0)
    min_quality: float = Field(default=0.0, ge=0.0, le=100.0)
    min_context_window: int = Field(default=0, ge=0)
    limit: int = Field(default=5, ge=1, le=50)

    def to_profile(self) -> TaskProfile:
        return TaskProfile(**self.model_dump(exclude={"limit"}))


class RecommendationItem(BaseModel):
    model: ModelRecord
    score: float | None
    criterion: Criterion


class RecommendationResponse(BaseModel):
    recommendations: list[RecommendationItem]
    total_candidates: int


class ModelRecommendationsResponse(BaseModel):
    model_config = ConfigDict(protected_namespaces=())

    model_id: str
    similar: list[RecommendationItem]
    cheaper: list[RecommendationItem]
    better: list[RecommendationItem]
