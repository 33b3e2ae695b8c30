"""
Strict pass/fail admission of catalog records against a ``RequirementSpec``.

No partial credit: a record either satisfies every requirement or is
dropped. Ranking of the survivors happens in ``ranking``.
"""
from __future__ import annotations

import logging
from enum import Enum
from typing import Iterable

from .config import DEFAULT_RECOMMENDATION_CONFIG, RecommendationConfig
from .models import ModelRecord, RequirementSpec
from .normalizer import capability_set, context_tier, estimate_monthly_cost

logger = logging.getLogger(__name__)


class RejectionReason(Enum):
    """Why a candidate failed the requirement check."""
    CONTEXT_TOO_SMALL = "context_too_small"
    MISSING_CAPABILITY = "missing_capability"
    PROVIDER_NOT_ALLOWED = "provider_not_allowed"
    OVER_BUDGET = "over_budget"


def rejection_reason(
    model: ModelRecord,
    requirements: RequirementSpec,
    config: RecommendationConfig = DEFAULT_RECOMMENDATION_CONFIG,
) -> RejectionReason | None:
    """Return the first failed requirement, or ``None`` if the model passes."""
    if context_tier(model) < requirements.min_context_length:
        return RejectionReason.CONTEXT_TOO_SMALL

    # AND semantics: every required capability must be present
    if not set(requirements.required_capabilities) <= capability_set(model):
        return RejectionReason.MISSING_CAPABILITY

    if requirements.preferred_providers and model.provider not in requirements.preferred_providers:
        return RejectionReason.PROVIDER_NOT_ALLOWED

    estimate = estimate_monthly_cost(model, requirements.expected_tokens_per_month, config)
    if estimate.total_cost > requirements.monthly_budget:
        return RejectionReason.OVER_BUDGET

    return None


def passes(
    model: ModelRecord,
    requirements: RequirementSpec,
    config: RecommendationConfig = DEFAULT_RECOMMENDATION_CONFIG,
) -> bool:
    return rejection_reason(model, requirements, config) is None


def filter_candidates(
    catalog: Iterable[ModelRecord],
    requirements: RequirementSpec,
    config: RecommendationConfig = DEFAULT_RECOMMENDATION_CONFIG,
) -> list[ModelRecord]:
    """Return the records that satisfy ``requirements``, in catalog order."""
    passing: list[ModelRecord] = []
    for model in catalog:
        reason = rejection_reason(model, requirements, config)
        if reason is None:
            passing.append(model)
        else:
            logger.debug("Rejected %s: %s", model.id, reason.value)
    return passing
