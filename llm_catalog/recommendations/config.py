from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")

logger = logging.getLogger(__name__)

_DEFAULT_INPUT_TOKEN_SHARE = 0.4


def load_input_token_share() -> float:
    """Read RECOMMENDER_INPUT_TOKEN_SHARE, falling back to 0.4 when unset or invalid."""
    raw = os.getenv("RECOMMENDER_INPUT_TOKEN_SHARE")
    if raw is None:
        return _DEFAULT_INPUT_TOKEN_SHARE
    try:
        share = float(raw)
    except ValueError:
        logger.warning(
            "Ignoring non-numeric RECOMMENDER_INPUT_TOKEN_SHARE=%r; using %s",
            raw,
            _DEFAULT_INPUT_TOKEN_SHARE,
        )
        return _DEFAULT_INPUT_TOKEN_SHARE
    if not 0.0 <= share <= 1.0:
        logger.warning(
            "RECOMMENDER_INPUT_TOKEN_SHARE=%s is outside [0, 1]; using %s",
            share,
            _DEFAULT_INPUT_TOKEN_SHARE,
        )
        return _DEFAULT_INPUT_TOKEN_SHARE
    return share


@dataclass(frozen=True)
class RecommendationConfig:
    """
    Every constant used by the scoring and filtering pipeline.

    Passed explicitly to each recommendation operation so that all call
    sites share one set of weights and thresholds.
    """

    # Similarity weights
    context_weight: float = 2.0
    benchmark_weight: float = 3.0
    tag_weight: float = 2.0

    # Cheaper alternatives: cost must stay within [floor * ref, ref)
    cheaper_cost_floor: float = 0.6
    cheaper_quality_ratio: float = 0.85

    # Better performance: allowed cost increase over the reference, in percent
    max_budget_increase_percent: float = 50.0

    # Share of monthly tokens billed at the input price; the rest is output
    input_token_share: float = load_input_token_share()

    default_limit: int = 5

    # Task recommender
    neutral_quality: float = 50.0
    context_cap: int = 200_000

    @property
    def output_token_share(self) -> float:
        return 1.0 - self.input_token_share


DEFAULT_RECOMMENDATION_CONFIG = RecommendationConfig()
