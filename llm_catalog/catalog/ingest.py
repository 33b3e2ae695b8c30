from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, List

import pandas as pd

from .config import DEFAULT_CATALOG_CONFIG, CatalogConfig

logger = logging.getLogger(__name__)


CANONICAL_COLUMNS: List[str] = [
    "id",
    "name",
    "provider",
    "description",
    "released",
    "context_window",
    "input_cost_per_1m",
    "output_cost_per_1m",
    "tags",
    "best_for",
    "key_features",
    "mmlu",
    "human_eval",
    "speed",
]

_NUMERIC_COLUMNS = ["context_window", "input_cost_per_1m", "output_cost_per_1m"]
_LIST_COLUMNS = ["tags", "best_for", "key_features"]


def _join_list(value: Any, separator: str) -> str:
    if isinstance(value, (list, tuple)):
        return separator.join(str(v).strip() for v in value if str(v).strip())
    if value is None or (isinstance(value, float) and pd.isna(value)):
        return ""
    return str(value)


def _normalize_score(value: Any) -> float | None:
    if value is None:
        return None
    try:
        score = float(value)
    except (TypeError, ValueError):
        return None
    if pd.isna(score):
        return None
    # Clamp to [0, 100]
    return max(0.0, min(100.0, score))


def _normalize_speed(value: Any) -> str | None:
    if not isinstance(value, str):
        return None
    speed = value.strip().lower()
    return speed if speed in ("fast", "medium", "slow") else None


def run_ingestion(config: CatalogConfig = DEFAULT_CATALOG_CONFIG) -> Path:
    """
    Normalize a provider-data export into the canonical catalog CSV.

    Steps:
    - Read the raw JSON export (camelCase records, nested benchmarks).
    - Map raw fields into the canonical catalog schema.
    - Drop entries without an id or with non-numeric prices.
    - Persist the cleaned catalog as CSV for the data store.
    """
    with open(config.raw_path, encoding="utf-8") as f:
        raw = json.load(f)

    config.processed_data_dir.mkdir(parents=True, exist_ok=True)

    df = pd.json_normalize(raw)

    def _first_present(columns: List[str]) -> str | None:
        for col in columns:
            if col in df.columns:
                return col
        return None

    col_id = _first_present(["id", "modelId", "model_id"])
    col_name = _first_present(["name", "displayName"])
    col_provider = _first_present(["provider", "vendor"])
    col_description = _first_present(["description", "purpose"])
    col_context = _first_present(["contextWindow", "context_window", "contextLength"])
    col_input = _first_present(["inputCostPer1M", "input_cost_per_1m"])
    col_output = _first_present(["outputCostPer1M", "output_cost_per_1m"])
    col_tags = _first_present(["tags", "capabilities"])
    col_best_for = _first_present(["bestFor", "best_for"])
    col_features = _first_present(["keyFeatures", "key_features"])
    col_mmlu = _first_present(["benchmarks.mmlu", "mmlu"])
    col_human_eval = _first_present(["benchmarks.humanEval", "humanEval", "human_eval"])
    col_speed = _first_present(["benchmarks.speed", "speed"])

    canonical = pd.DataFrame(index=df.index)
    canonical["id"] = df[col_id].astype("string").str.strip() if col_id else pd.NA
    canonical["name"] = df[col_name] if col_name else canonical["id"]
    canonical["provider"] = df[col_provider] if col_provider else ""
    canonical["description"] = df[col_description].fillna("") if col_description else ""
    # Older entries carry a year, newer ones a full release date
    released = pd.Series(pd.NA, index=df.index, dtype="string")
    for col in ("released", "releaseDate"):
        if col in df.columns:
            released = released.fillna(df[col].astype("string"))
    canonical["released"] = released.str[:4]

    for column, source in zip(_NUMERIC_COLUMNS, [col_context, col_input, col_output]):
        canonical[column] = pd.to_numeric(df[source], errors="coerce") if source else float("nan")

    for column, source in zip(_LIST_COLUMNS, [col_tags, col_best_for, col_features]):
        canonical[column] = (
            df[source].apply(_join_list, separator=config.list_separator) if source else ""
        )

    canonical["mmlu"] = df[col_mmlu].apply(_normalize_score) if col_mmlu else None
    canonical["human_eval"] = (
        df[col_human_eval].apply(_normalize_score) if col_human_eval else None
    )
    canonical["speed"] = df[col_speed].apply(_normalize_speed) if col_speed else None

    valid = canonical["id"].notna() & (canonical["id"] != "")
    for column in _NUMERIC_COLUMNS:
        valid &= canonical[column].notna() & (canonical[column] >= 0)
    for _, row in canonical.loc[~valid].iterrows():
        logger.warning("Skipping catalog entry %r: missing id or invalid numeric field", row["id"])
    canonical = canonical.loc[valid]

    duplicated = canonical["id"].duplicated(keep="first")
    if duplicated.any():
        logger.warning(
            "Dropping %d duplicate ids: %s",
            int(duplicated.sum()),
            ", ".join(canonical.loc[duplicated, "id"].tolist()),
        )
    canonical = canonical.loc[~duplicated].copy()

    canonical["context_window"] = canonical["context_window"].astype(int)
    canonical = canonical[CANONICAL_COLUMNS]

    output_path = config.processed_path
    canonical.to_csv(output_path, index=False)
    logger.info("Wrote %d catalog entries to %s", len(canonical), output_path)
    return output_path


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    path = run_ingestion()
    print(f"Ingestion complete. Processed catalog saved to: {path}")
