from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import pandas as pd
from pydantic import ValidationError

from ..recommendations.models import Benchmarks, ModelRecord
from .config import DEFAULT_CATALOG_CONFIG, CatalogConfig

logger = logging.getLogger(__name__)

_TEXT_COLUMNS = [
    "id", "name", "provider", "description", "released",
    "tags", "best_for", "key_features", "speed",
]

_catalog: tuple[ModelRecord, ...] | None = None


def _split_list(value: Any, separator: str) -> list[str]:
    if pd.isna(value):
        return []
    return [part.strip() for part in str(value).split(separator) if part.strip()]


def _optional_float(value: Any) -> float | None:
    # Empty cell means "no signal", which is not the same as a score of 0
    return float(value) if pd.notna(value) else None


def _optional_str(value: Any) -> str | None:
    return str(value) if pd.notna(value) and str(value).strip() else None


def _row_to_record(row: pd.Series, separator: str) -> ModelRecord:
    mmlu = _optional_float(row.get("mmlu"))
    human_eval = _optional_float(row.get("human_eval"))
    speed = _optional_str(row.get("speed"))
    benchmarks = None
    if mmlu is not None or human_eval is not None or speed is not None:
        benchmarks = Benchmarks(mmlu=mmlu, human_eval=human_eval, speed=speed)

    return ModelRecord(
        id=str(row["id"]),
        name=str(row["name"]),
        provider=str(row["provider"]),
        description=_optional_str(row.get("description")) or "",
        released=_optional_str(row.get("released")),
        context_window=int(row["context_window"]),
        input_cost_per_1m=float(row["input_cost_per_1m"]),
        output_cost_per_1m=float(row["output_cost_per_1m"]),
        tags=_split_list(row.get("tags"), separator),
        best_for=_split_list(row.get("best_for"), separator),
        key_features=_split_list(row.get("key_features"), separator),
        benchmarks=benchmarks,
    )


def load_catalog(
    path: Path | None = None,
    config: CatalogConfig = DEFAULT_CATALOG_CONFIG,
) -> tuple[ModelRecord, ...]:
    """Parse a processed catalog CSV into records, preserving file order."""
    csv_path = path or config.processed_path
    df = pd.read_csv(csv_path, dtype={col: str for col in _TEXT_COLUMNS})

    records: list[ModelRecord] = []
    for _, row in df.iterrows():
        try:
            records.append(_row_to_record(row, config.list_separator))
        except (KeyError, TypeError, ValueError, ValidationError):
            logger.warning("Skipping malformed catalog row %r", row.get("id"), exc_info=True)

    logger.info("Loaded %d models from %s", len(records), csv_path)
    return tuple(records)


def get_catalog() -> tuple[ModelRecord, ...]:
    """Return the in-memory catalog, loading it on first call."""
    global _catalog
    if _catalog is None:
        _catalog = load_catalog()
    return _catalog


def get_model(model_id: str) -> ModelRecord | None:
    for model in get_catalog():
        if model.id == model_id:
            return model
    return None


def reset_catalog() -> None:
    global _catalog
    _catalog = None
