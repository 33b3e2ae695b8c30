from __future__ import annotations

import re
from typing import Any, Sequence

from ..recommendations.models import FilterOptions, ModelRecord

_YEAR_RE = re.compile(r"(\d{4})")


def _release_year(model: ModelRecord) -> int | None:
    if not model.released:
        return None
    match = _YEAR_RE.search(model.released)
    return int(match.group(1)) if match else None


def _matches_query(model: ModelRecord, needle: str) -> bool:
    fields = [model.name, model.provider, model.description]
    fields.extend(model.tags)
    fields.extend(model.best_for)
    fields.extend(model.key_features)
    return any(needle in field.lower() for field in fields)


def search_models(catalog: Sequence[ModelRecord], query: str | None) -> list[ModelRecord]:
    """Case-insensitive substring search across the descriptive fields."""
    if not query or not query.strip():
        return list(catalog)
    needle = query.strip().lower()
    return [m for m in catalog if _matches_query(m, needle)]


def apply_filters(catalog: Sequence[ModelRecord], options: FilterOptions) -> list[ModelRecord]:
    """
    Narrow the catalog for browsing.

    Price bounds apply to the input price, context bounds are inclusive,
    and a model qualifies for ``capabilities`` if it has any one of them.
    """
    models = search_models(catalog, options.query)

    if options.price_min is not None:
        models = [m for m in models if m.input_cost_per_1m >= options.price_min]
    if options.price_max is not None:
        models = [m for m in models if m.input_cost_per_1m <= options.price_max]

    if options.context_min is not None:
        models = [m for m in models if m.context_window >= options.context_min]
    if options.context_max is not None:
        models = [m for m in models if m.context_window <= options.context_max]

    if options.providers:
        providers = set(options.providers)
        models = [m for m in models if m.provider in providers]

    if options.capabilities:
        wanted = set(options.capabilities)
        models = [m for m in models if wanted & set(m.tags)]

    if options.release_year is not None:
        models = [m for m in models if _release_year(m) == options.release_year]

    return models


def catalog_metadata(catalog: Sequence[ModelRecord]) -> dict[str, Any]:
    providers = sorted({m.provider for m in catalog})
    capabilities = sorted({tag for m in catalog for tag in m.tags})
    years = sorted({y for y in (_release_year(m) for m in catalog) if y is not None})
    return {
        "model_count": len(catalog),
        "providers": providers,
        "capabilities": capabilities,
        "release_years": years,
    }
