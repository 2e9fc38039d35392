from typing import Any, Dict, Iterable, List

from certmap.dataset import Row

# Filterable fields, in control order
FACET_FIELDS = ("status", "category", "city", "state", "poc", "gp_team", "year")

FacetSet = Dict[str, List[Any]]


def _has_value(v: Any) -> bool:
    return v is not None and v != ""


def build_facets(rows: Iterable[Row]) -> FacetSet:
    """
    Distinct observed values per filterable field, one pass over all rows.
    Sorted by string representation so numeric years and text sort together.
    """
    seen = {name: set() for name in FACET_FIELDS}
    for r in rows:
        for name in FACET_FIELDS:
            v = getattr(r, name)
            if _has_value(v):
                seen[name].add(v)
    return {name: sorted(values, key=str) for name, values in seen.items()}
