"""Certified company map: city resolution and filter/render pipeline."""

from certmap.city_index import CityIndex, CityIndexEntry
from certmap.dataset import Row, load_rows
from certmap.errors import CertMapError, DatasetLoadError, SourceFetchError
from certmap.facets import build_facets
from certmap.filters import FilterSelection, apply_filters
from certmap.markers import MarkerLayer, RenderResult
from certmap.normalize import normalize_city
from certmap.session import CertMapSession

__all__ = [
    "CertMapError",
    "CertMapSession",
    "CityIndex",
    "CityIndexEntry",
    "DatasetLoadError",
    "FilterSelection",
    "MarkerLayer",
    "RenderResult",
    "Row",
    "SourceFetchError",
    "apply_filters",
    "build_facets",
    "load_rows",
    "normalize_city",
]
