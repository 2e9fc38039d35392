import logging
from concurrent.futures import ThreadPoolExecutor
from typing import List, Mapping, Optional, Sequence, Tuple, Union

from certmap.city_index import CityIndex
from certmap.config import CITY_COORDS, CITY_INDEX_PATH, DATASET_PATH
from certmap.dataset import Row, load_rows
from certmap.facets import FacetSet, build_facets
from certmap.filters import FilterSelection, apply_filters
from certmap.markers import MarkerLayer, RenderResult
from certmap.sources import Source

logger = logging.getLogger(__name__)


class CertMapSession:
    """
    Everything loaded once per session: the full row cache, the city index and
    the facets derived from the rows. Read-only after construction; filtering
    and rendering always start from the full row set.
    """

    def __init__(self, rows: Sequence[Row], city_index: CityIndex):
        self.rows: Tuple[Row, ...] = tuple(rows)
        self.city_index = city_index
        self.facets: FacetSet = build_facets(self.rows)

    @classmethod
    def load(
        cls,
        city_source: Source = CITY_INDEX_PATH,
        dataset_source: Union[Source, bytes] = DATASET_PATH,
        fallback: Mapping[str, Tuple] = CITY_COORDS,
    ) -> "CertMapSession":
        """
        Load the city index and the dataset side by side. A dataset failure
        raises DatasetLoadError; a city index failure only degrades to the
        fallback table.
        """
        with ThreadPoolExecutor(max_workers=2) as pool:
            index_future = pool.submit(CityIndex.build, city_source, fallback)
            rows_future = pool.submit(load_rows, dataset_source)
            rows = rows_future.result()
            city_index = index_future.result()

        logger.info(
            "Session ready: %d rows, %d cities (%s)",
            len(rows), len(city_index), city_index.source,
        )
        return cls(rows, city_index)

    def filter(self, selection: FilterSelection) -> List[Row]:
        return apply_filters(self.rows, selection)

    def refresh(self, selection: FilterSelection, layer: Optional[MarkerLayer] = None) -> Tuple[List[Row], RenderResult, MarkerLayer]:
        """One filter + render pass over the full cached rows."""
        layer = layer if layer is not None else MarkerLayer()
        filtered = self.filter(selection)
        result = layer.render(filtered, self.city_index)
        return filtered, result, layer
