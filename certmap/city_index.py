import logging
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Tuple

import numpy as np

from certmap.config import CITY_COORDS
from certmap.errors import SourceFetchError
from certmap.normalize import normalize_city
from certmap.sources import Source, fetch_json

logger = logging.getLogger(__name__)

PRIMARY = "primary"
FALLBACK = "fallback"


@dataclass(frozen=True)
class CityIndexEntry:
    latitude: float
    longitude: float
    state: Optional[str] = None


class InvalidCityRecords(ValueError):
    """The primary body is not a list of city records (or {"cities": [...]})."""


def _to_coord(value: Any) -> Optional[float]:
    try:
        f = float(value)
    except (TypeError, ValueError):
        return None
    return f if np.isfinite(f) else None


def _add_entry(entries: Dict[str, CityIndexEntry], city: Any, lat: Any, lon: Any, state: Any) -> None:
    key = normalize_city(city)
    if not key:
        logger.warning("Skipping city record with empty name: %r", city)
        return
    lat_f, lon_f = _to_coord(lat), _to_coord(lon)
    if lat_f is None or lon_f is None:
        logger.warning("Skipping city %r with malformed coordinates (%r, %r)", city, lat, lon)
        return
    entries[key] = CityIndexEntry(latitude=lat_f, longitude=lon_f, state=state or None)


def parse_city_records(body: Any) -> Dict[str, CityIndexEntry]:
    """
    Accepts either a bare list of records or an object exposing a `cities` list.
    Each record: {city, lat, lng, admin_name?|state?}.
    """
    if isinstance(body, Mapping):
        body = body.get("cities")
    if not isinstance(body, list):
        raise InvalidCityRecords(f"expected a list of city records, got {type(body).__name__}")

    entries: Dict[str, CityIndexEntry] = {}
    for rec in body:
        if not isinstance(rec, Mapping):
            raise InvalidCityRecords(f"city record is not an object: {rec!r}")
        _add_entry(
            entries,
            rec.get("city"),
            rec.get("lat"),
            rec.get("lng"),
            rec.get("admin_name") or rec.get("state"),
        )
    return entries


def fallback_entries(table: Mapping[str, Tuple]) -> Dict[str, CityIndexEntry]:
    entries: Dict[str, CityIndexEntry] = {}
    for city, coords in table.items():
        lat, lon, *rest = coords
        _add_entry(entries, city, lat, lon, rest[0] if rest else None)
    return entries


class CityIndex:
    """Lookup from normalized city name to coordinates (+ state)."""

    def __init__(self, entries: Dict[str, CityIndexEntry], source: str = PRIMARY):
        self._entries = dict(entries)
        self.source = source

    @property
    def ready(self) -> bool:
        return len(self._entries) > 0

    def __len__(self) -> int:
        return len(self._entries)

    def resolve(self, city) -> Optional[CityIndexEntry]:
        key = normalize_city(city)
        if not key:
            return None
        return self._entries.get(key)

    @classmethod
    def build(cls, source: Source, fallback: Mapping[str, Tuple] = CITY_COORDS) -> "CityIndex":
        """
        Build from the primary JSON resource. Any failure to fetch or parse it
        switches entirely to the fallback table (sources are never merged).
        """
        try:
            entries = parse_city_records(fetch_json(source))
        except (SourceFetchError, InvalidCityRecords) as e:
            logger.warning("City index not found (%s); using fallback CITY_COORDS.", e)
            return cls(fallback_entries(fallback), source=FALLBACK)

        index = cls(entries, source=PRIMARY)
        if not index.ready:
            logger.warning("City index at %s contained no usable cities", source)
        return index
