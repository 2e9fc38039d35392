import io
import logging
import zipfile
from dataclasses import astuple, dataclass, fields
from typing import Any, List, Mapping, Optional, Sequence, Union

import pandas as pd

from certmap.errors import DatasetLoadError, SourceFetchError
from certmap.sources import Source, fetch_bytes

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Row:
    """One certified-company record. Absent values are always None."""

    city: Optional[str] = None
    state: Optional[str] = None
    company: Optional[str] = None
    category: Optional[str] = None
    status: Optional[str] = None
    year: Any = None
    poc: Optional[str] = None
    gp_team: Optional[str] = None


# Row field -> spreadsheet header (exact match)
ROW_HEADERS = {
    "city": "City",
    "state": "State",
    "company": "Company Name",
    "category": "Category",
    "status": "Status",
    "year": "Year of Certification",
    "poc": "PoC",
    "gp_team": "GP Team",
}


def clean_cell(value: Any) -> Any:
    """
    Single "no value" representation for spreadsheet cells:
    - NaN / None / blank text -> None
    - text is stripped
    - integral floats -> int (Year comes back as 2021.0 otherwise)
    """
    if value is None:
        return None
    try:
        if pd.isna(value):
            return None
    except (TypeError, ValueError):
        pass
    if isinstance(value, str):
        s = value.strip()
        return s if s else None
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def project_record(record: Mapping[str, Any]) -> Row:
    """Map a parsed sheet record onto Row. Missing headers -> None, extra columns ignored."""
    return Row(**{field: clean_cell(record.get(header)) for field, header in ROW_HEADERS.items()})


def parse_rows(data: bytes) -> List[Row]:
    """Parse spreadsheet bytes; first sheet only, sheet order preserved."""
    try:
        df = pd.read_excel(io.BytesIO(data), sheet_name=0, dtype=object)
    except (ValueError, KeyError, OSError, zipfile.BadZipFile) as exc:
        raise DatasetLoadError(f"Could not parse dataset spreadsheet: {exc}") from exc

    df.columns = [str(c) for c in df.columns]
    return [project_record(rec) for rec in df.to_dict(orient="records")]


def load_rows(source: Union[Source, bytes]) -> List[Row]:
    """Load the roster from a path, URL or raw .xlsx bytes. Any failure is fatal."""
    if isinstance(source, (bytes, bytearray)):
        data = bytes(source)
    else:
        try:
            data = fetch_bytes(source)
        except SourceFetchError as exc:
            raise DatasetLoadError(f"Failed to fetch dataset: {exc}") from exc

    rows = parse_rows(data)
    logger.info("Loaded %d rows from dataset", len(rows))
    return rows


def rows_to_frame(rows: Sequence[Row]) -> pd.DataFrame:
    """Rows back to a DataFrame with the spreadsheet headers (for table display)."""
    names = [f.name for f in fields(Row)]
    df = pd.DataFrame([astuple(r) for r in rows], columns=names, dtype=object)
    return df.rename(columns=ROW_HEADERS)
