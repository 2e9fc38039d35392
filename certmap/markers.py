import html
import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Mapping, Optional, Tuple

import pandas as pd

from certmap.city_index import CityIndex, CityIndexEntry
from certmap.config import STATUS_COLORS, UNKNOWN_STATUS
from certmap.dataset import Row

logger = logging.getLogger(__name__)

PLACEHOLDER = "—"


def status_color(status, colors: Mapping[str, str] = STATUS_COLORS) -> str:
    """Color for a status; unmapped or blank statuses get the Unknown color."""
    return colors.get(status) or colors[UNKNOWN_STATUS]


def hex_to_rgb(hex_color: str):
    h = str(hex_color).lstrip("#")
    if len(h) != 6:
        return [153, 153, 153]
    return [int(h[i:i+2], 16) for i in (0, 2, 4)]


@dataclass(frozen=True)
class Popup:
    """Structured popup payload; the map layer decides how to draw it."""

    title: str
    category: str
    status: str
    status_color: str
    location: str = ""
    details: Tuple[Tuple[str, str], ...] = ()

    def to_html(self) -> str:
        e = html.escape
        parts = [
            '<div style="min-width:240px; font-family: sans-serif;">',
            f"<div><b>{e(self.title)}</b></div>",
            "<div>"
            f'<span style="background:#eee;border-radius:8px;padding:0 6px;">{e(self.category)}</span> '
            f'<span style="background:{e(self.status_color)};color:white;border-radius:8px;padding:0 6px;">'
            f"{e(self.status)}</span>"
            "</div>",
        ]
        if self.location:
            parts.append(f"<div>{e(self.location)}</div>")
        for label, value in self.details:
            parts.append(f"<div>{e(label)}: {e(value)}</div>")
        parts.append("</div>")
        return "".join(parts)


def build_popup(r: Row, coord: Optional[CityIndexEntry]) -> Popup:
    state = (coord.state if coord else None) or r.state
    location = ", ".join(str(v) for v in (r.city, state) if v)

    details = []
    if r.poc is not None:
        details.append(("PoC", str(r.poc)))
    if r.gp_team is not None:
        details.append(("GP Team", str(r.gp_team)))
    if r.year is not None:
        details.append(("Year of Certification", str(r.year)))

    return Popup(
        title=str(r.company) if r.company is not None else PLACEHOLDER,
        category=str(r.category) if r.category is not None else PLACEHOLDER,
        status=str(r.status) if r.status is not None else UNKNOWN_STATUS,
        status_color=status_color(r.status),
        location=location,
        details=tuple(details),
    )


@dataclass(frozen=True)
class Marker:
    latitude: float
    longitude: float
    color: str
    fill_color: str
    popup: Popup


@dataclass
class RenderResult:
    plotted: int = 0
    missing: int = 0
    unresolved: List[Row] = field(default_factory=list)


class MarkerLayer:
    """
    The set of point markers currently on the map.
    Every render clears the layer and rebuilds it from scratch.
    """

    def __init__(self):
        self.markers: List[Marker] = []

    def __len__(self) -> int:
        return len(self.markers)

    def clear(self) -> None:
        self.markers = []

    def add(self, marker: Marker) -> None:
        self.markers.append(marker)

    def render(self, rows: Iterable[Row], city_index: CityIndex) -> RenderResult:
        self.clear()
        result = RenderResult()

        for r in rows:
            coord = city_index.resolve(r.city)
            if coord is None:
                result.missing += 1
                result.unresolved.append(r)
                continue

            color = status_color(r.status)
            self.add(Marker(
                latitude=coord.latitude,
                longitude=coord.longitude,
                color=color,
                fill_color=color,
                popup=build_popup(r, coord),
            ))
            result.plotted += 1

        logger.info("Plotted: %d, missing coords: %d", result.plotted, result.missing)
        return result

    def to_frame(self) -> pd.DataFrame:
        """One row per marker, shaped for a pydeck ScatterplotLayer."""
        cols = ["lat", "lon", "status", "fill_rgb", "line_rgb", "popup_html"]
        df = pd.DataFrame(
            [
                {
                    "lat": m.latitude,
                    "lon": m.longitude,
                    "status": m.popup.status,
                    "fill_rgb": hex_to_rgb(m.fill_color),
                    "line_rgb": hex_to_rgb(m.color),
                    "popup_html": m.popup.to_html(),
                }
                for m in self.markers
            ],
            columns=cols,
        )
        return df


def status_breakdown(rows: Iterable[Row]) -> Tuple[pd.DataFrame, dict]:
    """
    Companies per status for the bar chart, plus the colors to draw them with.
    Colors come from status_color so bars match the markers and legend.
    """
    labels = [str(r.status) if r.status is not None else UNKNOWN_STATUS for r in rows]
    counts = (
        pd.Series(labels, dtype=object)
        .value_counts()
        .rename_axis("Status")
        .reset_index(name="count")
    )
    colors = {s: status_color(s) for s in counts["Status"]}
    return counts, colors
