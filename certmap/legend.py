import html
from typing import List, Mapping, Tuple

from certmap.config import BASEMAP_ATTRIBUTION, STATUS_COLORS


def legend_entries(colors: Mapping[str, str] = STATUS_COLORS) -> List[Tuple[str, str]]:
    return list(colors.items())


def legend_html(colors: Mapping[str, str] = STATUS_COLORS) -> str:
    items = "".join(
        '<div style="display:flex;align-items:center;gap:6px;margin:2px 0;">'
        f'<span style="display:inline-block;width:12px;height:12px;border-radius:50%;background:{html.escape(clr)};"></span>'
        f"{html.escape(label)}</div>"
        for label, clr in legend_entries(colors)
    )
    return (
        '<div style="font-family: sans-serif; font-size: 0.9rem;">'
        "<div><strong>Status legend</strong></div>"
        f"{items}"
        f'<div style="margin-top:.5rem;color:#666;font-size:0.8rem;">{html.escape(BASEMAP_ATTRIBUTION)}</div>'
        "</div>"
    )
