from dataclasses import dataclass
from typing import Any, Iterable, List

from certmap.dataset import Row


@dataclass(frozen=True)
class FilterSelection:
    """Current control values. "" means the control is on "All" (inactive)."""

    status: Any = ""
    category: Any = ""
    city: Any = ""
    state: Any = ""
    poc: Any = ""
    gp_team: Any = ""
    year: Any = ""
    search: str = ""


def _is_active(v: Any) -> bool:
    # only "" (the "All" option) switches a control off
    return v is not None and v != ""


def _matches(r: Row, sel: FilterSelection, query: str) -> bool:
    if _is_active(sel.status) and r.status != sel.status:
        return False
    if _is_active(sel.category) and r.category != sel.category:
        return False
    if _is_active(sel.city) and r.city != sel.city:
        return False

    # missing state / PoC / GP Team compare as ""
    if _is_active(sel.state) and (r.state or "") != sel.state:
        return False
    if _is_active(sel.poc) and (r.poc or "") != sel.poc:
        return False
    if _is_active(sel.gp_team) and (r.gp_team or "") != sel.gp_team:
        return False

    # Year may be numeric in one place and text in the other
    if _is_active(sel.year) and str(r.year) != str(sel.year):
        return False

    if query:
        company = "" if r.company is None else str(r.company)
        if query not in company.lower():
            return False
    return True


def apply_filters(rows: Iterable[Row], selection: FilterSelection) -> List[Row]:
    """Rows matching every active criterion, in their original order."""
    query = (selection.search or "").strip().lower()
    return [r for r in rows if _matches(r, selection, query)]
