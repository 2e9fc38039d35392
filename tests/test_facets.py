from certmap.dataset import Row
from certmap.facets import FACET_FIELDS, build_facets


def test_distinct_sorted_values(rows):
    facets = build_facets(rows)

    assert set(facets) == set(FACET_FIELDS)
    assert facets["status"] == ["Completed", "Hold"]
    assert facets["city"] == ["Pune", "Surat"]
    assert facets["category"] == ["Food", "Textile"]
    assert facets["state"] == ["Gujarat", "Maharashtra"]
    assert facets["poc"] == ["Asha", "Ravi"]
    assert facets["gp_team"] == ["West"]


def test_year_mixes_numbers_and_text(rows):
    years = build_facets(rows)["year"]
    # 2021 (int) and "2021" (text) are distinct values but sort side by side
    assert [str(y) for y in years] == ["2021", "2021", "2022"]


def test_never_contains_none_or_empty():
    facets = build_facets([Row(), Row(city="", status=None, year=""), Row(city="Pune")])
    for values in facets.values():
        assert None not in values
        assert "" not in values
    assert facets["city"] == ["Pune"]
    assert facets["year"] == []


def test_empty_rows():
    assert build_facets([]) == {name: [] for name in FACET_FIELDS}
