import json

import pandas as pd
import pytest

from certmap.city_index import CityIndex
from certmap.dataset import Row


@pytest.fixture
def write_xlsx(tmp_path):
    def _write(records, name="dataset.xlsx", columns=None):
        path = tmp_path / name
        pd.DataFrame(records, columns=columns).to_excel(path, index=False)
        return path
    return _write


@pytest.fixture
def write_json(tmp_path):
    def _write(body, name="in-cities.json"):
        path = tmp_path / name
        path.write_text(json.dumps(body), encoding="utf-8")
        return path
    return _write


@pytest.fixture
def pune_index(write_json):
    return CityIndex.build(write_json([
        {"city": "Pune", "lat": "18.5204", "lng": "73.8567", "admin_name": "Maharashtra"},
    ]))


@pytest.fixture
def rows():
    return [
        Row(city="Pune", state="Maharashtra", company="Pune Traders", category="Textile",
            status="Completed", year=2021, poc="Asha", gp_team="West"),
        Row(city="Surat", state="Gujarat", company="Surat Mills", category="Textile",
            status="Hold", year=2022, poc="Ravi", gp_team=None),
        Row(city="Pune", state=None, company="Deccan Foods", category="Food",
            status="Hold", year="2021", poc=None, gp_team="West"),
        Row(city=None, state=None, company=None, category=None,
            status=None, year=None, poc=None, gp_team=None),
    ]
