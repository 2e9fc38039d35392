import pytest
import requests

from certmap.dataset import Row, clean_cell, load_rows, project_record, rows_to_frame
from certmap.errors import DatasetLoadError

HEADERS = ["City", "State", "Company Name", "Category", "Status", "Year of Certification", "PoC", "GP Team"]


def test_project_record_maps_headers():
    rec = {
        "City": "Pune", "State": "Maharashtra", "Company Name": "Pune Traders",
        "Category": "Textile", "Status": "Completed", "Year of Certification": 2021,
        "PoC": "Asha", "GP Team": "West", "Notes": "ignored",
    }
    assert project_record(rec) == Row(
        city="Pune", state="Maharashtra", company="Pune Traders", category="Textile",
        status="Completed", year=2021, poc="Asha", gp_team="West",
    )


def test_project_record_missing_headers_are_none():
    assert project_record({"City": "Pune"}) == Row(city="Pune")
    assert project_record({}) == Row()


@pytest.mark.parametrize("raw, expected", [
    (None, None),
    (float("nan"), None),
    ("", None),
    ("   ", None),
    (" Pune ", "Pune"),
    (2021.0, 2021),
    (2021, 2021),
    (3.5, 3.5),
])
def test_clean_cell(raw, expected):
    assert clean_cell(raw) == expected


def test_load_rows_first_sheet_in_order(write_xlsx):
    path = write_xlsx(
        [
            ["Pune", "Maharashtra", "Pune Traders", "Textile", "Completed", 2021, "Asha", "West"],
            ["Surat", None, "Surat Mills", "Textile", "Hold", None, None, None],
            ["Pune", "Maharashtra", "Pune Traders", "Textile", "Completed", 2021, "Asha", "West"],
        ],
        columns=HEADERS,
    )
    rows = load_rows(path)

    assert len(rows) == 3
    assert rows[0] == rows[2]
    assert rows[0].year == 2021
    assert isinstance(rows[0].year, int)
    assert rows[1] == Row(city="Surat", company="Surat Mills", category="Textile", status="Hold")


def test_load_rows_ignores_extra_and_tolerates_missing_columns(write_xlsx):
    path = write_xlsx([{"City": "Pune", "Status": "Completed", "Remarks": "x"}])
    rows = load_rows(path)
    assert rows == [Row(city="Pune", status="Completed")]


def test_load_rows_accepts_bytes(write_xlsx):
    path = write_xlsx([{"City": "Pune", "Company Name": "Pune Traders"}])
    rows = load_rows(path.read_bytes())
    assert rows[0].company == "Pune Traders"


def test_missing_dataset_is_fatal(tmp_path):
    with pytest.raises(DatasetLoadError):
        load_rows(tmp_path / "dataset.xlsx")


def test_unparsable_dataset_is_fatal(tmp_path):
    path = tmp_path / "dataset.xlsx"
    path.write_bytes(b"this is not a spreadsheet")
    with pytest.raises(DatasetLoadError):
        load_rows(path)


def test_http_failure_is_fatal(monkeypatch):
    class FakeResponse:
        content = b""

        def raise_for_status(self):
            raise requests.HTTPError("500 Server Error")

    monkeypatch.setattr("certmap.sources.requests.get", lambda url, timeout: FakeResponse())
    with pytest.raises(DatasetLoadError):
        load_rows("https://example.org/dataset.xlsx")


def test_rows_to_frame_uses_sheet_headers(rows):
    df = rows_to_frame(rows)
    assert list(df.columns) == HEADERS
    assert len(df) == len(rows)
    assert df.loc[0, "Company Name"] == "Pune Traders"
    assert df.loc[3, "City"] is None


def test_rows_to_frame_empty():
    assert list(rows_to_frame([]).columns) == HEADERS


def test_missing_excel_engine_is_not_reported_as_bad_data(write_xlsx, monkeypatch):
    path = write_xlsx([{"City": "Pune"}])

    def no_engine(*args, **kwargs):
        raise ImportError("Missing optional dependency 'openpyxl'")

    monkeypatch.setattr("certmap.dataset.pd.read_excel", no_engine)
    with pytest.raises(ImportError):
        load_rows(path)
