from datetime import date, datetime
from io import BytesIO

import pytest
from openpyxl import load_workbook

from ward.services.spreadsheet import build_workbook, cell_text, process_date, read_dicts, read_rows


@pytest.mark.parametrize("value, expected", [
    (45292, "2024-01-01"),
    (45292.75, "2024-01-01"),
    ("15/3/2020", "2020-03-15"),
    ("05/11/1987", "1987-11-05"),
    ("2021-07-09", "2021-07-09"),
    ("2021-07-09T10:00:00Z", "2021-07-09"),
    (date(2019, 2, 1), "2019-02-01"),
    (datetime(2019, 2, 1, 23, 0), "2019-02-01"),
    ("31/2/2020", None),
    ("hôm qua", None),
    ("", None),
    (None, None),
    (True, None),
])
def test_process_date(value, expected):
    assert process_date(value) == expected


def test_cell_text_normalises_numbers_and_blanks():
    assert cell_text(12.0) == "12"
    assert cell_text(" T01 ") == "T01"
    assert cell_text(None) is None


def test_workbook_rows_skip_header_and_blank_lines():
    content = build_workbook(["Số thẻ", "Ghi chú"], [["T1", "a"], [None, None], ["T2", None]], "Sheet")
    wb = load_workbook(BytesIO(content))
    assert wb.active.title == "Sheet"
    assert wb.active["A1"].font.bold

    rows = read_rows(BytesIO(content))
    assert [r[0] for r in rows] == ["T1", "T2"]

    dicts = read_dicts(BytesIO(content))
    assert dicts[0]["Số thẻ"] == "T1"
    assert dicts[1].get("Ghi chú") is None
