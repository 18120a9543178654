from io import BytesIO

import pytest
from openpyxl import Workbook

from app.core.exceptions import UploadError
from app.services.upload import REQUIRED_COLUMNS, UploadService, rows_to_parse_result

HEADERS = REQUIRED_COLUMNS + ["رياضيات", "فيزياء"]


def xlsx_bytes(rows):
    wb = Workbook()
    ws = wb.active
    for values in rows:
        ws.append(values)
    output = BytesIO()
    wb.save(output)
    return output.getvalue()


def test_rows_become_parsed_rows():
    result = rows_to_parse_result([
        HEADERS,
        [123456.0, "أحمد علي", "علمي", 160, "غائب"],
    ])
    assert result.errors == []
    assert len(result.rows) == 1
    parsed = result.rows[0]
    assert parsed.subscription_number == "123456"
    assert parsed.full_name == "أحمد علي"
    assert parsed.section == "علمي"
    assert parsed.grades == {"رياضيات": 160, "فيزياء": "غائب"}


def test_blank_grade_cells_are_left_out():
    result = rows_to_parse_result([HEADERS, ["1001", "سارة", "علمي", None, "  "]])
    assert result.rows[0].grades == {}


def test_rows_missing_identity_are_reported_and_empty_rows_skipped():
    result = rows_to_parse_result([
        HEADERS,
        ["", "بلا رقم", "علمي", 100, 100],
        [None, None, None, None, None],
        ["1002", "", "علمي", 100, 100],
        ["1003", "مكتمل", "علمي", 100, 100],
    ])
    assert [r.subscription_number for r in result.rows] == ["1003"]
    assert result.errors == ["Row 2: missing data", "Row 4: missing data"]


def test_missing_required_column_rejects_file():
    with pytest.raises(UploadError) as exc_info:
        rows_to_parse_result([["رقم الاكتتاب", "القسم"], ["1001", "علمي"]])
    assert exc_info.value.details["missing_columns"] == ["الاسم الكامل"]


def test_header_only_file_rejected():
    with pytest.raises(UploadError):
        rows_to_parse_result([HEADERS])


def test_parse_excel_file():
    content = xlsx_bytes([HEADERS, [1001, "أحمد", "علمي", 150, 95.5]])
    result = UploadService(db=None).parse_file(content, "results.XLSX")
    assert result.rows[0].subscription_number == "1001"
    assert result.rows[0].grades == {"رياضيات": 150, "فيزياء": 95.5}


def test_parse_csv_file_with_bom():
    text = ",".join(HEADERS) + "\n1001,أحمد,علمي,150,٩٥\n"
    result = UploadService(db=None).parse_file(text.encode("utf-8-sig"), "results.csv")
    assert result.rows[0].grades == {"رياضيات": "150", "فيزياء": "٩٥"}


def test_unsupported_extension_rejected():
    with pytest.raises(UploadError):
        UploadService(db=None).parse_file(b"data", "results.xls")


def test_corrupt_excel_rejected():
    with pytest.raises(UploadError):
        UploadService(db=None).parse_file(b"not a zip", "results.xlsx")
