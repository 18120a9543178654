"""Upload processing service for result spreadsheets (Excel and CSV)."""

import csv
import logging
from collections.abc import Sequence
from io import BytesIO, StringIO
from typing import Any

from openpyxl import Workbook, load_workbook
from openpyxl.styles import Font
from sqlalchemy import select
from sqlalchemy.orm import Session

from app.core.exceptions import UploadError
from app.models.section import Section
from app.models.subject import Subject
from app.schemas.upload import ParsedRow, ParseResult, UploadResult
from app.services.reconciler import reconcile
from app.services.store import SqlImportStore

# Setup debug logger
logger = logging.getLogger(__name__)

SUBSCRIPTION_COLUMN = "رقم الاكتتاب"
NAME_COLUMN = "الاسم الكامل"
SECTION_COLUMN = "القسم"
REQUIRED_COLUMNS = [SUBSCRIPTION_COLUMN, NAME_COLUMN, SECTION_COLUMN]


def _cell_text(value: Any) -> str:
    """Render a cell as text; whole floats lose their trailing .0."""
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()


def rows_to_parse_result(raw_rows: Sequence[Sequence[Any]]) -> ParseResult:
    """Turn raw sheet rows (header first) into parsed rows.

    Every non-empty header that is not a required column is a subject column.
    Grade cells are passed through as read; the reconciler decides whether
    they are numeric.
    """
    if len(raw_rows) < 2:
        raise UploadError("The file is empty or has no data rows")

    headers = [_cell_text(h) for h in raw_rows[0]]
    logger.debug(f"[SPREADSHEET PARSE] Detected headers: {headers}")

    missing = [col for col in REQUIRED_COLUMNS if col not in headers]
    if missing:
        raise UploadError(
            f"Missing required columns: {', '.join(missing)}",
            details={"missing_columns": missing, "headers": headers},
        )

    subscription_index = headers.index(SUBSCRIPTION_COLUMN)
    name_index = headers.index(NAME_COLUMN)
    section_index = headers.index(SECTION_COLUMN)
    grade_columns = [
        (index, header)
        for index, header in enumerate(headers)
        if header and header not in REQUIRED_COLUMNS
    ]

    def cell(row: Sequence[Any], index: int) -> Any:
        return row[index] if index < len(row) else None

    rows: list[ParsedRow] = []
    errors: list[str] = []
    skipped_empty_rows = 0

    for row_num, row in enumerate(raw_rows[1:], start=2):
        if not row or all(_cell_text(value) == "" for value in row):
            skipped_empty_rows += 1
            continue

        subscription_number = _cell_text(cell(row, subscription_index))
        full_name = _cell_text(cell(row, name_index))
        section = _cell_text(cell(row, section_index))

        if not subscription_number or not full_name:
            logger.warning(f"[SPREADSHEET PARSE] Row {row_num} SKIPPED - missing subscription number or name")
            errors.append(f"Row {row_num}: missing data")
            continue

        grades = {}
        for index, header in grade_columns:
            value = cell(row, index)
            if _cell_text(value) != "":
                grades[header] = value

        rows.append(
            ParsedRow(
                subscription_number=subscription_number,
                full_name=full_name,
                section=section,
                grades=grades,
            )
        )

    logger.info(
        f"[SPREADSHEET PARSE] Summary: {len(rows)} rows parsed, {len(errors)} rejected, "
        f"{skipped_empty_rows} empty rows skipped"
    )
    return ParseResult(rows=rows, errors=errors, headers=headers)


class UploadService:
    """Result spreadsheet upload service."""

    def __init__(self, db: Session):
        self.db = db

    def process_results_upload(
        self,
        file_content: bytes,
        file_name: str,
    ) -> UploadResult:
        """
        Import students and grades from an Excel or CSV sheet.
        Best effort: failing rows and cells are reported, the rest is saved.
        """
        logger.info(f"[RESULTS UPLOAD] Starting upload for file: {file_name} ({len(file_content)} bytes)")

        parsed = self.parse_file(file_content, file_name)

        store = SqlImportStore(self.db)
        summary = reconcile(
            parsed.rows,
            store.list_sections(),
            store.list_subjects(),
            store,
        )

        result = UploadResult(
            file_name=file_name,
            total_rows=len(parsed.rows) + len(parsed.errors),
            parse_errors=parsed.errors,
            students_added=summary.students_added,
            results_added=summary.results_added,
            errors=summary.errors,
            message="",
        )
        result.message = self._get_result_message(result)
        logger.info(f"[RESULTS UPLOAD] {result.message}")
        return result

    def parse_file(self, file_content: bytes, file_name: str) -> ParseResult:
        """Pick the parser from the file extension."""
        extension = file_name.rsplit(".", 1)[-1].lower() if "." in file_name else ""
        if extension == "xlsx":
            return rows_to_parse_result(self._read_excel(file_content))
        if extension == "csv":
            return rows_to_parse_result(self._read_csv(file_content))
        raise UploadError("Unsupported file type. Use Excel (.xlsx) or CSV (.csv)")

    def _read_excel(self, file_content: bytes) -> list[tuple]:
        try:
            workbook = load_workbook(filename=BytesIO(file_content), read_only=True, data_only=True)
        except Exception as e:
            raise UploadError(f"Failed to read Excel file: {str(e)}")

        sheet = workbook.active
        if sheet is None:
            raise UploadError("Excel file has no active sheet")

        rows = list(sheet.iter_rows(values_only=True))
        workbook.close()
        logger.debug(f"[SPREADSHEET PARSE] Total raw rows in Excel (including header): {len(rows)}")
        return rows

    def _read_csv(self, file_content: bytes) -> list[list[str]]:
        try:
            text = file_content.decode("utf-8-sig")
        except UnicodeDecodeError:
            raise UploadError("CSV file must be UTF-8 encoded")
        rows = list(csv.reader(StringIO(text)))
        logger.debug(f"[SPREADSHEET PARSE] Total raw rows in CSV (including header): {len(rows)}")
        return rows

    def generate_template(self) -> bytes:
        """Generate an Excel template with the required columns and configured subjects."""
        subject_names: list[str] = []
        for name in self.db.execute(select(Subject.name).order_by(Subject.section_id, Subject.id)).scalars():
            if name not in subject_names:
                subject_names.append(name)
        first_section = self.db.execute(select(Section.name).order_by(Section.id).limit(1)).scalar()

        wb = Workbook()
        ws = wb.active
        ws.title = "النتائج"
        ws.sheet_view.rightToLeft = True

        headers = REQUIRED_COLUMNS + subject_names
        for col_idx, header in enumerate(headers, start=1):
            cell = ws.cell(row=1, column=col_idx, value=header)
            cell.font = Font(bold=True)
            ws.column_dimensions[cell.column_letter].width = 18

        # Sample row
        sample = ["123456", "اسم الطالب", first_section or ""]
        for col_idx, value in enumerate(sample, start=1):
            ws.cell(row=2, column=col_idx, value=value)

        output = BytesIO()
        wb.save(output)
        output.seek(0)
        return output.getvalue()

    def _get_result_message(self, result: UploadResult) -> str:
        """Generate result message for upload."""
        message = (
            f"Imported {result.students_added} new students and "
            f"{result.results_added} grades from {result.total_rows} rows."
        )
        problems = len(result.errors) + len(result.parse_errors)
        if problems:
            message += f" {problems} problems reported."
        return message
