"""Spreadsheet import schemas."""

from typing import Any

from app.schemas.common import BaseSchema


class ParsedRow(BaseSchema):
    """One spreadsheet row, normalised by the parser.

    ``section`` is the section *name* and ``grades`` maps subject names to raw
    cell values; both are resolved by the reconciler.
    """

    subscription_number: str
    full_name: str
    section: str
    grades: dict[str, Any] = {}


class ParseResult(BaseSchema):
    """Outcome of reading a spreadsheet."""

    rows: list[ParsedRow] = []
    errors: list[str] = []
    headers: list[str] = []


class ImportSummary(BaseSchema):
    """Outcome of reconciling parsed rows against the store."""

    students_added: int = 0
    results_added: int = 0
    errors: list[str] = []


class UploadResult(ImportSummary):
    """Result of a results-sheet upload."""

    file_name: str
    total_rows: int
    parse_errors: list[str] = []
    message: str
