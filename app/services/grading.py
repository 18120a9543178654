"""Shared grade arithmetic used by the evaluator, the importer and grade entry."""

import math
from decimal import Decimal, InvalidOperation
from typing import Any

from app.schemas.subject import SubjectRecord

PASSING_PERCENTAGE = 50

# Arabic-Indic and Eastern Arabic-Indic digits
_DIGIT_TRANSLATION = str.maketrans(
    "٠١٢٣٤٥٦٧٨٩۰۱۲۳۴۵۶۷۸۹٫",
    "01234567890123456789.",
)

# (lower bound, label), checked top down
GRADE_LABELS = [
    (90, "ممتاز"),
    (80, "جيد جداً"),
    (70, "جيد"),
    (60, "مقبول"),
    (50, "ناجح"),
]
FAIL_LABEL = "راسب"


def normalize_digits(text: str) -> str:
    """Replace Arabic-Indic digits with ASCII ones."""
    return text.translate(_DIGIT_TRANSLATION)


def to_decimal(value: Any) -> Decimal:
    """Convert an int, float, str or Decimal to Decimal without float noise."""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def calculate_percentage(value: Any, maximum: Any) -> Decimal:
    """Return value / maximum * 100, or 0 when maximum is 0."""
    maximum = to_decimal(maximum)
    if maximum == 0:
        return Decimal("0")
    return to_decimal(value) / maximum * 100


def effective_min_grade(subject: SubjectRecord) -> Decimal:
    """Passing threshold of a subject: its min_grade, else floor(max_grade * 0.5)."""
    if subject.min_grade is not None:
        return to_decimal(subject.min_grade)
    return Decimal(math.floor(to_decimal(subject.max_grade) * Decimal("0.5")))


def is_passing(percentage: Any, passing_rate: int = PASSING_PERCENTAGE) -> bool:
    return to_decimal(percentage) >= passing_rate


def parse_grade(value: Any) -> Decimal | None:
    """Parse a spreadsheet cell into a finite grade.

    Returns None for blank, non-numeric, negative, NaN and infinite cells;
    booleans are not grades either.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float, Decimal)):
        text = str(value)
    else:
        text = normalize_digits(str(value).strip())
        if not text:
            return None
    try:
        grade = Decimal(text)
    except InvalidOperation:
        return None
    if not grade.is_finite() or grade < 0:
        return None
    return grade


def grade_label(percentage: Any) -> str:
    """Display label for an overall percentage."""
    percentage = to_decimal(percentage)
    for lower_bound, label in GRADE_LABELS:
        if percentage >= lower_bound:
            return label
    return FAIL_LABEL
