"""Result evaluation: per-subject percentages, totals and the pass/fail verdict."""

from collections.abc import Iterable
from decimal import Decimal

from app.schemas.result import ResultRecord, StudentResult, SubjectResultEntry
from app.schemas.student import StudentRecord
from app.schemas.subject import SubjectRecord
from app.services.grading import (
    FAIL_LABEL,
    PASSING_PERCENTAGE,
    calculate_percentage,
    effective_min_grade,
    grade_label,
    is_passing,
    to_decimal,
)


def evaluate(
    student: StudentRecord,
    subjects: Iterable[SubjectRecord],
    results: Iterable[ResultRecord],
    passing_percentage: int = PASSING_PERCENTAGE,
) -> StudentResult:
    """Evaluate a student's grades against the subjects of their section.

    A subject without a recorded grade scores 0. Results for subjects outside
    ``subjects`` are ignored, and when a subject has several results the first
    one counts.

    The student passes only when all three hold:
    - no administrative ``manual_fail``;
    - every subject grade reaches its effective min grade;
    - the overall percentage reaches ``passing_percentage``.
    """
    subjects = list(subjects)

    grades: dict[int, Decimal] = {}
    for result in results:
        grades.setdefault(result.subject_id, to_decimal(result.grade))

    entries: list[SubjectResultEntry] = []
    has_failed_subject = False
    total_grade = Decimal("0")
    max_total_grade = Decimal("0")

    for subject in subjects:
        grade = grades.get(subject.id, Decimal("0"))
        min_grade = effective_min_grade(subject)
        subject_passed = grade >= min_grade
        if not subject_passed:
            has_failed_subject = True

        total_grade += grade
        max_total_grade += to_decimal(subject.max_grade)

        entries.append(
            SubjectResultEntry(
                subject=subject,
                grade=grade,
                percentage=calculate_percentage(grade, subject.max_grade),
                min_grade=min_grade,
                passed=subject_passed,
            )
        )

    percentage = calculate_percentage(total_grade, max_total_grade)
    passed = (
        not student.manual_fail
        and not has_failed_subject
        and is_passing(percentage, passing_percentage)
    )

    return StudentResult(
        student=student,
        results=entries,
        total_grade=total_grade,
        max_total_grade=max_total_grade,
        percentage=percentage,
        has_failed_subject=has_failed_subject,
        passed=passed,
        grade_label=grade_label(percentage) if passed else FAIL_LABEL,
    )
