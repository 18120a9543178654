"""Reconciliation of parsed result-sheet rows against sections, subjects and students."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from decimal import Decimal
from typing import Protocol

from app.core.exceptions import AppException
from app.schemas.result import ResultRecord
from app.schemas.section import SectionRecord
from app.schemas.student import StudentCreate, StudentRecord
from app.schemas.subject import SubjectRecord
from app.schemas.upload import ImportSummary, ParsedRow
from app.services.grading import parse_grade

logger = logging.getLogger(__name__)


class ImportStore(Protocol):
    """Store operations the importer needs.

    Lookups return None when nothing matches. Writes raise on failure; the
    reconciler catches each failure on its own.
    """

    def find_student_by_subscription_number(self, value: str) -> StudentRecord | None: ...

    def create_student(self, data: StudentCreate) -> StudentRecord: ...

    def find_result(self, student_id: int, subject_id: int) -> ResultRecord | None: ...

    def create_result(self, student_id: int, subject_id: int, grade: Decimal) -> ResultRecord: ...

    def update_result(self, result_id: int, grade: Decimal) -> None: ...


@dataclass(frozen=True)
class StagedGrade:
    """Grade waiting for its student to exist."""

    subscription_number: str
    subject_id: int
    subject_name: str
    grade: Decimal


def _describe(exc: Exception) -> str:
    if isinstance(exc, AppException):
        return exc.message
    return str(exc) or exc.__class__.__name__


def reconcile(
    rows: Iterable[ParsedRow],
    sections: Iterable[SectionRecord],
    subjects: Iterable[SubjectRecord],
    store: ImportStore,
) -> ImportSummary:
    """Create missing students and upsert grades for parsed rows.

    Rows are resolved in input order against ``sections`` and ``subjects``,
    which are read once by the caller. Pre-existing students are never
    modified. Students are created first, then grades are written, because a
    grade needs its student's generated id. Every failure is recorded in
    ``errors`` and processing moves on to the next item; nothing is rolled
    back and no exception reaches the caller.
    """
    errors: list[str] = []

    sections_by_name: dict[str, SectionRecord] = {}
    for section in sections:
        sections_by_name.setdefault(section.name, section)

    subjects_by_key: dict[tuple[int, str], SubjectRecord] = {}
    for subject in subjects:
        subjects_by_key.setdefault((subject.section_id, subject.name), subject)

    known_students: dict[str, StudentRecord] = {}
    staged_students: list[StudentCreate] = []
    staged_grades: list[StagedGrade] = []

    rows = list(rows)
    logger.info(f"[IMPORT] Reconciling {len(rows)} rows against {len(sections_by_name)} sections")

    for row in rows:
        subscription_number = row.subscription_number

        section = sections_by_name.get(row.section)
        if section is None:
            logger.warning(f"[IMPORT] Row {subscription_number} SKIPPED - unknown section {row.section!r}")
            errors.append(f'Row {subscription_number}: section "{row.section}" not found')
            continue

        try:
            existing = store.find_student_by_subscription_number(subscription_number)
        except Exception as e:
            logger.warning(f"[IMPORT] Row {subscription_number} SKIPPED - student lookup failed: {_describe(e)}")
            errors.append(f"Row {subscription_number}: student lookup failed: {_describe(e)}")
            continue

        if existing is not None:
            # Additive only: name and section changes for known students are ignored
            known_students[subscription_number] = existing
        else:
            try:
                staged_students.append(
                    StudentCreate(
                        subscription_number=subscription_number,
                        full_name=row.full_name,
                        section_id=section.id,
                        certificate_type_id=section.certificate_type_id,
                    )
                )
            except ValueError as e:
                logger.warning(f"[IMPORT] Row {subscription_number} SKIPPED - invalid student data: {e}")
                errors.append(f"Row {subscription_number}: invalid student data")
                continue

        for subject_name, raw_grade in row.grades.items():
            subject = subjects_by_key.get((section.id, subject_name))
            if subject is None:
                logger.debug(f"[IMPORT] Row {subscription_number}: column {subject_name!r} is not a subject of {section.name!r}")
                continue
            grade = parse_grade(raw_grade)
            if grade is None:
                logger.debug(f"[IMPORT] Row {subscription_number}: non-numeric grade {raw_grade!r} for {subject_name!r} dropped")
                continue
            staged_grades.append(
                StagedGrade(
                    subscription_number=subscription_number,
                    subject_id=subject.id,
                    subject_name=subject.name,
                    grade=grade,
                )
            )

    # Phase A: students
    students_added = 0
    for data in staged_students:
        try:
            student = store.create_student(data)
        except Exception as e:
            logger.warning(f"[IMPORT] Student {data.subscription_number} FAILED - {_describe(e)}")
            errors.append(f"Failed to add student {data.subscription_number}: {_describe(e)}")
            continue
        known_students.setdefault(student.subscription_number, student)
        students_added += 1

    # Phase B: grades
    results_added = 0
    for staged in staged_grades:
        student = known_students.get(staged.subscription_number)
        if student is None:
            try:
                student = store.find_student_by_subscription_number(staged.subscription_number)
            except Exception as e:
                logger.warning(f"[IMPORT] Student {staged.subscription_number} lookup failed: {_describe(e)}")
                student = None
            if student is not None:
                known_students[staged.subscription_number] = student

        if student is None:
            errors.append(
                f'Row {staged.subscription_number}: grade for "{staged.subject_name}" skipped, student not found'
            )
            continue

        try:
            existing_result = store.find_result(student.id, staged.subject_id)
            if existing_result is not None:
                store.update_result(existing_result.id, staged.grade)
            else:
                store.create_result(student.id, staged.subject_id, staged.grade)
        except Exception as e:
            logger.warning(f"[IMPORT] Grade {staged.subscription_number}/{staged.subject_name} FAILED - {_describe(e)}")
            errors.append(
                f'Failed to save grade of student {staged.subscription_number} in "{staged.subject_name}": {_describe(e)}'
            )
            continue
        results_added += 1

    logger.info(
        f"[IMPORT] Complete - students added: {students_added}, results saved: {results_added}, errors: {len(errors)}"
    )
    return ImportSummary(
        students_added=students_added,
        results_added=results_added,
        errors=errors,
    )
