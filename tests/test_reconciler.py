from datetime import datetime, timezone
from decimal import Decimal

import pytest

from app.core.exceptions import ConflictError
from app.schemas.result import ResultRecord
from app.schemas.section import SectionRecord
from app.schemas.student import StudentCreate, StudentRecord
from app.schemas.subject import SubjectRecord
from app.schemas.upload import ParsedRow
from app.services.reconciler import reconcile

SECTIONS = [
    SectionRecord(id=1, name="علمي", certificate_type_id=7),
    SectionRecord(id=2, name="أدبي"),
]
SUBJECTS = [
    SubjectRecord(id=10, name="رياضيات", section_id=1, max_grade=Decimal("300"), min_grade=Decimal("150")),
    SubjectRecord(id=11, name="فيزياء", section_id=1, max_grade=Decimal("200"), min_grade=Decimal("100")),
    SubjectRecord(id=20, name="تاريخ", section_id=2, max_grade=Decimal("100"), min_grade=Decimal("50")),
]


class MemoryStore:
    """In-memory import store; failures can be injected per subscription number."""

    def __init__(self):
        self.students: dict[str, StudentRecord] = {}
        self.results: dict[int, ResultRecord] = {}
        self.failing_students: set[str] = set()
        self.failing_grades: set[tuple[int, int]] = set()
        self._next_id = 1

    def _id(self) -> int:
        value = self._next_id
        self._next_id += 1
        return value

    def add_student(self, subscription_number, full_name="قديم", section_id=1):
        record = StudentRecord(
            id=self._id(),
            subscription_number=subscription_number,
            full_name=full_name,
            section_id=section_id,
            created_at=datetime.now(timezone.utc),
        )
        self.students[subscription_number] = record
        return record

    def find_student_by_subscription_number(self, value):
        return self.students.get(value)

    def create_student(self, data: StudentCreate):
        if data.subscription_number in self.failing_students:
            raise RuntimeError("connection lost")
        if data.subscription_number in self.students:
            raise ConflictError(f"Subscription number {data.subscription_number} already exists")
        record = StudentRecord(id=self._id(), **data.model_dump())
        self.students[data.subscription_number] = record
        return record

    def find_result(self, student_id, subject_id):
        for record in self.results.values():
            if record.student_id == student_id and record.subject_id == subject_id:
                return record
        return None

    def create_result(self, student_id, subject_id, grade):
        if (student_id, subject_id) in self.failing_grades:
            raise RuntimeError("constraint violated")
        record = ResultRecord(id=self._id(), student_id=student_id, subject_id=subject_id, grade=grade)
        self.results[record.id] = record
        return record

    def update_result(self, result_id, grade):
        self.results[result_id] = self.results[result_id].model_copy(update={"grade": grade})

    def grades_of(self, subscription_number):
        student = self.students[subscription_number]
        return {r.subject_id: r.grade for r in self.results.values() if r.student_id == student.id}


@pytest.fixture
def store():
    return MemoryStore()


def row(number, section="علمي", name="طالب", **grades):
    return ParsedRow(subscription_number=number, full_name=name, section=section, grades=grades)


def test_creates_students_then_grades(store):
    rows = [
        row("1001", **{"رياضيات": 160, "فيزياء": "90"}),
        row("1002", section="أدبي", **{"تاريخ": 70}),
    ]
    summary = reconcile(rows, SECTIONS, SUBJECTS, store)

    assert summary.students_added == 2
    assert summary.results_added == 3
    assert summary.errors == []
    assert store.grades_of("1001") == {10: Decimal("160"), 11: Decimal("90")}
    assert store.students["1001"].certificate_type_id == 7
    assert store.students["1002"].section_id == 2


def test_unknown_section_reports_one_error(store):
    summary = reconcile(
        [ParsedRow(subscription_number="999", full_name="X", section="غير موجود", grades={})],
        SECTIONS,
        SUBJECTS,
        store,
    )
    assert summary.students_added == 0
    assert summary.results_added == 0
    assert len(summary.errors) == 1
    assert "غير موجود" in summary.errors[0]
    assert "999" in summary.errors[0]
    assert store.students == {}


def test_reimport_overwrites_grades(store):
    rows = [row("1001", **{"رياضيات": 160, "فيزياء": 90})]
    first = reconcile(rows, SECTIONS, SUBJECTS, store)
    second = reconcile([row("1001", **{"رياضيات": 200, "فيزياء": 90})], SECTIONS, SUBJECTS, store)

    assert first.results_added == 2
    assert second.students_added == 0
    assert second.results_added == 2
    assert len(store.results) == 2
    assert store.grades_of("1001")[10] == Decimal("200")


def test_non_numeric_grade_dropped_silently(store):
    summary = reconcile([row("1001", **{"رياضيات": "غائب", "فيزياء": 95})], SECTIONS, SUBJECTS, store)
    assert summary.errors == []
    assert summary.results_added == 1
    assert store.grades_of("1001") == {11: Decimal("95")}


def test_subject_of_other_section_dropped(store):
    summary = reconcile([row("1001", **{"تاريخ": 80, "موسيقى": 50})], SECTIONS, SUBJECTS, store)
    assert summary.students_added == 1
    assert summary.results_added == 0
    assert summary.errors == []


def test_existing_student_is_not_modified(store):
    existing = store.add_student("1001", full_name="الاسم القديم", section_id=1)
    summary = reconcile(
        [row("1001", name="اسم جديد", **{"رياضيات": 150})],
        SECTIONS,
        SUBJECTS,
        store,
    )
    assert summary.students_added == 0
    assert summary.results_added == 1
    assert store.students["1001"] == existing


def test_failed_student_creation_is_isolated(store):
    store.failing_students.add("1002")
    rows = [
        row("1001", **{"رياضيات": 160}),
        row("1002", **{"رياضيات": 170}),
        row("1003", **{"رياضيات": 180}),
    ]
    summary = reconcile(rows, SECTIONS, SUBJECTS, store)

    assert summary.students_added == 2
    assert summary.results_added == 2
    assert summary.errors[0] == "Failed to add student 1002: connection lost"
    assert 'grade for "رياضيات" skipped, student not found' in summary.errors[1]
    assert set(store.students) == {"1001", "1003"}


def test_failed_grade_write_is_isolated(store):
    student = store.add_student("1001")
    store.failing_grades.add((student.id, 10))
    summary = reconcile([row("1001", **{"رياضيات": 160, "فيزياء": 120})], SECTIONS, SUBJECTS, store)

    assert summary.results_added == 1
    assert len(summary.errors) == 1
    assert summary.errors[0].startswith("Failed to save grade of student 1001")
    assert store.grades_of("1001") == {11: Decimal("120")}


def test_duplicate_rows_in_one_batch(store):
    rows = [
        row("1001", **{"رياضيات": 160}),
        row("1001", **{"فيزياء": 120}),
    ]
    summary = reconcile(rows, SECTIONS, SUBJECTS, store)

    assert summary.students_added == 1
    assert summary.results_added == 2
    assert summary.errors == ["Failed to add student 1001: Subscription number 1001 already exists"]
    assert store.grades_of("1001") == {10: Decimal("160"), 11: Decimal("120")}


def test_errors_keep_encounter_order(store):
    store.failing_students.add("1003")
    rows = [
        row("1001", section="مجهول"),
        row("1002", section="آخر"),
        row("1003"),
    ]
    summary = reconcile(rows, SECTIONS, SUBJECTS, store)
    assert [e.split(":")[0] for e in summary.errors] == ["Row 1001", "Row 1002", "Failed to add student 1003"]


def test_empty_section_list_rejects_every_row(store):
    summary = reconcile([row("1001"), row("1002")], [], SUBJECTS, store)
    assert summary.students_added == 0
    assert len(summary.errors) == 2


def test_store_failures_are_logged_by_message(store, caplog):
    rows = [row("1001", **{"رياضيات": 160}), row("1001", **{"فيزياء": 120})]
    with caplog.at_level("WARNING", logger="app.services.reconciler"):
        reconcile(rows, SECTIONS, SUBJECTS, store)

    warnings = [r.getMessage() for r in caplog.records if r.levelname == "WARNING"]
    assert warnings == ["[IMPORT] Student 1001 FAILED - Subscription number 1001 already exists"]
