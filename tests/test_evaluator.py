from decimal import Decimal

from app.schemas.result import ResultRecord
from app.schemas.student import StudentRecord
from app.schemas.subject import SubjectRecord
from app.services.evaluator import evaluate
from app.services.grading import FAIL_LABEL

MATH = SubjectRecord(id=1, name="رياضيات", section_id=1, max_grade=Decimal("300"), min_grade=Decimal("150"))
PHYSICS = SubjectRecord(id=2, name="فيزياء", section_id=1, max_grade=Decimal("200"), min_grade=Decimal("100"))


def make_student(manual_fail=False):
    return StudentRecord(id=1, subscription_number="123456", full_name="طالب", section_id=1, manual_fail=manual_fail)


def make_results(*grades):
    return [
        ResultRecord(id=index, student_id=1, subject_id=subject_id, grade=Decimal(str(grade)))
        for index, (subject_id, grade) in enumerate(grades, start=1)
    ]


def test_failed_subject_fails_despite_passing_percentage():
    result = evaluate(make_student(), [MATH, PHYSICS], make_results((1, 160), (2, 90)))

    math_entry, physics_entry = result.results
    assert round(math_entry.percentage, 2) == Decimal("53.33")
    assert physics_entry.percentage == Decimal("45")
    assert math_entry.passed
    assert not physics_entry.passed
    assert result.total_grade == Decimal("250")
    assert result.max_total_grade == Decimal("500")
    assert result.percentage == Decimal("50")
    assert result.has_failed_subject
    assert result.passed is False
    assert result.grade_label == FAIL_LABEL


def test_percentage_serializes_with_two_decimals():
    result = evaluate(make_student(), [MATH, PHYSICS], make_results((1, 160), (2, 90)))
    data = result.model_dump(mode="json")
    assert data["results"][0]["percentage"] == 53.33
    assert data["percentage"] == 50.0


def test_all_conditions_met_passes():
    result = evaluate(make_student(), [MATH, PHYSICS], make_results((1, 200), (2, 150)))
    assert result.passed
    assert result.grade_label == "جيد"


def test_manual_fail_alone_fails():
    result = evaluate(make_student(manual_fail=True), [MATH, PHYSICS], make_results((1, 200), (2, 150)))
    assert not result.has_failed_subject
    assert result.passed is False
    assert result.grade_label == FAIL_LABEL


def test_overall_percentage_alone_fails():
    # Both subjects at their minimum; 250/500 passes, lower minimums do not
    low_math = MATH.model_copy(update={"min_grade": Decimal("100")})
    low_physics = PHYSICS.model_copy(update={"min_grade": Decimal("50")})
    result = evaluate(make_student(), [low_math, low_physics], make_results((1, 120), (2, 80)))
    assert not result.has_failed_subject
    assert result.percentage == Decimal("40")
    assert result.passed is False


def test_configurable_passing_percentage():
    result = evaluate(make_student(), [MATH, PHYSICS], make_results((1, 180), (2, 120)), passing_percentage=70)
    assert not result.has_failed_subject
    assert result.passed is False


def test_missing_grade_counts_as_zero():
    result = evaluate(make_student(), [MATH, PHYSICS], make_results((1, 300)))
    physics_entry = result.results[1]
    assert physics_entry.grade == Decimal("0")
    assert physics_entry.percentage == Decimal("0")
    assert not physics_entry.passed
    assert result.has_failed_subject


def test_missing_grade_with_zero_minimum_does_not_fail_subject():
    optional = SubjectRecord(id=3, name="نشاط", section_id=1, max_grade=Decimal("50"), min_grade=Decimal("0"))
    result = evaluate(make_student(), [MATH, optional], make_results((1, 200)))
    assert result.results[1].passed
    assert not result.has_failed_subject


def test_default_min_grade_used_when_unset():
    subject = SubjectRecord(id=4, name="جغرافيا", section_id=1, max_grade=Decimal("75"))
    result = evaluate(make_student(), [subject], make_results((4, 37)))
    assert result.results[0].min_grade == Decimal("37")
    assert result.results[0].passed


def test_first_duplicate_result_wins_and_foreign_results_ignored():
    results = make_results((1, 200), (1, 10), (99, 1000))
    result = evaluate(make_student(), [MATH], results)
    assert result.results[0].grade == Decimal("200")
    assert result.total_grade == Decimal("200")


def test_zero_max_grade_does_not_divide_by_zero():
    empty = SubjectRecord(id=5, name="بدون", section_id=1, max_grade=Decimal("0"), min_grade=Decimal("0"))
    result = evaluate(make_student(), [empty], [])
    assert result.results[0].percentage == Decimal("0")
    assert result.percentage == Decimal("0")
    assert result.passed is False


def test_no_subjects():
    result = evaluate(make_student(), [], [])
    assert result.results == []
    assert result.total_grade == Decimal("0")
    assert result.passed is False
