from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from services.grade_ledger import DUPLICATE_GRADE_MESSAGE, GradeLedger
from services.result import Conflict, Internal, NotFound
from services.store import is_unique_violation
from services.validator import validate_references
from tests.factories import make_grade, make_student


@pytest.fixture
def ledger(store):
    return GradeLedger(store)


def _create(ledger, student_id, course_id, score=90, semester="Fall", academic_year="2021-2022"):
    return ledger.create(student_id, course_id, score, semester, academic_year)


# ==========================================================
# 참조 검증
# ==========================================================

def test_references_ok(store, student, course):
    assert validate_references(store, student.id, course.id).ok


def test_missing_student_reported_before_missing_course(store):
    result = validate_references(store, 999, 999)
    assert not result.ok
    assert result.error == NotFound("student")
    assert result.error.message == "Student not found"


def test_missing_course(store, student):
    result = validate_references(store, student.id, 999)
    assert result.error == NotFound("course")
    assert result.error.status_code == 404


def test_create_with_unknown_student_and_course_names_student(ledger, store):
    result = _create(ledger, 41, 42)
    assert result.error.entity == "student"
    assert store.list_grades() == []


# ==========================================================
# 등록 / 중복
# ==========================================================

def test_create_grade(ledger, student, course):
    result = _create(ledger, student.id, course.id, score=90)

    assert result.ok
    grade = result.value
    assert grade.id is not None
    assert grade.score == 90
    assert grade.semester == "Fall"
    assert grade.academic_year == "2021-2022"
    assert grade.created_at is not None
    assert grade.updated_at is not None


def test_duplicate_grade_is_conflict_and_keeps_first(ledger, store, student, course):
    first = _create(ledger, student.id, course.id, score=75).value

    second = _create(ledger, student.id, course.id, score=40)

    assert not second.ok
    assert isinstance(second.error, Conflict)
    assert second.error.status_code == 409
    assert second.error.message == DUPLICATE_GRADE_MESSAGE

    grades = store.list_grades()
    assert [g.id for g in grades] == [first.id]
    assert grades[0].score == 75


def test_same_course_other_semester_is_allowed(ledger, student, course):
    assert _create(ledger, student.id, course.id, semester="Fall").ok
    assert _create(ledger, student.id, course.id, semester="Spring").ok
    assert _create(ledger, student.id, course.id, semester="Fall", academic_year="2022-2023").ok


def test_insert_failure_is_internal_without_driver_text(student, course, store):
    broken = MagicMock(wraps=store)
    broken.add.side_effect = OperationalError("INSERT ...", {}, Exception("disk I/O error"))

    result = GradeLedger(broken).create(student.id, course.id, 90, "Fall", "2021-2022")

    assert isinstance(result.error, Internal)
    assert result.error.status_code == 500
    assert result.error.message == "Error while creating the grade"
    assert "disk" not in result.error.message


# ==========================================================
# 조회
# ==========================================================

def test_get_all_and_by_student(ledger, store, student, course):
    other = make_student(store, number="67890")
    make_grade(store, student, course, 80)
    make_grade(store, other, course, 60)

    assert len(ledger.get_all().value) == 2
    assert [g.score for g in ledger.get_by_student(student.id).value] == [80]


def test_get_by_unknown_student_is_empty_not_error(ledger):
    result = ledger.get_by_student(12345)
    assert result.ok
    assert result.value == []


def test_listing_failure_is_internal():
    store = MagicMock()
    store.list_grades.side_effect = OperationalError("SELECT ...", {}, Exception("gone"))

    result = GradeLedger(store).get_all()

    assert result.error == Internal("Error while fetching grades", result.error.cause)


# ==========================================================
# 수정 / 삭제
# ==========================================================

def test_update_partial_fields(ledger, student, course):
    grade = _create(ledger, student.id, course.id, score=55).value

    result = ledger.update(grade.id, {"score": 65, "semester": None, "student_id": 99})

    assert result.ok
    assert result.value.score == 65
    assert result.value.semester == "Fall"
    assert result.value.student_id == student.id


def test_update_unknown_grade(ledger):
    result = ledger.update(999, {"score": 10})
    assert result.error == NotFound("grade")


def test_update_into_existing_tuple_is_conflict(ledger, store, student, course):
    _create(ledger, student.id, course.id, semester="Fall")
    spring = _create(ledger, student.id, course.id, semester="Spring").value

    result = ledger.update(spring.id, {"semester": "Fall"})

    assert isinstance(result.error, Conflict)
    store.session.expire_all()
    assert store.get_grade(spring.id).semester == "Spring"


def test_delete_grade(ledger, store, student, course):
    grade = _create(ledger, student.id, course.id).value

    assert ledger.delete(grade.id).ok
    assert store.get_grade(grade.id) is None


def test_delete_unknown_grade_does_not_touch_others(ledger, store, student, course):
    make_grade(store, student, course, 70)

    result = ledger.delete(999)

    assert result.error.message == "Grade not found"
    assert len(store.list_grades()) == 1


# ==========================================================
# 드라이버 에러 코드 판별
# ==========================================================

class _PgError(Exception):
    pgcode = "23505"


class _MySQLError(Exception):
    pass


@pytest.mark.parametrize(
    "orig, expected",
    [
        (_PgError("duplicate key value violates unique constraint"), True),
        (_MySQLError(1062, "Duplicate entry"), True),
        (_MySQLError(1452, "Cannot add or update a child row"), False),
        (Exception("UNIQUE constraint failed: courses.code"), True),
        (Exception("FOREIGN KEY constraint failed"), False),
    ],
)
def test_is_unique_violation(orig, expected):
    assert is_unique_violation(IntegrityError("INSERT ...", {}, orig)) is expected
