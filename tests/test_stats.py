from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from services.grade_ledger import GradeLedger
from services.result import Internal, NotFound
from services.stats import StatsAggregator
from tests.factories import make_course, make_grade, make_student

PASS = 50.0


@pytest.fixture
def stats(store):
    return StatsAggregator(store, pass_threshold=PASS, decimals=2)


# ==========================================================
# 과목별
# ==========================================================

def test_course_stats(stats, store, course):
    for number, score in (("1", 70), ("2", 85), ("3", 95)):
        make_grade(store, make_student(store, number=number), course, score)

    result = stats.course_stats(course.id)

    assert result.ok
    data = result.value
    assert data.course_code == "CS101"
    assert data.course_name == "Computer Science 101"
    assert data.average_score == pytest.approx(83.33)
    assert data.min_score == 70
    assert data.max_score == 95
    assert data.total_students == 3
    assert data.success_rate == 100.0


def test_course_success_rate_counts_threshold_as_pass(stats, store, course):
    for number, score in (("1", 49.5), ("2", 50), ("3", 80), ("4", 10)):
        make_grade(store, make_student(store, number=number), course, score)

    assert stats.course_stats(course.id).value.success_rate == 50.0


def test_course_stats_filtered_by_year(stats, store, student, course):
    make_grade(store, student, course, 40, academic_year="2021-2022")
    make_grade(store, student, course, 90, academic_year="2022-2023")

    data = stats.course_stats(course.id, "2022-2023").value

    assert data.average_score == 90
    assert data.success_rate == 100.0


def test_course_without_grades_is_not_found(stats, course):
    result = stats.course_stats(course.id)
    assert result.error == NotFound("course", "Course not found")


def test_unknown_course_is_not_found(stats):
    assert stats.course_stats(404).error.status_code == 404


def test_course_year_filter_matching_nothing_is_not_found(stats, store, student, course):
    make_grade(store, student, course, 70)
    assert stats.course_stats(course.id, "1999-2000").error.message == "Course not found"


def test_course_stats_storage_failure():
    store = MagicMock()
    store.course_grade_summary.side_effect = OperationalError("SELECT", {}, Exception("timeout"))

    result = StatsAggregator(store, PASS).course_stats(1)

    assert isinstance(result.error, Internal)
    assert result.error.message == "Error while computing course statistics"


# ==========================================================
# 학생-학기별
# ==========================================================

def _seed_two_years(store, student):
    math = make_course(store, code="MA101", name="Mathematics", credits=4)
    phys = make_course(store, code="PH101", name="Physics", credits=3)
    chem = make_course(store, code="CH101", name="Chemistry", credits=2)
    make_grade(store, student, math, 80, "Spring", "2021-2022")
    make_grade(store, student, phys, 40, "Spring", "2021-2022")
    make_grade(store, student, chem, 60, "Fall", "2022-2023")
    make_grade(store, student, math, 55, "Fall", "2021-2022")
    make_grade(store, student, phys, 90, "Summer", "2021-2022")
    return math, phys, chem


def test_student_semester_stats_are_chronological(stats, store, student):
    _seed_two_years(store, student)

    result = stats.student_semester_stats(student.id)

    assert [(s.academic_year, s.semester) for s in result.value] == [
        ("2021-2022", "Fall"),
        ("2021-2022", "Spring"),
        ("2021-2022", "Summer"),
        ("2022-2023", "Fall"),
    ]


def test_student_semester_subtotals(stats, store, student):
    _seed_two_years(store, student)

    spring = stats.student_semester_stats(student.id).value[1]

    assert spring.semester == "Spring"
    assert spring.average_score == 60.0
    assert spring.total_credits == 7
    assert spring.validated_credits == 4
    assert spring.courses_count == 2


def test_semester_course_counts_add_up_to_student_grades(stats, store, student):
    _seed_two_years(store, student)

    semesters = stats.student_semester_stats(student.id).value
    grades = GradeLedger(store).get_by_student(student.id).value

    assert sum(s.courses_count for s in semesters) == len(grades)


def test_student_semester_stats_filtered_by_year(stats, store, student):
    _seed_two_years(store, student)

    result = stats.student_semester_stats(student.id, "2022-2023")

    assert len(result.value) == 1
    assert result.value[0].validated_credits == 2


def test_student_without_grades_is_not_found(stats, student):
    result = stats.student_semester_stats(student.id)
    assert result.error.message == "Student semester stats not found"


def test_student_year_filter_matching_nothing_is_not_found(stats, store, student, course):
    make_grade(store, student, course, 70)
    assert stats.student_semester_stats(student.id, "2030-2031").error.status_code == 404


# ==========================================================
# 전체
# ==========================================================

def test_global_stats(stats, store):
    alice = make_student(store, number="A1")
    bob = make_student(store, number="B2")
    algo = make_course(store, code="CS201", name="Algorithms")
    db = make_course(store, code="CS202", name="Databases")
    make_grade(store, alice, algo, 80)
    make_grade(store, bob, algo, 40)
    make_grade(store, alice, db, 60)

    data = stats.global_stats().value

    assert data.global_average == 60.0
    assert data.total_students == 2
    assert data.total_courses == 2
    # (50% + 100%) / 2
    assert data.average_success_rate == 75.0


def test_global_stats_filtered_by_year(stats, store, student, course):
    make_grade(store, student, course, 30, academic_year="2020-2021")
    make_grade(store, student, course, 70, academic_year="2021-2022")

    data = stats.global_stats("2021-2022").value

    assert data.global_average == 70.0
    assert data.average_success_rate == 100.0


def test_global_stats_without_data_is_not_found(stats):
    result = stats.global_stats()
    assert result.error == NotFound("stats", "Global stats not found")


def test_global_year_filter_matching_nothing_is_not_found(stats, store, student, course):
    make_grade(store, student, course, 70)
    assert stats.global_stats("1990-1991").error.status_code == 404
