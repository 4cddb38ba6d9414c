"""
services/stats.py

성적 통계 (읽기 전용, 캐시 없음 — 요청마다 다시 계산)
1) 과목별: 평균/최저/최고/학생 수/성공률
2) 학생-학기별: 평균/수강 학점/이수 학점/과목 수
3) 전체: 평균/학생 수/과목 수/과목별 성공률의 평균

결과가 0건이면(필터가 아무것도 못 찾은 경우 포함) 0으로 채운 통계 대신 NotFound.
"""

import logging
from typing import Iterable, List, Optional, Tuple

from sqlalchemy.exc import SQLAlchemyError

from models.courses import Course
from models.grades import Grade
from schemas.stats import CourseStats, GlobalStats, StudentSemesterStats
from services.result import Err, Internal, NotFound, Ok, Result
from services.store import EntityStore

logger = logging.getLogger(__name__)

# 한 학년도 안에서의 학기 순서 (가을 → 봄 → 여름)
SEMESTER_ORDER = {"Fall": 0, "Spring": 1, "Summer": 2}


def semester_sort_key(academic_year: str, semester: str) -> Tuple[str, int]:
    return academic_year, SEMESTER_ORDER.get(semester, len(SEMESTER_ORDER))


def summarize_semesters(
    rows: Iterable[Tuple[Grade, Course]], pass_threshold: float, decimals: int = 2
) -> List[StudentSemesterStats]:
    """
    (성적, 과목) 목록을 (학년도, 학기) 단위로 묶어 소계 계산.
    통계 API와 성적증명서가 같은 함수를 사용 → 두 결과의 소계가 항상 일치.
    """
    groups = {}
    for grade, course in rows:
        groups.setdefault((grade.academic_year, grade.semester), []).append((grade, course))

    result = []
    for academic_year, semester in sorted(groups, key=lambda k: semester_sort_key(*k)):
        items = groups[(academic_year, semester)]
        scores = [g.score for g, _ in items]
        result.append(
            StudentSemesterStats(
                academic_year=academic_year,
                semester=semester,
                average_score=round(sum(scores) / len(scores), decimals),
                total_credits=sum(c.credits for _, c in items),
                validated_credits=sum(c.credits for g, c in items if g.score >= pass_threshold),
                courses_count=len(items),
            )
        )
    return result


class StatsAggregator:
    def __init__(self, store: EntityStore, pass_threshold: float, decimals: int = 2):
        self.store = store
        self.pass_threshold = pass_threshold
        self.decimals = decimals

    def _percent(self, ratio: Optional[float]) -> float:
        return round((ratio or 0.0) * 100, self.decimals)

    # ==========================================================
    # [1] 과목별 통계
    # ==========================================================
    def course_stats(self, course_id: int, academic_year: Optional[str] = None) -> Result:
        try:
            row = self.store.course_grade_summary(course_id, academic_year, self.pass_threshold)
        except SQLAlchemyError as e:
            logger.exception("course stats failed: course_id=%s", course_id)
            return Err(Internal("Error while computing course statistics", e))

        # 과목이 없든, 성적이 없든, 학년도 필터에 안 걸리든 모두 404
        if row is None:
            return Err(NotFound("course", "Course not found"))

        return Ok(
            CourseStats(
                course_id=row.course_id,
                course_code=row.course_code,
                course_name=row.course_name,
                average_score=round(float(row.average_score), self.decimals),
                min_score=float(row.min_score),
                max_score=float(row.max_score),
                total_students=row.total_students,
                success_rate=self._percent(row.success_ratio),
            )
        )

    # ==========================================================
    # [2] 학생-학기별 통계
    # ==========================================================
    def student_semester_stats(self, student_id: int, academic_year: Optional[str] = None) -> Result:
        try:
            rows = self.store.student_course_grades(student_id, academic_year)
        except SQLAlchemyError as e:
            logger.exception("student semester stats failed: student_id=%s", student_id)
            return Err(Internal("Error while computing the student's statistics", e))

        if not rows:
            return Err(NotFound("student", "Student semester stats not found"))
        return Ok(summarize_semesters(rows, self.pass_threshold, self.decimals))

    # ==========================================================
    # [3] 전체 통계
    # ==========================================================
    def global_stats(self, academic_year: Optional[str] = None) -> Result:
        try:
            summary = self.store.global_grade_summary(academic_year)
            if not summary.grades_count:
                return Err(NotFound("stats", "Global stats not found"))
            success_ratio = self.store.average_course_success_rate(academic_year, self.pass_threshold)
        except SQLAlchemyError as e:
            logger.exception("global stats failed: academic_year=%s", academic_year)
            return Err(Internal("Error while computing global statistics", e))

        return Ok(
            GlobalStats(
                global_average=round(float(summary.global_average), self.decimals),
                total_students=summary.total_students,
                total_courses=summary.total_courses,
                average_success_rate=self._percent(success_ratio),
            )
        )
