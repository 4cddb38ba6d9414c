from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from dependencies.services import get_stats_aggregator
from schemas.common import AcademicYear, ErrorResponse
from schemas.stats import CourseStats, GlobalStats, StudentSemesterStats
from services.stats import StatsAggregator
from utils.responses import error_response

router = APIRouter(
    prefix="/stats",
    tags=["stats"],
    responses={404: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)


# ✅ [COURSE] 과목별 평균/최저/최고/성공률
@router.get("/course/{course_id}", response_model=CourseStats)
def get_course_stats(
    course_id: int,
    academic_year: Optional[AcademicYear] = Query(None, alias="academicYear"),
    stats: StatsAggregator = Depends(get_stats_aggregator),
):
    result = stats.course_stats(course_id, academic_year)
    if not result.ok:
        return error_response(result.error)
    return result.value


# ✅ [STUDENT] 학생의 학기별 평균/학점 (학년도 → 학기 순)
@router.get("/student/{student_id}/semesters", response_model=List[StudentSemesterStats])
def get_student_semester_stats(
    student_id: int,
    academic_year: Optional[AcademicYear] = Query(None, alias="academicYear"),
    stats: StatsAggregator = Depends(get_stats_aggregator),
):
    result = stats.student_semester_stats(student_id, academic_year)
    if not result.ok:
        return error_response(result.error)
    return result.value


# ✅ [GLOBAL] 전체 평균/학생 수/과목 수/평균 성공률
@router.get("/global", response_model=GlobalStats)
def get_global_stats(
    academic_year: Optional[AcademicYear] = Query(None, alias="academicYear"),
    stats: StatsAggregator = Depends(get_stats_aggregator),
):
    result = stats.global_stats(academic_year)
    if not result.ok:
        return error_response(result.error)
    return result.value
