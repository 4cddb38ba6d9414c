"""
통계 응답 스키마 (저장하지 않고 요청마다 다시 계산)
- successRate / averageSuccessRate 는 백분율(0~100)
"""

from schemas.common import CamelModel


class CourseStats(CamelModel):
    course_id: int
    course_code: str
    course_name: str
    average_score: float
    min_score: float
    max_score: float
    total_students: int
    success_rate: float


class StudentSemesterStats(CamelModel):
    academic_year: str
    semester: str
    average_score: float
    total_credits: int          # 수강 학점 합
    validated_credits: int      # 이수(기준 점수 이상) 학점 합
    courses_count: int


class GlobalStats(CamelModel):
    global_average: float
    total_students: int
    total_courses: int
    average_success_rate: float
