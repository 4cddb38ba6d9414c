from datetime import datetime
from typing import Optional

from pydantic import Field

from schemas.common import AcademicYear, CamelModel, Semester


class GradeCreate(CamelModel):
    student_id: int                              # 학생 ID
    course_id: int                               # 과목 ID
    score: float = Field(..., ge=0, le=100)      # 점수
    semester: Semester                           # 학기
    academic_year: AcademicYear                  # 학년도 (예: 2021-2022)


# 학생/과목은 바꿀 수 없음 → 점수, 학기, 학년도만 부분 수정
class GradeUpdate(CamelModel):
    score: Optional[float] = Field(None, ge=0, le=100)
    semester: Optional[Semester] = None
    academic_year: Optional[AcademicYear] = None


class Grade(CamelModel):
    id: int                                      # 성적 고유 ID
    student_id: int
    course_id: int
    score: float
    semester: Semester
    academic_year: str
    created_at: datetime
    updated_at: datetime
