"""
성적증명서 렌더링용 데이터 (응답 바디가 아니라 PDF 템플릿 입력)
"""

from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel

from schemas.stats import StudentSemesterStats


class TranscriptStudent(BaseModel):
    student_number: str
    first_name: str
    last_name: str
    email: str
    date_of_birth: date

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


class TranscriptLine(BaseModel):
    course_code: str
    course_name: str
    credits: int
    score: float
    passed: bool


class TranscriptSemester(BaseModel):
    academic_year: str
    semester: str
    lines: List[TranscriptLine]
    subtotal: StudentSemesterStats


class TranscriptSummary(BaseModel):
    overall_average: float
    total_credits: int
    validated_credits: int
    courses_count: int


class Transcript(BaseModel):
    institution: str
    student: TranscriptStudent
    academic_year: Optional[str] = None    # 필터 (없으면 전체 학년도)
    semesters: List[TranscriptSemester]
    summary: TranscriptSummary
    pass_threshold: float
    generated_at: datetime
