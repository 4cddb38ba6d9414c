from datetime import date, datetime
from typing import Optional

from pydantic import EmailStr, Field

from schemas.common import CamelModel


# ✅ 입력용 (POST)
class StudentCreate(CamelModel):
    student_number: str = Field(..., min_length=1, max_length=20)   # 학번
    first_name: str = Field(..., min_length=1, max_length=100)      # 이름
    last_name: str = Field(..., min_length=1, max_length=100)       # 성
    email: EmailStr                                                  # 이메일
    date_of_birth: date                                              # 생년월일


# ✅ 수정용 (PUT) - 성적이 참조 중이면 연락처(email)만 변경 가능
class StudentUpdate(CamelModel):
    first_name: Optional[str] = Field(None, min_length=1, max_length=100)
    last_name: Optional[str] = Field(None, min_length=1, max_length=100)
    email: Optional[EmailStr] = None


# ✅ 전체 출력용 (GET, 상세조회 등)
class Student(StudentCreate):
    id: int
    created_at: datetime
    updated_at: datetime
