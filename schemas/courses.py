from datetime import datetime
from typing import Optional

from pydantic import Field

from schemas.common import CamelModel


# ✅ 입력용: POST 요청에서 사용할 스키마
class CourseCreate(CamelModel):
    code: str = Field(..., min_length=1, max_length=20)      # 과목 코드 (고유)
    name: str = Field(..., min_length=1, max_length=100)     # 과목 이름
    credits: int = Field(..., gt=0)                          # 학점
    description: Optional[str] = None                        # 과목 설명


# ✅ 수정용: PUT (보낸 필드만 반영)
class CourseUpdate(CamelModel):
    code: Optional[str] = Field(None, min_length=1, max_length=20)
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    credits: Optional[int] = Field(None, gt=0)
    description: Optional[str] = None


# ✅ 출력용: GET, POST 응답 등에서 사용할 스키마
class Course(CourseCreate):
    id: int
    created_at: datetime
    updated_at: datetime
