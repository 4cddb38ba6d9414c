"""
schemas/common.py

- 프로젝트 전반에서 재사용할 공용 스키마 모음
- Pydantic v2 기준
- 포함 내용:
  1) API 공통 베이스: CamelModel (JSON 필드는 camelCase, 파이썬 속성은 snake_case)
  2) 에러 응답 표준: ErrorDetail, ErrorResponse
  3) 학년도/학기 타입: AcademicYear, Semester
"""

from __future__ import annotations

import re
from datetime import datetime, timezone
from typing import Annotated, Literal

from pydantic import AfterValidator, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


# =========================================================
# 1) 공통 베이스
# =========================================================

class CamelModel(BaseModel):
    """요청/응답 모두 camelCase 로 주고받고, ORM 객체에서 바로 변환 가능"""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# =========================================================
# 2) 에러 응답 표준
# =========================================================

class ErrorDetail(BaseModel):
    """에러 코드/메시지를 담는 최소 단위"""
    code: str = Field(..., description="에러 식별 코드 (예: NOT_FOUND, CONFLICT, INTERNAL_ERROR)")
    message: str = Field(..., description="사람이 읽을 수 있는 에러 메시지")


class ErrorResponse(BaseModel):
    """
    라우터/전역 에러 핸들러에서 내려주는 표준 에러 응답
    - utils/responses.py, middlewares/error_handler.py 에서 이 스키마로 리턴
    """
    error: ErrorDetail
    generated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="응답 생성 시각 (UTC)"
    )

    model_config = ConfigDict(extra="ignore")


# =========================================================
# 3) 학년도 / 학기
# =========================================================

Semester = Literal["Fall", "Spring", "Summer"]

_ACADEMIC_YEAR_RE = re.compile(r"^(\d{4})-(\d{4})$")


def check_academic_year(value: str) -> str:
    """'2021-2022' 형식이며 뒤 연도 = 앞 연도 + 1 이어야 함"""
    match = _ACADEMIC_YEAR_RE.match(value)
    if not match or int(match.group(2)) != int(match.group(1)) + 1:
        raise ValueError("academicYear must look like '2021-2022' (two consecutive years)")
    return value


AcademicYear = Annotated[str, AfterValidator(check_academic_year)]
