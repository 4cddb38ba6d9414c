"""
services/result.py

서비스 계층의 반환 타입.
- 성공: Ok(value)
- 실패: Err(error)  — error 는 NotFound / Conflict / Internal 중 하나
- 라우터(호스트 계층)가 error.status_code 로 HTTP 상태를 결정 (utils/responses.py)
"""

from dataclasses import dataclass
from typing import Any, ClassVar, Generic, Optional, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class NotFound:
    entity: str                         # "student", "course", "grade", ...
    detail: Optional[str] = None

    status_code: ClassVar[int] = 404
    code: ClassVar[str] = "NOT_FOUND"

    @property
    def message(self) -> str:
        return self.detail or f"{self.entity.capitalize()} not found"


@dataclass(frozen=True)
class Conflict:
    constraint: str                     # 위반한 고유 제약 (예: "grade_unique", "course_code")
    detail: str

    status_code: ClassVar[int] = 409
    code: ClassVar[str] = "CONFLICT"

    @property
    def message(self) -> str:
        return self.detail


@dataclass(frozen=True)
class Internal:
    stage: str                          # 사용자에게 보여줄 단계별 메시지
    cause: Optional[BaseException] = None

    status_code: ClassVar[int] = 500
    code: ClassVar[str] = "INTERNAL_ERROR"

    @property
    def message(self) -> str:
        # cause 의 원문(드라이버 메시지 등)은 절대 노출하지 않음
        return self.stage


DomainError = Union[NotFound, Conflict, Internal]


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Err:
    error: DomainError

    @property
    def ok(self) -> bool:
        return False


Result = Union[Ok[Any], Err]
