import re
from urllib.parse import quote

from fastapi.responses import JSONResponse

from schemas.common import ErrorDetail, ErrorResponse
from services.result import DomainError

_UNSAFE_FILENAME_CHARS = re.compile(r"[^A-Za-z0-9._-]")


def error_response(error: DomainError) -> JSONResponse:
    """서비스 에러 → 상태 코드 + 표준 에러 바디 (원본 예외 메시지는 포함하지 않음)"""
    body = ErrorResponse(error=ErrorDetail(code=error.code, message=error.message))
    return JSONResponse(status_code=error.status_code, content=body.model_dump(mode="json"))


def attachment_disposition(filename: str) -> str:
    """
    Content-Disposition 값 생성
    - 헤더는 latin-1 로 인코딩되므로 filename 은 ASCII 로 치환한 값
    - 원래 이름(한글 학번 등)은 RFC 5987 filename* 로 함께 전달
    """
    fallback = _UNSAFE_FILENAME_CHARS.sub("_", filename)
    return f"attachment; filename=\"{fallback}\"; filename*=UTF-8''{quote(filename, safe='')}"
