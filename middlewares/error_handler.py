import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from schemas.common import ErrorDetail, ErrorResponse

logger = logging.getLogger(__name__)


def add_error_handlers(app: FastAPI):
    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        # 원인(스택/드라이버 메시지)은 로그에만 남기고 클라이언트에는 일반 메시지
        logger.exception("unhandled error: %s %s", request.method, request.url.path)
        body = ErrorResponse(error=ErrorDetail(code="INTERNAL_ERROR", message="Internal server error"))
        return JSONResponse(status_code=500, content=body.model_dump(mode="json"))
