import logging
import traceback

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

log = logging.getLogger(__name__)

AVAILABLE_ENDPOINTS = [
    "GET / - API documentation",
    "GET /extract?url=YOUTUBE_URL - Extract video download links",
    "GET /search?q=QUERY - Search YouTube videos",
    "GET /details?url=YOUTUBE_URL - Get video details only",
    "GET /bulk-extract?urls=URL1,URL2 - Extract multiple videos",
]


def init_exception_handler(app):
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)


def example_url(request: Request) -> str:
    return f"{request.app.state.config.public_url}/extract?url=https://www.youtube.com/watch?v=LPuWoqQNUuM"


# ValidationError 전역 처리 (쿼리 파라미터 타입 오류 등)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    log.error(f"ValidationError: {exc.errors()}")
    return JSONResponse(
        status_code=400,
        content={
            "error": "Invalid request parameters",
            "details": [
                {"field": ".".join(str(part) for part in error.get("loc", ())), "message": error.get("msg")}
                for error in exc.errors()
            ],
        },
    )


# 없는 경로는 사용 가능한 endpoint 목록과 함께 404
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 404:
        return JSONResponse(
            status_code=404,
            content={
                "error": "Endpoint not found",
                "availableEndpoints": AVAILABLE_ENDPOINTS,
                "example": example_url(request),
            },
        )
    return JSONResponse(status_code=exc.status_code, content={"error": exc.detail}, headers=exc.headers)


def trace_detail(exc: Exception) -> dict:
    # 마지막 스택(= 예외 발생 위치)
    stack_summary = traceback.extract_tb(exc.__traceback__)
    last_trace = stack_summary[-1] if stack_summary else None
    return {
        "line": last_trace.lineno if last_trace else None,
        "method": last_trace.name if last_trace else None,
    }


# 일반 Exception 처리 (예외 누락 방지)
async def generic_exception_handler(request: Request, exc: Exception):
    log.exception("Unhandled exception:")
    if request.app.state.config.is_production:
        # 운영 환경에서는 내부 메시지 숨김
        return JSONResponse(
            status_code=500,
            content={"error": "Something went wrong!", "message": "Internal server error"},
        )
    return JSONResponse(
        status_code=500,
        content={
            "error": "Something went wrong!",
            "message": str(exc),
            "detail": trace_detail(exc),
        },
    )
