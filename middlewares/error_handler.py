import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from schemas.common import ErrorResponse
from services.errors import (
    InferenceError,
    MalformedEnrollmentDateError,
    RecordNotFoundError,
    StorageError,
)

logger = logging.getLogger(__name__)

INFERENCE_FAILURE_MESSAGE = "Failed to process question"


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=message).model_dump(mode="json"),
    )


def add_error_handlers(app: FastAPI):
    @app.exception_handler(StorageError)
    async def storage_exception_handler(request: Request, exc: StorageError):
        # 상세 원인은 storage 계층에서 이미 logger.exception으로 기록됨
        return error_response(500, str(exc))

    @app.exception_handler(RecordNotFoundError)
    async def not_found_exception_handler(request: Request, exc: RecordNotFoundError):
        return error_response(404, str(exc))

    @app.exception_handler(InferenceError)
    async def inference_exception_handler(request: Request, exc: InferenceError):
        logger.error("Inference failed for %s %s: %s", request.method, request.url.path, exc)
        return error_response(500, INFERENCE_FAILURE_MESSAGE)

    @app.exception_handler(MalformedEnrollmentDateError)
    async def enrollment_date_exception_handler(request: Request, exc: MalformedEnrollmentDateError):
        return error_response(422, str(exc))

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error for %s %s", request.method, request.url.path)
        return error_response(500, "Internal server error")
