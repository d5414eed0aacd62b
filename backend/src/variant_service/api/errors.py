import logging

from fastapi import Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from variant_service.api.schemas import ErrorDetail
from variant_service.core import exceptions

logger = logging.getLogger(__name__)


class DataSizeExceededError(Exception):
    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


def _get_request_id(request: Request) -> str | None:
    if hasattr(request.state, "request_id"):
        result: str = request.state.request_id
        return result
    return None


def _error_response(
    request: Request, status_code: int, code: str, message: str
) -> JSONResponse:
    detail = ErrorDetail(
        code=code,
        message=message,
        request_id=_get_request_id(request),
    )
    return JSONResponse(status_code=status_code, content=detail.model_dump())


async def data_size_exceeded_handler(
    request: Request, exc: DataSizeExceededError
) -> JSONResponse:
    return _error_response(request, 422, "DATA_SIZE_EXCEEDED", exc.message)


async def evaluation_validation_handler(
    request: Request, exc: exceptions.ValidationError
) -> JSONResponse:
    return _error_response(request, 422, "VALIDATION_ERROR", str(exc))


async def scan_payload_handler(
    request: Request, exc: exceptions.ScanPayloadError
) -> JSONResponse:
    return _error_response(request, 422, "INVALID_SCAN_PAYLOAD", str(exc))


async def data_integrity_handler(
    request: Request, exc: exceptions.DataIntegrityError
) -> JSONResponse:
    return _error_response(request, 422, "DATA_INTEGRITY_ERROR", str(exc))


async def duplicate_assignment_handler(
    request: Request, exc: exceptions.DuplicateAssignmentError
) -> JSONResponse:
    return _error_response(request, 409, "DUPLICATE_ASSIGNMENT", str(exc))


async def answer_key_conflict_handler(
    request: Request, exc: exceptions.AnswerKeyConflictError
) -> JSONResponse:
    return _error_response(request, 409, "ANSWER_KEY_CONFLICT", str(exc))


async def assignment_not_found_handler(
    request: Request, exc: exceptions.AssignmentNotFoundError
) -> JSONResponse:
    return _error_response(request, 404, "ASSIGNMENT_NOT_FOUND", str(exc))


async def answer_key_not_found_handler(
    request: Request, exc: exceptions.AnswerKeyNotFoundError
) -> JSONResponse:
    return _error_response(request, 404, "ANSWER_KEY_NOT_FOUND", str(exc))


async def validation_error_handler(
    request: Request, exc: ValidationError
) -> JSONResponse:
    return _error_response(request, 422, "VALIDATION_ERROR", str(exc))


async def unhandled_exception_handler(
    request: Request, exc: Exception
) -> JSONResponse:
    logger.exception("Unhandled exception")
    return _error_response(
        request, 500, "INTERNAL_ERROR", "Internal server error"
    )
