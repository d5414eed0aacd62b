import uuid
from collections.abc import Awaitable, Callable
from typing import cast

from fastapi import FastAPI, Request, Response
from pydantic import ValidationError
from starlette.types import ExceptionHandler

from variant_service.api.config import ApiSettings
from variant_service.api.dependencies import get_settings, init_repository
from variant_service.api.errors import (
    DataSizeExceededError,
    answer_key_conflict_handler,
    answer_key_not_found_handler,
    assignment_not_found_handler,
    data_integrity_handler,
    data_size_exceeded_handler,
    duplicate_assignment_handler,
    evaluation_validation_handler,
    scan_payload_handler,
    unhandled_exception_handler,
    validation_error_handler,
)
from variant_service.api.routes import router
from variant_service.core import exceptions


def create_app(settings: ApiSettings | None = None) -> FastAPI:
    if settings is None:
        settings = get_settings()

    app = FastAPI(title="Evaluation Variants API")
    app.state.settings = settings
    init_repository()

    # Exception handlers — cast needed because FastAPI expects
    # (Request, Exception) but our handlers use specific exc types.
    handlers: list[tuple[type[Exception], object]] = [
        (DataSizeExceededError, data_size_exceeded_handler),
        (exceptions.ScanPayloadError, scan_payload_handler),
        (exceptions.ValidationError, evaluation_validation_handler),
        (exceptions.DataIntegrityError, data_integrity_handler),
        (exceptions.DuplicateAssignmentError, duplicate_assignment_handler),
        (exceptions.AnswerKeyConflictError, answer_key_conflict_handler),
        (exceptions.AssignmentNotFoundError, assignment_not_found_handler),
        (exceptions.AnswerKeyNotFoundError, answer_key_not_found_handler),
        (ValidationError, validation_error_handler),
    ]
    for exc_type, handler in handlers:
        app.add_exception_handler(exc_type, cast(ExceptionHandler, handler))
    app.add_exception_handler(Exception, unhandled_exception_handler)

    # Request-ID middleware
    @app.middleware("http")
    async def request_id_middleware(
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        request_id = request.headers.get("X-Request-ID", uuid.uuid4().hex[:12])
        request.state.request_id = request_id
        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id
        return response

    app.include_router(router)

    return app
