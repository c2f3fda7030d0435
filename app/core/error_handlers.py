import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from app.core.exceptions import BookingAppError
from app.schemas.common import ErrorResponse

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "Something went wrong. Please try again."


def _error_response(status_code: int, error: str, message: str, **extra) -> JSONResponse:
    body = ErrorResponse(error=error, message=message).model_dump()
    body.update(extra)
    return JSONResponse(status_code=status_code, content=body)


async def booking_app_error_handler(request: Request, exc: BookingAppError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        return _error_response(exc.status_code, exc.code, GENERIC_ERROR_MESSAGE)
    return _error_response(exc.status_code, exc.code, exc.message, **exc.extra())


async def request_validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg", ""), "type": err.get("type", "")}
        for err in exc.errors()
    ]
    return _error_response(
        status.HTTP_400_BAD_REQUEST,
        "validation_error",
        "Invalid request data",
        errors=errors,
    )


async def database_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.exception("Database error on %s %s", request.method, request.url.path)
    return _error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR, "internal_error", GENERIC_ERROR_MESSAGE
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return _error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR, "internal_error", GENERIC_ERROR_MESSAGE
    )


EXCEPTION_HANDLERS = {
    BookingAppError: booking_app_error_handler,
    RequestValidationError: request_validation_error_handler,
    SQLAlchemyError: database_error_handler,
    Exception: unhandled_error_handler,
}


def register_exception_handlers(app: FastAPI) -> None:
    for exception_class, handler in EXCEPTION_HANDLERS.items():
        app.add_exception_handler(exception_class, handler)
