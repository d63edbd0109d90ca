"""
Exception handlers translating booking errors into HTTP responses.

    CannotCreateBookingError -> 403
    NotFoundError            -> 404
    request body validation  -> 400
    unique/check constraint  -> 409
"""

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError

from hotel_booking.core.exceptions import BookingError
from hotel_booking.core.logging import get_logger
from hotel_booking.core.metrics import record_booking_attempt
from hotel_booking.schemas.booking import ErrorResponse

logger = get_logger(__name__)

_OPERATIONS = {"POST": "create", "GET": "read", "PUT": "update"}

_STATUS_LABELS = {
    status.HTTP_403_FORBIDDEN: "forbidden",
    status.HTTP_404_NOT_FOUND: "not_found",
    status.HTTP_409_CONFLICT: "conflict",
}


def _record(request: Request, status_code: int) -> None:
    operation = _OPERATIONS.get(request.method, "unknown")
    record_booking_attempt(operation, _STATUS_LABELS.get(status_code, "error"))


async def booking_error_handler(request: Request, exc: BookingError) -> JSONResponse:
    logger.warning(
        "booking_rejected",
        error=exc.name,
        reason=exc.message,
        status_code=exc.status_code,
    )
    _record(request, exc.status_code)
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(error=exc.name, message=exc.message).model_dump(),
    )


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info("request_invalid", errors=len(exc.errors()))
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error": "InvalidDataError",
            "message": "Invalid request data",
            "details": jsonable_encoder(exc.errors()),
        },
    )


async def integrity_error_handler(request: Request, exc: IntegrityError) -> JSONResponse:
    logger.warning("booking_constraint_violation", error=str(exc.orig))
    _record(request, status.HTTP_409_CONFLICT)
    return JSONResponse(
        status_code=status.HTTP_409_CONFLICT,
        content=ErrorResponse(
            error="ConflictError",
            message="Booking conflicts with a concurrent change",
        ).model_dump(),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(BookingError, booking_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(IntegrityError, integrity_error_handler)
