"""Domain errors raised by the services and mapped to HTTP responses in app.core.error_handlers."""
from typing import Any, Dict, Iterable, List, Optional


class BookingAppError(Exception):
    status_code = 400
    code = "error"

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)

    def extra(self) -> Dict[str, Any]:
        return {}


class NotFound(BookingAppError):
    status_code = 404
    code = "not_found"


class Forbidden(BookingAppError):
    status_code = 403
    code = "forbidden"


class Unauthorized(BookingAppError):
    status_code = 401
    code = "unauthorized"


class ValidationError(BookingAppError):
    code = "validation_error"

    def __init__(self, message: str, errors: Optional[List[Dict[str, Any]]] = None):
        super().__init__(message)
        self.errors = errors or []

    @classmethod
    def for_field(cls, loc: Iterable[Any], msg: str, type_: str = "value_error") -> "ValidationError":
        return cls(msg, [{"loc": list(loc), "msg": msg, "type": type_}])

    def extra(self) -> Dict[str, Any]:
        return {"errors": self.errors}


class SeatConflict(BookingAppError):
    """One or more requested seats were claimed by another booking."""

    status_code = 409
    code = "seat_conflict"

    def __init__(
        self,
        message: str = "One or more seats are no longer available",
        unavailable_seat_ids: Optional[List[str]] = None,
        unavailable_seat_numbers: Optional[List[str]] = None,
    ):
        super().__init__(message)
        self.unavailable_seat_ids = unavailable_seat_ids or []
        self.unavailable_seat_numbers = unavailable_seat_numbers or []

    def extra(self) -> Dict[str, Any]:
        return {
            "unavailableSeatIds": self.unavailable_seat_ids,
            "unavailableSeatNumbers": self.unavailable_seat_numbers,
        }


class InternalError(BookingAppError):
    """Unexpected store failure. The client only sees a generic message."""

    status_code = 500
    code = "internal_error"
