"""
Booking outcomes that are not a new booking.

``BookingError`` subclasses are expected rejections the caller maps to a
response. ``InfrastructureError`` means a store failed and is passed through
untouched.
"""


class BookingError(Exception):
    """Base class for expected booking rejections."""

    kind = "booking"

    def __init__(self, reason: str, message: str) -> None:
        super().__init__(message)
        self.reason = reason
        self.message = message


class ValidationError(BookingError):
    """Missing or malformed input, or a business rule the request breaks."""

    kind = "validation"


class NotFoundError(BookingError):
    """A referenced entity does not exist."""

    kind = "not_found"


class ConflictError(BookingError):
    """The requested slot is held by a pending or confirmed booking."""

    kind = "conflict"


class InfrastructureError(RuntimeError):
    """Raised when a store is unavailable or fails unexpectedly."""
    pass
