# app/services/booking/exceptions.py
"""Booking domain errors; each carries the HTTP status and code callers report"""


class BookingError(Exception):
    status_code = 400
    code = "BOOKING_ERROR"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class BusinessNotFoundError(BookingError):
    status_code = 404
    code = "BUSINESS_NOT_FOUND"


class BookingNotFoundError(BookingError):
    status_code = 404
    code = "BOOKING_NOT_FOUND"


class NoAvailabilityError(BookingError):
    status_code = 409
    code = "NO_AVAILABILITY"


class InvalidBookingActionError(BookingError):
    status_code = 400
    code = "INVALID_ACTION"
