# app/schemas/__init__.py
from .booking import (
    PublicBookingRequest,
    BookingOut,
    PublicBookingResponse,
    AvailabilityResponse,
    OpenDaysResponse,
    BookingActionResponse
)

from .vapi_events import (
    VapiAction,
    VapiBookingRequest,
    VapiError,
    VapiResponse
)
