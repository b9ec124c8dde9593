# app/models/__init__.py
from .base import Base
from .business import Business, ConfirmationMode
from .availability import AvailabilitySlot
from .table import Table
from .booking import Booking, BookingStatus, BookingSource, RELEASED_STATUSES

__all__ = [
    "Base",
    "Business",
    "ConfirmationMode",
    "AvailabilitySlot",
    "Table",
    "Booking",
    "BookingStatus",
    "BookingSource",
    "RELEASED_STATUSES",
]
