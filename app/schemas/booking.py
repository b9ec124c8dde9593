"""
Pydantic schemas for public booking intake and availability
"""
from datetime import date
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from app.config.settings import get_settings
from app.utils.time_utils import normalize_time

settings = get_settings()

TIME_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d(:[0-5]\d)?$"


def validate_party_size(value: int) -> int:
    if value > settings.MAX_PARTY_SIZE:
        raise ValueError(f"party size cannot exceed {settings.MAX_PARTY_SIZE}")
    return value


# ============================================================================
# Request Schemas (for incoming data)
# ============================================================================

class PublicBookingRequest(BaseModel):
    """Booking request sent by the public booking widget"""
    model_config = ConfigDict(populate_by_name=True)

    business_id: UUID = Field(..., alias="businessId")
    client_name: str = Field(..., alias="clientName", min_length=1, max_length=200)
    client_phone: str = Field(..., alias="clientPhone", min_length=6, max_length=30)
    client_email: Optional[EmailStr] = Field(None, alias="clientEmail")
    booking_date: date = Field(..., alias="bookingDate")
    start_time: str = Field(..., alias="startTime", pattern=TIME_PATTERN)
    party_size: int = Field(..., alias="partySize", ge=1)
    notes: Optional[str] = Field(None, max_length=1000)

    @field_validator("start_time")
    @classmethod
    def canonical_time(cls, v: str) -> str:
        return normalize_time(v)

    @field_validator("party_size")
    @classmethod
    def party_size_limit(cls, v: int) -> int:
        return validate_party_size(v)

    @field_validator("client_email", mode="before")
    @classmethod
    def empty_email_is_none(cls, v):
        return v or None


# ============================================================================
# Response Schemas (for outgoing data)
# ============================================================================

class BookingOut(BaseModel):
    """Booking as returned to API clients"""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    business_id: UUID
    table_id: Optional[UUID] = None
    table_number: Optional[int] = None
    client_name: str
    client_phone: str
    client_email: Optional[str] = None
    booking_date: date
    start_time: str
    end_time: str
    party_size: int
    notes: Optional[str] = None
    status: str


class PublicBookingResponse(BaseModel):
    success: bool
    booking: BookingOut
    message: str


class AvailabilityResponse(BaseModel):
    business_id: UUID
    date: date
    party_size: int
    slot_duration_minutes: int
    slots: List[str]


class OpenDaysResponse(BaseModel):
    business_id: UUID
    days: List[int] = Field(..., description="Days of week with opening hours, 0=Sunday")


class BookingActionResponse(BaseModel):
    success: bool
    booking_id: UUID
    status: str
    message: str
