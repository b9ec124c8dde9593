"""Voice-assistant (Vapi) booking webhook payloads"""
from __future__ import annotations

from datetime import date
from enum import Enum
from typing import Any, Dict, Optional
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field, field_validator

from app.schemas.booking import TIME_PATTERN, validate_party_size
from app.utils.time_utils import normalize_time


class VapiAction(str, Enum):
    CREATE = "create"
    CANCEL = "cancel"
    UPDATE = "update"
    CHECK_AVAILABILITY = "check_availability"
    LIST = "list"


class VapiBookingRequest(BaseModel):
    """Body of a voice-assistant booking call; which fields are required depends on the action"""
    action: VapiAction
    business_id: Optional[UUID] = None
    booking_id: Optional[UUID] = None
    client_name: Optional[str] = Field(None, max_length=200)
    client_phone: Optional[str] = Field(None, max_length=30)
    client_email: Optional[EmailStr] = None
    booking_date: Optional[date] = None
    start_time: Optional[str] = Field(None, pattern=TIME_PATTERN)
    end_time: Optional[str] = Field(None, pattern=TIME_PATTERN)
    party_size: Optional[int] = Field(None, ge=1)
    notes: Optional[str] = Field(None, max_length=1000)

    @field_validator("client_email", mode="before")
    @classmethod
    def empty_email_is_none(cls, v):
        return v or None

    @field_validator("start_time", "end_time")
    @classmethod
    def canonical_time(cls, v: Optional[str]) -> Optional[str]:
        return normalize_time(v) if v else v

    @field_validator("party_size")
    @classmethod
    def party_size_limit(cls, v: Optional[int]) -> Optional[int]:
        return validate_party_size(v) if v is not None else v

    def missing(self, *fields: str) -> list:
        """Names of required fields that were not provided"""
        return [name for name in fields if getattr(self, name) in (None, "")]


class VapiError(BaseModel):
    code: str
    message: str


class VapiResponse(BaseModel):
    """Envelope returned to the voice assistant"""
    success: bool
    data: Optional[Dict[str, Any]] = None
    error: Optional[VapiError] = None

    @classmethod
    def ok(cls, **data) -> "VapiResponse":
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, code: str, message: str) -> "VapiResponse":
        return cls(success=False, error=VapiError(code=code, message=message))
