"""
Public booking routes
Booking intake from the widget and the confirmation links sent by email
"""

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.config.database import get_db
from app.models.booking import BookingStatus
from app.schemas.booking import (
    BookingActionResponse,
    BookingOut,
    PublicBookingRequest,
    PublicBookingResponse,
)
from app.services.booking.booking_service import BookingService
from app.services.booking.exceptions import BookingError

router = APIRouter(prefix="/bookings", tags=["public-bookings"])


def raise_http(error: BookingError):
    raise HTTPException(status_code=error.status_code, detail=error.message)


@router.post("", response_model=PublicBookingResponse)
def create_booking(
        request: PublicBookingRequest,
        db: Session = Depends(get_db)
):
    """
    Create a booking for a business.

    - 404 if the business does not exist or is inactive
    - 409 if the business confirms automatically and no table is free
    - manual-confirmation businesses receive the booking as pending
    """
    try:
        booking = BookingService.create_public_booking(db, request)
    except BookingError as e:
        raise_http(e)
    except SQLAlchemyError:
        raise HTTPException(status_code=500, detail="Failed to create booking")

    if booking.status == BookingStatus.PENDING.value:
        message = "Booking request received, waiting for the business to confirm"
    else:
        message = "Booking created successfully"

    return PublicBookingResponse(
        success=True,
        booking=BookingOut.model_validate(booking),
        message=message,
    )


@router.get("/business-action", response_model=BookingActionResponse)
def business_booking_action(
        token: str = Query(..., min_length=1),
        action: str = Query(..., description="accept or reject"),
        db: Session = Depends(get_db)
):
    """Accept or reject a booking from the link emailed to the business"""
    try:
        booking, message = BookingService.apply_business_action(db, token, action)
    except BookingError as e:
        raise_http(e)
    except SQLAlchemyError:
        raise HTTPException(status_code=500, detail=f"Failed to {action} booking")

    return BookingActionResponse(
        success=True,
        booking_id=booking.id,
        status=booking.status,
        message=message,
    )


@router.get("/confirm", response_model=BookingActionResponse)
def confirm_booking(
        token: str = Query(..., min_length=1),
        db: Session = Depends(get_db)
):
    """Client confirmation of an accepted booking"""
    try:
        booking, message = BookingService.confirm_by_client(db, token)
    except BookingError as e:
        raise_http(e)
    except SQLAlchemyError:
        raise HTTPException(status_code=500, detail="Failed to confirm booking")

    return BookingActionResponse(
        success=True,
        booking_id=booking.id,
        status=booking.status,
        message=message,
    )
