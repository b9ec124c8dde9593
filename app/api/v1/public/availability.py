"""
Public availability routes
Read path of the booking widget: open days and free start times
"""
from datetime import date, datetime, timezone

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.api.dependencies import get_public_business
from app.config.database import get_db
from app.config.settings import settings
from app.models.business import Business
from app.schemas.booking import AvailabilityResponse, OpenDaysResponse
from app.services.availability.availability_service import AvailabilityService

router = APIRouter(prefix="/businesses", tags=["public-availability"])


@router.get("/{business_id}/availability", response_model=AvailabilityResponse)
def get_availability(
        booking_date: date = Query(..., alias="date", description="Day to list, YYYY-MM-DD"),
        party_size: int = Query(..., ge=1, le=settings.MAX_PARTY_SIZE),
        business: Business = Depends(get_public_business),
        db: Session = Depends(get_db)
):
    """
    Free start times for a party on one day.
    Slots already started today are left out; a closed day returns an empty list.
    """
    slots = AvailabilityService.get_available_slots(
        db,
        business=business,
        target_date=booking_date,
        party_size=party_size,
        now=datetime.now(timezone.utc),
    )

    return AvailabilityResponse(
        business_id=business.id,
        date=booking_date,
        party_size=party_size,
        slot_duration_minutes=AvailabilityService.slot_duration(business),
        slots=slots,
    )


@router.get("/{business_id}/open-days", response_model=OpenDaysResponse)
def get_open_days(
        business: Business = Depends(get_public_business),
        db: Session = Depends(get_db)
):
    """Days of the week (0=Sunday) on which the business takes bookings"""
    return OpenDaysResponse(
        business_id=business.id,
        days=AvailabilityService.get_open_days(db, business.id),
    )
