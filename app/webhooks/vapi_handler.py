# app/webhooks/vapi_handler.py
"""Voice-assistant (Vapi) booking webhook"""
import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool
from pydantic import ValidationError
from sqlalchemy.orm import Session

from app.api.dependencies import vapi_secret_is_valid
from app.config.database import get_db
from app.schemas.vapi_events import VapiAction, VapiBookingRequest, VapiResponse
from app.services.booking.booking_service import BookingService
from app.services.booking.exceptions import BookingError

router = APIRouter()
logger = logging.getLogger(__name__)

CREATE_FIELDS = ("business_id", "client_name", "client_phone", "booking_date", "start_time", "end_time", "party_size")
AVAILABILITY_FIELDS = ("business_id", "booking_date", "start_time", "end_time", "party_size")


def envelope(response: VapiResponse, status_code: int = 200) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=response.model_dump(mode="json", exclude_none=True))


@router.post("/bookings")
async def handle_vapi_booking(
        request: Request,
        secret_ok: bool = Depends(vapi_secret_is_valid),
        db: Session = Depends(get_db)
):
    """Single entry point for every booking action of the voice assistant"""
    if not secret_ok:
        logger.error("Invalid or missing Vapi API key")
        return envelope(VapiResponse.fail("UNAUTHORIZED", "Invalid API key"), 401)

    try:
        body = await request.json()
    except ValueError:
        return envelope(VapiResponse.fail("INVALID_BODY", "Request body must be JSON"), 400)

    if not isinstance(body, dict):
        return envelope(VapiResponse.fail("INVALID_BODY", "Request body must be a JSON object"), 400)

    try:
        payload = VapiBookingRequest.model_validate(body)
    except ValidationError as e:
        if any(error["loc"] and error["loc"][0] == "action" for error in e.errors()):
            return envelope(VapiResponse.fail("INVALID_ACTION", "Action not supported"), 400)
        fields = ", ".join(str(error["loc"][0]) for error in e.errors() if error["loc"])
        return envelope(VapiResponse.fail("INVALID_FIELDS", f"Invalid fields: {fields}"), 400)

    logger.info(f"Vapi request received: action={payload.action.value} business_id={payload.business_id}")

    handler = ACTION_HANDLERS[payload.action]
    try:
        result = await run_in_threadpool(handler, db, payload)
    except BookingError as e:
        return envelope(VapiResponse.fail(e.code, e.message), e.status_code)
    except Exception as e:
        logger.error(f"Error in vapi booking webhook ({payload.action.value}): {e}")
        return envelope(VapiResponse.fail("INTERNAL_ERROR", "Internal error"), 500)

    status_code = 200 if result.success else 400
    return envelope(result, status_code)


def create_booking(db: Session, payload: VapiBookingRequest) -> VapiResponse:
    missing = payload.missing(*CREATE_FIELDS)
    if missing:
        return VapiResponse.fail("MISSING_FIELDS", f"Missing required fields: {', '.join(missing)}")

    booking = BookingService.create_voice_booking(db, payload)
    reserved = booking.table_id is not None

    return VapiResponse.ok(
        booking_id=str(booking.id),
        table_number=booking.table_number,
        status=booking.status,
        booking_date=booking.booking_date.isoformat(),
        start_time=booking.start_time,
        end_time=booking.end_time,
        party_size=booking.party_size,
        message=(
            f"Booking confirmed at table {booking.table_number}"
            if reserved else "Booking waitlisted - no tables available"
        ),
    )


def cancel_booking(db: Session, payload: VapiBookingRequest) -> VapiResponse:
    if not payload.booking_id:
        return VapiResponse.fail("MISSING_BOOKING_ID", "Booking ID is required")

    booking = BookingService.cancel_booking(db, payload.booking_id)

    return VapiResponse.ok(
        booking_id=str(booking.id),
        status=booking.status,
        message="Booking cancelled",
    )


def update_booking(db: Session, payload: VapiBookingRequest) -> VapiResponse:
    if not payload.booking_id:
        return VapiResponse.fail("MISSING_BOOKING_ID", "Booking ID is required")

    changes = payload.model_dump(
        exclude_unset=True,
        include={
            "client_name", "client_phone", "client_email", "notes",
            "booking_date", "start_time", "end_time", "party_size",
        },
    )
    booking = BookingService.update_booking(db, payload.booking_id, changes)

    return VapiResponse.ok(
        booking_id=str(booking.id),
        table_number=booking.table_number,
        status=booking.status,
        message="Booking updated",
    )


def check_availability(db: Session, payload: VapiBookingRequest) -> VapiResponse:
    missing = payload.missing(*AVAILABILITY_FIELDS)
    if missing:
        return VapiResponse.fail("MISSING_FIELDS", f"Missing required fields: {', '.join(missing)}")

    table = BookingService.check_availability(
        db,
        business_id=payload.business_id,
        target_date=payload.booking_date,
        start_time=payload.start_time,
        end_time=payload.end_time,
        party_size=payload.party_size,
    )

    return VapiResponse.ok(
        available=table is not None,
        table_number=table.table_number if table else None,
        message=(
            f"Table {table.table_number} available"
            if table else "No tables available for that date and time"
        ),
    )


def list_bookings(db: Session, payload: VapiBookingRequest) -> VapiResponse:
    missing = payload.missing("business_id", "booking_date")
    if missing:
        return VapiResponse.fail("MISSING_FIELDS", "Business ID and date are required")

    bookings = BookingService.list_bookings(db, payload.business_id, payload.booking_date)

    return VapiResponse.ok(
        bookings=[
            {
                "booking_id": str(b.id),
                "client_name": b.client_name,
                "client_phone": b.client_phone,
                "booking_date": b.booking_date.isoformat(),
                "start_time": b.start_time,
                "end_time": b.end_time,
                "party_size": b.party_size,
                "status": b.status,
                "table_number": b.table_number,
            }
            for b in bookings
        ],
        count=len(bookings),
    )


ACTION_HANDLERS = {
    VapiAction.CREATE: create_booking,
    VapiAction.CANCEL: cancel_booking,
    VapiAction.UPDATE: update_booking,
    VapiAction.CHECK_AVAILABILITY: check_availability,
    VapiAction.LIST: list_bookings,
}
