# ============================================================================
# app/services/booking/booking_service.py
# ============================================================================
"""Service for creating and managing bookings"""
import logging
from datetime import date
from typing import Dict, List, Optional, Tuple

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from app.config.settings import get_settings
from app.models.booking import Booking, BookingSource, BookingStatus, RELEASED_STATUSES
from app.models.business import Business
from app.models.table import Table
from app.schemas.booking import PublicBookingRequest
from app.schemas.vapi_events import VapiBookingRequest
from app.services.availability.availability_service import AvailabilityService
from app.services.booking.exceptions import (
    BookingNotFoundError,
    BusinessNotFoundError,
    InvalidBookingActionError,
    NoAvailabilityError,
)
from app.tasks.notification_tasks import (
    send_business_booking_notification,
    send_client_confirmation_request,
)
from app.utils.time_utils import add_minutes, normalize_window, slot_sort_key, to_minutes

logger = logging.getLogger(__name__)
settings = get_settings()

# Changing any of these on an existing booking means its table has to be re-checked
REASSIGNMENT_FIELDS = ("booking_date", "start_time", "end_time", "party_size")


def booking_length(booking: Booking) -> int:
    """Length of a booking in minutes, across midnight when needed"""
    start, end = normalize_window(to_minutes(booking.start_time), to_minutes(booking.end_time))
    return end - start


class BookingService:
    """Handles booking operations"""

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    @staticmethod
    def get_active_business(db: Session, business_id, lock: bool = False) -> Business:
        """
        Load an active business or raise BusinessNotFoundError.

        With `lock=True` the business row is locked (SELECT ... FOR UPDATE) until
        the transaction ends, which serializes concurrent writers of one business.
        """
        query = db.query(Business).filter(
            Business.id == business_id,
            Business.is_active == True
        )
        if lock:
            query = query.with_for_update()

        business = query.first()
        if not business:
            raise BusinessNotFoundError("Business not found or inactive")
        return business

    @staticmethod
    def get_booking(db: Session, booking_id) -> Booking:
        booking = db.query(Booking).filter(Booking.id == booking_id).first()
        if not booking:
            raise BookingNotFoundError("Booking not found")
        return booking

    # ------------------------------------------------------------------
    # Creation
    # ------------------------------------------------------------------

    @staticmethod
    def create_public_booking(db: Session, request: PublicBookingRequest) -> Booking:
        """
        Create a booking from the public booking widget.

        Automatic-confirmation businesses get a table on the spot or a
        NoAvailabilityError. Manual-confirmation businesses always receive the
        request as `pending` (holding a table when one is free) and are notified.
        """
        try:
            business = BookingService.get_active_business(db, request.business_id, lock=True)
            end_time = AvailabilityService.slot_end_time(business, request.start_time)

            table = AvailabilityService.find_available_table(
                db,
                business_id=business.id,
                target_date=request.booking_date,
                start_time=request.start_time,
                end_time=end_time,
                party_size=request.party_size,
            )

            if business.requires_manual_confirmation:
                status = BookingStatus.PENDING.value
            elif table:
                status = BookingStatus.RESERVED.value
            else:
                raise NoAvailabilityError("No availability for the selected date and time")

            booking = Booking(
                business_id=business.id,
                table_id=table.id if table else None,
                client_name=request.client_name,
                client_phone=request.client_phone,
                client_email=request.client_email,
                booking_date=request.booking_date,
                start_time=request.start_time,
                end_time=end_time,
                party_size=request.party_size,
                notes=request.notes,
                status=status,
                source=BookingSource.PUBLIC.value,
            )
            if business.requires_manual_confirmation:
                booking.business_confirmation_token = Booking.generate_token()

            db.add(booking)
            db.commit()
            db.refresh(booking)

        except NoAvailabilityError:
            db.rollback()
            logger.info(f"Public booking rejected, no availability: business {request.business_id} {request.booking_date} {request.start_time}")
            raise
        except BusinessNotFoundError:
            db.rollback()
            raise
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Failed to create public booking for business {request.business_id}: {e}")
            raise

        logger.info(f"Public booking {booking.id} created with status {booking.status}, table {booking.table_number}")

        if booking.business_confirmation_token:
            BookingService._queue_notification(send_business_booking_notification, booking)

        return booking

    @staticmethod
    def create_voice_booking(db: Session, request: VapiBookingRequest) -> Booking:
        """Create a booking for the voice assistant; never refuses, falls back to a waitlisted booking"""
        try:
            business = BookingService.get_active_business(db, request.business_id, lock=True)

            table = AvailabilityService.find_available_table(
                db,
                business_id=business.id,
                target_date=request.booking_date,
                start_time=request.start_time,
                end_time=request.end_time,
                party_size=request.party_size,
            )

            booking = Booking(
                business_id=business.id,
                table_id=table.id if table else None,
                client_name=request.client_name,
                client_phone=request.client_phone,
                client_email=request.client_email or None,
                booking_date=request.booking_date,
                start_time=request.start_time,
                end_time=request.end_time,
                party_size=request.party_size,
                notes=request.notes or None,
                status=BookingStatus.RESERVED.value if table else BookingStatus.PENDING.value,
                source=BookingSource.VOICE.value,
            )

            db.add(booking)
            db.commit()
            db.refresh(booking)

        except BusinessNotFoundError:
            db.rollback()
            raise
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Failed to create voice booking for business {request.business_id}: {e}")
            raise

        logger.info(f"Voice booking {booking.id} created with status {booking.status}, table {booking.table_number}")
        return booking

    # ------------------------------------------------------------------
    # Changes
    # ------------------------------------------------------------------

    @staticmethod
    def cancel_booking(db: Session, booking_id) -> Booking:
        booking = BookingService.get_booking(db, booking_id)

        try:
            booking.status = BookingStatus.CANCELLED.value
            db.commit()
            db.refresh(booking)
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Failed to cancel booking {booking_id}: {e}")
            raise

        logger.info(f"Booking {booking_id} cancelled")
        return booking

    @staticmethod
    def update_booking(db: Session, booking_id, changes: Dict) -> Booking:
        """
        Apply `changes` to a booking.

        When the date, times or party size change, the table is re-assigned
        (the booking's own current window does not count as a conflict).
        """
        booking = BookingService.get_booking(db, booking_id)
        if booking.status in RELEASED_STATUSES:
            raise InvalidBookingActionError(f"Booking is already {booking.status}")

        try:
            for field in ("client_name", "client_phone"):
                if changes.get(field):
                    setattr(booking, field, changes[field])

            for field in ("client_email", "notes"):
                if field in changes:
                    setattr(booking, field, changes[field] or None)

            if any(changes.get(field) for field in REASSIGNMENT_FIELDS):
                BookingService.get_active_business(db, booking.business_id, lock=True)

                # Moving only the start keeps the booking's length
                if changes.get("start_time") and not changes.get("end_time"):
                    changes = dict(changes, end_time=add_minutes(changes["start_time"], booking_length(booking)))

                for field in REASSIGNMENT_FIELDS:
                    if changes.get(field):
                        setattr(booking, field, changes[field])

                table = AvailabilityService.find_available_table(
                    db,
                    business_id=booking.business_id,
                    target_date=booking.booking_date,
                    start_time=booking.start_time,
                    end_time=booking.end_time,
                    party_size=booking.party_size,
                    exclude_booking_id=booking.id,
                )
                booking.table_id = table.id if table else None
                booking.status = BookingStatus.RESERVED.value if table else BookingStatus.PENDING.value

            db.commit()
            db.refresh(booking)

        except BusinessNotFoundError:
            db.rollback()
            raise
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Failed to update booking {booking_id}: {e}")
            raise

        logger.info(f"Booking {booking_id} updated, status {booking.status}, table {booking.table_number}")
        return booking

    # ------------------------------------------------------------------
    # Read-only
    # ------------------------------------------------------------------

    @staticmethod
    def check_availability(
            db: Session,
            business_id,
            target_date: date,
            start_time: str,
            end_time: str,
            party_size: int
    ) -> Optional[Table]:
        BookingService.get_active_business(db, business_id)
        return AvailabilityService.find_available_table(
            db,
            business_id=business_id,
            target_date=target_date,
            start_time=start_time,
            end_time=end_time,
            party_size=party_size,
        )

    @staticmethod
    def list_bookings(db: Session, business_id, target_date: date) -> List[Booking]:
        """Non-cancelled bookings of a day, in service order (post-midnight last)"""
        bookings = db.query(Booking).options(joinedload(Booking.table)).filter(
            Booking.business_id == business_id,
            Booking.booking_date == target_date,
            Booking.status != BookingStatus.CANCELLED.value
        ).all()

        cutoff = settings.EARLY_MORNING_CUTOFF_MINUTES
        return sorted(bookings, key=lambda b: slot_sort_key(b.start_time, cutoff))

    # ------------------------------------------------------------------
    # Confirmation links
    # ------------------------------------------------------------------

    @staticmethod
    def apply_business_action(db: Session, token: str, action: str) -> Tuple[Booking, str]:
        """
        Accept or reject a manual-confirmation booking via its business link.

        Accepting hands the booking to the client for final confirmation;
        rejecting releases its table.
        """
        if action not in ("accept", "reject"):
            raise InvalidBookingActionError("Invalid action. Must be 'accept' or 'reject'")

        booking = db.query(Booking).filter(Booking.business_confirmation_token == token).first()
        if not booking:
            raise BookingNotFoundError("Booking not found. The link may have expired or be invalid")

        if booking.status != BookingStatus.PENDING.value:
            raise InvalidBookingActionError(f"Booking is already {booking.status}")

        try:
            if action == "accept":
                booking.status = BookingStatus.PENDING_CONFIRMATION.value
                booking.client_confirmation_token = booking.client_confirmation_token or Booking.generate_token()
                message = "Booking accepted, waiting for the client to confirm"
            else:
                booking.status = BookingStatus.REJECTED.value
                booking.rejection_reason = "Rejected by the business"
                message = "Booking rejected"

            db.commit()
            db.refresh(booking)
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Failed to {action} booking {booking.id}: {e}")
            raise

        logger.info(f"Booking {booking.id} {action}ed by business")

        if action == "accept":
            BookingService._queue_notification(send_client_confirmation_request, booking)

        return booking, message

    @staticmethod
    def confirm_by_client(db: Session, token: str) -> Tuple[Booking, str]:
        booking = db.query(Booking).filter(Booking.client_confirmation_token == token).first()
        if not booking:
            raise BookingNotFoundError("Booking not found. The link may have expired or be invalid")

        if booking.status == BookingStatus.CONFIRMED.value:
            return booking, "Booking was already confirmed"

        if booking.status != BookingStatus.PENDING_CONFIRMATION.value:
            raise InvalidBookingActionError(f"Booking is already {booking.status}")

        try:
            booking.status = BookingStatus.CONFIRMED.value
            db.commit()
            db.refresh(booking)
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Failed to confirm booking {booking.id}: {e}")
            raise

        logger.info(f"Booking {booking.id} confirmed by client")
        return booking, "Booking confirmed"

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _queue_notification(task, booking: Booking) -> None:
        """Queue a notification task; a broker outage must not fail the booking"""
        if not settings.NOTIFICATIONS_ENABLED:
            return

        try:
            task.delay(str(booking.id))
        except Exception as e:
            logger.error(f"Failed to queue {task.name} for booking {booking.id}: {e}")
