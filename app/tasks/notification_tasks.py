# ===== app/tasks/notification_tasks.py =====
import logging
import uuid

from app.config.celery_config import celery_app
from app.config.database import SessionLocal
from app.models.booking import Booking
from app.services.email.email_service import EmailService

logger = logging.getLogger(__name__)


def _load_booking(db, booking_id: str) -> Booking:
    booking = db.query(Booking).filter(Booking.id == uuid.UUID(booking_id)).first()
    if not booking:
        raise ValueError(f"Booking {booking_id} not found")
    return booking


def _summary(booking: Booking) -> str:
    return EmailService.booking_summary(
        business_name=booking.business.name,
        booking_date=booking.booking_date.isoformat(),
        start_time=booking.start_time,
        end_time=booking.end_time,
        party_size=booking.party_size,
    )


@celery_app.task(bind=True, max_retries=3)
def send_business_booking_notification(self, booking_id: str):
    """
    Email the business a new booking request with accept/reject links

    Args:
        booking_id: Booking awaiting the business decision
    """
    db = SessionLocal()
    try:
        booking = _load_booking(db, booking_id)
        business = booking.business

        if not business.email:
            logger.warning(f"Business {business.id} has no email, skipping notification for booking {booking_id}")
            return {"status": "skipped", "booking_id": booking_id}

        logger.info(f"Sending booking request for {booking_id} to {business.email}")

        EmailService.send_business_booking_request(
            to_email=business.email,
            business_name=business.name,
            client_name=booking.client_name,
            client_phone=booking.client_phone,
            summary=_summary(booking),
            token=booking.business_confirmation_token,
        )

        return {"status": "success", "booking_id": booking_id}

    except Exception as exc:
        logger.error(f"Failed to notify business about booking {booking_id}: {exc}")

        # Retry with exponential backoff: 1min, 2min, 4min
        raise self.retry(
            exc=exc,
            countdown=60 * (2 ** self.request.retries)
        )
    finally:
        db.close()


@celery_app.task(bind=True, max_retries=3)
def send_client_confirmation_request(self, booking_id: str):
    """
    Email the client a link to confirm a booking accepted by the business

    Args:
        booking_id: Booking waiting for client confirmation
    """
    db = SessionLocal()
    try:
        booking = _load_booking(db, booking_id)

        if not booking.client_email:
            logger.warning(f"Booking {booking_id} has no client email, skipping confirmation request")
            return {"status": "skipped", "booking_id": booking_id}

        logger.info(f"Sending confirmation request for {booking_id} to {booking.client_email}")

        EmailService.send_client_confirmation_request(
            to_email=booking.client_email,
            client_name=booking.client_name,
            summary=_summary(booking),
            token=booking.client_confirmation_token,
        )

        return {"status": "success", "booking_id": booking_id}

    except Exception as exc:
        logger.error(f"Failed to send confirmation request for booking {booking_id}: {exc}")

        raise self.retry(
            exc=exc,
            countdown=60 * (2 ** self.request.retries)
        )
    finally:
        db.close()
