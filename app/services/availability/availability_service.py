# ===== app/services/availability/availability_service.py =====
from datetime import date, datetime
from typing import List, Optional
from zoneinfo import ZoneInfo

from sqlalchemy.orm import Session

from app.config.settings import get_settings
from app.models.availability import AvailabilitySlot
from app.models.booking import Booking, RELEASED_STATUSES
from app.models.business import Business
from app.models.table import Table
from app.services.availability.slot_generator import generate_slots
from app.services.availability.table_matcher import candidate_tables, find_table, occupied_windows, is_table_free
from app.utils.time_utils import add_minutes, effective_minutes, to_minutes
import logging

logger = logging.getLogger(__name__)
settings = get_settings()


def list_available_slots(
        rules: List,
        tables: List,
        bookings: List,
        target_date: date,
        party_size: int,
        slot_duration: int,
        cutoff: int = None
) -> List[str]:
    """
    Start times on `target_date` for which at least one table seats the party
    for a full slot without clashing with a held booking.
    """
    cutoff = settings.EARLY_MORNING_CUTOFF_MINUTES if cutoff is None else cutoff

    fitting_tables = candidate_tables(tables, party_size)
    if not fitting_tables:
        return []

    held = occupied_windows(bookings, target_date)

    available = []
    for slot in generate_slots(rules, target_date, slot_duration, cutoff):
        slot_end = add_minutes(slot, slot_duration)
        if any(is_table_free(held.get(table.id, []), slot, slot_end, cutoff) for table in fitting_tables):
            available.append(slot)

    return available


def assign_table(
        tables: List,
        bookings: List,
        target_date: date,
        start_time: str,
        end_time: str,
        party_size: int,
        exclude_booking_id=None,
        cutoff: int = None
) -> Optional[Table]:
    """Table to hold for the requested window, or None when nothing fits"""
    cutoff = settings.EARLY_MORNING_CUTOFF_MINUTES if cutoff is None else cutoff
    return find_table(
        tables, bookings, target_date, start_time, end_time, party_size,
        exclude_booking_id=exclude_booking_id, cutoff=cutoff,
    )


class AvailabilityService:
    """Loads a business's rules, tables and bookings and runs the engine on them"""

    @staticmethod
    def get_rules(db: Session, business_id) -> List[AvailabilitySlot]:
        return db.query(AvailabilitySlot).filter(
            AvailabilitySlot.business_id == business_id
        ).order_by(AvailabilitySlot.day_of_week, AvailabilitySlot.start_time).all()

    @staticmethod
    def get_tables(db: Session, business_id) -> List[Table]:
        return db.query(Table).filter(
            Table.business_id == business_id
        ).order_by(Table.max_capacity, Table.table_number).all()

    @staticmethod
    def get_holding_bookings(db: Session, business_id, target_date: date) -> List[Booking]:
        """Bookings of the date that currently hold a table"""
        return db.query(Booking).filter(
            Booking.business_id == business_id,
            Booking.booking_date == target_date,
            Booking.table_id.isnot(None),
            Booking.status.notin_(sorted(RELEASED_STATUSES))
        ).all()

    @staticmethod
    def slot_duration(business: Business) -> int:
        return business.booking_slot_duration_minutes or settings.DEFAULT_SLOT_DURATION_MINUTES

    @staticmethod
    def slot_end_time(business: Business, start_time: str) -> str:
        """End of a booking starting at `start_time` that lasts one slot"""
        return add_minutes(start_time, AvailabilityService.slot_duration(business))

    @staticmethod
    def get_available_slots(
            db: Session,
            business: Business,
            target_date: date,
            party_size: int,
            now: Optional[datetime] = None
    ) -> List[str]:
        """
        Free start times for a party on `target_date`.

        When `now` is given and falls on `target_date` in the business's
        timezone, start times that have already passed are dropped.
        """
        rules = AvailabilityService.get_rules(db, business.id)
        if not rules:
            logger.info(f"No availability rules for business {business.id}")
            return []

        slots = list_available_slots(
            rules=rules,
            tables=AvailabilityService.get_tables(db, business.id),
            bookings=AvailabilityService.get_holding_bookings(db, business.id, target_date),
            target_date=target_date,
            party_size=party_size,
            slot_duration=AvailabilityService.slot_duration(business),
        )

        if now is not None:
            slots = AvailabilityService.drop_past_slots(business, slots, target_date, now)

        return slots

    @staticmethod
    def drop_past_slots(business: Business, slots: List[str], target_date: date, now: datetime) -> List[str]:
        """Remove slots that started before `now` when listing today's availability"""
        local_now = now.astimezone(ZoneInfo(business.timezone or settings.DEFAULT_TIMEZONE))
        if local_now.date() != target_date:
            return slots

        current = local_now.hour * 60 + local_now.minute
        cutoff = settings.EARLY_MORNING_CUTOFF_MINUTES
        return [slot for slot in slots if effective_minutes(to_minutes(slot), cutoff) > current]

    @staticmethod
    def find_available_table(
            db: Session,
            business_id,
            target_date: date,
            start_time: str,
            end_time: str,
            party_size: int,
            exclude_booking_id=None
    ) -> Optional[Table]:
        """Run the table assignment against the committed bookings of the date"""
        table = assign_table(
            tables=AvailabilityService.get_tables(db, business_id),
            bookings=AvailabilityService.get_holding_bookings(db, business_id, target_date),
            target_date=target_date,
            start_time=start_time,
            end_time=end_time,
            party_size=party_size,
            exclude_booking_id=exclude_booking_id,
        )

        if table:
            logger.info(f"Table {table.table_number} available for {party_size} on {target_date} {start_time}-{end_time}")
        else:
            logger.info(f"No table available for {party_size} on {target_date} {start_time}-{end_time}")

        return table

    @staticmethod
    def get_open_days(db: Session, business_id) -> List[int]:
        """Days of week (0=Sunday) with at least one availability rule"""
        rows = db.query(AvailabilitySlot.day_of_week).filter(
            AvailabilitySlot.business_id == business_id
        ).distinct().all()
        return sorted(row[0] for row in rows)
