#!/usr/bin/env python3
"""
Script to create a demo restaurant with opening hours and tables
Usage: python -m app.scripts.create_business [--manual]
"""
import argparse
import sys

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.config.database import SessionLocal
from app.models import AvailabilitySlot, Business, ConfirmationMode, Table

DAY_NAMES = ["Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"]

# Day of week uses 0=Sunday; an end earlier than the start closes after midnight
OPENING_HOURS = [
    {"day_of_week": 2, "start_time": "13:00", "end_time": "16:00"},
    {"day_of_week": 2, "start_time": "20:00", "end_time": "23:30"},
    {"day_of_week": 3, "start_time": "13:00", "end_time": "16:00"},
    {"day_of_week": 3, "start_time": "20:00", "end_time": "23:30"},
    {"day_of_week": 4, "start_time": "13:00", "end_time": "16:00"},
    {"day_of_week": 4, "start_time": "20:00", "end_time": "23:30"},
    {"day_of_week": 5, "start_time": "13:00", "end_time": "16:00"},
    {"day_of_week": 5, "start_time": "20:00", "end_time": "02:00"},
    {"day_of_week": 6, "start_time": "13:00", "end_time": "16:30"},
    {"day_of_week": 6, "start_time": "20:00", "end_time": "02:00"},
    {"day_of_week": 0, "start_time": "13:00", "end_time": "16:30"},
]

TABLES = [
    {"table_number": 1, "max_capacity": 2},
    {"table_number": 2, "max_capacity": 2},
    {"table_number": 3, "max_capacity": 4},
    {"table_number": 4, "max_capacity": 4},
    {"table_number": 5, "max_capacity": 6},
    {"table_number": 6, "max_capacity": 8},
]


def create_restaurant(manual_confirmation: bool = False) -> str:
    """Create the demo restaurant and return its ID"""
    db: Session = SessionLocal()

    try:
        business = Business(
            name="Casa Zebra",
            category="restaurante",
            phone="+34910000000",
            email="reservas@casazebra.example",
            booking_slot_duration_minutes=90,
            confirmation_mode=(
                ConfirmationMode.MANUAL.value if manual_confirmation else ConfirmationMode.AUTOMATIC.value
            ),
            timezone="Europe/Madrid",
        )
        db.add(business)
        db.flush()  # Get the ID without committing

        for hours in OPENING_HOURS:
            db.add(AvailabilitySlot(business_id=business.id, **hours))

        for table in TABLES:
            db.add(Table(business_id=business.id, **table))

        db.commit()

    except SQLAlchemyError as e:
        db.rollback()
        print(f"\n❌ Error creating business: {e}")
        sys.exit(1)
    finally:
        db.close()

    print("\n" + "=" * 60)
    print("BUSINESS CREATED SUCCESSFULLY!")
    print("=" * 60)
    print(f"\nBusiness ID: {business.id}")
    print(f"Name: {business.name}")
    print(f"Confirmation mode: {business.confirmation_mode}")
    print(f"Slot duration: {business.booking_slot_duration_minutes} min")
    print("\nOpening hours:")
    for hours in OPENING_HOURS:
        print(f"  {DAY_NAMES[hours['day_of_week']]:10} {hours['start_time']} - {hours['end_time']}")
    print("\nTables:")
    for table in TABLES:
        print(f"  Table {table['table_number']}: up to {table['max_capacity']} guests")
    print()

    return str(business.id)


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Create a demo restaurant")
    parser.add_argument("--manual", action="store_true", help="require the business to confirm each booking")
    args = parser.parse_args()
    create_restaurant(manual_confirmation=args.manual)
