"""Shared fixtures: in-memory database, seeded restaurants and an API client"""
import os

# Settings are read at import time, so the environment has to be ready first
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["NOTIFICATIONS_ENABLED"] = "false"
os.environ["VAPI_SECRET"] = "test-vapi-secret"
os.environ["PUBLIC_RATE_LIMIT_PER_MINUTE"] = "10000"
os.environ["DEFAULT_TIMEZONE"] = "Europe/Madrid"

from datetime import date

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.config.database import get_db
from app.main import create_app
from app.models import AvailabilitySlot, Base, Booking, BookingStatus, Business, ConfirmationMode, Table

VAPI_HEADERS = {"x-vapi-secret": "test-vapi-secret"}

MONDAY = date(2030, 1, 7)
FRIDAY = date(2030, 1, 11)
SUNDAY = date(2030, 1, 6)


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def client(session_factory):
    app = create_app()

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    return TestClient(app)


@pytest.fixture
def make_business(db):
    """Create a business with opening hours and tables; returns the Business"""

    def _make(
            hours=(),
            capacities=(),
            slot_duration=60,
            mode=ConfirmationMode.AUTOMATIC.value,
            email="owner@restaurant.example",
            is_active=True,
    ):
        business = Business(
            name="La Cebra",
            email=email,
            booking_slot_duration_minutes=slot_duration,
            confirmation_mode=mode,
            timezone="Europe/Madrid",
            is_active=is_active,
        )
        db.add(business)
        db.flush()

        for day, start, end in hours:
            db.add(AvailabilitySlot(business_id=business.id, day_of_week=day, start_time=start, end_time=end))

        for number, capacity in enumerate(capacities, start=1):
            db.add(Table(business_id=business.id, table_number=number, max_capacity=capacity))

        db.commit()
        db.refresh(business)
        return business

    return _make


@pytest.fixture
def make_booking(db):
    """Insert a booking directly, bypassing the assignment logic"""

    def _make(business, table=None, booking_date=MONDAY, start="20:00", end="22:00",
              party_size=2, status=BookingStatus.RESERVED.value, **extra):
        booking = Booking(
            business_id=business.id,
            table_id=table.id if table else None,
            client_name="Ana García",
            client_phone="+34600111222",
            booking_date=booking_date,
            start_time=start,
            end_time=end,
            party_size=party_size,
            status=status,
            **extra,
        )
        db.add(booking)
        db.commit()
        db.refresh(booking)
        return booking

    return _make


@pytest.fixture
def restaurant(make_business):
    """Dinner service every day 20:00-23:00, tables of 2, 4 and 6"""
    return make_business(
        hours=[(day, "20:00", "23:00") for day in range(7)],
        capacities=(2, 4, 6),
    )


def tables_by_capacity(business):
    return {table.max_capacity: table for table in business.tables}
