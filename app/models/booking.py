# ===== app/models/booking.py =====
import enum
import secrets
import uuid

from sqlalchemy import Column, String, Integer, Text, Date, DateTime, ForeignKey, Index, Uuid
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.models.base import Base


class BookingStatus(str, enum.Enum):
    RESERVED = "reserved"
    CONFIRMED = "confirmed"
    PENDING_CONFIRMATION = "pending_confirmation"  # accepted by the business, waiting for the client
    PENDING = "pending"  # waitlisted or waiting for the business
    CANCELLED = "cancelled"
    COMPLETED = "completed"
    REJECTED = "rejected"
    NO_SHOW = "no_show"
    DELAYED = "delayed"
    IN_PROGRESS = "in_progress"


# Bookings in these states no longer hold their table
RELEASED_STATUSES = frozenset({
    BookingStatus.CANCELLED.value,
    BookingStatus.COMPLETED.value,
    BookingStatus.REJECTED.value,
    BookingStatus.NO_SHOW.value,
})


class BookingSource(str, enum.Enum):
    PUBLIC = "public"
    VOICE = "voice"
    STAFF = "staff"


class Booking(Base):
    __tablename__ = "bookings"
    __table_args__ = (
        Index("idx_bookings_business_date", "business_id", "booking_date"),
        Index("idx_bookings_table_date", "table_id", "booking_date"),
    )

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)

    # References
    business_id = Column(Uuid(as_uuid=True), ForeignKey("businesses.id"), nullable=False)
    table_id = Column(Uuid(as_uuid=True), ForeignKey("tables.id"), nullable=True)  # NULL = unassigned

    # Client info
    client_name = Column(String(200), nullable=False)
    client_phone = Column(String(30), nullable=False)
    client_email = Column(String(200), nullable=True)

    # Reservation window
    booking_date = Column(Date, nullable=False)
    start_time = Column(String(5), nullable=False)  # HH:MM
    end_time = Column(String(5), nullable=False)  # HH:MM
    party_size = Column(Integer, nullable=False)
    notes = Column(Text, nullable=True)

    # Status tracking
    status = Column(String(30), nullable=False, default=BookingStatus.PENDING.value)
    source = Column(String(20), nullable=False, default=BookingSource.PUBLIC.value)
    rejection_reason = Column(Text, nullable=True)

    # Confirmation links
    business_confirmation_token = Column(String(64), nullable=True, unique=True, index=True)
    client_confirmation_token = Column(String(64), nullable=True, unique=True, index=True)

    business = relationship("Business", back_populates="bookings")
    table = relationship("Table", back_populates="bookings")

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    def __repr__(self):
        return f"<Booking(id={self.id}, {self.booking_date} {self.start_time}-{self.end_time}, status={self.status})>"

    @staticmethod
    def generate_token() -> str:
        """Generate a URL-safe confirmation token"""
        return secrets.token_urlsafe(32)

    @property
    def table_number(self):
        return self.table.table_number if self.table else None

