# app/models/business.py
"""
Business Model
A tenant of the platform: owns availability rules, tables and bookings
"""
import enum
import uuid

from sqlalchemy import Column, String, Boolean, DateTime, Integer, Uuid
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.models.base import Base


class ConfirmationMode(str, enum.Enum):
    """How new public bookings are confirmed."""
    AUTOMATIC = "automatic"  # table assigned on the spot, rejected when full
    MANUAL = "manual"        # business accepts/rejects every request


class Business(Base):
    __tablename__ = "businesses"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(String(200), nullable=False)
    category = Column(String(100), nullable=False, default="restaurante")

    # Contact information
    phone = Column(String(20), nullable=True)
    email = Column(String(200), nullable=True)

    # Booking configuration
    booking_slot_duration_minutes = Column(Integer, nullable=False, default=60)
    confirmation_mode = Column(String(20), nullable=False, default=ConfirmationMode.AUTOMATIC.value)
    timezone = Column(String(50), default="Europe/Madrid")

    availability_slots = relationship(
        "AvailabilitySlot", back_populates="business", cascade="all, delete-orphan"
    )
    tables = relationship("Table", back_populates="business", cascade="all, delete-orphan")
    bookings = relationship("Booking", back_populates="business")

    # Technical fields
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )
    is_active = Column(Boolean, default=True)

    def __repr__(self):
        return f"<Business(id={self.id}, name={self.name})>"

    @property
    def requires_manual_confirmation(self) -> bool:
        return self.confirmation_mode == ConfirmationMode.MANUAL.value

