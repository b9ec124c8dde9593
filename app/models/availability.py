# ===== app/models/availability.py =====
from sqlalchemy import Column, String, Integer, ForeignKey, CheckConstraint, Uuid
from sqlalchemy.orm import relationship
from app.models.base import Base
import uuid


class AvailabilitySlot(Base):
    """Weekly recurring opening window of a business"""
    __tablename__ = "availability_slots"
    __table_args__ = (
        CheckConstraint("day_of_week BETWEEN 0 AND 6", name="ck_availability_day_of_week"),
    )

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    business_id = Column(Uuid(as_uuid=True), ForeignKey("businesses.id"), nullable=False, index=True)

    day_of_week = Column(Integer, nullable=False)  # 0=Sunday, 6=Saturday
    start_time = Column(String(5), nullable=False)  # HH:MM format
    end_time = Column(String(5), nullable=False)  # HH:MM, earlier than start_time = closes after midnight

    business = relationship("Business", back_populates="availability_slots")

    def __repr__(self):
        return f"<AvailabilitySlot(day={self.day_of_week}, {self.start_time}-{self.end_time})>"
