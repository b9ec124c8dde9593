# ===== app/models/table.py =====
from sqlalchemy import Column, Integer, ForeignKey, CheckConstraint, DateTime, Uuid
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.models.base import Base
import uuid


class Table(Base):
    """A seatable unit of a business"""
    __tablename__ = "tables"
    __table_args__ = (
        CheckConstraint("max_capacity >= 1", name="ck_tables_max_capacity_positive"),
    )

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    business_id = Column(Uuid(as_uuid=True), ForeignKey("businesses.id"), nullable=False, index=True)

    table_number = Column(Integer, nullable=False)  # display label
    max_capacity = Column(Integer, nullable=False)

    business = relationship("Business", back_populates="tables")
    bookings = relationship("Booking", back_populates="table")

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    def __repr__(self):
        return f"<Table(number={self.table_number}, capacity={self.max_capacity})>"
