"""Doctor slot model definitions."""

from datetime import datetime

from sqlalchemy import Column, Date, DateTime, Index, Integer, String
from backend.database import Base


class DoctorSlot(Base):
    """Represents a doctor-declared availability window on one date."""
    __tablename__ = "doctor_slots"
    __table_args__ = (
        Index("idx_doctor_slots_doctor_date", "doctor_id", "date"),
    )

    id = Column(Integer, primary_key=True)
    doctor_id = Column(Integer, nullable=False)
    date = Column(Date, nullable=False)
    start_time = Column(String(5), nullable=False)
    end_time = Column(String(5), nullable=False)
    slot_duration = Column(Integer, nullable=False)
    created_at = Column(DateTime, default=datetime.now)
    updated_at = Column(DateTime, default=datetime.now, onupdate=datetime.now)
