"""Appointment model definitions."""

from datetime import datetime

from sqlalchemy import Column, Date, DateTime, Integer, String, UniqueConstraint
from backend.database import Base


class Appointment(Base):
    """Represents a confirmed booking at one generated slot."""
    __tablename__ = "appointments"
    __table_args__ = (
        UniqueConstraint("doctor_id", "date", "time", name="uq_appointments_doctor_date_time"),
    )

    id = Column(Integer, primary_key=True)
    doctor_id = Column(Integer, nullable=False)
    date = Column(Date, nullable=False)
    time = Column(String(5), nullable=False)
    patient_name = Column(String(50), nullable=False)
    created_at = Column(DateTime, default=datetime.now)
    updated_at = Column(DateTime, default=datetime.now, onupdate=datetime.now)
