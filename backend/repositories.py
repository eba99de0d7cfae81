"""Persistence access for slot definitions and appointments.

Services take any object implementing the two protocols below; the SQLAlchemy
implementations are what the routes inject.
"""

from datetime import date
from typing import Protocol

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from backend.models.appointment import Appointment
from backend.models.doctor_slot import DoctorSlot


class DuplicateBookingError(Exception):
    """Raised when the store rejects an appointment on its uniqueness constraint."""


class SlotDefinitionRepository(Protocol):
    def find(self, doctor_id: int, slot_date: date | None = None) -> list[DoctorSlot]: ...

    def get(self, slot_id: int) -> DoctorSlot | None: ...

    def add(
        self,
        doctor_id: int,
        slot_date: date,
        start_time: str,
        end_time: str,
        slot_duration: int,
    ) -> DoctorSlot: ...

    def update(self, slot: DoctorSlot, start_time: str, end_time: str, slot_duration: int) -> DoctorSlot: ...

    def delete(self, slot: DoctorSlot) -> None: ...

    def distinct_doctor_ids(self) -> list[int]: ...


class AppointmentRepository(Protocol):
    def find(self, slot_date: date | None = None, doctor_id: int | None = None) -> list[Appointment]: ...

    def find_one(self, doctor_id: int, slot_date: date, slot_time: str) -> Appointment | None: ...

    def get(self, appointment_id: int) -> Appointment | None: ...

    def booked_times(self, doctor_id: int, slot_date: date) -> set[str]: ...

    def exists_in_range(self, doctor_id: int, slot_date: date, start_time: str, end_time: str) -> bool: ...

    def add(self, doctor_id: int, slot_date: date, slot_time: str, patient_name: str) -> Appointment: ...

    def delete(self, appointment: Appointment) -> None: ...


class SqlSlotDefinitionRepository:
    def __init__(self, db: Session) -> None:
        self.db = db

    def find(self, doctor_id: int, slot_date: date | None = None) -> list[DoctorSlot]:
        query = self.db.query(DoctorSlot).filter(DoctorSlot.doctor_id == doctor_id)
        if slot_date is not None:
            query = query.filter(DoctorSlot.date == slot_date)
        return query.order_by(DoctorSlot.date.asc(), DoctorSlot.start_time.asc()).all()

    def get(self, slot_id: int) -> DoctorSlot | None:
        return self.db.query(DoctorSlot).filter(DoctorSlot.id == slot_id).first()

    def add(
        self,
        doctor_id: int,
        slot_date: date,
        start_time: str,
        end_time: str,
        slot_duration: int,
    ) -> DoctorSlot:
        slot = DoctorSlot(
            doctor_id=doctor_id,
            date=slot_date,
            start_time=start_time,
            end_time=end_time,
            slot_duration=slot_duration,
        )
        self.db.add(slot)
        self.db.commit()
        self.db.refresh(slot)
        return slot

    def update(self, slot: DoctorSlot, start_time: str, end_time: str, slot_duration: int) -> DoctorSlot:
        slot.start_time = start_time
        slot.end_time = end_time
        slot.slot_duration = slot_duration
        self.db.commit()
        self.db.refresh(slot)
        return slot

    def delete(self, slot: DoctorSlot) -> None:
        self.db.delete(slot)
        self.db.commit()

    def distinct_doctor_ids(self) -> list[int]:
        rows = self.db.query(DoctorSlot.doctor_id).distinct().order_by(DoctorSlot.doctor_id.asc()).all()
        return [doctor_id for (doctor_id,) in rows]


class SqlAppointmentRepository:
    def __init__(self, db: Session) -> None:
        self.db = db

    def find(self, slot_date: date | None = None, doctor_id: int | None = None) -> list[Appointment]:
        query = self.db.query(Appointment)
        if slot_date is not None:
            query = query.filter(Appointment.date == slot_date)
        if doctor_id is not None:
            query = query.filter(Appointment.doctor_id == doctor_id)
        return query.order_by(Appointment.date.asc(), Appointment.time.asc()).all()

    def find_one(self, doctor_id: int, slot_date: date, slot_time: str) -> Appointment | None:
        return self.db.query(Appointment).filter(
            Appointment.doctor_id == doctor_id,
            Appointment.date == slot_date,
            Appointment.time == slot_time,
        ).first()

    def get(self, appointment_id: int) -> Appointment | None:
        return self.db.query(Appointment).filter(Appointment.id == appointment_id).first()

    def booked_times(self, doctor_id: int, slot_date: date) -> set[str]:
        rows = self.db.query(Appointment.time).filter(
            Appointment.doctor_id == doctor_id,
            Appointment.date == slot_date,
        ).all()
        return {booked_time for (booked_time,) in rows}

    def exists_in_range(self, doctor_id: int, slot_date: date, start_time: str, end_time: str) -> bool:
        # Half-open [start_time, end_time).
        match = self.db.query(Appointment.id).filter(
            Appointment.doctor_id == doctor_id,
            Appointment.date == slot_date,
            Appointment.time >= start_time,
            Appointment.time < end_time,
        ).first()
        return match is not None

    def add(self, doctor_id: int, slot_date: date, slot_time: str, patient_name: str) -> Appointment:
        appointment = Appointment(
            doctor_id=doctor_id,
            date=slot_date,
            time=slot_time,
            patient_name=patient_name,
        )
        self.db.add(appointment)
        try:
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            raise DuplicateBookingError(
                f'Doctor {doctor_id} is already booked on {slot_date} at {slot_time}.'
            ) from exc
        self.db.refresh(appointment)
        return appointment

    def delete(self, appointment: Appointment) -> None:
        self.db.delete(appointment)
        self.db.commit()
