"""Booking and cancellation of appointments.

Every operation runs its precondition checks in a fixed order and raises a
``ServiceError`` on the first one that fails. The existence check before the
insert only produces a friendlier message; the unique constraint on
``(doctor_id, date, time)`` is what actually prevents a double booking, and a
violation of it is reported as the same conflict.
"""

import logging
from datetime import date, datetime
from typing import Callable

from backend.core.errors import conflict, not_found, validation_error
from backend.models.appointment import Appointment
from backend.repositories import AppointmentRepository, DuplicateBookingError, SlotDefinitionRepository
from backend.services.availability import collect_slot_times
from backend.services.validation import (
    require_fields,
    validate_doctor_id,
    validate_patient_name,
)

logger = logging.getLogger(__name__)

SLOT_ALREADY_BOOKED = 'Slot already booked'
SLOT_ALREADY_BOOKED_DETAILS = 'Please choose another available time'


def book_appointment(
    doctor_id: int | None,
    slot_date: date | None,
    slot_time: str | None,
    patient_name: str | None,
    slots: SlotDefinitionRepository,
    appointments: AppointmentRepository,
    clock: Callable[[], datetime] = datetime.now,
) -> Appointment:
    require_fields(doctor_id, slot_date, slot_time, patient_name)
    doctor_id = validate_doctor_id(doctor_id)
    patient_name = validate_patient_name(patient_name)

    definitions = slots.find(doctor_id, slot_date)
    if not definitions:
        raise validation_error('No slots available for this doctor on this date')

    if slot_time not in collect_slot_times(definitions):
        raise validation_error('Invalid time slot')

    requested_at = datetime.combine(slot_date, datetime.strptime(slot_time, '%H:%M').time())
    if requested_at < clock():
        raise validation_error('Cannot book in the past')

    if appointments.find_one(doctor_id, slot_date, slot_time) is not None:
        raise conflict(SLOT_ALREADY_BOOKED, SLOT_ALREADY_BOOKED_DETAILS)

    try:
        appointment = appointments.add(doctor_id, slot_date, slot_time, patient_name)
    except DuplicateBookingError as exc:
        logger.warning('Concurrent booking rejected by unique constraint: %s', exc)
        raise conflict(SLOT_ALREADY_BOOKED, SLOT_ALREADY_BOOKED_DETAILS) from exc

    logger.info('Booked appointment %s for doctor %s on %s at %s', appointment.id, doctor_id, slot_date, slot_time)
    return appointment


def cancel_appointment(booking_id: int, appointments: AppointmentRepository) -> None:
    appointment = appointments.get(booking_id)
    if appointment is None:
        raise not_found('Booking not found')

    appointments.delete(appointment)
    logger.info('Cancelled appointment %s', booking_id)


def bookings_for_date(
    slot_date: date,
    appointments: AppointmentRepository,
    doctor_id: int | None = None,
) -> list[Appointment]:
    return appointments.find(slot_date=slot_date, doctor_id=doctor_id)


def list_bookings(
    appointments: AppointmentRepository,
    slot_date: date | None = None,
    doctor_id: int | None = None,
) -> list[Appointment]:
    return appointments.find(slot_date=slot_date, doctor_id=doctor_id)
