import logging
from datetime import date, datetime
from typing import Callable

from backend.core.errors import conflict, not_found, validation_error
from backend.models.doctor_slot import DoctorSlot
from backend.repositories import AppointmentRepository, SlotDefinitionRepository
from backend.services.overlap import TimeRange, overlaps
from backend.services.validation import (
    require_fields,
    validate_doctor_id,
    validate_slot_duration,
    validate_time,
    validate_time_order,
)

logger = logging.getLogger(__name__)

SLOT_OVERLAP_MESSAGE = 'Slot overlaps with an existing slot'


def _validate_slot_fields(start_time: str, end_time: str, slot_duration) -> tuple[str, str, int]:
    return (
        validate_time(start_time, 'Start time'),
        validate_time(end_time, 'End time'),
        validate_slot_duration(slot_duration),
    )


def _ranges_of(definitions: list[DoctorSlot]) -> list[TimeRange]:
    return [TimeRange(definition.start_time, definition.end_time) for definition in definitions]


def create_slot(
    doctor_id: int | None,
    slot_date: date | None,
    start_time: str | None,
    end_time: str | None,
    slot_duration: int | None,
    slots: SlotDefinitionRepository,
    clock: Callable[[], datetime] = datetime.now,
) -> DoctorSlot:
    require_fields(doctor_id, slot_date, start_time, end_time, slot_duration)
    doctor_id = validate_doctor_id(doctor_id)
    start_time, end_time, slot_duration = _validate_slot_fields(start_time, end_time, slot_duration)

    starts_at = datetime.combine(slot_date, datetime.strptime(start_time, '%H:%M').time())
    if starts_at <= clock():
        raise validation_error('Slot must be in the future (today with future time is allowed)')

    validate_time_order(start_time, end_time)

    existing = slots.find(doctor_id, slot_date)
    if overlaps(TimeRange(start_time, end_time), _ranges_of(existing)):
        raise conflict(
            SLOT_OVERLAP_MESSAGE,
            'Selected slot conflicts with an already scheduled slot.',
        )

    slot = slots.add(doctor_id, slot_date, start_time, end_time, slot_duration)
    logger.info(
        'Created slot %s for doctor %s on %s (%s-%s every %s min)',
        slot.id, doctor_id, slot_date, start_time, end_time, slot_duration,
    )
    return slot


def update_slot(
    slot_id: int,
    start_time: str | None,
    end_time: str | None,
    slot_duration: int | None,
    slots: SlotDefinitionRepository,
    appointments: AppointmentRepository,
) -> DoctorSlot:
    """Replace the times and duration of a slot definition.

    The slot must have no appointments in either its current or its
    requested range, both taken as half-open [start, end).
    """
    require_fields(start_time, end_time, slot_duration)
    start_time, end_time, slot_duration = _validate_slot_fields(start_time, end_time, slot_duration)
    validate_time_order(start_time, end_time)

    slot = slots.get(slot_id)
    if slot is None:
        raise not_found('Slot not found')

    others = [other for other in slots.find(slot.doctor_id, slot.date) if other.id != slot.id]
    if overlaps(TimeRange(start_time, end_time), _ranges_of(others)):
        raise conflict(
            SLOT_OVERLAP_MESSAGE,
            'The new time range conflicts with another slot for the doctor.',
        )

    has_bookings = appointments.exists_in_range(
        slot.doctor_id, slot.date, slot.start_time, slot.end_time
    ) or appointments.exists_in_range(slot.doctor_id, slot.date, start_time, end_time)
    if has_bookings:
        raise validation_error(
            'Cannot update slot with existing bookings',
            'Please cancel the existing appointments before editing this slot.',
        )

    slot = slots.update(slot, start_time, end_time, slot_duration)
    logger.info('Updated slot %s to %s-%s every %s min', slot.id, start_time, end_time, slot_duration)
    return slot


def delete_slot(
    slot_id: int,
    slots: SlotDefinitionRepository,
    appointments: AppointmentRepository,
) -> None:
    slot = slots.get(slot_id)
    if slot is None:
        raise not_found('Slot not found')

    if appointments.exists_in_range(slot.doctor_id, slot.date, slot.start_time, slot.end_time):
        raise validation_error(
            'Cannot delete slot with existing bookings in its time range',
            'Please cancel the existing appointments before deleting this slot.',
        )

    slots.delete(slot)
    logger.info('Deleted slot %s', slot_id)


def list_doctor_slots(
    doctor_id: int,
    slots: SlotDefinitionRepository,
    slot_date: date | None = None,
) -> list[DoctorSlot]:
    return slots.find(validate_doctor_id(doctor_id), slot_date)


def list_doctors(slots: SlotDefinitionRepository) -> list[int]:
    return slots.distinct_doctor_ids()
