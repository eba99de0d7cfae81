"""Turns a doctor's declared slot definitions into bookable times."""

from dataclasses import dataclass
from datetime import date
from typing import Iterable

from backend.models.doctor_slot import DoctorSlot
from backend.repositories import AppointmentRepository, SlotDefinitionRepository
from backend.services.slot_generator import generate_slots


@dataclass(frozen=True)
class SlotStatus:
    time: str
    is_booked: bool


def collect_slot_times(definitions: Iterable[DoctorSlot]) -> list[str]:
    """Union of the generated slots of every definition, sorted ascending.

    Contiguous definitions can produce the same time twice; the set collapses
    those duplicates.
    """
    slot_times: set[str] = set()
    for definition in definitions:
        slot_times.update(
            generate_slots(definition.start_time, definition.end_time, definition.slot_duration)
        )
    return sorted(slot_times)


def candidate_slots(
    doctor_id: int,
    slot_date: date,
    slots: SlotDefinitionRepository,
) -> list[str]:
    return collect_slot_times(slots.find(doctor_id, slot_date))


def free_slots(
    doctor_id: int,
    slot_date: date,
    slots: SlotDefinitionRepository,
    appointments: AppointmentRepository,
) -> list[str]:
    all_times = candidate_slots(doctor_id, slot_date, slots)
    if not all_times:
        return []

    booked_times = appointments.booked_times(doctor_id, slot_date)
    return [slot_time for slot_time in all_times if slot_time not in booked_times]


def all_slots_with_status(
    doctor_id: int,
    slot_date: date,
    slots: SlotDefinitionRepository,
    appointments: AppointmentRepository,
) -> list[SlotStatus]:
    all_times = candidate_slots(doctor_id, slot_date, slots)
    if not all_times:
        return []

    booked_times = appointments.booked_times(doctor_id, slot_date)
    return [SlotStatus(time=slot_time, is_booked=slot_time in booked_times) for slot_time in all_times]
