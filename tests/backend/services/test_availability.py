from datetime import date

from backend.models.doctor_slot import DoctorSlot
from backend.services.availability import (
    SlotStatus,
    all_slots_with_status,
    collect_slot_times,
    free_slots,
)

SLOT_DATE = date(2030, 1, 2)


def test_collect_slot_times_deduplicates_and_sorts_across_definitions() -> None:
    definitions = [
        DoctorSlot(start_time='10:00', end_time='11:00', slot_duration=30),
        DoctorSlot(start_time='09:00', end_time='10:00', slot_duration=15),
        DoctorSlot(start_time='10:00', end_time='10:30', slot_duration=15),
    ]

    assert collect_slot_times(definitions) == [
        '09:00', '09:15', '09:30', '09:45', '10:00', '10:15', '10:30',
    ]


def test_free_slots_removes_booked_times(slot_repository, appointment_repository) -> None:
    slot_repository.add(1, SLOT_DATE, '09:00', '10:00', 30)
    appointment_repository.add(1, SLOT_DATE, '09:00', 'Jane Doe')

    assert free_slots(1, SLOT_DATE, slot_repository, appointment_repository) == ['09:30']


def test_free_slots_is_empty_without_definitions(slot_repository, appointment_repository) -> None:
    assert free_slots(1, SLOT_DATE, slot_repository, appointment_repository) == []


def test_free_slots_ignores_other_doctors_and_dates(slot_repository, appointment_repository) -> None:
    slot_repository.add(1, SLOT_DATE, '09:00', '10:00', 30)
    slot_repository.add(2, SLOT_DATE, '09:00', '10:00', 30)
    appointment_repository.add(2, SLOT_DATE, '09:00', 'Jane Doe')
    appointment_repository.add(1, date(2030, 1, 3), '09:30', 'John Roe')

    assert free_slots(1, SLOT_DATE, slot_repository, appointment_repository) == ['09:00', '09:30']


def test_all_slots_with_status_flags_booked_times(slot_repository, appointment_repository) -> None:
    slot_repository.add(1, SLOT_DATE, '14:00', '15:00', 15)
    slot_repository.add(1, SLOT_DATE, '09:00', '09:30', 15)
    appointment_repository.add(1, SLOT_DATE, '14:30', 'Jane Doe')

    assert all_slots_with_status(1, SLOT_DATE, slot_repository, appointment_repository) == [
        SlotStatus(time='09:00', is_booked=False),
        SlotStatus(time='09:15', is_booked=False),
        SlotStatus(time='14:00', is_booked=False),
        SlotStatus(time='14:15', is_booked=False),
        SlotStatus(time='14:30', is_booked=True),
        SlotStatus(time='14:45', is_booked=False),
    ]


def test_all_slots_with_status_is_empty_without_definitions(slot_repository, appointment_repository) -> None:
    assert all_slots_with_status(1, SLOT_DATE, slot_repository, appointment_repository) == []
