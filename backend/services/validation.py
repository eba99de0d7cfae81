import re

from backend.core.errors import validation_error

TIME_PATTERN = re.compile(r'^([01][0-9]|2[0-3]):[0-5][0-9]$')
PATIENT_NAME_PATTERN = re.compile(r'^[A-Za-z ]+$')
PATIENT_NAME_MIN_LENGTH = 2
PATIENT_NAME_MAX_LENGTH = 50
ALLOWED_SLOT_DURATIONS = (15, 30, 45, 60)

ALL_FIELDS_REQUIRED = 'All fields are required'


def is_missing(value) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def require_fields(*values) -> None:
    if any(is_missing(value) for value in values):
        raise validation_error(ALL_FIELDS_REQUIRED)


def validate_doctor_id(doctor_id) -> int:
    if isinstance(doctor_id, bool) or not isinstance(doctor_id, int) or doctor_id < 1:
        raise validation_error('Doctor ID must be a positive integer')
    return doctor_id


def validate_time(value: str, label: str) -> str:
    normalized = value.strip()
    if not TIME_PATTERN.match(normalized):
        raise validation_error(f'{label} must be in HH:MM format')
    return normalized


def validate_slot_duration(slot_duration) -> int:
    if isinstance(slot_duration, bool) or slot_duration not in ALLOWED_SLOT_DURATIONS:
        allowed = ', '.join(str(minutes) for minutes in ALLOWED_SLOT_DURATIONS)
        raise validation_error(f'Slot duration must be one of {allowed} minutes')
    return int(slot_duration)


def validate_patient_name(patient_name: str) -> str:
    normalized = patient_name.strip()

    if not PATIENT_NAME_PATTERN.match(normalized):
        raise validation_error('Patient name must contain only letters and spaces')

    if not PATIENT_NAME_MIN_LENGTH <= len(normalized) <= PATIENT_NAME_MAX_LENGTH:
        raise validation_error(
            f'Patient name must be between {PATIENT_NAME_MIN_LENGTH} '
            f'and {PATIENT_NAME_MAX_LENGTH} characters long'
        )

    return normalized


def validate_time_order(start_time: str, end_time: str) -> None:
    if end_time <= start_time:
        raise validation_error('End time must be after start time')


def reject_boolean_id(value):
    # JSON true/false would otherwise coerce to 1/0.
    if isinstance(value, bool):
        raise ValueError('Doctor ID must be a positive integer')
    return value
