MINUTES_PER_HOUR = 60


def time_to_minutes(value: str) -> int:
    hours, minutes = value.split(':')
    return int(hours) * MINUTES_PER_HOUR + int(minutes)


def minutes_to_time(total_minutes: int) -> str:
    hours, minutes = divmod(total_minutes, MINUTES_PER_HOUR)
    return f'{hours:02d}:{minutes:02d}'


def generate_slots(start_time: str, end_time: str, duration_minutes: int) -> list[str]:
    """Return the bookable start times between two HH:MM times.

    A slot is only emitted when a full ``duration_minutes`` fits before
    ``end_time``, so the result is empty when the range is shorter than one
    duration. Inputs are assumed to be well formed.
    """
    current = time_to_minutes(start_time)
    end = time_to_minutes(end_time)

    slots: list[str] = []
    while current + duration_minutes <= end:
        slots.append(minutes_to_time(current))
        current += duration_minutes

    return slots
