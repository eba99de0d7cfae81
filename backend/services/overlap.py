from typing import Iterable, NamedTuple


class TimeRange(NamedTuple):
    """Half-open [start, end) range of zero-padded HH:MM times."""

    start: str
    end: str


def ranges_overlap(first: TimeRange, second: TimeRange) -> bool:
    # Fixed-width HH:MM strings compare the same way as the times they encode.
    return first.start < second.end and second.start < first.end


def overlaps(candidate: TimeRange, existing: Iterable[TimeRange]) -> bool:
    return any(ranges_overlap(candidate, other) for other in existing)
